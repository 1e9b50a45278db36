"""Core API plumbing: dependencies, middleware, responses and exception handlers."""
