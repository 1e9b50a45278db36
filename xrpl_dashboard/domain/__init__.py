"""Domain package: collection names and document models."""
