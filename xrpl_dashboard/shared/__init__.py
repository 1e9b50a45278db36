"""Shared exceptions and base models."""
