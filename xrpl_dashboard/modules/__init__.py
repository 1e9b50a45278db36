"""API modules, one package per route group."""
