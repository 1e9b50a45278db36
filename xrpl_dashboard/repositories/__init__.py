"""Data access: the generic query executor and the order repository."""
