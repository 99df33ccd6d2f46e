"""API versión 1."""
