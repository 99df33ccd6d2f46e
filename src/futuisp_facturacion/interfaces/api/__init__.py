"""API HTTP."""
