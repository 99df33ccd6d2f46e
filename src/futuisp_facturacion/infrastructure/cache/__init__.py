"""Caché Redis."""
