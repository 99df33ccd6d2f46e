"""Persistencia en MySQL."""
