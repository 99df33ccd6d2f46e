"""Implementaciones de los puertos de persistencia."""
