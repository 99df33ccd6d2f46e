"""Capa de interfaces."""
