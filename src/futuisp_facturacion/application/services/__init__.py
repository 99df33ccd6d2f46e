"""Servicios de aplicación."""
