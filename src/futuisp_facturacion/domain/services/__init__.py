"""Servicios de dominio."""
