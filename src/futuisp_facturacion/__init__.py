"""Facturación automática recurrente de FUTUISP."""
