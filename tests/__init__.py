"""Tests de futuisp_facturacion."""
