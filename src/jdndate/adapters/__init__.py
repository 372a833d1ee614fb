"""Integrations between ``Date`` and external libraries."""
