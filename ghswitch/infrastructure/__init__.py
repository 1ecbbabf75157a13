"""Adapters over external processes and HTTP."""
