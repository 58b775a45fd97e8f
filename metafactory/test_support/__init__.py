"""Importable sample types for metafactory tests (looked up by dotted name)."""
