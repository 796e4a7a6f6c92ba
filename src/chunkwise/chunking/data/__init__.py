"""Bundled chunking profiles."""
