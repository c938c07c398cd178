"""Bundled data files for safe-rm."""
