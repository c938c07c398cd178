"""Core configuration, paths and theming for safe-rm."""
