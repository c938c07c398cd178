"""safe-rm - Git-aware deletion gate for AI agents and scripts."""

__version__ = "0.3.0"
