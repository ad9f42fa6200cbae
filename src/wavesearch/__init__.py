"""Full-text search and index synchronization for collaborative waves."""

__version__ = "0.1.0"
