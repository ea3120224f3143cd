"""In-memory directory listing model with cross-source identity and sorting."""

__version__ = "0.1.0"
