"""Incremental UTF-8 text buffer for editors and language servers."""

__all__ = [
    "adapters",
    "buffer",
    "changes",
    "edits",
    "encodings",
    "errors",
    "runtime",
    "updateables",
]

__version__ = "0.1.0"
