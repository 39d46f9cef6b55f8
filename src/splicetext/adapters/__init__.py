"""Bridges to parser libraries. Each adapter imports its library on use."""

__all__ = ["tree_sitter"]
