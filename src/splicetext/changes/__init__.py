"""Change messages, LSP intake, and batch application."""

from .actions import DeletePreviousChar
from .lsp import change_from_lsp, changes_from_lsp, position_from_lsp
from .models import Change, DeleteChange, FullChange, InsertChange, RangeChange
from .normalizer import apply_changes

__all__ = [
    "Change",
    "DeleteChange",
    "DeletePreviousChar",
    "FullChange",
    "InsertChange",
    "RangeChange",
    "apply_changes",
    "change_from_lsp",
    "changes_from_lsp",
    "position_from_lsp",
]
