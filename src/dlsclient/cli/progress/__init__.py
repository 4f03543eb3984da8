"""Terminal progress displays."""

from .rich import RichEditorUI

__all__ = ["RichEditorUI"]
