"""Domain model exports."""

from .document import DocumentRecord

__all__ = ["DocumentRecord"]
