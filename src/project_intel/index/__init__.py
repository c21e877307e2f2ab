"""Models for the raw project index document."""

from .models import CallEdge, FileEntry, RawIndex, SymbolDescriptor

__all__ = [
    "CallEdge",
    "FileEntry",
    "RawIndex",
    "SymbolDescriptor",
]
