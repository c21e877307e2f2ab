"""Documentation reference mapping: ``@path`` import trees with cycle detection."""

from .mapper import (
    COMPONENT_KINDS,
    ImportTreeMapper,
    compute_import_stats,
    map_component_imports,
    map_imports,
)
from .models import (
    ComponentImportMap,
    ComponentTree,
    ImportMap,
    ImportTreeNode,
    ImportTreeStats,
    ReferenceKind,
)
from .resolver import ReferenceResolver, ResolvedReference, extract_references

__all__ = [
    # Models
    "ComponentImportMap",
    "ComponentTree",
    "ImportMap",
    "ImportTreeNode",
    "ImportTreeStats",
    "ReferenceKind",
    # Resolution
    "ReferenceResolver",
    "ResolvedReference",
    "extract_references",
    # Mapping
    "COMPONENT_KINDS",
    "ImportTreeMapper",
    "compute_import_stats",
    "map_component_imports",
    "map_imports",
]
