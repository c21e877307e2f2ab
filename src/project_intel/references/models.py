"""Pydantic models for documentation import trees."""

from enum import Enum

from pydantic import BaseModel, Field


class ReferenceKind(str, Enum):
    """Kinds of nodes in an import tree."""

    DOCUMENT = "document"  # Resolved and traversed
    EXTERNAL = "external"  # Home-directory document, never traversed
    MISSING = "missing"  # Resolved path does not exist
    CIRCULAR = "circular"  # Already an ancestor on this branch


class ImportTreeNode(BaseModel):
    """A document, or a terminal marker, in an import tree."""

    file: str = Field(..., description="Display path (project-relative, or the reference as written)")
    path: str | None = Field(default=None, description="Resolved absolute path")
    kind: ReferenceKind = Field(default=ReferenceKind.DOCUMENT, description="Node kind")
    size: int = Field(default=0, description="Size of the document in bytes")
    depth: int = Field(..., description="Edges from the root document")
    exists: bool | None = Field(
        default=None, description="Whether an external document exists"
    )
    imports: list["ImportTreeNode"] = Field(
        default_factory=list, description="Referenced documents in reference order"
    )

    @property
    def is_terminal(self) -> bool:
        """Terminal nodes are never traversed."""
        return self.kind != ReferenceKind.DOCUMENT


class ImportTreeStats(BaseModel):
    """Aggregate statistics over one or more import trees."""

    total_files: int = 0
    internal_files: int = 0
    external_files: int = 0
    max_depth: int = 0
    circular_references: int = 0
    missing_files: int = 0
    total_size: int = 0


class ImportMap(BaseModel):
    """Import tree of a single root document."""

    root: str
    tree: ImportTreeNode
    summary: ImportTreeStats


class ComponentTree(BaseModel):
    """Import tree of one named component (skill, command or agent)."""

    name: str
    tree: ImportTreeNode


class ComponentImportMap(BaseModel):
    """Import trees for every document of a component kind."""

    kind: str
    components: list[ComponentTree] = Field(default_factory=list)
    summary: ImportTreeStats = Field(default_factory=ImportTreeStats)
    error: str | None = None

    @property
    def count(self) -> int:
        return len(self.components)
