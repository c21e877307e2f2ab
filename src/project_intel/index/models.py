"""Pydantic models for the raw project index document."""

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

# (caller, callee) - plain symbol names, never qualified by file
CallEdge = tuple[str, str]


class SymbolDescriptor(BaseModel):
    """An exported symbol recorded for a file.

    The index encodes each symbol as ``name:line:signature:returnType:callees``
    where only ``name`` is mandatory and callees are comma-separated.
    """

    name: str = Field(..., description="Symbol name")
    line: int | None = Field(default=None, description="Line of the definition (1-indexed)")
    signature: str = Field(default="", description="Parameter signature")
    return_type: str = Field(default="", description="Return type annotation")
    calls: list[str] = Field(
        default_factory=list, description="Symbols called from this symbol"
    )

    @classmethod
    def parse(cls, descriptor: str) -> "SymbolDescriptor":
        """Parse a colon-delimited descriptor string.

        Args:
            descriptor: Raw descriptor, e.g. ``"bar:2:x, y:number:foo,baz"``

        Returns:
            Parsed SymbolDescriptor
        """
        parts = descriptor.split(":")
        line = parts[1].strip() if len(parts) > 1 else ""
        calls = parts[4].split(",") if len(parts) > 4 else []
        return cls(
            name=parts[0],
            line=int(line) if line.isdigit() else None,
            signature=parts[2] if len(parts) > 2 else "",
            return_type=parts[3] if len(parts) > 3 else "",
            calls=[c for c in calls if c],
        )


class FileEntry(BaseModel):
    """Language tag and exported symbols of one indexed file."""

    language: str = Field(default="unknown", description="Language tag")
    symbols: list[SymbolDescriptor] = Field(
        default_factory=list, description="Exported symbols in index order"
    )

    @model_validator(mode="before")
    @classmethod
    def from_pair(cls, data: Any) -> Any:
        """Accept the index's ``[language, [descriptor, ...]]`` pair."""
        if not isinstance(data, (list, tuple)):
            return data

        language = data[0] if data and isinstance(data[0], str) else "unknown"
        raw_symbols = data[1] if len(data) > 1 and isinstance(data[1], list) else []
        return {
            "language": language,
            "symbols": [
                SymbolDescriptor.parse(s) for s in raw_symbols if isinstance(s, str)
            ],
        }

    @property
    def symbol_names(self) -> list[str]:
        """Names of the exported symbols in index order."""
        return [symbol.name for symbol in self.symbols]


class RawIndex(BaseModel):
    """The index document produced by the upstream index generator.

    Only ``f`` is required. Malformed call edges and dependency rows are
    dropped during validation rather than failing the whole document.
    """

    f: dict[str, FileEntry] = Field(..., description="File path -> language and symbols")
    d: dict[str, list[str]] = Field(
        default_factory=dict, description="Doc path -> documentation excerpt lines"
    )
    g: list[CallEdge] = Field(default_factory=list, description="Call edges")
    deps: dict[str, list[str]] = Field(
        default_factory=dict, description="File path -> imported module specifiers"
    )
    stats: Any = Field(default_factory=dict, description="Opaque generator statistics")

    @field_validator("d", mode="before")
    @classmethod
    def drop_invalid_docs(cls, v: Any) -> Any:
        """Skip doc rows whose value is not a list of lines."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        return {
            path: [str(line) for line in lines]
            for path, lines in v.items()
            if isinstance(lines, list)
        }

    @field_validator("g", mode="before")
    @classmethod
    def drop_invalid_edges(cls, v: Any) -> Any:
        """Skip edges that are not at least a (caller, callee) pair of names."""
        if v is None:
            return []
        if not isinstance(v, list):
            return v
        return [
            (edge[0], edge[1])
            for edge in v
            if isinstance(edge, (list, tuple))
            and len(edge) >= 2
            and isinstance(edge[0], str)
            and isinstance(edge[1], str)
        ]

    @field_validator("deps", mode="before")
    @classmethod
    def drop_invalid_deps(cls, v: Any) -> Any:
        """Skip dependency rows whose value is not a list of specifiers."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        return {
            path: [m for m in modules if isinstance(m, str)]
            for path, modules in v.items()
            if isinstance(modules, list)
        }

    def all_paths(self) -> list[str]:
        """All indexed paths: code files first, then documentation files."""
        return list(dict.fromkeys([*self.f, *self.d]))

    def language_of(self, path: str) -> str:
        """Language tag of a file, ``"unknown"`` when not indexed."""
        entry = self.f.get(path)
        return entry.language if entry else "unknown"
