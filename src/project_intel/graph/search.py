"""Search over indexed paths, symbols and documentation excerpts."""

import logging
import re
from typing import Any

from ..filters import PatternFilter
from ..index import RawIndex
from .storage import DerivedGraph
from .summary import summarize_path

logger = logging.getLogger(__name__)


def compile_term(term: str, regex: bool = False) -> re.Pattern[str]:
    """Compile a search term.

    Literal terms match case-insensitively; with ``regex`` the term is used
    as-is.

    Raises:
        re.error: If ``regex`` is set and the term is not a valid pattern
    """
    if regex:
        return re.compile(term)
    return re.compile(re.escape(term), re.IGNORECASE)


def search_index(
    raw: RawIndex,
    graph: DerivedGraph,
    pattern_filter: PatternFilter,
    term: str,
    limit: int = 20,
    regex: bool = False,
) -> list[dict[str, Any]]:
    """Search file paths, then symbol names.

    Args:
        raw: Loaded index document
        graph: Derived graph
        pattern_filter: Excluded file paths are not searched
        term: Search term
        limit: Maximum number of results
        regex: Treat the term as a regular expression

    Returns:
        File matches followed by symbol matches
    """
    pattern = compile_term(term, regex)
    results: list[dict[str, Any]] = []

    for file_path in pattern_filter.filter_paths(raw.f):
        if len(results) >= limit:
            return results
        if pattern.search(file_path):
            results.append({"type": "file", "file": file_path})

    for symbol in graph.symbols():
        if len(results) >= limit:
            break
        if pattern.search(symbol):
            results.append({
                "type": "symbol",
                "name": symbol,
                "files": graph.defining_files(symbol),
            })

    return results


def search_docs(raw: RawIndex, term: str, limit: int = 10) -> dict[str, Any]:
    """Preview a documentation file or search documentation by term.

    Args:
        raw: Loaded index document
        term: Exact doc path, or a literal term matched against doc paths
              and excerpt text
        limit: Maximum number of matches

    Returns:
        ``{"file", "preview"}`` for an exact path, else ``{"term", "matches"}``
    """
    if term in raw.d:
        return {"file": term, "preview": "\n".join(raw.d[term])}

    pattern = compile_term(term)
    matches = []
    for doc_path, lines in raw.d.items():
        if len(matches) >= limit:
            break
        content = "\n".join(lines)
        if pattern.search(doc_path) or pattern.search(content):
            matches.append({"file": doc_path, "preview": content})
    return {"term": term, "matches": matches}


def investigate(
    raw: RawIndex,
    graph: DerivedGraph,
    pattern_filter: PatternFilter,
    terms: list[str],
    limit: int = 5,
) -> list[dict[str, Any]]:
    """Gather starting context for one or more terms.

    For each term, collects matching files (with their summaries), symbols
    (with caller and callee counts) and documentation excerpts.

    Args:
        raw: Loaded index document
        graph: Derived graph
        pattern_filter: Excluded file paths are not searched
        terms: Literal search terms
        limit: Maximum matches per category per term

    Returns:
        One result per term
    """
    results = []
    for term in terms:
        pattern = compile_term(term)
        files: list[dict[str, Any]] = []
        symbols: list[dict[str, Any]] = []
        docs: list[dict[str, Any]] = []

        for file_path in pattern_filter.filter_paths(raw.f):
            if len(files) >= limit:
                break
            if pattern.search(file_path):
                summary = summarize_path(raw, graph, file_path)
                files.append({"file": file_path, "summary": summary.model_dump()})

        for symbol in graph.symbols():
            if len(symbols) >= limit:
                break
            if pattern.search(symbol):
                symbols.append({
                    "name": symbol,
                    "files": graph.defining_files(symbol),
                    "callers": len(graph.callers(symbol)),
                    "callees": len(graph.callees(symbol)),
                })

        for doc_path, lines in raw.d.items():
            if len(docs) >= limit:
                break
            content = "\n".join(lines)
            if pattern.search(doc_path) or pattern.search(content):
                docs.append({"file": doc_path, "preview": content})

        logger.debug(
            f"Investigated {term!r}: {len(files)} files, {len(symbols)} symbols, "
            f"{len(docs)} docs"
        )
        results.append({"term": term, "files": files, "symbols": symbols, "docs": docs})

    return results
