"""Tests for file and directory summaries."""

import pytest

from project_intel.filters import PatternFilter
from project_intel.graph import (
    DirectorySummary,
    FileSummary,
    classify_file,
    derive_graph,
    summarize_path,
)


@pytest.fixture
def sample_graph(sample_raw):
    return derive_graph(sample_raw, PatternFilter())


class TestClassifyFile:
    """Tests for directory category classification."""

    @pytest.mark.parametrize(
        ("file_path", "target", "expected"),
        [
            ("app/page.tsx", "app", "pages"),
            ("app/layout.tsx", "app", "layouts"),
            ("app/api/users/route.ts", "app/api/users", "routes"),
            ("src/app.test.ts", "src", "tests"),
            ("src/__tests__/util.ts", "src/__tests__", "tests"),
            ("docs/guide.md", "docs", "docs"),
            ("src/components/Button.tsx", "src/components", "components"),
            ("src/components.ts", "src", "components"),
            ("src/util.ts", "src", "others"),
        ],
    )
    def test_categories(self, file_path, target, expected):
        """Test each rule assigns its category."""
        assert classify_file(file_path, target) == expected

    def test_first_rule_wins(self):
        """Test tests take precedence over the component heuristic."""
        assert classify_file("src/components/Button.test.tsx", "src/components") == "tests"
        assert classify_file("docs/page.tsx", "docs") == "pages"


class TestSummarizeFile:
    """Tests for exact file summaries."""

    def test_code_file(self, sample_raw, sample_graph):
        """Test a code file summary carries language, imports and symbols."""
        summary = summarize_path(sample_raw, sample_graph, "src/app.ts")

        assert isinstance(summary, FileSummary)
        assert summary.language == "typescript"
        assert summary.imports == ["./config", "./render", "react"]
        assert [s.name for s in summary.symbols] == ["main", "start"]
        assert summary.symbols[1].line == 10
        assert summary.symbols[1].calls == ["loadConfig"]
        assert summary.documentation is None

    def test_documentation_file(self, sample_raw, sample_graph):
        """Test a documentation-only path includes its excerpt."""
        summary = summarize_path(sample_raw, sample_graph, "README.md")

        assert isinstance(summary, FileSummary)
        assert summary.language == "unknown"
        assert summary.symbols == []
        assert summary.documentation == ["# Demo", "Start with loadConfig."]


class TestSummarizeDirectory:
    """Tests for directory prefix summaries."""

    def test_directory(self, sample_raw, sample_graph):
        """Test files one level below the prefix are grouped by category."""
        summary = summarize_path(sample_raw, sample_graph, "src")

        assert isinstance(summary, DirectorySummary)
        assert [c.name for c in summary.categories] == ["tests", "others"]
        assert summary.categories[0].examples == ["app.test.ts"]
        others = summary.categories[1]
        assert others.label == "other files"
        assert others.count == 4
        assert others.examples == ["app.ts", "config.ts", "render.ts"]
        assert summary.total_files == 5

    def test_trailing_slash(self, sample_raw, sample_graph):
        """Test a trailing slash does not change the result."""
        with_slash = summarize_path(sample_raw, sample_graph, "src/")
        without = summarize_path(sample_raw, sample_graph, "src")

        assert with_slash.categories == without.categories

    def test_project_root(self, sample_raw, sample_graph):
        """Test the root lists only top-level files."""
        summary = summarize_path(sample_raw, sample_graph, ".")

        assert [c.name for c in summary.categories] == ["docs"]
        assert summary.categories[0].examples == ["README.md"]

    def test_unknown_prefix(self, sample_raw, sample_graph):
        """Test an unknown prefix yields an empty summary."""
        summary = summarize_path(sample_raw, sample_graph, "nothing/here")

        assert summary.categories == []
        assert summary.total_files == 0
