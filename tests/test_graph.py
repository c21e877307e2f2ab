"""Tests for the graph module."""

import pytest

from project_intel.filters import PatternFilter
from project_intel.graph import (
    DerivedGraph,
    EdgeType,
    GraphBuilder,
    derive_graph,
    describe_file,
    describe_symbol,
    find_call_path,
    find_dead_symbols,
    get_callees,
    get_callers,
    get_file_imports,
    get_hotspots,
    get_module_importers,
    get_top_modules,
)
from project_intel.index import RawIndex


@pytest.fixture
def sample_graph(sample_raw):
    """The sample index derived with the default exclusions."""
    return derive_graph(sample_raw, PatternFilter())


class TestDerivedGraph:
    """Tests for DerivedGraph class."""

    def test_add_definition(self):
        """Test recording symbol definitions."""
        graph = DerivedGraph()

        graph.add_definition("a.js", "foo")
        graph.add_definition("b.js", "foo")

        assert graph.symbols() == ["foo"]
        assert graph.defining_files("foo") == ["a.js", "b.js"]
        assert graph.is_defined("foo")
        assert not graph.is_defined("bar")

    def test_add_call(self):
        """Test adding call edges between symbols."""
        graph = DerivedGraph()

        graph.add_call("caller", "callee")

        assert graph.callees("caller") == ["callee"]
        assert graph.callers("callee") == ["caller"]
        assert graph.has_callers("callee")
        assert not graph.has_callers("caller")

        edge = graph.graph.edges["symbol:caller", "symbol:callee"]
        assert edge["type"] == EdgeType.CALLS.value

    def test_call_order_is_first_appearance(self):
        """Test call sources and targets are listed in edge order, not node order."""
        graph = DerivedGraph()
        graph.add_definition("a.js", "late")
        graph.add_definition("a.js", "early")

        graph.add_call("early", "late")
        graph.add_call("late", "early")
        graph.add_call("early", "late")

        assert graph.call_sources() == ["early", "late"]
        assert graph.call_targets() == ["late", "early"]

    def test_call_targets_are_not_definitions(self):
        """Test a symbol seen only in call edges is not a defined symbol."""
        graph = DerivedGraph()

        graph.add_call("a", "b")

        assert graph.symbols() == []
        assert graph.call_sources() == ["a"]
        assert graph.call_targets() == ["b"]

    def test_duplicate_edges_and_self_loops(self):
        """Test repeated edges collapse and self-loops are kept."""
        graph = DerivedGraph()

        graph.add_call("a", "a")
        graph.add_call("a", "b")
        graph.add_call("a", "b")

        assert graph.callees("a") == ["a", "b"]
        assert graph.callers("a") == ["a"]
        assert graph.get_statistics()["calls"] == 2

    def test_set_imports(self):
        """Test import rows are kept verbatim and indexed by module."""
        graph = DerivedGraph()

        graph.set_imports("a.js", ["react", "./util", "react"])
        graph.set_imports("b.js", ["react"])

        assert graph.imports_of("a.js") == ["react", "./util", "react"]
        assert graph.has_imports("a.js")
        assert graph.importers_of("react") == ["a.js", "b.js"]
        assert graph.modules() == ["react", "./util"]

    def test_unknown_lookups_are_empty(self):
        """Test unknown names yield empty results."""
        graph = DerivedGraph()

        assert graph.callers("missing") == []
        assert graph.callees("missing") == []
        assert graph.defining_files("missing") == []
        assert graph.imports_of("missing.js") == []
        assert graph.importers_of("missing") == []
        assert graph.language_of("missing.js") is None
        assert not graph.has_imports("missing.js")


class TestGraphBuilder:
    """Tests for GraphBuilder class."""

    def test_basic_scenario(self):
        """Test callers, callees and dead symbols for a two-file index."""
        raw = RawIndex.model_validate({
            "f": {"a.js": ["js", ["foo:1::"]], "b.js": ["js", ["bar:2::foo"]]},
            "g": [["bar", "foo"]],
        })

        graph = GraphBuilder().build(raw)

        assert get_callers(graph, "foo") == ["bar"]
        assert get_callees(graph, "bar") == ["foo"]
        assert find_dead_symbols(graph) == ["bar"]

    def test_excluded_paths_contribute_nothing(self, sample_graph):
        """Test excluded files add no symbols and no import rows."""
        assert "node_modules/lib/index.js" not in sample_graph.files()
        assert not sample_graph.is_defined("vendored")
        assert not sample_graph.has_imports("node_modules/lib/index.js")
        assert "node_modules/lib/index.js" not in sample_graph.importers_of("react")

    def test_call_edges_are_never_filtered(self, sample_graph):
        """Test call edges survive even when their caller's file is excluded."""
        assert "vendored" in sample_graph.callers("readFile")

    def test_keys_are_non_excluded_paths(self, sample_raw):
        """Test every file in the graph passes the filter."""
        pattern_filter = PatternFilter(["src/*.test.ts", "node_modules/"])
        graph = derive_graph(sample_raw, pattern_filter)

        assert graph.files()
        for file_path in graph.files():
            assert not pattern_filter.exclude(file_path)
        assert not graph.is_defined("testMain")

    def test_languages_recorded(self, sample_graph):
        """Test file nodes carry their language tag."""
        assert sample_graph.language_of("src/app.ts") == "typescript"

    def test_empty_filter_keeps_everything(self, sample_raw):
        """Test the builder defaults to excluding nothing."""
        builder = GraphBuilder()
        graph = builder.build(sample_raw)

        assert len(builder.pattern_filter) == 0
        assert graph.is_defined("vendored")
        assert len(graph.files()) == len(sample_raw.f)


class TestCallPath:
    """Tests for find_call_path."""

    def test_same_start_and_target(self, sample_graph):
        """Test a symbol reaches itself with a single-node path."""
        assert find_call_path(sample_graph, "main", "main") == ["main"]

    def test_path_through_chain(self, sample_graph):
        """Test a multi-hop path."""
        path = find_call_path(sample_graph, "testMain", "readFile")

        assert path == ["testMain", "main", "start", "loadConfig", "readFile"]

    def test_unreachable(self, sample_graph):
        """Test no path returns None rather than raising."""
        assert find_call_path(sample_graph, "readFile", "main") is None
        assert find_call_path(sample_graph, "unknown", "main") is None

    def test_shortest_path_wins(self):
        """Test BFS returns a shortest path in edge count."""
        graph = DerivedGraph()
        for caller, callee in [
            ("a", "b"), ("b", "c"), ("c", "d"), ("d", "target"),
            ("a", "e"), ("e", "target"),
        ]:
            graph.add_call(caller, callee)

        assert find_call_path(graph, "a", "target") == ["a", "e", "target"]

    def test_cycles_terminate(self):
        """Test cyclic call graphs do not loop forever."""
        graph = DerivedGraph()
        graph.add_call("a", "b")
        graph.add_call("b", "a")
        graph.add_call("b", "b")

        assert find_call_path(graph, "a", "c") is None
        assert find_call_path(graph, "b", "a") == ["b", "a"]


class TestQueries:
    """Tests for caller, dead code, hotspot and import queries."""

    def test_callers_and_callees(self, sample_graph):
        """Test adjacency order and limits."""
        assert get_callees(sample_graph, "main") == ["start", "render"]
        assert get_callees(sample_graph, "main", limit=1) == ["start"]
        assert get_callers(sample_graph, "readFile") == ["loadConfig", "vendored"]
        assert get_callers(sample_graph, "nothing") == []

    def test_dead_symbols(self, sample_graph):
        """Test defined symbols without inbound calls."""
        assert find_dead_symbols(sample_graph) == ["unused", "testMain"]
        assert find_dead_symbols(sample_graph, limit=1) == ["unused"]

    def test_dead_symbols_exclude_call_targets(self, sample_graph):
        """Test no reported symbol has a recorded caller."""
        for symbol in find_dead_symbols(sample_graph):
            assert get_callers(sample_graph, symbol) == []

    def test_hotspots(self, sample_graph):
        """Test rankings are descending with stable ties."""
        inbound, outbound = get_hotspots(sample_graph, top=3)

        assert [(h.name, h.count) for h in inbound] == [
            ("readFile", 2),
            ("start", 1),
            ("render", 1),
        ]
        assert [(h.name, h.count) for h in outbound] == [
            ("main", 2),
            ("start", 1),
            ("loadConfig", 1),
        ]

    def test_hotspot_ties_follow_call_edge_order(self):
        """Test equal counts keep the order symbols first appear in call edges."""
        raw = RawIndex.model_validate({
            "f": {"a.js": ["js", ["b:1::", "a:2::", "y:3::", "x:4::"]]},
            "g": [["x", "a"], ["y", "b"]],
        })
        graph = derive_graph(raw)

        inbound, outbound = get_hotspots(graph, top=None)

        assert [h.name for h in inbound] == ["a", "b"]
        assert [h.name for h in outbound] == ["x", "y"]

    def test_zero_limit(self, sample_graph):
        """Test an explicit zero limit returns nothing."""
        assert get_callers(sample_graph, "readFile", limit=0) == []
        assert find_dead_symbols(sample_graph, limit=0) == []
        assert get_hotspots(sample_graph, top=0) == ([], [])

    def test_hotspots_all(self, sample_graph):
        """Test top=None returns every ranked symbol."""
        inbound, outbound = get_hotspots(sample_graph, top=None)

        assert len(inbound) == len(sample_graph.call_targets())
        assert len(outbound) == len(sample_graph.call_sources())

    def test_file_imports(self, sample_graph):
        """Test import rows are returned verbatim."""
        assert get_file_imports(sample_graph, "src/app.ts") == ["./config", "./render", "react"]
        assert get_file_imports(sample_graph, "src/util.ts") == []

    def test_module_importers(self, sample_graph):
        """Test files importing a module."""
        assert get_module_importers(sample_graph, "react") == ["src/app.ts", "src/render.ts"]
        assert get_module_importers(sample_graph, "react", limit=1) == ["src/app.ts"]

    def test_top_modules(self, sample_graph):
        """Test modules ranked by importer count."""
        top = get_top_modules(sample_graph, top=2)

        assert [(h.name, h.count) for h in top] == [("react", 2), ("./config", 1)]

    def test_describe_symbol(self, sample_graph):
        """Test symbol details."""
        details = describe_symbol(sample_graph, "start")

        assert details["files"] == ["src/app.ts"]
        assert details["callers"] == ["main"]
        assert details["callees"] == ["loadConfig"]

    def test_describe_file(self, sample_raw, sample_graph):
        """Test file details with per-symbol adjacency."""
        details = describe_file(sample_raw, sample_graph, "src/app.ts")

        assert details["language"] == "typescript"
        assert details["imports"] == ["./config", "./render", "react"]
        assert details["symbols"][0] == {
            "name": "main",
            "callers": ["testMain"],
            "callees": ["start", "render"],
        }
