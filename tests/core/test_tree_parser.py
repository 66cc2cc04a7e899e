"""Tests for TreeParser - loading whole reports into the graph."""

import pytest

from depgraph.errors import GrammarError, MalformedIndentation
from depgraph.graph import INTERNAL, PROJECT, InMemoryGraphStore
from depgraph.graph.builder import GraphModelBuilder
from depgraph.graph.parsers import ParseMode
from depgraph.graph.parsers.tree import LineOutcome, TreeParser
from depgraph.graph.relations import ConfigurationKind, ResolutionKind
from tests.report_helpers import SAMPLE_REPORT, report


def node_by_name(store, artifact_id):
    (node,) = store.find_nodes(artifact_id=artifact_id)
    return node


def edges_from(store, dependant, dependee):
    return store.find_edges(
        node_by_name(store, dependant).id, node_by_name(store, dependee).id
    )


def snapshot(store):
    nodes = sorted((n.group_id or "", n.artifact_id, tuple(sorted(n.labels))) for n in store.iter_nodes())
    edges = sorted(
        (
            e.dependant_id,
            e.dependee_id,
            e.name,
            tuple(sorted(c.value for c in e.configurations)),
            tuple(sorted(r.value for r in e.resolution_kinds)),
            tuple(sorted(e.sources)),
        )
        for e in store.iter_edges()
    )
    return nodes, edges


class TestEndToEnd:
    def test_minimal_report(self, tree_parser, store):
        result = tree_parser.parse(report("+--- com.foo:bar:1.0", "\\--- com.foo:baz -> 2.0"))

        assert result.loaded
        assert result.project_name == "app"
        assert {n.artifact_id for n in store.iter_nodes()} == {"app", "bar", "baz"}
        assert node_by_name(store, "app").artifact_type == PROJECT

        (bar_edge,) = edges_from(store, "app", "bar")
        (baz_edge,) = edges_from(store, "app", "baz")
        assert bar_edge.specified_version == "1.0"
        assert baz_edge.specified_version == "2.0"
        assert baz_edge.resolved_version is None
        for edge in (bar_edge, baz_edge):
            assert edge.configurations == {ConfigurationKind.COMPILE}
            assert edge.sources == {"app"}

    def test_sample_report(self, tree_parser, store):
        result = tree_parser.parse(SAMPLE_REPORT.splitlines(), source="app.txt")

        assert result.loaded, result.error
        assert result.applied == 8
        assert result.skipped == 2
        assert store.node_count() == 7
        assert store.edge_count() == 6

        (guava,) = edges_from(store, "lib-a", "guava")
        assert guava.name == "31.0-jre -> 32.1.2-jre"
        (failure,) = edges_from(store, "guava", "failureaccess")
        assert failure.specified_version == "1.0.1"
        (lang,) = edges_from(store, "lib-a", "commons-lang3")
        assert lang.configurations == {ConfigurationKind.COMPILE, ConfigurationKind.RUNTIME}
        assert node_by_name(store, "commons-lang3").artifact_type == "APACHE"
        assert node_by_name(store, "lib-b").artifact_type == INTERNAL

    def test_sample_report_with_marked_lines(self, permissive_parser, store):
        result = permissive_parser.parse(SAMPLE_REPORT.splitlines())

        assert result.applied == 10
        assert store.node_count() == 8
        (omitted,) = edges_from(store, "lib-b", "guava")
        assert omitted.resolution_kinds == {ResolutionKind.OMITTED}
        (constraint,) = edges_from(store, "app", "slf4j-api")
        assert constraint.resolution_kinds == {ResolutionKind.CONSTRAINED}
        assert constraint.resolved_version == "2.0.9"


class TestLevels:
    def test_dependants_follow_indentation(self, tree_parser, store):
        tree_parser.parse(
            report(
                "+--- g:a:1",
                "|    +--- g:b:1",
                "|    |    \\--- g:c:1",
                "|    \\--- g:d:1",
                "\\--- g:e:1",
            )
        )

        assert edges_from(store, "app", "a")
        assert edges_from(store, "a", "b")
        assert edges_from(store, "b", "c")
        assert edges_from(store, "a", "d")
        assert edges_from(store, "app", "e")
        assert store.edge_count() == 5

    def test_stack_depth_after_each_line(self, tree_parser):
        tree_parser.begin("depths")
        for line in report():
            tree_parser.process_line(line)

        for line, depth in [
            ("+--- g:a:1", 1),
            ("|    +--- g:b:1", 2),
            ("|    |    \\--- g:c:1", 3),
            ("|    \\--- g:d:1", 2),
            ("\\--- g:e:1", 1),
        ]:
            assert tree_parser.process_line(line) is LineOutcome.APPLIED
            assert tree_parser.stack.depth == depth


class TestIdempotence:
    def test_same_report_twice(self, tree_parser, store):
        tree_parser.parse(SAMPLE_REPORT.splitlines())
        first = snapshot(store)

        tree_parser.parse(SAMPLE_REPORT.splitlines())

        assert snapshot(store) == first

    def test_accumulates_across_sources(self, tree_parser, store):
        tree_parser.parse(report("+--- com.foo:bar:1.0"))
        tree_parser.parse(
            [
                "Root project 'web'",
                "runtimeClasspath - Runtime classpath of source set 'main'.",
                "+--- com.acme:app:1.0",
                "|    \\--- com.foo:bar:1.0",
            ]
        )

        (edge,) = edges_from(store, "app", "bar")
        assert edge.configurations == {ConfigurationKind.COMPILE, ConfigurationKind.RUNTIME}
        assert edge.sources == {"app", "web"}


class TestProjects:
    def test_reference_before_declaration_is_promoted(self, tree_parser, store):
        tree_parser.parse(
            [
                "Root project 'web'",
                "compileClasspath - Compile classpath for source set 'main'.",
                "\\--- com.acme:core:1.0",
            ]
        )
        core_before = node_by_name(store, "core")
        assert core_before.labels == {INTERNAL}

        tree_parser.parse(
            [
                "Root project 'core'",
                "compileClasspath - Compile classpath for source set 'main'.",
                "\\--- com.foo:bar:1.0",
            ]
        )

        core = node_by_name(store, "core")
        assert core.id == core_before.id
        assert core.labels == {PROJECT}
        assert edges_from(store, "core", "bar")

    def test_declaration_before_reference_backfills_group(self, tree_parser, store):
        tree_parser.parse(report("\\--- com.foo:bar:1.0"))
        tree_parser.parse(
            [
                "Root project 'web'",
                "compileClasspath - Compile classpath for source set 'main'.",
                "\\--- com.acme:app:1.0",
            ]
        )

        app = node_by_name(store, "app")
        assert app.group_id == "com.acme"
        assert app.artifact_type == PROJECT

    def test_second_root_resets_context(self, tree_parser, store):
        tree_parser.begin("two-roots")
        for line in report("+--- g:a:1"):
            tree_parser.process_line(line)

        tree_parser.process_line("Root project 'other'")

        assert tree_parser.context.project_name == "other"
        assert tree_parser.context.mode is ParseMode.AWAITING_CONFIGURATION
        assert tree_parser.process_line("+--- g:b:1") is LineOutcome.IGNORED
        assert [n.artifact_id for n in tree_parser.stack] == ["other"]


class TestSkipping:
    def test_disabled_marker_makes_no_mutation(self, tree_parser, store):
        tree_parser.parse(report("+--- g:a:1", "+--- g:b:1 (*)", "\\--- g:c:1"))

        assert {n.artifact_id for n in store.iter_nodes()} == {"app", "a", "c"}
        assert edges_from(store, "app", "c")

    def test_skipped_line_keeps_stack(self, tree_parser):
        tree_parser.begin("skip")
        for line in report("+--- g:a:1"):
            tree_parser.process_line(line)

        assert tree_parser.process_line("|    \\--- g:b:1 (c)") is LineOutcome.SKIPPED
        assert tree_parser.stack.depth == 1

    def test_unknown_configuration_is_ignored(self, tree_parser, store):
        result = tree_parser.parse(
            [
                "Root project 'app'",
                "annotationProcessorClasspath - Annotation processors.",
                "+--- g:ignored:1",
                "compileClasspath - Compile classpath for source set 'main'.",
                "+--- g:kept:1",
            ]
        )

        assert result.applied == 1
        assert {n.artifact_id for n in store.iter_nodes()} == {"app", "kept"}


class TestFatalErrors:
    def test_grammar_error_rolls_back_file(self, tree_parser, store):
        tree_parser.parse(report("+--- com.foo:bar:1.0"))
        before = snapshot(store)

        result = tree_parser.parse(
            [
                "Root project 'web'",
                "compileClasspath - Compile classpath for source set 'main'.",
                "+--- com.foo:bar:1.0",
                "+--- com.foo:new:1.0",
                "\\--- project :broken",
            ],
            source="web.txt",
        )

        assert result.failed
        assert isinstance(result.error, GrammarError)
        assert result.error.line_number == 5
        assert "line 5" in str(result)
        assert snapshot(store) == before
        assert not store.in_transaction

    def test_malformed_indentation(self, tree_parser, store):
        result = tree_parser.parse(report("+--- g:a:1", "|    |    \\--- g:b:1"))

        assert isinstance(result.error, MalformedIndentation)
        assert store.node_count() == 0

    @pytest.mark.parametrize("line", ["|    |    ", "     ?--- g:a:1"])
    def test_indentation_without_marker(self, tree_parser, line):
        result = tree_parser.parse(report(line))

        assert isinstance(result.error, MalformedIndentation)

    def test_next_file_still_loads(self, tree_parser, store):
        tree_parser.parse(report("+--- g:a:1:2:3"))
        result = tree_parser.parse(report("+--- g:a:1"))

        assert result.loaded
        assert store.edge_count() == 1


class FlakyStore(InMemoryGraphStore):
    """Store whose edge updates fail with a non-depgraph exception."""

    def update_edge(self, edge):
        raise ConnectionError("store went away")


class TestUnexpectedStoreErrors:
    def test_rolls_back_and_propagates(self):
        store = FlakyStore()
        parser = TreeParser(GraphModelBuilder(store))

        with pytest.raises(ConnectionError):
            parser.parse(report("+--- g:a:1"))

        assert not store.in_transaction
        assert store.node_count() == 0
        assert store.edge_count() == 0

    def test_next_report_can_begin(self):
        store = FlakyStore()
        parser = TreeParser(GraphModelBuilder(store))
        with pytest.raises(ConnectionError):
            parser.parse(report("+--- g:a:1"))

        result = parser.parse(report())

        assert result.loaded
        assert store.node_count() == 1
