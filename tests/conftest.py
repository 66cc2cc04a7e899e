"""Pytest fixtures shared by the depgraph test suite."""

import pytest

from depgraph.config.mapping import TypeMapping
from depgraph.graph import InMemoryGraphStore
from depgraph.graph.builder import GraphModelBuilder
from depgraph.graph.parsers.resolution import ResolutionClassifier
from depgraph.graph.parsers.tree import TreeParser
from depgraph.graph.relations import ResolutionKind


@pytest.fixture
def store():
    """Fresh in-memory graph store."""
    return InMemoryGraphStore()


@pytest.fixture
def type_mapping():
    """Small mapping with an INTERNAL group and a vendor group."""
    return TypeMapping.from_pairs([("com.acme", "INTERNAL"), ("org.apache", "APACHE")])


@pytest.fixture
def builder(store, type_mapping):
    """Builder writing into the store fixture."""
    return GraphModelBuilder(store, type_mapping)


@pytest.fixture
def tree_parser(builder):
    """TreeParser with every marked resolution kind disabled."""
    return TreeParser(builder)


@pytest.fixture
def permissive_parser(builder):
    """TreeParser loading every resolution kind."""
    classifier = ResolutionClassifier({kind: True for kind in ResolutionKind.marked()})
    return TreeParser(builder, classifier)
