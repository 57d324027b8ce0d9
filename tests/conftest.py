"""Shared fixtures for the cypher-view test suite."""

import pytest

from fakes import FakeNode, FakeRelationship

from cypher_view.config import Config


@pytest.fixture
def config():
    """Config built from explicit values only (no .env, no environment)."""
    return Config(
        _env_file=None,
        NEO4J_URI="bolt://db.example:7687",
        NEO4J_USERNAME="neo4j",
        NEO4J_PASSWORD="secret",
    )


@pytest.fixture
def ann():
    return FakeNode("4", ["Person"], {"name": "Ann"})


@pytest.fixture
def knows_chain():
    """Three people linked 1 -KNOWS-> 2 -KNOWS-> 3."""
    n1 = FakeNode("1", ["Person"], {"name": "A"})
    n2 = FakeNode("2", ["Person"], {"name": "B"})
    n3 = FakeNode("3", ["Person"], {"name": "C"})
    r12 = FakeRelationship("9", n1, n2, "KNOWS", {"since": 2020})
    r23 = FakeRelationship("10", n2, n3, "KNOWS")
    return n1, n2, n3, r12, r23
