"""Pytest fixtures for graph tests."""

import pytest
from kinship.graph.family.graph import FamilyGraph
from kinship.models import PersonAttributes


@pytest.fixture
def graph():
    """Empty FamilyGraph instance."""
    return FamilyGraph()


@pytest.fixture
def add(graph):
    """Create a person from a first name (and optional fields), returning the id."""
    def _add(first_name: str, **fields) -> int:
        return graph.add_person(PersonAttributes(first_name=first_name, **fields))
    return _add


@pytest.fixture
def chain(graph, add):
    """Three generations G1 -> G2 -> G3."""
    g1, g2, g3 = add("G1"), add("G2"), add("G3")
    graph.add_parent_child(g1, g2)
    graph.add_parent_child(g2, g3)
    return g1, g2, g3


@pytest.fixture
def johnsons(graph, add):
    """Robert+Mary -> John; John+Sarah -> Emily, Michael."""
    ids = {
        "Robert": add("Robert", last_name="Johnson", gender="MALE"),
        "Mary": add("Mary", last_name="Johnson", gender="FEMALE"),
        "John": add("John", last_name="Johnson", gender="MALE"),
        "Sarah": add("Sarah", last_name="Johnson", gender="FEMALE"),
        "Emily": add("Emily", last_name="Johnson", gender="FEMALE"),
        "Michael": add("Michael", last_name="Johnson", gender="MALE"),
    }
    graph.add_spouse(ids["Robert"], ids["Mary"])
    graph.add_parent_child(ids["Robert"], ids["John"])
    graph.add_parent_child(ids["Mary"], ids["John"])
    graph.add_spouse(ids["John"], ids["Sarah"])
    for parent in ("John", "Sarah"):
        for child in ("Emily", "Michael"):
            graph.add_parent_child(ids[parent], ids[child])
    return ids


@pytest.fixture
def events(graph):
    """Record every mutation event the graph emits."""
    received = []
    graph.subscribe(received.append)
    return received
