"""Graph package - kinship graph engine and its durable backing."""

from kinship.graph.models import GraphSnapshot, MutationEvent, MutationKind, PersonNode
from kinship.graph.family.graph import FamilyGraph
from kinship.graph.persistence import GraphPersistence

__all__ = [
    "GraphSnapshot",
    "MutationEvent",
    "MutationKind",
    "PersonNode",
    "FamilyGraph",
    "GraphPersistence",
]
