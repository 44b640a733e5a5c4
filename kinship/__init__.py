"""Kinship graph: genealogical relationships and structural queries over them."""

from kinship.exceptions import (
    AlreadyExists, InvalidRelationship, KinshipError, PersistenceError, PersonNotFound,
    RelationshipError,
)
from kinship.models import (
    FamilyTree, Gender, LineageReport, Person, PersonAttributes, Relationship,
    RelationshipStep, RelationType, Visibility,
)
from kinship.graph import FamilyGraph, GraphPersistence

__all__ = [
    "AlreadyExists",
    "InvalidRelationship",
    "KinshipError",
    "PersistenceError",
    "PersonNotFound",
    "RelationshipError",
    "FamilyTree",
    "Gender",
    "LineageReport",
    "Person",
    "PersonAttributes",
    "Relationship",
    "RelationshipStep",
    "RelationType",
    "Visibility",
    "FamilyGraph",
    "GraphPersistence",
]
