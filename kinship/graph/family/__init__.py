"""Family graph package."""
from kinship.graph.family.person import PersonOperations
from kinship.graph.family.relationships import RelationshipOperations
from kinship.graph.family.validator import RelationshipValidator
from kinship.graph.family.queries import FamilyQueries
from kinship.graph.family.lineage import LineageAggregator
from kinship.graph.family.graph import FamilyGraph

__all__ = [
    "PersonOperations",
    "RelationshipOperations",
    "RelationshipValidator",
    "FamilyQueries",
    "LineageAggregator",
    "FamilyGraph",
]
