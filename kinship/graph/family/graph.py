"""Main FamilyGraph facade combining all operations."""

from typing import Optional

from kinship.config import SearchSettings, TraversalSettings
from kinship.exceptions import KinshipError
from kinship.graph.events import MutationListener, MutationListeners
from kinship.graph.family.lineage import LineageAggregator
from kinship.graph.family.person import PersonOperations
from kinship.graph.family.queries import FamilyQueries
from kinship.graph.family.relationships import RelationshipOperations
from kinship.graph.family.validator import RelationshipValidator
from kinship.graph.locks import PersonLocks
from kinship.graph.models import GraphSnapshot
from kinship.logging import get_logger
from kinship.models import (
    FamilyTree, LineageReport, Person, PersonAttributes, Relationship, RelationshipStep,
)

logger = get_logger(__name__)


class FamilyGraph:
    """
    Main interface for kinship graph operations.

    Combines person, relationship, query and lineage operations over one
    shared node table.

    Usage:
        graph = FamilyGraph()
        robert = graph.add_person(first_name="Robert", last_name="Johnson", gender="MALE")
        john = graph.add_person(first_name="John", last_name="Johnson", gender="MALE")
        graph.add_parent_child(robert, john)
        report = graph.lineage(john, ancestor_depth=2)
    """

    def __init__(self, search: Optional[SearchSettings] = None,
                 traversal: Optional[TraversalSettings] = None):
        self.locks = PersonLocks()
        self.listeners = MutationListeners()

        # Compose operations
        self.persons = PersonOperations(self.locks, self.listeners, search)
        self.validator = RelationshipValidator(self.persons)
        self.relationships = RelationshipOperations(self.persons, self.validator, self.listeners)
        self.queries = FamilyQueries(self.persons)
        self.lineages = LineageAggregator(self.persons, self.queries, traversal)

    @classmethod
    def from_persistence(cls, persistence, **kwargs) -> "FamilyGraph":
        """Build a graph from durable storage and write every later mutation back to it."""
        graph = cls(**kwargs)
        graph.load(persistence.load())
        graph.subscribe(persistence)
        return graph

    def load(self, snapshot: GraphSnapshot) -> None:
        """Insert stored persons with their ids, then replay edges through the validator."""
        for person in sorted(snapshot.persons, key=lambda p: p.id):
            self.persons.create(person.attributes, person_id=person.id)
        for rel in snapshot.relationships:
            try:
                if rel.relation_type == "parent_of":
                    self.relationships.add_parent_child(rel.from_id, rel.to_id)
                else:
                    self.relationships.add_spouse(rel.from_id, rel.to_id)
            except KinshipError as e:
                logger.warning("stored_relationship_skipped", from_id=rel.from_id, to_id=rel.to_id,
                               relation_type=rel.relation_type, error=str(e))
        logger.info("graph_loaded", persons=len(snapshot.persons), relationships=len(snapshot.relationships))

    def subscribe(self, listener: MutationListener) -> None:
        self.listeners.add(listener)

    def unsubscribe(self, listener: MutationListener) -> None:
        self.listeners.remove(listener)

    # ─────────────────────────────────────────
    # Person operations (delegated)
    # ─────────────────────────────────────────

    def add_person(self, attributes: Optional[PersonAttributes] = None,
                   person_id: Optional[int] = None, **fields) -> int:
        return self.persons.create(attributes, person_id=person_id, **fields)

    def get_person(self, person_id: int) -> Person:
        return self.persons.get(person_id)

    def get_all_persons(self) -> list[Person]:
        return self.persons.list_all()

    def get_public_persons(self) -> list[Person]:
        return self.persons.list_public()

    def search_persons(self, term: str, limit: Optional[int] = None) -> list[Person]:
        return self.persons.search(term, limit=limit)

    def get_family_by_surname(self, last_name: str) -> list[Person]:
        return self.persons.find_by_last_name(last_name)

    def update_person(self, person_id: int, attributes: Optional[PersonAttributes] = None, **changes) -> Person:
        return self.persons.update(person_id, attributes, **changes)

    def delete_person(self, person_id: int) -> None:
        self.persons.delete(person_id)

    # ─────────────────────────────────────────
    # Relationship operations (delegated)
    # ─────────────────────────────────────────

    def add_parent_child(self, parent_id: int, child_id: int) -> bool:
        return self.relationships.add_parent_child(parent_id, child_id)

    def remove_parent_child(self, parent_id: int, child_id: int) -> bool:
        return self.relationships.remove_parent_child(parent_id, child_id)

    def add_spouse(self, person1_id: int, person2_id: int) -> bool:
        return self.relationships.add_spouse(person1_id, person2_id)

    def remove_spouse(self, person1_id: int, person2_id: int) -> bool:
        return self.relationships.remove_spouse(person1_id, person2_id)

    def get_parents(self, person_id: int) -> frozenset[int]:
        return self.relationships.parents_of(person_id)

    def get_children(self, person_id: int) -> frozenset[int]:
        return self.relationships.children_of(person_id)

    def get_spouses(self, person_id: int) -> frozenset[int]:
        return self.relationships.spouses_of(person_id)

    def get_all_relationships(self) -> list[Relationship]:
        return self.relationships.edges()

    # ─────────────────────────────────────────
    # Query operations (delegated)
    # ─────────────────────────────────────────

    def ancestors(self, person_id: int, max_depth: int) -> list[Person]:
        return self.queries.ancestors(person_id, max_depth)

    def descendants(self, person_id: int, max_depth: int) -> list[Person]:
        return self.queries.descendants(person_id, max_depth)

    def siblings(self, person_id: int) -> list[Person]:
        return self.queries.siblings(person_id)

    def relationship_path(self, person1_id: int, person2_id: int) -> list[Person]:
        return self.queries.relationship_path(person1_id, person2_id)

    def relationship_steps(self, person1_id: int, person2_id: int) -> list[RelationshipStep]:
        return self.queries.relationship_steps(person1_id, person2_id)

    def get_family_tree(self, person_id: int) -> FamilyTree:
        return self.queries.immediate_family(person_id)

    def lineage(self, person_id: int, ancestor_depth: Optional[int] = None,
                descendant_depth: Optional[int] = None) -> LineageReport:
        return self.lineages.lineage(person_id, ancestor_depth, descendant_depth)
