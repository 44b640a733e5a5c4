"""Durable backing for a FamilyGraph: bulk load plus write-through of mutations."""

import sqlite3
import threading
from typing import Optional

from kinship.exceptions import PersistenceError
from kinship.graph.models import GraphSnapshot, MutationEvent, MutationKind
from kinship.graph.person_store import PersonStore
from kinship.graph.relationship_store import RelationshipStore
from kinship.logging import get_logger

logger = get_logger(__name__)


class GraphPersistence:
    """Load a graph snapshot and replicate committed mutations to disk.

    Person attributes live in SQLite and edges in GraphLite. An instance is
    a mutation listener: subscribe it to a FamilyGraph (or use
    ``FamilyGraph.from_persistence``) to keep storage in step.
    """

    def __init__(self, person_store: Optional[PersonStore] = None,
                 relationship_store: Optional[RelationshipStore] = None):
        self.person_store = person_store or PersonStore()
        self.relationship_store = relationship_store or RelationshipStore()
        self._lock = threading.Lock()

    def load(self) -> GraphSnapshot:
        with self._lock:
            try:
                persons = self.person_store.get_all()
                relationships = self.relationship_store.get_relationships(p.id for p in persons)
            except sqlite3.Error as e:
                raise PersistenceError(f"Failed to load graph: {e}") from e
        return GraphSnapshot(persons=persons, relationships=relationships)

    def __call__(self, event: MutationEvent) -> None:
        with self._lock:
            try:
                self._apply(event)
            except sqlite3.Error as e:
                raise PersistenceError(f"Failed to persist {event.kind.value}: {e}") from e
        logger.debug("mutation_persisted", kind=event.kind.value, person_id=event.person_id,
                     first_id=event.first_id, second_id=event.second_id)

    def _apply(self, event: MutationEvent) -> None:
        kind = event.kind
        if kind in (MutationKind.PERSON_CREATED, MutationKind.PERSON_UPDATED):
            self.person_store.upsert_person(event.person)
        elif kind == MutationKind.PERSON_DELETED:
            self.relationship_store.delete_person_relationships(event.person_id)
            self.person_store.delete_person(event.person_id)
        elif kind == MutationKind.PARENT_CHILD_ADDED:
            self.relationship_store.add_parent_child(event.first_id, event.second_id)
        elif kind == MutationKind.PARENT_CHILD_REMOVED:
            self.relationship_store.remove_parent_child(event.first_id, event.second_id)
        elif kind == MutationKind.SPOUSE_ADDED:
            self.relationship_store.add_spouse(event.first_id, event.second_id)
        elif kind == MutationKind.SPOUSE_REMOVED:
            self.relationship_store.remove_spouse(event.first_id, event.second_id)
