"""Person operations for FamilyGraph."""

import threading
from dataclasses import replace
from typing import Callable, Optional

from kinship.config import SearchSettings, settings
from kinship.exceptions import AlreadyExists, PersonNotFound
from kinship.graph.events import MutationListeners
from kinship.graph.locks import PersonLocks
from kinship.graph.models import MutationEvent, MutationKind, PersonNode
from kinship.logging import get_logger
from kinship.models import Person, PersonAttributes

logger = get_logger(__name__)

Adjacency = tuple[frozenset[int], frozenset[int], frozenset[int]]


def _attribute_record(base: Optional[PersonAttributes], changes: dict) -> PersonAttributes:
    """Fresh attribute record from ``base`` plus ``changes``.

    A Person snapshot passed as ``base`` contributes only its descriptive
    fields, never its identity or adjacency.
    """
    values = base.model_dump(include=set(PersonAttributes.model_fields)) if base is not None else {}
    return PersonAttributes(**{**values, **changes})


class PersonOperations:
    """CRUD operations for Person nodes.

    Owns the node table shared with the relationship index and the
    traversal engine. Nodes are only read or written under their lock.
    """

    def __init__(self, locks: PersonLocks, listeners: MutationListeners,
                 search: Optional[SearchSettings] = None):
        self.locks = locks
        self.listeners = listeners
        self.search_settings = search or settings.search
        self._nodes: dict[int, PersonNode] = {}
        self._table_lock = threading.Lock()
        self._next_id = 1
        self._index = None

    def attach_index(self, index) -> None:
        """Register the relationship index that cleans edges on delete."""
        self._index = index

    # ─────────────────────────────────────────
    # Node access (callers hold the node lock)
    # ─────────────────────────────────────────

    def node(self, person_id: int) -> PersonNode:
        node = self._nodes.get(person_id)
        if node is None:
            raise PersonNotFound(person_id)
        return node

    def neighbors_of(self, person_id: int) -> set[int]:
        return self.node(person_id).neighbors()

    def exists(self, person_id: int) -> bool:
        return person_id in self._nodes

    def ids(self) -> list[int]:
        with self._table_lock:
            return sorted(self._nodes)

    def adjacency(self, person_id: int) -> Optional[Adjacency]:
        """Copy (parents, children, spouses) under the node lock, None if gone."""
        try:
            with self.locks.hold(person_id):
                node = self._nodes.get(person_id)
                if node is None:
                    return None
                return frozenset(node.parents), frozenset(node.children), frozenset(node.spouses)
        except PersonNotFound:
            return None

    def peek(self, person_id: int) -> Optional[Person]:
        """Snapshot a person, None if it does not exist (anymore)."""
        try:
            return self.get(person_id)
        except PersonNotFound:
            return None

    # ─────────────────────────────────────────
    # CRUD
    # ─────────────────────────────────────────

    def create(self, attributes: Optional[PersonAttributes] = None,
               person_id: Optional[int] = None, **fields) -> int:
        """Add a person and return their id. A taken ``person_id`` raises AlreadyExists.

        ``fields`` are merged over ``attributes``.
        """
        record = _attribute_record(attributes, fields)
        with self._table_lock:
            if person_id is None:
                person_id = self._next_id
            elif person_id in self._nodes:
                raise AlreadyExists(person_id)
            node = PersonNode(id=person_id, attributes=record)
            person = node.snapshot()
            self._next_id = max(self._next_id, person_id + 1)
            # New lock, uncontended: held before the node becomes visible
            lock = self.locks.register(person_id)
            lock.acquire()
            self._nodes[person_id] = node

        try:
            logger.debug("person_created", person_id=person_id)
            self.listeners.emit(MutationEvent(MutationKind.PERSON_CREATED, person_id=person_id, person=person))
        finally:
            lock.release()
        return person_id

    def get(self, person_id: int) -> Person:
        with self.locks.hold(person_id):
            return self.node(person_id).snapshot()

    def update(self, person_id: int, attributes: Optional[PersonAttributes] = None, **changes) -> Person:
        """Replace the attribute record, or merge ``changes`` into the current one."""
        with self.locks.hold(person_id):
            node = self.node(person_id)
            record = _attribute_record(node.attributes if attributes is None else attributes, changes)
            person = replace(node, attributes=record).snapshot()
            node.attributes = record
            logger.debug("person_updated", person_id=person_id)
            self.listeners.emit(MutationEvent(MutationKind.PERSON_UPDATED, person_id=person_id, person=person))
            return person

    def delete(self, person_id: int) -> None:
        """Delete a person after removing them from every neighbor's adjacency."""
        with self.locks.hold_neighborhood(person_id, self.neighbors_of):
            if self._index is not None:
                self._index.remove_all_edges_of(person_id)
            with self._table_lock:
                del self._nodes[person_id]
                self.locks.discard(person_id)
            logger.debug("person_deleted", person_id=person_id)
            self.listeners.emit(MutationEvent(MutationKind.PERSON_DELETED, person_id=person_id))

    # ─────────────────────────────────────────
    # Listing and search
    # ─────────────────────────────────────────

    def _scan(self, predicate: Callable[[Person], bool], limit: Optional[int] = None) -> list[Person]:
        results = []
        for person_id in self.ids():
            if limit is not None and len(results) >= limit:
                break
            person = self.peek(person_id)
            if person is not None and predicate(person):
                results.append(person)
        return results

    def list_all(self) -> list[Person]:
        return self._scan(lambda p: True)

    def list_public(self) -> list[Person]:
        return self._scan(lambda p: p.is_public)

    def find_by_last_name(self, last_name: str) -> list[Person]:
        return self._scan(lambda p: p.last_name == last_name)

    def search(self, term: str, limit: Optional[int] = None) -> list[Person]:
        """Search persons by partial first or last name."""
        if not term:
            return []
        if limit is None:
            limit = self.search_settings.max_results
        case_sensitive = self.search_settings.case_sensitive
        needle = term if case_sensitive else term.casefold()

        def matches(person: Person) -> bool:
            for name in (person.first_name, person.last_name):
                if not name:
                    continue
                haystack = name if case_sensitive else name.casefold()
                if needle in haystack:
                    return True
            return False

        return self._scan(matches, limit=limit)
