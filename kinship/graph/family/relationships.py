"""Relationship operations between persons."""

from kinship.graph.events import MutationListeners
from kinship.graph.family.person import PersonOperations
from kinship.graph.family.validator import RelationshipValidator
from kinship.graph.models import MutationEvent, MutationKind
from kinship.logging import get_logger
from kinship.models import Relationship

logger = get_logger(__name__)


class RelationshipOperations:
    """Parent-of and spouse-of adjacency, kept consistent on both endpoints.

    Every mutation is validated first and committed to both sides while the
    locks of both persons are held, so no reader sees one side without the other.
    Mutations return True when the graph changed and False for no-ops.
    """

    def __init__(self, persons: PersonOperations, validator: RelationshipValidator,
                 listeners: MutationListeners):
        self.persons = persons
        self.locks = persons.locks
        self.validator = validator
        self.listeners = listeners
        persons.attach_index(self)

    def _emit(self, kind: MutationKind, first_id: int, second_id: int) -> None:
        logger.debug(kind.value, first_id=first_id, second_id=second_id)
        self.listeners.emit(MutationEvent(kind, first_id=first_id, second_id=second_id))

    # ─────────────────────────────────────────
    # Parent-of
    # ─────────────────────────────────────────

    def add_parent_child(self, parent_id: int, child_id: int) -> bool:
        """Add a parent-of edge unless it would create a cycle."""
        with self.locks.topology:
            self.validator.check_parent_child(parent_id, child_id)
            with self.locks.hold(parent_id, child_id):
                parent = self.persons.node(parent_id)
                child = self.persons.node(child_id)
                if child_id in parent.children:
                    return False
                parent.children.add(child_id)
                child.parents.add(parent_id)
                self._emit(MutationKind.PARENT_CHILD_ADDED, parent_id, child_id)
        return True

    def remove_parent_child(self, parent_id: int, child_id: int) -> bool:
        self.validator.check_pair(parent_id, child_id)
        with self.locks.hold(parent_id, child_id):
            parent = self.persons.node(parent_id)
            child = self.persons.node(child_id)
            if child_id not in parent.children:
                return False
            parent.children.discard(child_id)
            child.parents.discard(parent_id)
            self._emit(MutationKind.PARENT_CHILD_REMOVED, parent_id, child_id)
        return True

    # ─────────────────────────────────────────
    # Spouse-of
    # ─────────────────────────────────────────

    def add_spouse(self, person1_id: int, person2_id: int) -> bool:
        """Add bidirectional spouse relationship."""
        self.validator.check_pair(person1_id, person2_id)
        with self.locks.hold(person1_id, person2_id):
            p1 = self.persons.node(person1_id)
            p2 = self.persons.node(person2_id)
            if person2_id in p1.spouses:
                return False
            p1.spouses.add(person2_id)
            p2.spouses.add(person1_id)
            self._emit(MutationKind.SPOUSE_ADDED, person1_id, person2_id)
        return True

    def remove_spouse(self, person1_id: int, person2_id: int) -> bool:
        self.validator.check_pair(person1_id, person2_id)
        with self.locks.hold(person1_id, person2_id):
            p1 = self.persons.node(person1_id)
            p2 = self.persons.node(person2_id)
            if person2_id not in p1.spouses:
                return False
            p1.spouses.discard(person2_id)
            p2.spouses.discard(person1_id)
            self._emit(MutationKind.SPOUSE_REMOVED, person1_id, person2_id)
        return True

    def remove_all_edges_of(self, person_id: int) -> int:
        """Detach a person from all neighbors. Returns the number of edges removed."""
        with self.locks.hold_neighborhood(person_id, self.persons.neighbors_of):
            node = self.persons.node(person_id)
            removed = 0
            for child_id in sorted(node.children):
                self.persons.node(child_id).parents.discard(person_id)
                node.children.discard(child_id)
                self._emit(MutationKind.PARENT_CHILD_REMOVED, person_id, child_id)
                removed += 1
            for parent_id in sorted(node.parents):
                self.persons.node(parent_id).children.discard(person_id)
                node.parents.discard(parent_id)
                self._emit(MutationKind.PARENT_CHILD_REMOVED, parent_id, person_id)
                removed += 1
            for spouse_id in sorted(node.spouses):
                self.persons.node(spouse_id).spouses.discard(person_id)
                node.spouses.discard(spouse_id)
                self._emit(MutationKind.SPOUSE_REMOVED, person_id, spouse_id)
                removed += 1
        return removed

    # ─────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────

    def parents_of(self, person_id: int) -> frozenset[int]:
        with self.locks.hold(person_id):
            return frozenset(self.persons.node(person_id).parents)

    def children_of(self, person_id: int) -> frozenset[int]:
        with self.locks.hold(person_id):
            return frozenset(self.persons.node(person_id).children)

    def spouses_of(self, person_id: int) -> frozenset[int]:
        with self.locks.hold(person_id):
            return frozenset(self.persons.node(person_id).spouses)

    def edges(self) -> list[Relationship]:
        """Every edge once: parent-of as parent to child, spouse-of lowest id first."""
        edges = set()
        for person_id in self.persons.ids():
            adjacency = self.persons.adjacency(person_id)
            if adjacency is None:
                continue
            _, children, spouses = adjacency
            for child_id in children:
                edges.add((person_id, child_id, "parent_of"))
            for spouse_id in spouses:
                edges.add((min(person_id, spouse_id), max(person_id, spouse_id), "spouse_of"))
        return [
            Relationship(from_id=a, to_id=b, relation_type=kind)
            for a, b, kind in sorted(edges, key=lambda e: (e[2], e[0], e[1]))
        ]
