"""Shared data models for graph operations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from kinship.models import Person, PersonAttributes, Relationship


@dataclass
class PersonNode:
    """Node table entry: attributes plus redundant adjacency sets of identities."""
    id: int
    attributes: PersonAttributes
    parents: set[int] = field(default_factory=set)
    children: set[int] = field(default_factory=set)
    spouses: set[int] = field(default_factory=set)

    def neighbors(self) -> set[int]:
        return self.parents | self.children | self.spouses

    def snapshot(self) -> Person:
        """Copy into an immutable Person. Caller holds the node lock."""
        return Person(
            id=self.id,
            **self.attributes.model_dump(),
            parent_ids=frozenset(self.parents),
            child_ids=frozenset(self.children),
            spouse_ids=frozenset(self.spouses),
        )


class MutationKind(str, Enum):
    """Kinds of committed graph mutations."""
    PERSON_CREATED = "person_created"
    PERSON_UPDATED = "person_updated"
    PERSON_DELETED = "person_deleted"
    PARENT_CHILD_ADDED = "parent_child_added"
    PARENT_CHILD_REMOVED = "parent_child_removed"
    SPOUSE_ADDED = "spouse_added"
    SPOUSE_REMOVED = "spouse_removed"


@dataclass(frozen=True)
class MutationEvent:
    """A committed mutation, delivered to write-through listeners.

    Person events carry ``person_id`` (and ``person`` unless deleted);
    edge events carry ``first_id``/``second_id`` (parent then child for
    parent-of edges).
    """
    kind: MutationKind
    person_id: Optional[int] = None
    person: Optional[Person] = None
    first_id: Optional[int] = None
    second_id: Optional[int] = None


@dataclass
class GraphSnapshot:
    """Full person and edge set loaded from durable storage."""
    persons: list[Person] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)
