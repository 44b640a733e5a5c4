"""Durable family relationship edges using GraphLite."""

from pathlib import Path
from typing import Iterable, Optional

from graphlite import connect, V

from kinship.config import settings
from kinship.models import Relationship


class RelationshipStore:
    """Persist parent/child and spouse edges with GraphLite.

    Edges are written redundantly (``parent_of`` and ``child_of``, and
    ``spouse_of`` in both directions), mirroring the in-memory adjacency.
    """

    RELATION_TYPES = ["parent_of", "child_of", "spouse_of"]

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or settings.database.graph_db_path
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.graph = connect(self.db_path, graphs=self.RELATION_TYPES)

    def add_parent_child(self, parent_id: int, child_id: int):
        """Add parent-child relationship (bidirectional)."""
        with self.graph.transaction() as tr:
            tr.store(V(parent_id).parent_of(child_id))
            tr.store(V(child_id).child_of(parent_id))

    def remove_parent_child(self, parent_id: int, child_id: int):
        with self.graph.transaction() as tr:
            tr.delete(V(parent_id).parent_of(child_id))
            tr.delete(V(child_id).child_of(parent_id))

    def add_spouse(self, person1_id: int, person2_id: int):
        """Add spouse relationship (bidirectional)."""
        with self.graph.transaction() as tr:
            tr.store(V(person1_id).spouse_of(person2_id))
            tr.store(V(person2_id).spouse_of(person1_id))

    def remove_spouse(self, person1_id: int, person2_id: int):
        with self.graph.transaction() as tr:
            tr.delete(V(person1_id).spouse_of(person2_id))
            tr.delete(V(person2_id).spouse_of(person1_id))

    def get_children(self, person_id: int) -> list[int]:
        """Get all children of a person."""
        return self.graph.find(V(person_id).parent_of).to(list)

    def get_parents(self, person_id: int) -> list[int]:
        """Get all parents of a person."""
        return self.graph.find(V(person_id).child_of).to(list)

    def get_spouses(self, person_id: int) -> list[int]:
        """Get spouse(s) of a person."""
        return self.graph.find(V(person_id).spouse_of).to(list)

    def get_relationships(self, person_ids: Iterable[int]) -> list[Relationship]:
        """Every stored edge touching the given persons, each listed once."""
        edges = set()
        for person_id in person_ids:
            for child_id in self.get_children(person_id):
                edges.add((person_id, child_id, "parent_of"))
            for spouse_id in self.get_spouses(person_id):
                edges.add((min(person_id, spouse_id), max(person_id, spouse_id), "spouse_of"))
        return [
            Relationship(from_id=a, to_id=b, relation_type=kind)
            for a, b, kind in sorted(edges, key=lambda e: (e[2], e[0], e[1]))
        ]

    def delete_person_relationships(self, person_id: int) -> None:
        """Delete all relationships for a person before removing them.

        This prevents dangling edges that would be replayed on the next load.
        """
        children = self.get_children(person_id)
        parents = self.get_parents(person_id)
        spouses = self.get_spouses(person_id)

        with self.graph.transaction() as tr:
            for child_id in children:
                tr.delete(V(person_id).parent_of(child_id))
                tr.delete(V(child_id).child_of(person_id))

            for parent_id in parents:
                tr.delete(V(person_id).child_of(parent_id))
                tr.delete(V(parent_id).parent_of(person_id))

            for spouse_id in spouses:
                tr.delete(V(person_id).spouse_of(spouse_id))
                tr.delete(V(spouse_id).spouse_of(person_id))
