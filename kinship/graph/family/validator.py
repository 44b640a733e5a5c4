"""Structural checks run before a relationship mutation is committed."""

from collections import deque

from kinship.exceptions import InvalidRelationship, PersonNotFound, RelationshipError
from kinship.graph.family.person import PersonOperations
from kinship.logging import get_logger

logger = get_logger(__name__)


class RelationshipValidator:
    """Accept or reject a proposed edge mutation."""

    def __init__(self, persons: PersonOperations):
        self.persons = persons

    def require_known(self, *person_ids: int) -> None:
        for person_id in person_ids:
            if not self.persons.exists(person_id):
                raise PersonNotFound(person_id)

    def _reject(self, reason: RelationshipError, first_id: int, second_id: int, message: str = ""):
        logger.warning("relationship_rejected", reason=reason.value, first_id=first_id, second_id=second_id)
        raise InvalidRelationship(reason, first_id, second_id, message)

    def check_pair(self, first_id: int, second_id: int) -> None:
        """Both persons exist and are distinct."""
        self.require_known(first_id, second_id)
        if first_id == second_id:
            self._reject(
                RelationshipError.SELF_RELATIONSHIP, first_id, second_id,
                f"Person {first_id} cannot be related to themselves",
            )

    def check_parent_child(self, parent_id: int, child_id: int) -> None:
        """Reject the edge if the child is already an ancestor of the parent.

        Must run while no other parent-of edge can be inserted.
        """
        self.check_pair(parent_id, child_id)
        if self.is_ancestor(child_id, parent_id):
            self._reject(
                RelationshipError.CYCLE_DETECTED, parent_id, child_id,
                f"Cycle detected: {child_id} is already an ancestor of {parent_id}",
            )

    def is_ancestor(self, candidate_id: int, person_id: int) -> bool:
        """True if ``candidate_id`` is reachable from ``person_id`` along child-to-parent edges."""
        visited = {person_id}
        queue = deque([person_id])
        while queue:
            adjacency = self.persons.adjacency(queue.popleft())
            if adjacency is None:
                continue
            for parent_id in adjacency[0]:
                if parent_id == candidate_id:
                    return True
                if parent_id not in visited:
                    visited.add(parent_id)
                    queue.append(parent_id)
        return False
