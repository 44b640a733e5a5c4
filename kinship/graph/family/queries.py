"""Family tree queries."""

from collections import deque
from typing import Callable, Iterable

from kinship.exceptions import PersonNotFound
from kinship.graph.family.person import Adjacency, PersonOperations
from kinship.logging import get_logger
from kinship.models import FamilyTree, Gender, Person, RelationshipStep, RelationType

logger = get_logger(__name__)

_SPECIFIC_TERMS = {
    RelationType.PARENT: {Gender.MALE: "father", Gender.FEMALE: "mother"},
    RelationType.CHILD: {Gender.MALE: "son", Gender.FEMALE: "daughter"},
    RelationType.SPOUSE: {Gender.MALE: "husband", Gender.FEMALE: "wife"},
}
_GENERIC_TERMS = {
    RelationType.PARENT: "parent",
    RelationType.CHILD: "child",
    RelationType.SPOUSE: "spouse",
}


def _parents(adjacency: Adjacency) -> frozenset[int]:
    return adjacency[0]


def _children(adjacency: Adjacency) -> frozenset[int]:
    return adjacency[1]


def _all_neighbors(adjacency: Adjacency) -> frozenset[int]:
    return adjacency[0] | adjacency[1] | adjacency[2]


class FamilyQueries:
    """Read-only traversals over the relationship index.

    Each visited node is copied under its own lock, so a traversal never sees
    a node mid-update. Persons deleted while a traversal runs are skipped.
    """

    def __init__(self, persons: PersonOperations):
        self.persons = persons

    def _require(self, person_id: int) -> Adjacency:
        adjacency = self.persons.adjacency(person_id)
        if adjacency is None:
            raise PersonNotFound(person_id)
        return adjacency

    def _to_persons(self, person_ids: Iterable[int]) -> list[Person]:
        persons = (self.persons.peek(pid) for pid in person_ids)
        return [p for p in persons if p is not None]

    def _expand(self, person_id: int, max_depth: int,
                step: Callable[[Adjacency], frozenset[int]]) -> list[Person]:
        """Breadth-first generations along ``step``, up to ``max_depth`` inclusive."""
        self._require(person_id)
        visited = {person_id}
        found = []
        current_gen = [person_id]

        for _ in range(max(max_depth, 0)):
            next_gen = []
            for pid in current_gen:
                adjacency = self.persons.adjacency(pid)
                if adjacency is None:
                    continue
                for relative_id in sorted(step(adjacency)):
                    if relative_id not in visited:
                        visited.add(relative_id)
                        next_gen.append(relative_id)
            if not next_gen:
                break
            found.extend(next_gen)
            current_gen = next_gen

        return self._to_persons(found)

    def ancestors(self, person_id: int, max_depth: int) -> list[Person]:
        """Parents, grandparents, ... up to ``max_depth`` generations, nearest first."""
        return self._expand(person_id, max_depth, _parents)

    def descendants(self, person_id: int, max_depth: int) -> list[Person]:
        """Children, grandchildren, ... up to ``max_depth`` generations, nearest first."""
        return self._expand(person_id, max_depth, _children)

    def siblings(self, person_id: int) -> list[Person]:
        """Everyone sharing at least one parent, sorted by id."""
        parent_ids = _parents(self._require(person_id))
        sibling_ids = set()
        for parent_id in parent_ids:
            adjacency = self.persons.adjacency(parent_id)
            if adjacency is not None:
                sibling_ids |= _children(adjacency)
        sibling_ids.discard(person_id)
        return self._to_persons(sorted(sibling_ids))

    def relationship_path(self, person1_id: int, person2_id: int) -> list[Person]:
        """Shortest chain of persons linking two people, ignoring edge direction.

        Parent-of and spouse-of edges both count as one hop. Returns an empty
        list when the two are in disconnected parts of the graph.
        """
        self._require(person1_id)
        self._require(person2_id)
        if person1_id == person2_id:
            return self._to_persons([person1_id])

        predecessors = {person1_id: None}
        queue = deque([person1_id])
        while queue:
            current = queue.popleft()
            adjacency = self.persons.adjacency(current)
            if adjacency is None:
                continue
            for relative_id in sorted(_all_neighbors(adjacency)):
                if relative_id in predecessors:
                    continue
                predecessors[relative_id] = current
                if relative_id == person2_id:
                    return self._walk_back(predecessors, person2_id)
                queue.append(relative_id)

        logger.debug("no_relationship_path", person1_id=person1_id, person2_id=person2_id)
        return []

    def _walk_back(self, predecessors: dict, target_id: int) -> list[Person]:
        path_ids = []
        node = target_id
        while node is not None:
            path_ids.append(node)
            node = predecessors[node]
        path_ids.reverse()
        path = self._to_persons(path_ids)
        # A person on the path was deleted after it was visited
        if len(path) != len(path_ids):
            return []
        return path

    def relationship_steps(self, person1_id: int, person2_id: int) -> list[RelationshipStep]:
        """Label each hop of the shortest path, e.g. father, wife, daughter."""
        path = self.relationship_path(person1_id, person2_id)
        steps = []
        for current, nxt in zip(path, path[1:]):
            if nxt.id in current.parent_ids:
                relation = RelationType.PARENT
            elif nxt.id in current.child_ids:
                relation = RelationType.CHILD
            else:
                relation = RelationType.SPOUSE
            specific = _SPECIFIC_TERMS[relation].get(nxt.gender, _GENERIC_TERMS[relation])
            steps.append(RelationshipStep(from_id=current.id, to_id=nxt.id, relation=relation, specific=specific))
        return steps

    def immediate_family(self, person_id: int) -> FamilyTree:
        """Two generations up and down plus spouses and siblings."""
        person = self.persons.get(person_id)
        parents = self._to_persons(sorted(person.parent_ids))
        children = self._to_persons(sorted(person.child_ids))
        grandparent_ids = set().union(*(p.parent_ids for p in parents))
        grandchild_ids = set().union(*(c.child_ids for c in children))
        return FamilyTree(
            person=person,
            parents=parents,
            spouses=self._to_persons(sorted(person.spouse_ids)),
            children=children,
            siblings=self.siblings(person_id),
            grandparents=self._to_persons(sorted(grandparent_ids)),
            grandchildren=self._to_persons(sorted(grandchild_ids)),
        )
