"""Lineage reports combining ancestor and descendant queries."""

from typing import Optional

from kinship.config import TraversalSettings, settings
from kinship.graph.family.person import PersonOperations
from kinship.graph.family.queries import FamilyQueries
from kinship.models import LineageReport


class LineageAggregator:
    """Package a person's ancestors and descendants into one report."""

    def __init__(self, persons: PersonOperations, queries: FamilyQueries,
                 traversal: Optional[TraversalSettings] = None):
        self.persons = persons
        self.queries = queries
        self.traversal = traversal or settings.traversal

    def _depth(self, requested: Optional[int], default: int) -> int:
        depth = default if requested is None else requested
        return min(max(depth, 0), self.traversal.max_depth)

    def lineage(self, person_id: int, ancestor_depth: Optional[int] = None,
                descendant_depth: Optional[int] = None) -> LineageReport:
        person = self.persons.get(person_id)
        up = self._depth(ancestor_depth, self.traversal.default_ancestor_depth)
        down = self._depth(descendant_depth, self.traversal.default_descendant_depth)
        return LineageReport(
            person_id=person.id,
            display_name=person.full_name,
            ancestors=self.queries.ancestors(person_id, up),
            descendants=self.queries.descendants(person_id, down),
            ancestor_depth_used=up,
            descendant_depth_used=down,
        )
