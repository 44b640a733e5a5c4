"""Per-person locking for the shared node table.

Every operation that touches several persons takes their locks in ascending
identity order. Parent-of insertions also hold ``topology`` for the whole
cycle check and commit; it is always taken before any person lock.
"""

import threading
from contextlib import ExitStack, contextmanager
from typing import Callable, Iterable, Iterator

from kinship.exceptions import PersonNotFound


class PersonLocks:
    """Registry of re-entrant locks, one per live person."""

    def __init__(self):
        self._registry = threading.Lock()
        self._locks: dict[int, threading.RLock] = {}
        self.topology = threading.RLock()

    def register(self, person_id: int) -> threading.RLock:
        with self._registry:
            return self._locks.setdefault(person_id, threading.RLock())

    def discard(self, person_id: int) -> None:
        with self._registry:
            self._locks.pop(person_id, None)

    def _collect(self, person_ids: Iterable[int], optional: Iterable[int] = ()) -> dict[int, threading.RLock]:
        """Look up locks in acquisition order. Missing optional ids are skipped."""
        required = set(person_ids)
        locks = {}
        with self._registry:
            for pid in sorted(required | set(optional)):
                lock = self._locks.get(pid)
                if lock is None:
                    if pid in required:
                        raise PersonNotFound(pid)
                    continue
                locks[pid] = lock
        return locks

    @contextmanager
    def hold(self, *person_ids: int) -> Iterator[None]:
        """Hold the locks of all given persons, lowest identity first."""
        locks = self._collect(person_ids)
        with ExitStack() as stack:
            for lock in locks.values():
                stack.enter_context(lock)
            yield

    @contextmanager
    def hold_neighborhood(self, person_id: int, neighbors: Callable[[int], set[int]]) -> Iterator[set[int]]:
        """Hold a person's lock together with the locks of all its neighbors.

        The neighbor set is read under the person's lock alone, then every
        lock is taken in order and the set is read again. If a new neighbor
        appeared in between, everything is released and the attempt repeats.
        Yields the neighbor set seen under the full set of locks.
        """
        while True:
            with self.hold(person_id):
                expected = neighbors(person_id)
            locks = self._collect([person_id], optional=expected)
            with ExitStack() as stack:
                for lock in locks.values():
                    stack.enter_context(lock)
                current = neighbors(person_id)
                if current <= locks.keys():
                    yield current
                    return
