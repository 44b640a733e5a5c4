"""Write-through listeners for committed mutations."""

import threading
from typing import Callable

from kinship.graph.models import MutationEvent
from kinship.logging import get_logger

logger = get_logger(__name__)

MutationListener = Callable[[MutationEvent], None]


class MutationListeners:
    """Fan-out of committed mutations to subscribed listeners.

    ``emit`` is called after the commit, with the locks of the touched persons
    still held, so events for one person arrive in commit order. A failing
    listener is logged and does not undo the commit or block other listeners.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._listeners: list[MutationListener] = []

    def add(self, listener: MutationListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove(self, listener: MutationListener) -> None:
        with self._lock:
            self._listeners.remove(listener)

    def emit(self, event: MutationEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "mutation_listener_failed",
                    kind=event.kind.value,
                    person_id=event.person_id,
                    first_id=event.first_id,
                    second_id=event.second_id,
                )
