"""Typed failures raised by the kinship graph."""

from enum import Enum


class RelationshipError(str, Enum):
    """Why a relationship mutation was rejected."""
    SELF_RELATIONSHIP = "self_relationship"
    CYCLE_DETECTED = "cycle_detected"


class KinshipError(Exception):
    """Base class for kinship graph errors."""


class PersonNotFound(KinshipError):
    """A referenced person identity does not exist."""

    def __init__(self, person_id: int):
        self.person_id = person_id
        super().__init__(f"Person not found: {person_id}")


class InvalidRelationship(KinshipError):
    """A relationship mutation would break a graph invariant."""

    def __init__(self, reason: RelationshipError, first_id: int, second_id: int, message: str = ""):
        self.reason = reason
        self.first_id = first_id
        self.second_id = second_id
        super().__init__(message or f"Invalid relationship {first_id} -> {second_id}: {reason.value}")


class AlreadyExists(KinshipError):
    """A caller-supplied identity is already taken."""

    def __init__(self, person_id: int):
        self.person_id = person_id
        super().__init__(f"Person already exists with identifier: {person_id}")


class PersistenceError(KinshipError):
    """The durable store could not be read or written."""
