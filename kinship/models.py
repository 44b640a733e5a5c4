"""Data models for the kinship graph."""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    UNKNOWN = "UNKNOWN"


class Visibility(str, Enum):
    PUBLIC = "PUBLIC"
    FAMILY = "FAMILY"
    PRIVATE = "PRIVATE"


class RelationType(str, Enum):
    """Edge kinds, named from the perspective of the step's target."""
    PARENT = "PARENT"
    CHILD = "CHILD"
    SPOUSE = "SPOUSE"


class PersonAttributes(BaseModel):
    """Descriptive attributes of a person. Every field is optional."""

    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    maiden_name: Optional[str] = None
    birth_date: Optional[date] = None
    death_date: Optional[date] = None
    gender: Gender = Gender.UNKNOWN
    biography: Optional[str] = None
    profile_image_url: Optional[str] = None
    birth_place: Optional[str] = None
    death_place: Optional[str] = None
    current_location: Optional[str] = None
    occupation: Optional[str] = None
    nationality: Optional[str] = None
    is_public: bool = False
    visibility: Visibility = Visibility.PRIVATE


class Person(PersonAttributes):
    """Read-only snapshot of a person and their adjacency at read time."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int
    parent_ids: frozenset[int] = Field(default_factory=frozenset)
    child_ids: frozenset[int] = Field(default_factory=frozenset)
    spouse_ids: frozenset[int] = Field(default_factory=frozenset)

    @property
    def attributes(self) -> PersonAttributes:
        """Attribute record without identity or edges."""
        return PersonAttributes(**self.model_dump(include=set(PersonAttributes.model_fields)))

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p.strip() for p in parts if p and p.strip())

    @property
    def is_alive(self) -> bool:
        return self.death_date is None

    @property
    def age(self) -> Optional[int]:
        """Completed years at death, or today for the living."""
        if not self.birth_date:
            return None
        end = self.death_date or date.today()
        return end.year - self.birth_date.year - (
            (end.month, end.day) < (self.birth_date.month, self.birth_date.day)
        )


class Relationship(BaseModel):
    """Stored edge between two persons."""

    model_config = ConfigDict(frozen=True)

    from_id: int
    to_id: int
    relation_type: str  # parent_of, spouse_of


class RelationshipStep(BaseModel):
    """One hop of a relationship path: ``to_id`` is the ``relation`` of ``from_id``."""

    from_id: int
    to_id: int
    relation: RelationType
    specific: str  # father, mother, son, daughter, husband, wife, ...


class FamilyTree(BaseModel):
    """Immediate family around one person."""

    person: Person
    parents: list[Person] = Field(default_factory=list)
    spouses: list[Person] = Field(default_factory=list)
    children: list[Person] = Field(default_factory=list)
    siblings: list[Person] = Field(default_factory=list)
    grandparents: list[Person] = Field(default_factory=list)
    grandchildren: list[Person] = Field(default_factory=list)


class LineageReport(BaseModel):
    """Ancestors and descendants of one person."""

    person_id: int
    display_name: str
    ancestors: list[Person] = Field(default_factory=list)
    descendants: list[Person] = Field(default_factory=list)
    ancestor_depth_used: int
    descendant_depth_used: int
