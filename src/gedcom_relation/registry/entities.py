from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Set

from gedcom_relation.events import Fact


# -----------------------------
# Base records (small atoms)
# -----------------------------

class Sex(Enum):
    MALE = "M"
    FEMALE = "F"
    OTHER = "U"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "Sex":
        v = (value or "").strip().upper()
        if v == "M":
            return cls.MALE
        if v == "F":
            return cls.FEMALE
        return cls.OTHER


@dataclass(slots=True)
class NameRecord:
    """
    GEDCOM NAME substructure.

      - full: the raw value, e.g. "John /Doe/"
      - given / surname: from GIVN / SURN, or split from ``full``
    """
    full: str = ""
    given: Optional[str] = None
    surname: Optional[str] = None
    preferred: bool = False


@dataclass(slots=True)
class GenericAttribute:
    """
    Lossless capture of unmodeled GEDCOM tags (_UID, NOTE, SOUR, OBJE, ...).
    """
    tag: str
    value: Optional[str] = None
    pointer: Optional[str] = None

    # Nested tag/value structures preserved verbatim
    children: List[Dict[str, Optional[str]]] = field(default_factory=list)

    lineno: Optional[int] = None


# -----------------------------
# Findings
# -----------------------------

class FindingKind(Enum):
    MISSING_FIELD = "missing_field"
    INVALID_FIELD = "invalid_field"


@dataclass(frozen=True)
class Finding:
    """
    A non-fatal data-quality observation recorded while building the model.

    The entity is still emitted; the named field is left absent.
    """
    kind: FindingKind
    entity_type: str
    entity_id: str
    field: str
    message: str

    @classmethod
    def missing(cls, entity_type: str, entity_id: str, field_name: str) -> "Finding":
        return cls(
            FindingKind.MISSING_FIELD,
            entity_type,
            entity_id,
            field_name,
            f"missing {field_name}",
        )

    @classmethod
    def invalid(cls, entity_type: str, entity_id: str, field_name: str, reason: str) -> "Finding":
        return cls(FindingKind.INVALID_FIELD, entity_type, entity_id, field_name, reason)

    def __str__(self) -> str:
        return f"{self.entity_type} {self.entity_id}: {self.message}"


# -----------------------------
# Entities
# -----------------------------

@dataclass(slots=True)
class Individual:
    id: str

    # Modeled
    sex: Optional[Sex] = None
    names: List[NameRecord] = field(default_factory=list)
    facts: List[Fact] = field(default_factory=list)
    date_created: Optional[datetime] = None

    # Resolved FAMS / FAMC targets, in source order
    families_as_spouse: List[str] = field(default_factory=list)
    families_as_child: List[str] = field(default_factory=list)

    attributes: List[GenericAttribute] = field(default_factory=list)
    lineno: Optional[int] = None

    @property
    def family_links(self) -> Set[str]:
        return set(self.families_as_spouse) | set(self.families_as_child)

    @property
    def is_living(self) -> bool:
        return not any(f.is_death_like for f in self.facts)


@dataclass(slots=True)
class Family:
    id: str

    husband_id: Optional[str] = None
    wife_id: Optional[str] = None
    # Second and later HUSB/WIFE pointers; kept, not enforced
    other_spouse_ids: List[str] = field(default_factory=list)
    child_ids: List[str] = field(default_factory=list)

    facts: List[Fact] = field(default_factory=list)
    date_created: Optional[datetime] = None
    attributes: List[GenericAttribute] = field(default_factory=list)
    lineno: Optional[int] = None

    @property
    def spouse_ids(self) -> Set[str]:
        ids = {i for i in (self.husband_id, self.wife_id) if i is not None}
        ids.update(self.other_spouse_ids)
        return ids


# -----------------------------
# Domain model
# -----------------------------

@dataclass(slots=True)
class DomainModel:
    """
    Individuals and families of one document, keyed by xref id in document
    order, plus the findings collected while building them.
    """
    individuals: Dict[str, Individual] = field(default_factory=dict)
    families: Dict[str, Family] = field(default_factory=dict)
    findings: List[Finding] = field(default_factory=list)

    def register_individual(self, ind: Individual) -> None:
        self.individuals[ind.id] = ind

    def register_family(self, fam: Family) -> None:
        self.families[fam.id] = fam

    def get_individual(self, xref_id: str) -> Optional[Individual]:
        return self.individuals.get(xref_id)

    def get_family(self, xref_id: str) -> Optional[Family]:
        return self.families.get(xref_id)

    @property
    def fact_count(self) -> int:
        return sum(len(i.facts) for i in self.individuals.values()) + sum(
            len(f.facts) for f in self.families.values()
        )
