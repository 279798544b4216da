# src/gedcom_relation/events/event.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from gedcom_relation.dates import Date, parse_date
from gedcom_relation.loader import GEDCOMNode


# ---------------------------------------------------------------------------
# Fact Tag Definitions (GEDCOM 5.5.1)
# ---------------------------------------------------------------------------

class FactKind(str, Enum):
    BIRTH = "Birth"
    CHRISTENING = "Christening"
    ADULT_CHRISTENING = "Adult Christening"
    BAPTISM = "Baptism"
    BAR_MITZVAH = "Bar Mitzvah"
    BAS_MITZVAH = "Bas Mitzvah"
    BLESSING = "Blessing"
    ADOPTION = "Adoption"
    CONFIRMATION = "Confirmation"
    FIRST_COMMUNION = "First Communion"
    GRADUATION = "Graduation"
    ORDINATION = "Ordination"
    EMIGRATION = "Emigration"
    IMMIGRATION = "Immigration"
    NATURALIZATION = "Naturalization"
    CENSUS = "Census"
    PROBATE = "Probate"
    WILL = "Will"
    RETIREMENT = "Retirement"
    DEATH = "Death"
    BURIAL = "Burial"
    CREMATION = "Cremation"
    RESIDENCE = "Residence"
    OCCUPATION = "Occupation"
    MARRIAGE = "Marriage"
    MARRIAGE_BANNS = "Marriage Banns"
    MARRIAGE_CONTRACT = "Marriage Contract"
    MARRIAGE_LICENSE = "Marriage License"
    MARRIAGE_SETTLEMENT = "Marriage Settlement"
    ENGAGEMENT = "Engagement"
    ANNULMENT = "Annulment"
    DIVORCE = "Divorce"
    DIVORCE_FILED = "Divorce Filed"
    EVENT = "Event"


FACT_KIND_BY_TAG: Dict[str, FactKind] = {
    "BIRT": FactKind.BIRTH,
    "CHR": FactKind.CHRISTENING,
    "CHRA": FactKind.ADULT_CHRISTENING,
    "BAPM": FactKind.BAPTISM,
    "BARM": FactKind.BAR_MITZVAH,
    "BASM": FactKind.BAS_MITZVAH,
    "BLES": FactKind.BLESSING,
    "ADOP": FactKind.ADOPTION,
    "CONF": FactKind.CONFIRMATION,
    "FCOM": FactKind.FIRST_COMMUNION,
    "GRAD": FactKind.GRADUATION,
    "ORDN": FactKind.ORDINATION,
    "EMIG": FactKind.EMIGRATION,
    "IMMI": FactKind.IMMIGRATION,
    "NATU": FactKind.NATURALIZATION,
    "CENS": FactKind.CENSUS,
    "PROB": FactKind.PROBATE,
    "WILL": FactKind.WILL,
    "RETI": FactKind.RETIREMENT,
    "DEAT": FactKind.DEATH,
    "BURI": FactKind.BURIAL,
    "CREM": FactKind.CREMATION,
    "RESI": FactKind.RESIDENCE,
    "OCCU": FactKind.OCCUPATION,
    "MARR": FactKind.MARRIAGE,
    "MARB": FactKind.MARRIAGE_BANNS,
    "MARC": FactKind.MARRIAGE_CONTRACT,
    "MARL": FactKind.MARRIAGE_LICENSE,
    "MARS": FactKind.MARRIAGE_SETTLEMENT,
    "ENGA": FactKind.ENGAGEMENT,
    "ANUL": FactKind.ANNULMENT,
    "DIV": FactKind.DIVORCE,
    "DIVF": FactKind.DIVORCE_FILED,
    "EVEN": FactKind.EVENT,
}

INDIVIDUAL_FACT_TAGS: FrozenSet[str] = frozenset({
    "BIRT", "CHR", "CHRA", "BAPM", "BARM", "BASM", "BLES",
    "ADOP", "CONF", "FCOM", "GRAD", "ORDN", "EMIG", "IMMI",
    "NATU", "CENS", "PROB", "WILL", "RETI", "DEAT", "BURI",
    "CREM", "RESI", "OCCU",
    "EVEN",  # EVEN = generic event
})

FAMILY_FACT_TAGS: FrozenSet[str] = frozenset({
    "MARR", "MARB", "MARC", "MARL", "MARS",
    "ENGA", "ANUL", "DIV", "DIVF", "EVEN", "RESI",
})

# Facts whose presence means the individual is no longer living
DEATH_LIKE_TAGS: FrozenSet[str] = frozenset({"DEAT", "BURI", "CREM"})

# Sub-records a fact understands; anything else lands in raw_children
HANDLED_FACT_CHILD_TAGS: FrozenSet[str] = frozenset({"DATE", "PLAC", "_PRIM"})

PREFERRED_TAG = "_PRIM"


# ---------------------------------------------------------------------------
# Fact
# ---------------------------------------------------------------------------

@dataclass
class Fact:
    """
    A typed life event extracted from an INDI or FAM record.

    ``raw_children`` keeps every sub-record the extractor does not model
    (SOUR, NOTE, TYPE, AGE, ...) exactly as it appeared in the tree.
    """
    kind: FactKind
    tag: str
    date: Optional[Date] = None
    place: Optional[str] = None
    value: Optional[str] = None
    preferred: bool = False
    lineno: Optional[int] = None
    raw_children: List[GEDCOMNode] = field(default_factory=list)

    @property
    def is_death_like(self) -> bool:
        return self.tag in DEATH_LIKE_TAGS


# ---------------------------------------------------------------------------
# Tag Helpers
# ---------------------------------------------------------------------------

def is_fact_tag(tag: str) -> bool:
    """Return True if the tag is any known individual or family fact tag."""
    if not tag:
        return False
    t = tag.upper()
    return t in INDIVIDUAL_FACT_TAGS or t in FAMILY_FACT_TAGS


def is_family_fact_tag(tag: str) -> bool:
    return tag.upper() in FAMILY_FACT_TAGS if tag else False


def is_individual_fact_tag(tag: str) -> bool:
    return tag.upper() in INDIVIDUAL_FACT_TAGS if tag else False


def is_preferred(node: GEDCOMNode) -> bool:
    """True when the node carries a ``_PRIM Y`` marker."""
    flag = node.first_value(PREFERRED_TAG)
    return (flag or "").strip().upper() == "Y"


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def _trim(s: Optional[str]) -> Optional[str]:
    if s is None:
        return None
    s = s.strip()
    return s or None


def _normalize_place_str(place: str) -> str:
    """
    Basic place normalization:
      - strip leading/trailing whitespace
      - collapse internal whitespace
      - normalize spaces around commas
    """
    s = place.strip()
    s = re.sub(r"\s+", " ", s)
    s = re.sub(r"\s*,\s*", ", ", s)
    return s


def _extract_place(node: GEDCOMNode) -> Optional[str]:
    raw = _trim(node.first_value("PLAC"))
    if not raw:
        return None
    return _normalize_place_str(raw)


def _extract_date(node: GEDCOMNode) -> Optional[Date]:
    """Extract the DATE child and pass it through the date parser."""
    raw = _trim(node.first_value("DATE"))
    if not raw:
        return None
    return parse_date(raw)


# ---------------------------------------------------------------------------
# Core Fact Extraction
# ---------------------------------------------------------------------------

def extract_fact(node: GEDCOMNode) -> Fact:
    """
    Convert a fact node (level 1 child of INDI/FAM) into a Fact.
    """
    tag = node.tag.upper()
    return Fact(
        kind=FACT_KIND_BY_TAG[tag],
        tag=tag,
        date=_extract_date(node),
        place=_extract_place(node),
        value=_trim(node.value),
        preferred=is_preferred(node),
        lineno=node.lineno,
        raw_children=[c for c in node.children if c.tag not in HANDLED_FACT_CHILD_TAGS],
    )


def extract_facts(record: GEDCOMNode, tags: FrozenSet[str]) -> List[Fact]:
    """
    Extract every child of ``record`` whose tag is in ``tags``, in source order.
    """
    return [extract_fact(child) for child in record.children if child.tag.upper() in tags]


def extract_individual_facts(record: GEDCOMNode) -> List[Fact]:
    return extract_facts(record, INDIVIDUAL_FACT_TAGS)


def extract_family_facts(record: GEDCOMNode) -> List[Fact]:
    return extract_facts(record, FAMILY_FACT_TAGS)
