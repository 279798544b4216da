from __future__ import annotations

from .event import (
    DEATH_LIKE_TAGS,
    FACT_KIND_BY_TAG,
    FAMILY_FACT_TAGS,
    INDIVIDUAL_FACT_TAGS,
    Fact,
    FactKind,
    extract_fact,
    extract_facts,
    extract_family_facts,
    extract_individual_facts,
    is_fact_tag,
    is_family_fact_tag,
    is_individual_fact_tag,
    is_preferred,
)

__all__ = [
    "DEATH_LIKE_TAGS",
    "FACT_KIND_BY_TAG",
    "FAMILY_FACT_TAGS",
    "INDIVIDUAL_FACT_TAGS",
    "Fact",
    "FactKind",
    "extract_fact",
    "extract_facts",
    "extract_family_facts",
    "extract_individual_facts",
    "is_fact_tag",
    "is_family_fact_tag",
    "is_individual_fact_tag",
    "is_preferred",
]
