from __future__ import annotations

from .build_family import build_family
from .build_individual import build_individual, build_name, split_name
from .build_registry import build_domain_model
from .entities import (
    DomainModel,
    Family,
    Finding,
    FindingKind,
    GenericAttribute,
    Individual,
    NameRecord,
    Sex,
)
from .link_entities import link_entities
from .utils import change_node_to_datetime

__all__ = [
    "DomainModel",
    "Family",
    "Finding",
    "FindingKind",
    "GenericAttribute",
    "Individual",
    "NameRecord",
    "Sex",
    "build_domain_model",
    "build_family",
    "build_individual",
    "build_name",
    "change_node_to_datetime",
    "link_entities",
    "split_name",
]
