"""
INDI record -> Individual.

Two fields are required and reported as findings when absent: ``sex`` (no
SEX line) and ``date_created`` (no CHAN record). An individual without
either produces two MISSING_FIELD findings; one that only lacks CHAN
produces exactly one.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from gedcom_relation.events import extract_individual_facts, is_individual_fact_tag, is_preferred
from gedcom_relation.loader import GEDCOMNode
from gedcom_relation.xref import ResolvedGraph

from .entities import Finding, Individual, NameRecord, Sex
from .utils import (
    _child_nodes_by_tag,
    collect_attributes,
    creation_date,
    resolve_pointer,
)

HANDLED_TAGS = {"NAME", "SEX", "FAMS", "FAMC", "CHAN"}


def split_name(full: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Split a NAME value into (given, surname).

        'Gavin /Henderson/' -> ('Gavin', 'Henderson')
        '/Henderson/'       -> (None, 'Henderson')
        'Gavin'             -> ('Gavin', None)
    """
    text = (full or "").strip()
    if "/" not in text:
        return (text or None), None

    given, _, rest = text.partition("/")
    surname, _, _ = rest.partition("/")
    return (given.strip() or None), (surname.strip() or None)


def build_name(node: GEDCOMNode) -> NameRecord:
    given, surname = split_name(node.value)
    givn = node.first_value("GIVN")
    surn = node.first_value("SURN")
    return NameRecord(
        full=node.value or "",
        given=givn.strip() if givn and givn.strip() else given,
        surname=surn.strip() if surn and surn.strip() else surname,
        preferred=is_preferred(node),
    )


def build_individual(node: GEDCOMNode, graph: ResolvedGraph, findings: List[Finding]) -> Individual:
    """
    Build an Individual from an INDI record of the resolved graph.

    FAMS / FAMC pointers are resolved to family ids; a pointer that does not
    land on a FAM record aborts the document. Missing or unreadable SEX and
    CHAN data are appended to ``findings`` and the field is left empty.
    """
    if node.tag != "INDI":
        raise ValueError(f"Expected INDI node, got {node.tag}")
    if not node.xref_id:
        raise ValueError("INDI node is missing its cross-reference id")

    individual = Individual(id=node.xref_id, lineno=node.lineno)

    # Names
    for name_node in _child_nodes_by_tag(node, "NAME"):
        individual.names.append(build_name(name_node))

    # Gender
    sex_node = node.find_first("SEX")
    if sex_node is None:
        findings.append(Finding.missing("INDI", individual.id, "sex"))
    else:
        individual.sex = Sex.from_value(sex_node.value)

    # Family Links
    for fams in _child_nodes_by_tag(node, "FAMS"):
        individual.families_as_spouse.append(resolve_pointer(graph, fams, "FAM"))
    for famc in _child_nodes_by_tag(node, "FAMC"):
        individual.families_as_child.append(resolve_pointer(graph, famc, "FAM"))

    # Facts
    individual.facts.extend(extract_individual_facts(node))

    individual.date_created = creation_date(node, "INDI", individual.id, findings)

    # Generic Attributes
    individual.attributes.extend(
        a for a in collect_attributes(node, HANDLED_TAGS) if not is_individual_fact_tag(a.tag)
    )

    return individual
