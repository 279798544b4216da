from __future__ import annotations

from typing import List

from gedcom_relation.events import extract_family_facts, is_family_fact_tag
from gedcom_relation.loader import GEDCOMNode
from gedcom_relation.xref import ResolvedGraph

from .entities import Family, Finding
from .utils import (
    _child_nodes_by_tag,
    collect_attributes,
    creation_date,
    resolve_pointer,
)

HANDLED_TAGS = {"HUSB", "WIFE", "CHIL", "CHAN"}


def build_family(node: GEDCOMNode, graph: ResolvedGraph, findings: List[Finding]) -> Family:
    """
    Build a Family from a FAM record of the resolved graph.

    Notes:
      - HUSB / WIFE / CHIL must resolve to INDI records
      - the number of spouses is not enforced; the first HUSB and WIFE
        become father and mother, any further ones are kept separately
      - a missing CHAN is a finding, not an error
    """
    if node.tag != "FAM":
        raise ValueError(f"Expected FAM node, got {node.tag}")
    if not node.xref_id:
        raise ValueError("FAM node is missing its cross-reference id")

    family = Family(id=node.xref_id, lineno=node.lineno)

    # Spouses
    for tag in ("HUSB", "WIFE"):
        for i, spouse in enumerate(_child_nodes_by_tag(node, tag)):
            spouse_id = resolve_pointer(graph, spouse, "INDI")
            if i > 0:
                family.other_spouse_ids.append(spouse_id)
            elif tag == "HUSB":
                family.husband_id = spouse_id
            else:
                family.wife_id = spouse_id

    # Children
    for chil in _child_nodes_by_tag(node, "CHIL"):
        family.child_ids.append(resolve_pointer(graph, chil, "INDI"))

    family.facts.extend(extract_family_facts(node))

    family.date_created = creation_date(node, "FAM", family.id, findings)

    # Generic Attributes (lossless)
    family.attributes.extend(
        a for a in collect_attributes(node, HANDLED_TAGS) if not is_family_fact_tag(a.tag)
    )

    return family
