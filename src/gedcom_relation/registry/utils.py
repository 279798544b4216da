from __future__ import annotations

import re
from datetime import datetime
from typing import Dict, List, Optional

from gedcom_relation.core.exceptions import StructuralError, UnresolvedReference
from gedcom_relation.dates import ExactDate, parse_date
from gedcom_relation.loader import GEDCOMNode
from gedcom_relation.xref import ResolvedGraph

from .entities import Finding, GenericAttribute

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?$")


def _child_nodes_by_tag(node: GEDCOMNode, tag: str) -> List[GEDCOMNode]:
    return [c for c in node.children if c.tag == tag]


def _attribute_from_node(node: GEDCOMNode) -> GenericAttribute:
    """Capture an unmodeled child verbatim (one level of sub-records)."""
    children: List[Dict[str, Optional[str]]] = [
        {"tag": c.tag, "value": c.value} for c in node.children
    ]
    return GenericAttribute(
        tag=node.tag,
        value=node.value,
        pointer=node.pointer_value,
        children=children,
        lineno=node.lineno,
    )


def collect_attributes(record: GEDCOMNode, handled_tags) -> List[GenericAttribute]:
    return [_attribute_from_node(c) for c in record.children if c.tag not in handled_tags]


def change_node_to_datetime(chan: GEDCOMNode) -> datetime:
    """
    Read a CHAN structure into a timestamp.

        1 CHAN
        2 DATE 15 APR 2020
        3 TIME 16:19:21

    TIME is optional (midnight) and its seconds are optional.

    Raises:
        ValueError: when DATE is missing, not a full day-precision date, or
            TIME is not HH:MM[:SS].
    """
    date_node = chan.find_first("DATE")
    if date_node is None or not (date_node.value or "").strip():
        raise ValueError("CHAN has no DATE")

    parsed = parse_date(date_node.value)
    if not isinstance(parsed, ExactDate) or parsed.day is None:
        raise ValueError(f"CHAN DATE is not a full date: {date_node.value!r}")

    hour = minute = second = 0
    time_value = (date_node.first_value("TIME") or "").strip()
    if time_value:
        match = TIME_PATTERN.match(time_value)
        if match is None:
            raise ValueError(f"CHAN TIME is not HH:MM[:SS]: {time_value!r}")
        hour, minute = int(match.group(1)), int(match.group(2))
        second = int(match.group(3) or 0)

    # datetime() itself rejects 31 FEB, 25:00 and the like
    return datetime(parsed.year, parsed.month, parsed.day, hour, minute, second)


def resolve_pointer(graph: ResolvedGraph, node: GEDCOMNode, expected_tag: str) -> str:
    """
    Return the bare id a pointer-valued child links to.

    Raises:
        UnresolvedReference: when the value is not a resolvable pointer.
        StructuralError: when the target record is not an ``expected_tag`` record.
    """
    target = graph.target_of(node)
    if target is None:
        raise UnresolvedReference(
            (node.value or "").strip("@ "),
            lineno=node.lineno,
            reason=f"{node.tag} does not name a declared record",
        )
    if target.tag != expected_tag:
        raise StructuralError(
            f"Line {node.lineno}: {node.tag} points to {target.pointer} "
            f"which is a {target.tag} record, expected {expected_tag}",
            lineno=node.lineno,
        )
    return target.xref_id


def creation_date(
    record: GEDCOMNode,
    entity_type: str,
    entity_id: str,
    findings: List[Finding],
) -> Optional[datetime]:
    """Read the record's CHAN timestamp, recording a finding when it is absent or bad."""
    chan = record.find_first("CHAN")
    if chan is None:
        findings.append(Finding.missing(entity_type, entity_id, "date_created"))
        return None
    try:
        return change_node_to_datetime(chan)
    except ValueError as exc:
        findings.append(Finding.invalid(entity_type, entity_id, "date_created", str(exc)))
        return None
