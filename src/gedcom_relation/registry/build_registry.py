from __future__ import annotations

from gedcom_relation.logging import get_logger
from gedcom_relation.xref import ResolvedGraph

from .build_family import build_family
from .build_individual import build_individual
from .entities import DomainModel
from .link_entities import link_entities

log = get_logger(__name__)


def build_domain_model(graph: ResolvedGraph) -> DomainModel:
    """
    Build every Individual and Family of a resolved document.

    Record type comes from the tag (INDI / FAM), never from position. Other
    top-level records (HEAD, SUBM, SOUR, NOTE, TRLR, ...) are not modeled.
    Findings from all builders accumulate on the returned model.
    """
    model = DomainModel()

    for node in graph.records:
        if node.tag == "INDI":
            model.register_individual(build_individual(node, graph, model.findings))
        elif node.tag == "FAM":
            model.register_family(build_family(node, graph, model.findings))

    link_entities(model)

    log.debug(
        "Built %d individuals, %d families, %d facts (%d findings)",
        len(model.individuals),
        len(model.families),
        model.fact_count,
        len(model.findings),
    )
    return model
