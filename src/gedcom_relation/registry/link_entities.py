from __future__ import annotations

from gedcom_relation.logging import get_logger

from .entities import DomainModel

log = get_logger(__name__)


def link_entities(model: DomainModel) -> int:
    """
    Make family membership symmetric.

    A family that lists an individual as HUSB/WIFE/CHIL adds itself to that
    individual's FAMS/FAMC links when the individual record omitted them.
    Builders stay pure; this pass runs once every entity exists.

    Idempotent. Returns the number of links added.
    """
    added = 0
    for fam in model.families.values():
        for spouse_id in sorted(fam.spouse_ids):
            ind = model.individuals.get(spouse_id)
            if ind is not None and fam.id not in ind.families_as_spouse:
                ind.families_as_spouse.append(fam.id)
                added += 1

        for child_id in fam.child_ids:
            ind = model.individuals.get(child_id)
            if ind is not None and fam.id not in ind.families_as_child:
                ind.families_as_child.append(fam.id)
                added += 1

    if added:
        log.debug("Added %d implied family links", added)
    return added
