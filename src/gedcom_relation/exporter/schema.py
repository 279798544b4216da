"""
schema.py
Maps the domain model onto the relationship-data JSON schema.

The mapping is total: every domain field either lands in exactly one schema
field or is dropped on purpose (attributes, fact raw_children, fact values,
name variants other than given/surname). Fields the domain builder left
empty are omitted here rather than defaulted.

Document shape (PascalCase, this key order):

    Childs, FactTypes, Familys, MasterSources, Medias, Persons, SourceRepos
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from gedcom_relation.config import get_config
from gedcom_relation.dates import display_date
from gedcom_relation.events import Fact
from gedcom_relation.registry import DomainModel, Family, Individual, NameRecord, Sex

DATE_CREATED_FORMAT = "%Y-%m-%dT%H:%M:%S"

NAME_FACT_TAG = "NAME"

# Fact type codes keyed by GEDCOM tag. NAME (100) and BIRT (405) are the
# codes the schema owner publishes; the rest can be overridden through
# ``schema.fact_type_ids`` in the configuration.
DEFAULT_FACT_TYPE_IDS: Mapping[str, int] = MappingProxyType(
    {
        "NAME": 100,
        "BIRT": 405,
        "CHR": 406,
        "CHRA": 407,
        "BAPM": 408,
        "BARM": 409,
        "BASM": 410,
        "BLES": 411,
        "ADOP": 412,
        "CONF": 413,
        "FCOM": 414,
        "GRAD": 415,
        "ORDN": 416,
        "EMIG": 417,
        "IMMI": 418,
        "NATU": 419,
        "CENS": 420,
        "PROB": 421,
        "WILL": 422,
        "RETI": 423,
        "DEAT": 424,
        "BURI": 425,
        "CREM": 426,
        "RESI": 427,
        "OCCU": 428,
        "EVEN": 429,
        "MARR": 501,
        "MARB": 502,
        "MARC": 503,
        "MARL": 504,
        "MARS": 505,
        "ENGA": 506,
        "ANUL": 507,
        "DIV": 508,
        "DIVF": 509,
    }
)

GENDER_CODES: Mapping[Sex, int] = MappingProxyType(
    {Sex.MALE: 1, Sex.FEMALE: 2, Sex.OTHER: 3}
)

# Parent relationship code for every child link ("biological")
RELATIONSHIP_NATURAL = 1


class SchemaMapper:
    """
    Stateful per-document mapper: numeric ids are handed out in document
    order starting from the configured sequence starts.
    """

    def __init__(self, settings: Optional[Mapping[str, Any]] = None) -> None:
        settings = dict(get_config().schema if settings is None else settings)
        self.person_id_start = int(settings.get("person_id_start", 1))
        self.family_id_start = int(settings.get("family_id_start", 10001))
        self.child_id_start = int(settings.get("child_id_start", 1000001))

        fact_type_ids = dict(DEFAULT_FACT_TYPE_IDS)
        for tag, code in (settings.get("fact_type_ids") or {}).items():
            fact_type_ids[str(tag).upper()] = int(code)
        self.fact_type_ids: Mapping[str, int] = MappingProxyType(fact_type_ids)

        self.person_ids: Dict[str, int] = {}
        self.family_ids: Dict[str, int] = {}

    # ------------------------------------------------------------------
    # Atoms
    # ------------------------------------------------------------------

    def map_name(self, name: NameRecord) -> Dict[str, Any]:
        return {
            "FactTypeId": self.fact_type_ids[NAME_FACT_TAG],
            "GivenNames": name.given,
            "Surnames": name.surname,
        }

    def map_fact(self, fact: Fact) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if fact.date is not None:
            out["DateDetail"] = display_date(fact.date)
        out["FactTypeId"] = self.fact_type_ids[fact.tag]
        if fact.place is not None:
            out["Place"] = {"PlaceName": fact.place}
        out["Preferred"] = fact.preferred
        return out

    def _facts(self, facts: List[Fact]) -> List[Dict[str, Any]]:
        return [self.map_fact(f) for f in facts]

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    def map_person(self, individual: Individual) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if individual.date_created is not None:
            out["DateCreated"] = individual.date_created.strftime(DATE_CREATED_FORMAT)
        facts = self._facts(individual.facts)
        if facts:
            out["Facts"] = facts
        if individual.sex is not None:
            out["Gender"] = GENDER_CODES[individual.sex]
        out["Id"] = self.person_ids[individual.id]
        out["IsLiving"] = individual.is_living
        out["Names"] = [self.map_name(n) for n in individual.names]
        return out

    def map_family(self, family: Family) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if family.date_created is not None:
            out["DateCreated"] = family.date_created.strftime(DATE_CREATED_FORMAT)
        facts = self._facts(family.facts)
        if facts:
            out["Facts"] = facts
        if family.husband_id is not None:
            out["FatherId"] = self.person_ids[family.husband_id]
        out["Id"] = self.family_ids[family.id]
        if family.wife_id is not None:
            out["MotherId"] = self.person_ids[family.wife_id]
        return out

    def map_children(self, families: List[Family]) -> List[Dict[str, Any]]:
        childs: List[Dict[str, Any]] = []
        next_id = self.child_id_start
        for family in families:
            for child_id in family.child_ids:
                childs.append(
                    {
                        "ChildId": self.person_ids[child_id],
                        "FamilyId": self.family_ids[family.id],
                        "Id": next_id,
                        "RelationshipToFather": RELATIONSHIP_NATURAL,
                        "RelationshipToMother": RELATIONSHIP_NATURAL,
                    }
                )
                next_id += 1
        return childs

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    def map_document(self, model: DomainModel) -> Dict[str, Any]:
        individuals = list(model.individuals.values())
        families = list(model.families.values())

        self.person_ids = {
            ind.id: n for n, ind in enumerate(individuals, start=self.person_id_start)
        }
        self.family_ids = {
            fam.id: n for n, fam in enumerate(families, start=self.family_id_start)
        }

        return {
            "Childs": self.map_children(families),
            "FactTypes": [],
            "Familys": [self.map_family(f) for f in families],
            "MasterSources": [],
            "Medias": [],
            "Persons": [self.map_person(i) for i in individuals],
            "SourceRepos": [],
        }


def map_to_schema(model: DomainModel, settings: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Map ``model`` to the schema document using ``settings`` (default: config ``schema``)."""
    return SchemaMapper(settings).map_document(model)
