"""
Field mapper: reshapes a form payload into a Zoho Creator record.

`map_submission` is pure and total. Fields without data are omitted rather
than sent as null, and binaries never appear inline (they go through the
upload channel keyed by record id + field name).
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Union

from src.integrations.contracts.interfaces import FormPayload, FormVariant
from src.integrations.zoho.concept_fields import CONCEPT_RULES
from src.integrations.zoho.field_rules import FieldRule, apply_rules
from src.integrations.zoho.proposal_fields import PROPOSAL_RULES

logger = logging.getLogger(__name__)

ExternalRecord = Dict[str, Any]

_RULES_BY_VARIANT: Dict[FormVariant, List[FieldRule]] = {
    FormVariant.CONCEPT: CONCEPT_RULES,
    FormVariant.PROPOSAL: PROPOSAL_RULES,
    FormVariant.COMMUNITY_PROPOSAL: PROPOSAL_RULES,
}


def rules_for(variant: Union[FormVariant, str]) -> List[FieldRule]:
    return _RULES_BY_VARIANT[FormVariant(variant)]


def map_submission(payload: Union[FormPayload, Mapping[str, Any], None], variant: Union[FormVariant, str]) -> ExternalRecord:
    if not isinstance(payload, FormPayload):
        payload = FormPayload(payload if isinstance(payload, Mapping) else None)
    record = apply_rules(payload, rules_for(variant))
    logger.debug("Mapped %s payload: %d source keys -> %d Zoho fields", FormVariant(variant).value, len(payload), len(record))
    return record


def map_concept(payload: Mapping[str, Any]) -> ExternalRecord:
    return map_submission(payload, FormVariant.CONCEPT)


def map_proposal(payload: Mapping[str, Any]) -> ExternalRecord:
    return map_submission(payload, FormVariant.PROPOSAL)
