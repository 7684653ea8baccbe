"""
Derives the evaluation facts the eligibility rules are written against.
"""

from typing import Any, Dict, Optional

from .models import EligibilityRequest, EvaluationContext
from .reference import ReferenceData, normalize


def _same(left: Optional[str], right: Optional[str]) -> bool:
    """Both identifiers present and equal, ignoring case."""
    if not left or not right:
        return False
    return normalize(left) == normalize(right)


def is_intra_entity(request: EligibilityRequest) -> bool:
    if request.intra_entity:
        return True
    return (
        _same(request.party, request.counterparty)
        or _same(request.party_legal_entity, request.counterparty_legal_entity)
        or _same(request.party_group, request.counterparty_group)
    )


def derive_facts(request: EligibilityRequest, reference: ReferenceData) -> Dict[str, Any]:
    if request.in_mas_entities is not None:
        in_mas_entities = request.in_mas_entities
    else:
        in_mas_entities = reference.is_recognized_entity(request.party)

    nexus = tuple(normalize(n) for n in request.nexus)

    return {
        "party": request.party,
        "in_mas_entities": in_mas_entities,
        "nexus": nexus,
        "intra_entity": is_intra_entity(request),
        "product_type": normalize(request.product_type),
        "execution_venue": normalize(request.execution_venue),
        "on_commodity_exchange": bool(request.commodity_exchange_trade)
        or reference.is_commodity_exchange(request.execution_venue),
        "request": request.model_dump(by_alias=True),
    }


def build_context(request: EligibilityRequest, reference: ReferenceData) -> EvaluationContext:
    """Build an evaluation context for a validated request."""
    return EvaluationContext(request=request, facts=derive_facts(request, reference))
