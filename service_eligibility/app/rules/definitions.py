"""
Eligibility rule definitions and their declared evaluation order.
"""

from typing import Tuple

from .models import OosCategory, Rule, RuleCondition, RuleConditionOperator
from .reference import ReferenceData

PARTY_RULE = "PartyRule"
INTRA_ENTITY_RULE = "IntraEntityRule"
PRODUCT_RULE = "ProductRule"
COMMODITY_EXCHANGE_TRADE_RULE = "CommodityExchangeTradeRule"
PARTY_RULE_NEXUS_ELIGIBILITY = "PartyRuleNexusEligibility"

# Exemptions first: a registered party's exempt trade must never come out eligible.
DEFAULT_RULE_ORDER: Tuple[str, ...] = (
    PARTY_RULE,
    INTRA_ENTITY_RULE,
    PRODUCT_RULE,
    COMMODITY_EXCHANGE_TRADE_RULE,
    PARTY_RULE_NEXUS_ELIGIBILITY,
)


def build_rules(reference: ReferenceData) -> Tuple[Rule, ...]:
    """Build the eligibility rules bound to the given reference data."""
    return (
        Rule(
            name=PARTY_RULE,
            eligible=False,
            oos_category=OosCategory.PARTY_EXEMPTION.value,
            description="Transacting party is not a recognized MAS entity",
            conditions=(
                RuleCondition(
                    field="in_mas_entities",
                    operator=RuleConditionOperator.IS_FALSE,
                    description="Party absent from the recognized-entities registry"
                ),
            )
        ),
        Rule(
            name=INTRA_ENTITY_RULE,
            eligible=False,
            oos_category=OosCategory.INTRA_ENTITY_EXEMPTION.value,
            description="Counterparties resolve to the same legal entity or group",
            conditions=(
                RuleCondition(field="intra_entity", operator=RuleConditionOperator.IS_TRUE),
            )
        ),
        Rule(
            name=PRODUCT_RULE,
            eligible=False,
            oos_category=OosCategory.PRODUCT_TYPE_EXEMPTION.value,
            description="Product type is excluded from reporting",
            conditions=(
                RuleCondition(
                    field="product_type",
                    operator=RuleConditionOperator.IN,
                    value=reference.excluded_product_types
                ),
            )
        ),
        Rule(
            name=COMMODITY_EXCHANGE_TRADE_RULE,
            eligible=False,
            oos_category=OosCategory.COMMODITY_EXEMPTION.value,
            description="Trade executed on a recognized commodity exchange",
            conditions=(
                RuleCondition(field="on_commodity_exchange", operator=RuleConditionOperator.IS_TRUE),
            )
        ),
        Rule(
            name=PARTY_RULE_NEXUS_ELIGIBILITY,
            eligible=True,
            oos_category=OosCategory.NEXUS_ELIGIBLE.value,
            description="Recognized MAS entity with a qualifying jurisdictional nexus",
            conditions=(
                RuleCondition(field="in_mas_entities", operator=RuleConditionOperator.IS_TRUE),
                RuleCondition(
                    field="nexus",
                    operator=RuleConditionOperator.INTERSECTS,
                    value=reference.qualifying_nexus,
                    description="At least one nexus indicator is a qualifying jurisdiction"
                ),
            )
        ),
    )
