"""
Rule data models for the eligibility engine.
"""

from typing import Dict, Any, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OosCategory(str, Enum):
    """Out-of-scope category codes attached to rule outcomes."""
    PARTY_EXEMPTION = "PARTY_EXEMPTION"
    NEXUS_ELIGIBLE = "NEXUS_ELIGIBLE"
    INTRA_ENTITY_EXEMPTION = "INTRA_ENTITY_EXEMPTION"
    PRODUCT_TYPE_EXEMPTION = "PRODUCT_TYPE_EXEMPTION"
    COMMODITY_EXEMPTION = "COMMODITY_EXEMPTION"
    NO_NEXUS = "NO_NEXUS"


class RuleConditionOperator(str, Enum):
    """Rule condition operators."""
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    IN = "in"
    NOT_IN = "not_in"
    INTERSECTS = "intersects"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    IS_TRUE = "is_true"
    IS_FALSE = "is_false"


@dataclass(frozen=True)
class RuleCondition:
    """Rule condition."""
    field: str
    operator: RuleConditionOperator
    value: Any = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Rule:
    """Eligibility rule: all conditions must hold for the outcome to apply."""
    name: str
    eligible: bool
    oos_category: Optional[str]
    conditions: Tuple[RuleCondition, ...] = ()
    description: Optional[str] = None

    def to_result(self) -> "EligibilityResult":
        return EligibilityResult(
            eligible=self.eligible,
            oos_category=self.oos_category,
            matched_rule=self.name
        )


class EligibilityRequest(BaseModel):
    """Typed view of an eligibility request payload."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore"
    )

    party: str = Field(..., min_length=1, description="Transacting party identifier")
    in_mas_entities: Optional[bool] = Field(None, alias="inMasEntities", description="Caller-asserted registry membership")
    nexus: Tuple[str, ...] = Field(default_factory=tuple, description="Jurisdictional nexus indicators")
    counterparty: Optional[str] = Field(None, description="Counterparty identifier")
    party_legal_entity: Optional[str] = Field(None, alias="partyLegalEntity")
    counterparty_legal_entity: Optional[str] = Field(None, alias="counterpartyLegalEntity")
    party_group: Optional[str] = Field(None, alias="partyGroup")
    counterparty_group: Optional[str] = Field(None, alias="counterpartyGroup")
    intra_entity: Optional[bool] = Field(None, alias="intraEntity")
    product_type: Optional[str] = Field(None, alias="productType")
    execution_venue: Optional[str] = Field(None, alias="executionVenue")
    commodity_exchange_trade: Optional[bool] = Field(None, alias="commodityExchangeTrade")

    @field_validator("nexus", mode="before")
    @classmethod
    def _coerce_nexus(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value


class EligibilityResult(BaseModel):
    """Outcome of an eligibility evaluation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    eligible: bool = Field(..., description="Whether the transaction is eligible")
    oos_category: Optional[str] = Field(None, alias="oosCategory", description="Out-of-scope category code")
    matched_rule: str = Field(..., alias="matchedRule", description="Name of the rule that produced the result")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_json(self, pretty: bool = True) -> str:
        """Serialize with wire field names, indented for audit logs by default."""
        return self.model_dump_json(by_alias=True, indent=2 if pretty else None)


@dataclass(frozen=True)
class EvaluationContext:
    """Context for rule evaluation."""
    request: EligibilityRequest
    facts: Dict[str, Any] = field(default_factory=dict)
