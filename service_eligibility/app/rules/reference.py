"""
Reference data consulted while deriving evaluation facts.

Holds the recognized-entities registry (MAS entity list), the jurisdictions
that count as a qualifying nexus, the excluded product types and the
recognized commodity exchanges. All values are upper-cased on construction
so lookups are case-insensitive.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, Optional, Union

import yaml

from shared.config import EligibilitySettings
from shared.errors import ConfigurationError
from shared.logging import get_logger

logger = get_logger("eligibility.reference")

REFERENCE_KEYS = (
    "mas_entities",
    "qualifying_nexus",
    "excluded_product_types",
    "commodity_exchanges",
)


def normalize(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip().upper()


def _normalize_all(values: Iterable[str]) -> FrozenSet[str]:
    return frozenset(normalize(v) for v in values)


@dataclass(frozen=True)
class ReferenceData:
    """Immutable reference lists used by the eligibility rules."""
    mas_entities: FrozenSet[str]
    qualifying_nexus: FrozenSet[str]
    excluded_product_types: FrozenSet[str]
    commodity_exchanges: FrozenSet[str]

    def __post_init__(self):
        for key in REFERENCE_KEYS:
            object.__setattr__(self, key, _normalize_all(getattr(self, key)))

    def is_recognized_entity(self, party: str) -> bool:
        return normalize(party) in self.mas_entities

    def is_commodity_exchange(self, venue: Optional[str]) -> bool:
        return venue is not None and normalize(venue) in self.commodity_exchanges

    @classmethod
    def from_settings(cls, settings: EligibilitySettings) -> "ReferenceData":
        """Build reference data from settings, applying the YAML override file if configured."""
        if settings.reference_data_file:
            return load_reference_data(settings.reference_data_file, defaults=settings)

        return cls(
            mas_entities=settings.mas_entities,
            qualifying_nexus=settings.qualifying_nexus,
            excluded_product_types=settings.excluded_product_types,
            commodity_exchanges=settings.commodity_exchanges,
        )


def load_reference_data(
    path: Union[str, Path],
    defaults: Optional[EligibilitySettings] = None
) -> ReferenceData:
    """Load reference data from a YAML document.

    Keys missing from the document fall back to ``defaults`` when given;
    otherwise every key in ``REFERENCE_KEYS`` is required.
    """
    path = Path(path)
    try:
        with open(path, "r") as f:
            document = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(
            "Reference data file could not be read",
            {"path": str(path), "error": str(e)}
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            "Reference data file is not valid YAML",
            {"path": str(path), "error": str(e)}
        ) from e

    if not isinstance(document, dict):
        raise ConfigurationError("Reference data must be a mapping", {"path": str(path)})

    unknown = sorted(set(document) - set(REFERENCE_KEYS))
    if unknown:
        raise ConfigurationError("Unknown reference data keys", {"path": str(path), "keys": unknown})

    values: Dict[str, Any] = {}
    for key in REFERENCE_KEYS:
        if key in document:
            entries = document[key]
            if not isinstance(entries, list) or not all(isinstance(e, str) for e in entries):
                raise ConfigurationError(
                    "Reference data entries must be lists of strings",
                    {"path": str(path), "key": key}
                )
            values[key] = entries
        elif defaults is not None:
            values[key] = getattr(defaults, key)
        else:
            raise ConfigurationError("Missing reference data key", {"path": str(path), "key": key})

    reference = ReferenceData(**values)
    logger.info(
        "Reference data loaded",
        path=str(path),
        mas_entities=len(reference.mas_entities),
        excluded_product_types=len(reference.excluded_product_types),
        commodity_exchanges=len(reference.commodity_exchanges)
    )
    return reference
