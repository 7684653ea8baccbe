"""
Shared fixtures for eligibility tests.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from shared.config import EligibilitySettings
from service_eligibility.app.rules.reference import ReferenceData
from service_eligibility.app.service import EligibilityService

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def load_payload():
    """Load a JSON payload from the fixtures directory."""
    def _load(name: str) -> Dict[str, Any]:
        with open(FIXTURES_DIR / name, "r") as f:
            return json.load(f)
    return _load


@pytest.fixture
def settings():
    """Settings isolated from the process environment, with the sample parties registered."""
    return EligibilitySettings(
        _env_file=None,
        reference_data_file=None,
        strict_matching=False,
        mas_entities=["Y", "DBS BANK LTD"]
    )


@pytest.fixture
def reference_data(settings):
    return ReferenceData.from_settings(settings)


@pytest.fixture
def service(settings):
    """Create EligibilityService instance."""
    return EligibilityService(settings)
