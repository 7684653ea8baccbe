"""
Tests for the evaluate_payloads script.
"""

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "evaluate_payloads.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("evaluate_payloads", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep stray settings and .env files out of the script run; register the sample party."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ELIGIBILITY_STRICT_MATCHING", raising=False)
    monkeypatch.delenv("ELIGIBILITY_REFERENCE_DATA_FILE", raising=False)
    monkeypatch.setenv("ELIGIBILITY_MAS_ENTITIES", '["Y"]')


def test_prints_pretty_results(script, fixtures_dir, capsys):
    exit_code = script.main([
        str(fixtures_dir / "sample-input-1.json"),
        str(fixtures_dir / "sample-input-2.json"),
    ])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert '  "matchedRule": "PartyRule"' in out
    assert '  "matchedRule": "PartyRuleNexusEligibility"' in out


def test_invalid_payload_fails(script, tmp_path, capsys):
    payload = tmp_path / "bad.json"
    payload.write_text(json.dumps({"inMasEntities": True}))

    exit_code = script.main([str(payload)])

    err = capsys.readouterr().err
    assert exit_code == 1
    assert "VALIDATION_ERROR" in err


def test_missing_file_fails(script, tmp_path, capsys):
    exit_code = script.main([str(tmp_path / "absent.json")])

    assert exit_code == 1
    assert "absent.json" in capsys.readouterr().err


def test_strict_flag(script, tmp_path, capsys):
    payload = tmp_path / "no-nexus.json"
    payload.write_text(json.dumps({"party": "Y", "nexus": "Japan"}))

    assert script.main([str(payload)]) == 0
    assert script.main(["--strict", str(payload)]) == 1
    assert "NO_RULE_MATCHED" in capsys.readouterr().err


def test_bad_reference_data(script, fixtures_dir, tmp_path, capsys):
    exit_code = script.main([
        "--reference-data", str(tmp_path / "absent.yaml"),
        str(fixtures_dir / "sample-input-1.json"),
    ])

    assert exit_code == 2
    assert "CONFIGURATION_ERROR" in capsys.readouterr().err


def test_undecodable_file_fails_and_continues(script, fixtures_dir, tmp_path, capsys):
    payload = tmp_path / "latin1.json"
    payload.write_bytes(b'{"party": "\xff"}')

    exit_code = script.main([str(payload), str(fixtures_dir / "sample-input-2.json")])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "VALIDATION_ERROR" in captured.err
    assert '  "matchedRule": "PartyRuleNexusEligibility"' in captured.out
