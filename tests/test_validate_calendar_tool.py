"""Tests for tools/validate_calendar.py."""

import importlib.util
import sys
from pathlib import Path

import pytest

_TOOL_PATH = Path(__file__).resolve().parent.parent / "tools" / "validate_calendar.py"


@pytest.fixture(scope="module")
def tool():
    spec = importlib.util.spec_from_file_location("validate_calendar", _TOOL_PATH)
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


def test_published_easter_all_pass(tool, cache):
    results = tool.check_published_easter(cache)
    assert results
    assert all(r.passed for r in results), [r.description for r in results if not r.passed]


def test_church_calendar_all_pass(tool, cache):
    results = tool.check_church_calendar(cache)
    assert any(r.description == "Easter 2025" for r in results)
    assert all(r.passed for r in results), [r.description for r in results if not r.passed]


def test_plausibility_has_no_failures(tool, cache):
    assert tool.check_easter_plausibility(cache) == []


def test_main_quiet(tool, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["validate_calendar.py", "--quiet"])
    tool.main()
    out = capsys.readouterr().out
    assert "PASS: all 131 years fall between March 22 and April 25" in out
    assert "FAIL" not in out
