"""Tests for bytecode parser discovery."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from dv_common.errors import ConfigurationError
from dv_core import parsers
from dv_core.parsers import PARSER_ENTRYPOINT_GROUP, load_parser
from tests.helpers.sample_model import FakeParser


pytestmark = pytest.mark.unit_core


def _entry_point(name: str, loaded=None, error: Exception | None = None) -> MagicMock:
    entry_point = MagicMock()
    entry_point.name = name
    if error is not None:
        entry_point.load.side_effect = error
    else:
        entry_point.load.return_value = loaded
    return entry_point


def test_no_parser_installed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(parsers, "discover_entrypoints", lambda group: {})

    with pytest.raises(ConfigurationError, match="No bytecode parser installed") as excinfo:
        load_parser()

    assert excinfo.value.context["entry_point_group"] == PARSER_ENTRYPOINT_GROUP


def test_first_loadable_parser_in_name_order(monkeypatch: pytest.MonkeyPatch) -> None:
    instance = FakeParser()
    pending = {
        "zeta": _entry_point("zeta", FakeParser()),
        "alpha": _entry_point("alpha", error=ImportError("missing dep")),
        "beta": _entry_point("beta", instance),
    }
    monkeypatch.setattr(parsers, "discover_entrypoints", lambda group: pending)

    assert load_parser() is instance


def test_class_entry_point_is_instantiated(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        parsers, "discover_entrypoints", lambda group: {"fake": _entry_point("fake", FakeParser)}
    )

    assert isinstance(load_parser(), FakeParser)


def test_named_parser(monkeypatch: pytest.MonkeyPatch) -> None:
    wanted = FakeParser()
    pending = {
        "alpha": _entry_point("alpha", FakeParser()),
        "wanted": _entry_point("wanted", wanted),
    }
    monkeypatch.setattr(parsers, "discover_entrypoints", lambda group: pending)

    assert load_parser("wanted") is wanted
    with pytest.raises(ConfigurationError, match="'missing' not available"):
        load_parser("missing")


def test_object_without_parse_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        parsers, "discover_entrypoints", lambda group: {"bogus": _entry_point("bogus", object())}
    )

    with pytest.raises(ConfigurationError):
        load_parser()
