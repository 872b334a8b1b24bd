"""Options validation and environment parsing."""

from __future__ import annotations

import pytest

from chatgate.errors import ConfigurationError, InvalidOptionError
from chatgate.options import Options, options_from_env, read_thinking_env

pytestmark = pytest.mark.unit


def test_defaults() -> None:
    opts = Options()
    assert opts.web_search is False
    assert opts.thinking is None


@pytest.mark.parametrize("mode", ["disabled", "enabled", "auto"])
def test_thinking_modes_accepted(mode: str) -> None:
    assert Options(thinking=mode).thinking == mode  # type: ignore[arg-type]


@pytest.mark.parametrize("mode", ["Enabled", "high", ""])
def test_out_of_enum_thinking_rejected(mode: str) -> None:
    with pytest.raises(InvalidOptionError, match="thinking") as exc:
        Options(thinking=mode)  # type: ignore[arg-type]
    assert isinstance(exc.value, ConfigurationError)


def test_web_search_must_be_bool() -> None:
    with pytest.raises(InvalidOptionError, match="web_search"):
        Options(web_search="yes")  # type: ignore[arg-type]


def test_coerce_accepts_mapping_and_none() -> None:
    assert Options.coerce(None) == Options()
    assert Options.coerce({"web_search": True}) == Options(web_search=True)
    same = Options(thinking="auto")
    assert Options.coerce(same) is same


def test_coerce_rejects_unknown_keys() -> None:
    with pytest.raises(InvalidOptionError, match="webSearch"):
        Options.coerce({"webSearch": True})


def test_read_thinking_env_normalizes(monkeypatch) -> None:
    monkeypatch.setenv("AI_THINKING", "  Auto ")
    assert read_thinking_env("AI_THINKING") == "auto"


def test_read_thinking_env_unset_or_empty(monkeypatch) -> None:
    assert read_thinking_env("AI_THINKING") is None
    monkeypatch.setenv("AI_THINKING", "")
    assert read_thinking_env("AI_THINKING") is None


def test_read_thinking_env_rejects_unknown(monkeypatch) -> None:
    monkeypatch.setenv("AI_THINKING", "turbo")
    with pytest.raises(InvalidOptionError, match="AI_THINKING"):
        read_thinking_env("AI_THINKING")


def test_options_from_env(monkeypatch) -> None:
    monkeypatch.setenv("AI_WEB_SEARCH", "true")
    monkeypatch.setenv("AI_THINKING", "enabled")

    assert options_from_env() == Options(web_search=True, thinking="enabled")


def test_options_from_env_rejects_bad_flag(monkeypatch) -> None:
    monkeypatch.setenv("AI_WEB_SEARCH", "sometimes")
    with pytest.raises(InvalidOptionError, match="AI_WEB_SEARCH"):
        options_from_env()
