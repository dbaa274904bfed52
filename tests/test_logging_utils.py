"""Unit tests for shared logging helpers."""

import logging

from common.logging_utils import Timer, configure_logging, extra_context, is_debug_enabled, redact, safe_url


def test_safe_url_masks_userinfo():
    assert safe_url("https://user:pw@repo.example/maven2") == "https://***@repo.example/maven2"


def test_safe_url_masks_token_query():
    assert safe_url("https://repo.example/x?token=abc&page=2") == "https://repo.example/x?token=***&page=2"


def test_redact():
    assert redact("password=hunter2") == "password=***"
    assert redact("") == ""


def test_extra_context_drops_none():
    assert extra_context(event="x", target=None) == {"event": "x"}


def test_timer_measures_duration():
    with Timer() as t:
        pass
    assert t.duration_ms() >= 0


def test_configure_logging_sets_level(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "level", root.level)
    configure_logging("DEBUG")
    assert is_debug_enabled(logging.getLogger("versioning.calculator"))
    configure_logging("WARNING")
    assert not is_debug_enabled(logging.getLogger("versioning.calculator"))
