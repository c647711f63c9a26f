# pylint: disable=missing-module-docstring,missing-function-docstring

import json
from typing import Any

import pytest

from config import AppConfig
from observability import logger


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    lines: list[str] = []

    # Patch the explicit output sink used by logger
    monkeypatch.setattr(logger, "_print", lines.append)
    return lines


def test_log_event_emits_valid_jsonl(captured: list[str]) -> None:
    """
    - log_event emits exactly one JSONL line
    - leaf values are written as strings
    - output sink is patchable
    """
    payload: dict[str, Any] = {
        "event_type": "TEST",
        "value": 123,
    }

    logger.log_event(payload)

    assert len(captured) == 1
    assert "\n" not in captured[0]
    assert json.loads(captured[0]) == {"event_type": "TEST", "value": "123"}


def test_field_prefix_applies_to_top_level_only(captured: list[str]) -> None:
    logger.log_event(
        {"msg": "hi", "ctx": {"user": "u1"}},
        field_prefix="fld_",
    )

    assert json.loads(captured[0]) == {
        "fld_msg": "hi",
        "fld_ctx": {"user": "u1"},
    }


# ---------------------------------------------------------------------
# render_event shapes
# ---------------------------------------------------------------------

def test_render_nested_mappings_and_sequences() -> None:
    line = logger.render_event({
        "session": {"id": "s1", "flags": {"debug": False}},
        "turns": [{"role": "user"}, {"role": "assistant"}],
        "tags": ("a", "b"),
        "missing": None,
        "empty": [],
    })

    assert json.loads(line) == {
        "session": {"id": "s1", "flags": {"debug": "false"}},
        "turns": [{"role": "user"}, {"role": "assistant"}],
        "tags": [{"value": "a"}, {"value": "b"}],
        "missing": "",
        "empty": [{}],
    }


def test_render_exception_with_stack() -> None:
    try:
        raise ValueError("boom")
    except ValueError as exc:
        line = logger.render_event({"error": exc})

    decoded = json.loads(line)["error"]

    assert decoded["exClass"] == "builtins.ValueError"
    assert decoded["exMsg"] == "boom"
    assert decoded["stack"][-1]["method"] == "test_render_exception_with_stack"
    assert decoded["stack"][-1]["line"].isdigit()
    assert decoded["stack"][-1]["file"].endswith("test_observability_logger.py")


def test_render_exception_without_traceback_or_message() -> None:
    decoded = json.loads(logger.render_event({"error": KeyboardInterrupt()}))

    assert decoded == {"error": {"exClass": "builtins.KeyboardInterrupt"}}


# ---------------------------------------------------------------------
# Never raises
# ---------------------------------------------------------------------

class _Unprintable:
    def __str__(self) -> str:
        raise TypeError("no str for you")

    def __repr__(self) -> str:
        return "<_Unprintable>"


def test_log_event_falls_back_on_render_error(captured: list[str]) -> None:
    logger.log_event({"ts_ms": 5, "bad": _Unprintable()})

    assert len(captured) == 1
    decoded = json.loads(captured[0])
    assert decoded["ts_ms"] == "5"
    assert decoded["event_type"] == "LOGGER_SERIALIZATION_ERROR"
    assert decoded["error"] == "no str for you"
    assert "<_Unprintable>" in decoded["original_event_repr"]


class _Exploding:
    def __str__(self) -> str:
        raise RuntimeError("str failed")

    def __repr__(self) -> str:
        raise RuntimeError("repr failed")


def test_log_event_falls_back_on_any_str_failure(captured: list[str]) -> None:
    logger.log_event({"ts_ms": 7, "bad": _Exploding()})

    assert len(captured) == 1
    decoded = json.loads(captured[0])
    assert decoded["ts_ms"] == "7"
    assert decoded["event_type"] == "LOGGER_SERIALIZATION_ERROR"
    assert decoded["error"] == "str failed"
    assert decoded["original_event_repr"] == "<unprintable>"


def test_render_event_rejects_circular_mapping() -> None:
    event: dict[str, Any] = {"ts_ms": 1}
    event["self"] = event

    with pytest.raises(ValueError):
        logger.render_event(event)


def test_render_event_rejects_circular_list() -> None:
    items: list[Any] = []
    items.append(items)

    with pytest.raises(ValueError):
        logger.render_event({"items": items})


def test_render_event_allows_shared_non_circular_values() -> None:
    shared = {"id": "s1"}

    decoded = json.loads(logger.render_event({"a": shared, "b": [shared, shared]}))

    assert decoded == {"a": {"id": "s1"}, "b": [{"id": "s1"}, {"id": "s1"}]}


def test_log_event_falls_back_on_circular_reference(captured: list[str]) -> None:
    event: dict[str, Any] = {"ts_ms": 1}
    event["self"] = event

    logger.log_event(event)

    assert len(captured) == 1
    decoded = json.loads(captured[0])
    assert decoded["ts_ms"] == "1"
    assert decoded["event_type"] == "LOGGER_SERIALIZATION_ERROR"
    assert "{...}" in decoded["original_event_repr"]


# ---------------------------------------------------------------------
# EventLogger
# ---------------------------------------------------------------------

def test_event_logger_applies_config_prefix(captured: list[str]) -> None:
    event_logger = logger.EventLogger(AppConfig(field_prefix="app_"))

    event_logger.log({"msg": "hello"})

    assert json.loads(captured[0]) == {"app_msg": "hello"}


def test_event_logger_disabled(captured: list[str]) -> None:
    event_logger = logger.EventLogger(AppConfig(enable_json_logs=False))

    event_logger.log({"msg": "hello"})

    assert captured == []


def test_event_logger_level_threshold(captured: list[str]) -> None:
    event_logger = logger.EventLogger(AppConfig(log_level="WARNING", field_prefix=""))

    event_logger.log({"level": "debug", "msg": "dropped"})
    event_logger.log({"level": "INFO", "msg": "dropped"})
    event_logger.log({"level": "ERROR", "msg": "kept"})
    event_logger.log({"level": "custom", "msg": "kept"})
    event_logger.log({"msg": "kept"})

    assert [json.loads(line)["msg"] for line in captured] == ["kept", "kept", "kept"]
