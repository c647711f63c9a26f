"""
JSONL event logger.

- Write one JSON object per line
- Output to stdout
- No buffering, no batching
- Events are rendered with document.builder, not a general JSON encoder,
  so every leaf value is written as a JSON string
"""

from __future__ import annotations

import sys
import traceback
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping

from config import AppConfig
from constants import (
    KEY_EXCEPTION_CLASS,
    KEY_EXCEPTION_MSG,
    KEY_ITEM_VALUE,
    KEY_LEVEL,
    KEY_STACK,
    KEY_STACK_FILE,
    KEY_STACK_LINE,
    KEY_STACK_METHOD,
    LOG_LEVELS,
    UNPRINTABLE,
)
from document.builder import Document
from document.converter import write_array


# ------------------------------------------------------------------
# Explicit output sink (patchable in tests)
# ------------------------------------------------------------------

def _stdout_print(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()

_print: Callable[[str], None] = _stdout_print


# ------------------------------------------------------------------
# Rendering
# ------------------------------------------------------------------

def render_event(event: Mapping[str, Any], *, field_prefix: str = "") -> str:
    """
    Render an event mapping as a single-line JSON object.

    - Top-level keys get `field_prefix`; nested keys do not
    - Mappings become nested objects
    - Lists/tuples become arrays; mapping items contribute their fields,
      anything else a single "value" field
    - Exceptions become {"exClass", "exMsg", "stack": [{file, method, line}]}
    - Everything else is written via Document.element()

    Raises ValueError on a circular reference.
    """
    document = Document.new_object()
    _write_fields(document, event, field_prefix, set())
    return document.render()


def _write_fields(
    document: Document,
    fields: Mapping[Any, Any],
    prefix: str,
    seen: set[int],
) -> None:
    with _visiting(fields, seen):
        for key, value in fields.items():
            _write_value(document, f"{prefix}{key}", value, seen)


def _write_value(document: Document, name: str, value: Any, seen: set[int]) -> None:
    if isinstance(value, Mapping):
        document.begin_object(name)
        _write_fields(document, value, "", seen)
        document.close()
    elif isinstance(value, BaseException):
        _write_exception(document, name, value)
    elif isinstance(value, (list, tuple)):
        with _visiting(value, seen):
            write_array(
                document,
                name,
                lambda element, item: _write_item(element, item, seen),
                value,
            )
    else:
        document.element(name, value)


def _write_item(document: Document, item: Any, seen: set[int]) -> None:
    if isinstance(item, Mapping):
        _write_fields(document, item, "", seen)
    else:
        _write_value(document, KEY_ITEM_VALUE, item, seen)


@contextmanager
def _visiting(container: Any, seen: set[int]) -> Iterator[None]:
    """Track containers on the current path; a repeat is a cycle."""
    marker = id(container)
    if marker in seen:
        raise ValueError("Circular reference detected")

    seen.add(marker)
    try:
        yield
    finally:
        seen.discard(marker)


def _write_exception(document: Document, name: str, exc: BaseException) -> None:
    exc_type = type(exc)
    document.begin_object(name)
    document.element(KEY_EXCEPTION_CLASS, f"{exc_type.__module__}.{exc_type.__qualname__}")

    message = str(exc)
    if message:
        document.element(KEY_EXCEPTION_MSG, message)

    # Class name alone when there is no traceback
    frames = traceback.extract_tb(exc.__traceback__)
    if frames:
        write_array(document, KEY_STACK, _write_stack_frame, frames)

    document.close()


def _write_stack_frame(document: Document, frame: traceback.FrameSummary) -> None:
    document.element(KEY_STACK_FILE, frame.filename)
    document.element(KEY_STACK_METHOD, frame.name)
    document.element(KEY_STACK_LINE, frame.lineno)


# ------------------------------------------------------------------
# Emitting
# ------------------------------------------------------------------

def log_event(event: Mapping[str, Any], *, field_prefix: str = "") -> None:
    """
    Write a single JSONL event to stdout.

    The caller is responsible for:
    - Supplying a fully-formed event dict

    This function:
    - Renders the event through the document builder
    - Writes exactly one line
    - Flushes immediately (no buffering)
    - Never raises
    """
    try:
        line = render_event(event, field_prefix=field_prefix)
    except Exception as e:  # pylint: disable=broad-exception-caught
        # Last-resort fallback: logging must never crash the caller
        line = _fallback_line(event, e)

    _print(line)


def _fallback_line(event: Mapping[str, Any], error: Exception) -> str:
    fallback = Document.new_object()
    fallback.element("ts_ms", _safe_text(lambda: event.get("ts_ms")))
    fallback.element("event_type", "LOGGER_SERIALIZATION_ERROR")
    fallback.element("error", _safe_text(lambda: error))
    fallback.element("original_event_repr", _safe_text(lambda: repr(event)))
    return fallback.render()


def _safe_text(produce: Callable[[], Any]) -> str:
    try:
        value = produce()
        return "" if value is None else str(value)
    except Exception:  # pylint: disable=broad-exception-caught
        return UNPRINTABLE


class EventLogger:
    """
    log_event bound to an AppConfig.

    - Drops everything when enable_json_logs is off
    - Drops events whose "level" ranks below config.log_level
      (events without a recognised level are always written)
    - Applies config.field_prefix to top-level keys
    """

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._threshold = LOG_LEVELS.index(config.log_level)

    def log(self, event: Mapping[str, Any]) -> None:
        if not self._config.enable_json_logs:
            return

        if not self.is_enabled_for(event.get(KEY_LEVEL)):
            return

        log_event(event, field_prefix=self._config.field_prefix)

    def is_enabled_for(self, level: Any) -> bool:
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            return True
        return LOG_LEVELS.index(level.upper()) >= self._threshold
