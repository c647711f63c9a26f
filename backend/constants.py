"""
CONSTANTS
---------
Single source of truth for every literal the document builder relies on.

Rules:
- If changing a value changes rendered output, it belongs here.
- No delimiter or skeleton literals elsewhere in the codebase.
- Other modules MUST import from this file.
"""

from __future__ import annotations

from typing import Final, Mapping

# =============================================================================
# Skeletons
# =============================================================================

# A fresh object document: cursor sits on the closing brace.
OBJECT_SKELETON: Final[str] = "{}"

# Arrays always hold objects, so an array is born with one empty element.
ARRAY_SKELETON: Final[str] = "[{}]"

# Distance from the end of a freshly inserted skeleton back to the point
# where the next insertion belongs.
OBJECT_CURSOR_OFFSET: Final[int] = 1
ARRAY_CURSOR_OFFSET: Final[int] = 2

# =============================================================================
# Separators / delimiters
# =============================================================================

KV_SEPARATOR: Final[str] = ":"
ELEMENT_SEPARATOR: Final[str] = ","

OBJECT_CLOSE: Final[str] = "}"
ARRAY_CLOSE: Final[str] = "]"

# =============================================================================
# String escaping (RFC 4627)
# =============================================================================

EMPTY_STRING_TOKEN: Final[str] = '""'

SHORT_ESCAPES: Final[Mapping[str, str]] = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}

# Characters below this code point without a short escape become \u00xx
CONTROL_CHAR_LIMIT: Final[str] = " "

# =============================================================================
# Configuration defaults
# =============================================================================

DEFAULT_ENV: Final[str] = "dev"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_FIELD_PREFIX: Final[str] = "fld_"

# Ordered lowest -> highest
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# =============================================================================
# Event field keys (observability.logger)
# =============================================================================

KEY_LEVEL: Final[str] = "level"
KEY_EXCEPTION_CLASS: Final[str] = "exClass"
KEY_EXCEPTION_MSG: Final[str] = "exMsg"
KEY_STACK: Final[str] = "stack"
KEY_STACK_FILE: Final[str] = "file"
KEY_STACK_METHOD: Final[str] = "method"
KEY_STACK_LINE: Final[str] = "line"

# Field name for non-mapping items rendered as array elements
KEY_ITEM_VALUE: Final[str] = "value"

# Stand-in for values whose str()/repr() raises inside the logger fallback
UNPRINTABLE: Final[str] = "<unprintable>"
