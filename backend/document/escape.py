"""
RFC 4627 string escaping.

Shared by field names and values. Total function: never raises.
"""

from __future__ import annotations

from typing import Optional

from constants import CONTROL_CHAR_LIMIT, EMPTY_STRING_TOKEN, SHORT_ESCAPES


def escape(raw: Optional[str]) -> str:
    """
    Return `raw` as a quoted JSON string literal.

    - `\\` and `"` get a leading backslash
    - `/` gets a leading backslash only directly after `<`
      (keeps `</script>` out of JSON embedded in HTML)
    - \\b \\t \\n \\f \\r use their short escapes
    - other characters below U+0020 become \\u00xx
    - None and "" both become `""`
    """
    if not raw:
        return EMPTY_STRING_TOKEN

    out: list[str] = ['"']
    prev = ""

    for char in raw:
        if char in ('\\', '"'):
            out.append("\\" + char)
        elif char == "/":
            out.append("\\/" if prev == "<" else "/")
        elif char in SHORT_ESCAPES:
            out.append(SHORT_ESCAPES[char])
        elif char < CONTROL_CHAR_LIMIT:
            out.append(f"\\u{ord(char):04x}")
        else:
            out.append(char)
        prev = char

    out.append('"')
    return "".join(out)
