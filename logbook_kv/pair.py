"""
Key/value pair rendering for single-line log output.

A Pair holds one ``key="value"`` contribution. Keys are sanitized down to
``[A-Za-z0-9_.]`` and values are stringified and cleaned so that no quote or
newline from user data can break the line apart.

Example:
    pair = Pair.of("user", "O'Brien")
    pair.render_key_fragment()   # 'user="{}"'
    pair.render_string_values()  # ['OBrien']
"""

from __future__ import annotations

import array
import re
from collections import deque
from dataclasses import dataclass, field
from typing import Any

NULL = "null"
PLACEHOLDER = "{}"

_KEY_STRIP_RE = re.compile(r"[^A-Za-z0-9_.]")
_COLLECTION_TYPES = (list, tuple, set, frozenset, deque, range, bytes, bytearray, array.array)


def sanitize_key(key: str) -> str:
    """Remove every character outside ``[A-Za-z0-9_.]``."""
    return _KEY_STRIP_RE.sub("", key)


def clean_value(value: str) -> str:
    """Drop quotes, fold newlines into spaces and trim."""
    return value.replace("'", "").replace('"', "").replace("\n", " ").strip()


def _stringify(value: Any) -> str:
    if value is None:
        return NULL
    if isinstance(value, _COLLECTION_TYPES):
        return "[" + ", ".join(_stringify(item) for item in value) + "]"
    return str(value)


@dataclass(frozen=True)
class Pair:
    """One key/value(s) contribution to a log line."""

    key: str | None
    value_format: str | None = None
    values: tuple[Any, ...] | None = field(default=None)

    def __post_init__(self) -> None:
        # frozen: normalize through object.__setattr__
        if self.key is None:
            object.__setattr__(self, "key", NULL)
        elif not isinstance(self.key, str):
            object.__setattr__(self, "key", str(self.key))
        if self.value_format is None:
            object.__setattr__(self, "value_format", PLACEHOLDER)
        if self.values is None:
            object.__setattr__(self, "values", ())
        elif not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))

    @classmethod
    def of(cls, key: str | None, value: Any) -> Pair:
        """Single value with the default placeholder format."""
        return cls(key, PLACEHOLDER, (value,))

    @property
    def clean_key(self) -> str:
        return sanitize_key(self.key)

    def is_valid(self) -> bool:
        return self.clean_key != ""

    def render_key_fragment(self) -> str:
        return f'{self.clean_key}="{self.value_format}"'

    def render_string_values(self) -> list[str]:
        return [clean_value(_stringify(value)) for value in self.values]
