"""JavaScript value types."""

from typing import Any, Optional, Union, TYPE_CHECKING
import math

if TYPE_CHECKING:
    from .objects import JSObject
    from .functions import JSFunction


class JSUndefined:
    """JavaScript undefined value (singleton)."""

    _instance: Optional["JSUndefined"] = None

    def __new__(cls) -> "JSUndefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __str__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


class JSNull:
    """JavaScript null value (singleton)."""

    _instance: Optional["JSNull"] = None

    def __new__(cls) -> "JSNull":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "null"

    def __str__(self) -> str:
        return "null"

    def __bool__(self) -> bool:
        return False


# Singleton instances
UNDEFINED = JSUndefined()
NULL = JSNull()


# Type alias for JavaScript values
JSValue = Union[
    JSUndefined,
    JSNull,
    bool,
    int,
    float,
    str,
    "JSObject",
    "JSFunction",
]


def is_nan(value: Any) -> bool:
    """Check if value is NaN."""
    return isinstance(value, float) and math.isnan(value)


def js_typeof(value: JSValue) -> str:
    """Return the JavaScript typeof for a value."""
    from .objects import JSObject
    from .functions import JSFunction

    if value is UNDEFINED:
        return "undefined"
    if value is NULL:
        return "object"  # JavaScript quirk
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, JSFunction):
        return "function"
    if isinstance(value, JSObject):
        return "object"
    return "undefined"


def to_boolean(value: JSValue) -> bool:
    """Convert a JavaScript value to boolean."""
    if value is UNDEFINED or value is NULL:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        if is_nan(value) or value == 0:
            return False
        return True
    if isinstance(value, str):
        return len(value) > 0
    # Objects are always truthy
    return True


def to_number(value: JSValue) -> Union[int, float]:
    """Convert a primitive JavaScript value to number.

    Objects go through Realm.to_number, which runs valueOf/toString first.
    """
    if value is UNDEFINED:
        return float("nan")
    if value is NULL:
        return 0
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        s = value.strip()
        if s == "":
            return 0
        try:
            if s.startswith("0x") or s.startswith("0X"):
                return int(s, 16)
            if s.startswith("0o") or s.startswith("0O"):
                return int(s, 8)
            if s.startswith("0b") or s.startswith("0B"):
                return int(s, 2)
            if "." in s or "e" in s.lower():
                return float(s)
            return int(s)
        except ValueError:
            return float("nan")
    return float("nan")


def to_string(value: JSValue) -> str:
    """Convert a primitive JavaScript value to string."""
    if value is UNDEFINED:
        return "undefined"
    if value is NULL:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if is_nan(value):
            return "NaN"
        if value == float("inf"):
            return "Infinity"
        if value == float("-inf"):
            return "-Infinity"
        # Handle -0
        if value == 0 and math.copysign(1, value) < 0:
            return "0"
        s = repr(value)
        if s.endswith(".0"):
            return s[:-2]
        return s
    if isinstance(value, str):
        return value
    return "[object Object]"


def same_value(a: Any, b: Any) -> bool:
    """JavaScript SameValue: NaN equals NaN, +0 and -0 differ, objects by identity."""
    if a is b:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return False
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        if is_nan(a) and is_nan(b):
            return True
        if a == 0 and b == 0:
            return math.copysign(1, a) == math.copysign(1, b)
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return False
