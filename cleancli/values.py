r"""
cleancli value model: argument types, typed values and textual coercion.

Overview
- ArgType: closed set of value kinds a parameter or a command value can take
  (bool, int, float, string). Its string value is the label shown in help.
- ArgValue: immutable (type, value) pair produced only by coercion.
- coerce(type, token): turn a raw token into an ArgValue, or raise a fault.

Coercion rules
- bool:   "true" | "yes" | "1" | "on"  → True
          "false" | "no" | "0" | "off" → False (case-sensitive; anything else fails)
- int:    optional sign + ASCII digits, within the signed 64-bit range
- float:  optional sign + decimal/scientific digits, or inf/infinity/nan;
          magnitudes beyond the float range saturate to ±inf instead of failing
- string: the token verbatim (the tokenizer already dropped the quotes)

Flag-looking tokens
- A token starting with '-' is refused as a bool or string value (NotValueError)
  because it is almost always a misplaced flag; int and float accept it so that
  negative numbers work.
"""
import re
from enum import StrEnum
from typing import NamedTuple

from .faults import *
from .utils import *

INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1

TRUTHY = ("true", "yes", "1", "on")
FALSY = ("false", "no", "0", "off")

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOATING = re.compile(r"[+-]?(inf|infinity|nan|([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?)", re.IGNORECASE)


class ArgType(StrEnum):
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"

    @property
    def numeric(self):
        return self in (ArgType.INT, ArgType.FLOAT)


class ArgValue(NamedTuple):
    type: ArgType
    value: bool | int | float | str


def _where(index):
    return "" if index is None else " at %s position" % ordinal(index)


def _coerce_bool(token, span, index):
    if token in TRUTHY:
        return True
    if token in FALSY:
        return False
    raise ParseBoolError(
        "not a boolean value %r%s" % (token, _where(index)),
        title="not a boolean",
        code=FaultCode.PARSE_BOOL,
        token=token,
        span=span,
        index=index,
        hint="use %s for true, and %s for false" % (
            ", ".join(map(repr, TRUTHY)), ", ".join(map(repr, FALSY))
        ),
    )


def _coerce_int(token, span, index):
    sign = -1 if token.startswith("-") else 1
    digits = token.lstrip("+-").lstrip("0")
    if not _INTEGER.fullmatch(token):
        reason = "invalid digit found in string"
    # More significant digits than INT_MAX has is out of range.
    elif len(digits) > len(str(INT_MAX)) or not INT_MIN <= (value := sign * int(digits or "0")) <= INT_MAX:
        reason = "number too %s to fit in target type" % ("small" if sign < 0 else "large")
    else:
        return value
    raise ParseIntError(
        "cannot parse integer from %r%s: %s" % (token, _where(index), reason),
        title="not an integer",
        code=FaultCode.PARSE_INT,
        token=token,
        span=span,
        index=index,
        reason=reason,
        hint="use a whole number between %d and %d" % (INT_MIN, INT_MAX),
    )


def _coerce_float(token, span, index):
    if _FLOATING.fullmatch(token):
        # float() never raises on overflow for text input: it yields ±inf.
        return float(token)
    reason = "invalid float literal"
    raise ParseFloatError(
        "cannot parse float from %r%s: %s" % (token, _where(index), reason),
        title="not a float",
        code=FaultCode.PARSE_FLOAT,
        token=token,
        span=span,
        index=index,
        reason=reason,
        hint="use a decimal number such as 4.2, -0.5 or 1e-3",
    )


_coercers = {
    ArgType.BOOL: _coerce_bool,
    ArgType.INT: _coerce_int,
    ArgType.FLOAT: _coerce_float,
    ArgType.STRING: lambda token, span, index: token,
}


def coerce(type, token, /, span=None, index=None):
    """
    Convert a raw token into an ArgValue of the given type.

    Parameters
    - type: ArgType
    - token: str, the raw token (quotes already stripped)
    - span: Span | None, where the token came from (attached to faults)
    - index: int | None, 1-based token position (used in fault messages)

    Raises
    - NotValueError for flag-looking bool/string values.
    - ParseBoolError, ParseIntError, ParseFloatError on malformed text.
    """
    type = ArgType(type)
    if not isinstance(token, str):
        raise TypeError("coerce() token must be a string")

    if token.startswith("-") and not type.numeric:
        raise NotValueError(
            "%r%s looks like a flag, not a %s value" % (token, _where(index), type),
            title="not a value",
            code=FaultCode.NOT_VALUE,
            token=token,
            span=span,
            index=index,
            hint="%s values cannot start with '-'; only numbers may be negative" % type,
        )

    return ArgValue(type, _coercers[type](token, span, index))


__all__ = (
    "ArgType",
    "ArgValue",
    "coerce",
)
