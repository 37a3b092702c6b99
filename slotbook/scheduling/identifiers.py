# slotbook/scheduling/identifiers.py
"""
Provider identifiers.

Stored records are not consistently typed: the same provider may appear as
the integer 42 in one row and the string "42" in another. ProviderId wraps
either form and compares by value so the engine never string-compares ids.
"""
import re
from typing import Any, Union

from slotbook.core.errors import InvalidProviderId

_ID_RE = re.compile(r"[1-9]\d*", re.ASCII)


class ProviderId:
    __slots__ = ("_value",)

    def __init__(self, raw: Union["ProviderId", int, str]):
        if isinstance(raw, ProviderId):
            self._value = raw._value
            return
        # bool is an int subclass, but True is not a provider
        if isinstance(raw, bool):
            raise InvalidProviderId(f"Invalid provider id {raw!r}")
        if isinstance(raw, int):
            if raw < 1:
                raise InvalidProviderId(f"Invalid provider id {raw!r}")
            self._value = raw
            return
        if isinstance(raw, str) and _ID_RE.fullmatch(raw.strip()):
            self._value = int(raw.strip())
            return
        raise InvalidProviderId(f"Invalid provider id {raw!r}")

    @property
    def value(self) -> int:
        return self._value

    def matches(self, other: Any) -> bool:
        """Compare against a raw stored value without raising on garbage."""
        try:
            return self == ProviderId(other)
        except InvalidProviderId:
            return False

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ProviderId):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"ProviderId({self._value})"
