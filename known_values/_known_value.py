"""KnownValue — a compact integer identifier with an optional display name.

A known value stands in for a frequently used semantic identifier (a
predicate such as "isA", a marker such as "OK") inside structured
documents.  Identity is the raw integer alone; the name only affects how
the value is printed.

Wire form (see _constants.TAG_KNOWN_VALUE):

    untagged:  CBOR unsigned integer                  0x04
    tagged:    tag 40000 wrapping the untagged form   0xd9 0x9c 0x40 0x04

The digest is SHA-256 over the tagged bytes.
"""

from __future__ import annotations

import hashlib
from typing import Any, List, Optional

from ._cbor import Item, Resolved, Tagged, Unsigned, decode_cbor, encode_cbor
from ._constants import MAX_SAFE_INTEGER, TAG_KNOWN_VALUE, UINT64_MAX
from ._errors import (
    ERR_DECODE_TAG,
    ERR_DECODE_TYPE,
    ERR_RANGE,
    ERR_VALUE,
    KnownValueError,
)


def normalize_raw_value(value: Any) -> int:
    """Convert an int, decimal string or KnownValue to a raw value.

    This is the only place input shapes are inspected; everything past
    it works on a plain non-negative int no larger than UINT64_MAX.
    """
    if isinstance(value, KnownValue):
        return value.raw_value()

    # bool before int: True is an int in Python but never an identifier.
    if isinstance(value, bool):
        raise KnownValueError(ERR_VALUE, "bool is not a known value")

    if isinstance(value, int):
        raw = value
    elif isinstance(value, str):
        text = value.strip()
        # str.isdigit() admits non-ASCII digits such as "²"; require ASCII.
        if not text or not (text.isascii() and text.isdigit()):
            raise KnownValueError(ERR_VALUE, "not a decimal integer: {!r}".format(value))
        raw = int(text, 10)
    else:
        raise KnownValueError(
            ERR_VALUE, "unsupported raw value type {}".format(type(value).__name__)
        )

    if raw < 0:
        raise KnownValueError(ERR_VALUE, "known value must be non-negative, got {}".format(raw))
    if raw > UINT64_MAX:
        raise KnownValueError(ERR_RANGE, "known value {} exceeds 64 bits".format(raw))
    return raw


class KnownValue:
    """An immutable (raw value, assigned name) pair.

    Equality and hashing look at the raw value only:

        >>> KnownValue(5, "a") == KnownValue(5, "b")
        True
    """

    __slots__ = ("_value", "_assigned_name")

    def __init__(self, value: Any, assigned_name: Optional[str] = None) -> None:
        object.__setattr__(self, "_value", normalize_raw_value(value))
        object.__setattr__(self, "_assigned_name", assigned_name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("KnownValue is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("KnownValue is immutable")

    # ── Accessors ────────────────────────────────────────────

    def value(self) -> int:
        """Return the raw value, refusing anything a double can't hold exactly.

        Use raw_value() when the full 64-bit range is needed.
        """
        if self._value > MAX_SAFE_INTEGER:
            raise KnownValueError(
                ERR_RANGE,
                "known value {} exceeds MAX_SAFE_INTEGER; use raw_value()".format(self._value),
            )
        return self._value

    def raw_value(self) -> int:
        return self._value

    def assigned_name(self) -> Optional[str]:
        return self._assigned_name

    def name(self) -> str:
        """The assigned name, or the decimal raw value when there is none."""
        if self._assigned_name:
            return self._assigned_name
        return str(self._value)

    def digest(self) -> bytes:
        """SHA-256 over the tagged encoding (32 bytes)."""
        return hashlib.sha256(self.tagged_cbor_data()).digest()

    # ── CBOR ─────────────────────────────────────────────────

    @staticmethod
    def cbor_tags() -> List[int]:
        return [TAG_KNOWN_VALUE]

    def untagged_cbor(self) -> Unsigned:
        return Unsigned(self._value)

    def tagged_cbor(self) -> Tagged:
        return Tagged(TAG_KNOWN_VALUE, self.untagged_cbor())

    def untagged_cbor_data(self) -> bytes:
        return encode_cbor(self.untagged_cbor())

    def tagged_cbor_data(self) -> bytes:
        return encode_cbor(self.tagged_cbor())

    @classmethod
    def from_untagged_cbor(cls, item: Item) -> "KnownValue":
        if not isinstance(item, Unsigned):
            raise KnownValueError(
                ERR_DECODE_TYPE,
                "expected unsigned integer for KnownValue, got major type {}".format(
                    item.major_type.name
                ),
            )
        return cls(item.value)

    @classmethod
    def from_tagged_cbor(cls, item: Item) -> "KnownValue":
        if isinstance(item, Resolved):
            raise KnownValueError(
                ERR_DECODE_TAG,
                "expected tag {} for KnownValue, got a tag decoded as {}".format(
                    TAG_KNOWN_VALUE, type(item.value).__name__
                ),
            )
        if not isinstance(item, Tagged):
            raise KnownValueError(
                ERR_DECODE_TYPE,
                "expected tagged CBOR for KnownValue, got major type {}".format(
                    item.major_type.name
                ),
            )
        if item.tag != TAG_KNOWN_VALUE:
            raise KnownValueError(
                ERR_DECODE_TAG,
                "expected tag {} for KnownValue, got {}".format(TAG_KNOWN_VALUE, item.tag),
            )
        return cls.from_untagged_cbor(item.item)

    @classmethod
    def from_cbor(cls, item: Item) -> "KnownValue":
        """Accept either form.

        Documents may drop the tag where the slot already implies a known
        value, so a bare unsigned integer is taken as the untagged form.
        """
        if isinstance(item, (Tagged, Resolved)):
            return cls.from_tagged_cbor(item)
        return cls.from_untagged_cbor(item)

    @classmethod
    def from_cbor_data(cls, data: bytes) -> "KnownValue":
        return cls.from_tagged_cbor(decode_cbor(data))

    @classmethod
    def from_untagged_cbor_data(cls, data: bytes) -> "KnownValue":
        return cls.from_untagged_cbor(decode_cbor(data))

    # ── Python protocol ──────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KnownValue):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self.name()

    def __repr__(self) -> str:
        if self._assigned_name is None:
            return "KnownValue({})".format(self._value)
        return "KnownValue({}, {!r})".format(self._value, self._assigned_name)

    def __reduce__(self) -> tuple:
        return (KnownValue, (self._value, self._assigned_name))
