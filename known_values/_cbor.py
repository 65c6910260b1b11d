"""CBOR items — an explicit sum type over what cbor2 decodes.

cbor2 hands back plain Python objects: an `int` may be a major-type-0
unsigned integer, a negative integer, or a tag-2/3 bignum, and a tagged
item is either a `CBORTag` or whatever cbor2 resolved the tag into.  The
known-value codec needs to know the major type, so every decoded object
is lifted into exactly one of these frozen variants:

    Unsigned    (0)  — 0 .. 2**64-1
    Negative    (1)  — -2**64 .. -1
    ByteString  (2)
    Text        (3)
    Array       (4)
    Map         (5)
    Tagged      (6)  — tag number + inner item
    Simple      (7)  — booleans, null, undefined, floats, simple values
    Resolved    (6)  — a tagged item cbor2 already turned into a Python
                       object (datetime, Decimal, UUID, ...)

Encoding is deterministic: cbor2's canonical mode writes shortest-form
heads, and decode_cbor() rejects any input that would not re-encode to
the same bytes.
"""

from __future__ import annotations

import enum
import io
from dataclasses import dataclass
from typing import Any, Optional, Set, Tuple, Union

import cbor2

from ._constants import TAG_NEGATIVE_BIGNUM, TAG_POSITIVE_BIGNUM, UINT64_MAX
from ._errors import ERR_CBOR, ERR_NON_CANONICAL, KnownValueError


class MajorType(enum.IntEnum):
    UNSIGNED = 0
    NEGATIVE = 1
    BYTES = 2
    TEXT = 3
    ARRAY = 4
    MAP = 5
    TAGGED = 6
    SIMPLE = 7


@dataclass(frozen=True)
class Unsigned:
    value: int
    major_type = MajorType.UNSIGNED


@dataclass(frozen=True)
class Negative:
    value: int
    major_type = MajorType.NEGATIVE


@dataclass(frozen=True)
class ByteString:
    value: bytes
    major_type = MajorType.BYTES


@dataclass(frozen=True)
class Text:
    value: str
    major_type = MajorType.TEXT


@dataclass(frozen=True)
class Array:
    items: Tuple["Item", ...]
    major_type = MajorType.ARRAY


@dataclass(frozen=True)
class Map:
    entries: Tuple[Tuple["Item", "Item"], ...]
    major_type = MajorType.MAP


@dataclass(frozen=True)
class Tagged:
    tag: int
    item: "Item"
    major_type = MajorType.TAGGED


@dataclass(frozen=True)
class Simple:
    value: Any
    major_type = MajorType.SIMPLE


@dataclass(frozen=True)
class Resolved:
    """A tagged item whose tag number cbor2 consumed while decoding."""

    value: Any
    major_type = MajorType.TAGGED


Item = Union[Unsigned, Negative, ByteString, Text, Array, Map, Tagged, Simple, Resolved]


# ── cbor2 object → Item ──────────────────────────────────────

def _bignum(value: int) -> Tagged:
    # Same payload layout cbor2 writes for out-of-range ints (§3.4.3).
    if value >= 0:
        tag, n = TAG_POSITIVE_BIGNUM, value
    else:
        tag, n = TAG_NEGATIVE_BIGNUM, -value - 1
    payload = n.to_bytes((n.bit_length() + 7) // 8, "big")
    return Tagged(tag, ByteString(payload))


def to_item(obj: Any, _lifting: Optional[Set[int]] = None) -> Item:
    """Lift a cbor2-decoded Python object into its Item variant.

    Shared references (tags 28/29) can make cbor2 return a container that
    contains itself; such input raises ERR_CBOR.
    """
    # bool is an int subclass; it is a simple value, not major type 0.
    if isinstance(obj, bool) or obj is None or obj is cbor2.undefined:
        return Simple(obj)

    if isinstance(obj, int):
        if 0 <= obj <= UINT64_MAX:
            return Unsigned(obj)
        if -(UINT64_MAX + 1) <= obj < 0:
            return Negative(obj)
        return _bignum(obj)

    if isinstance(obj, (bytes, bytearray)):
        return ByteString(bytes(obj))

    if isinstance(obj, str):
        return Text(obj)

    if isinstance(obj, (list, tuple, dict, cbor2.CBORTag)):
        if _lifting is None:
            _lifting = set()
        if id(obj) in _lifting:
            raise KnownValueError(ERR_CBOR, "cyclic CBOR item")
        _lifting.add(id(obj))
        try:
            if isinstance(obj, dict):
                return Map(tuple((to_item(k, _lifting), to_item(v, _lifting))
                                 for k, v in obj.items()))
            if isinstance(obj, cbor2.CBORTag):
                return Tagged(int(obj.tag), to_item(obj.value, _lifting))
            return Array(tuple(to_item(x, _lifting) for x in obj))
        finally:
            _lifting.discard(id(obj))

    if isinstance(obj, (float, cbor2.CBORSimpleValue)):
        return Simple(obj)

    return Resolved(obj)


def contains_resolved(item: Item) -> bool:
    if isinstance(item, Resolved):
        return True
    if isinstance(item, Array):
        return any(contains_resolved(x) for x in item.items)
    if isinstance(item, Map):
        return any(contains_resolved(k) or contains_resolved(v) for k, v in item.entries)
    if isinstance(item, Tagged):
        return contains_resolved(item.item)
    return False


# ── Item → cbor2 object ──────────────────────────────────────

def to_native(item: Item, immutable: bool = False) -> Any:
    """Lower an Item into an object cbor2 can encode.

    `immutable` is set for map keys, where arrays and maps must be hashable.
    """
    if isinstance(item, (Unsigned, Negative, ByteString, Text, Simple, Resolved)):
        return item.value

    if isinstance(item, Array):
        items = [to_native(x, immutable) for x in item.items]
        return tuple(items) if immutable else items

    if isinstance(item, Map):
        d = {to_native(k, True): to_native(v, immutable) for k, v in item.entries}
        return cbor2.FrozenDict(d) if immutable else d

    if isinstance(item, Tagged):
        return cbor2.CBORTag(item.tag, to_native(item.item, immutable))

    raise TypeError("not a CBOR item: {}".format(type(item).__name__))


# ── Encode / decode ──────────────────────────────────────────

def encode_cbor(item: Item) -> bytes:
    """Encode an Item using deterministic (shortest-form) CBOR."""
    return cbor2.dumps(to_native(item), canonical=True)


def decode_cbor(data: bytes) -> Item:
    """Decode exactly one CBOR item from `data`.

    Raises ERR_CBOR for malformed input or trailing bytes, and
    ERR_NON_CANONICAL when the bytes are valid CBOR that the encoder
    would have written differently (e.g. a 2-byte head for the value 1).

    Items holding a Resolved tag are returned unchecked: cbor2 has already
    replaced the tag with a Python object, so the original bytes cannot be
    reproduced.  Callers reject them by tag.
    """
    data = bytes(data)
    fp = io.BytesIO(data)
    try:
        obj = cbor2.CBORDecoder(fp).decode()
    except cbor2.CBORDecodeError as exc:
        raise KnownValueError(ERR_CBOR, "malformed CBOR: {}".format(exc)) from exc
    if fp.tell() < len(data):
        raise KnownValueError(
            ERR_CBOR, "{} trailing bytes after CBOR item".format(len(data) - fp.tell())
        )

    item = to_item(obj)
    if contains_resolved(item):
        return item
    try:
        reencoded = encode_cbor(item)
    except cbor2.CBOREncodeError as exc:
        raise KnownValueError(ERR_NON_CANONICAL, "item has no canonical encoding") from exc
    if reencoded != data:
        # A canonical item followed by junk re-encodes to a strict prefix.
        if len(data) > len(reencoded) and data.startswith(reencoded):
            raise KnownValueError(
                ERR_CBOR,
                "{} trailing bytes after CBOR item".format(len(data) - len(reencoded)),
            )
        raise KnownValueError(ERR_NON_CANONICAL, "CBOR is not in canonical form")
    return item
