"""known_values — compact integer identifiers with a deterministic CBOR form.

A known value is a small non-negative integer standing in for a semantic
identifier (a predicate like "isA", a marker like "OK"), optionally
paired with a human-readable name.

Quick start:
    >>> from known_values import KnownValue, known_values_store
    >>> kv = known_values_store().known_value_named("isA")
    >>> kv.raw_value(), kv.tagged_cbor_data().hex()
    (1, 'd99c4001')
    >>> KnownValue.from_cbor_data(bytes.fromhex("d99c4004")).raw_value()
    4
    >>> known_values_store().name(KnownValue(4))
    'note'
"""

from __future__ import annotations

from ._cbor import (
    Array,
    ByteString,
    Item,
    MajorType,
    Map,
    Negative,
    Resolved,
    Simple,
    Tagged,
    Text,
    Unsigned,
    decode_cbor,
    encode_cbor,
)
from ._constants import MAX_SAFE_INTEGER, TAG_KNOWN_VALUE, UINT64_MAX
from ._errors import (
    ERR_CBOR,
    ERR_DECODE_TAG,
    ERR_DECODE_TYPE,
    ERR_NON_CANONICAL,
    ERR_RANGE,
    ERR_VALUE,
    KnownValueError,
)
from ._known_value import KnownValue, normalize_raw_value
from ._registry import (
    ATTACHMENT,
    BODY,
    CONFORMS_TO,
    CONTENT,
    DATE,
    EDGE,
    ERROR,
    HAS_RECIPIENT,
    HAS_SECRET,
    IS_A,
    KNOWN_VALUES,
    NOTE,
    OK_VALUE,
    POSITION,
    RESULT,
    SALT,
    SIGNED,
    SOURCE,
    SSKR_SHARE,
    STANDARD_KNOWN_VALUES,
    TARGET,
    UNIT,
    UNKNOWN_VALUE,
    VENDOR,
    LazyKnownValues,
    known_values_store,
)
from ._store import KnownValuesStore

__version__ = "1.0.0"

__all__ = [
    # Core types
    "KnownValue",
    "KnownValuesStore",
    "LazyKnownValues",
    "KNOWN_VALUES",
    "known_values_store",
    "normalize_raw_value",
    # Wire constants
    "TAG_KNOWN_VALUE",
    "MAX_SAFE_INTEGER",
    "UINT64_MAX",
    # CBOR items
    "Item",
    "MajorType",
    "Unsigned",
    "Negative",
    "ByteString",
    "Text",
    "Array",
    "Map",
    "Tagged",
    "Simple",
    "Resolved",
    "encode_cbor",
    "decode_cbor",
    # Exception
    "KnownValueError",
    # Error codes
    "ERR_VALUE",
    "ERR_RANGE",
    "ERR_CBOR",
    "ERR_NON_CANONICAL",
    "ERR_DECODE_TYPE",
    "ERR_DECODE_TAG",
    # Standard vocabulary
    "STANDARD_KNOWN_VALUES",
    "UNIT",
    "IS_A",
    "SIGNED",
    "NOTE",
    "HAS_RECIPIENT",
    "SSKR_SHARE",
    "SALT",
    "DATE",
    "UNKNOWN_VALUE",
    "HAS_SECRET",
    "POSITION",
    "ATTACHMENT",
    "VENDOR",
    "CONFORMS_TO",
    "BODY",
    "RESULT",
    "ERROR",
    "OK_VALUE",
    "CONTENT",
    "EDGE",
    "SOURCE",
    "TARGET",
]
