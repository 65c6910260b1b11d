"""Error codes and the exception raised by the known-value codec.

Every failure surfaces as one exception class carrying a grep-friendly
`.code`.  Store lookups never raise: "not registered" is a normal result
and is returned as None.
"""

from __future__ import annotations

ERR_VALUE: str = "ERR_VALUE"                  # raw input is not a non-negative integer
ERR_RANGE: str = "ERR_RANGE"                  # exceeds MAX_SAFE_INTEGER / UINT64_MAX
ERR_CBOR: str = "ERR_CBOR"                    # not exactly one well-formed CBOR item
ERR_NON_CANONICAL: str = "ERR_NON_CANONICAL"  # well-formed but not deterministic encoding
ERR_DECODE_TYPE: str = "ERR_DECODE_TYPE"      # unexpected CBOR major type
ERR_DECODE_TAG: str = "ERR_DECODE_TAG"        # tagged, but not with TAG_KNOWN_VALUE

ALL_CODES = (
    ERR_VALUE,
    ERR_RANGE,
    ERR_CBOR,
    ERR_NON_CANONICAL,
    ERR_DECODE_TYPE,
    ERR_DECODE_TAG,
)


class KnownValueError(Exception):
    """Raised for invalid raw values and malformed known-value encodings.

    The `.code` attribute is one of the ERR_* strings above and is what
    the conformance vectors compare against.
    """

    def __init__(self, code: str, msg: str = "") -> None:
        super().__init__(msg or code)
        self.code = code
