"""Known-value wire constants and numeric limits.

The tag number is part of the wire format: every tagged known value ever
written carries it, so it must never change.
"""

from __future__ import annotations

# CBOR tag 40000 (encoded head: d9 9c 40) marks "this item is a known value".
TAG_KNOWN_VALUE: int = 40000

# Standard CBOR tags for integers that do not fit a 64-bit head (RFC 8949 §3.4.3).
TAG_POSITIVE_BIGNUM: int = 2
TAG_NEGATIVE_BIGNUM: int = 3

# ── Numeric limits ───────────────────────────────────────────
# Python ints never overflow, so both limits are explicit.
# UINT64_MAX bounds the raw value itself: a known value is exactly one
# CBOR unsigned-integer item, and a CBOR head carries at most 64 bits.
# MAX_SAFE_INTEGER bounds value(), the accessor for callers that hand the
# number to an IEEE-754 double (JSON, JavaScript peers).
UINT64_MAX: int = 2**64 - 1
MAX_SAFE_INTEGER: int = 2**53 - 1

# Digest algorithm used for content addressing of the tagged encoding.
DIGEST_ALGORITHM: str = "sha256"
DIGEST_SIZE: int = 32
