"""Tests for the CBOR item variants and the canonical encode/decode pair."""

from __future__ import annotations

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from known_values import (
    ERR_CBOR,
    ERR_NON_CANONICAL,
    Array,
    ByteString,
    KnownValueError,
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


class TestDecodeVariants(unittest.TestCase):
    def test_scalars(self):
        cases = [
            ("00", Unsigned(0)),
            ("1bffffffffffffffff", Unsigned(2**64 - 1)),
            ("20", Negative(-1)),
            ("3bffffffffffffffff", Negative(-(2**64))),
            ("4401020304", ByteString(b"\x01\x02\x03\x04")),
            ("636b6579", Text("key")),
            ("f5", Simple(True)),
            ("f6", Simple(None)),
        ]
        for hx, expected in cases:
            with self.subTest(hx=hx):
                self.assertEqual(decode_cbor(bytes.fromhex(hx)), expected)

    def test_bool_is_not_unsigned(self):
        item = decode_cbor(bytes.fromhex("f5"))
        self.assertEqual(item.major_type, MajorType.SIMPLE)
        self.assertNotIsInstance(item, Unsigned)

    def test_array_and_map(self):
        self.assertEqual(decode_cbor(bytes.fromhex("820102")),
                         Array((Unsigned(1), Unsigned(2))))
        self.assertEqual(decode_cbor(bytes.fromhex("a10102")),
                         Map(((Unsigned(1), Unsigned(2)),)))

    def test_unknown_tag_kept_as_tagged(self):
        item = decode_cbor(bytes.fromhex("d99c4104"))
        self.assertEqual(item, Tagged(40001, Unsigned(4)))
        self.assertEqual(item.major_type, MajorType.TAGGED)

    def test_bignum_stays_tagged(self):
        item = decode_cbor(bytes.fromhex("c249010000000000000000"))
        self.assertEqual(item, Tagged(2, ByteString(b"\x01" + b"\x00" * 8)))


class TestEncode(unittest.TestCase):
    def test_shortest_heads(self):
        cases = [
            (Unsigned(23), "17"),
            (Unsigned(24), "1818"),
            (Unsigned(256), "190100"),
            (Unsigned(2**32), "1b0000000100000000"),
            (Tagged(40000, Unsigned(1)), "d99c4001"),
        ]
        for item, hx in cases:
            with self.subTest(item=item):
                self.assertEqual(encode_cbor(item).hex(), hx)

    def test_nested_round_trip(self):
        item = Map(((Text("a"), Array((Unsigned(1), Tagged(40000, Unsigned(4))))),))
        self.assertEqual(decode_cbor(encode_cbor(item)), item)


class TestStrictDecode(unittest.TestCase):
    def test_non_shortest_rejected(self):
        for hx in ["1801", "190001", "d99c401a00000004"]:
            with self.subTest(hx=hx):
                with self.assertRaises(KnownValueError) as ctx:
                    decode_cbor(bytes.fromhex(hx))
                self.assertEqual(ctx.exception.code, ERR_NON_CANONICAL)

    def test_trailing_bytes_rejected(self):
        with self.assertRaises(KnownValueError) as ctx:
            decode_cbor(bytes.fromhex("0101"))
        self.assertEqual(ctx.exception.code, ERR_CBOR)

    def test_truncated_rejected(self):
        for hx in ["", "19", "1a0000", "62"]:
            with self.subTest(hx=hx):
                with self.assertRaises(KnownValueError) as ctx:
                    decode_cbor(bytes.fromhex(hx))
                self.assertEqual(ctx.exception.code, ERR_CBOR)

    def test_cause_chained(self):
        with self.assertRaises(KnownValueError) as ctx:
            decode_cbor(b"")
        self.assertIsNotNone(ctx.exception.__cause__)

    def test_self_referencing_shared_value_rejected(self):
        # tag 28 marks the array shareable, tag 29 points back at it
        with self.assertRaises(KnownValueError) as ctx:
            decode_cbor(bytes.fromhex("d81c81d81d00"))
        self.assertEqual(ctx.exception.code, ERR_CBOR)

    def test_interpreted_tags_come_back_resolved(self):
        for hx in ["c11a514b67b0", "d9010283010203",
                   "c074323031332d30332d32315432303a30343a30305a"]:
            with self.subTest(hx=hx):
                item = decode_cbor(bytes.fromhex(hx))
                self.assertIsInstance(item, Resolved)
                self.assertEqual(item.major_type, MajorType.TAGGED)


if __name__ == "__main__":
    unittest.main()
