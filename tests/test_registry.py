"""Tests for the standard vocabulary and the lazily built global store."""

from __future__ import annotations

import os
import sys
import threading
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from known_values import (
    DATE,
    IS_A,
    KNOWN_VALUES,
    NOTE,
    OK_VALUE,
    SIGNED,
    STANDARD_KNOWN_VALUES,
    UNIT,
    KnownValue,
    KnownValuesStore,
    LazyKnownValues,
    known_values_store,
)


class TestStandardVocabulary(unittest.TestCase):
    def test_documented_constants(self):
        self.assertEqual(IS_A.raw_value(), 1)
        self.assertEqual(SIGNED.raw_value(), 3)
        self.assertEqual(NOTE.raw_value(), 4)
        self.assertEqual(DATE.raw_value(), 16)
        self.assertEqual(OK_VALUE.name(), "OK")

    def test_values_and_names_distinct(self):
        raws = [kv.raw_value() for kv in STANDARD_KNOWN_VALUES]
        names = [kv.assigned_name() for kv in STANDARD_KNOWN_VALUES]
        self.assertEqual(len(raws), len(set(raws)))
        self.assertEqual(len(names), len(set(names)))
        self.assertEqual(len(STANDARD_KNOWN_VALUES), 22)

    def test_unit_has_no_display_name(self):
        self.assertEqual(UNIT.assigned_name(), "")
        self.assertEqual(UNIT.name(), "0")


class TestGlobalRegistry(unittest.TestCase):
    def test_identity_stable(self):
        self.assertIs(known_values_store(), known_values_store())
        self.assertIs(KNOWN_VALUES.get(), known_values_store())

    def test_is_a_resolves(self):
        kv = known_values_store().known_value_named("isA")
        self.assertIsNotNone(kv)
        self.assertEqual(kv.raw_value(), 1)

    def test_every_standard_value_registered(self):
        store = known_values_store()
        for kv in STANDARD_KNOWN_VALUES:
            with self.subTest(kv=kv):
                self.assertIs(store.known_value_for_value(kv.raw_value()), kv)
                if kv.assigned_name():
                    self.assertIs(store.known_value_named(kv.assigned_name()), kv)

    def test_names_for_decoded_values(self):
        kv = KnownValue.from_cbor_data(bytes.fromhex("d99c4004"))
        self.assertEqual(known_values_store().name(kv), "note")
        self.assertEqual(KnownValuesStore.name_for_known_value(KnownValue(500), known_values_store()),
                         "500")

    def test_unit_reachable_by_value_only(self):
        store = known_values_store()
        self.assertIs(store.known_value_for_value(0), UNIT)
        self.assertIsNone(store.known_value_named(""))

    def test_clone_leaves_global_untouched(self):
        extended = known_values_store().clone()
        extended.insert(KnownValue(1000, "custom"))
        self.assertIsNone(known_values_store().known_value_named("custom"))
        self.assertEqual(extended.known_value_named("isA"), IS_A)


class TestLazyKnownValues(unittest.TestCase):
    def test_not_built_until_first_get(self):
        lazy = LazyKnownValues()
        self.assertIsNone(lazy._data)
        store = lazy.get()
        self.assertIs(lazy.get(), store)
        self.assertEqual(len(store), len(STANDARD_KNOWN_VALUES))

    def test_concurrent_first_access_builds_once(self):
        lazy = LazyKnownValues()
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(lazy.get())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(len(results), 8)
        self.assertTrue(all(r is results[0] for r in results))


if __name__ == "__main__":
    unittest.main()
