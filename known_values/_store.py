"""KnownValuesStore — a bidirectional registry of named known values.

Two dicts are kept in lockstep:

    _by_value: raw value -> KnownValue
    _by_name:  name      -> KnownValue

Invariant: every `_by_name[n]` is the very object found in `_by_value`
under its raw value, and its assigned name is `n`.  Empty names are never
indexed.  Lookups return None for "not registered"; they never raise.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, Optional

from ._errors import KnownValueError
from ._known_value import KnownValue, normalize_raw_value

logger = logging.getLogger(__name__)


class KnownValuesStore:
    def __init__(self, known_values: Iterable[KnownValue] = ()) -> None:
        self._by_value: Dict[int, KnownValue] = {}
        self._by_name: Dict[str, KnownValue] = {}
        for known_value in known_values:
            self.insert(known_value)

    def insert(self, known_value: KnownValue) -> None:
        """Add `known_value`, replacing any entry with the same raw value.

        The replaced entry's name stops resolving.  If the new name is held
        by a different raw value, that entry keeps its value but loses the
        name (last writer wins; no two raw values ever share a name).
        """
        raw = known_value.raw_value()
        existing = self._by_value.get(raw)
        if existing is not None:
            old_name = existing.assigned_name()
            if old_name:
                self._by_name.pop(old_name, None)
            if old_name != known_value.assigned_name():
                logger.debug("known value %d renamed %r -> %r",
                             raw, old_name, known_value.assigned_name())

        new_name = known_value.assigned_name()
        if new_name:
            holder = self._by_name.get(new_name)
            if holder is not None and holder.raw_value() != raw:
                logger.warning("name %r moved from known value %d to %d",
                               new_name, holder.raw_value(), raw)
                self._by_value[holder.raw_value()] = KnownValue(holder.raw_value())
            self._by_name[new_name] = known_value

        self._by_value[raw] = known_value

    # ── Lookups ──────────────────────────────────────────────

    def assigned_name(self, known_value: KnownValue) -> Optional[str]:
        """Name on file for this raw value (may differ from the instance's own)."""
        registered = self._by_value.get(known_value.raw_value())
        if registered is None:
            return None
        return registered.assigned_name()

    def name(self, known_value: KnownValue) -> str:
        assigned = self.assigned_name(known_value)
        if assigned:
            return assigned
        return known_value.name()

    def known_value_named(self, assigned_name: str) -> Optional[KnownValue]:
        return self._by_name.get(assigned_name)

    def known_value_for_value(self, raw_value: Any) -> Optional[KnownValue]:
        try:
            raw = normalize_raw_value(raw_value)
        except KnownValueError:
            return None
        return self._by_value.get(raw)

    # ── Resolution helpers (store optional) ──────────────────

    @staticmethod
    def known_value_for_raw_value(raw_value: Any,
                                  store: Optional["KnownValuesStore"] = None) -> KnownValue:
        """Registered value if `store` has one, else a fresh nameless KnownValue."""
        if store is not None:
            found = store.known_value_for_value(raw_value)
            if found is not None:
                return found
        return KnownValue(raw_value)

    @staticmethod
    def known_value_for_name(name: str,
                             store: Optional["KnownValuesStore"] = None) -> Optional[KnownValue]:
        if store is None:
            return None
        return store.known_value_named(name)

    @staticmethod
    def name_for_known_value(known_value: KnownValue,
                             store: Optional["KnownValuesStore"] = None) -> str:
        if store is not None:
            assigned = store.assigned_name(known_value)
            if assigned:
                return assigned
        return known_value.name()

    # ── Copying and views ────────────────────────────────────

    def clone(self) -> "KnownValuesStore":
        """Point-in-time copy; later inserts on either side don't leak across."""
        cloned = KnownValuesStore()
        cloned._by_value = dict(self._by_value)
        cloned._by_name = dict(self._by_name)
        return cloned

    __copy__ = clone

    def __len__(self) -> int:
        return len(self._by_value)

    def __contains__(self, key: object) -> bool:
        # names win over the decimal reading of a digit-only string
        if isinstance(key, str) and key in self._by_name:
            return True
        return self.known_value_for_value(key) is not None

    def __iter__(self) -> Iterator[KnownValue]:
        for raw in sorted(self._by_value):
            yield self._by_value[raw]

    def __repr__(self) -> str:
        return "KnownValuesStore({} values, {} names)".format(
            len(self._by_value), len(self._by_name))
