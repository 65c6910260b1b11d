"""Standard known values and the lazily built process-wide store.

The table below is the default vocabulary.  Raw values are wire format:
once a document has been written with `note` = 4, 4 means `note` forever.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from ._known_value import KnownValue
from ._store import KnownValuesStore

logger = logging.getLogger(__name__)

# ── Standard vocabulary ──────────────────────────────────────
# UNIT deliberately has an empty name: it is reachable by value only.

UNIT = KnownValue(0, "")
IS_A = KnownValue(1, "isA")
SIGNED = KnownValue(3, "signed")
NOTE = KnownValue(4, "note")
HAS_RECIPIENT = KnownValue(5, "hasRecipient")
SSKR_SHARE = KnownValue(6, "sskrShare")
SALT = KnownValue(15, "salt")
DATE = KnownValue(16, "date")
UNKNOWN_VALUE = KnownValue(17, "Unknown")
HAS_SECRET = KnownValue(19, "hasSecret")
POSITION = KnownValue(23, "position")
ATTACHMENT = KnownValue(50, "attachment")
VENDOR = KnownValue(51, "vendor")
CONFORMS_TO = KnownValue(52, "conformsTo")
BODY = KnownValue(100, "body")
RESULT = KnownValue(101, "result")
ERROR = KnownValue(102, "error")
OK_VALUE = KnownValue(103, "OK")
CONTENT = KnownValue(108, "content")
EDGE = KnownValue(701, "edge")
SOURCE = KnownValue(702, "source")
TARGET = KnownValue(703, "target")

STANDARD_KNOWN_VALUES: List[KnownValue] = [
    UNIT, IS_A, SIGNED, NOTE, HAS_RECIPIENT, SSKR_SHARE, SALT, DATE,
    UNKNOWN_VALUE, HAS_SECRET, POSITION, ATTACHMENT, VENDOR, CONFORMS_TO,
    BODY, RESULT, ERROR, OK_VALUE, CONTENT, EDGE, SOURCE, TARGET,
]


class LazyKnownValues:
    """Holds at most one KnownValuesStore, built on first get().

    Construction runs once even if several threads race on first access.
    Callers must treat the returned store as read-only; clone() it to extend.
    """

    def __init__(self) -> None:
        self._data: Optional[KnownValuesStore] = None
        self._lock = threading.Lock()

    def get(self) -> KnownValuesStore:
        data = self._data
        if data is not None:
            return data
        with self._lock:
            if self._data is None:
                self._data = KnownValuesStore(STANDARD_KNOWN_VALUES)
                logger.debug("built standard known-values store (%d values)",
                             len(self._data))
            return self._data


KNOWN_VALUES = LazyKnownValues()


def known_values_store() -> KnownValuesStore:
    """The process-wide standard store."""
    return KNOWN_VALUES.get()
