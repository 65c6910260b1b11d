#!/usr/bin/env python3
# tools/fuzz_runner.py
#
# Decode fuzzing for KnownValue.from_cbor_data / from_cbor.
#
# Generates three input categories:
#   A) valid tagged encodings with one byte flipped, dropped or appended
#   B) valid heads around the known-value tag with random payload items
#   C) short random byte strings
#
# Contract under test: every input either decodes to a KnownValue whose
# canonical encoding is exactly the input, or raises KnownValueError.
# Any other exception, or an accepted non-canonical input, prints a repro
# and exits non-zero.

import logging, os, sys, random
from typing import Any, Dict

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from known_values import UINT64_MAX, KnownValue, KnownValueError, decode_cbor

SEED = int(os.environ.get("KV_SEED", "4242"))
ROUNDS = int(os.environ.get("KV_FUZZ_ROUNDS", "5000"))

random.seed(SEED)

TAG_HEAD = bytes.fromhex("d99c40")

def mismatch(label: str, ctx: Dict[str, Any]) -> None:
    print("MISMATCH:", label)
    print("CTX:", ctx)
    raise SystemExit(1)

# --- generators ---

def rand_valid() -> bytes:
    raw = random.choice([0, 1, 23, 24, 255, 65536, 2**53, UINT64_MAX,
                         random.randint(0, UINT64_MAX)])
    return KnownValue(raw).tagged_cbor_data()

def mutate(data: bytes) -> bytes:
    b = bytearray(data)
    r = random.random()
    if r < 0.4 and b:
        i = random.randrange(len(b))
        b[i] ^= 1 << random.randrange(8)
    elif r < 0.7 and b:
        del b[random.randrange(len(b))]
    else:
        b.insert(random.randint(0, len(b)), random.getrandbits(8))
    return bytes(b)

def rand_payload() -> bytes:
    # major types 0-7 with small arguments, occasionally a long head
    major = random.randrange(8)
    if major == 7:
        return bytes([0xe0 | random.choice([20, 21, 22, 23])])
    if random.random() < 0.7:
        return bytes([(major << 5) | random.randrange(24)]) + (b"a" * 23 if major in (2, 3) else b"")
    return bytes([(major << 5) | 24, random.getrandbits(8)])

def rand_bytes() -> bytes:
    return bytes(random.getrandbits(8) for _ in range(random.randint(0, 12)))

def check(data: bytes, label: str) -> None:
    for decode in (KnownValue.from_cbor_data,
                   lambda d: KnownValue.from_cbor(decode_cbor(d))):
        try:
            kv = decode(data)
        except KnownValueError:
            continue
        except Exception as e:
            mismatch(label + " unexpected exception",
                     {"input_hex": data.hex(), "exc": repr(e)})
        if data not in (kv.tagged_cbor_data(), kv.untagged_cbor_data()):
            mismatch(label + " accepted non-canonical input",
                     {"input_hex": data.hex(), "value": kv.raw_value()})

def main() -> int:
    logging.getLogger("known_values").setLevel(logging.ERROR)
    for i in range(ROUNDS):
        r = random.random()
        if r < 0.45:
            check(mutate(rand_valid()), "A round={}".format(i))
        elif r < 0.80:
            check(TAG_HEAD + rand_payload(), "B round={}".format(i))
        else:
            check(rand_bytes(), "C round={}".format(i))

    print(f"OK: fuzz rounds={ROUNDS} seed={SEED} (no mismatches)")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
