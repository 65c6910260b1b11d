"""known-values command-line interface.

Usage:
    python3 -m known_values name 4                 # -> note
    python3 -m known_values lookup isA             # -> 1
    python3 -m known_values encode 4 [--untagged]  # -> d99c4004
    python3 -m known_values decode d99c4004 [--untagged | --any]
    python3 -m known_values digest 1
    python3 -m known_values list
    python3 -m known_values version
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import (
    ERR_CBOR,
    KnownValue,
    KnownValueError,
    KnownValuesStore,
    __version__,
    decode_cbor,
    known_values_store,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="known-values",
        description="Inspect known values and their deterministic CBOR encoding",
    )
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    name_p = sub.add_parser("name", help="Display name for a raw value")
    name_p.add_argument("value", help="Raw value (decimal)")

    lookup_p = sub.add_parser("lookup", help="Raw value for a registered name")
    lookup_p.add_argument("name")

    enc_p = sub.add_parser("encode", help="Emit canonical CBOR (hex)")
    enc_p.add_argument("value", help="Raw value (decimal)")
    enc_p.add_argument("--untagged", action="store_true",
                       help="Omit the known-value tag")

    dec_p = sub.add_parser("decode", help="Decode CBOR hex to a known value")
    dec_p.add_argument("hex", help="CBOR bytes as hex")
    dec_g = dec_p.add_mutually_exclusive_group()
    dec_g.add_argument("--untagged", action="store_true",
                       help="Expect a bare unsigned integer")
    dec_g.add_argument("--any", action="store_true",
                       help="Accept tagged or untagged input")

    dig_p = sub.add_parser("digest", help="SHA-256 digest of the tagged encoding (hex)")
    dig_p.add_argument("value", help="Raw value (decimal)")

    sub.add_parser("list", help="List the standard known values")
    sub.add_parser("version", help="Print version and exit")

    return parser


def _resolve(value: str) -> KnownValue:
    return KnownValuesStore.known_value_for_raw_value(value, known_values_store())


def _cmd_decode(args: argparse.Namespace) -> None:
    try:
        data = bytes.fromhex(args.hex)
    except ValueError:
        raise KnownValueError(ERR_CBOR, "input is not valid hex")

    if args.untagged:
        kv = KnownValue.from_untagged_cbor_data(data)
    elif args.any:
        kv = KnownValue.from_cbor(decode_cbor(data))
    else:
        kv = KnownValue.from_cbor_data(data)
    store = known_values_store()
    print("{}\t{}".format(kv.raw_value(), KnownValuesStore.name_for_known_value(kv, store)))


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"known-values {__version__}")
        return

    store = known_values_store()
    try:
        if args.command == "name":
            print(store.name(_resolve(args.value)))
        elif args.command == "lookup":
            kv = store.known_value_named(args.name)
            if kv is None:
                print(f"known-values: no known value named {args.name!r}", file=sys.stderr)
                sys.exit(1)
            print(kv.raw_value())
        elif args.command == "encode":
            kv = _resolve(args.value)
            data = kv.untagged_cbor_data() if args.untagged else kv.tagged_cbor_data()
            print(data.hex())
        elif args.command == "decode":
            _cmd_decode(args)
        elif args.command == "digest":
            print(_resolve(args.value).digest().hex())
        elif args.command == "list":
            for kv in store:
                print("{}\t{}".format(kv.raw_value(), kv.assigned_name() or ""))
    except KnownValueError as e:
        print(f"known-values: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
