"""CLI entry point: one walkthrough of the stealth-address protocol."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .config import ProtocolConfig
from .protocol import StealthAddressProtocol


def setup_logging(log_level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stealth",
        description="Dual-key stealth address walkthrough on secp256k1",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--data", default="01020304", help="Hex payload signed with the one-time key",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Raise on malformed signatures instead of reporting failure",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the walkthrough; returns 0 when every derivation agrees."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        data = bytes.fromhex(args.data)
        config = ProtocolConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.strict:
        config = replace(config, strict_verification=True)

    t = StealthAddressProtocol(config).run(data)

    print(f"Sender computed secret:     {t.sender_secret.hex().upper()}")
    print(f"Receiver computed secret:   {t.receiver_secret.hex().upper()}")
    print(f"Sender computed address:    {t.sender_address.hex().upper()}")
    print(f"Receiver computed address:  {t.receiver_address.hex().upper()}")
    print(f"Auditor computed address:   {t.auditor_address.hex().upper()}")
    print(f"Signature:                  {t.signature.hex().upper()}")
    print("verified!" if t.verified else "Did not verify!")

    return 0 if t.is_consistent else 1
