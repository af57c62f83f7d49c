# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# cli.py

"""
Command line entry point.

    o1js-convert all proof.json public.json verification_key.json -o converted_circuit
    o1js-convert proof proof.json public.json out/proof.json --vk verification_key.json
    o1js-convert vk verification_key.json out/vk.json --public public.json
"""

import argparse
import json
import sys

from o1js_convert.commands import convert_all, summary_lines
from o1js_convert.constants import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PROOF_FILENAME,
    DEFAULT_VK_FILENAME,
)
from o1js_convert.errors import ConversionError
from o1js_convert.groth_convert import convert_proof_file
from o1js_convert.vk_convert import convert_vk_file


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="o1js-convert",
        description="Convert snarkjs Groth16 artifacts (BN254) to the o1js verifier format.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    a = sub.add_parser("all", help="Convert proof, public inputs and verification key")
    a.add_argument("proof", help="Path to snarkjs proof.json")
    a.add_argument("public", help="Path to snarkjs public.json")
    a.add_argument("vk", help="Path to snarkjs verification_key.json")
    a.add_argument(
        "-o",
        "--out-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    a.add_argument("--proof-name", default=DEFAULT_PROOF_FILENAME)
    a.add_argument("--vk-name", default=DEFAULT_VK_FILENAME)
    a.add_argument("-q", "--quiet", action="store_true", help="Do not print a summary")

    pr = sub.add_parser("proof", help="Convert a proof and its public inputs")
    pr.add_argument("proof", help="Path to snarkjs proof.json")
    pr.add_argument("public", help="Path to snarkjs public.json")
    pr.add_argument("output", help="Path to write the converted proof")
    pr.add_argument("--vk", help="verification_key.json to validate the inputs against")

    v = sub.add_parser("vk", help="Convert a verification key")
    v.add_argument("vk", help="Path to snarkjs verification_key.json")
    v.add_argument("output", help="Path to write the converted key")
    v.add_argument("--public", help="public.json to validate the key against")

    for parser in (a, pr, v):
        parser.add_argument(
            "--check-curve",
            action="store_true",
            help="Reject points that are not on BN254",
        )

    return p.parse_args(argv)


def run(args: argparse.Namespace) -> None:
    if args.command == "all":
        summary = convert_all(
            args.proof,
            args.public,
            args.vk,
            args.out_dir,
            proof_filename=args.proof_name,
            vk_filename=args.vk_name,
            check_curve=args.check_curve,
        )
        if not args.quiet:
            print("\n".join(summary_lines(summary)))
    elif args.command == "proof":
        convert_proof_file(
            args.proof, args.public, args.output, args.vk, args.check_curve
        )
        print(f"Wrote {args.output}")
    else:
        convert_vk_file(args.vk, args.output, args.public, args.check_curve)
        print(f"Wrote {args.output}")


def main(argv: list[str] | None = None) -> None:
    """CLI: convert snarkjs files, exit 1 with a one line error on failure."""
    args = parse_args(argv)
    try:
        run(args)
    except (ConversionError, OSError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
