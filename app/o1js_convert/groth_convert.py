# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# groth_convert.py

"""
Convert snarkjs Groth16 proof output to the flattened o1js verifier format.

snarkjs outputs:
  - proof.json: {pi_a: [x, y, "1"], pi_b: [[x_c0, x_c1], [y_c0, y_c1], ["1", "0"]],
                 pi_c: [x, y, "1"], protocol, curve}
  - public.json: ["in1", "in2", ...]

The o1js Groth16 verifier expects:
  - negA: {x, y} with y negated mod p
  - B: {x_c0, x_c1, y_c0, y_c1}
  - C: {x, y}
  - pi1 .. piN: public inputs, 1-indexed
"""

from pathlib import Path
from typing import Any

from o1js_convert.bn254 import (
    check_g1,
    check_g2,
    field_string,
    g1_to_xy,
    g2_to_flat,
    lookup,
    negate_g1,
)
from o1js_convert.errors import MalformedInput, StructuralMismatch
from o1js_convert.files import load_json, save_json


def validate(vk: dict[str, Any], public_inputs: list[Any]) -> None:
    """
    Check that a verification key and a public input list belong together.

    Two counts must agree before anything is converted:
      - vk.nPublic == len(public_inputs)
      - len(vk.IC) == len(public_inputs) + 1 (IC[0] is the constant term)

    Args:
        vk: Dict from snarkjs verification_key.json
        public_inputs: List from snarkjs public.json

    Raises:
        StructuralMismatch: If either count disagrees. The message carries
            both counts.
        MalformedInput: If nPublic or IC is missing or the wrong type.
    """
    if not isinstance(public_inputs, list):
        raise MalformedInput("expected a JSON array", "public")

    n_public = lookup(vk, "nPublic")
    if isinstance(n_public, bool) or not isinstance(n_public, int):
        raise MalformedInput(f"expected an integer, got {n_public!r}", "nPublic")

    ic = lookup(vk, "IC")
    if not isinstance(ic, list):
        raise MalformedInput("expected a JSON array", "IC")

    if n_public != len(public_inputs):
        raise StructuralMismatch(
            f"VK nPublic ({n_public}) doesn't match public inputs ({len(public_inputs)})",
            label="VK nPublic",
            expected=len(public_inputs),
            actual=n_public,
        )

    if len(ic) != len(public_inputs) + 1:
        raise StructuralMismatch(
            f"VK IC points ({len(ic)}) should be {len(public_inputs) + 1}",
            label="VK IC points",
            expected=len(public_inputs) + 1,
            actual=len(ic),
        )


def public_inputs_to_fields(public_inputs: list[Any]) -> dict[str, str]:
    """
    Map public inputs to named fields: public_inputs[i] -> "pi{i+1}".

    The verifier numbers its public inputs from 1, so there is never a pi0.
    """
    return {
        f"pi{i + 1}": field_string(value, f"public[{i}]")
        for i, value in enumerate(public_inputs)
    }


def snarkjs_proof_to_o1js(
    proof: dict[str, Any],
    public_inputs: list[Any],
    check_curve: bool = False,
) -> dict[str, Any]:
    """
    Convert a snarkjs proof and its public inputs to the o1js proof format.

    Call `validate` against the verification key first; this function only
    looks at the proof and the inputs.

    Args:
        proof: Dict with keys: pi_a, pi_b, pi_c
        public_inputs: List of decimal strings from public.json
        check_curve: Also check that A, B and C lie on BN254

    Returns:
        Dict with keys negA, B, C, pi1 .. piN in that order
    """
    if not isinstance(public_inputs, list):
        raise MalformedInput("expected a JSON array", "public")

    pi_a = lookup(proof, "pi_a")
    pi_b = lookup(proof, "pi_b")
    pi_c = lookup(proof, "pi_c")

    # -A so the verifier can check a product of pairings against 1
    neg_a = negate_g1(pi_a, "pi_a")
    b = g2_to_flat(pi_b, "pi_b")
    c = g1_to_xy(pi_c, "pi_c")

    if check_curve:
        check_g1(pi_a, "pi_a")
        check_g2(pi_b, "pi_b")
        check_g1(pi_c, "pi_c")

    return {
        "negA": neg_a,
        "B": b,
        "C": c,
        **public_inputs_to_fields(public_inputs),
    }


def convert_proof_file(
    proof_path: str | Path,
    public_path: str | Path,
    output_path: str | Path,
    vk_path: str | Path | None = None,
    check_curve: bool = False,
) -> dict[str, Any]:
    """
    Read snarkjs proof.json and public.json and write the o1js proof.json.

    Args:
        proof_path: Path to snarkjs proof.json
        public_path: Path to snarkjs public.json
        output_path: Path to write the converted proof
        vk_path: Optional verification_key.json; when given, the public inputs
            are validated against it before converting
        check_curve: Also check that the proof points lie on BN254

    Returns:
        The converted proof that was written
    """
    proof = load_json(proof_path)
    public_inputs = load_json(public_path)

    if vk_path is not None:
        validate(load_json(vk_path), public_inputs)

    o1js_proof = snarkjs_proof_to_o1js(proof, public_inputs, check_curve)
    save_json(output_path, o1js_proof)
    return o1js_proof
