# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# vk_convert.py

"""
Convert a snarkjs verification_key.json to the flattened o1js verifier format.

snarkjs outputs:
  - verification_key.json: {protocol, curve, nPublic, vk_alpha_1, vk_beta_2,
    vk_gamma_2, vk_delta_2, vk_alphabeta_12, IC}

The o1js Groth16 verifier expects:
  - alpha: {x, y}
  - beta, gamma, delta: {x_c0, x_c1, y_c0, y_c1}
  - ic0 .. icM: {x, y}, 0-indexed, one per IC point
  - alpha_beta: Fp12 as {g00, g01, ..., h21}
  - w27: Fp12 constant, see constants.W27
"""

from pathlib import Path
from typing import Any

from o1js_convert.bn254 import (
    check_g1,
    check_g2,
    coordinates,
    field_string,
    g1_to_xy,
    g2_to_flat,
    lookup,
)
from o1js_convert.constants import W27
from o1js_convert.errors import MalformedInput
from o1js_convert.files import load_json, save_json
from o1js_convert.groth_convert import validate


def fp12_to_flat(alphabeta12: Any, where: str = "vk_alphabeta_12") -> dict[str, str]:
    """
    Flatten a native Fp12 element `[[g0, g1, g2], [h0, h1, h2]]`.

    Each g_i / h_i is a pair [c0, c1]. The mapping is positional:
    g_i[j] -> "g{i}{j}", h_i[j] -> "h{i}{j}".

    Args:
        alphabeta12: Native Fp12 element.
        where: Location used in error messages.

    Returns:
        dict[str, str]: The twelve fields g00 .. h21.
    """
    flat = {}
    for n, (prefix, half) in enumerate(zip("gh", coordinates(alphabeta12, where))):
        half_where = f"{where}[{n}]"
        for i, pair in enumerate(coordinates(half, half_where, arity=3)):
            c0, c1 = coordinates(pair, f"{half_where}[{i}]")
            flat[f"{prefix}{i}0"] = field_string(c0, f"{half_where}[{i}][0]")
            flat[f"{prefix}{i}1"] = field_string(c1, f"{half_where}[{i}][1]")
    return flat


def ic_to_fields(ic: Any) -> dict[str, dict[str, str]]:
    """
    Map IC points to named fields: IC[i] -> "ic{i}".

    Unlike the public inputs, IC keeps its 0-based numbering; ic0 is the
    constant term.
    """
    if not isinstance(ic, list):
        raise MalformedInput("expected a JSON array", "IC")
    return {f"ic{i}": g1_to_xy(point, f"IC[{i}]") for i, point in enumerate(ic)}


def snarkjs_vk_to_o1js(vk: dict[str, Any], check_curve: bool = False) -> dict[str, Any]:
    """
    Convert snarkjs verification_key.json to the o1js verification key format.

    Args:
        vk: Dict from snarkjs verification_key.json
        check_curve: Also check that every G1 and G2 point lies on BN254

    Returns:
        Dict with keys alpha, beta, gamma, delta, ic0 .. icM, alpha_beta, w27
    """
    vk_alpha_1 = lookup(vk, "vk_alpha_1")
    vk_beta_2 = lookup(vk, "vk_beta_2")
    vk_gamma_2 = lookup(vk, "vk_gamma_2")
    vk_delta_2 = lookup(vk, "vk_delta_2")
    ic = lookup(vk, "IC")

    # alpha is not negated, only the proof's A is
    alpha = g1_to_xy(vk_alpha_1, "vk_alpha_1")
    beta = g2_to_flat(vk_beta_2, "vk_beta_2")
    gamma = g2_to_flat(vk_gamma_2, "vk_gamma_2")
    delta = g2_to_flat(vk_delta_2, "vk_delta_2")
    ic_fields = ic_to_fields(ic)
    alpha_beta = fp12_to_flat(lookup(vk, "vk_alphabeta_12"))

    if check_curve:
        check_g1(vk_alpha_1, "vk_alpha_1")
        check_g2(vk_beta_2, "vk_beta_2")
        check_g2(vk_gamma_2, "vk_gamma_2")
        check_g2(vk_delta_2, "vk_delta_2")
        for i, point in enumerate(ic):
            check_g1(point, f"IC[{i}]")

    return {
        "alpha": alpha,
        "beta": beta,
        "gamma": gamma,
        "delta": delta,
        **ic_fields,
        "alpha_beta": alpha_beta,
        "w27": dict(W27),
    }


def convert_vk_file(
    vk_path: str | Path,
    output_path: str | Path,
    public_path: str | Path | None = None,
    check_curve: bool = False,
) -> dict[str, Any]:
    """
    Read snarkjs verification_key.json and write the o1js vk.json.

    Args:
        vk_path: Path to snarkjs verification_key.json
        output_path: Path to write the converted key
        public_path: Optional public.json; when given, the key is validated
            against it before converting
        check_curve: Also check that the key's points lie on BN254

    Returns:
        The converted key that was written
    """
    vk = load_json(vk_path)

    if public_path is not None:
        validate(vk, load_json(public_path))

    o1js_vk = snarkjs_vk_to_o1js(vk, check_curve)
    save_json(output_path, o1js_vk)
    return o1js_vk
