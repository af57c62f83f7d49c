# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
import os

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from o1js_convert.constants import (
    DEFAULT_PROOF_FILENAME,
    DEFAULT_VK_FILENAME,
)
from o1js_convert.files import load_json, save_json
from o1js_convert.groth_convert import snarkjs_proof_to_o1js, validate
from o1js_convert.vk_convert import snarkjs_vk_to_o1js


@dataclass
class ConversionSummary:
    proof_path: Path
    vk_path: Path
    proof: dict[str, Any]
    vk: dict[str, Any]
    n_public: int
    n_ic: int


def convert_all(
    proof_path: str | Path,
    public_path: str | Path,
    vk_path: str | Path,
    output_dir: str | Path,
    proof_filename: str = DEFAULT_PROOF_FILENAME,
    vk_filename: str = DEFAULT_VK_FILENAME,
    check_curve: bool = False,
) -> ConversionSummary:
    """
    Convert a snarkjs proof, its public inputs and its verification key.

    Steps:
    1. Load proof.json, public.json and verification_key.json.
    2. `validate` the key against the public inputs (nPublic and IC counts).
    3. Convert the proof, then the key, entirely in memory.
    4. Write `<output_dir>/<proof_filename>` and `<output_dir>/<vk_filename>`.

    Nothing is written unless steps 1-3 all succeed, and step 4 writes both
    files or neither (see `write_all`), so a failed run never leaves a
    half-converted directory behind.

    Args:
        proof_path: Path to snarkjs proof.json
        public_path: Path to snarkjs public.json
        vk_path: Path to snarkjs verification_key.json
        output_dir: Directory to write output files
        proof_filename: Name for the converted proof
        vk_filename: Name for the converted verification key
        check_curve: Also check every point lies on BN254

    Returns:
        ConversionSummary describing what was written.

    Raises:
        StructuralMismatch: If the counts disagree.
        MalformedFieldElement, MalformedInput, MalformedPoint,
            PointNotOnCurve: On bad input.
        FileNotFoundError: If an input file is missing.
        OSError: If an output file cannot be written.
    """
    proof = load_json(proof_path)
    public_inputs = load_json(public_path)
    vk = load_json(vk_path)

    validate(vk, public_inputs)

    o1js_proof = snarkjs_proof_to_o1js(proof, public_inputs, check_curve)
    o1js_vk = snarkjs_vk_to_o1js(vk, check_curve)

    output_dir = Path(output_dir)
    summary = ConversionSummary(
        proof_path=output_dir / proof_filename,
        vk_path=output_dir / vk_filename,
        proof=o1js_proof,
        vk=o1js_vk,
        n_public=len(public_inputs),
        n_ic=len(vk["IC"]),
    )

    write_all([(summary.proof_path, o1js_proof), (summary.vk_path, o1js_vk)])
    return summary


def write_all(outputs: list[tuple[Path, Any]]) -> None:
    """
    Write several JSON files so that either all of them land or none do.

    Every file is first written next to its target under a temporary name,
    then moved into place with `os.replace`. If any step fails, the temporary
    files and any targets already moved into place by this call are removed
    before the error propagates.

    Raises:
        OSError: If a file cannot be written or moved.
    """
    staged = []
    placed = []
    try:
        for target, data in outputs:
            tmp = target.with_name(f".{target.name}.{os.getpid()}.tmp")
            staged.append(tmp)
            save_json(tmp, data)
        for tmp, (target, _) in zip(staged, outputs):
            os.replace(tmp, target)
            placed.append(target)
    except OSError:
        for path in staged + placed:
            path.unlink(missing_ok=True)
        raise


def summary_lines(summary: ConversionSummary) -> list[str]:
    """Human readable report of a conversion, one line per entry."""
    neg_a = summary.proof["negA"]
    c = summary.proof["C"]
    alpha = summary.vk["alpha"]

    if summary.n_public:
        inputs = f"pi1-pi{summary.n_public}: {summary.n_public} public inputs"
    else:
        inputs = "no public inputs"

    return [
        "Proof:",
        f"  negA: ({neg_a['x'][:20]}..., {neg_a['y'][:20]}...)",
        "  B: G2 point with 4 coordinates",
        f"  C: ({c['x'][:20]}..., {c['y'][:20]}...)",
        f"  {inputs}",
        "Verification key:",
        f"  alpha: ({alpha['x'][:20]}..., {alpha['y'][:20]}...)",
        "  beta, gamma, delta: G2 points",
        f"  ic0-ic{summary.n_ic - 1}: {summary.n_ic} points",
        "  alpha_beta: Fp12 from original VK",
        "  w27: default value",
        "Files saved:",
        f"  - {summary.proof_path}",
        f"  - {summary.vk_path}",
    ]
