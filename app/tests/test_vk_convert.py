# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# tests/test_vk_convert.py

import json
from pathlib import Path

import pytest
from py_ecc.bn128 import G1, G2, multiply

from o1js_convert.constants import W27
from o1js_convert.errors import (
    MalformedFieldElement,
    MalformedInput,
    MalformedPoint,
    PointNotOnCurve,
    StructuralMismatch,
)
from o1js_convert.vk_convert import (
    convert_vk_file,
    fp12_to_flat,
    ic_to_fields,
    snarkjs_vk_to_o1js,
)

ALPHABETA_12 = [
    [["1", "2"], ["3", "4"], ["5", "6"]],
    [["7", "8"], ["9", "10"], ["11", "12"]],
]

# Sample snarkjs verification key with 3 public inputs
SAMPLE_VK = {
    "protocol": "groth16",
    "curve": "bn128",
    "nPublic": 3,
    "vk_alpha_1": [
        "1530864539768127430187315413718498512413236810425812741638946253028746293051",
        "9284637105928374610293847561029384756102938475610293847561029384756109283746",
        "1",
    ],
    "vk_beta_2": [["101", "102"], ["103", "104"], ["1", "0"]],
    "vk_gamma_2": [["201", "202"], ["203", "204"], ["1", "0"]],
    "vk_delta_2": [["301", "302"], ["303", "304"], ["1", "0"]],
    "vk_alphabeta_12": ALPHABETA_12,
    "IC": [
        ["1000", "1001", "1"],
        ["1010", "1011", "1"],
        ["1020", "1021", "1"],
        ["1030", "1031", "1"],
    ],
}


def g1_native(pt) -> list[str]:
    return [str(pt[0].n), str(pt[1].n), "1"]


def g2_native(pt) -> list[list[str]]:
    x, y = pt
    return [
        [str(x.coeffs[0].n), str(x.coeffs[1].n)],
        [str(y.coeffs[0].n), str(y.coeffs[1].n)],
        ["1", "0"],
    ]


class TestFp12ToFlat:
    """Test positional Fp12 flattening."""

    def test_positional_mapping(self):
        assert fp12_to_flat(ALPHABETA_12) == {
            "g00": "1",
            "g01": "2",
            "g10": "3",
            "g11": "4",
            "g20": "5",
            "g21": "6",
            "h00": "7",
            "h01": "8",
            "h10": "9",
            "h11": "10",
            "h20": "11",
            "h21": "12",
        }

    def test_field_order(self):
        assert list(fp12_to_flat(ALPHABETA_12)) == list(W27)

    def test_missing_half(self):
        with pytest.raises(MalformedPoint) as exc:
            fp12_to_flat([ALPHABETA_12[0]])
        assert exc.value.where == "vk_alphabeta_12"

    def test_short_half(self):
        with pytest.raises(MalformedPoint) as exc:
            fp12_to_flat([ALPHABETA_12[0], [["7", "8"], ["9", "10"]]])
        assert exc.value.where == "vk_alphabeta_12[1]"

    def test_extra_half(self):
        with pytest.raises(MalformedPoint) as exc:
            fp12_to_flat([*ALPHABETA_12, ALPHABETA_12[0]])
        assert exc.value.where == "vk_alphabeta_12"

    def test_long_half(self):
        with pytest.raises(MalformedPoint) as exc:
            fp12_to_flat([[*ALPHABETA_12[0], ["0", "0"]], ALPHABETA_12[1]])
        assert exc.value.where == "vk_alphabeta_12[0]"

    def test_long_pair(self):
        bad = [ALPHABETA_12[0], [["7", "8"], ["9", "10", "0"], ["11", "12"]]]
        with pytest.raises(MalformedPoint) as exc:
            fp12_to_flat(bad)
        assert exc.value.where == "vk_alphabeta_12[1][1]"

    def test_malformed_coefficient_location(self):
        bad = [ALPHABETA_12[0], [["7", "8"], ["9", "ten"], ["11", "12"]]]
        with pytest.raises(MalformedFieldElement) as exc:
            fp12_to_flat(bad)
        assert exc.value.where == "vk_alphabeta_12[1][1][1]"


class TestIcToFields:
    """Test 0-indexed IC fields."""

    def test_zero_indexed(self):
        result = ic_to_fields(SAMPLE_VK["IC"])

        assert list(result) == ["ic0", "ic1", "ic2", "ic3"]
        assert result["ic0"] == {"x": "1000", "y": "1001"}
        assert result["ic3"] == {"x": "1030", "y": "1031"}
        assert "ic4" not in result

    def test_only_constant_term(self):
        assert ic_to_fields([["5", "6", "1"]]) == {"ic0": {"x": "5", "y": "6"}}

    def test_not_a_list(self):
        with pytest.raises(MalformedInput) as exc:
            ic_to_fields({"0": ["1", "2"]})
        assert exc.value.where == "IC"

    def test_malformed_point_location(self):
        with pytest.raises(MalformedFieldElement) as exc:
            ic_to_fields([["1", "2"], ["3", "-4"]])
        assert exc.value.where == "IC[1][1]"


class TestSnarkjsVkToO1js:
    """Test verification key conversion."""

    def test_field_order(self):
        result = snarkjs_vk_to_o1js(SAMPLE_VK)

        assert list(result) == [
            "alpha",
            "beta",
            "gamma",
            "delta",
            "ic0",
            "ic1",
            "ic2",
            "ic3",
            "alpha_beta",
            "w27",
        ]

    def test_alpha_is_not_negated(self):
        result = snarkjs_vk_to_o1js(SAMPLE_VK)

        assert result["alpha"] == {
            "x": SAMPLE_VK["vk_alpha_1"][0],
            "y": SAMPLE_VK["vk_alpha_1"][1],
        }

    def test_g2_points(self):
        result = snarkjs_vk_to_o1js(SAMPLE_VK)

        assert result["beta"] == {"x_c0": "101", "x_c1": "102", "y_c0": "103", "y_c1": "104"}
        assert result["gamma"] == {"x_c0": "201", "x_c1": "202", "y_c0": "203", "y_c1": "204"}
        assert result["delta"] == {"x_c0": "301", "x_c1": "302", "y_c0": "303", "y_c1": "304"}

    def test_alpha_beta(self):
        result = snarkjs_vk_to_o1js(SAMPLE_VK)

        assert result["alpha_beta"] == fp12_to_flat(ALPHABETA_12)

    def test_w27_is_fixed(self):
        other = {
            **SAMPLE_VK,
            "vk_alphabeta_12": [
                [["21", "22"], ["23", "24"], ["25", "26"]],
                [["27", "28"], ["29", "30"], ["31", "32"]],
            ],
        }

        first = snarkjs_vk_to_o1js(SAMPLE_VK)["w27"]
        second = snarkjs_vk_to_o1js(other)["w27"]

        assert first == second == W27
        assert first["g20"] == (
            "8204864362109909869166472767738877274689483185363591877943943203703805152849"
        )
        assert first["g21"] == (
            "17912368812864921115467448876996876278487602260484145953989158612875588124088"
        )

    def test_w27_is_a_copy(self):
        result = snarkjs_vk_to_o1js(SAMPLE_VK)
        result["w27"]["g00"] = "99"

        assert W27["g00"] == "0"

    def test_missing_key(self):
        vk = {k: v for k, v in SAMPLE_VK.items() if k != "vk_gamma_2"}
        with pytest.raises(MalformedInput) as exc:
            snarkjs_vk_to_o1js(vk)
        assert exc.value.where == "vk_gamma_2"

    def test_ignores_extra_fields(self):
        result = snarkjs_vk_to_o1js(SAMPLE_VK)

        assert "protocol" not in result
        assert "nPublic" not in result

    def test_deterministic(self):
        assert json.dumps(snarkjs_vk_to_o1js(SAMPLE_VK)) == json.dumps(
            snarkjs_vk_to_o1js(SAMPLE_VK)
        )


class TestCurveCheck:
    """Test optional curve membership checks on verification keys."""

    @staticmethod
    def real_vk() -> dict:
        return {
            **SAMPLE_VK,
            "vk_alpha_1": g1_native(multiply(G1, 3)),
            "vk_beta_2": g2_native(multiply(G2, 5)),
            "vk_gamma_2": g2_native(G2),
            "vk_delta_2": g2_native(multiply(G2, 9)),
            "IC": [g1_native(multiply(G1, k)) for k in (2, 4, 6, 8)],
        }

    def test_valid_key_passes(self):
        result = snarkjs_vk_to_o1js(self.real_vk(), check_curve=True)
        assert len([k for k in result if k.startswith("ic")]) == 4

    def test_ic_at_infinity_passes(self):
        vk = self.real_vk()
        vk["IC"][0] = ["0", "1", "0"]
        result = snarkjs_vk_to_o1js(vk, check_curve=True)
        assert result["ic0"] == {"x": "0", "y": "1"}

    def test_bad_ic_rejected(self):
        vk = self.real_vk()
        vk["IC"][2] = ["1", "3", "1"]
        with pytest.raises(PointNotOnCurve) as exc:
            snarkjs_vk_to_o1js(vk, check_curve=True)
        assert exc.value.where == "IC[2]"

    def test_bad_beta_rejected(self):
        vk = {**SAMPLE_VK, "vk_alpha_1": g1_native(G1)}
        with pytest.raises(PointNotOnCurve) as exc:
            snarkjs_vk_to_o1js(vk, check_curve=True)
        assert exc.value.where == "vk_beta_2"


class TestFileConversion:
    """Test file-based conversion."""

    def test_convert_vk_file(self, tmp_path: Path):
        input_path = tmp_path / "verification_key.json"
        output_path = tmp_path / "vk.json"

        with open(input_path, "w") as f:
            json.dump(SAMPLE_VK, f)

        convert_vk_file(input_path, output_path)

        with open(output_path, "r") as f:
            result = json.load(f)

        assert result == snarkjs_vk_to_o1js(SAMPLE_VK)

    def test_validates_against_public(self, tmp_path: Path):
        input_path = tmp_path / "verification_key.json"
        public_path = tmp_path / "public.json"
        output_path = tmp_path / "vk.json"

        with open(input_path, "w") as f:
            json.dump(SAMPLE_VK, f)
        with open(public_path, "w") as f:
            json.dump(["1", "2"], f)

        with pytest.raises(StructuralMismatch):
            convert_vk_file(input_path, output_path, public_path)

        assert not output_path.exists()

    def test_output_is_byte_identical(self, tmp_path: Path):
        input_path = tmp_path / "verification_key.json"
        with open(input_path, "w") as f:
            json.dump(SAMPLE_VK, f)

        convert_vk_file(input_path, tmp_path / "a.json")
        convert_vk_file(input_path, tmp_path / "b.json")

        assert (tmp_path / "a.json").read_bytes() == (tmp_path / "b.json").read_bytes()


if __name__ == "__main__":
    pytest.main()
