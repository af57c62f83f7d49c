# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
from py_ecc.bn128 import curve_order

# Modulus the verifier negates A.y under and the bound every coordinate is
# range checked against. This is the BN254 group order r (...495617), not the
# base field modulus q (...208583).
FIELD_MODULUS = curve_order

# Default w27 value shared by every converted key. It is NOT derived from the
# input verification key; replace it with a per-key value once the verifier
# circuit needs one.
W27 = {
    "g00": "0",
    "g01": "0",
    "g10": "0",
    "g11": "0",
    "g20": "8204864362109909869166472767738877274689483185363591877943943203703805152849",
    "g21": "17912368812864921115467448876996876278487602260484145953989158612875588124088",
    "h00": "0",
    "h01": "0",
    "h10": "0",
    "h11": "0",
    "h20": "0",
    "h21": "0",
}

# file defaults
DEFAULT_OUTPUT_DIR = "converted_circuit"
DEFAULT_PROOF_FILENAME = "proof.json"
DEFAULT_VK_FILENAME = "vk.json"
