# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# errors.py

"""
Errors raised while converting snarkjs artifacts.

Every error here is fatal for the run: the converters never write a partial
artifact and never coerce bad data. File system problems are not wrapped;
`FileNotFoundError` and other `OSError`s reach the caller unchanged.
"""


class ConversionError(ValueError):
    """Base class for bad native input."""


class StructuralMismatch(ConversionError):
    """
    Two counts that must agree (nPublic, public inputs, IC points) do not.

    Attributes:
        label: Which count was checked, e.g. "VK nPublic" or "VK IC points".
        expected: The count required by the other structure.
        actual: The count found.
    """

    def __init__(self, message: str, label: str, expected: int, actual: int):
        super().__init__(message)
        self.label = label
        self.expected = expected
        self.actual = actual


class MalformedFieldElement(ConversionError):
    """A coordinate is not a decimal integer in [0, p)."""

    def __init__(self, message: str, where: str):
        super().__init__(f"{where}: {message}")
        self.where = where


class MalformedInput(ConversionError):
    """A required key is missing, or a count or list has the wrong JSON type."""

    def __init__(self, message: str, where: str):
        super().__init__(f"{where}: {message}")
        self.where = where


class MalformedPoint(ConversionError):
    """A point, Fp2 pair or Fp12 element has the wrong length or nesting."""

    def __init__(self, message: str, where: str):
        super().__init__(f"{where}: {message}")
        self.where = where


class PointNotOnCurve(ConversionError):
    """A point parsed fine but does not satisfy the BN254 curve equation."""

    def __init__(self, where: str):
        super().__init__(f"{where}: point is not on the BN254 curve")
        self.where = where
