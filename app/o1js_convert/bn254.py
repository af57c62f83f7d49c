# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
import re
from typing import Any

from py_ecc.bn128 import bn128_curve as curve
from py_ecc.fields import bn128_FQ as FQ
from py_ecc.fields import bn128_FQ2 as FQ2

from o1js_convert.constants import FIELD_MODULUS
from o1js_convert.errors import (
    MalformedFieldElement,
    MalformedInput,
    MalformedPoint,
    PointNotOnCurve,
)

_DECIMAL = re.compile(r"[0-9]+")


def field_element(value: Any, where: str) -> int:
    """
    Parse a snarkjs field element into an integer in [0, p).

    snarkjs writes every coordinate as a base-10 string. Plain JSON integers
    are accepted too; booleans, floats, signs, hex and whitespace are not.

    Args:
        value: The raw JSON value.
        where: Location used in the error message, e.g. "pi_a[1]".

    Returns:
        int: The parsed value.

    Raises:
        MalformedFieldElement: If the value is not a decimal integer below
            the BN254 field modulus.
    """
    if isinstance(value, bool):
        raise MalformedFieldElement(f"expected a decimal string, got {value!r}", where)
    if isinstance(value, int):
        n = value
    elif isinstance(value, str) and _DECIMAL.fullmatch(value):
        n = int(value, 10)
    else:
        raise MalformedFieldElement(f"expected a decimal string, got {value!r}", where)

    if n < 0:
        raise MalformedFieldElement(f"negative value {n}", where)
    if n >= FIELD_MODULUS:
        raise MalformedFieldElement(f"value is not below {FIELD_MODULUS}", where)
    return n


def field_string(value: Any, where: str) -> str:
    """
    Validate a field element and return it as a decimal string.

    Strings pass through untouched so the output is a pure relabeling of the
    input; integers are rendered with `str`.
    """
    n = field_element(value, where)
    return value if isinstance(value, str) else str(n)


def negate_y(value: Any, where: str) -> str:
    """
    Negate a G1 y-coordinate: (p - y) mod p, as a decimal string.

    p is FIELD_MODULUS, the modulus the o1js verifier negates under. Plain
    Python ints keep the arithmetic exact.

    Args:
        value: The y-coordinate as a decimal string.
        where: Location used in error messages.

    Returns:
        str: The negated coordinate.
    """
    return str((FIELD_MODULUS - field_element(value, where)) % FIELD_MODULUS)


def lookup(obj: Any, key: str, where: str = "") -> Any:
    """Fetch `obj[key]`, raising MalformedInput if it is absent."""
    name = f"{where}.{key}" if where else key
    if not isinstance(obj, dict):
        raise MalformedInput("expected a JSON object", where or "input")
    if key not in obj:
        raise MalformedInput("missing", name)
    return obj[key]


def coordinates(point: Any, where: str, arity: int = 2, projective: bool = False) -> list:
    """
    Return the entries of a native point, pair or Fp12 half, checking its length.

    The length must be exactly `arity`. With `projective`, one extra trailing
    entry is allowed: the z coordinate snarkjs appends to G1 and G2 points.
    """
    sizes = (arity, arity + 1) if projective else (arity,)
    if not isinstance(point, list) or len(point) not in sizes:
        expected = " or ".join(str(n) for n in sizes)
        raise MalformedPoint(f"expected a list of {expected} entries", where)
    return point


def g1_affine(point: Any, where: str) -> tuple[Any, Any, bool]:
    """
    Split a native G1 point `[x, y]` or `[x, y, z]` into x, y and an infinity flag.

    z must be 1, except for the point at infinity, which snarkjs writes as
    `["0", "1", "0"]`.

    Raises:
        MalformedPoint: For any other z.
    """
    entries = coordinates(point, where, projective=True)
    x, y = entries[:2]
    if len(entries) == 2:
        return x, y, False

    z = field_element(entries[2], f"{where}[2]")
    if z == 1:
        return x, y, False
    if z == 0 and (field_element(x, f"{where}[0]"), field_element(y, f"{where}[1]")) == (0, 1):
        return x, y, True
    raise MalformedPoint("z must be 1, or the point at infinity (0, 1, 0)", where)


def g2_affine(point: Any, where: str) -> tuple[list, list, bool]:
    """
    Split a native G2 point `[[x_c0, x_c1], [y_c0, y_c1], [z_c0, z_c1]]`.

    The z row is optional. When present it must be `["1", "0"]`, or the point
    at infinity `[["0", "0"], ["1", "0"], ["0", "0"]]`.

    Raises:
        MalformedPoint: For a badly nested point or any other z.
    """
    entries = coordinates(point, where, projective=True)
    x = coordinates(entries[0], f"{where}[0]")
    y = coordinates(entries[1], f"{where}[1]")
    if len(entries) == 2:
        return x, y, False

    z = [
        field_element(c, f"{where}[2][{i}]")
        for i, c in enumerate(coordinates(entries[2], f"{where}[2]"))
    ]
    if z == [1, 0]:
        return x, y, False
    if z == [0, 0]:
        xs = [field_element(c, f"{where}[0][{i}]") for i, c in enumerate(x)]
        ys = [field_element(c, f"{where}[1][{i}]") for i, c in enumerate(y)]
        if xs == [0, 0] and ys == [1, 0]:
            return x, y, True
    raise MalformedPoint("z must be [1, 0], or the point at infinity", where)


def g1_to_xy(point: Any, where: str) -> dict[str, str]:
    """
    Rename a native G1 point `[x, y, z]` to `{x, y}`.

    Args:
        point: Native G1 point.
        where: Location used in error messages, e.g. "pi_c".

    Returns:
        dict[str, str]: `{"x": ..., "y": ...}`
    """
    x, y, _ = g1_affine(point, where)
    return {
        "x": field_string(x, f"{where}[0]"),
        "y": field_string(y, f"{where}[1]"),
    }


def negate_g1(point: Any, where: str) -> dict[str, str]:
    """
    Negate a native G1 point: `(x, y) -> (x, p - y)`.

    Only the proof's A point is negated; the verifier circuit checks
    e(-A, B) * e(alpha, beta) * e(vk_x, gamma) * e(C, delta) == 1.
    p is not the base field modulus, so the result is generally off the
    curve; curve checks run on the input point.
    """
    x, y, _ = g1_affine(point, where)
    return {
        "x": field_string(x, f"{where}[0]"),
        "y": negate_y(y, f"{where}[1]"),
    }


def g2_to_flat(point: Any, where: str) -> dict[str, str]:
    """
    Flatten a native G2 point `[[x_c0, x_c1], [y_c0, y_c1], [z_c0, z_c1]]`.

    Args:
        point: Native G2 point.
        where: Location used in error messages, e.g. "vk_beta_2".

    Returns:
        dict[str, str]: `{"x_c0", "x_c1", "y_c0", "y_c1"}` in that order.
    """
    (x_c0, x_c1), (y_c0, y_c1), _ = g2_affine(point, where)
    return {
        "x_c0": field_string(x_c0, f"{where}[0][0]"),
        "x_c1": field_string(x_c1, f"{where}[0][1]"),
        "y_c0": field_string(y_c0, f"{where}[1][0]"),
        "y_c1": field_string(y_c1, f"{where}[1][1]"),
    }


def check_g1(point: Any, where: str) -> None:
    """
    Check a native G1 point against y^2 = x^3 + 3.

    The point at infinity passes.

    Raises:
        PointNotOnCurve: If the equation does not hold.
    """
    x, y, infinity = g1_affine(point, where)
    if infinity:
        return
    pt = (FQ(field_element(x, f"{where}[0]")), FQ(field_element(y, f"{where}[1]")))
    if not curve.is_on_curve(pt, curve.b):
        raise PointNotOnCurve(where)


def check_g2(point: Any, where: str) -> None:
    """
    Check a native G2 point against the twist y^2 = x^3 + 3 / (9 + u).

    The point at infinity passes.

    Raises:
        PointNotOnCurve: If the equation does not hold.
    """
    x, y, infinity = g2_affine(point, where)
    if infinity:
        return
    fx = FQ2([field_element(c, f"{where}[0][{i}]") for i, c in enumerate(x)])
    fy = FQ2([field_element(c, f"{where}[1][{i}]") for i, c in enumerate(y)])
    if not curve.is_on_curve((fx, fy), curve.b2):
        raise PointNotOnCurve(where)
