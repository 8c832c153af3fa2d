# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
import re
from typing import Sequence

from py_ecc.fields import optimized_bn128_FQ as FQ
from py_ecc.fields import optimized_bn128_FQ2 as FQ2
from py_ecc.optimized_bn128 import (
    G1,
    G2,
    Z1,
    Z2,
    b,
    b2,
    curve_order,
    field_modulus,
    is_inf,
    is_on_curve,
    multiply,
    normalize,
)

from zk_email_verifier.errors import MalformedField, MalformedPoint

_DECIMAL = re.compile(r"[0-9]+")


class FR(FQ):
    """Scalar field of BN254, the field public inputs live in."""

    field_modulus = curve_order


def _parse_decimal(s: str, modulus: int, label: str) -> int:
    """
    Parse a canonical decimal string into an integer below `modulus`.

    Only ASCII digits are accepted: no sign, whitespace or underscores,
    which Python's `int()` would otherwise allow.

    Raises:
        MalformedField: If `s` is not a decimal string or is out of range.
    """
    if not isinstance(s, str) or _DECIMAL.fullmatch(s) is None:
        raise MalformedField(
            f"{label} element must be a decimal string, got {s!r:.80}"
        )
    digits = s.lstrip("0")
    # int() refuses very long strings, bound the length first
    if len(digits) > len(str(modulus)):
        raise MalformedField(f"{label} element out of range: {len(s)} digits")
    value = int(digits or "0")
    if value >= modulus:
        raise MalformedField(f"{label} element out of range: {digits}")
    return value


def parse_fq(s: str) -> FQ:
    """
    Parse a decimal string into a base field element.

    Args:
        s (str): Decimal representation, strictly below the base field modulus.

    Returns:
        FQ: The base field element.
    """
    return FQ(_parse_decimal(s, field_modulus, "Fq"))


def parse_fr(s: str) -> FR:
    """
    Parse a decimal string into a scalar field element.

    Args:
        s (str): Decimal representation, strictly below the curve order.

    Returns:
        FR: The scalar field element.
    """
    return FR(_parse_decimal(s, curve_order, "Fr"))


def parse_fq2(c0: str, c1: str) -> FQ2:
    return FQ2([parse_fq(c0).n, parse_fq(c1).n])


def g1_from_affine(x: FQ, y: FQ) -> tuple:
    """
    Build a G1 point from untrusted affine coordinates.

    BN254 G1 has cofactor 1, so curve membership implies subgroup membership.

    Args:
        x (FQ): Affine x coordinate.
        y (FQ): Affine y coordinate.

    Returns:
        tuple: The point in py_ecc's projective representation.

    Raises:
        MalformedPoint: If (x, y) is not on the curve.
    """
    point = (x, y, FQ.one())
    if not is_on_curve(point, b):
        raise MalformedPoint("G1 point is not on the curve")
    return point


def g2_from_affine(x: FQ2, y: FQ2) -> tuple:
    """
    Build a G2 point from untrusted affine coordinates.

    The twist has a large cofactor, so the point is also checked to lie in
    the prime-order subgroup by multiplying it with the curve order.

    Args:
        x (FQ2): Affine x coordinate.
        y (FQ2): Affine y coordinate.

    Returns:
        tuple: The point in py_ecc's projective representation.

    Raises:
        MalformedPoint: If (x, y) is not on the twist or not in the subgroup.
    """
    point = (x, y, FQ2.one())
    if not is_on_curve(point, b2):
        raise MalformedPoint("G2 point is not on the twist")
    if not is_inf(multiply(point, curve_order)):
        raise MalformedPoint("G2 point is not in the prime-order subgroup")
    return point


def g1_from_json(coords: Sequence[str], allow_infinity: bool = False) -> tuple:
    """
    Decode a snarkjs G1 triple `[x, y, z]`.

    The third coordinate is ignored unless `allow_infinity` is set, in which
    case `z == "0"` denotes the point at infinity (as exported for unused
    verifying key coefficients).
    """
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        raise MalformedField("G1 point needs at least two coordinates")
    if allow_infinity and len(coords) >= 3 and coords[2] == "0":
        return Z1
    return g1_from_affine(parse_fq(coords[0]), parse_fq(coords[1]))


def g2_from_json(
    coords: Sequence[Sequence[str]], allow_infinity: bool = False
) -> tuple:
    """
    Decode a snarkjs G2 triple `[[x0, x1], [y0, y1], [z0, z1]]`.

    Each pair is `[c0, c1]` for `c0 + c1 * i`.
    """
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        raise MalformedField("G2 point needs at least two coordinate pairs")
    for pair in coords[:2]:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise MalformedField("G2 coordinate must be a pair of strings")
    if allow_infinity and len(coords) >= 3 and list(coords[2]) == ["0", "0"]:
        return Z2
    x = parse_fq2(coords[0][0], coords[0][1])
    y = parse_fq2(coords[1][0], coords[1][1])
    return g2_from_affine(x, y)


def g1_to_json(point: tuple) -> list[str]:
    """
    Encode a G1 point as a snarkjs decimal triple.

    Args:
        point (tuple): A py_ecc G1 point.

    Returns:
        list[str]: `[x, y, "1"]`, or `["0", "1", "0"]` for infinity.
    """
    if is_inf(point):
        return ["0", "1", "0"]
    x, y = normalize(point)
    return [str(int(x)), str(int(y)), "1"]


def g2_to_json(point: tuple) -> list[list[str]]:
    """
    Encode a G2 point as a snarkjs decimal triple of pairs.

    Args:
        point (tuple): A py_ecc G2 point.

    Returns:
        list[list[str]]: `[[x0, x1], [y0, y1], ["1", "0"]]`.
    """
    if is_inf(point):
        return [["0", "0"], ["1", "0"], ["0", "0"]]
    x, y = normalize(point)
    return [
        [str(int(c)) for c in x.coeffs],
        [str(int(c)) for c in y.coeffs],
        ["1", "0"],
    ]


def g1_point(scalar: int) -> tuple:
    """Multiply the G1 generator by `scalar`."""
    return multiply(G1, scalar % curve_order)


def g2_point(scalar: int) -> tuple:
    """Multiply the G2 generator by `scalar`."""
    return multiply(G2, scalar % curve_order)


g1_identity = Z1
