# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
import pytest
from py_ecc.optimized_bn128 import is_inf

from zk_email_verifier.bn254 import (
    FR,
    curve_order,
    field_modulus,
    g1_from_json,
    g1_identity,
    g1_point,
    g1_to_json,
    g2_from_json,
    g2_point,
    g2_to_json,
    parse_fq,
    parse_fr,
)
from zk_email_verifier.errors import MalformedField, MalformedPoint


def test_parse_fr():
    assert parse_fr("0") == FR(0)
    assert int(parse_fr(str(curve_order - 1))) == curve_order - 1


@pytest.mark.parametrize("s", ["", "-1", "+1", " 1", "1 ", "1_0", "0x10", "1e3", "١"])
def test_parse_fr_rejects_non_decimal(s):
    with pytest.raises(MalformedField):
        parse_fr(s)


def test_parse_fr_rejects_non_string():
    with pytest.raises(MalformedField):
        parse_fr(5)


def test_parse_fr_rejects_modulus():
    with pytest.raises(MalformedField):
        parse_fr(str(curve_order))


def test_parse_fr_uses_scalar_modulus():
    # valid base field element, too large for the scalar field
    assert int(parse_fq(str(field_modulus - 1))) == field_modulus - 1
    with pytest.raises(MalformedField):
        parse_fr(str(field_modulus - 1))


def test_parse_rejects_oversized_digit_strings():
    # longer than int() converts by default
    with pytest.raises(MalformedField):
        parse_fr("9" * 5000)
    with pytest.raises(MalformedField):
        parse_fq("1" * 5000)
    with pytest.raises(MalformedField):
        parse_fr("1" * 78)


def test_parse_leading_zeros():
    assert parse_fr("0" * 5000 + "7") == FR(7)
    assert parse_fr("000") == FR(0)


def test_parse_fq_rejects_modulus():
    with pytest.raises(MalformedField):
        parse_fq(str(field_modulus))


def test_g1_generator():
    assert g1_to_json(g1_from_json(["1", "2", "1"])) == ["1", "2", "1"]


def test_g1_projective_coordinate_ignored():
    assert g1_to_json(g1_from_json(["1", "2", "7"])) == ["1", "2", "1"]


def test_g1_off_curve():
    with pytest.raises(MalformedPoint):
        g1_from_json(["1", "3", "1"])


def test_g1_oversized_coordinate():
    with pytest.raises(MalformedField):
        g1_from_json(["1" * 5000, "2", "1"])


def test_g1_too_short():
    with pytest.raises(MalformedField):
        g1_from_json(["1"])
    with pytest.raises(MalformedField):
        g1_from_json("12")


def test_g1_infinity_only_when_allowed():
    assert is_inf(g1_from_json(["0", "1", "0"], allow_infinity=True))
    with pytest.raises(MalformedPoint):
        g1_from_json(["0", "1", "0"])


def test_g1_identity_json():
    assert g1_to_json(g1_identity) == ["0", "1", "0"]


def test_g1_json_round_trip():
    j = g1_to_json(g1_point(123456789))
    assert g1_to_json(g1_from_json(j)) == j


def test_g2_json_round_trip():
    j = g2_to_json(g2_point(987654321))
    assert j[2] == ["1", "0"]
    assert g2_to_json(g2_from_json(j)) == j


def test_g2_off_twist():
    j = g2_to_json(g2_point(1))
    j[1][0] = str((int(j[1][0]) + 1) % field_modulus)
    with pytest.raises(MalformedPoint):
        g2_from_json(j)


def test_g2_bad_shape():
    j = g2_to_json(g2_point(1))
    with pytest.raises(MalformedField):
        g2_from_json([j[0][0], j[1]])
    with pytest.raises(MalformedField):
        g2_from_json([j[0]])


def test_g2_bad_coordinate():
    j = g2_to_json(g2_point(1))
    j[0][1] = str(field_modulus)
    with pytest.raises(MalformedField):
        g2_from_json(j)


if __name__ == "__main__":
    pytest.main()
