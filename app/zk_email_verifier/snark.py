# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# snark.py

"""
Groth16 verification over BN254 with py_ecc.

The proof (A, B, C) is accepted for public inputs s_1..s_n when

    e(A, B) == e(alpha, beta) * e(vk_x, gamma) * e(C, delta)

with vk_x = IC[0] + sum(s_i * IC[i]). Miller loops are multiplied first and
a single final exponentiation is applied to each side.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from py_ecc.fields import optimized_bn128_FQ12 as FQ12
from py_ecc.optimized_bn128 import add, final_exponentiate, multiply, pairing

from zk_email_verifier.bn254 import FR
from zk_email_verifier.groth_convert import Proof
from zk_email_verifier.vk_convert import VerifyingKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedVerifyingKey:
    """A verifying key with e(alpha, beta) precomputed, reusable across calls."""

    vk: VerifyingKey
    alpha_beta_miller: FQ12


def prepare_verifying_key(vk: VerifyingKey) -> PreparedVerifyingKey:
    """
    Precompute the proof-independent Miller loop of a verifying key.

    Args:
        vk: The decoded verifying key.

    Returns:
        The prepared key.
    """
    return PreparedVerifyingKey(
        vk=vk,
        alpha_beta_miller=pairing(vk.beta_g2, vk.alpha_g1, final_exponentiate=False),
    )


def compute_vk_x(ic: Sequence[tuple], inputs: Sequence[FR]) -> tuple:
    """
    Fold the public inputs into the IC coefficients.

    Args:
        ic: The n + 1 IC points of the verifying key.
        inputs: The n public inputs.

    Returns:
        vk_x = IC[0] + sum(inputs[i] * IC[i + 1]).

    Raises:
        ValueError: If `len(ic) != len(inputs) + 1`.
    """
    if len(ic) != len(inputs) + 1:
        raise ValueError(
            f"IC length mismatch: len(IC)={len(ic)} vs len(inputs)+1={len(inputs) + 1}"
        )

    vk_x = ic[0]
    for point, s in zip(ic[1:], inputs):
        vk_x = add(vk_x, multiply(point, int(s)))
    return vk_x


def verify_proof(pvk: PreparedVerifyingKey, proof: Proof, inputs: Sequence[FR]) -> bool:
    """
    Check the Groth16 pairing equation.

    Arithmetic failures (an input count that does not match the key, or a
    point py_ecc rejects) are reported as an invalid proof.

    Args:
        pvk: The prepared verifying key.
        proof: The decoded proof.
        inputs: The decoded public inputs.

    Returns:
        True if the proof is valid for these inputs, False otherwise.
    """
    try:
        vk_x = compute_vk_x(pvk.vk.ic, inputs)

        left = pairing(proof.b, proof.a, final_exponentiate=False)
        right = pvk.alpha_beta_miller
        right = right * pairing(pvk.vk.gamma_g2, vk_x, final_exponentiate=False)
        right = right * pairing(pvk.vk.delta_g2, proof.c, final_exponentiate=False)

        return final_exponentiate(left) == final_exponentiate(right)
    except (AssertionError, ValueError, TypeError, ZeroDivisionError) as e:
        logger.warning("pairing check aborted: %s", e)
        return False
