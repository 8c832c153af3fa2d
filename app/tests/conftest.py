# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# tests/conftest.py

"""
Shared fixtures.

Real RecoverEmailCircuit proofs need the circuit artifacts and a prover, so
the verifier is exercised with a synthetic Groth16 instance instead. Knowing
the trapdoor (alpha, beta, gamma, delta and the IC discrete logs) lets us pick
A and B freely and solve for C:

    a*b = alpha*beta + gamma*x + delta*c,   x = u_0 + sum(u_i * s_i)

which is exactly the equation the pairing check tests in the exponent.
"""

import pytest

from zk_email_verifier.bn254 import curve_order, g1_point, g2_point
from zk_email_verifier.config import reset_verifying_key_cache
from zk_email_verifier.groth_convert import Proof, proof_to_json
from zk_email_verifier.packing import pack_str_to_field_chunks
from zk_email_verifier.verifier import ZkEmailVerifier
from zk_email_verifier.vk_convert import VerifyingKey, vk_from_json, vk_to_json

# toxic waste, fixed so the fixtures are deterministic
ALPHA = 0x1F2E3D4C5B6A7988
BETA = 0x2A3B4C5D6E7F8091
GAMMA = 0x13579BDF2468ACE0
DELTA = 0x0FEDCBA987654321
PROOF_A = 0x3C3C3C3C5A5A5A5A
PROOF_B = 0x7171717117171717

EMAIL = {
    "request_id": "a1b2c3",
    "account_id": "kerp30.w3a-v1.testnet",
    "new_public_key": "86mqiBdv45gM4c5uLmvT3TU4g7DAg6KLpuabBSFweigm",
    "from_email": "n6378056@gmail.com",
    "timestamp": "Tue, 9 Dec 2025 17:13:23 +0900",
}
EMAIL_TIMESTAMP_MS = 1765268003000


def ic_scalar(i: int) -> int:
    return 1000 + 7 * i


def make_groth16(inputs: list[int]) -> tuple[dict, dict]:
    """
    Build a verification_key.json and a matching proof.json for `inputs`.

    Args:
        inputs: Public inputs as integers below the curve order.

    Returns:
        (vk_json, proof_json) in snarkjs shape.
    """
    n = len(inputs)
    x = ic_scalar(0)
    for i, s in enumerate(inputs):
        x += ic_scalar(i + 1) * s
    x %= curve_order

    c = (PROOF_A * PROOF_B - ALPHA * BETA - GAMMA * x) * pow(DELTA, -1, curve_order)
    c %= curve_order

    vk = VerifyingKey(
        alpha_g1=g1_point(ALPHA),
        beta_g2=g2_point(BETA),
        gamma_g2=g2_point(GAMMA),
        delta_g2=g2_point(DELTA),
        ic=tuple(g1_point(ic_scalar(i)) for i in range(n + 1)),
    )
    proof = Proof(a=g1_point(PROOF_A), b=g2_point(PROOF_B), c=g1_point(c))
    return vk_to_json(vk), proof_to_json(proof)


def email_public_inputs(**overrides: str) -> list[str]:
    """The 79 RecoverEmailCircuit public signals for EMAIL, as decimal strings."""
    values = {**EMAIL, **overrides}
    signals: list[int] = []
    for name in list(EMAIL):
        signals += [int(fr) for fr in pack_str_to_field_chunks(values[name])]
    # RSA-2048 modulus and signature limbs, 121 bits each
    signals += [(0x1D2C3B4A5968778 * (i + 3)) % (1 << 121) for i in range(17)]
    signals += [(0x0A1B2C3D4E5F607 * (i + 11)) % (1 << 121) for i in range(17)]
    return [str(s) for s in signals]


@pytest.fixture(scope="session")
def public_inputs() -> list[str]:
    return email_public_inputs()


@pytest.fixture(scope="session")
def groth16(public_inputs) -> tuple[dict, dict]:
    return make_groth16([int(s) for s in public_inputs])


@pytest.fixture(scope="session")
def vk_json(groth16) -> dict:
    return groth16[0]


@pytest.fixture(scope="session")
def proof_json(groth16) -> dict:
    return groth16[1]


@pytest.fixture(scope="session")
def verifier(vk_json) -> ZkEmailVerifier:
    return ZkEmailVerifier(vk_from_json(vk_json))


@pytest.fixture(autouse=True)
def _clean_vk_cache():
    reset_verifying_key_cache()
    yield
    reset_verifying_key_cache()
