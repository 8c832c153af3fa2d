# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# vk_convert.py

"""
Convert a snarkjs verification_key.json into py_ecc points.

snarkjs outputs:
  - verification_key.json: {protocol, curve, nPublic, vk_alpha_1, vk_beta_2,
    vk_gamma_2, vk_delta_2, vk_alphabeta_12, IC}

Only alpha (G1), beta, gamma, delta (G2) and IC (G1, nPublic + 1 entries)
are used. `vk_alphabeta_12` is recomputed when the key is prepared.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from zk_email_verifier.bn254 import g1_from_json, g1_to_json, g2_from_json, g2_to_json
from zk_email_verifier.errors import MalformedField
from zk_email_verifier.files import load_json, save_json


@dataclass(frozen=True)
class VerifyingKey:
    """Groth16 verifying key for one circuit."""

    alpha_g1: tuple
    beta_g2: tuple
    gamma_g2: tuple
    delta_g2: tuple
    ic: tuple[tuple, ...]

    @property
    def n_public(self) -> int:
        return len(self.ic) - 1


def vk_from_json(vk: dict[str, Any]) -> VerifyingKey:
    """
    Decode a snarkjs verification key.

    Args:
        vk: Dict from snarkjs's verification_key.json.

    Returns:
        The decoded VerifyingKey.

    Raises:
        MalformedField: If a field is missing, a coordinate does not parse,
            or `IC` does not hold `nPublic + 1` points.
        MalformedPoint: If a point is off the curve or outside its subgroup.
    """
    if not isinstance(vk, dict):
        raise MalformedField(
            f"verifying key must be an object, got {type(vk).__name__}"
        )

    protocol = vk.get("protocol", "groth16")
    if protocol != "groth16":
        raise MalformedField(f"unsupported protocol {protocol!r}")

    try:
        alpha = g1_from_json(vk["vk_alpha_1"])
        beta = g2_from_json(vk["vk_beta_2"])
        gamma = g2_from_json(vk["vk_gamma_2"])
        delta = g2_from_json(vk["vk_delta_2"])
        ic_json = vk["IC"]
    except KeyError as e:
        raise MalformedField(f"verifying key is missing {e.args[0]}") from e

    if not isinstance(ic_json, list) or not ic_json:
        raise MalformedField("verifying key IC must be a non-empty list of points")
    ic = tuple(g1_from_json(p, allow_infinity=True) for p in ic_json)

    n_public = vk.get("nPublic")
    if n_public is not None:
        if isinstance(n_public, bool) or not isinstance(n_public, int):
            raise MalformedField(f"nPublic must be an integer, got {n_public!r:.40}")
        if n_public + 1 != len(ic):
            raise MalformedField(
                f"IC length mismatch: len(IC)={len(ic)} vs nPublic+1={n_public + 1}"
            )

    return VerifyingKey(
        alpha_g1=alpha,
        beta_g2=beta,
        gamma_g2=gamma,
        delta_g2=delta,
        ic=ic,
    )


def vk_to_json(vk: VerifyingKey) -> dict[str, Any]:
    """
    Encode a VerifyingKey in the snarkjs verification_key.json shape.

    Args:
        vk: The key to encode.

    Returns:
        A JSON-serializable dict (without `vk_alphabeta_12`).
    """
    return {
        "protocol": "groth16",
        "curve": "bn128",
        "nPublic": vk.n_public,
        "vk_alpha_1": g1_to_json(vk.alpha_g1),
        "vk_beta_2": g2_to_json(vk.beta_g2),
        "vk_gamma_2": g2_to_json(vk.gamma_g2),
        "vk_delta_2": g2_to_json(vk.delta_g2),
        "IC": [g1_to_json(p) for p in vk.ic],
    }


def load_vk_file(path: str | Path) -> VerifyingKey:
    """
    Read and decode a snarkjs verification_key.json.

    Args:
        path: Path to the key file.

    Returns:
        The decoded VerifyingKey.
    """
    return vk_from_json(load_json(path, expect=dict))


def save_vk_file(vk: VerifyingKey, path: str | Path) -> None:
    save_json(path, vk_to_json(vk))
