# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# groth_convert.py

"""
Convert snarkjs Groth16 proof output into py_ecc points and field elements.

snarkjs outputs:
  - proof.json: {pi_a: [x, y, "1"], pi_b: [[x0, x1], [y0, y1], ["1", "0"]],
                 pi_c: [x, y, "1"], protocol, curve}
  - public.json: ["s0", "s1", ...] - decimal scalars in circuit signal order

All coordinates are decimal strings. The projective third coordinate is
ignored and assumed to be one.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from zk_email_verifier.bn254 import (
    FR,
    g1_from_json,
    g1_to_json,
    g2_from_json,
    g2_to_json,
    parse_fr,
)
from zk_email_verifier.errors import MalformedField
from zk_email_verifier.files import load_json


@dataclass(frozen=True)
class ProofInput:
    """Textual proof, mirroring the shape of snarkjs's proof.json."""

    pi_a: Sequence[str]
    pi_b: Sequence[Sequence[str]]
    pi_c: Sequence[str]

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "ProofInput":
        """
        Build a ProofInput from a parsed proof.json.

        Extra keys such as `protocol` and `curve` are ignored.

        Raises:
            MalformedField: If any of pi_a, pi_b, pi_c is missing.
        """
        if not isinstance(data, dict):
            raise MalformedField(f"proof must be an object, got {type(data).__name__}")
        try:
            return cls(pi_a=data["pi_a"], pi_b=data["pi_b"], pi_c=data["pi_c"])
        except KeyError as e:
            raise MalformedField(f"proof is missing {e.args[0]}") from e

    def to_json(self) -> dict[str, Any]:
        return {
            "pi_a": [str(v) for v in self.pi_a],
            "pi_b": [[str(v) for v in pair] for pair in self.pi_b],
            "pi_c": [str(v) for v in self.pi_c],
            "protocol": "groth16",
            "curve": "bn128",
        }


@dataclass(frozen=True)
class Proof:
    """Decoded proof: A and C in G1, B in G2."""

    a: tuple
    b: tuple
    c: tuple


def parse_proof(proof: ProofInput | dict[str, Any]) -> Proof:
    """
    Decode a textual proof into validated curve points.

    Args:
        proof: A ProofInput, or a proof.json dict.

    Returns:
        The decoded Proof.

    Raises:
        MalformedField: If a coordinate is not a canonical base field element
            or the coordinate groups have the wrong shape.
        MalformedPoint: If a decoded point is off the curve or outside the
            prime-order subgroup.
    """
    if not isinstance(proof, ProofInput):
        proof = ProofInput.from_json(proof)

    return Proof(
        a=g1_from_json(proof.pi_a),
        b=g2_from_json(proof.pi_b),
        c=g1_from_json(proof.pi_c),
    )


def parse_public_inputs(inputs: Sequence[str]) -> list[FR]:
    """
    Decode public signals into scalar field elements, preserving order.

    No length check is made here; each consumer validates the length it needs.

    Args:
        inputs: Decimal strings, as found in public.json.

    Returns:
        The scalars in the same order.

    Raises:
        MalformedField: If any entry is not a canonical scalar.
    """
    if not isinstance(inputs, (list, tuple)):
        raise MalformedField("public inputs must be a list of decimal strings")
    return [parse_fr(s) for s in inputs]


def proof_to_json(proof: Proof) -> dict[str, Any]:
    """
    Encode decoded points back into the snarkjs proof.json shape.

    Args:
        proof: A decoded Proof.

    Returns:
        A JSON-serializable dict.
    """
    return ProofInput(
        pi_a=g1_to_json(proof.a),
        pi_b=g2_to_json(proof.b),
        pi_c=g1_to_json(proof.c),
    ).to_json()


def public_inputs_to_json(inputs: Sequence[FR | int]) -> list[str]:
    return [str(int(v)) for v in inputs]


def load_proof_file(path: str | Path) -> ProofInput:
    """
    Read a snarkjs proof.json.

    Args:
        path: Path to proof.json.

    Returns:
        The textual proof, undecoded.
    """
    return ProofInput.from_json(load_json(path, expect=dict))


def load_public_file(path: str | Path) -> list[str]:
    """
    Read a snarkjs public.json.

    Args:
        path: Path to public.json.

    Returns:
        The public signals as decimal strings.

    Raises:
        MalformedField: If the file does not hold a JSON list.
    """
    return [str(v) for v in load_json(path, expect=list)]
