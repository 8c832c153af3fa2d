# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# verifier.py

"""
Verify RecoverEmailCircuit proofs and read back the substrings they bind.

The circuit proves that a DKIM-signed email with subject
"recover-<request_id> <account_id> ed25519:<new_public_key>" was sent from
<from_email> at <timestamp>, and exposes those substrings packed into its
public inputs (see `constants.PUBLIC_INPUT_LAYOUT`).

Both entry points are pure: every call decodes, checks and returns a fresh
VerificationResult. Decoding, binding and pairing failures all produce
`verified=False`; only a missing verifying key raises.
"""

import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Sequence

import cbor2

from zk_email_verifier.binding import check_binding, slice_signal
from zk_email_verifier.bn254 import FR
from zk_email_verifier.config import configured_verifying_key
from zk_email_verifier.constants import BOUND_SIGNALS, EXPECTED_PUBLIC_LEN
from zk_email_verifier.errors import InvalidUtf8, VerificationFailed, VerifierError
from zk_email_verifier.files import save_json
from zk_email_verifier.groth_convert import (
    Proof,
    ProofInput,
    parse_proof,
    parse_public_inputs,
)
from zk_email_verifier.hashing import from_address_hash
from zk_email_verifier.packing import unpack_field_chunks_to_str
from zk_email_verifier.snark import (
    PreparedVerifyingKey,
    prepare_verifying_key,
    verify_proof,
)
from zk_email_verifier.timestamp import parse_email_timestamp_to_unix_ms
from zk_email_verifier.vk_convert import VerifyingKey

logger = logging.getLogger(__name__)

RESULT_FIELDS = (
    "verified",
    "account_id",
    "new_public_key",
    "from_address",
    "email_timestamp_ms",
)


@dataclass(frozen=True)
class VerificationResult:
    verified: bool = False
    account_id: str = ""
    new_public_key: str = ""
    from_address: str = ""
    email_timestamp_ms: int | None = None

    def to_json(self) -> dict[str, Any]:
        return asdict(self)

    def to_cbor(self) -> bytes:
        """
        Encode the result as a canonical CBOR map keyed by field name.

        Returns:
            Canonical CBOR bytes, identical for identical results.
        """
        return cbor2.dumps(self.to_json(), canonical=True)

    @classmethod
    def from_cbor(cls, data: bytes) -> "VerificationResult":
        """
        Decode a result produced by `to_cbor`.

        Raises:
            ValueError: If the map does not have exactly the result fields.
        """
        m = cbor2.loads(data)
        if not isinstance(m, dict):
            raise ValueError(f"Expected CBOR map, got {type(m).__name__}")
        if set(m) != set(RESULT_FIELDS):
            raise ValueError(f"Expected keys {RESULT_FIELDS}, got {sorted(m)}")
        return cls(**m)

    def from_address_hash(self) -> bytes | None:
        """
        Salted digest of the sender, for callers that must not store it in
        cleartext. None when no sender was extracted.
        """
        if not self.from_address:
            return None
        return from_address_hash(self.from_address, self.account_id)

    def to_file(self, path: str | Path) -> None:
        save_json(path, self.to_json())


def _unpack_signal(inputs: Sequence[FR], name: str) -> str | None:
    try:
        return unpack_field_chunks_to_str(slice_signal(inputs, name))
    except InvalidUtf8 as e:
        logger.info("cannot extract %s: %s", name, e)
        return None


def extract_fields(inputs: Sequence[FR]) -> dict[str, Any]:
    """
    Read the bound substrings out of a public-input vector.

    Fields that do not decode are left empty instead of failing the whole
    extraction.

    Args:
        inputs: The decoded public inputs, at least `EXPECTED_PUBLIC_LEN` long.

    Returns:
        Keyword arguments for VerificationResult, without `verified`.
    """
    timestamp = _unpack_signal(inputs, "timestamp")
    return {
        "account_id": _unpack_signal(inputs, "account_id") or "",
        "new_public_key": _unpack_signal(inputs, "new_public_key") or "",
        "from_address": _unpack_signal(inputs, "from_email") or "",
        "email_timestamp_ms": (
            parse_email_timestamp_to_unix_ms(timestamp)
            if timestamp is not None
            else None
        ),
    }


class ZkEmailVerifier:
    """
    Groth16 verifier for RecoverEmailCircuit proofs.

    Args:
        vk: The circuit's verifying key, raw or prepared. When omitted the
            key configured through ZK_EMAIL_VK_PATH is used.

    Raises:
        ConfigurationError: If no key is given and none is configured.
    """

    def __init__(self, vk: VerifyingKey | PreparedVerifyingKey | None = None):
        if vk is None:
            self.pvk = configured_verifying_key()
        elif isinstance(vk, VerifyingKey):
            self.pvk = prepare_verifying_key(vk)
        else:
            self.pvk = vk

    def _decode(
        self, proof: ProofInput | dict[str, Any], public_inputs: Sequence[str]
    ) -> tuple[Proof, list[FR]]:
        return parse_proof(proof), parse_public_inputs(public_inputs)

    def _check_pairing(self, proof: Proof, inputs: Sequence[FR]) -> None:
        if not verify_proof(self.pvk, proof, inputs):
            raise VerificationFailed("pairing equation does not hold")

    def verify(
        self, proof: ProofInput | dict[str, Any], public_inputs: Sequence[str]
    ) -> VerificationResult:
        """
        Verify a proof and extract the substrings it binds.

        Extraction only happens for a valid proof whose public-input vector
        covers the full circuit layout; a shorter vector can still verify
        against a matching key but yields no fields.

        Args:
            proof: The proof, as a ProofInput or a snarkjs proof.json dict.
            public_inputs: Decimal strings from public.json.

        Returns:
            The verification result.
        """
        try:
            decoded, inputs = self._decode(proof, public_inputs)
            self._check_pairing(decoded, inputs)
        except VerifierError as e:
            logger.info("proof rejected: %s: %s", type(e).__name__, e)
            return VerificationResult()

        if len(inputs) < EXPECTED_PUBLIC_LEN:
            logger.debug(
                "proof verified with %d public inputs, nothing to extract", len(inputs)
            )
            return VerificationResult(verified=True)

        logger.debug("proof verified")
        return VerificationResult(verified=True, **extract_fields(inputs))

    def verify_with_binding(
        self,
        proof: ProofInput | dict[str, Any],
        public_inputs: Sequence[str],
        account_id: str,
        new_public_key: str,
        from_email: str,
        timestamp: str,
    ) -> VerificationResult:
        """
        Verify a proof after checking it binds the caller's plaintexts.

        The claimed account id, new public key, sender and Date: value are
        packed and compared against their public-input slots before any
        pairing work is done. The result always echoes the claims.

        Args:
            proof: The proof, as a ProofInput or a snarkjs proof.json dict.
            public_inputs: Decimal strings from public.json, exactly
                `EXPECTED_PUBLIC_LEN` of them.
            account_id: Claimed account being recovered.
            new_public_key: Claimed replacement key.
            from_email: Claimed sender address.
            timestamp: Claimed Date: header value.

        Returns:
            The verification result; `verified` is True only if every binding
            matches and the pairing check passes.
        """
        result = VerificationResult(
            verified=False,
            account_id=account_id,
            new_public_key=new_public_key,
            from_address=from_email,
            email_timestamp_ms=parse_email_timestamp_to_unix_ms(timestamp),
        )

        claims = dict(
            zip(BOUND_SIGNALS, (account_id, new_public_key, from_email, timestamp))
        )

        try:
            decoded, inputs = self._decode(proof, public_inputs)
            check_binding(claims, inputs)
            self._check_pairing(decoded, inputs)
        except VerifierError as e:
            logger.info("bound proof rejected: %s: %s", type(e).__name__, e)
            return result

        logger.debug("bound proof verified")
        return replace(result, verified=True)


def verify(
    proof: ProofInput | dict[str, Any], public_inputs: Sequence[str]
) -> VerificationResult:
    """Verify against the configured key. See `ZkEmailVerifier.verify`."""
    return ZkEmailVerifier().verify(proof, public_inputs)


def verify_with_binding(
    proof: ProofInput | dict[str, Any],
    public_inputs: Sequence[str],
    account_id: str,
    new_public_key: str,
    from_email: str,
    timestamp: str,
) -> VerificationResult:
    """Bind and verify against the configured key.

    See `ZkEmailVerifier.verify_with_binding`.
    """
    return ZkEmailVerifier().verify_with_binding(
        proof, public_inputs, account_id, new_public_key, from_email, timestamp
    )
