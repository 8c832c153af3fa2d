# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
from typing import Mapping, Sequence

from zk_email_verifier.bn254 import FR
from zk_email_verifier.constants import EXPECTED_PUBLIC_LEN, PUBLIC_INPUT_LAYOUT
from zk_email_verifier.errors import BindingMismatch, LayoutMismatch
from zk_email_verifier.packing import pack_str_to_field_chunks


def slice_signal(inputs: Sequence[FR], name: str) -> list[FR]:
    """
    Return the public inputs belonging to one named circuit signal.

    Args:
        inputs: The decoded public-input vector.
        name: A key of `PUBLIC_INPUT_LAYOUT`, e.g. "account_id".

    Returns:
        The slice at the signal's fixed offset.

    Raises:
        LayoutMismatch: If the vector is too short to hold the signal.
    """
    slot = PUBLIC_INPUT_LAYOUT[name]
    if len(inputs) < slot.offset + slot.length:
        raise LayoutMismatch(
            f"{name} needs {slot.offset + slot.length} public inputs, got {len(inputs)}"
        )
    return list(inputs[slot.offset : slot.offset + slot.length])


def check_binding(claims: Mapping[str, str], inputs: Sequence[FR]) -> None:
    """
    Check that claimed plaintexts are the substrings packed into the proof.

    Every claim is packed before any comparison, so an oversized claim is
    reported as `TooLong` even when an earlier claim would mismatch.

    Args:
        claims: Signal name to claimed plaintext, e.g.
            {"account_id": "alice.testnet", "timestamp": "Tue, 9 Dec ..."}.
        inputs: The decoded public-input vector.

    Raises:
        LayoutMismatch: If `inputs` is not exactly `EXPECTED_PUBLIC_LEN` long.
        TooLong: If a claim exceeds 255 bytes.
        BindingMismatch: On the first element that differs.
    """
    if len(inputs) != EXPECTED_PUBLIC_LEN:
        raise LayoutMismatch(
            f"expected {EXPECTED_PUBLIC_LEN} public inputs, got {len(inputs)}"
        )

    packed = {name: pack_str_to_field_chunks(value) for name, value in claims.items()}

    for name, chunks in packed.items():
        offset = PUBLIC_INPUT_LAYOUT[name].offset
        actual_chunks = slice_signal(inputs, name)
        for i, (expected, actual) in enumerate(zip(chunks, actual_chunks)):
            if expected != actual:
                raise BindingMismatch(f"{name} does not match public input {offset + i}")
