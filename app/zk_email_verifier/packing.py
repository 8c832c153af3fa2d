# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# packing.py

"""
Pack short strings into BN254 scalars the way @zk-email/circuits does.

PackByteSubArray splits up to 255 bytes into 9 windows of 31 bytes and reads
each window as a little-endian base-256 integer:

    chunk[i] = sum(byte[31*i + j] * 256**j for j in 0..30)

Windows past the end of the string are zero. Unpacking reverses this and
strips the trailing zero padding, so a string ending in NUL bytes does not
round-trip.
"""

from typing import Sequence

from zk_email_verifier.bn254 import FR
from zk_email_verifier.constants import (
    MAX_PACKED_SUBSTRING_LEN,
    PACKED_BYTES_PER_FIELD,
    PACKED_SUBSTRING_FIELD_LEN,
)
from zk_email_verifier.errors import InvalidUtf8, TooLong


def pack_str_to_field_chunks(s: str) -> list[FR]:
    """
    Pack a UTF-8 string into exactly 9 scalar field elements.

    Args:
        s: The plaintext to pack.

    Returns:
        A list of `PACKED_SUBSTRING_FIELD_LEN` field elements.

    Raises:
        TooLong: If the UTF-8 encoding of `s` exceeds 255 bytes.
    """
    data = s.encode("utf-8")
    if len(data) > MAX_PACKED_SUBSTRING_LEN:
        raise TooLong(
            f"packed substring is {len(data)} bytes, max {MAX_PACKED_SUBSTRING_LEN}"
        )

    chunks = []
    for i in range(PACKED_SUBSTRING_FIELD_LEN):
        window = data[i * PACKED_BYTES_PER_FIELD : (i + 1) * PACKED_BYTES_PER_FIELD]
        chunks.append(FR(int.from_bytes(window, "little")))
    return chunks


def unpack_field_chunks_to_str(chunks: Sequence[FR]) -> str:
    """
    Recover the string packed into a run of scalar field elements.

    Each element contributes its low 31 little-endian bytes; the top byte of
    the 32-byte representation is dropped, as the circuit never sets it.

    Args:
        chunks: Field elements, normally one 9-element signal slot.

    Returns:
        The decoded string with trailing zero bytes removed.

    Raises:
        InvalidUtf8: If the bytes are not valid UTF-8.
    """
    data = bytearray()
    for fr in chunks:
        data += int(fr).to_bytes(32, "little")[:PACKED_BYTES_PER_FIELD]

    try:
        return bytes(data).rstrip(b"\x00").decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidUtf8(f"packed signal is not valid UTF-8: {e.reason}") from e
