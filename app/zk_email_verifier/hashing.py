# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
import string

from cryptography.hazmat.primitives import hashes

# ascii only, non-ascii letters keep their case
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def canonicalize(value: str) -> str:
    return value.strip().translate(_ASCII_LOWER)


def from_address_hash(from_email: str, account_id: str) -> bytes:
    """
    Calculates the salted sha256 digest of a sender address.

    The account id acts as the salt, so the same mailbox recovering two
    accounts yields unrelated digests:

        sha256(lower(trim(from_email)) || "|" || lower(trim(account_id)))

    Args:
        from_email (str): The sender address as packed in the proof.
        account_id (str): The account being recovered.

    Returns:
        bytes: The 32 byte digest.
    """
    preimage = f"{canonicalize(from_email)}|{canonicalize(account_id)}"
    digest = hashes.Hash(hashes.SHA256())
    digest.update(preimage.encode("utf-8"))
    return digest.finalize()
