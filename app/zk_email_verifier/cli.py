# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# cli.py

"""
Command line entry point.

    zk-email-verify <vk.json> <proof.json> <public.json>
    zk-email-verify <vk.json> <proof.json> <public.json> \
        <account_id> <new_public_key> <from_email> <timestamp>

Prints the VerificationResult as JSON on stdout. Exits 0 when the proof
verifies, 1 when it does not, and 2 on usage or key errors.
"""

import json
import logging
import os
import sys

from zk_email_verifier.constants import LOG_LEVEL_ENV
from zk_email_verifier.errors import VerifierError
from zk_email_verifier.groth_convert import load_proof_file, load_public_file
from zk_email_verifier.verifier import ZkEmailVerifier
from zk_email_verifier.vk_convert import load_vk_file

USAGE = (
    "Usage: zk-email-verify <vk.json> <proof.json> <public.json> "
    "[<account_id> <new_public_key> <from_email> <timestamp>]"
)


def main(argv: list[str] | None = None) -> int:
    """CLI: verify a snarkjs proof against a verification key."""
    args = sys.argv[1:] if argv is None else argv

    logging.basicConfig(
        level=os.environ.get(LOG_LEVEL_ENV, "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if len(args) not in (3, 7):
        print(USAGE, file=sys.stderr)
        return 2

    vk_path, proof_path, public_path = args[:3]

    try:
        verifier = ZkEmailVerifier(load_vk_file(vk_path))
    except (OSError, ValueError) as e:
        print(f"cannot load verifying key {vk_path}: {e}", file=sys.stderr)
        return 2

    try:
        proof = load_proof_file(proof_path)
        public_inputs = load_public_file(public_path)
    except (OSError, VerifierError) as e:
        print(f"cannot read proof: {e}", file=sys.stderr)
        return 2

    if len(args) == 7:
        result = verifier.verify_with_binding(proof, public_inputs, *args[3:])
    else:
        result = verifier.verify(proof, public_inputs)

    json.dump(result.to_json(), sys.stdout, indent=4)
    print()
    return 0 if result.verified else 1


if __name__ == "__main__":
    sys.exit(main())
