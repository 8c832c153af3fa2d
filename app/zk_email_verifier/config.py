# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# config.py

"""
Process-wide verifying key provisioning.

The key for RecoverEmailCircuit is exported by snarkjs at setup time and
pointed to with the ZK_EMAIL_VK_PATH environment variable. It is read once
and cached for the lifetime of the process.

A missing or broken key is a deployment error, not an invalid proof, so it
raises ConfigurationError instead of letting every verification return False.
"""

import logging
import os
from functools import lru_cache

from zk_email_verifier.constants import EXPECTED_PUBLIC_LEN, VK_PATH_ENV
from zk_email_verifier.errors import ConfigurationError
from zk_email_verifier.snark import PreparedVerifyingKey, prepare_verifying_key
from zk_email_verifier.vk_convert import load_vk_file

logger = logging.getLogger(__name__)


def verifying_key_path() -> str:
    """
    Resolve the configured verifying key path.

    Returns:
        The value of ZK_EMAIL_VK_PATH.

    Raises:
        ConfigurationError: If the variable is unset or empty.
    """
    path = os.environ.get(VK_PATH_ENV, "").strip()
    if not path:
        raise ConfigurationError(
            f"{VK_PATH_ENV} is not set; provision the snarkjs verification_key.json "
            "for RecoverEmailCircuit before verifying proofs"
        )
    return path


@lru_cache(maxsize=1)
def configured_verifying_key() -> PreparedVerifyingKey:
    """
    Load and prepare the configured verifying key, once per process.

    Returns:
        The prepared key.

    Raises:
        ConfigurationError: If the key is not configured, unreadable or invalid.
    """
    path = verifying_key_path()
    try:
        vk = load_vk_file(path)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"cannot load verifying key from {path}: {e}") from e

    logger.info("loaded verifying key from %s (nPublic=%d)", path, vk.n_public)
    if vk.n_public != EXPECTED_PUBLIC_LEN:
        logger.warning(
            "verifying key expects %d public inputs, RecoverEmailCircuit has %d",
            vk.n_public,
            EXPECTED_PUBLIC_LEN,
        )
    return prepare_verifying_key(vk)


def reset_verifying_key_cache() -> None:
    configured_verifying_key.cache_clear()
