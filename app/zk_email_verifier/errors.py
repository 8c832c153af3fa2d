# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

"""
Error kinds raised by the decoding, packing and binding stages.

The orchestrator in `verifier.py` turns every `VerifierError` into a negative
`VerificationResult`. Only `ConfigurationError` is meant to reach callers.
"""


class VerifierError(ValueError):
    """Base exception for proof decoding and verification errors."""

    pass


class MalformedField(VerifierError):
    """A coordinate or scalar string is not a canonical field element."""

    pass


class MalformedPoint(VerifierError):
    """Coordinates decode but do not describe a point of the expected group."""

    pass


class TooLong(VerifierError):
    """A plaintext exceeds the packed substring capacity."""

    pass


class LayoutMismatch(VerifierError):
    """The public-input vector does not match the circuit layout."""

    pass


class BindingMismatch(VerifierError):
    """A claimed plaintext differs from the signal embedded in the proof."""

    pass


class InvalidUtf8(VerifierError):
    """Unpacked signal bytes are not valid UTF-8."""

    pass


class InvalidTimestamp(VerifierError):
    """An email Date: value could not be parsed."""

    pass


class VerificationFailed(VerifierError):
    """The Groth16 pairing equation does not hold."""

    pass


class ConfigurationError(RuntimeError):
    """The verifying key is missing or unusable."""

    pass
