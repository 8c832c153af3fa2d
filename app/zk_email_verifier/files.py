# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
import json

from pathlib import Path
from typing import Any

from zk_email_verifier.errors import MalformedField


def save_json(path: str | Path, data: Any) -> None:
    """
    Write data as sorted, indented JSON, e.g. a VerificationResult or a
    re-exported verification_key.json.

    Args:
        path: Destination file path. Parent directories are created.
        data: Any JSON-serializable value.

    Raises:
        TypeError: If `data` is not JSON-serializable.
        OSError: If the file cannot be written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)
        f.write("\n")


def load_json(path: str | Path, expect: type | None = None) -> Any:
    """
    Load a snarkjs artifact: proof.json, public.json or verification_key.json.

    Args:
        path: Path to the JSON file.
        expect: If given, the type the top-level value must have
            (`dict` for proofs and keys, `list` for public signals).

    Returns:
        The parsed JSON value.

    Raises:
        OSError: If the file cannot be read.
        MalformedField: If the file is not JSON or has the wrong top-level type.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            raise MalformedField(f"{path}: not valid JSON: {e}") from e

    if expect is not None and not isinstance(data, expect):
        raise MalformedField(
            f"{path}: expected a JSON {expect.__name__}, got {type(data).__name__}"
        )
    return data
