# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

from typing import NamedTuple

# packing, must match MAX_BYTES_IN_FIELD() for BN254 in @zk-email/circuits
PACKED_BYTES_PER_FIELD = 31
MAX_PACKED_SUBSTRING_LEN = 255
PACKED_SUBSTRING_FIELD_LEN = 9

# DKIM RSA-2048 limbs for the pubkey and signature signals
PUBKEY_FIELD_LEN = 17
SIGNATURE_FIELD_LEN = 17


class Slot(NamedTuple):
    offset: int
    length: int


def _build_layout(sizes: list[tuple[str, int]]) -> dict[str, Slot]:
    layout: dict[str, Slot] = {}
    offset = 0
    for name, length in sizes:
        layout[name] = Slot(offset, length)
        offset += length
    return layout


# RecoverEmailCircuit public signal order
PUBLIC_INPUT_LAYOUT = _build_layout(
    [
        ("request_id", PACKED_SUBSTRING_FIELD_LEN),
        ("account_id", PACKED_SUBSTRING_FIELD_LEN),
        ("new_public_key", PACKED_SUBSTRING_FIELD_LEN),
        ("from_email", PACKED_SUBSTRING_FIELD_LEN),
        ("timestamp", PACKED_SUBSTRING_FIELD_LEN),
        ("pubkey", PUBKEY_FIELD_LEN),
        ("signature", SIGNATURE_FIELD_LEN),
    ]
)

EXPECTED_PUBLIC_LEN = sum(slot.length for slot in PUBLIC_INPUT_LAYOUT.values())

# the substrings a caller may bind against
BOUND_SIGNALS = ("account_id", "new_public_key", "from_email", "timestamp")

# email Date: header
MONTHS = {
    "Jan": 1,
    "Feb": 2,
    "Mar": 3,
    "Apr": 4,
    "May": 5,
    "Jun": 6,
    "Jul": 7,
    "Aug": 8,
    "Sep": 9,
    "Oct": 10,
    "Nov": 11,
    "Dec": 12,
}
DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
EPOCH_YEAR = 1970
MAX_YEAR = 9999
SECONDS_PER_DAY = 86_400

# environment
VK_PATH_ENV = "ZK_EMAIL_VK_PATH"
LOG_LEVEL_ENV = "ZK_EMAIL_LOG_LEVEL"
