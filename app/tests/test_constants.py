# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
import pytest

from zk_email_verifier.constants import (
    EXPECTED_PUBLIC_LEN,
    MAX_PACKED_SUBSTRING_LEN,
    PACKED_BYTES_PER_FIELD,
    PACKED_SUBSTRING_FIELD_LEN,
    PUBLIC_INPUT_LAYOUT,
)


def test_layout_offsets():
    offsets = {name: slot.offset for name, slot in PUBLIC_INPUT_LAYOUT.items()}
    assert offsets == {
        "request_id": 0,
        "account_id": 9,
        "new_public_key": 18,
        "from_email": 27,
        "timestamp": 36,
        "pubkey": 45,
        "signature": 62,
    }


def test_layout_is_contiguous():
    end = 0
    for slot in PUBLIC_INPUT_LAYOUT.values():
        assert slot.offset == end
        end += slot.length
    assert end == EXPECTED_PUBLIC_LEN == 79


def test_packing_capacity():
    assert PACKED_BYTES_PER_FIELD * PACKED_SUBSTRING_FIELD_LEN >= MAX_PACKED_SUBSTRING_LEN
    assert PACKED_BYTES_PER_FIELD * (PACKED_SUBSTRING_FIELD_LEN - 1) < MAX_PACKED_SUBSTRING_LEN


if __name__ == "__main__":
    pytest.main()
