import json

import pytest

from zk_email_verifier.errors import MalformedField
from zk_email_verifier.files import load_json, save_json


def test_save_json_is_sorted_and_terminated(tmp_path):
    path = tmp_path / "out" / "result.json"
    save_json(path, {"b": 1, "a": [1, 2]})

    text = path.read_text()
    assert text.endswith("}\n")
    assert text.index('"a"') < text.index('"b"')
    assert json.loads(text) == {"a": [1, 2], "b": 1}


def test_load_json(tmp_path):
    path = tmp_path / "public.json"
    path.write_text('["1", "2"]')
    assert load_json(str(path)) == ["1", "2"]
    assert load_json(path, expect=list) == ["1", "2"]


def test_load_json_wrong_top_level_type(tmp_path):
    path = tmp_path / "proof.json"
    path.write_text('["1", "2"]')
    with pytest.raises(MalformedField, match="expected a JSON dict"):
        load_json(path, expect=dict)


def test_load_json_invalid(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{")
    with pytest.raises(MalformedField, match="not valid JSON"):
        load_json(path)


def test_load_json_not_utf8(tmp_path):
    path = tmp_path / "bad.json"
    path.write_bytes(b'["\xff"]')
    with pytest.raises(MalformedField):
        load_json(path)


def test_load_json_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json(tmp_path / "nope.json")


if __name__ == "__main__":
    pytest.main()
