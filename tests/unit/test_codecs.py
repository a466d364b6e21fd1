from __future__ import annotations

import json

import pytest

from reddit_stream.codecs import (
    Edited,
    HeaderSize,
    decode_edited,
    decode_header_size,
    encode_edited,
    encode_header_size,
)
from reddit_stream.errors import DecodeError


def test_edited_false_means_not_edited():
    value = decode_edited(json.loads("false"))

    assert value == Edited(edited=False, at=0.0)
    assert json.dumps(encode_edited(value)) == "false"


def test_edited_timestamp_round_trips_as_bare_integer():
    value = decode_edited(json.loads("1420070400"))

    assert value.edited is True
    assert value.at == 1420070400.0
    assert json.dumps(encode_edited(value)) == "1420070400"


def test_edited_float_timestamp_is_accepted():
    value = decode_edited(1420070400.0)

    assert value == Edited(edited=True, at=1420070400.0)


@pytest.mark.parametrize("raw", ['"1420070400"', "true", "null", "{}", "[]"])
def test_edited_rejects_other_shapes(raw):
    with pytest.raises(DecodeError):
        decode_edited(json.loads(raw))


def test_header_size_pair():
    value = decode_header_size(json.loads("[640, 480]"))

    assert value == HeaderSize(width=640, height=480)
    assert json.dumps(encode_header_size(value)) == "[640, 480]"


def test_header_size_empty_array_is_zero_pair_not_error():
    value = decode_header_size([])

    assert value == HeaderSize(width=0, height=0)
    assert value is not None


def test_header_size_null_is_absent():
    value = decode_header_size(None)

    assert value is None
    assert json.dumps(encode_header_size(value)) == "null"


def test_header_size_zero_pair_encodes_differently_from_absent():
    assert encode_header_size(HeaderSize()) == [0, 0]
    assert encode_header_size(None) is None


@pytest.mark.parametrize("raw", ["[1, 2, 3]", "[1]"])
def test_header_size_wrong_length_fails(raw):
    with pytest.raises(DecodeError, match="expected 2 element array"):
        decode_header_size(json.loads(raw))


@pytest.mark.parametrize("raw", ['["a", "b"]', "[1.5, 2]", "[true, false]", '"640x480"', "{}"])
def test_header_size_wrong_shape_fails(raw):
    with pytest.raises(DecodeError):
        decode_header_size(json.loads(raw))
