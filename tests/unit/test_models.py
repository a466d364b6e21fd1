from __future__ import annotations

import json

import pytest

from reddit_stream.codecs import Edited, HeaderSize
from reddit_stream.errors import DecodeError
from reddit_stream.models import (
    KINDS,
    Account,
    Comment,
    Link,
    Listing,
    Message,
    More,
    Subreddit,
    Thing,
    decode,
    decode_thing,
    encode,
    encode_thing,
)


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("Listing", Listing),
        ("t1", Comment),
        ("t2", Account),
        ("t3", Link),
        ("t4", Message),
        ("t5", Subreddit),
        ("more", More),
    ],
)
def test_each_kind_decodes_to_its_payload_type(kind, expected):
    thing = decode(json.dumps({"kind": kind, "data": {}}))

    assert thing.kind == kind
    assert type(thing.data) is expected


def test_kind_table_is_exactly_the_supported_kinds():
    assert set(KINDS) == {"Listing", "t1", "t2", "t3", "t4", "t5", "more"}


@pytest.mark.parametrize("kind", ["t6", "", "listing", "LiveThread"])
def test_unknown_kind_is_a_decode_error(kind):
    with pytest.raises(DecodeError, match="unsupported kind"):
        decode(json.dumps({"kind": kind, "data": {}}))


def test_missing_data_is_a_decode_error():
    with pytest.raises(DecodeError, match="missing data"):
        decode('{"kind": "t3"}')


@pytest.mark.parametrize("raw", [b"not json", b"[1, 2]", b'"t3"', b""])
def test_malformed_envelope_is_a_decode_error(raw):
    with pytest.raises(DecodeError):
        decode(raw)


def test_link_fields_use_wire_names():
    raw = json.dumps(
        {
            "kind": "t3",
            "data": {
                "title": "Go 2 draft",
                "url": "https://go.dev/blog",
                "is_self": False,
                "created_utc": 1420070400.0,
                "score": 1234,
                "ups": 1300,
                "likes": None,
                "edited": False,
                "media": {"type": "youtube.com"},
                "selftext_html": None,
            },
        }
    )

    link = decode(raw).data

    assert link.title == "Go 2 draft"
    assert link.is_self is False
    assert link.created_utc == 1420070400.0
    assert link.score == 1234
    assert link.ups == 1300
    assert link.likes is False
    assert link.edited == Edited()
    assert link.media == {"type": "youtube.com"}
    assert link.selftext_html == ""


def test_listing_children_are_decoded_recursively():
    raw = json.dumps(
        {
            "kind": "Listing",
            "data": {
                "after": None,
                "before": None,
                "children": [
                    {"kind": "t3", "data": {"title": "first"}},
                    {"kind": "t1", "data": {"body": "second", "edited": 1420070400}},
                    {"kind": "more", "data": {"children": ["abc", "def"]}},
                ],
            },
        }
    )

    listing = decode(raw).data

    assert listing.after == ""
    assert [child.kind for child in listing.children] == ["t3", "t1", "more"]
    assert listing.children[0].data.title == "first"
    assert listing.children[1].data.edited == Edited(edited=True, at=1420070400.0)
    assert listing.children[2].data.children == ["abc", "def"]


def test_comment_replies_nest_listings():
    reply = {"kind": "t1", "data": {"body": "reply", "replies": ""}}
    raw = {
        "kind": "t1",
        "data": {
            "body": "parent",
            "replies": {"kind": "Listing", "data": {"children": [reply]}},
        },
    }

    comment = decode_thing(raw).data

    assert len(comment.replies) == 1
    nested = comment.replies[0].data
    assert isinstance(nested, Listing)
    assert nested.children[0].data.body == "reply"
    assert nested.children[0].data.replies == []


def test_nested_unknown_kind_fails_whole_decode():
    raw = {
        "kind": "Listing",
        "data": {"children": [{"kind": "t3", "data": {}}, {"kind": "t42", "data": {}}]},
    }

    with pytest.raises(DecodeError, match=r"data\.children\[1\]: unsupported kind: t42"):
        decode_thing(raw)


def test_wrong_field_type_names_the_field():
    with pytest.raises(DecodeError, match=r"data\.score"):
        decode('{"kind": "t3", "data": {"score": "lots"}}')


def test_boolean_is_not_accepted_as_integer():
    with pytest.raises(DecodeError, match=r"data\.num_comments"):
        decode('{"kind": "t3", "data": {"num_comments": true}}')


def test_header_size_codec_is_applied_to_subreddits():
    ok = decode('{"kind": "t5", "data": {"display_name": "golang", "header_size": [120, 40]}}')
    assert ok.data.header_size == HeaderSize(width=120, height=40)

    empty = decode('{"kind": "t5", "data": {"header_size": []}}')
    assert empty.data.header_size == HeaderSize()

    absent = decode('{"kind": "t5", "data": {"header_size": null}}')
    assert absent.data.header_size is None

    with pytest.raises(DecodeError, match=r"data\.header_size"):
        decode('{"kind": "t5", "data": {"header_size": [1, 2, 3]}}')


def test_edited_codec_rejects_strings_inside_payload():
    with pytest.raises(DecodeError, match=r"data\.edited"):
        decode('{"kind": "t1", "data": {"edited": "yesterday"}}')


def test_unknown_payload_keys_are_ignored():
    thing = decode('{"kind": "t2", "data": {"name": "spez", "awardee_karma": 10}}')

    assert thing.data == Account(name="spez")


def test_encode_preserves_wire_names_and_codecs():
    thing = Thing(
        kind="t3",
        data=Link(
            title="hello",
            is_self=True,
            created_utc=1420070400.0,
            edited=Edited(edited=True, at=1420070500.0),
        ),
    )

    data = encode_thing(thing)["data"]

    assert data["is_self"] is True
    assert data["created_utc"] == 1420070400.0
    assert data["edited"] == 1420070500


def test_encoded_thing_decodes_back_to_the_same_value():
    raw = {
        "kind": "Listing",
        "data": {
            "after": "t3_b",
            "children": [
                {"kind": "t5", "data": {"display_name": "golang", "header_size": [1, 2]}},
                {"kind": "t4", "data": {"subject": "hi", "replies": ""}},
            ],
        },
    }
    thing = decode_thing(raw)

    assert decode(encode(thing)) == thing


def test_empty_thing_encodes_null_data():
    assert encode_thing(Thing()) == {"id": "", "name": "", "kind": "", "data": None}
