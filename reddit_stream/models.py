from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, is_dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple, Type, Union, get_args, get_origin, get_type_hints

from .codecs import (
    EDITED_CODEC,
    HEADER_SIZE_CODEC,
    Codec,
    Edited,
    HeaderSize,
    codec_field,
)
from .errors import DecodeError
from .text import html_to_text


# -----------------------------------------------------------------------------
# Envelope
# -----------------------------------------------------------------------------


@dataclass
class Thing:
    """
    Attributes common to all Reddit API entities.

    `kind` alone decides the concrete type of `data` (see `KINDS`). The
    default instance, with `data=None`, is the "no entity" value returned by
    a finished or failed Stream.

    See https://github.com/reddit/reddit/wiki/JSON
    """

    id: str = ""
    name: str = ""
    kind: str = ""
    data: Any = None


@dataclass
class Listing:
    """Paginated content from an API request."""

    before: str = ""
    after: str = ""  # continuation token, "" on the last page
    modhash: str = ""
    children: List[Thing] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Replies
# -----------------------------------------------------------------------------


def decode_replies(value: Any) -> List[Thing]:
    """
    Reddit sends "" when there are no replies and a Listing envelope when
    there are; a bare array of envelopes is accepted too.
    """
    if value is None or value == "":
        return []
    if isinstance(value, dict):
        return [decode_thing(value)]
    if isinstance(value, list):
        return [decode_thing(item) for item in value]
    raise DecodeError(f"expected a Listing or \"\" for replies, got {value!r}")


def encode_replies(value: List[Thing]) -> Any:
    """Inverse of `decode_replies`: "" when empty, a single Listing as its envelope."""
    if not value:
        return ""
    if len(value) == 1 and value[0].kind == "Listing":
        return encode_thing(value[0])
    return [encode_thing(thing) for thing in value]


REPLIES_CODEC = Codec(decode_replies, encode_replies)


# -----------------------------------------------------------------------------
# Shared attribute groups
# -----------------------------------------------------------------------------


@dataclass
class Votable:
    ups: int = 0
    downs: int = 0
    likes: bool = False  # null (no vote) decodes to False


@dataclass
class Created:
    created: float = 0.0
    created_utc: float = 0.0


# -----------------------------------------------------------------------------
# Payloads
# -----------------------------------------------------------------------------


@dataclass
class Comment(Votable, Created):
    """A single comment (kind t1)."""

    approved_by: str = ""
    author: str = ""
    author_flair_css_class: str = ""
    author_flair_text: str = ""
    banned_by: str = ""
    body: str = ""
    body_html: str = ""
    edited: Edited = codec_field(EDITED_CODEC, default_factory=Edited)
    gilded: int = 0
    link_author: str = ""
    link_id: str = ""
    link_title: str = ""
    link_url: str = ""
    num_reports: int = 0
    parent_id: str = ""
    replies: List[Thing] = codec_field(REPLIES_CODEC, default_factory=list)
    saved: bool = False
    score: int = 0
    score_hidden: bool = False
    subreddit: str = ""
    subreddit_id: str = ""
    distinguished: str = ""

    @property
    def body_text(self) -> str:
        return html_to_text(self.body_html)


@dataclass
class Account(Created):
    """A single account (kind t2)."""

    comment_karma: int = 0
    has_mail: bool = False
    has_mod_mail: bool = False
    has_verified_email: bool = False
    id: str = ""
    inbox_count: int = 0
    is_friend: bool = False
    is_gold: bool = False
    is_mod: bool = False
    link_karma: int = 0
    modhash: str = ""
    name: str = ""
    over_18: bool = False


@dataclass
class Link(Votable, Created):
    """A single link / submission (kind t3)."""

    author: str = ""
    author_flair_css_class: str = ""
    author_flair_text: str = ""
    clicked: bool = False
    domain: str = ""
    hidden: bool = False
    is_self: bool = False
    link_flair_css_class: str = ""
    link_flair_text: str = ""
    locked: bool = False
    media: Any = None  # raw JSON object, shape depends on the media provider
    media_embed: Any = None
    num_comments: int = 0
    over_18: bool = False
    permalink: str = ""
    saved: bool = False
    score: int = 0
    selftext: str = ""
    selftext_html: str = ""
    subreddit: str = ""
    subreddit_id: str = ""
    thumbnail: str = ""
    title: str = ""
    url: str = ""
    edited: Edited = codec_field(EDITED_CODEC, default_factory=Edited)
    distinguished: str = ""
    stickied: bool = False

    @property
    def selftext_text(self) -> str:
        return html_to_text(self.selftext_html)


@dataclass
class Message(Created):
    """A single private message (kind t4)."""

    author: str = ""
    body: str = ""
    body_html: str = ""
    context: str = ""
    first_message: str = ""
    first_message_name: str = ""
    likes: bool = False
    link_title: str = ""
    name: str = ""
    new: bool = False
    parent_id: str = ""
    replies: List[Thing] = codec_field(REPLIES_CODEC, default_factory=list)
    subject: str = ""
    subreddit: str = ""
    was_comment: bool = False

    @property
    def body_text(self) -> str:
        return html_to_text(self.body_html)


@dataclass
class Subreddit:
    """A single subreddit (kind t5)."""

    accounts_active: int = 0
    comment_score_hide_mins: int = 0
    description: str = ""
    description_html: str = ""
    display_name: str = ""
    header_img: str = ""
    header_size: Optional[HeaderSize] = codec_field(HEADER_SIZE_CODEC, default=None)
    header_title: str = ""
    over18: bool = False
    public_description: str = ""
    public_traffic: bool = False
    subscribers: int = 0
    submission_type: str = ""
    submit_link_label: str = ""
    submit_text_label: str = ""
    subreddit_type: str = ""
    title: str = ""
    url: str = ""
    user_is_banned: bool = False
    user_is_contributor: bool = False
    user_is_moderator: bool = False
    user_is_subscriber: bool = False

    @property
    def description_text(self) -> str:
        return html_to_text(self.description_html)


@dataclass
class More:
    """IDs of things that are present but not included in full in a response."""

    children: List[str] = field(default_factory=list)


# Every kind the decoder accepts. Anything else is a DecodeError.
KINDS: Dict[str, Type[Any]] = {
    "Listing": Listing,
    "t1": Comment,
    "t2": Account,
    "t3": Link,
    "t4": Message,
    "t5": Subreddit,
    "more": More,
}


# -----------------------------------------------------------------------------
# Decoding
# -----------------------------------------------------------------------------


def decode(raw: Union[bytes, str]) -> Thing:
    """
    Decode a raw API response into a Thing.

    Raises DecodeError if the body is not JSON, is not a Thing envelope, has
    an unknown kind, or any payload field has the wrong shape.
    """
    try:
        obj = json.loads(raw)
    except ValueError as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc
    return decode_thing(obj)


def decode_thing(obj: Any) -> Thing:
    """Decode an already-parsed JSON value into a Thing."""
    return _decode_thing(obj, "")


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _where(path: str) -> str:
    return f"{path}: " if path else ""


def _decode_thing(obj: Any, path: str) -> Thing:
    if not isinstance(obj, dict):
        raise DecodeError(f"{_where(path)}expected a Thing object, got {obj!r}")

    header = {}
    for key in ("id", "name", "kind"):
        header[key] = _decode_value(str, obj.get(key), _join(path, key))

    kind = header["kind"]
    payload_type = KINDS.get(kind)
    if payload_type is None:
        raise DecodeError(f"{_where(path)}unsupported kind: {kind}")
    if "data" not in obj:
        raise DecodeError(f"{_where(path)}missing data for kind {kind}")

    data = obj["data"]
    data_path = _join(path, "data")
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DecodeError(f"{data_path}: expected an object, got {data!r}")

    return Thing(
        id=header["id"],
        name=header["name"],
        kind=kind,
        data=_decode_dataclass(payload_type, data, data_path),
    )


@lru_cache(maxsize=None)
def _field_types(cls: type) -> Tuple[Tuple[Any, Any], ...]:
    hints = get_type_hints(cls)
    return tuple((f, hints[f.name]) for f in fields(cls))


def _decode_dataclass(cls: type, obj: Dict[str, Any], path: str) -> Any:
    kwargs: Dict[str, Any] = {}
    for f, tp in _field_types(cls):
        if f.name not in obj:
            continue
        field_path = _join(path, f.name)
        codec = f.metadata.get("codec")
        if codec is None:
            kwargs[f.name] = _decode_value(tp, obj[f.name], field_path)
            continue
        try:
            kwargs[f.name] = codec.decode(obj[f.name])
        except DecodeError as exc:
            raise DecodeError(f"{field_path}: {exc}") from exc
    return cls(**kwargs)


def _decode_value(tp: Any, value: Any, path: str) -> Any:
    if tp is Any:
        return value
    if tp is Thing:
        return _decode_thing(value, path)

    origin = get_origin(tp)
    if origin is Union:
        if value is None:
            return None
        inner = [arg for arg in get_args(tp) if arg is not type(None)]
        return _decode_value(inner[0], value, path)
    if origin is list:
        if value is None:
            return []
        if not isinstance(value, list):
            raise DecodeError(f"{path}: expected an array, got {value!r}")
        (item_type,) = get_args(tp)
        return [
            _decode_value(item_type, item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]
    if is_dataclass(tp):
        if value is None:
            return tp()
        if not isinstance(value, dict):
            raise DecodeError(f"{path}: expected an object, got {value!r}")
        return _decode_dataclass(tp, value, path)

    # Go-style zero values: null leaves a scalar at its default.
    if tp is str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        raise DecodeError(f"{path}: expected a string, got {value!r}")
    if tp is bool:
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        raise DecodeError(f"{path}: expected a boolean, got {value!r}")
    if tp is int:
        if value is None:
            return 0
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise DecodeError(f"{path}: expected an integer, got {value!r}")
    if tp is float:
        if value is None:
            return 0.0
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise DecodeError(f"{path}: expected a number, got {value!r}")

    raise TypeError(f"no decoder for field type {tp!r} at {path}")


# -----------------------------------------------------------------------------
# Encoding
# -----------------------------------------------------------------------------


def encode_thing(thing: Thing) -> Dict[str, Any]:
    """Inverse of `decode_thing`: render a Thing back to JSON-ready values."""
    return {
        "id": thing.id,
        "name": thing.name,
        "kind": thing.kind,
        "data": None if thing.data is None else _encode_dataclass(thing.data),
    }


def encode(thing: Thing) -> str:
    return json.dumps(encode_thing(thing))


def _encode_dataclass(obj: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        codec = f.metadata.get("codec")
        out[f.name] = codec.encode(value) if codec is not None else _encode_value(value)
    return out


def _encode_value(value: Any) -> Any:
    if isinstance(value, Thing):
        return encode_thing(value)
    if is_dataclass(value) and not isinstance(value, type):
        return _encode_dataclass(value)
    if isinstance(value, list):
        return [_encode_value(item) for item in value]
    return value
