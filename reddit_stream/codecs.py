"""
Field-level codecs for the handful of Reddit fields that do not follow
plain type-directed JSON decoding.

Each codec is a pair of standalone functions working on already-parsed JSON
values (bool / int / float / list / None). Dataclass fields opt into a codec
through their metadata, see `codec_field`; the generic decoder in
`reddit_stream.models` calls them in place of its own handling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, NamedTuple, Optional

from .errors import DecodeError


class Codec(NamedTuple):
    decode: Callable[[Any], Any]
    encode: Callable[[Any], Any]


def codec_field(codec: Codec, **kwargs: Any) -> Any:
    """Declare a dataclass field whose JSON value goes through `codec`."""
    return field(metadata={"codec": codec}, **kwargs)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# -----------------------------------------------------------------------------
# Edited marker
# -----------------------------------------------------------------------------


@dataclass
class Edited:
    """
    The `edited` field of comments and links.

    Reddit sends the literal `false` for content that was never edited and
    the edit time (seconds since the epoch) otherwise.
    """

    edited: bool = False
    at: float = 0.0


def decode_edited(value: Any) -> Edited:
    """`false` decodes to not-edited, a number to an edit timestamp."""
    if value is False:
        return Edited()
    if _is_number(value):
        return Edited(edited=True, at=float(value))
    raise DecodeError(f"expected false or a timestamp for edited, got {value!r}")


def encode_edited(value: Edited) -> Any:
    """`false` when not edited, else the timestamp as a bare integer."""
    if not value.edited:
        return False
    return int(value.at)


EDITED_CODEC = Codec(decode_edited, encode_edited)


# -----------------------------------------------------------------------------
# Header size
# -----------------------------------------------------------------------------


@dataclass
class HeaderSize:
    """Pixel dimensions of a subreddit header image."""

    width: int = 0
    height: int = 0


def decode_header_size(value: Any) -> Optional[HeaderSize]:
    """
    Decode `[width, height]`.

    - null decodes to None (no header image),
    - an empty array decodes to a zero-valued HeaderSize,
    - any other length is an error.
    """
    if value is None:
        return None
    if not isinstance(value, list):
        raise DecodeError(f"expected an array for header size, got {value!r}")
    if len(value) == 0:
        return HeaderSize()
    if len(value) != 2:
        raise DecodeError(
            f"expected 2 element array, got {len(value)} elements ({value!r})"
        )
    if not all(_is_number(v) and float(v).is_integer() for v in value):
        raise DecodeError(f"expected integer dimensions, got {value!r}")
    return HeaderSize(width=int(value[0]), height=int(value[1]))


def encode_header_size(value: Optional[HeaderSize]) -> Optional[List[int]]:
    """`[width, height]`, or None (JSON null) when there is no header."""
    if value is None:
        return None
    return [value.width, value.height]


HEADER_SIZE_CODEC = Codec(decode_header_size, encode_header_size)
