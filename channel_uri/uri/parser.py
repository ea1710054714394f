"""
Channel URI parser.

Parses ``aeron:media[?key=value(|key=value)*]`` strings into a structured,
immutable ParsedUri and serializes them back to their canonical form:

    aeron-uri = "aeron:" media [ "?" param *( "|" param ) ]
    media     = *( any-char-except "?" or ":" )
    param     = key "=" value
    key       = *( any-char-except "=" )
    value     = *( any-char-except "|" )

No percent-decoding is applied; keys and values are raw slices of the input.
When a key repeats, the last value wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional


AERON_SCHEME = "aeron"
AERON_PREFIX = AERON_SCHEME + ":"


class MalformedUri(ValueError):
    """Raised when text is not a well-formed channel URI.

    Attributes:
        reason: Human readable description of the failure.
        input: The offending text, if known.
        state: Lexer state at the point of failure, if any.
        position: Index into ``input`` where the failure was detected, if any.
    """

    def __init__(
        self,
        reason: str,
        input: Optional[str] = None,
        state: Optional[str] = None,
        position: Optional[int] = None,
    ) -> None:
        self.reason = reason
        self.input = input
        self.state = state
        self.position = position
        message = reason if input is None else f"{reason}: {input!r}"
        super().__init__(message)


class _State(Enum):
    MEDIA = "MEDIA"
    PARAMS_KEY = "PARAMS_KEY"
    PARAMS_VALUE = "PARAMS_VALUE"


@dataclass(frozen=True, eq=False)
class ParsedUri:
    """Structured channel URI: a media token plus key/value parameters.

    Constructing directly bypasses validation; use parse_uri for text or
    ChannelUriBuilder for checked construction.
    """

    media: str = ""
    params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def scheme(self) -> str:
        return AERON_SCHEME

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value for key, or default when the key is absent."""
        return self.params.get(key, default)

    def contains_key(self, key: str) -> bool:
        return key in self.params

    def to_string(self) -> str:
        return serialize_uri(self)

    def to_dict(self) -> Dict[str, object]:
        return {"scheme": self.scheme, "media": self.media, "params": dict(self.params)}

    def __contains__(self, key: object) -> bool:
        return key in self.params

    def __iter__(self) -> Iterator[str]:
        return iter(self.params)

    def __len__(self) -> int:
        return len(self.params)

    def __bool__(self) -> bool:
        return True

    def __reduce__(self):
        return (ParsedUri, (self.media, dict(self.params)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedUri):
            return NotImplemented
        return self.media == other.media and dict(self.params) == dict(other.params)

    def __hash__(self) -> int:
        return hash((self.media, frozenset(self.params.items())))

    def __str__(self) -> str:
        return serialize_uri(self)

    def __repr__(self) -> str:
        return f"ParsedUri(media={self.media!r}, params={dict(self.params)!r})"


def parse_uri(text: str) -> ParsedUri:
    """Parse channel URI text into a ParsedUri.

    Raises MalformedUri when the scheme prefix is missing, a ':' appears in
    the media segment, or the input ends while reading a parameter key.
    """
    if not isinstance(text, str):
        raise TypeError(f"channel URI must be str, not {type(text).__name__}")
    if not text.startswith(AERON_PREFIX):
        raise MalformedUri("missing or incorrect scheme prefix", text)

    buffer: list[str] = []
    params: Dict[str, str] = {}
    media = ""
    key = ""

    state = _State.MEDIA
    for index in range(len(AERON_PREFIX), len(text)):
        c = text[index]
        if state is _State.MEDIA:
            if c == "?":
                media = "".join(buffer)
                buffer.clear()
                state = _State.PARAMS_KEY
            elif c == ":":
                raise MalformedUri("colon inside media segment", text, state.value, index)
            else:
                buffer.append(c)
        elif state is _State.PARAMS_KEY:
            # '|' is ordinary text here; only '=' ends a key
            if c == "=":
                key = "".join(buffer)
                buffer.clear()
                state = _State.PARAMS_VALUE
            else:
                buffer.append(c)
        else:
            if c == "|":
                params[key] = "".join(buffer)
                buffer.clear()
                state = _State.PARAMS_KEY
            else:
                buffer.append(c)

    if state is _State.MEDIA:
        media = "".join(buffer)
    elif state is _State.PARAMS_VALUE:
        params[key] = "".join(buffer)
    else:
        raise MalformedUri("unterminated parameter key, expected '='", text, state.value, len(text))

    return ParsedUri(media=media, params=params)


def serialize_uri(uri: ParsedUri) -> str:
    """Render the canonical text form of a ParsedUri."""
    text = AERON_PREFIX + uri.media
    if uri.params:
        text += "?" + "|".join(f"{k}={v}" for k, v in uri.params.items())
    return text


__all__ = [
    "AERON_SCHEME",
    "AERON_PREFIX",
    "MalformedUri",
    "ParsedUri",
    "parse_uri",
    "serialize_uri",
]
