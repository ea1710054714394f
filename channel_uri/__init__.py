"""Parser and serializer for ``aeron:`` channel URIs."""

from .uri.builder import ChannelUriBuilder
from .uri.parser import AERON_PREFIX, AERON_SCHEME, MalformedUri, ParsedUri, parse_uri, serialize_uri


__all__ = [
    "AERON_PREFIX",
    "AERON_SCHEME",
    "ChannelUriBuilder",
    "MalformedUri",
    "ParsedUri",
    "parse_uri",
    "serialize_uri",
]
