"""
Checked construction of channel URIs from components.

ParsedUri can be built directly from a media string and a params dict, but
that path performs no validation. ChannelUriBuilder rejects components whose
canonical form would not parse back to the same value.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from .parser import MalformedUri, ParsedUri, serialize_uri


class ChannelUriBuilder:
    """Fluent builder for ParsedUri values.

    Args:
        media: Transport media token, e.g. "udp" or "ipc".
        params: Initial parameters, copied.
    """

    def __init__(self, media: str = "", params: Optional[Mapping[str, str]] = None) -> None:
        self._media = media
        self._params: Dict[str, str] = dict(params or {})

    @classmethod
    def from_uri(cls, uri: ParsedUri) -> "ChannelUriBuilder":
        return cls(uri.media, uri.params)

    def media(self, value: str) -> "ChannelUriBuilder":
        self._media = value
        return self

    def param(self, key: str, value: str) -> "ChannelUriBuilder":
        self._params[key] = value
        return self

    def params(self, values: Mapping[str, str]) -> "ChannelUriBuilder":
        self._params.update(values)
        return self

    def remove(self, key: str) -> "ChannelUriBuilder":
        self._params.pop(key, None)
        return self

    def clear(self) -> "ChannelUriBuilder":
        self._media = ""
        self._params.clear()
        return self

    def build(self) -> ParsedUri:
        """Validate the components and return an immutable ParsedUri."""
        _check_text("media", self._media)
        for bad in (":", "?"):
            if bad in self._media:
                raise MalformedUri(f"media must not contain {bad!r}", self._media)
        for key, value in self._params.items():
            _check_text("parameter key", key)
            _check_text(f"value of parameter {key!r}", value)
            if "=" in key:
                raise MalformedUri("parameter key must not contain '='", key)
            if "|" in value:
                raise MalformedUri(f"value of parameter {key!r} must not contain '|'", value)
        return ParsedUri(media=self._media, params=self._params)

    def build_string(self) -> str:
        return serialize_uri(self.build())


def _check_text(what: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{what} must be str, not {type(value).__name__}")


__all__ = [
    "ChannelUriBuilder",
]
