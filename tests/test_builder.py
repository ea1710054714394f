from __future__ import annotations

import pytest

from channel_uri import ChannelUriBuilder, MalformedUri, ParsedUri, parse_uri


def test_build_from_components():
    uri = ChannelUriBuilder().media("udp").param("endpoint", "224.10.9.8:777").param("ttl", "16").build()
    assert isinstance(uri, ParsedUri)
    assert uri.media == "udp"
    assert dict(uri.params) == {"endpoint": "224.10.9.8:777", "ttl": "16"}
    assert str(uri) == "aeron:udp?endpoint=224.10.9.8:777|ttl=16"


def test_build_string_round_trips():
    text = ChannelUriBuilder("ipc", {"term-length": "64k", "add|ress": "a=b"}).build_string()
    assert text == "aeron:ipc?term-length=64k|add|ress=a=b"
    assert dict(parse_uri(text).params) == {"term-length": "64k", "add|ress": "a=b"}


def test_from_uri_then_modify():
    original = parse_uri("aeron:udp?endpoint=localhost:40123|ttl=4")
    builder = ChannelUriBuilder.from_uri(original)
    changed = builder.remove("ttl").params({"interface": "192.168.0.3"}).build()
    assert changed == ParsedUri("udp", {"endpoint": "localhost:40123", "interface": "192.168.0.3"})
    assert original.get("ttl") == "4"


def test_clear():
    assert ChannelUriBuilder("udp", {"a": "1"}).clear().build_string() == "aeron:"


def test_remove_missing_key_is_noop():
    assert ChannelUriBuilder("udp").remove("nope").build_string() == "aeron:udp"


def test_builder_does_not_share_state_with_built_uri():
    builder = ChannelUriBuilder("udp").param("a", "1")
    uri = builder.build()
    builder.param("a", "2")
    assert uri.get("a") == "1"


@pytest.mark.parametrize("media", ["udp:", "u?dp"])
def test_rejects_separators_in_media(media):
    with pytest.raises(MalformedUri, match="media must not contain"):
        ChannelUriBuilder(media).build()


def test_rejects_equals_in_key():
    with pytest.raises(MalformedUri, match="must not contain '='"):
        ChannelUriBuilder("udp").param("a=b", "1").build()


def test_rejects_pipe_in_value():
    with pytest.raises(MalformedUri, match="must not contain '\\|'"):
        ChannelUriBuilder("udp").param("a", "1|2").build()


def test_rejects_non_string_components():
    with pytest.raises(TypeError, match="must be str"):
        ChannelUriBuilder("udp").param("port", 4567).build()  # type: ignore[arg-type]


def test_non_string_media_is_type_error():
    with pytest.raises(TypeError):
        ChannelUriBuilder(None).build()  # type: ignore[arg-type]
