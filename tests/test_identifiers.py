"""Tests for NSID/DID parsing and the lexicon address transforms."""

import pytest

from lexcheck.atproto.exceptions import (
    AccountIdentifierInvalidError,
    NsidInvalidError,
)
from lexcheck.atproto.identifiers import (
    Did,
    Nsid,
    aturi_to_nsid,
    nsid_lexicon_address,
)


class TestNsidLexiconAddress:
    """Tests for NSID -> _lexicon DNS name derivation."""

    def test_calendar_event(self):
        assert (
            nsid_lexicon_address("community.lexicon.calendar.event")
            == "_lexicon.calendar.lexicon.community"
        )

    def test_numeric_segment(self):
        assert nsid_lexicon_address("blue.2048.player.profile") == "_lexicon.player.2048.blue"

    def test_three_segments(self):
        assert nsid_lexicon_address("com.example.record") == "_lexicon.example.com"

    def test_two_segments(self):
        """Only the name is dropped, whatever the length."""
        assert nsid_lexicon_address("example.record") == "_lexicon.example"

    @pytest.mark.parametrize("value", [
        "app.bsky.feed.post",
        "com.atproto.lexicon.schema",
        "community.lexicon.calendar.rsvp",
    ])
    def test_drops_name_and_reverses_authority(self, value):
        authority = value.split(".")[:-1]
        expected = "_lexicon." + ".".join(reversed(authority))
        assert nsid_lexicon_address(value) == expected


class TestAturiToNsid:
    """Tests for extracting the NSID from a schema record URI."""

    def test_extracts_record_key(self):
        uri = (
            "at://did:plc:zylhqsjug3f76uqxguhviqka/"
            "com.atproto.lexicon.schema/blue.2048.verification.stats"
        )
        assert aturi_to_nsid(uri) == Nsid("blue.2048.verification.stats")

    def test_invalid_record_key_fails(self):
        uri = "at://did:plc:abc/com.atproto.lexicon.schema/not-an-nsid"
        with pytest.raises(NsidInvalidError):
            aturi_to_nsid(uri)

    def test_empty_record_key_fails(self):
        with pytest.raises(NsidInvalidError):
            aturi_to_nsid("at://did:plc:abc/com.atproto.lexicon.schema/")

    def test_no_slash_fails(self):
        with pytest.raises(NsidInvalidError):
            aturi_to_nsid("blue.2048.verification.stats")


class TestNsid:
    """Tests for Nsid parsing and accessors."""

    @pytest.mark.parametrize("value", [
        "community.lexicon.calendar.event",
        "blue.2048.player.profile",
        "com.example.fooBar",
        "a-0.b-1.c",
    ])
    def test_parse_valid(self, value):
        assert Nsid.parse(value).value == value

    @pytest.mark.parametrize("value", [
        "",
        "example",
        "com.example",
        "com.example.",
        ".com.example.thing",
        "com.example.3thing",
        "com.example.foo-bar",
        "com..example.thing",
        "1com.example.thing",
        "com.example.thing/other",
    ])
    def test_parse_invalid(self, value):
        with pytest.raises(NsidInvalidError) as exc:
            Nsid.parse(value)
        assert exc.value.code == "NSID_INVALID"

    def test_parse_too_long(self):
        value = ".".join(["a" * 60] * 6) + ".name"
        with pytest.raises(NsidInvalidError):
            Nsid.parse(value)

    def test_domain_authority_and_name(self):
        n = Nsid.parse("community.lexicon.calendar.event")
        assert n.domain_authority == "community.lexicon.calendar"
        assert n.name == "event"

    def test_str(self):
        assert str(Nsid.parse("app.bsky.feed.post")) == "app.bsky.feed.post"

    def test_hashable_and_equal(self):
        assert {Nsid.parse("a.b.c"), Nsid.parse("a.b.c")} == {Nsid("a.b.c")}

    def test_ordering_is_alphabetical(self):
        values = ["z.b.c", "a.b.d", "a.b.c"]
        assert [n.value for n in sorted(Nsid.parse(v) for v in values)] == [
            "a.b.c", "a.b.d", "z.b.c",
        ]


class TestDid:
    """Tests for Did parsing."""

    @pytest.mark.parametrize("value", [
        "did:plc:zylhqsjug3f76uqxguhviqka",
        "did:web:example.com",
        "did:web:localhost%3A8080",
        "did:example:a:b:c",
    ])
    def test_parse_valid(self, value):
        assert Did.parse(value).value == value

    @pytest.mark.parametrize("value", [
        "",
        "plc:abc",
        "did:PLC:abc",
        "did:plc:",
        "did:plc:abc:",
        "did:plc:abc%",
        "did:plc:has space",
        "did=did:plc:abc",
    ])
    def test_parse_invalid(self, value):
        with pytest.raises(AccountIdentifierInvalidError) as exc:
            Did.parse(value)
        assert exc.value.code == "ACCOUNT_IDENTIFIER_INVALID"

    def test_parse_too_long(self):
        with pytest.raises(AccountIdentifierInvalidError):
            Did.parse("did:plc:" + "a" * 2048)

    def test_method(self):
        assert Did.parse("did:web:example.com").method == "web"
