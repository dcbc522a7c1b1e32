"""AT Protocol identifier types.

Nsid and Did are validated at parse boundaries and immutable afterwards.
Also provides the two pure string transforms lexicon resolution relies on:

- nsid_lexicon_address: NSID -> DNS name holding its delegation TXT record
- aturi_to_nsid: record AT URI -> NSID (the record key of a schema record)
"""

import re
from dataclasses import dataclass

from lexcheck.core.config import LEXICON_DNS_LABEL

from .exceptions import AccountIdentifierInvalidError, NsidInvalidError


NSID_MAX_LENGTH = 317
DID_MAX_LENGTH = 2048

# Domain authority segments are DNS labels (first one starts with a letter);
# the name segment is alphanumeric starting with a letter.
_NSID_RE = re.compile(
    r"^[a-zA-Z]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(\.[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+"
    r"(\.[a-zA-Z][a-zA-Z0-9]{0,62})$"
)

_DID_RE = re.compile(r"^did:[a-z]+:[a-zA-Z0-9._:%-]*[a-zA-Z0-9._-]$")


@dataclass(frozen=True, order=True)
class Nsid:
    """Namespaced identifier, e.g. community.lexicon.calendar.event."""

    value: str

    @classmethod
    def parse(cls, value: str) -> "Nsid":
        """Validate and wrap an NSID string.

        Raises:
            NsidInvalidError: If the string is not a valid NSID.
        """
        if not isinstance(value, str) or len(value) > NSID_MAX_LENGTH:
            raise NsidInvalidError(f"Invalid NSID: {value!r}")
        if not _NSID_RE.match(value):
            raise NsidInvalidError(f"Invalid NSID: {value!r}")
        return cls(value)

    @property
    def domain_authority(self) -> str:
        """Everything before the final (name) segment."""
        return self.value.rsplit(".", 1)[0]

    @property
    def name(self) -> str:
        return self.value.rsplit(".", 1)[1]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class Did:
    """Decentralized identifier naming an AT Protocol account."""

    value: str

    @classmethod
    def parse(cls, value: str) -> "Did":
        """Validate and wrap a DID string.

        Raises:
            AccountIdentifierInvalidError: If the string is not a valid DID.
        """
        if not isinstance(value, str) or len(value) > DID_MAX_LENGTH:
            raise AccountIdentifierInvalidError(f"Invalid DID: {value!r}")
        if not _DID_RE.match(value):
            raise AccountIdentifierInvalidError(f"Invalid DID: {value!r}")
        return cls(value)

    @property
    def method(self) -> str:
        return self.value.split(":", 2)[1]

    def __str__(self) -> str:
        return self.value


def nsid_lexicon_address(nsid: str) -> str:
    """Derive the DNS name where an NSID's lexicon DID can be found.

    Strips the name (last segment) and reverses the remainder:
    community.lexicon.calendar.event -> _lexicon.calendar.lexicon.community

    Ill-formed NSIDs are not checked.
    """
    authority = nsid.split(".")[:-1]
    return ".".join([LEXICON_DNS_LABEL, *reversed(authority)])


def aturi_to_nsid(uri: str) -> Nsid:
    """Extract the NSID from a schema record's AT URI.

    The record key (segment after the final '/') of a
    com.atproto.lexicon.schema record is the NSID it defines.

    Raises:
        NsidInvalidError: If the URI has no '/' or the record key is not an NSID.
    """
    if "/" not in uri:
        raise NsidInvalidError(f"Not a record URI: {uri!r}")
    return Nsid.parse(uri.rsplit("/", 1)[1])
