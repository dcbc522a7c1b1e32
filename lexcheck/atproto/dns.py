"""DNS delegation lookup for lexicon NSIDs.

A lexicon's publishing account is named by a TXT record at the NSID's
_lexicon address:

    _lexicon.calendar.lexicon.community.  TXT  "did=did:plc:..."

Only the first record of the answer section is considered.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence

import dns.asyncresolver
import dns.exception
import dns.rdatatype
import dns.resolver

from lexcheck.core.config import (
    DID_TXT_PREFIX,
    DNS_NAMESERVERS,
    DNS_PORT,
    DNS_TIMEOUT_SECONDS,
)

from .exceptions import (
    AccountIdentifierInvalidError,
    DelegationNotFoundError,
    TransportError,
)
from .identifiers import Did, Nsid, nsid_lexicon_address

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DnsRecord:
    """One resource record from an answer section.

    Attributes:
        name: Owner name of the record.
        rdtype: Record type mnemonic (TXT, CNAME, ...).
        text: Payload. For TXT records the character strings joined together.
    """
    name: str
    rdtype: str
    text: str


class DnsClient(ABC):
    """Abstract DNS query capability."""

    @abstractmethod
    async def query(self, name: str, rdtype: str = "TXT") -> List[DnsRecord]:
        """Query `name` in class IN.

        Returns:
            Answer section records in order. Empty if the name does not
            exist or has no records of the requested type.

        Raises:
            TransportError: If no nameserver could be reached in time.
        """
        ...


class ResolverDnsClient(DnsClient):
    """DnsClient backed by the dnspython async stub resolver."""

    def __init__(
        self,
        nameservers: Optional[Sequence[str]] = None,
        port: int = DNS_PORT,
        timeout: float = DNS_TIMEOUT_SECONDS,
    ):
        """Initialize resolver.

        Args:
            nameservers: Nameserver IPs (defaults to configured DNS_NAMESERVERS).
            port: Nameserver port.
            timeout: Total lifetime of one query in seconds.
        """
        self._resolver = dns.asyncresolver.Resolver(configure=False)
        self._resolver.port = port
        self._resolver.nameservers = list(nameservers or DNS_NAMESERVERS)
        self._resolver.lifetime = timeout

    async def query(self, name: str, rdtype: str = "TXT") -> List[DnsRecord]:
        try:
            answer = await self._resolver.resolve(
                name, rdtype, raise_on_no_answer=False
            )
        except dns.resolver.NXDOMAIN:
            return []
        except dns.exception.Timeout as e:
            raise TransportError(f"DNS query for {name} timed out: {e}")
        except dns.exception.DNSException as e:
            raise TransportError(f"DNS query for {name} failed: {e}")

        records = []
        for rrset in answer.response.answer:
            type_text = dns.rdatatype.to_text(rrset.rdtype)
            for rdata in rrset:
                records.append(DnsRecord(
                    name=rrset.name.to_text(),
                    rdtype=type_text,
                    text=_rdata_text(rdata),
                ))
        return records


def _rdata_text(rdata) -> str:
    """Render rdata payload; TXT character strings are concatenated."""
    strings = getattr(rdata, "strings", None)
    if strings is not None:
        return b"".join(strings).decode("utf-8", errors="replace")
    return rdata.to_text()


def dns_client() -> DnsClient:
    """Create a DNS client from configuration."""
    return ResolverDnsClient()


def txt_did(payload: str) -> Did:
    """Extract the DID from a _lexicon TXT payload.

    Raises:
        DelegationNotFoundError: If the payload lacks the did= prefix or
            the remainder is not a valid DID.
    """
    if not payload.startswith(DID_TXT_PREFIX):
        raise DelegationNotFoundError(f"TXT payload lacks {DID_TXT_PREFIX!r}: {payload!r}")
    try:
        return Did.parse(payload[len(DID_TXT_PREFIX):])
    except AccountIdentifierInvalidError as e:
        raise DelegationNotFoundError(f"TXT payload names an invalid DID: {e.message}") from e


async def get_txt_did(client: DnsClient, address: str) -> Did:
    """Retrieve a DNS TXT record and extract the DID from it.

    Args:
        client: DNS capability.
        address: Lookup name, as produced by nsid_lexicon_address.

    Returns:
        The delegated account DID.

    Raises:
        DelegationNotFoundError: No usable TXT record at the address.
        TransportError: DNS transport failed.
    """
    records = await client.query(address, "TXT")
    if not records:
        raise DelegationNotFoundError(f"No TXT record found at {address}")

    first = records[0]
    if first.rdtype != "TXT":
        raise DelegationNotFoundError(
            f"First answer at {address} is {first.rdtype}, not TXT"
        )
    return txt_did(first.text)


async def resolve_delegation(client: DnsClient, nsid: Nsid) -> Did:
    """Resolve the account DID delegated for an NSID's domain authority."""
    address = nsid_lexicon_address(nsid.value)
    did = await get_txt_did(client, address)
    log.debug(
        f"Delegation for {nsid} at {address}: {did}",
        extra={"nsid": nsid.value, "address": address, "did": did.value},
    )
    return did
