"""AT Protocol access for lexicon verification.

Identifier types, DNS delegation lookup and repository reads. Network
access goes through the DnsClient and AtProtoClient capabilities so the
checker can run against test doubles.
"""

from .exceptions import (
    LexiconError,
    DelegationNotFoundError,
    AccountIdentifierInvalidError,
    NsidInvalidError,
    TransportError,
    RemoteProtocolError,
)
from .identifiers import Did, Nsid, aturi_to_nsid, nsid_lexicon_address
from .dns import DnsClient, DnsRecord, ResolverDnsClient, dns_client, get_txt_did, resolve_delegation
from .xrpc import AtProtoClient, XrpcClient, atproto_client
from .repo import SchemaPage, get_lexicon_nsids, get_user_collections

__all__ = [
    # Exceptions
    "LexiconError",
    "DelegationNotFoundError",
    "AccountIdentifierInvalidError",
    "NsidInvalidError",
    "TransportError",
    "RemoteProtocolError",
    # Identifiers
    "Did",
    "Nsid",
    "aturi_to_nsid",
    "nsid_lexicon_address",
    # DNS
    "DnsClient",
    "DnsRecord",
    "ResolverDnsClient",
    "dns_client",
    "get_txt_did",
    "resolve_delegation",
    # XRPC
    "AtProtoClient",
    "XrpcClient",
    "atproto_client",
    "SchemaPage",
    "get_lexicon_nsids",
    "get_user_collections",
]
