"""Root conftest - capability test doubles and shared fixtures."""

import os

# Keep test runs quiet regardless of the developer's environment
os.environ.setdefault("LEXCHECK_LOG_LEVEL", "WARNING")

from typing import Dict, List, Optional, Sequence, Tuple, Union

import pytest

from lexcheck.atproto.dns import DnsClient, DnsRecord
from lexcheck.atproto.exceptions import RemoteProtocolError
from lexcheck.atproto.identifiers import Did, Nsid
from lexcheck.atproto.models import DescribeRepoOutput, ListRecordsOutput, RecordEntry
from lexcheck.atproto.xrpc import AtProtoClient
from lexcheck.checker import VerdictCache

SCHEMA_COLLECTION = "com.atproto.lexicon.schema"

LEXICON_DID = "did:plc:zylhqsjug3f76uqxguhviqka"
USER_DID = "did:plc:xydueznukwpv3esjwcexd676"


def txt(name: str, payload: str) -> DnsRecord:
    """Build a TXT answer record."""
    return DnsRecord(name=name, rdtype="TXT", text=payload)


def schema_uri(did: str, nsid: str) -> str:
    return f"at://{did}/{SCHEMA_COLLECTION}/{nsid}"


class FakeDnsClient(DnsClient):
    """DnsClient serving canned answers and recording every query.

    Unknown names answer with no records. An Exception value is raised.
    """

    def __init__(self, answers: Optional[Dict[str, Union[List[DnsRecord], Exception]]] = None):
        self.answers = answers or {}
        self.queries: List[Tuple[str, str]] = []

    def delegate(self, address: str, did: str) -> None:
        self.answers[address] = [txt(address, f"did={did}")]

    async def query(self, name: str, rdtype: str = "TXT") -> List[DnsRecord]:
        self.queries.append((name, rdtype))
        answer = self.answers.get(name, [])
        if isinstance(answer, Exception):
            raise answer
        return list(answer)


class FakeAtProtoClient(AtProtoClient):
    """AtProtoClient serving canned schema pages and repo descriptions.

    schema_pages maps a DID to its pages; each page is a list of NSID
    strings or an Exception to raise. Cursors are "cursor-<page index>"
    and the last page carries none.
    """

    def __init__(
        self,
        schema_pages: Optional[Dict[str, Sequence[Union[List[str], Exception]]]] = None,
        collections: Optional[Dict[str, Union[List[str], Exception]]] = None,
    ):
        self.schema_pages = schema_pages or {}
        self.collections = collections or {}
        self.list_calls: List[Tuple[str, str, Optional[str]]] = []
        self.describe_calls: List[str] = []

    @property
    def network_calls(self) -> int:
        return len(self.list_calls) + len(self.describe_calls)

    async def list_records(
        self,
        repo: Did,
        collection: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        reverse: bool = False,
    ) -> ListRecordsOutput:
        self.list_calls.append((repo.value, collection, cursor))
        pages = self.schema_pages.get(repo.value)
        if pages is None:
            raise RemoteProtocolError(f"RepoNotFound: {repo}")

        index = 0 if cursor is None else int(cursor.split("-", 1)[1])
        page = pages[index]
        if isinstance(page, Exception):
            raise page

        next_cursor = f"cursor-{index + 1}" if index + 1 < len(pages) else None
        return ListRecordsOutput(
            records=[RecordEntry(uri=schema_uri(repo.value, n)) for n in page],
            cursor=next_cursor,
        )

    async def describe_repo(self, repo: Did) -> DescribeRepoOutput:
        self.describe_calls.append(repo.value)
        collections = self.collections.get(repo.value)
        if collections is None:
            raise RemoteProtocolError(f"RepoNotFound: {repo}")
        if isinstance(collections, Exception):
            raise collections
        return DescribeRepoOutput(did=repo.value, collections=collections)


@pytest.fixture
def cache():
    """Fresh verdict cache for each test."""
    return VerdictCache()


@pytest.fixture
def dns_client():
    return FakeDnsClient()


@pytest.fixture
def atproto_client():
    return FakeAtProtoClient()


@pytest.fixture
def lexicon_did():
    return Did.parse(LEXICON_DID)


def nsid(value: str) -> Nsid:
    return Nsid.parse(value)
