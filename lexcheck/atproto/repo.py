"""Repository reads used by lexicon verification.

- get_lexicon_nsids: one page of NSIDs from an account's
  com.atproto.lexicon.schema collection
- get_user_collections: every collection NSID present in a repository
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from lexcheck.core.config import LEXICON_SCHEMA_COLLECTION

from .exceptions import NsidInvalidError, RemoteProtocolError
from .identifiers import Did, Nsid, aturi_to_nsid
from .xrpc import AtProtoClient

log = logging.getLogger(__name__)


@dataclass
class SchemaPage:
    """NSIDs defined on one listRecords page.

    Attributes:
        nsids: NSIDs in page order.
        cursor: Continuation cursor; None on the last page.
        rejected: URIs of records whose key is not a valid NSID.
    """
    nsids: List[Nsid] = field(default_factory=list)
    cursor: Optional[str] = None
    rejected: List[str] = field(default_factory=list)


async def get_lexicon_nsids(
    client: AtProtoClient,
    did: Did,
    cursor: Optional[str] = None,
) -> SchemaPage:
    """Retrieve a page of lexicon NSIDs published by an account.

    The NSID is taken from each record's URI, not from the record body.
    Records whose URI does not end in a valid NSID are listed in
    `rejected`; the rest of the page is kept.

    Raises:
        TransportError: Connection failure.
        RemoteProtocolError: Call rejected.
    """
    output = await client.list_records(
        did, LEXICON_SCHEMA_COLLECTION, cursor=cursor, reverse=False
    )
    page = SchemaPage(cursor=output.cursor)
    for record in output.records:
        try:
            page.nsids.append(aturi_to_nsid(record.uri))
        except NsidInvalidError as e:
            log.warning(
                f"Schema record {record.uri} has no valid NSID: {e.message}",
                extra={"did": did.value},
            )
            page.rejected.append(record.uri)
    return page


async def get_user_collections(client: AtProtoClient, did: Did) -> List[Nsid]:
    """Retrieve the NSID of every collection in a repo.

    Raises:
        TransportError: Connection failure.
        RemoteProtocolError: Call rejected, or a collection name is not an NSID.
    """
    output = await client.describe_repo(did)
    collections = []
    for name in output.collections:
        try:
            collections.append(Nsid.parse(name))
        except NsidInvalidError as e:
            raise RemoteProtocolError(
                f"Repository {did} lists invalid collection: {e.message}"
            ) from e
    log.debug(
        f"Repository {did} has {len(collections)} collections",
        extra={"did": did.value},
    )
    return collections
