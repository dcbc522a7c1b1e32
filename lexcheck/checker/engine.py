"""Lexicon NSID validity checks.

An NSID is valid if:
  * there is a DNS TXT record at the NSID's `_lexicon` address
  * that TXT record contains `did=$LEXICON_REPO_DID`
  * `$LEXICON_REPO_DID` holds a `com.atproto.lexicon.schema` record
    that defines the NSID

Delegation and enumeration failures are expected outcomes and become
Invalid verdicts. Only the outer repository listing raises.
"""

import asyncio
import logging
from typing import Iterable, Optional

from lexcheck.atproto.dns import DnsClient, resolve_delegation
from lexcheck.atproto.exceptions import LexiconError
from lexcheck.atproto.identifiers import Did, Nsid
from lexcheck.atproto.repo import get_lexicon_nsids, get_user_collections
from lexcheck.atproto.xrpc import AtProtoClient
from lexcheck.core.config import WELL_KNOWN_NAMESPACE

from .cache import VerdictCache
from .outcome import Outcome, Verdict

log = logging.getLogger(__name__)


def is_well_known(nsid: Nsid) -> bool:
    """True for NSIDs in the hosting application's reserved namespace."""
    return nsid.domain_authority.startswith(WELL_KNOWN_NAMESPACE)


async def check_collection(
    atproto_client: AtProtoClient,
    dns_client: DnsClient,
    cache: VerdictCache,
    nsid: Nsid,
) -> Verdict:
    """Validate a collection by NSID.

    Assumes the cache was already consulted. Every NSID found in the
    delegated account's schema collection is marked valid in the cache,
    not only the target.

    Args:
        atproto_client: Repository read capability.
        dns_client: DNS capability.
        cache: Verdict cache borrowed for this call.
        nsid: NSID to check.

    Returns:
        Verdict.VALID if the delegated account defines the NSID.
    """
    try:
        did = await resolve_delegation(dns_client, nsid)
    except LexiconError as e:
        log.info(
            f"No lexicon delegation for {nsid}: {e.message}",
            extra={"nsid": nsid.value},
        )
        return Verdict.INVALID

    found = await _scan_schema_records(atproto_client, cache, did, nsid)
    if found:
        return Verdict.VALID

    await cache.mark_invalid(nsid)
    return Verdict.INVALID


async def _scan_schema_records(
    atproto_client: AtProtoClient,
    cache: VerdictCache,
    did: Did,
    target: Nsid,
) -> bool:
    """Page through an account's schema records, caching each as valid.

    The scan ends early on a failing page or on malformed record keys.
    It also ends when the cursor stops advancing. NSIDs seen before the
    stop still count.

    Returns:
        True if `target` was among the NSIDs seen.
    """
    cursor: Optional[str] = None
    found = False
    pages = 0
    while True:
        try:
            page = await get_lexicon_nsids(atproto_client, did, cursor)
        except LexiconError as e:
            log.warning(
                f"Schema listing for {did} stopped after {pages} page(s): {e.message}",
                extra={"did": did.value, "nsid": target.value},
            )
            break
        pages += 1
        for lexicon_nsid in page.nsids:
            await cache.mark_valid(lexicon_nsid)
            if lexicon_nsid == target:
                found = True
        if page.rejected:
            log.warning(
                f"Schema listing for {did} stopped after {pages} page(s): "
                f"{len(page.rejected)} record(s) without a valid NSID",
                extra={"did": did.value, "nsid": target.value},
            )
            break
        if page.cursor is None:
            break
        if page.cursor == cursor:
            log.warning(
                f"Schema listing for {did} repeated cursor {cursor}",
                extra={"did": did.value, "nsid": target.value},
            )
            break
        cursor = page.cursor
    return found


async def check_collections(
    cache: VerdictCache,
    dns_client: DnsClient,
    atproto_client: AtProtoClient,
    collections: Iterable[Nsid],
    max_concurrency: int = 1,
) -> Outcome:
    """Validate multiple collections by NSID.

    Skips NSIDs under the well-known application namespace, which are
    trivially valid and left out of the outcome.

    Args:
        cache: Verdict cache owned by the caller, shared across the batch.
        dns_client: DNS capability.
        atproto_client: Repository read capability.
        collections: NSIDs to check, in order.
        max_concurrency: NSIDs checked at once. 1 checks strictly in order,
            so earlier checks can populate the cache for later ones.

    Returns:
        Outcome for every non-skipped NSID.
    """
    outcome = Outcome()
    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def check_one(nsid: Nsid) -> None:
        async with semaphore:
            cached = await cache.cached_verdict(nsid)
            if cached is not None:
                log.debug(
                    f"Cache hit for {nsid}: {cached.value}",
                    extra={"nsid": nsid.value},
                )
                outcome.record(nsid, cached)
                return
            verdict = await check_collection(atproto_client, dns_client, cache, nsid)
            outcome.record(nsid, verdict)

    pending = []
    for nsid in collections:
        if is_well_known(nsid):
            log.debug(f"Skipping well-known {nsid}", extra={"nsid": nsid.value})
            continue
        pending.append(check_one(nsid))

    await asyncio.gather(*pending)
    return outcome


async def check_user_collections(
    cache: VerdictCache,
    dns_client: DnsClient,
    atproto_client: AtProtoClient,
    user_did: Did,
    max_concurrency: int = 1,
) -> Outcome:
    """Retrieve a repo's collections and validate them.

    Raises:
        TransportError: Repository listing could not reach the service.
        RemoteProtocolError: Repository listing was rejected.
    """
    user_collections = await get_user_collections(atproto_client, user_did)
    return await check_collections(
        cache, dns_client, atproto_client, user_collections, max_concurrency
    )
