"""Verdict cache for lexicon verification.

Maps NSID -> last known validity for the lifetime of the process. Nothing
is persisted.

Validity is monotonic within one cache instance: a positive finding (a
schema record was seen) is durable, while a negative finding only covers
the NSID that was looked for. mark_invalid therefore never overwrites a
valid entry.

The cache is created and owned by the caller of a batch check and passed
explicitly to the checker; there is no module-level instance.
"""

import asyncio
import logging
from typing import Dict, Optional

from lexcheck.atproto.identifiers import Nsid

from .outcome import Verdict

log = logging.getLogger(__name__)


class VerdictCache:
    """Async-safe NSID -> validity mapping.

    All access goes through an asyncio.Lock so concurrent checks that
    discover the same NSID cannot lose updates.
    """

    def __init__(self):
        self._known_valid: Dict[Nsid, bool] = {}
        self._lock = asyncio.Lock()

    async def cached_verdict(self, nsid: Nsid) -> Optional[Verdict]:
        """Get cached verdict for an NSID.

        Returns:
            Verdict if the NSID has been seen, None otherwise.
        """
        async with self._lock:
            is_valid = self._known_valid.get(nsid)
        if is_valid is None:
            return None
        return Verdict.of(is_valid)

    async def mark_valid(self, nsid: Nsid) -> None:
        async with self._lock:
            self._known_valid[nsid] = True

    async def mark_invalid(self, nsid: Nsid) -> None:
        """Record a confirmed absence. No-op if the NSID is already valid."""
        async with self._lock:
            if self._known_valid.get(nsid):
                log.debug(f"Ignoring invalid mark for known-valid {nsid}")
                return
            self._known_valid[nsid] = False

    async def clear(self) -> None:
        """Clear all cache entries."""
        async with self._lock:
            self._known_valid.clear()

    @property
    def size(self) -> int:
        """Current number of cached entries."""
        return len(self._known_valid)
