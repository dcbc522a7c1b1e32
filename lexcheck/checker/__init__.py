"""Lexicon NSID verification.

Components:
- engine: single and batch NSID checks
- cache: VerdictCache shared across a batch
- outcome: Verdict and Outcome report

Usage:
    from lexcheck.checker import VerdictCache, check_user_collections

    cache = VerdictCache()
    outcome = await check_user_collections(cache, dns_client, atproto_client, did)
    print(outcome)
"""

from .cache import VerdictCache
from .engine import check_collection, check_collections, check_user_collections, is_well_known
from .outcome import Outcome, Verdict

__all__ = [
    "VerdictCache",
    "Outcome",
    "Verdict",
    "check_collection",
    "check_collections",
    "check_user_collections",
    "is_well_known",
]
