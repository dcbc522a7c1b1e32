"""
lexcheck configuration constants.

Constants are organized into:
- NORMATIVE: Fixed by AT Protocol lexicon resolution, cannot be changed
- OPERATIONAL: Deployment-specific settings (env vars)
"""

import os

# =============================================================================
# NORMATIVE CONSTANTS (fixed by protocol)
# =============================================================================

# DNS label prepended to the reversed domain authority of an NSID
# e.g. community.lexicon.calendar.event -> _lexicon.calendar.lexicon.community
LEXICON_DNS_LABEL: str = "_lexicon"

# TXT payload prefix naming the account that publishes the lexicon
DID_TXT_PREFIX: str = "did="

# Repository collection holding lexicon schema definitions
LEXICON_SCHEMA_COLLECTION: str = "com.atproto.lexicon.schema"

# Domain authority prefix reserved for the hosting application.
# NSIDs under it never need delegation proof and are skipped by batch checks.
WELL_KNOWN_NAMESPACE: str = "app.bsky"


# =============================================================================
# OPERATIONAL SETTINGS (deployment-specific, via environment variables)
# =============================================================================

# XRPC service used for listRecords / describeRepo
XRPC_SERVICE_URL: str = os.getenv("LEXCHECK_XRPC_SERVICE", "https://bsky.social")

# Per-request timeout for XRPC calls
XRPC_TIMEOUT_SECONDS: float = float(os.getenv("LEXCHECK_XRPC_TIMEOUT", "10.0"))


def _parse_nameservers() -> tuple[str, ...]:
    """Parse comma-separated nameserver addresses from environment.

    Environment variable format:
        LEXCHECK_DNS_NAMESERVERS=8.8.8.8,1.1.1.1

    Returns:
        tuple of nameserver IP address strings.
    """
    env_value = os.getenv("LEXCHECK_DNS_NAMESERVERS", "")
    if env_value:
        return tuple(ns.strip() for ns in env_value.split(",") if ns.strip())
    return ("8.8.8.8",)


# Nameservers queried for _lexicon TXT records
DNS_NAMESERVERS: tuple[str, ...] = _parse_nameservers()

DNS_PORT: int = int(os.getenv("LEXCHECK_DNS_PORT", "53"))

# Total time budget for one TXT lookup (dnspython resolver lifetime)
DNS_TIMEOUT_SECONDS: float = float(os.getenv("LEXCHECK_DNS_TIMEOUT", "5.0"))

# Number of NSIDs checked concurrently by the CLI (1 = strictly sequential)
CHECK_CONCURRENCY: int = max(1, int(os.getenv("LEXCHECK_CONCURRENCY", "1")))
