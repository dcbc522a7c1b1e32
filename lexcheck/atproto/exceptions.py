"""Lexicon verification exceptions mapped to error codes.

Propagation policy:
- Delegation and schema enumeration failures are absorbed by the checker
  into an Invalid verdict.
- Repository listing failures and unparsable account identifiers reach
  the caller.
"""

from lexcheck.atproto.models import ErrorCode


class LexiconError(Exception):
    """Base exception for lexicon verification.

    Carries an error code from ErrorCode.
    """

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


class DelegationNotFoundError(LexiconError):
    """No usable _lexicon TXT record for an NSID.

    Used when:
    - The name does not exist or has no answer
    - The first answer record is not a TXT record
    - The TXT payload lacks the did= prefix
    - The remainder of the payload is not a valid DID
    """

    def __init__(self, message: str = "Lexicon delegation not found"):
        super().__init__(ErrorCode.DELEGATION_NOT_FOUND, message)


class AccountIdentifierInvalidError(LexiconError):
    """String is not a syntactically valid DID."""

    def __init__(self, message: str = "Invalid account identifier"):
        super().__init__(ErrorCode.ACCOUNT_IDENTIFIER_INVALID, message)


class NsidInvalidError(LexiconError):
    """String is not a syntactically valid NSID."""

    def __init__(self, message: str = "Invalid NSID"):
        super().__init__(ErrorCode.NSID_INVALID, message)


class TransportError(LexiconError):
    """DNS or XRPC connectivity failure (timeout, refused, unreachable)."""

    def __init__(self, message: str = "Transport failure"):
        super().__init__(ErrorCode.TRANSPORT_ERROR, message)


class RemoteProtocolError(LexiconError):
    """Remote service rejected a call or returned an unusable response.

    Used when:
    - XRPC responds with a non-2xx status
    - Response body does not match the expected schema
    - A record address does not end in a valid NSID
    """

    def __init__(self, message: str = "Remote protocol error"):
        super().__init__(ErrorCode.REMOTE_PROTOCOL_ERROR, message)
