"""
AT Protocol wire models.

Response bodies of the XRPC read methods used by lexcheck, plus the
error code registry carried by LexiconError.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCode:
    """Error code registry for lexicon verification"""
    DELEGATION_NOT_FOUND = "DELEGATION_NOT_FOUND"
    ACCOUNT_IDENTIFIER_INVALID = "ACCOUNT_IDENTIFIER_INVALID"
    NSID_INVALID = "NSID_INVALID"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    REMOTE_PROTOCOL_ERROR = "REMOTE_PROTOCOL_ERROR"


# =============================================================================
# com.atproto.repo.listRecords
# =============================================================================

class RecordEntry(BaseModel):
    """One record returned by listRecords"""
    model_config = ConfigDict(extra="ignore")

    uri: str
    cid: Optional[str] = None
    value: Dict[str, Any] = Field(default_factory=dict)


class ListRecordsOutput(BaseModel):
    """listRecords response; cursor is absent on the last page"""
    model_config = ConfigDict(extra="ignore")

    records: List[RecordEntry] = Field(default_factory=list)
    cursor: Optional[str] = None


# =============================================================================
# com.atproto.repo.describeRepo
# =============================================================================

class DescribeRepoOutput(BaseModel):
    """describeRepo response"""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    handle: Optional[str] = None
    did: str
    collections: List[str] = Field(default_factory=list)
    handle_is_correct: Optional[bool] = Field(default=None, alias="handleIsCorrect")


# =============================================================================
# XRPC error body
# =============================================================================

class XrpcErrorBody(BaseModel):
    """Error body returned with non-2xx XRPC responses"""
    model_config = ConfigDict(extra="ignore")

    error: Optional[str] = None
    message: Optional[str] = None
