"""
Lightweight XRPC client for AT Protocol repository reads.
Unauthenticated: only public query methods are used.

Methods:
- com.atproto.repo.listRecords  - page through one collection of a repo
- com.atproto.repo.describeRepo - enumerate a repo's collections
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from lexcheck.core.config import XRPC_SERVICE_URL, XRPC_TIMEOUT_SECONDS

from .exceptions import RemoteProtocolError, TransportError
from .identifiers import Did
from .models import DescribeRepoOutput, ListRecordsOutput, XrpcErrorBody

log = logging.getLogger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)


class AtProtoClient(ABC):
    """Abstract AT Protocol repository read capability."""

    @abstractmethod
    async def list_records(
        self,
        repo: Did,
        collection: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        reverse: bool = False,
    ) -> ListRecordsOutput:
        """List one page of records in a collection.

        Raises:
            TransportError: Connection failure or timeout.
            RemoteProtocolError: Service rejected the call or returned garbage.
        """
        ...

    @abstractmethod
    async def describe_repo(self, repo: Did) -> DescribeRepoOutput:
        """Describe a repository, including the collections it holds.

        Raises:
            TransportError: Connection failure or timeout.
            RemoteProtocolError: Service rejected the call or returned garbage.
        """
        ...


class XrpcClient(AtProtoClient):
    """AtProtoClient issuing XRPC GET requests with httpx."""

    def __init__(
        self,
        service_url: str = XRPC_SERVICE_URL,
        timeout: float = XRPC_TIMEOUT_SECONDS,
    ):
        """Initialize XRPC client.

        Args:
            service_url: Base URL of the PDS or entryway, e.g. https://bsky.social.
            timeout: HTTP request timeout.
        """
        self.service_url = service_url.rstrip("/")
        self.timeout = timeout

    async def list_records(
        self,
        repo: Did,
        collection: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        reverse: bool = False,
    ) -> ListRecordsOutput:
        params: Dict[str, Any] = {
            "repo": repo.value,
            "collection": collection,
            "reverse": "true" if reverse else "false",
        }
        if cursor is not None:
            params["cursor"] = cursor
        if limit is not None:
            params["limit"] = limit
        return await self._query("com.atproto.repo.listRecords", params, ListRecordsOutput)

    async def describe_repo(self, repo: Did) -> DescribeRepoOutput:
        return await self._query(
            "com.atproto.repo.describeRepo", {"repo": repo.value}, DescribeRepoOutput
        )

    async def _query(
        self,
        method: str,
        params: Dict[str, Any],
        output: Type[OutputT],
    ) -> OutputT:
        """GET /xrpc/{method} and validate the JSON body against `output`."""
        url = f"{self.service_url}/xrpc/{method}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params)
        except httpx.TimeoutException:
            raise TransportError(f"{method} timeout after {self.timeout}s")
        except httpx.RequestError as e:
            raise TransportError(f"{method} network error: {e}")

        if response.status_code >= 400:
            raise RemoteProtocolError(_describe_error(method, response))

        try:
            return output.model_validate(response.json())
        except ValueError as e:
            # pydantic ValidationError and JSON decode errors are both ValueErrors
            kind = "schema" if isinstance(e, ValidationError) else "JSON"
            raise RemoteProtocolError(f"{method} returned invalid {kind}: {e}")


def _describe_error(method: str, response: httpx.Response) -> str:
    """Build a message from an XRPC error response."""
    detail = ""
    try:
        body = XrpcErrorBody.model_validate(response.json())
        detail = ": ".join(p for p in (body.error, body.message) if p)
    except ValueError:
        pass
    message = f"{method} failed: HTTP {response.status_code}"
    return f"{message} ({detail})" if detail else message


def atproto_client() -> AtProtoClient:
    """Create an AT Protocol client from configuration."""
    return XrpcClient()
