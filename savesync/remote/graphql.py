# Savesync GraphQL Gateway
# Remote gateway issuing archive/unarchive/delete mutations over HTTP

import logging
from typing import Any, Optional

import httpx

from savesync.sync.gateway import RemoteOutcome

logger = logging.getLogger(__name__)

GRAPHQL_PATH = "/api/graphql"

SET_LINK_ARCHIVED = """
mutation SetLinkArchived($input: ArchiveLinkInput!) {
  setLinkArchived(input: $input) {
    __typename
    ... on ArchiveLinkSuccess { linkId message }
    ... on ArchiveLinkError { message errorCodes }
  }
}
"""

SET_BOOKMARK_ARTICLE = """
mutation SetBookmarkArticle($input: SetBookmarkArticleInput!) {
  setBookmarkArticle(input: $input) {
    __typename
    ... on SetBookmarkArticleSuccess { bookmarkedArticle { id } }
    ... on SetBookmarkArticleError { errorCodes }
  }
}
"""


class GraphQLGateway:
    """
    Remote gateway for a read-it-later GraphQL API.

    Every failure is returned as an outcome, never raised: transport
    problems and server errors are ``unreachable``, refusals by the API are
    ``rejected``.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers = {"Content-Type": "application/json"}
            if self.token:
                headers["Authorization"] = self.token
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "GraphQLGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def archive(self, item_id: str) -> RemoteOutcome:
        return await self._mutate(
            SET_LINK_ARCHIVED, {"input": {"linkId": item_id, "archived": True}}, "setLinkArchived"
        )

    async def unarchive(self, item_id: str) -> RemoteOutcome:
        return await self._mutate(
            SET_LINK_ARCHIVED, {"input": {"linkId": item_id, "archived": False}}, "setLinkArchived"
        )

    async def delete(self, item_id: str) -> RemoteOutcome:
        return await self._mutate(
            SET_BOOKMARK_ARTICLE, {"input": {"articleID": item_id, "bookmark": False}}, "setBookmarkArticle"
        )

    async def _mutate(self, query: str, variables: dict[str, Any], field: str) -> RemoteOutcome:
        client = await self._get_client()

        try:
            response = await client.post(GRAPHQL_PATH, json={"query": query, "variables": variables})
        except httpx.TimeoutException as e:
            return RemoteOutcome.unreachable(f"Timed out: {e}")
        except httpx.TransportError as e:
            return RemoteOutcome.unreachable(f"Connection failed: {e}")

        if response.status_code >= 500:
            return RemoteOutcome.unreachable(f"Server error {response.status_code}")
        if response.status_code >= 400:
            return RemoteOutcome.rejected(f"HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            return RemoteOutcome.unreachable("Response is not JSON")

        return _parse_payload(body, field)


def _parse_payload(body: Any, field: str) -> RemoteOutcome:
    """Map a GraphQL response body to an outcome."""
    if not isinstance(body, dict):
        return RemoteOutcome.unreachable("Unexpected response shape")

    errors = body.get("errors")
    if errors:
        messages = [str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors]
        return RemoteOutcome.rejected("; ".join(messages))

    payload = (body.get("data") or {}).get(field)
    if not isinstance(payload, dict):
        return RemoteOutcome.unreachable(f"Missing {field} in response")

    typename = payload.get("__typename", "")
    if typename.endswith("Success"):
        return RemoteOutcome.ok()

    codes = payload.get("errorCodes") or []
    reason = ", ".join(str(code) for code in codes) or payload.get("message") or typename or "unknown error"
    logger.debug("%s rejected: %s", field, reason)
    return RemoteOutcome.rejected(reason)
