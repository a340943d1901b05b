# savesync GraphQL Gateway Tests
# Tests for the HTTP gateway using httpx mock transports

import asyncio
import json

import httpx

from savesync.remote.graphql import GraphQLGateway
from savesync.sync.gateway import OutcomeKind


def _gateway(handler) -> GraphQLGateway:
    return GraphQLGateway("https://api.example.com/", token="secret", transport=httpx.MockTransport(handler))


def _call(gateway: GraphQLGateway, action: str, item_id: str = "item-1"):
    async def run():
        async with gateway:
            return await getattr(gateway, action)(item_id)

    return asyncio.run(run())


class TestGraphQLGateway:
    """Tests for GraphQLGateway."""

    def test_archive_request(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200, json={"data": {"setLinkArchived": {"__typename": "ArchiveLinkSuccess", "linkId": "item-1"}}}
            )

        outcome = _call(_gateway(handler), "archive")

        assert outcome.confirmed is True
        request = requests[0]
        assert request.url == "https://api.example.com/api/graphql"
        assert request.headers["Authorization"] == "secret"
        body = json.loads(request.content)
        assert "setLinkArchived" in body["query"]
        assert body["variables"] == {"input": {"linkId": "item-1", "archived": True}}

    def test_unarchive_request(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"data": {"setLinkArchived": {"__typename": "ArchiveLinkSuccess"}}})

        assert _call(_gateway(handler), "unarchive").confirmed is True
        assert bodies[0]["variables"]["input"]["archived"] is False

    def test_delete_request(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(
                200,
                json={"data": {"setBookmarkArticle": {"__typename": "SetBookmarkArticleSuccess"}}},
            )

        assert _call(_gateway(handler), "delete").confirmed is True
        assert "setBookmarkArticle" in bodies[0]["query"]
        assert bodies[0]["variables"] == {"input": {"articleID": "item-1", "bookmark": False}}

    def test_typed_error_is_rejected(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "data": {
                        "setLinkArchived": {
                            "__typename": "ArchiveLinkError",
                            "message": "nope",
                            "errorCodes": ["NOT_FOUND"],
                        }
                    }
                },
            )

        outcome = _call(_gateway(handler), "archive")

        assert outcome.kind == OutcomeKind.REJECTED
        assert outcome.reason == "NOT_FOUND"
        assert bool(outcome) is False

    def test_graphql_errors_are_rejected(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"errors": [{"message": "Unauthorized"}]})

        outcome = _call(_gateway(handler), "delete")

        assert outcome.kind == OutcomeKind.REJECTED
        assert "Unauthorized" in outcome.reason

    def test_client_error_is_rejected(self):
        outcome = _call(_gateway(lambda request: httpx.Response(401)), "archive")
        assert outcome.kind == OutcomeKind.REJECTED

    def test_server_error_is_unreachable(self):
        outcome = _call(_gateway(lambda request: httpx.Response(503)), "archive")
        assert outcome.kind == OutcomeKind.UNREACHABLE

    def test_connection_error_is_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        outcome = _call(_gateway(handler), "delete")

        assert outcome.kind == OutcomeKind.UNREACHABLE
        assert "connection refused" in outcome.reason

    def test_timeout_is_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        outcome = _call(_gateway(handler), "unarchive")

        assert outcome.kind == OutcomeKind.UNREACHABLE

    def test_non_json_is_unreachable(self):
        outcome = _call(_gateway(lambda request: httpx.Response(200, text="<html>")), "archive")
        assert outcome.kind == OutcomeKind.UNREACHABLE

    def test_missing_payload_is_unreachable(self):
        outcome = _call(_gateway(lambda request: httpx.Response(200, json={"data": {}})), "archive")
        assert outcome.kind == OutcomeKind.UNREACHABLE

    def test_no_token_no_header(self):
        headers = []

        def handler(request: httpx.Request) -> httpx.Response:
            headers.append(request.headers)
            return httpx.Response(200, json={"data": {"setLinkArchived": {"__typename": "ArchiveLinkSuccess"}}})

        gateway = GraphQLGateway("https://api.example.com", transport=httpx.MockTransport(handler))
        _call(gateway, "archive")

        assert "authorization" not in headers[0]
