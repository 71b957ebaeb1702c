import logging

import pytest

from portfolio.errors import ConfigurationMissing, InvalidOperation, OperationNotAllowed
from portfolio.services.graphql_proxy import GraphQLProxy, extract_operation_name
from tests.conftest import FakeGraphQLClient

ALLOWED = ["ListBlogPosts", "GetBlogPost", "GetRecentBlogPosts"]


@pytest.mark.parametrize(
    "query, expected",
    [
        ("query ListBlogPosts { listBlogPosts { items { slug } } }", "ListBlogPosts"),
        ("  query   GetBlogPost($slug: String!) { x }", "GetBlogPost"),
        ("QUERY GetRecentBlogPosts { x }", "GetRecentBlogPosts"),
        ("mutation DeleteBlogPost($slug: String!) { x }", "DeleteBlogPost"),
        ("{ listBlogPosts { items { slug } } }", None),
        ("query { __schema { types { name } } }", None),
        ("", None),
        (None, None),
        (42, None),
        (
            "mutation DeleteBlogPost { deleteBlogPost(slug: \"x\") { slug } } # query ListBlogPosts",
            "DeleteBlogPost",
        ),
        (
            "mutation DeleteBlogPost { x }\nquery ListBlogPosts { listBlogPosts { items { slug } } }",
            "DeleteBlogPost",
        ),
        ("# query ListBlogPosts\nmutation DeleteBlogPost { x }", "DeleteBlogPost"),
        ("# just a comment\nquery GetBlogPost { x }", "GetBlogPost"),
        ("{ listBlogPosts { items { slug } } } query ListBlogPosts { x }", None),
    ],
)
def test_extract_operation_name(query, expected):
    assert extract_operation_name(query) == expected


def test_handle_forwards_allowed_operation_and_relays_response():
    upstream = {"data": {"listBlogPosts": {"items": [{"slug": "a"}]}}}
    client = FakeGraphQLClient(forward_result=(200, upstream))
    proxy = GraphQLProxy(client, ALLOWED)
    query = "query ListBlogPosts { listBlogPosts { items { slug } } }"

    status, body = proxy.handle(query, {"limit": 3})

    assert status == 200
    assert body == upstream
    assert client.forwarded == [
        {"query": query, "variables": {"limit": 3}, "operationName": "ListBlogPosts"}
    ]


def test_handle_relays_graphql_errors_unchanged():
    upstream = {"data": None, "errors": [{"message": "boom", "errorType": "X"}]}
    client = FakeGraphQLClient(forward_result=(200, upstream))
    proxy = GraphQLProxy(client, ALLOWED)

    _status, body = proxy.handle("query GetBlogPost { getBlogPost { slug } }")

    assert body == upstream


@pytest.mark.parametrize(
    "query",
    [
        "mutation DeleteBlogPost($slug: String!) { deleteBlogPost(slug: $slug) { slug } }",
        "query ListContactForms { listContactForms { items { email } } }",
        "query listblogposts { x }",
    ],
)
def test_handle_blocks_operations_off_the_allow_list(query, caplog):
    client = FakeGraphQLClient()
    proxy = GraphQLProxy(client, ALLOWED)

    with caplog.at_level(logging.WARNING):
        with pytest.raises(OperationNotAllowed) as exc:
            proxy.handle(query, {"slug": "x"})

    assert exc.value.status_code == 403
    assert exc.value.to_body() == {"errors": [{"message": "Operation not allowed"}]}
    assert client.forwarded == []
    assert "Blocked unauthorized operation" in caplog.text


def test_handle_rejects_query_without_operation_name():
    client = FakeGraphQLClient()
    proxy = GraphQLProxy(client, ALLOWED)

    with pytest.raises(InvalidOperation) as exc:
        proxy.handle("{ listBlogPosts { items { slug } } }")

    assert exc.value.status_code == 400
    assert client.forwarded == []


def test_handle_propagates_missing_configuration():
    client = FakeGraphQLClient(forward_result=ConfigurationMissing())
    proxy = GraphQLProxy(client, ALLOWED)

    with pytest.raises(ConfigurationMissing) as exc:
        proxy.handle("query ListBlogPosts { x }")

    assert exc.value.status_code == 500


def test_allow_list_is_configurable():
    proxy = GraphQLProxy(FakeGraphQLClient(), ["ListProjects"])

    assert proxy.is_allowed("ListProjects")
    assert not proxy.is_allowed("ListBlogPosts")


def test_handle_rejects_non_object_variables():
    client = FakeGraphQLClient()
    proxy = GraphQLProxy(client, ALLOWED)

    with pytest.raises(InvalidOperation):
        proxy.handle("query ListBlogPosts { x }", ["not", "a", "dict"])

    assert client.forwarded == []
