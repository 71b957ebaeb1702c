import json
import textwrap
from pathlib import Path

import httpx

from portfolio.errors import UpstreamError
from portfolio.schemas.content import ContentListing
from portfolio.services.graphql_client import GraphQLClient


class FakeContentRepo:
    """
    Minimal content repo stand-in keyed by content type.
    """

    source = "fake"

    def __init__(self, items_by_type=None, notice=None):
        self.items_by_type = items_by_type or {}
        self.notice = notice
        self.calls = []

    def list_content(self, content_type):
        self.calls.append(("list", content_type))
        return ContentListing(
            items=list(self.items_by_type.get(content_type, [])), notice=self.notice
        )

    def get_content(self, content_type, slug):
        self.calls.append(("get", content_type, slug))
        for item in self.items_by_type.get(content_type, []):
            if item.slug == slug:
                return item
        return None


class FakeGraphQLClient:
    """
    Records execute()/forward() calls and replays canned results.
    Pass an exception instance as `data` to make execute() raise it.
    """

    def __init__(self, data=None, forward_result=(200, {"data": {}}), configured=True):
        self.data = data if data is not None else {}
        self.forward_result = forward_result
        self.configured = configured
        self.executed = []
        self.forwarded = []

    @property
    def is_configured(self):
        return self.configured

    def execute(self, query, variables=None):
        self.executed.append((query, variables))
        if isinstance(self.data, Exception):
            raise self.data
        return self.data

    def forward(self, payload):
        self.forwarded.append(payload)
        if isinstance(self.forward_result, Exception):
            raise self.forward_result
        return self.forward_result


class FakeEmailSender:
    """
    Collects sent messages; fail_on lets a given send (1-based) raise.
    """

    def __init__(self, fail_on=None):
        self.sent = []
        self.fail_on = fail_on

    def send(self, sender, recipients, subject, text, html):
        if self.fail_on is not None and len(self.sent) + 1 == self.fail_on:
            raise UpstreamError("smtp down")
        self.sent.append(
            {
                "sender": sender,
                "recipients": list(recipients),
                "subject": subject,
                "text": text,
                "html": html,
            }
        )


class FakeContentService:
    """
    Minimal content service stand-in for router tests.
    """

    def __init__(self, listing=None, item=None, recent=None, error=None):
        self.listing = listing or ContentListing()
        self.item = item
        self.recent = recent
        self.error = error
        self.calls = []

    def _maybe_raise(self):
        if self.error:
            raise self.error

    def list(self, content_type):
        self.calls.append(("list", content_type))
        self._maybe_raise()
        return self.listing

    def list_by_tag(self, content_type, tag):
        self.calls.append(("tag", content_type, tag))
        self._maybe_raise()
        return self.listing

    def list_by_category(self, content_type, category):
        self.calls.append(("category", content_type, category))
        self._maybe_raise()
        return self.listing

    def search(self, content_type, query):
        self.calls.append(("search", content_type, query))
        self._maybe_raise()
        return self.listing

    def get(self, content_type, slug):
        self.calls.append(("get", content_type, slug))
        self._maybe_raise()
        return self.item

    def recent_posts(self, limit=3):
        self._maybe_raise()
        return self.recent


def make_http_client(handler, api_url="https://api.example.com/graphql", api_key="k-123"):
    """GraphQLClient whose outbound HTTP goes to `handler` instead of the network."""
    transport = httpx.MockTransport(handler)
    return GraphQLClient(api_url, api_key, http_client=httpx.Client(transport=transport))


def json_handler(body, status_code=200, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=body)

    return handler


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content.decode("utf-8"))


def write_doc(directory: Path, name: str, text: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return path


def stream_record(event_name="INSERT", **fields):
    """Build a change-stream record whose new image holds the given string fields."""
    record = {"eventID": f"evt-{fields.get('id', 'x')}", "eventName": event_name}
    if fields:
        record["dynamodb"] = {
            "NewImage": {key: {"S": value} for key, value in fields.items()}
        }
    return record
