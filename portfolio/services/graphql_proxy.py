import logging
import re
from typing import Any, Iterable, Optional

from portfolio.errors import InvalidOperation, OperationNotAllowed
from portfolio.services.graphql_client import GraphQLClient

logger = logging.getLogger(__name__)

COMMENT_PATTERN = re.compile(r"#[^\r\n]*")
OPERATION_PATTERN = re.compile(r"^\s*(query|mutation)\s+(\w+)", re.IGNORECASE)


def extract_operation_name(query: Any) -> Optional[str]:
    """Return the name of the leading ``query <Name>`` or ``mutation <Name>`` clause.

    Comments are dropped first so a name hidden after ``#`` cannot be matched.
    Only the first definition in the document counts.
    """
    if not query or not isinstance(query, str):
        return None
    match = OPERATION_PATTERN.match(COMMENT_PATTERN.sub("", query))
    return match.group(2) if match else None


class GraphQLProxy:
    """
    Gate between browser GraphQL requests and the upstream API.

    Only operation names on the allow-list are forwarded. This is a
    name check, not a query-shape validator.
    """

    def __init__(self, client: GraphQLClient, allowed_operations: Iterable[str]):
        self.client = client
        self.allowed_operations = frozenset(allowed_operations)

    def is_allowed(self, operation_name: str) -> bool:
        return operation_name in self.allowed_operations

    def handle(self, query: Any, variables: Any = None):
        """Validate and forward one request; returns ``(status_code, body)``."""
        operation_name = extract_operation_name(query)
        if not operation_name:
            raise InvalidOperation()
        if variables is not None and not isinstance(variables, dict):
            raise InvalidOperation("GraphQL variables must be an object")

        if not self.is_allowed(operation_name):
            logger.warning(f"Blocked unauthorized operation: {operation_name}")
            raise OperationNotAllowed(operation_name)

        # Pin execution to the checked operation when the document holds several.
        logger.debug(f"Forwarding GraphQL operation {operation_name}")
        return self.client.forward(
            {"query": query, "variables": variables, "operationName": operation_name}
        )
