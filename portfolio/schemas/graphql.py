from typing import Any

from pydantic import BaseModel


class GraphQLRequest(BaseModel):
    # Left untyped so malformed bodies reach the proxy and get its 400 shape.
    query: Any = ""
    variables: Any = None
