import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from portfolio import dependencies as deps
from portfolio.errors import PortfolioError
from portfolio.schemas.graphql import GraphQLRequest
from portfolio.services.graphql_proxy import GraphQLProxy

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR_BODY = {"errors": [{"message": "Internal server error"}]}


@router.post("/api/graphql")
def proxy_graphql(
    body: GraphQLRequest,
    proxy: GraphQLProxy = Depends(deps.get_graphql_proxy),
):
    """Forward allow-listed GraphQL operations with the server-held API key."""
    try:
        _status, result = proxy.handle(body.query, body.variables)
        return JSONResponse(content=result)
    except PortfolioError as e:
        if e.status_code >= 500:
            logger.error(f"GraphQL proxy error: {e}")
        return JSONResponse(status_code=e.status_code, content=e.to_body())
    except Exception as e:
        logger.error(f"Unexpected error in GraphQL proxy: {e}")
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)
