import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from portfolio.repos.content_repo import build_content_repo
from portfolio.routers import contact, content, graphql
from portfolio.services.graphql_client import GraphQLClient
from portfolio.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = GraphQLClient.from_settings(settings)
    app.state.graphql_client = client
    app.state.content_repo = build_content_repo(settings, client=client)
    logger.info(f"Portfolio API started ({settings.ENVIRONMENT})")

    try:
        yield
    finally:
        client.close()
        logger.info("Portfolio API shut down")


app = FastAPI(title="Portfolio API", description="Blog, projects and contact form backend")
app.router.lifespan_context = lifespan

app.include_router(graphql.router)
app.include_router(content.router)
app.include_router(contact.router)


@app.get("/")
async def root():
    return {"message": "Portfolio API is running"}


@app.get("/health")
async def health():
    repo = getattr(app.state, "content_repo", None)
    client = getattr(app.state, "graphql_client", None)
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "contentSource": getattr(repo, "source", None),
        "graphqlConfigured": bool(client and client.is_configured),
    }
