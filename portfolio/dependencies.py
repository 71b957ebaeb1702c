from fastapi import Depends, Request

from portfolio.repos.content_repo import ContentRepo
from portfolio.services.contact_service import ContactService
from portfolio.services.content_service import ContentService
from portfolio.services.graphql_client import GraphQLClient
from portfolio.services.graphql_proxy import GraphQLProxy
from portfolio.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_graphql_client(request: Request) -> GraphQLClient:
    return request.app.state.graphql_client


def get_content_repo(request: Request) -> ContentRepo:
    return request.app.state.content_repo


def get_content_service(
    repo=Depends(get_content_repo),
    current_settings: Settings = Depends(get_settings),
):
    return ContentService(
        repo,
        show_drafts=current_settings.SHOW_DRAFTS,
        fallback_image=current_settings.FALLBACK_IMAGE,
    )


def get_graphql_proxy(
    client=Depends(get_graphql_client),
    current_settings: Settings = Depends(get_settings),
):
    return GraphQLProxy(client, current_settings.GRAPHQL_ALLOWED_OPERATIONS)


def get_contact_service(client=Depends(get_graphql_client)):
    return ContactService(client)
