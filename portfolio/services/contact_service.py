import logging

from portfolio.errors import UpstreamError, ValidationError
from portfolio.schemas.contact import ContactFormRequest, ContactFormSubmission
from portfolio.services import queries
from portfolio.services.graphql_client import GraphQLClient

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "NEW"


class MissingContactFields(ValidationError):
    public_message = "Missing required fields"


class ContactService:
    """Stores contact form submissions through the GraphQL API."""

    def __init__(self, client: GraphQLClient):
        self.client = client

    def submit(self, request: ContactFormRequest) -> ContactFormSubmission:
        payload = {
            "name": request.name.strip(),
            "email": request.email.strip(),
            "message": request.message.strip(),
            "status": DEFAULT_STATUS,
        }
        missing = [key for key in ("name", "email", "message") if not payload[key]]
        if missing:
            raise MissingContactFields(f"Missing required fields: {', '.join(missing)}")
        if request.subject and request.subject.strip():
            payload["subject"] = request.subject.strip()

        data = self.client.execute(queries.CREATE_CONTACT_FORM, {"input": payload})
        created = data.get("createContactForm")
        if not created:
            raise UpstreamError("CreateContactForm returned no record")

        logger.info(f"Stored contact form submission {created.get('id')}")
        return ContactFormSubmission(
            **{key: value for key, value in created.items() if value is not None}
        )
