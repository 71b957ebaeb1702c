"""Error taxonomy shared by the proxy, content and notification code.

Every error carries the HTTP status a router should answer with and the
public message placed in a GraphQL-style ``errors`` array.
"""


class PortfolioError(Exception):
    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message

    def to_body(self) -> dict:
        return {"errors": [{"message": self.public_message}]}


class ValidationError(PortfolioError):
    status_code = 400
    public_message = "Invalid request"


class InvalidOperation(ValidationError):
    public_message = "Invalid GraphQL operation"


class AuthorizationError(PortfolioError):
    status_code = 403
    public_message = "Forbidden"


class OperationNotAllowed(AuthorizationError):
    public_message = "Operation not allowed"

    def __init__(self, operation_name: str):
        super().__init__(f"Operation not allowed: {operation_name}")
        self.operation_name = operation_name


class ConfigurationError(PortfolioError):
    status_code = 500
    public_message = "Server configuration error"


class ConfigurationMissing(ConfigurationError):
    public_message = "GraphQL configuration is missing"


class UpstreamError(PortfolioError):
    status_code = 502
    public_message = "Upstream request failed"

    def __init__(self, message: str | None = None, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []


class PartialRecordError(PortfolioError):
    """A single change-stream record could not be turned into a notification."""

    status_code = 422
    public_message = "Malformed change record"

    def __init__(self, record_id: str | None, missing: list[str]):
        super().__init__(
            f"Record {record_id} missing required fields: {', '.join(missing)}"
        )
        self.record_id = record_id
        self.missing = missing


class EmailDeliveryError(PortfolioError):
    public_message = "Failed to send email"
