"""Error taxonomy rendered by the API as ``{"success": false, "error": ...}`` envelopes."""


class PortfolioError(Exception):
    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationRequired(PortfolioError):
    status_code = 401
    default_message = "Unauthorized"


class RequestInvalid(PortfolioError):
    status_code = 400
    default_message = "Invalid request"


class StoreOperationFailed(PortfolioError):
    """The data store rejected a query or write. The store's message is passed through."""

    status_code = 400
    default_message = "Store operation failed"


class NotFound(PortfolioError):
    status_code = 404
    default_message = "Not found"


def store_error_message(exc: BaseException) -> str:
    # DBAPIError wraps the driver exception; its text is what the owner needs to see.
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig)
    return str(exc) or exc.__class__.__name__
