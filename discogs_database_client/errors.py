"""Errors raised by the Discogs database client.

Every failure of a request surfaces as exactly one ``DiscogsError`` subclass;
nothing is retried and no partial result accompanies an error.
"""

STATUS_MESSAGES = {
    401: "You're attempting to access a resource that first requires authentication.",
    403: (
        "You're not allowed to access this resource. Even if you authenticated, "
        "or already have, you simply don't have permission."
    ),
    404: "The resource you requested doesn't exist.",
    405: "You're trying to use an HTTP verb that isn't supported by the resource.",
    422: (
        "Your request was well-formed, but there's something semantically wrong "
        "with the body of the request."
    ),
    500: "Server side issue.",
}

REQUEST_FAILED = "request failed"
PARSE_FAILED = "could not parse response as JSON"
UNKNOWN_CONTENT_TYPE = "unknown content type"


class DiscogsError(Exception):
    """Base error. ``error`` is the human-readable text, ``status_code`` the HTTP status if any."""

    def __init__(self, error: str, status_code: int | None = None):
        super().__init__(error)
        self.error = error
        self.status_code = status_code

    def to_dict(self) -> dict:
        data = {"error": self.error}
        if self.status_code is not None:
            data["statusCode"] = self.status_code
        return data


class DiscogsNetworkError(DiscogsError):
    """The request never produced a response (DNS, connection, read failure)."""


class DiscogsHTTPError(DiscogsError):
    """Response status was not a success and carried no useful body."""

    @classmethod
    def from_status(cls, status_code: int) -> "DiscogsHTTPError":
        return cls(STATUS_MESSAGES.get(status_code, REQUEST_FAILED), status_code)


class DiscogsValidationError(DiscogsError):
    """400 response. Discogs explains what was wrong in the JSON body."""

    def __init__(self, body, status_code: int = 400):
        message = body.get("message") if isinstance(body, dict) else None
        super().__init__(message or "bad request", status_code)
        self.body = body

    def to_dict(self) -> dict:
        if isinstance(self.body, dict):
            return {**self.body, "statusCode": self.status_code}
        return {"body": self.body, "statusCode": self.status_code}


class DiscogsParseError(DiscogsError):
    def __init__(self, error: str = PARSE_FAILED):
        super().__init__(error)


class DiscogsContentTypeError(DiscogsError):
    def __init__(self, content_type: str | None, error: str = UNKNOWN_CONTENT_TYPE):
        super().__init__(error)
        self.content_type = content_type
