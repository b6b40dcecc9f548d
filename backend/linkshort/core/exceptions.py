"""
Error taxonomy for link operations.

Each error carries the HTTP status the API layer answers with, so routers
can let them propagate to the application's exception handler.
"""


class LinkError(Exception):
    """Base class for link errors"""
    status_code = 500
    detail = "Error"

    def __init__(self, detail: str = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class InvalidUrl(LinkError):
    status_code = 400
    detail = "Invalid URL"


class InvalidCode(LinkError):
    status_code = 400
    detail = "Invalid code"


class Conflict(LinkError):
    status_code = 409
    detail = "Code already exists"


class DuplicateCode(Conflict):
    """Raised by the store when the unique index rejects an insert"""


class NotFound(LinkError):
    status_code = 404
    detail = "Not found"


class StorageError(LinkError):
    status_code = 500
    detail = "Storage error"
