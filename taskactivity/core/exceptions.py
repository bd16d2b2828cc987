"""
Application exceptions
Services raise these; controllers and the app-level handlers map them to HTTP
"""


class NotFoundError(LookupError):
    """A requested record does not exist"""


class DuplicateValueError(ValueError):
    """A value collides with an existing record"""


class QueryExecutionError(RuntimeError):
    """The database rejected or failed an admin query"""


class AuthenticationRequiredError(Exception):
    """No valid session or bearer token"""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)
        self.message = message


class AccessDeniedError(Exception):
    """Authenticated, but the role does not allow the request"""

    def __init__(self, message: str = "You don't have permission to access this resource"):
        super().__init__(message)
        self.message = message
