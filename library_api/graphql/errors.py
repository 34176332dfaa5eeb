"""
GraphQL Errors

Exceptions raised by resolvers. Strawberry reports them in the response's
`errors` array; the `extensions` attribute is copied into the error's
extensions so clients can branch on `extensions.code`.
"""


class GraphQLAppError(Exception):
    """Base class for errors reported to GraphQL clients."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.extensions = {"code": self.code, **details}


class AuthenticationError(GraphQLAppError):
    """Raised when a mutation requires a logged-in user."""

    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "not authenticated"):
        super().__init__(message)


class InvalidCredentialsError(GraphQLAppError):
    """
    Raised when login fails.

    The message is the same for an unknown user and a wrong password.
    """

    code = "BAD_USER_INPUT"

    def __init__(self):
        super().__init__("wrong credentials")


class InvalidInputError(GraphQLAppError):
    """Raised when validation or persistence rejects a write."""

    code = "BAD_USER_INPUT"

    def __init__(self, detail: str):
        super().__init__(f"Invalid argument value: {detail}", detail=detail)


class NotFoundError(GraphQLAppError):
    """Raised when an entity the operation needs does not exist."""

    code = "NOT_FOUND"
