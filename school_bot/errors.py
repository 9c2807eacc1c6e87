"""Error taxonomy for command processing.

Every error carries the text shown to the user. Input errors are raised before
any gateway call; gateway errors hide their detail from the user and are
logged where they are raised.
"""


class BotError(Exception):
    """Base class for errors that end a command with a reply."""

    def __init__(self, user_message: str):
        super().__init__(user_message)
        self.user_message = user_message


class InputError(BotError):
    """Raised when command arguments are rejected."""


class ArityError(InputError):
    """Raised when a command receives the wrong number of arguments."""


class PatternError(InputError):
    """Raised when a field does not match its required pattern."""


class EmptyError(InputError):
    """Raised when a required text field is blank."""


class RangeError(InputError):
    """Raised when a numeric field is not a number or is out of bounds."""


class GatewayError(BotError):
    """Raised when an external service call fails."""


class StoreError(GatewayError):
    """Raised when the database rejects or fails an operation.

    Attributes:
        operation: ``"insert"`` or ``"query"``.
    """

    def __init__(self, operation: str, user_message: str):
        super().__init__(user_message)
        self.operation = operation


class GenerationError(GatewayError):
    """Raised when the text-generation API call fails."""


class AuthorizationError(BotError):
    """Raised when the issuer may not run a restricted command."""
