"""
Error types for linear-cli.

Every failure that should end a command with a user-facing message derives from
LinearCliError. The CLI entry point catches that base class, prints the message
to stderr and exits non-zero. Nothing here is retried.

Categories:
    - Configuration: missing API key, unreadable or invalid config file
    - Authentication: API key rejected by Linear
    - API: GraphQL errors, access denied, rate limits
    - Transport: network or HTTP failures below the GraphQL layer
    - Safe mode: mutation attempted while the read-only guard is on
    - Lookup: team/user/state/label name did not resolve
    - Input: malformed issue IDs, out-of-range priority, blank text
"""

from typing import Optional


class LinearCliError(Exception):
    """Base class for all errors surfaced to the CLI user."""


class ConfigurationError(LinearCliError):
    """Configuration is missing or invalid."""


class AuthenticationError(LinearCliError):
    """Linear rejected the API key."""

    def __init__(self, message: str = "Authentication failed. Please check your Linear API key."):
        super().__init__(message)


class LinearAPIError(LinearCliError):
    """Linear answered with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(LinearCliError):
    """The request never produced a usable GraphQL response."""


class MutationBlockedError(LinearCliError):
    """A mutation was attempted while safe mode is enabled."""

    def __init__(self):
        super().__init__(
            "Operation blocked: Safe mode is enabled. Mutations are not allowed in safe mode.\n"
            "Use the --allow-mutations flag to perform this operation."
        )


class ResourceNotFoundError(LinearCliError, LookupError):
    """A human-readable name did not match any Linear resource."""


class InvalidInputError(LinearCliError, ValueError):
    """User-supplied input failed validation."""
