"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ProfileNotFoundError(NotFoundError):
    """Raised when an identity has no profile."""

    def __init__(self, identity: str):
        super().__init__("Profile", identity)


class RecipientNotFoundError(NotFoundError):
    """Raised when a message recipient has no profile.

    Only ever reported back to the sender.
    """

    def __init__(self, identity: str):
        super().__init__("User", identity)


class SelfFollowError(BusinessRuleViolationError):
    """Raised when an identity tries to follow or unfollow itself."""

    def __init__(self, identity: str):
        self.identity = identity
        super().__init__("You cannot follow yourself")


class TransientStoreError(DomainError):
    """Raised when the store fails in a way that may succeed later.

    Surfaced to the initiating client only, never retried automatically.
    """

    pass
