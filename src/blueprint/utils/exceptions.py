from typing import Optional


class BlueprintError(Exception):
    """
    Base exception for all blueprint errors
    """
    pass


class ValidationError(BlueprintError):
    """
    Raised when a column fails structural rules.
    Always names the offending column's inbound name.
    """

    def __init__(self, inbound_name: str, reason: Optional[str] = None):
        self.inbound_name = inbound_name
        self.reason = reason
        message = f"At least one column is invalid; look at '{inbound_name}'"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class EmptyAdditionsError(BlueprintError):
    """
    Raised when an update is requested with no new columns
    """

    def __init__(self, message: str = "No new columns, so no action taken."):
        super().__init__(message)


class LookupNotFound(BlueprintError):
    """
    Raised when a suggestion or schema lookup returns nothing
    """
    pass


class UpstreamFailure(BlueprintError):
    """
    Raised when a call to an external service fails
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
