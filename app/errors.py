class AssistantError(Exception):
    """Base class for errors raised by the dealership assistant core."""


class ValidationError(AssistantError):
    """Malformed or out-of-range numeric input (calculator, quotes)."""


class InvalidInputError(ValidationError):
    """Loan terms rejected by the amortization calculator."""


class LookupFailure(AssistantError):
    """Inventory collaborator is unavailable or returned an error."""


class UnclassifiableInput(AssistantError):
    """
    Reserved for messages that cannot be classified.
    Never raised: the classifier falls back to GENERAL instead.
    """
