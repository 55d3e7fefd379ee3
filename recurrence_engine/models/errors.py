class InvalidRule(ValueError):
    """A recurrence rule is missing required fields or has out-of-range values."""


class UnsupportedKind(ValueError):
    """The rule's kind cannot be answered by the requested operation."""
