"""Error definitions for model definition checks.

Every unmet expectation is reported as a `ContractViolation`. It subclasses
`AssertionError` so pytest renders it like any failed ``assert``.
"""

# ============================================================================
#                           Contract violations
# ============================================================================


class ContractViolation(AssertionError):
    """Raised when a model does not honour its declared contract."""

    def __init__(self, model: str, subject: str | None, message: str) -> None:
        super().__init__(message)
        self.model = model
        self.subject = subject


class InvalidSpecError(ContractViolation):
    """Raised when a column or relationship spec is malformed."""

    def __init__(self, subject: str | None, reason: str) -> None:
        target = f" for '{subject}'" if subject is not None else ""
        super().__init__("<spec>", subject, f"Invalid spec{target}: {reason}")
        self.reason = reason


class UnknownModelError(ContractViolation):
    """Raised when a related model class cannot be resolved by name."""

    def __init__(self, model: str, class_name: str) -> None:
        super().__init__(
            model,
            class_name,
            f"{model} refers to an unknown model class '{class_name}'",
        )
        self.class_name = class_name
