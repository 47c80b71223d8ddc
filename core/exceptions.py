"""
Print Estimating - Exceptions
=============================
Exception hierarchy for the estimating engine.

Numeric input never raises (bad sizes, missing prices and similar give an
empty result instead). These exceptions cover contract violations that
cannot be clamped: unreadable configuration, unknown labels.
"""


class EstimatorError(Exception):
    """Base exception for all estimating errors"""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"


# ============================================================
# Configuration Errors
# ============================================================

class ConfigurationError(EstimatorError):
    """Configuration file missing or malformed"""

    def __init__(self, path: str, reason: str = None):
        super().__init__(
            f"Invalid configuration: {path}" + (f" - {reason}" if reason else ""),
            code="CONFIGURATION_ERROR",
            details={"path": str(path), "reason": reason}
        )


# ============================================================
# Validation Errors
# ============================================================

class ValidationError(EstimatorError):
    """Input data validation errors"""
    pass


class InvalidFieldValueError(ValidationError):
    """Value outside the closed set a field accepts"""

    def __init__(self, field: str, value, reason: str = None):
        msg = f"Invalid value for field '{field}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(
            msg,
            code="INVALID_FIELD_VALUE",
            details={"field": field, "value": str(value), "reason": reason}
        )
