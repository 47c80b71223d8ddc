"""
Print Estimating Core
=====================
Shared components for all estimating modules.
"""

from core.exceptions import (
    EstimatorError,
    ConfigurationError,
    ValidationError,
    InvalidFieldValueError,
)

__all__ = [
    'EstimatorError',
    'ConfigurationError',
    'ValidationError',
    'InvalidFieldValueError',
]
