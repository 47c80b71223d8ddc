"""Estimate services."""

from .estimate_service import EstimateService, EstimateRates

__all__ = [
    'EstimateService',
    'EstimateRates'
]
