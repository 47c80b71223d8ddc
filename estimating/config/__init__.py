"""Configuration management for the estimating engine."""

import json
import logging
from pathlib import Path
from typing import Dict, Any

from config.settings import get_config_path
from core.exceptions import ConfigurationError
from ..models.geometry import ProductionParameters, SheetSize
from ..layout.press_sheet import CuttingConstraints
from ..services.estimate_service import EstimateRates

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent
DEFAULT_CONFIG_PATH = CONFIG_DIR / "default_config.json"


def _resolve_path(config_path: str = None) -> Path:
    if config_path is not None:
        return Path(config_path)
    return get_config_path() or DEFAULT_CONFIG_PATH


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Load configuration from JSON file.

    Args:
        config_path: Path to config file (default: ESTIMATOR_CONFIG_PATH,
            then the packaged default_config.json)

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: File missing or not a JSON object
    """
    path = _resolve_path(config_path)

    if not path.exists():
        raise ConfigurationError(path, "file not found")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(path, f"invalid JSON: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(path, "expected a JSON object")

    logger.debug(f"Loaded config from {path}")
    return config


def save_config(config: Dict[str, Any], config_path: str = None):
    """
    Save configuration to JSON file.

    Args:
        config: Configuration dictionary
        config_path: Path to save config (default: same lookup as load_config)
    """
    path = _resolve_path(config_path)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=4)


def create_parameters_from_config(config: Dict[str, Any] = None) -> ProductionParameters:
    """
    Create ProductionParameters from configuration dictionary.

    Args:
        config: Configuration dict (loads default if None)

    Returns:
        ProductionParameters instance
    """
    if config is None:
        config = load_config()

    return ProductionParameters.from_dict(config.get('production_parameters', {}))


def create_rates_from_config(config: Dict[str, Any] = None) -> EstimateRates:
    """
    Create EstimateRates from configuration dictionary.

    Args:
        config: Configuration dict (loads default if None)

    Returns:
        EstimateRates instance
    """
    if config is None:
        config = load_config()

    printing = config.get('printing', {})
    quote = config.get('quote', {})

    return EstimateRates(
        plate_cost=printing.get('plate_cost', 35.0),
        unit_cost=printing.get('unit_cost', 0.0),
        margin_percent=quote.get('margin_percent', 30.0),
        vat_percent=quote.get('vat_percent', 5.0),
        discount_percent=quote.get('discount_percent', 0.0)
    )


def create_sheet_from_config(config: Dict[str, Any] = None) -> SheetSize:
    """Default press sheet from configuration."""
    if config is None:
        config = load_config()

    sheet = config.get('default_sheet', {})
    return SheetSize(
        width=sheet.get('width', 35.0),
        height=sheet.get('height', 50.0)
    )


def create_constraints_from_config(config: Dict[str, Any] = None) -> CuttingConstraints:
    """Press-sheet cutting constraints from configuration."""
    if config is None:
        config = load_config()

    return CuttingConstraints.from_dict(config.get('press_sheet', {}))


__all__ = [
    'load_config',
    'save_config',
    'create_parameters_from_config',
    'create_rates_from_config',
    'create_sheet_from_config',
    'create_constraints_from_config',
    'DEFAULT_CONFIG_PATH'
]
