#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Print Estimating settings.

Environment driven settings for the command line tools. Engine defaults
(margins, rates) live in estimating/config/default_config.json.
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

# ============================================================
# CONFIGURATION FILE
# ============================================================

# Override path for the engine configuration JSON (empty = packaged default)
ESTIMATOR_CONFIG_PATH = os.getenv("ESTIMATOR_CONFIG_PATH", "")

# ============================================================
# LOGGING
# ============================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(levelname)s - %(message)s")


def get_config_path():
    """
    Return the configured engine config path.

    Returns:
        Path or None when the packaged default should be used
    """
    if ESTIMATOR_CONFIG_PATH:
        return Path(ESTIMATOR_CONFIG_PATH)
    return None


def get_log_level() -> int:
    """Map LOG_LEVEL to a logging level, INFO for unknown names."""
    level = logging.getLevelName(LOG_LEVEL)
    return level if isinstance(level, int) else logging.INFO
