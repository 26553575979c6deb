# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Engine configuration.

Supports configuration via:
1. Environment variables (highest priority)
2. Default values (lowest priority)

Environment variables:
- GENRO_MENUTREE_MAX_DEPTH: Deepest allowed level, roots being level 0 (default 2)
- GENRO_MENUTREE_TEMP_ID_PREFIX: Prefix marking temporary node ids (default 'temp_')
- GENRO_MENUTREE_LOG_LEVEL: Level for the genro_menutree logger (default WARNING)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 2
DEFAULT_TEMP_ID_PREFIX = 'temp_'
DEFAULT_LOG_LEVEL = 'WARNING'

_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


@dataclass
class MenuTreeConfig:
    """Settings shared by validation, mutation and id allocation.

    Attributes:
        max_depth: Deepest allowed level (0, 1, 2 means three levels total).
        temp_id_prefix: Fixed prefix distinguishing temporary ids.
        log_level: Level applied by configure_logging().
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    temp_id_prefix: str = DEFAULT_TEMP_ID_PREFIX
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> MenuTreeConfig:
        """Build a config from defaults overridden by environment variables.

        Invalid values are ignored with a warning.
        """
        config = cls()

        if depth := os.environ.get('GENRO_MENUTREE_MAX_DEPTH'):
            try:
                value = int(depth)
                if value < 0:
                    raise ValueError(depth)
                config.max_depth = value
            except ValueError:
                logger.warning(
                    "Invalid GENRO_MENUTREE_MAX_DEPTH %r, using %d",
                    depth, config.max_depth,
                )

        if prefix := os.environ.get('GENRO_MENUTREE_TEMP_ID_PREFIX'):
            config.temp_id_prefix = prefix

        if level := os.environ.get('GENRO_MENUTREE_LOG_LEVEL'):
            if level.upper() in _LOG_LEVELS:
                config.log_level = level.upper()
            else:
                logger.warning(
                    "Invalid GENRO_MENUTREE_LOG_LEVEL %r, using %s",
                    level, config.log_level,
                )

        return config


_config: MenuTreeConfig | None = None


def get_config() -> MenuTreeConfig:
    """Return the process-wide config, loading it from the environment once."""
    global _config
    if _config is None:
        _config = MenuTreeConfig.from_env()
    return _config


def set_config(config: MenuTreeConfig | None) -> None:
    """Replace the process-wide config; None reloads from the environment."""
    global _config
    _config = config


def configure_logging(config: MenuTreeConfig | None = None) -> None:
    """Apply the configured level to the package logger.

    No handlers are installed; the host application owns log output.
    """
    config = config or get_config()
    logging.getLogger('genro_menutree').setLevel(config.log_level)
