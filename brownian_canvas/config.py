#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Configuration Files and Logging Setup
================================================================================

Project:        Brownian Canvas
Module:         config.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Loads `Params` and `SimulationConfig` from a YAML file:

    params:
      temp: 310.0
      force: 10.0
    simulation:
      size: 15.0
      force_law: soft_core        # or truncated_lj
      force_law_options:
        floor_ratio: 0.6
    logging:
      level: INFO
      log_file: logs/brownian.log
      log_format: "%(levelname)s %(message)s"

Every section is optional; missing values fall back to the dataclass
defaults.
"""

import logging
import logging.handlers
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigurationError
from .physics import FORCE_LAWS, Params
from .simulation import SimulationConfig

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGING_KEYS = ("level", "log_file", "log_format")


@dataclass
class ConfigBundle:
    """Everything read from one configuration file."""
    params: Params
    config: SimulationConfig
    logging: Dict[str, Any]


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        content = yaml.safe_load(handle)
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"YAML file {path} must contain a mapping at the root.")
    return content


def _check_keys(section: str, data: Dict[str, Any], allowed) -> None:
    unknown = set(data) - set(allowed)
    if unknown:
        raise ConfigurationError(f"unknown key(s) in '{section}': {sorted(unknown)}")


def _build_params(data: Dict[str, Any]) -> Params:
    names = {f.name for f in fields(Params)}
    _check_keys("params", data, names)
    return Params(**{key: float(value) for key, value in data.items()})


def _build_config(data: Dict[str, Any]) -> SimulationConfig:
    data = dict(data)
    law_name = data.pop("force_law", None)
    law_options = data.pop("force_law_options", {}) or {}

    names = {f.name for f in fields(SimulationConfig)} - {"force_law"}
    _check_keys("simulation", data, names)
    config = SimulationConfig(**data)

    if law_name is not None:
        try:
            law_cls = FORCE_LAWS[law_name]
        except KeyError:
            raise ConfigurationError(
                f"unknown force_law {law_name!r}; expected one of {sorted(FORCE_LAWS)}"
            ) from None
        try:
            config.force_law = law_cls(**law_options)
        except TypeError as exc:
            raise ConfigurationError(f"bad force_law_options for {law_name}: {exc}") from exc
    elif law_options:
        raise ConfigurationError("force_law_options given without force_law")
    return config


def load_config(path: Union[str, Path]) -> ConfigBundle:
    """
    Read a YAML configuration file.

    Raises:
        ConfigurationError: for unknown sections/keys or invalid values
        FileNotFoundError: if the file does not exist
    """
    path = Path(path)
    logger.info("Loading configuration from %s", path)
    data = _load_yaml(path)
    _check_keys("<root>", data, {"params", "simulation", "logging"})

    params = _build_params(data.get("params") or {})
    config = _build_config(data.get("simulation") or {})
    config.validate(params)

    log_settings = data.get("logging") or {}
    _check_keys("logging", log_settings, LOGGING_KEYS)
    return ConfigBundle(params=params, config=config, logging=log_settings)


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[str] = None,
    log_format: str = DEFAULT_LOG_FORMAT
) -> None:
    """
    Configure the root logger with a console handler and, optionally, a
    rotating file handler (1 MB, 5 backups).
    """
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)

    if root.hasHandlers():
        root.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=1024 * 1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logger.debug("Logging configured (level=%s, file=%s)", level, log_file)
