"""
DOM Inspector configuration

Inspection defaults, ancestor limits and browser launch settings. Values come
from the dataclass defaults, an optional YAML file and environment variables,
in that order.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple

import yaml


logger = logging.getLogger(__name__)


@dataclass
class InspectionConfig:
    """Settings for inspect_dom"""
    # Attributes that mark an element as carrying a test id, in priority order
    test_id_attributes: Tuple[str, ...] = ("data-testid", "data-test", "data-cy")

    default_max_depth: int = 5
    default_max_children: int = 20
    deep_preview_limit: int = 3


@dataclass
class AncestorConfig:
    """Settings for inspect_ancestors"""
    default_limit: int = 10
    max_limit: int = 15


@dataclass
class BrowserConfig:
    """Browser launch settings"""
    browser_type: str = "chromium"
    headless: bool = True
    viewport_width: int = 1280
    viewport_height: int = 720

    navigation_timeout: int = 30000  # ms
    wait_until: str = "load"


@dataclass
class InspectorConfig:
    """Top-level configuration"""
    inspection: InspectionConfig = field(default_factory=InspectionConfig)
    ancestors: AncestorConfig = field(default_factory=AncestorConfig)
    browser: BrowserConfig = field(default_factory=BrowserConfig)

    debug: bool = False
    log_level: str = "INFO"


_BROWSER_TYPES = {"chromium", "firefox", "webkit"}
_WAIT_UNTIL = {"load", "domcontentloaded", "networkidle", "commit"}


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_viewport(value: str) -> Tuple[int, int]:
    width, _, height = value.lower().partition("x")
    if not height:
        raise ValueError(f"Viewport must look like 1280x720, got {value!r}")
    return int(width), int(height)


def _apply_section(target: Any, values: Dict[str, Any], section: str) -> None:
    known = {f.name for f in fields(target)}
    for key, value in values.items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key {section}.{key}")
            continue
        if key == "test_id_attributes":
            value = tuple(value)
        setattr(target, key, value)


def validate_config(config: InspectorConfig) -> InspectorConfig:
    """Reject values the inspector cannot work with"""
    if not config.inspection.test_id_attributes:
        raise ValueError("test_id_attributes must name at least one attribute")
    if config.inspection.default_max_depth < 0:
        raise ValueError("default_max_depth must be >= 0")
    if config.inspection.default_max_children < 0:
        raise ValueError("default_max_children must be >= 0")
    if config.ancestors.max_limit < 1:
        raise ValueError("ancestor max_limit must be >= 1")
    if config.browser.browser_type not in _BROWSER_TYPES:
        raise ValueError(f"Unsupported browser type: {config.browser.browser_type}")
    if config.browser.wait_until not in _WAIT_UNTIL:
        raise ValueError(f"Unsupported wait_until: {config.browser.wait_until}")
    return config


def apply_env_overrides(config: InspectorConfig) -> InspectorConfig:
    """Apply environment variable overrides in place"""
    if os.getenv("INSPECTOR_TEST_ID_ATTRIBUTES"):
        attrs = [a.strip() for a in os.getenv("INSPECTOR_TEST_ID_ATTRIBUTES").split(",")]
        config.inspection.test_id_attributes = tuple(a for a in attrs if a)

    if os.getenv("INSPECTOR_MAX_DEPTH"):
        config.inspection.default_max_depth = int(os.getenv("INSPECTOR_MAX_DEPTH"))

    if os.getenv("INSPECTOR_MAX_CHILDREN"):
        config.inspection.default_max_children = int(os.getenv("INSPECTOR_MAX_CHILDREN"))

    if os.getenv("INSPECTOR_ANCESTOR_LIMIT"):
        config.ancestors.default_limit = int(os.getenv("INSPECTOR_ANCESTOR_LIMIT"))

    # Browser
    if os.getenv("BROWSER_TYPE"):
        config.browser.browser_type = os.getenv("BROWSER_TYPE").lower()

    if os.getenv("BROWSER_HEADLESS"):
        config.browser.headless = _parse_bool(os.getenv("BROWSER_HEADLESS"))

    if os.getenv("BROWSER_VIEWPORT"):
        width, height = _parse_viewport(os.getenv("BROWSER_VIEWPORT"))
        config.browser.viewport_width = width
        config.browser.viewport_height = height

    if os.getenv("NAVIGATION_TIMEOUT"):
        config.browser.navigation_timeout = int(os.getenv("NAVIGATION_TIMEOUT"))

    # Debugging
    if os.getenv("DEBUG"):
        config.debug = _parse_bool(os.getenv("DEBUG"))

    if os.getenv("LOG_LEVEL"):
        config.log_level = os.getenv("LOG_LEVEL").upper()

    return config


def load_config_from_file(path: str) -> InspectorConfig:
    """Load configuration from a YAML file with inspection/ancestors/browser sections"""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    config = InspectorConfig()
    sections = {
        "inspection": config.inspection,
        "ancestors": config.ancestors,
        "browser": config.browser,
    }
    for key, value in data.items():
        if key in sections:
            _apply_section(sections[key], value or {}, key)
        elif key in ("debug", "log_level"):
            setattr(config, key, value)
        else:
            logger.warning(f"Ignoring unknown config section {key}")
    return config


def load_config(path: Optional[str] = None) -> InspectorConfig:
    """Load configuration from an optional YAML file, then the environment"""
    config = load_config_from_file(path) if path else InspectorConfig()
    return validate_config(apply_env_overrides(config))
