"""Scan configuration loading.

A scan can be described in a YAML or JSON file instead of on the command
line::

    output: models/scans.go
    package: models
    unexport: false
    whitelist: Post,User
    targets:
      - github.com/acme/blog/models=./models

Command-line flags take precedence over file values, and
``SCANEO_UNEXPORT`` can force unexported output from the environment.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from core.errors import ConfigValidationError

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "scans.go"
UNEXPORT_ENV = "SCANEO_UNEXPORT"


@dataclass(frozen=True)
class ScanConfig:
    """Settings for one generation run."""

    output: str = DEFAULT_OUTPUT
    package: Optional[str] = None
    unexport: bool = False
    whitelist: str = ""
    targets: list[str] = field(default_factory=list)

    def resolved_package(self, cwd: Optional[str] = None) -> str:
        """Return the package name, defaulting to the working directory name."""
        if self.package:
            return self.package
        return os.path.basename(os.path.abspath(cwd or os.getcwd()))


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _expect_dict(payload: Any, ctx: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ConfigValidationError(f"{ctx} must be an object")
    return payload


def _load_config_payload(path: str) -> dict[str, Any]:
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigValidationError(f"Config file not found: {config_path}")

    text = config_path.read_text(encoding="utf-8")
    try:
        if config_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidationError(f"Failed to parse config {config_path}: {exc}") from exc

    if payload is None:
        return {}
    return _expect_dict(payload, "config")


def _parse_whitelist(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw.strip()
    if isinstance(raw, list):
        names = [str(item).strip() for item in raw]
        if any(not name for name in names):
            raise ConfigValidationError("whitelist contains an empty name")
        return ",".join(names)
    raise ConfigValidationError("whitelist must be a string or a list of names")


def load_scan_config(path: str) -> ScanConfig:
    """Load and validate a scan configuration from a YAML/JSON file."""
    payload = _load_config_payload(path)

    output = str(payload.get("output", DEFAULT_OUTPUT)).strip()
    if not output:
        raise ConfigValidationError("output must not be empty")

    package_raw = payload.get("package")
    package = str(package_raw).strip() if package_raw is not None else None

    targets_raw = payload.get("targets", [])
    if not isinstance(targets_raw, list):
        raise ConfigValidationError("targets must be a list")
    targets = [str(item).strip() for item in targets_raw]
    if any(not target for target in targets):
        raise ConfigValidationError("targets contains an empty entry")

    config = ScanConfig(
        output=output,
        package=package or None,
        unexport=bool(payload.get("unexport", False)),
        whitelist=_parse_whitelist(payload.get("whitelist")),
        targets=targets,
    )
    logger.debug("Loaded scan config from %s: %s", path, config)
    return config


def merge_cli_overrides(
    config: ScanConfig,
    output: Optional[str] = None,
    package: Optional[str] = None,
    unexport: bool = False,
    whitelist: Optional[str] = None,
    targets: Optional[list[str]] = None,
) -> ScanConfig:
    """Apply command-line values on top of ``config``.

    ``None`` means the flag was not given. ``unexport`` can only be switched
    on, by the flag or by ``SCANEO_UNEXPORT``.
    """
    return replace(
        config,
        output=output if output is not None else config.output,
        package=package if package is not None else config.package,
        unexport=config.unexport or unexport or _env_flag(UNEXPORT_ENV),
        whitelist=whitelist if whitelist is not None else config.whitelist,
        targets=list(targets) if targets else list(config.targets),
    )
