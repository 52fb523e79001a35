"""
Extension run configuration.

Controls which registered handlers the dispatcher invokes. An optional
YAML/JSON file can override the defaults without code changes:

    enabled: [x-cms]   # allowlist; omit to run every handler
    disabled: []       # always skipped, wins over `enabled`

Environment variable:
    GQLEXT_EXTENSIONS_FILE — path to the config file (optional).
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

_log = logging.getLogger("gqlext.extensions.config")

ENV_CONFIG_FILE = "GQLEXT_EXTENSIONS_FILE"


@dataclass
class ExtensionRunConfig:
    enabled: Optional[List[str]] = None  # None => not explicitly set (run everything)
    disabled: List[str] = field(default_factory=list)

    def is_enabled(self, name: str) -> bool:
        if name in (self.disabled or []):
            return False

        # enabled explicitly set => allowlist semantics
        if self.enabled is not None:
            return name in self.enabled

        return True


class ExtensionConfigFile(BaseModel):
    enabled: Optional[List[str]] = Field(default=None, description="Allowlist. If set, only these run.")
    disabled: List[str] = Field(default_factory=list)


def load_extension_config(path: Optional[Path] = None) -> ExtensionRunConfig:
    """
    Load the run config from a YAML or JSON file.

    Returns the default config (every handler enabled) if no file is
    configured, or the file is absent, unreadable or malformed.
    """
    resolved = _resolve_path(path)
    if resolved is None or not resolved.exists():
        return ExtensionRunConfig()

    try:
        raw_text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        _log.warning("Cannot read extensions config %s: %s", resolved, exc)
        return ExtensionRunConfig()

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            _log.warning("Failed to parse extensions config %s as JSON or YAML: %s", resolved, exc)
            return ExtensionRunConfig()

    if data is None:
        return ExtensionRunConfig()

    try:
        model = ExtensionConfigFile.model_validate(data)
    except ValidationError as exc:
        _log.warning("Invalid extensions config %s: %s", resolved, exc)
        return ExtensionRunConfig()

    cfg = ExtensionRunConfig(enabled=model.enabled, disabled=list(model.disabled))
    _log.info("Loaded extensions config from %s (enabled=%s disabled=%s)", resolved, cfg.enabled, cfg.disabled)
    return cfg


def _resolve_path(path: Optional[Path]) -> Optional[Path]:
    if path is not None:
        return Path(path)
    env_path = os.getenv(ENV_CONFIG_FILE, "").strip()
    if env_path:
        return Path(env_path)
    return None
