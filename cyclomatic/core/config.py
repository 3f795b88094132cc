import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from cyclomatic.core.errors import ConfigError


MODES = ("tree", "graph")
FORMATS = ("text", "json")

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": 1,
    "analysis": {
        "mode": "tree",
    },
    "files": {
        "extensions": [".rs"],
        "ignored_dirs": [
            ".git",
            ".hg",
            ".svn",
            ".idea",
            ".vscode",
            "target",
            "node_modules",
            "vendor",
        ],
    },
    "thresholds": {
        "max_complexity": None,
    },
    "reporting": {
        "format": "text",
    },
    "logging": {
        "level": "WARNING",
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass(frozen=True)
class Config:
    data: Dict[str, Any]

    @classmethod
    def load(cls, path: Optional[str]) -> "Config":
        if not path:
            return cls(DEFAULT_CONFIG)
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        raw = config_path.read_text(encoding="utf-8")
        if config_path.suffix.lower() in {".json"}:
            overrides = json.loads(raw)
        else:
            overrides = yaml.safe_load(raw) or {}
        return cls.from_dict(overrides)

    @classmethod
    def from_dict(cls, overrides: Dict[str, Any]) -> "Config":
        if not isinstance(overrides, dict):
            raise ConfigError("configuration must be a mapping")
        config = cls(_deep_merge(DEFAULT_CONFIG, overrides))
        config.validate()
        return config

    def override(self, **sections: Dict[str, Any]) -> "Config":
        """Copy with command-line values merged over the loaded ones."""
        updates = {name: values for name, values in sections.items() if values}
        return Config.from_dict(_deep_merge(self.data, updates))

    def validate(self) -> None:
        if self.mode() not in MODES:
            raise ConfigError(f"Unknown analysis mode: {self.mode()!r}")
        fmt = self.reporting().get("format", "text")
        if fmt not in FORMATS:
            raise ConfigError(f"Unknown output format: {fmt!r}")
        limit = self.max_complexity()
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 0):
            raise ConfigError(f"max_complexity must be a non-negative integer, got {limit!r}")

    def mode(self) -> str:
        return self.data.get("analysis", {}).get("mode", "tree")

    def extensions(self) -> set:
        return {ext.lower() for ext in self.data.get("files", {}).get("extensions", [".rs"])}

    def ignored_dirs(self) -> set:
        return set(self.data.get("files", {}).get("ignored_dirs", []))

    def max_complexity(self) -> Optional[int]:
        return self.data.get("thresholds", {}).get("max_complexity")

    def reporting(self) -> Dict[str, Any]:
        return self.data.get("reporting", {})

    def log_level(self) -> str:
        return str(self.data.get("logging", {}).get("level", "WARNING")).upper()


def dump_default_config() -> str:
    return yaml.safe_dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False)
