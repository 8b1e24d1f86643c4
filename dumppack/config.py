"""JSON configuration for dumpkit parse and diff commands."""

from __future__ import annotations

from dataclasses import dataclass, replace
import json
import os
from pathlib import Path
from typing import Any, Mapping

from dumppack.parse.parser import ParseOptions

CONFIG_ENV_VAR = "DUMPKIT_CONFIG"


class ConfigError(ValueError):
    """Raised when a dumpkit config payload is invalid."""


@dataclass(frozen=True, slots=True)
class DumpKitConfig:
    strict: bool = False
    bare_entries_key: str | None = None
    max_changes: int = 8

    def parse_options(self) -> ParseOptions:
        return ParseOptions(strict=self.strict, bare_entries_key=self.bare_entries_key)

    def with_overrides(
        self,
        *,
        strict: bool | None = None,
        bare_entries_key: str | None = None,
        max_changes: int | None = None,
    ) -> DumpKitConfig:
        """Return a copy with every non-None override applied."""
        updated = self
        if strict is not None:
            updated = replace(updated, strict=strict)
        if bare_entries_key is not None:
            updated = replace(updated, bare_entries_key=bare_entries_key)
        if max_changes is not None:
            updated = replace(updated, max_changes=max(1, max_changes))
        return updated


DEFAULT_CONFIG = DumpKitConfig()


def config_from_mapping(config: Mapping[str, Any]) -> DumpKitConfig:
    """Create a config from a decoded JSON mapping."""
    supported_keys = {"strict", "bare_entries_key", "max_changes"}
    unknown = sorted(set(config.keys()) - supported_keys)
    if unknown:
        raise ConfigError("Unsupported dumpkit config keys: " + ", ".join(unknown))

    strict = config.get("strict", DEFAULT_CONFIG.strict)
    if not isinstance(strict, bool):
        raise ConfigError("dumpkit config key 'strict' must be a boolean.")

    bare_entries_key = config.get("bare_entries_key", DEFAULT_CONFIG.bare_entries_key)
    if bare_entries_key is not None and (
        not isinstance(bare_entries_key, str) or not bare_entries_key.strip()
    ):
        raise ConfigError("dumpkit config key 'bare_entries_key' must be a non-empty string.")

    max_changes = config.get("max_changes", DEFAULT_CONFIG.max_changes)
    if isinstance(max_changes, bool) or not isinstance(max_changes, int) or max_changes < 1:
        raise ConfigError("dumpkit config key 'max_changes' must be a positive integer.")

    return DumpKitConfig(
        strict=strict,
        bare_entries_key=bare_entries_key.strip() if bare_entries_key else None,
        max_changes=max_changes,
    )


def load_config_from_file(path: str | Path) -> DumpKitConfig:
    """Load dumpkit config from a JSON file."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except OSError as error:
        raise ConfigError(f"dumpkit config could not be read ({config_path}): {error.strerror}") from error
    except json.JSONDecodeError as error:
        raise ConfigError(f"Invalid dumpkit config JSON ({config_path}): {error}") from error

    if not isinstance(raw, dict):
        raise ConfigError(f"dumpkit config must be a JSON object ({config_path}).")

    return config_from_mapping(raw)


def resolve_config(path: str | Path | None = None) -> DumpKitConfig:
    """Load config from `path`, else from `DUMPKIT_CONFIG`, else defaults."""
    if path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        if not env_path or not env_path.strip():
            return DEFAULT_CONFIG
        path = env_path.strip()
    try:
        return load_config_from_file(path)
    except FileNotFoundError as error:
        raise ConfigError(f"dumpkit config not found: {path}") from error
