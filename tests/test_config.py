import json
from pathlib import Path

import pytest

from dumppack.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG,
    ConfigError,
    DumpKitConfig,
    config_from_mapping,
    load_config_from_file,
    resolve_config,
)
from dumppack.parse import ParseOptions


def test_config_from_mapping_reads_all_keys() -> None:
    config = config_from_mapping({"strict": True, "bare_entries_key": " _entries ", "max_changes": 3})

    assert config == DumpKitConfig(strict=True, bare_entries_key="_entries", max_changes=3)
    assert config.parse_options() == ParseOptions(strict=True, bare_entries_key="_entries")


def test_config_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigError, match="Unsupported dumpkit config keys: colour"):
        config_from_mapping({"colour": "red"})


@pytest.mark.parametrize(
    "payload",
    [
        {"strict": "yes"},
        {"bare_entries_key": ""},
        {"bare_entries_key": 3},
        {"max_changes": 0},
        {"max_changes": True},
    ],
)
def test_config_rejects_wrong_types(payload: dict) -> None:
    with pytest.raises(ConfigError):
        config_from_mapping(payload)


def test_load_config_from_file(tmp_path: Path) -> None:
    path = tmp_path / "dumpkit.json"
    path.write_text(json.dumps({"max_changes": 2}), encoding="utf-8")

    assert load_config_from_file(path).max_changes == 2


def test_load_config_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "dumpkit.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid dumpkit config JSON"):
        load_config_from_file(path)


def test_load_config_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "dumpkit.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ConfigError, match="must be a JSON object"):
        load_config_from_file(path)


def test_resolve_config_defaults_without_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

    assert resolve_config() == DEFAULT_CONFIG


def test_resolve_config_uses_env_var(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "dumpkit.json"
    path.write_text(json.dumps({"strict": True}), encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert resolve_config().strict is True


def test_resolve_config_missing_file_is_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="dumpkit config not found"):
        resolve_config(tmp_path / "missing.json")


def test_overrides_only_apply_non_none_values() -> None:
    base = DumpKitConfig(strict=True, bare_entries_key="_x", max_changes=5)

    assert base.with_overrides() == base
    assert base.with_overrides(max_changes=0).max_changes == 1
    assert base.with_overrides(bare_entries_key="_y").bare_entries_key == "_y"


def test_load_config_from_directory_is_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="could not be read"):
        load_config_from_file(tmp_path)
