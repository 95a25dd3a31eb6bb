# src/pocketscholar/commands/config_cmd.py
"""Config command - display current configuration."""

from __future__ import annotations

from pathlib import Path

from pocketscholar.commands.base import ConfigResult, SettingInfo
from pocketscholar.config import (
    SETTINGS_FIELDS,
    ConfigError,
    find_config_file,
    get_scholar_config,
    get_settings_from_env,
    get_settings_from_yaml,
    load_config,
)

# Long text settings are summarized rather than printed
_TEXT_SETTINGS = {"prompt_template", "fallback_answer", "no_result_answer"}


def _get_setting_source(
    key: str,
    yaml_settings: dict,
    env_settings: dict,
) -> str:
    """Determine the source of a setting value."""
    if key in env_settings:
        return "env var"
    if key in yaml_settings:
        return "yaml"
    return "default"


def _display_value(key: str, value: object) -> str:
    if value is None:
        return "built-in" if key in _TEXT_SETTINGS else "none"
    if key in _TEXT_SETTINGS:
        return "custom"
    return str(value)


def config(
    config_path: str | Path | None = None,
    data_dir: str | None = None,
) -> ConfigResult:
    """Get current configuration settings.

    Args:
        config_path: Override config file path
        data_dir: Override data directory

    Returns:
        ConfigResult with all settings and their sources
    """
    scholar_config = get_scholar_config(data_dir, config_path)
    if isinstance(scholar_config, ConfigError):
        error = scholar_config.message
        if scholar_config.suggestion:
            error = f"{error} {scholar_config.suggestion}"
        return ConfigResult(success=False, error=error)

    yaml_settings = get_settings_from_yaml(load_config(config_path))
    env_settings = get_settings_from_env()

    if config_path is not None:
        found_config_path: Path | None = Path(config_path)
    else:
        found_config_path = find_config_file()

    result = ConfigResult(
        success=True,
        provider=scholar_config.provider,
        llm_model=scholar_config.llm_model,
        embedding_model=scholar_config.embedding_model,
        data_dir=scholar_config.data_dir,
        config_path=str(found_config_path) if found_config_path else None,
    )

    settings = scholar_config.settings
    for key in SETTINGS_FIELDS:
        result.settings.append(
            SettingInfo(
                name=key,
                value=_display_value(key, getattr(settings, key)),
                source=_get_setting_source(key, yaml_settings, env_settings),
            )
        )

    return result
