# src/pocketscholar/config.py
"""Configuration loading utilities for PocketScholar.

This module provides configuration loading for the CLI and for
applications using PocketScholar as a library. It handles:
- Finding and loading pocketscholar.yaml config files
- Loading .env files for API keys
- Building Settings objects from multiple sources
- Creating PocketScholar instances from configuration
"""

from __future__ import annotations

import importlib
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    from pocketscholar.scholar import PocketScholar
    from pocketscholar.settings import Settings
    from pocketscholar.stores import SQLiteChunkStore

try:
    import yaml  # type: ignore[import-untyped]

    YAML_AVAILABLE = True
except ImportError:
    YAML_AVAILABLE = False

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_DATA_DIR = "./pocketscholar_data"
CONFIG_FILES = ["pocketscholar.yaml", "pocketscholar.yml", ".pocketscholarrc"]
ENV_FILE = ".env"
ENV_PREFIX = "POCKETSCHOLAR_"

# Local defaults; no API key needed with a running Ollama server
DEFAULT_LLM_MODEL = "ollama/llama3.2:1b"
DEFAULT_EMBEDDING_MODEL = "ollama/all-minilm"


@dataclass
class ConfigError:
    """Error during configuration loading."""

    message: str
    suggestion: str | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from a .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip("'\"")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in current directory or parent directories.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# Valid configuration keys for validation
VALID_ROOT_KEYS = {
    # Provider config
    "provider",
    "llm_model",
    "embedding_model",
    "api_base",
    "data_dir",
    # Custom provider
    "embedder",
    "llm_client",
    "embedder_kwargs",
    "llm_client_kwargs",
    # Settings section
    "settings",
}

# Settings fields that can be set from YAML or the environment, with their types
SETTINGS_FIELDS: dict[str, type] = {
    "chunk_size": int,
    "chunk_overlap": int,
    "default_k": int,
    "min_similarity": float,
    "search_mode": str,
    "embedding_weight": float,
    "max_context_chars": int,
    "context_overlap_window": int,
    "context_min_overlap": int,
    "partial_chunk_threshold": float,
    "min_partial_chars": int,
    "prompt_template": str,
    "synthesis_temperature": float,
    "max_answer_tokens": int,
    "fallback_answer": str,
    "no_result_answer": str,
    "max_answer_chars": int,
    "min_sentence_cut": int,
    "embedding_dimension": int,
    "embedding_batch_size": int,
    "num_retries": int,
}

VALID_SETTINGS_KEYS = set(SETTINGS_FIELDS) | {"profile", "top_k"}

CLEARABLE_FIELDS = {"prompt_template", "fallback_answer", "no_result_answer"}


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - VALID_SETTINGS_KEYS
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    if not YAML_AVAILABLE:
        logger.warning("pyyaml is not installed; ignoring %s", config_path)
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    for warning in validate_config(config, config_path):
        logger.warning(warning)

    return config


def _parse_number(value: str, kind: type) -> Any:
    """Parse an env var string as a number, returning None if invalid."""
    try:
        return kind(value)
    except ValueError:
        logger.warning("Ignoring invalid %s value %r", kind.__name__, value)
        return None


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from POCKETSCHOLAR_* environment variables.

    Returns values that were explicitly set (not defaults), to allow proper
    precedence: YAML settings are used unless overridden by env vars.
    Setting an optional text field to an empty string resets it to None.

    Returns:
        Dictionary of setting name -> value for explicitly set env vars
    """
    result: dict[str, Any] = {}

    for field, kind in SETTINGS_FIELDS.items():
        raw = os.environ.get(ENV_PREFIX + field.upper())
        if raw is None:
            continue
        if kind is str:
            if raw or field in CLEARABLE_FIELDS:
                result[field] = raw or None
            continue
        if (value := _parse_number(raw, kind)) is not None:
            result[field] = value

    if os.environ.get(ENV_PREFIX + "PROFILE"):
        result["profile"] = os.environ[ENV_PREFIX + "PROFILE"]

    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract settings from the 'settings:' section of a YAML config.

    Args:
        config: The loaded YAML configuration

    Returns:
        Dictionary of setting name -> value
    """
    yaml_settings = config.get("settings", {}) or {}

    result: dict[str, Any] = {
        key: value for key, value in yaml_settings.items() if key in VALID_SETTINGS_KEYS
    }
    # top_k is accepted as an alias
    if "top_k" in result:
        result.setdefault("default_k", result["top_k"])
        del result["top_k"]
    return result


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables
    2. YAML settings: section
    3. Chunking profile, if one is named
    4. Settings class defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)

    Returns:
        Configured Settings instance

    Raises:
        pydantic.ValidationError: If a value is out of range
        ValueError: If the profile name is unknown
    """
    from pocketscholar.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    merged = {**yaml_settings, **env_settings}

    profile = merged.pop("profile", None)
    if profile:
        return Settings.with_profile(profile, **merged)
    return Settings(**merged)


def resolve_data_dir(data_dir: str | None, config: dict[str, Any]) -> str:
    """Pick the data directory: explicit argument, then YAML, then env var, then default."""
    return str(
        data_dir
        or config.get("data_dir")
        or os.environ.get(ENV_PREFIX + "DATA_DIR")
        or DEFAULT_DATA_DIR
    )


def get_stores(data_dir: str | Path) -> SQLiteChunkStore:
    """Get the chunk store for operations that need no provider (list, status, delete).

    Args:
        data_dir: Path to data directory
    """
    from pocketscholar.configuration.storage.local import CHUNKS_DB
    from pocketscholar.stores import SQLiteChunkStore

    return SQLiteChunkStore(os.path.join(str(data_dir), CHUNKS_DB))


def import_class(class_path: str) -> type[Any]:
    """Import a class from a dotted path like 'my_package.module.ClassName'.

    Args:
        class_path: Dotted path to class

    Returns:
        The imported class
    """
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return cast(type[Any], getattr(module, class_name))


@dataclass
class ScholarConfig:
    """Configuration for creating a PocketScholar instance."""

    provider: str
    llm_model: str | None
    embedding_model: str | None
    data_dir: str
    settings: Settings
    api_base: str | None = None
    # Custom provider fields
    embedder_class: str | None = None
    llm_client_class: str | None = None
    embedder_kwargs: dict[str, Any] | None = None
    llm_client_kwargs: dict[str, Any] | None = None


def get_scholar_config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ScholarConfig | ConfigError:
    """Get configuration for creating a PocketScholar instance.

    This extracts configuration without creating the instance, allowing
    the caller to handle errors and missing values appropriately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        ScholarConfig with all settings, or ConfigError if invalid
    """
    from pydantic import ValidationError

    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)
    provider = config.get("provider", "litellm")

    try:
        settings = build_settings(config, get_settings_from_env())
    except (ValidationError, ValueError) as e:
        return ConfigError(
            message=f"Invalid settings: {e}",
            suggestion="Check the settings: section of pocketscholar.yaml "
            f"and {ENV_PREFIX}* environment variables",
        )

    if provider == "litellm":
        llm_model = (
            config.get("llm_model")
            or os.environ.get(ENV_PREFIX + "LLM_MODEL")
            or DEFAULT_LLM_MODEL
        )
        embedding_model = (
            config.get("embedding_model")
            or os.environ.get(ENV_PREFIX + "EMBEDDING_MODEL")
            or DEFAULT_EMBEDDING_MODEL
        )
        api_base = config.get("api_base") or os.environ.get(ENV_PREFIX + "API_BASE")

        return ScholarConfig(
            provider=provider,
            llm_model=llm_model,
            embedding_model=embedding_model,
            data_dir=effective_data_dir,
            settings=settings,
            api_base=api_base,
        )

    elif provider == "custom":
        embedder_class = config.get("embedder")
        llm_client_class = config.get("llm_client")

        if not all([embedder_class, llm_client_class]):
            return ConfigError(
                message="Custom provider requires embedder and llm_client.",
                suggestion="Add these to pocketscholar.yaml as dotted class paths",
            )

        return ScholarConfig(
            provider=provider,
            llm_model=None,
            embedding_model=None,
            data_dir=effective_data_dir,
            settings=settings,
            embedder_class=embedder_class,
            llm_client_class=llm_client_class,
            embedder_kwargs=config.get("embedder_kwargs", {}),
            llm_client_kwargs=config.get("llm_client_kwargs", {}),
        )

    else:
        return ConfigError(
            message=f"Unknown provider '{provider}'",
            suggestion="Supported providers: litellm, custom",
        )


def create_scholar(config: ScholarConfig) -> PocketScholar:
    """Create a PocketScholar instance from configuration.

    Args:
        config: Configuration for the instance

    Returns:
        Configured PocketScholar instance

    Raises:
        ImportError: If custom provider classes cannot be imported
    """
    from pocketscholar.configuration import LiteLLMProvider, LocalStorage
    from pocketscholar.scholar import PocketScholar

    if config.provider == "litellm":
        if not config.llm_model or not config.embedding_model:
            raise ValueError("LiteLLM provider requires llm_model and embedding_model")

        return PocketScholar(
            provider=LiteLLMProvider(
                llm=config.llm_model,
                embedding=config.embedding_model,
                api_base=config.api_base,
            ),
            storage=LocalStorage(config.data_dir),
            settings=config.settings,
        )

    elif config.provider == "custom":
        from dataclasses import dataclass as dc

        if not all([config.embedder_class, config.llm_client_class]):
            raise ValueError("Custom provider requires all class paths")

        # Narrowed by the check above
        assert config.embedder_class is not None
        assert config.llm_client_class is not None

        embedder = import_class(config.embedder_class)(**(config.embedder_kwargs or {}))
        llm_client = import_class(config.llm_client_class)(**(config.llm_client_kwargs or {}))

        @dc(frozen=True)
        class _CustomProvider:
            """Inline provider for custom implementations."""

            _embedder: Any
            _llm_client: Any

            def build_embedder(self, settings: Settings) -> Any:
                return self._embedder

            def build_llm_client(self, settings: Settings | None = None) -> Any:
                return self._llm_client

        return PocketScholar(
            provider=_CustomProvider(_embedder=embedder, _llm_client=llm_client),
            storage=LocalStorage(config.data_dir),
            settings=config.settings,
        )

    else:
        raise ValueError(f"Unknown provider: {config.provider}")


def get_scholar(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> PocketScholar | ConfigError:
    """Create a PocketScholar instance based on configuration.

    Combines get_scholar_config and create_scholar. For more control, use
    those functions separately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        Configured PocketScholar instance, or ConfigError if configuration is invalid
    """
    config = get_scholar_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return config
    return create_scholar(config)
