"""Configuration loading with pydantic-settings.

YAML files are read and deep-merged first (global, then repo or an explicit
``config_file``). The merged mapping then becomes the lowest-priority source
of a settings class, below environment variables and direct kwargs.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from lintspan.config.models import AnnotationConfig, LintSpanConfig, LoggingConfig
from lintspan.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/lintspan/config.yaml").expanduser()
REPO_CONFIG_DIR = ".lintspan"
CONFIG_FILE_NAME = "config.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    """Mapping stored in ``path``, empty when the file is absent or blank."""
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _config_files(root: Path, config_file: Path | None) -> list[Path]:
    """YAML files to merge, lowest precedence first."""
    if config_file is None:
        return [GLOBAL_CONFIG_PATH, root / REPO_CONFIG_DIR / CONFIG_FILE_NAME]
    if not config_file.is_file():
        raise ConfigError.file_not_found(str(config_file))
    return [GLOBAL_CONFIG_PATH, config_file]


class _YamlSource(PydanticBaseSettingsSource):
    """Serves an already merged YAML mapping to pydantic-settings."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class LintSpanSettings(BaseSettings):
    """Root settings. Env vars: LINTSPAN__LOGGING__LEVEL, LINTSPAN__ANNOTATION__TAB_SIZE, etc."""

    model_config = SettingsConfigDict(
        env_prefix="LINTSPAN__",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    logging: LoggingConfig = LoggingConfig()
    annotation: AnnotationConfig = AnnotationConfig()


def _settings_with_yaml(data: dict[str, Any]) -> type[LintSpanSettings]:
    """Subclass of LintSpanSettings whose YAML layer is ``data``.

    One class per load keeps concurrent loads from sharing YAML state.
    """

    class _Settings(LintSpanSettings):
        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # First wins: kwargs, then env vars, then YAML
            return (init_settings, env_settings, _YamlSource(settings_cls, data))

    return _Settings


def load_config(
    root: Path | None = None,
    *,
    config_file: Path | None = None,
    **kwargs: Any,
) -> LintSpanConfig:
    """Load config: defaults < global yaml < repo yaml < env vars < kwargs.

    Args:
        root: Directory holding the .lintspan/ config directory.
              Defaults to current working directory.
        config_file: Explicit YAML file used instead of the repo config.
        **kwargs: Section overrides, e.g. ``annotation={"tab_size": 2}``.

    Raises:
        ConfigError: Missing ``config_file``, invalid YAML, or a value that
            fails validation.
    """
    data: dict[str, Any] = {}
    for path in _config_files(root or Path.cwd(), config_file):
        data = _deep_merge(data, _load_yaml(path))

    try:
        settings = _settings_with_yaml(data)(**kwargs)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ConfigError.invalid_value(field, first.get("input"), first["msg"]) from e
    return LintSpanConfig.model_validate(settings.model_dump())
