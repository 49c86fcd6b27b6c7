"""
Generator configuration.

Values come from (highest precedence first): explicit keyword arguments /
CLI flags, FLOWGEN_* environment variables, and an optional YAML file read by
load_generator_properties().

Environment examples:
    FLOWGEN_SECRET_MASKING_ENABLED=true
    FLOWGEN_TEMPLATES__OVERRIDE_PATH=custom
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, EnvSettingsSource, SettingsConfigDict

from flowgen.errors import GeneratorError


class AdditionalResource(BaseModel):
    """A static file copied verbatim into the generated project."""

    source: str
    destination: str


class TemplatesProperties(BaseModel):
    # Default template root; None means the templates shipped with flowgen
    root: Optional[str] = None
    # Directory searched before the root; relative paths resolve against the root
    override_path: Optional[str] = None
    additional_resources: List[AdditionalResource] = []


class GeneratorProperties(BaseSettings):
    secret_masking_enabled: bool = False
    templates: TemplatesProperties = TemplatesProperties()

    model_config = SettingsConfigDict(
        env_prefix="FLOWGEN_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    def with_overrides(self, secret_masking_enabled: bool = None, override_path: str = None):
        """Return a copy with the given CLI-level overrides applied."""
        update = {}
        if secret_masking_enabled is not None:
            update["secret_masking_enabled"] = secret_masking_enabled
        if override_path is not None:
            update["templates"] = self.templates.model_copy(update={"override_path": override_path})
        return self.model_copy(update=update)


def load_generator_properties(path=None) -> GeneratorProperties:
    """
    Build GeneratorProperties from an optional YAML file plus the environment.

    FLOWGEN_* variables win over the file; nested sections are merged key by
    key, so FLOWGEN_TEMPLATES__OVERRIDE_PATH keeps the file's template root.

    Args:
        path: Path to a YAML config file, or None for environment/defaults only

    Raises:
        GeneratorError: If the file cannot be read or does not validate
    """
    if path is None:
        return GeneratorProperties()

    config_path = Path(path)
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GeneratorError(f"Cannot read generator config '{config_path}': {e}") from e

    if not isinstance(data, dict):
        raise GeneratorError(f"Generator config '{config_path}' must be a mapping")

    try:
        environment = EnvSettingsSource(GeneratorProperties)()
        return GeneratorProperties(**_merge(data, environment))
    except ValidationError as e:
        raise GeneratorError(f"Invalid generator config '{config_path}': {e}") from e


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
