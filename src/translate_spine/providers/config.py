"""
Static provider configuration loaded from YAML at startup.

Example ``providers.yaml``::

    providers:
      - id: deepl
        name: DeepL
        endpoint_url: https://api.example.com/v2/translate
        http_verb: POST
        auth_placement: header
        key_name: Authorization
        key_secret: ${DEEPL_KEY}
        text_param: text
        source_lang_param: source_lang
        target_lang_param: target_lang

``${VAR}`` references in ``key_secret`` are expanded from the environment
so secrets stay out of the file.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from translate_spine.core.errors import ConfigError
from translate_spine.providers.models import AuthPlacement, HttpVerb, ProviderDescriptor


class ProviderConfig(BaseModel):
    """One provider entry as written in the YAML file."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str | None = None
    endpoint_url: str = ""
    http_verb: HttpVerb = HttpVerb.POST
    auth_placement: AuthPlacement = AuthPlacement.HEADER
    key_name: str = ""
    key_secret: str = ""
    text_param: str = ""
    source_lang_param: str = ""
    target_lang_param: str = ""

    @field_validator("http_verb", mode="before")
    @classmethod
    def _parse_verb(cls, value: object) -> HttpVerb:
        return HttpVerb.parse(value)

    @field_validator("key_secret")
    @classmethod
    def _expand_env(cls, value: str) -> str:
        return os.path.expandvars(value)

    def to_descriptor(self) -> ProviderDescriptor:
        return ProviderDescriptor(**self.model_dump())


class ProvidersFile(BaseModel):
    """Top-level layout of a providers file."""

    providers: list[ProviderConfig] = Field(default_factory=list)


def load_providers_file(path: Path) -> list[ProviderDescriptor]:
    """Parse and validate a providers file, preserving the listed order."""
    try:
        with open(path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read providers file {path}: {e}", cause=e) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in providers file {path}", cause=e) from e

    try:
        parsed = ProvidersFile.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid providers file {path}: {e}", cause=e) from e

    return [entry.to_descriptor() for entry in parsed.providers]


__all__ = ["ProviderConfig", "ProvidersFile", "load_providers_file"]
