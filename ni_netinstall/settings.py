"""Module configuration model for the netinstall groups loader."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ni_common.errors import BadConfigurationError

LOCAL_SOURCE = "local"


class NetInstallSettings(BaseModel):
    """Recognized keys of the netinstall configuration map."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    required: bool = Field(
        default=False,
        description="When false, a failed load does not block the step",
    )
    label: dict[str, Any] = Field(
        default_factory=dict,
        description="Localized 'sidebar' and 'title' strings",
    )
    groups_url: str | list[str] | None = Field(
        default=None,
        alias="groupsUrl",
        description="'local', a URL, or a list of either",
    )
    groups: list[Any] = Field(
        default_factory=list,
        description="Inline groups used by 'local' entries",
    )

    @field_validator("label", mode="before")
    @classmethod
    def _none_label_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("groups", mode="before")
    @classmethod
    def _none_groups_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def source_entries(self) -> list[str]:
        """Return the declared ``groupsUrl`` entries in order."""
        if self.groups_url is None:
            return []
        if isinstance(self.groups_url, str):
            return [self.groups_url] if self.groups_url else []
        return list(self.groups_url)

    def single_groups_url(self) -> str | None:
        """Return ``groupsUrl`` when it is one non-empty string."""
        if isinstance(self.groups_url, str) and self.groups_url:
            return self.groups_url
        return None


def parse_settings(configuration: Mapping[str, Any]) -> NetInstallSettings:
    """Validate a configuration map, raising ``BadConfigurationError`` on bad types."""
    try:
        return NetInstallSettings.model_validate(dict(configuration))
    except ValidationError as exc:
        raise BadConfigurationError(
            "Invalid netinstall configuration",
            context={
                "errors": [
                    {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                    for err in exc.errors()
                ]
            },
            cause=exc,
        ) from exc


def load_configuration_file(path: Path) -> dict[str, Any]:
    """Load a module configuration map from a YAML file."""
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    data = yaml.safe_load(path.read_text()) or {}
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level.")
    return data
