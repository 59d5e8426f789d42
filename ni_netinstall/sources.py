"""Resolution of configured groups sources into local or remote items."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Union
from urllib import parse

from ni_common.errors import BadConfigurationError
from ni_netinstall.settings import LOCAL_SOURCE, NetInstallSettings

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = frozenset({"http", "https", "file"})


@dataclass(frozen=True)
class LocalSource:
    """Groups embedded in the configuration; never fetched."""

    position: int
    groups: tuple[dict[str, Any], ...]

    def describe(self) -> str:
        return "local groups"


@dataclass(frozen=True)
class RemoteSource:
    """Groups served at a URL."""

    position: int
    url: str

    def describe(self) -> str:
        return self.url


SourceItem = Union[LocalSource, RemoteSource]


@dataclass
class SourceResolution:
    """Sources in declaration order, plus the entries that could not be resolved."""

    sources: list[SourceItem] = field(default_factory=list)
    errors: list[BadConfigurationError] = field(default_factory=list)


def validate_groups_url(url: str) -> str:
    """Return ``url`` stripped, or raise ``BadConfigurationError``."""
    candidate = url.strip()
    parsed = parse.urlparse(candidate)
    if parsed.scheme not in SUPPORTED_SCHEMES:
        raise BadConfigurationError(
            f"Unsupported groups URL: {url!r}",
            context={"url": url, "scheme": parsed.scheme},
        )
    if parsed.scheme == "file":
        if not parsed.path:
            raise BadConfigurationError(
                f"File groups URL has no path: {url!r}", context={"url": url}
            )
    elif not parsed.netloc:
        raise BadConfigurationError(
            f"Groups URL has no host: {url!r}", context={"url": url}
        )
    return candidate


def make_source_item(
    settings: NetInstallSettings, entry: str, position: int
) -> SourceItem:
    """Build the source for one ``groupsUrl`` entry."""
    if entry == LOCAL_SOURCE:
        return LocalSource(position=position, groups=tuple(settings.groups))
    return RemoteSource(position=position, url=validate_groups_url(entry))


def resolve_sources(settings: NetInstallSettings) -> SourceResolution:
    """Resolve every declared entry; a bad entry does not affect the others."""
    resolution = SourceResolution()
    for position, entry in enumerate(settings.source_entries()):
        try:
            resolution.sources.append(make_source_item(settings, entry, position))
        except BadConfigurationError as exc:
            logger.warning("Skipping groups source %d: %s", position, exc)
            resolution.errors.append(exc)
    return resolution
