"""Public API surface for ni_netinstall."""

from ni_netinstall.config import GROUPS_URL_STORAGE_KEY, NetInstallConfig
from ni_netinstall.decoder import DecodeResult, decode_groups_data, explain_yaml_error
from ni_netinstall.fetcher import FetchOutcome, GroupFetcher, owned_reply
from ni_netinstall.groups import normalize_groups
from ni_netinstall.locale import TranslatedString
from ni_netinstall.model import PackageModel
from ni_netinstall.settings import NetInstallSettings, parse_settings
from ni_netinstall.sources import (
    LocalSource,
    RemoteSource,
    SourceItem,
    SourceResolution,
    resolve_sources,
)
from ni_netinstall.status import Status, StatusMachine, status_message
from ni_netinstall.transport import (
    QtNetworkTransport,
    Reply,
    RequestOptions,
    Transport,
)

__all__ = [
    "DecodeResult",
    "FetchOutcome",
    "GROUPS_URL_STORAGE_KEY",
    "GroupFetcher",
    "LocalSource",
    "NetInstallConfig",
    "NetInstallSettings",
    "PackageModel",
    "QtNetworkTransport",
    "RemoteSource",
    "Reply",
    "RequestOptions",
    "SourceItem",
    "SourceResolution",
    "Status",
    "StatusMachine",
    "Transport",
    "TranslatedString",
    "decode_groups_data",
    "explain_yaml_error",
    "normalize_groups",
    "owned_reply",
    "parse_settings",
    "resolve_sources",
    "status_message",
]
