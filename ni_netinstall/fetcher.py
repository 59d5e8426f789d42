"""Fetching of groups sources: local pass-through and asynchronous remote GETs."""

from __future__ import annotations

import itertools
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Iterator

from ni_common.errors import (
    BadConfigurationError,
    BadDataError,
    InternalError,
    NetInstallError,
    NetworkError,
)
from ni_netinstall.decoder import decode_groups_data, explain_yaml_error
from ni_netinstall.groups import normalize_groups
from ni_netinstall.sources import LocalSource, RemoteSource, SourceItem
from ni_netinstall.transport import QtNetworkTransport, Reply, RequestOptions, Transport

logger = logging.getLogger(__name__)

DECODE_LABEL = "netinstall groups data"


@dataclass(frozen=True)
class FetchOutcome:
    """Groups produced by one source, or the error that stopped it."""

    groups: list[dict[str, Any]] = field(default_factory=list)
    error: NetInstallError | None = None


ResultCallback = Callable[[SourceItem, FetchOutcome], None]


@dataclass
class PendingRequest:
    source: RemoteSource
    reply: Reply
    on_result: ResultCallback


@contextmanager
def owned_reply(reply: Reply) -> Iterator[Reply]:
    """Hold ``reply`` for the duration of the block and release it on exit."""
    try:
        yield reply
    finally:
        reply.release()


class GroupFetcher:
    """Resolves sources into groups, one outcome callback per source.

    Local sources complete before :meth:`fetch` returns. Remote sources are
    tracked as pending requests until the transport reports completion or
    :meth:`cancel_all` drops them; a dropped request never calls back.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        options: RequestOptions | None = None,
    ) -> None:
        self._transport = transport
        self._options = options or RequestOptions()
        self._pending: dict[int, PendingRequest] = {}
        self._request_ids = itertools.count(1)

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = QtNetworkTransport()
        return self._transport

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def fetch(self, source: SourceItem, on_result: ResultCallback) -> bool:
        """Start resolving ``source``; returns True if the result arrives later."""
        if isinstance(source, LocalSource):
            on_result(source, self._normalize(list(source.groups), "local groups"))
            return False
        return self._fetch_remote(source, on_result)

    def _fetch_remote(self, source: RemoteSource, on_result: ResultCallback) -> bool:
        logger.debug("NetInstall loading groups from %s", source.url)
        reply = self.transport.asynchronous_get(source.url, self._options)
        if reply is None:
            logger.warning("NetInstall request for %s failed immediately.", source.url)
            on_result(
                source,
                FetchOutcome(
                    error=BadConfigurationError(
                        "Request could not be issued", context={"url": source.url}
                    )
                ),
            )
            return False
        request_id = next(self._request_ids)
        self._pending[request_id] = PendingRequest(source, reply, on_result)
        reply.on_finished(partial(self._on_finished, request_id))
        return True

    def _on_finished(self, request_id: int) -> None:
        pending = self._pending.pop(request_id, None)
        if pending is None:
            logger.debug("Ignoring completion for dropped request %d", request_id)
            return
        with owned_reply(pending.reply) as reply:
            outcome = self._read_reply(pending.source, reply)
        pending.on_result(pending.source, outcome)

    def _read_reply(self, source: RemoteSource, reply: Reply) -> FetchOutcome:
        if not reply.is_finished():
            logger.warning("NetInstall data called too early.")
            return FetchOutcome(
                error=InternalError(
                    "Completion reported before the reply finished",
                    context={"url": source.url},
                )
            )

        logger.debug(
            "NetInstall group data received %d bytes from %s", reply.size(), reply.url
        )
        transport_error = reply.error_string()
        if transport_error is not None:
            logger.warning("Unable to fetch netinstall package lists from %s.", source.url)
            logger.debug(
                "Request for url %s failed with: %s", source.url, transport_error
            )
            return FetchOutcome(
                error=NetworkError(
                    transport_error, context={"url": source.url}
                )
            )

        decoded = decode_groups_data(reply.read_all())
        if not decoded.ok:
            explain_yaml_error(decoded.error, DECODE_LABEL)
            return FetchOutcome(error=decoded.error)
        return self._normalize(decoded.value, source.url)

    @staticmethod
    def _normalize(tree: Any, origin: str) -> FetchOutcome:
        try:
            return FetchOutcome(groups=normalize_groups(tree, origin=origin))
        except BadDataError as exc:
            logger.warning("Invalid groups from %s: %s", origin, exc)
            return FetchOutcome(error=exc)

    def cancel_all(self) -> int:
        """Release every pending reply without calling back; returns how many."""
        pending = list(self._pending.values())
        self._pending.clear()
        for request in pending:
            logger.debug("Cancelling groups request for %s", request.source.url)
            request.reply.release()
        return len(pending)
