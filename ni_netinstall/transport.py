"""Asynchronous GET transport used to fetch remote groups data.

The fetcher only needs "issue a GET, tell me when it is done". ``Transport``
and ``Reply`` describe that contract; ``QtNetworkTransport`` implements it on
top of ``QNetworkAccessManager`` so completions arrive on the Qt event loop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from PySide6.QtCore import QObject, QUrl
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest

logger = logging.getLogger(__name__)

FAKE_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:128.0) Gecko/20100101 Firefox/128.0"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class RequestOptions:
    """Per-request behaviour; the defaults are what groups fetching uses."""

    fake_user_agent: bool = True
    follow_redirect: bool = True
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


class Reply(Protocol):
    """An in-flight GET handed out by a transport."""

    @property
    def url(self) -> str: ...

    def is_finished(self) -> bool: ...

    def error_string(self) -> str | None:
        """Transport error text, or None when the request succeeded."""
        ...

    def size(self) -> int: ...

    def read_all(self) -> bytes: ...

    def on_finished(self, callback: Callable[[], None]) -> None: ...

    def release(self) -> None:
        """Drop the completion callback, abort if still running, free the handle."""
        ...


class Transport(Protocol):
    def asynchronous_get(self, url: str, options: RequestOptions) -> Reply | None:
        """Start a GET; None means the request was refused immediately."""
        ...


class QtReply:
    """``Reply`` backed by a ``QNetworkReply``."""

    def __init__(self, reply: QNetworkReply) -> None:
        self._reply = reply
        self._callbacks: list[Callable[[], None]] = []

    @property
    def url(self) -> str:
        return self._reply.url().toString()

    def is_finished(self) -> bool:
        return self._reply.isFinished()

    def error_string(self) -> str | None:
        if self._reply.error() == QNetworkReply.NetworkError.NoError:
            return None
        return f"{self._reply.error().name}: {self._reply.errorString()}"

    def size(self) -> int:
        return int(self._reply.size())

    def read_all(self) -> bytes:
        return bytes(self._reply.readAll().data())

    def on_finished(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)
        self._reply.finished.connect(callback)

    def release(self) -> None:
        for callback in self._callbacks:
            try:
                self._reply.finished.disconnect(callback)
            except (RuntimeError, TypeError):
                logger.debug("Finished callback already disconnected for %s", self.url)
        self._callbacks.clear()
        if not self._reply.isFinished():
            self._reply.abort()
        self._reply.deleteLater()


class QtNetworkTransport(QObject):
    """``Transport`` built on a private ``QNetworkAccessManager``."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._manager = QNetworkAccessManager(self)

    def _build_request(self, url: QUrl, options: RequestOptions) -> QNetworkRequest:
        request = QNetworkRequest(url)
        if options.fake_user_agent:
            request.setHeader(QNetworkRequest.KnownHeaders.UserAgentHeader, FAKE_USER_AGENT)
        policy = (
            QNetworkRequest.RedirectPolicy.NoLessSafeRedirectPolicy
            if options.follow_redirect
            else QNetworkRequest.RedirectPolicy.ManualRedirectPolicy
        )
        request.setAttribute(QNetworkRequest.Attribute.RedirectPolicyAttribute, policy)
        request.setTransferTimeout(int(options.timeout_seconds * 1000))
        return request

    def asynchronous_get(self, url: str, options: RequestOptions) -> QtReply | None:
        qurl = QUrl(url)
        if not qurl.isValid():
            logger.debug("Refusing invalid URL %s: %s", url, qurl.errorString())
            return None
        if qurl.scheme() not in self._manager.supportedSchemes():
            logger.debug("Refusing URL %s: unsupported scheme %r", url, qurl.scheme())
            return None
        reply = self._manager.get(self._build_request(qurl, options))
        if reply is None:
            return None
        return QtReply(reply)
