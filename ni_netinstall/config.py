"""QObject facade that loads netinstall groups from configuration."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from PySide6.QtCore import QCoreApplication, QObject, Signal

from ni_common.errors import NetInstallError, error_to_payload
from ni_common.storage import GlobalStorage, global_storage
from ni_netinstall.fetcher import FetchOutcome, GroupFetcher
from ni_netinstall.locale import TranslatedString, has_localized_key
from ni_netinstall.model import PackageModel
from ni_netinstall.settings import NetInstallSettings, parse_settings
from ni_netinstall.sources import SourceItem, resolve_sources
from ni_netinstall.status import TRANSLATION_CONTEXT, Status, StatusMachine
from ni_netinstall.transport import RequestOptions, Transport

logger = logging.getLogger(__name__)

GROUPS_URL_STORAGE_KEY = "groupsUrl"
DEFAULT_SIDEBAR_LABEL = "Package selection"


class NetInstallConfig(QObject):
    """Loads the group catalog for the package selection step.

    Each call to :meth:`set_configuration_map` or :meth:`load_group_list` is
    one load attempt. Sources are resolved independently; groups from every
    source that succeeds end up in :attr:`model` in declaration order, and the
    first failure decides :attr:`status`. ``groups_ready`` fires once per
    attempt, after the last source has finished either way.
    """

    # Signals
    status_changed = Signal(str)
    sidebar_label_changed = Signal(str)
    title_label_changed = Signal(str)
    groups_ready = Signal()

    def __init__(
        self,
        transport: Transport | None = None,
        storage: GlobalStorage | None = None,
        options: RequestOptions | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._storage = storage if storage is not None else global_storage()
        self._fetcher = GroupFetcher(transport, options)
        self._model = PackageModel(self)
        self._status = StatusMachine(self)
        self._status.status_changed.connect(self.status_changed)
        # The fetcher outlives the C++ object; drop its requests on destruction.
        self.destroyed.connect(self._fetcher.cancel_all)

        # State
        self._settings: NetInstallSettings | None = None
        self._required = False
        self._sidebar_label: TranslatedString | None = None
        self._title_label: TranslatedString | None = None
        self._locale: str | None = None
        self._slots: dict[int, list[dict[str, Any]]] = {}
        self._dispatching = False
        self._loading = False
        self._finished = False

    @property
    def model(self) -> PackageModel:
        return self._model

    @property
    def settings(self) -> NetInstallSettings | None:
        """Settings of the last accepted configuration map."""
        return self._settings

    @property
    def status(self) -> Status:
        return self._status.status

    @property
    def status_message(self) -> str:
        return self._status.message

    @property
    def required(self) -> bool:
        return self._required

    def set_required(self, required: bool) -> None:
        self._required = bool(required)

    @property
    def sidebar_label(self) -> str:
        if self._sidebar_label is not None:
            return self._sidebar_label.get(self._locale)
        return QCoreApplication.translate(TRANSLATION_CONTEXT, DEFAULT_SIDEBAR_LABEL)

    @property
    def title_label(self) -> str:
        if self._title_label is not None:
            return self._title_label.get(self._locale)
        return ""

    @property
    def is_loading(self) -> bool:
        """Whether an attempt still has sources outstanding."""
        return self._loading

    @property
    def is_finished(self) -> bool:
        """Whether the current attempt has finished, successfully or not."""
        return self._finished

    @property
    def is_ready(self) -> bool:
        """Whether the host may move past the package selection step."""
        if not self._finished:
            return False
        if not self._required:
            return True
        return self.status is Status.OK and self._model.rowCount() > 0

    def groups(self) -> list[dict[str, Any]]:
        """Canonical group list currently in the model."""
        return self._model.groups()

    def retranslate(self, locale: str | None = None) -> None:
        """Switch label locale and re-emit every human-facing string."""
        self._locale = locale
        self._status.retranslate()
        self.sidebar_label_changed.emit(self.sidebar_label)
        self.title_label_changed.emit(self.title_label)

    def set_configuration_map(self, configuration: Mapping[str, Any]) -> None:
        """Apply a module configuration map and start loading its groups."""
        self._begin_attempt()
        try:
            settings = parse_settings(configuration)
        except NetInstallError as exc:
            logger.warning("NetInstall configuration rejected: %s", exc)
            logger.debug("NetInstall configuration error: %s", error_to_payload(exc))
            self._settings = None
            self.set_required(False)
            self._apply_labels({})
            self._fail(exc)
            self._finish_attempt()
            return

        self._settings = settings
        self.set_required(settings.required)
        self._apply_labels(settings.label)

        groups_url = settings.single_groups_url()
        if groups_url:
            self._storage.insert(GROUPS_URL_STORAGE_KEY, groups_url)

        resolution = resolve_sources(settings)
        for error in resolution.errors:
            self._fail(error)
        self._dispatch(resolution.sources)

    def load_group_list(self, sources: Iterable[SourceItem]) -> None:
        """Start a new attempt over already resolved sources."""
        self._begin_attempt()
        self._dispatch(list(sources))

    def shutdown(self) -> None:
        """Drop every pending request; no result is delivered afterward."""
        cancelled = self._fetcher.cancel_all()
        if cancelled:
            logger.debug("Cancelled %d pending NetInstall request(s)", cancelled)
        self._loading = False

    def _apply_labels(self, label: Mapping[str, Any]) -> None:
        self._sidebar_label = (
            TranslatedString(label, "sidebar", TRANSLATION_CONTEXT)
            if has_localized_key(label, "sidebar")
            else None
        )
        self._title_label = (
            TranslatedString(label, "title", TRANSLATION_CONTEXT)
            if has_localized_key(label, "title")
            else None
        )
        self.sidebar_label_changed.emit(self.sidebar_label)
        self.title_label_changed.emit(self.title_label)

    def _begin_attempt(self) -> None:
        self._fetcher.cancel_all()
        self._slots.clear()
        self._finished = False
        self._loading = False
        self._model.clear()
        self._status.reset()

    def _dispatch(self, sources: list[SourceItem]) -> None:
        self._loading = True
        self._dispatching = True
        try:
            for source in sources:
                try:
                    self._fetcher.fetch(source, self._on_source_result)
                except NetInstallError as exc:
                    logger.warning("Could not load %s: %s", source.describe(), exc)
                    self._fail(exc)
        finally:
            self._dispatching = False
        self._maybe_finish()

    def _on_source_result(self, source: SourceItem, outcome: FetchOutcome) -> None:
        if outcome.error is not None:
            self._fail(outcome.error)
        else:
            self._slots[source.position] = outcome.groups
            self._model.setup_model_data(
                group
                for position in sorted(self._slots)
                for group in self._slots[position]
            )
        self._maybe_finish()

    def _fail(self, error: NetInstallError) -> None:
        self._status.fail(error)

    def _maybe_finish(self) -> None:
        if self._dispatching or self._finished or not self._loading:
            return
        if self._fetcher.pending_count:
            return
        self._finish_attempt()

    def _finish_attempt(self) -> None:
        self._loading = False
        self._finished = True
        if self._model.rowCount() < 1:
            logger.warning("NetInstall groups data was empty.")
        logger.info(
            "NetInstall groups loaded: %d group(s), status %s",
            self._model.rowCount(),
            self.status.value,
        )
        self.groups_ready.emit()
