"""List model of package groups consumed by the selection view."""

from __future__ import annotations

from typing import Any, Iterable

from PySide6.QtCore import QAbstractListModel, QModelIndex, QObject, Qt

from ni_netinstall.groups import group_name


class PackageModel(QAbstractListModel):
    """One row per group, in the order the groups were loaded."""

    NameRole = Qt.ItemDataRole.UserRole + 1
    DescriptionRole = Qt.ItemDataRole.UserRole + 2
    PackagesRole = Qt.ItemDataRole.UserRole + 3
    GroupRole = Qt.ItemDataRole.UserRole + 4

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._groups: list[dict[str, Any]] = []

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._groups)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not 0 <= index.row() < len(self._groups):
            return None
        group = self._groups[index.row()]
        if role in (Qt.ItemDataRole.DisplayRole, self.NameRole):
            return group_name(group)
        if role in (Qt.ItemDataRole.ToolTipRole, self.DescriptionRole):
            return str(group.get("description") or "")
        if role == self.PackagesRole:
            return list(group.get("packages") or [])
        if role == self.GroupRole:
            return dict(group)
        return None

    def roleNames(self) -> dict[int, bytes]:
        roles = dict(super().roleNames())
        roles.update(
            {
                self.NameRole: b"name",
                self.DescriptionRole: b"description",
                self.PackagesRole: b"packages",
                self.GroupRole: b"group",
            }
        )
        return roles

    def setup_model_data(self, groups: Iterable[dict[str, Any]]) -> None:
        """Replace all rows with ``groups``."""
        self.beginResetModel()
        self._groups = [dict(group) for group in groups]
        self.endResetModel()

    def append_model_data(self, groups: Iterable[dict[str, Any]]) -> None:
        """Append ``groups`` after the existing rows."""
        new_groups = [dict(group) for group in groups]
        if not new_groups:
            return
        first = len(self._groups)
        self.beginInsertRows(QModelIndex(), first, first + len(new_groups) - 1)
        self._groups.extend(new_groups)
        self.endInsertRows()

    def clear(self) -> None:
        self.setup_model_data([])

    def groups(self) -> list[dict[str, Any]]:
        return [dict(group) for group in self._groups]

    def group(self, row: int) -> dict[str, Any]:
        return dict(self._groups[row])
