"""Normalization of decoded groups data into the canonical group list."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ni_common.errors import BadDataError

logger = logging.getLogger(__name__)

GROUPS_KEY = "groups"


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def normalize_groups(tree: Any, *, origin: str = "groups data") -> list[dict[str, Any]]:
    """Extract the group list from a decoded value tree.

    A sequence is the group list itself; a mapping holds it under ``groups``.
    Any other shape yields no groups. Raises ``BadDataError`` when the list
    holds something other than mappings.
    """
    if isinstance(tree, Mapping):
        candidate = tree.get(GROUPS_KEY)
        if candidate is None:
            return []
    else:
        candidate = tree

    if not _is_sequence(candidate):
        logger.warning("NetInstall %s does not form a sequence.", origin)
        return []

    groups: list[dict[str, Any]] = []
    for index, item in enumerate(candidate):
        if not isinstance(item, Mapping):
            raise BadDataError(
                f"Group entry {index} in {origin} is not a map",
                context={"origin": origin, "index": index, "type": type(item).__name__},
            )
        groups.append(dict(item))
    return groups


def group_name(group: Mapping[str, Any]) -> str:
    """Return the display name of a group, empty when it has none."""
    name = group.get("name")
    return "" if name is None else str(name)
