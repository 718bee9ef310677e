"""Compute differences between current and desired configurations."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from cephctl.models import (
    CephConfig,
    CephConfigDifference,
    CephConfigDifferenceKind,
    CephOSDConfig,
    CephOSDConfigDifference,
)

FLATTEN_MAP_SEPARATOR = ":::"

log = logging.getLogger(__name__)


class DifferError(Exception):
    """Raised when two configurations cannot be compared."""


class UnexpectedOperationTypeError(DifferError):
    """Raised when a comparison yields an operation that is not an update."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation}: unexpected operation type")


def flatten_map(config: Mapping[str, Mapping[str, str]]) -> dict[str, str]:
    """Flatten section -> key -> value into "section:::key" -> value."""
    return {
        f"{section}{FLATTEN_MAP_SEPARATOR}{key}": value
        for section, options in config.items()
        for key, value in options.items()
    }


def _changelog(
    src: Mapping[str, Any], dst: Mapping[str, Any]
) -> Iterator[tuple[str, str, Any, Any]]:
    """Yield (operation, path, old, new) for every differing entry."""
    for path, old in src.items():
        if path in dst:
            if dst[path] != old:
                yield "update", path, old, dst[path]
        else:
            yield "delete", path, old, None
    for path, new in dst.items():
        if path not in src:
            yield "create", path, None, new


def _split_path(path: str) -> tuple[str, str]:
    parts = path.split(FLATTEN_MAP_SEPARATOR, 1)
    if len(parts) != 2:
        raise DifferError(
            f"unexpected path received: no flattened parts found ({len(parts)} received)"
        )
    section, key = parts
    if not section:
        raise DifferError("section name cannot be empty")
    if not key:
        raise DifferError("key name cannot be empty")
    return section, key


def _render(value: Any, which: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return f"{value:.2f}"
    if isinstance(value, str):
        return value
    log.warning("unexpected %s value type: got %s", which, type(value).__name__)
    return ""


class Differ:
    """Compares configurations and reports the changes needed."""

    def diff_ceph_config(
        self, from_config: CephConfig, to_config: CephConfig
    ) -> list[CephConfigDifference]:
        """Return the changes that turn ``from_config`` into ``to_config``."""
        changes: list[CephConfigDifference] = []
        for operation, path, old, new in _changelog(
            flatten_map(from_config), flatten_map(to_config)
        ):
            section, key = _split_path(path)

            if operation == "create":
                if not isinstance(new, str):
                    log.warning(
                        "unexpected value type: expected string, got %s",
                        type(new).__name__,
                    )
                    continue
                changes.append(
                    CephConfigDifference(
                        kind=CephConfigDifferenceKind.ADD,
                        section=section,
                        key=key,
                        value=new,
                    )
                )
            elif operation == "update":
                if not isinstance(old, str):
                    log.warning(
                        "unexpected old value type: expected string, got %s",
                        type(old).__name__,
                    )
                    continue
                if not isinstance(new, str):
                    log.warning(
                        "unexpected new value type: expected string, got %s",
                        type(new).__name__,
                    )
                    continue
                changes.append(
                    CephConfigDifference(
                        kind=CephConfigDifferenceKind.CHANGE,
                        section=section,
                        key=key,
                        old_value=old,
                        value=new,
                    )
                )
            else:
                changes.append(
                    CephConfigDifference(
                        kind=CephConfigDifferenceKind.REMOVE,
                        section=section,
                        key=key,
                    )
                )

        log.debug("diff generated: %r", changes)
        return changes

    def diff_ceph_osd_config(
        self, from_config: CephOSDConfig, to_config: CephOSDConfig
    ) -> list[CephOSDConfigDifference]:
        """Return the OSD map settings that differ, rendered as text."""
        changes: list[CephOSDConfigDifference] = []
        for f in dataclasses.fields(CephOSDConfig):
            old = getattr(from_config, f.name)
            new = getattr(to_config, f.name)
            if old == new:
                continue
            if old is None:
                raise UnexpectedOperationTypeError("create")
            if new is None:
                raise UnexpectedOperationTypeError("delete")
            changes.append(
                CephOSDConfigDifference(
                    key=f.name,
                    old_value=_render(old, "old"),
                    value=_render(new, "new"),
                )
            )
        return changes