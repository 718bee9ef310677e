"""Cluster operations built on a Ceph client and a configuration differ."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from typing import Protocol

from cephctl.cluster_health import ClusterHealthCheck
from cephctl.differ import Differ
from cephctl.models import (
    CephConfig,
    CephConfigDifference,
    CephConfigDifferenceKind,
    CephOSDConfig,
    CephOSDConfigDifference,
    ClusterHealthIndicator,
    ClusterReport,
    Device,
)

log = logging.getLogger(__name__)


class ServiceError(Exception):
    """Raised when a cluster operation cannot be completed."""


class CephClient(Protocol):
    """Operations the service needs from a Ceph cluster client."""

    def dump_config(self) -> CephConfig: ...

    def cluster_report(self) -> ClusterReport: ...

    def list_devices(self) -> list[Device]: ...

    def apply_ceph_config_option(self, section: str, key: str, value: str) -> None: ...

    def remove_ceph_config_option(self, section: str, key: str) -> None: ...

    def apply_ceph_osd_config_option(self, key: str, value: str) -> None: ...


class Service:
    """Compares, applies and inspects cluster configuration and health."""

    def __init__(self, ceph: CephClient, differ: Differ) -> None:
        self.ceph = ceph
        self.differ = differ

    def apply_ceph_config(self, cfg: CephConfig) -> None:
        """Bring the runtime configuration in line with ``cfg``."""
        try:
            changes = self.diff_ceph_config(cfg)
        except Exception as err:
            raise ServiceError(
                f"error comparing current and desired configuration: {err}"
            ) from err

        log.debug("changelog: %r", changes)

        for change in changes:
            if change.kind == CephConfigDifferenceKind.REMOVE:
                self.ceph.remove_ceph_config_option(change.section, change.key)
            elif change.kind in (
                CephConfigDifferenceKind.ADD,
                CephConfigDifferenceKind.CHANGE,
            ):
                self.ceph.apply_ceph_config_option(
                    change.section, change.key, change.value
                )
            else:
                log.warning("unexpected change kind: %s", change.kind)

    def apply_ceph_osd_config(self, cfg: CephOSDConfig) -> None:
        """Bring the OSD map settings in line with ``cfg``."""
        try:
            changes = self.diff_ceph_osd_config(cfg)
        except Exception as err:
            raise ServiceError(
                f"error comparing current and desired configuration: {err}"
            ) from err

        log.debug("changelog: %r", changes)

        for change in changes:
            self.ceph.apply_ceph_osd_config_option(change.key, change.value)

    def check_cluster_health(
        self, checks: Iterable[ClusterHealthCheck]
    ) -> list[ClusterHealthIndicator]:
        """Run every check against a fresh cluster report."""
        try:
            report = self.ceph.cluster_report()
        except Exception as err:
            raise ServiceError(f"error retrieving cluster status: {err}") from err

        try:
            devices = self.ceph.list_devices()
        except Exception as err:
            raise ServiceError(f"error retrieving device list: {err}") from err

        report = dataclasses.replace(report, devices=list(devices))
        return [check(report) for check in checks]

    def diff_ceph_config(self, cfg: CephConfig) -> list[CephConfigDifference]:
        """Return the changes between the running configuration and ``cfg``."""
        try:
            src = self.ceph.dump_config()
        except Exception as err:
            raise ServiceError(
                f"error retrieving current configuration: {err}"
            ) from err
        return self.differ.diff_ceph_config(src, cfg)

    def diff_ceph_osd_config(self, cfg: CephOSDConfig) -> list[CephOSDConfigDifference]:
        """Return the changes between the running OSD settings and ``cfg``."""
        try:
            src = self.dump_osd_config()
        except Exception as err:
            raise ServiceError(
                f"error retrieving current configuration: {err}"
            ) from err
        return self.differ.diff_ceph_osd_config(src, cfg)

    def dump_config(self) -> CephConfig:
        """Return the running configuration."""
        return self.ceph.dump_config()

    def dump_osd_config(self) -> CephOSDConfig:
        """Return the running OSD map settings."""
        try:
            report = self.ceph.cluster_report()
        except Exception as err:
            raise ServiceError(f"error collecting cluster report: {err}") from err

        return CephOSDConfig(
            allow_crimson=report.allow_crimson,
            backfillfull_ratio=report.backfillfull_ratio,
            full_ratio=report.full_ratio,
            nearfull_ratio=report.nearfull_ratio,
            require_min_compat_client=report.require_min_compat_client,
        )