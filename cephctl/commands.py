"""Command implementations: health check and configuration dumps."""

from __future__ import annotations

import dataclasses
from typing import Any

import yaml

from cephctl import cluster_health
from cephctl.models import ClusterHealthIndicatorStatus
from cephctl.printer import Printer
from cephctl.service import Service

HEALTH_CHECKS: tuple[cluster_health.ClusterHealthCheck, ...] = (
    cluster_health.cluster_status,
    cluster_health.quorum,
    cluster_health.osds_down,
    cluster_health.osds_out,
    cluster_health.mutes_amount,
    cluster_health.down_pgs,
    cluster_health.unclean_pgs,
    cluster_health.inactive_pgs,
    cluster_health.allow_crimson,
    cluster_health.osds_metadata_size,
    cluster_health.osds_num_daemon_versions,
    cluster_health.ip_collision,
    cluster_health.device_health,
)

_STATUS_WIDTH = len(ClusterHealthIndicatorStatus.DANGEROUS.value)


def pad_to(text: str, width: int) -> str:
    """Left-pad ``text`` with spaces up to ``width`` characters."""
    return text.rjust(width)


def healthcheck(service: Service, printer: Printer) -> None:
    """Run every health check and print one coloured line per indicator."""
    indicators = service.check_cluster_health(list(HEALTH_CHECKS))

    printers = {
        ClusterHealthIndicatorStatus.GOOD: printer.green,
        ClusterHealthIndicatorStatus.AT_RISK: printer.yellow,
        ClusterHealthIndicatorStatus.DANGEROUS: printer.red,
    }
    for indicator in indicators:
        print_fn = printers.get(indicator.current_value_status, printer.hi_red)
        print_fn(
            "[%s] %s = %s",
            pad_to(str(indicator.current_value_status), _STATUS_WIDTH),
            indicator.indicator,
            indicator.current_value,
        )


def _to_yaml(document: dict[str, Any]) -> str:
    return yaml.safe_dump(
        document,
        indent=4,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=2**31 - 1,
    )


def dump_ceph_config(service: Service, printer: Printer) -> None:
    """Print the running configuration as a CephConfig specification."""
    cfg = service.dump_config()
    spec = {
        section: {key: cfg[section][key] for key in sorted(cfg[section])}
        for section in sorted(cfg)
    }
    printer.println(_to_yaml({"kind": "CephConfig", "spec": spec}))


def dump_ceph_osd_config(service: Service, printer: Printer) -> None:
    """Print the running OSD settings as a CephOSDConfig specification."""
    cfg = service.dump_osd_config()
    printer.println(
        _to_yaml({"kind": "CephOSDConfig", "spec": dataclasses.asdict(cfg)})
    )