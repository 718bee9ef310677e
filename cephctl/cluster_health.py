"""Health checks that turn a cluster report into health indicators."""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Callable

from cephctl.models import (
    ClusterHealthIndicator,
    ClusterHealthIndicatorStatus,
    ClusterHealthIndicatorType,
    ClusterReport,
    ClusterStatusHealth,
)

ClusterHealthCheck = Callable[[ClusterReport], ClusterHealthIndicator]
"""A check takes a cluster report and returns one indicator."""

_DEVICE_RISK_LEVEL = 0.5
_DEVICE_DANGEROUS_LEVEL = 0.75

_CLUSTER_STATUS_MAP = {
    ClusterStatusHealth.OK: ClusterHealthIndicatorStatus.GOOD,
    ClusterStatusHealth.WARN: ClusterHealthIndicatorStatus.AT_RISK,
    ClusterStatusHealth.ERR: ClusterHealthIndicatorStatus.DANGEROUS,
}


def allow_crimson(report: ClusterReport) -> ClusterHealthIndicator:
    """Crimson OSDs are not production-ready, so allowing them is a risk."""
    status = (
        ClusterHealthIndicatorStatus.AT_RISK
        if report.allow_crimson
        else ClusterHealthIndicatorStatus.GOOD
    )
    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.ALLOW_CRIMSON,
        current_value="true" if report.allow_crimson else "false",
        current_value_status=status,
    )


def cluster_status(report: ClusterReport) -> ClusterHealthIndicator:
    """Map the overall cluster health onto an indicator status."""
    health = report.health_status
    try:
        status = _CLUSTER_STATUS_MAP[ClusterStatusHealth(health)]
    except (ValueError, KeyError):
        status = ClusterHealthIndicatorStatus.UNKNOWN
    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.CLUSTER_STATUS,
        current_value=str(health),
        current_value_status=status,
    )


def device_health(report: ClusterReport) -> ClusterHealthIndicator:
    """Count devices in use whose wear level crosses the risk thresholds."""
    at_risk = 0
    dangerous = 0
    for device in report.devices:
        if not device.daemons:
            continue
        if device.wear_level > _DEVICE_DANGEROUS_LEVEL:
            dangerous += 1
        elif device.wear_level > _DEVICE_RISK_LEVEL:
            at_risk += 1

    if dangerous:
        status = ClusterHealthIndicatorStatus.DANGEROUS
    elif at_risk:
        status = ClusterHealthIndicatorStatus.AT_RISK
    else:
        status = ClusterHealthIndicatorStatus.GOOD

    value = (
        f">{_DEVICE_RISK_LEVEL * 100:.1f}%: {at_risk} device(s); "
        f">{_DEVICE_DANGEROUS_LEVEL * 100:.1f}%: {dangerous} device(s)"
    )
    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.DEVICE_HEALTH_WEAROUT,
        current_value=value,
        current_value_status=status,
    )


def down_pgs(report: ClusterReport) -> ClusterHealthIndicator:
    """Any placement group in the down state is dangerous."""
    down = report.num_pgs_by_state.get("down", 0)
    status = (
        ClusterHealthIndicatorStatus.DANGEROUS
        if down > 0
        else ClusterHealthIndicatorStatus.GOOD
    )
    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.DOWN_PGS,
        current_value=f"{down} of {report.num_pgs}",
        current_value_status=status,
    )


def inactive_pgs(report: ClusterReport) -> ClusterHealthIndicator:
    """Any placement group that is not active is dangerous."""
    inactive = report.num_pgs - report.num_pgs_by_state.get("active", 0)
    status = (
        ClusterHealthIndicatorStatus.DANGEROUS
        if inactive > 0
        else ClusterHealthIndicatorStatus.GOOD
    )
    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.INACTIVE_PGS,
        current_value=f"{inactive} of {report.num_pgs}",
        current_value_status=status,
    )


def ip_collision(report: ClusterReport) -> ClusterHealthIndicator:
    """Detect front or back IPs shared by OSD daemons on different hosts."""
    front_hosts: defaultdict[str, set[str]] = defaultdict(set)
    back_hosts: defaultdict[str, set[str]] = defaultdict(set)
    for osd in report.osd_daemons:
        front_hosts[osd.front_ip].add(osd.hostname)
        back_hosts[osd.back_ip].add(osd.hostname)

    for side, mapping in (("front", front_hosts), ("back", back_hosts)):
        if any(len(hosts) > 1 for hosts in mapping.values()):
            return ClusterHealthIndicator(
                indicator=ClusterHealthIndicatorType.IP_COLLISION,
                current_value=f"2 or more hosts have the same {side} IP",
                current_value_status=ClusterHealthIndicatorStatus.DANGEROUS,
            )

    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.IP_COLLISION,
        current_value="all hosts have their own IPs",
        current_value_status=ClusterHealthIndicatorStatus.GOOD,
    )


def mutes_amount(report: ClusterReport) -> ClusterHealthIndicator:
    """Muted checks hide problems, so any mute is a risk."""
    if report.muted_checks:
        return ClusterHealthIndicator(
            indicator=ClusterHealthIndicatorType.MUTES_AMOUNT,
            current_value=f"{len(report.muted_checks)} of {len(report.checks)}",
            current_value_status=ClusterHealthIndicatorStatus.AT_RISK,
        )
    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.MUTES_AMOUNT,
        current_value="0 of 0",
        current_value_status=ClusterHealthIndicatorStatus.GOOD,
    )


def osds_down(report: ClusterReport) -> ClusterHealthIndicator:
    """Any OSD that is not up is a risk."""
    down = report.num_osds - report.num_osds_up
    status = (
        ClusterHealthIndicatorStatus.AT_RISK
        if down > 0
        else ClusterHealthIndicatorStatus.GOOD
    )
    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.OSDS_DOWN,
        current_value=f"{down} of {report.num_osds}",
        current_value_status=status,
    )


def _percentage(capacity: int, used: int) -> float:
    if capacity == 0:
        return math.nan if used == 0 else math.inf
    return 100.0 / capacity * used


def _format_percentage(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return f"{value:.2f}"


def osds_metadata_size(report: ClusterReport) -> ClusterHealthIndicator:
    """Metadata share of total OSD capacity, in percent."""
    pct = _percentage(report.total_osd_capacity_kb, report.total_osd_used_meta_kb)

    if pct > 20.0:
        status = ClusterHealthIndicatorStatus.DANGEROUS
    elif pct > 15.0:
        status = ClusterHealthIndicatorStatus.AT_RISK
    elif pct > 0:
        status = ClusterHealthIndicatorStatus.GOOD
    else:
        status = ClusterHealthIndicatorStatus.UNKNOWN

    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.OSDS_METADATA_SIZE,
        current_value=_format_percentage(pct) + "%",
        current_value_status=status,
    )


def osds_num_daemon_versions(report: ClusterReport) -> ClusterHealthIndicator:
    """Running more than one OSD version is only normal during upgrades."""
    count = len(report.num_osds_by_version)
    if count > 2:
        status = ClusterHealthIndicatorStatus.DANGEROUS
    elif count == 2:
        status = ClusterHealthIndicatorStatus.AT_RISK
    elif count == 1:
        status = ClusterHealthIndicatorStatus.GOOD
    else:
        status = ClusterHealthIndicatorStatus.UNKNOWN
    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.OSDS_NUM_DAEMON_VERSIONS,
        current_value=str(count),
        current_value_status=status,
    )


def osds_out(report: ClusterReport) -> ClusterHealthIndicator:
    """Any OSD that is not in is a risk."""
    out = report.num_osds - report.num_osds_in
    status = (
        ClusterHealthIndicatorStatus.AT_RISK
        if out > 0
        else ClusterHealthIndicatorStatus.GOOD
    )
    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.OSDS_OUT,
        current_value=f"{out} of {report.num_osds}",
        current_value_status=status,
    )


def quorum(report: ClusterReport) -> ClusterHealthIndicator:
    """All monitors are expected to be in quorum."""
    status = (
        ClusterHealthIndicatorStatus.AT_RISK
        if report.num_mons_in_quorum < report.num_mons
        else ClusterHealthIndicatorStatus.GOOD
    )
    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.QUORUM,
        current_value=f"{report.num_mons_in_quorum} of {report.num_mons}",
        current_value_status=status,
    )


def unclean_pgs(report: ClusterReport) -> ClusterHealthIndicator:
    """Any placement group that is not clean is a risk."""
    unclean = report.num_pgs - report.num_pgs_by_state.get("clean", 0)
    status = (
        ClusterHealthIndicatorStatus.AT_RISK
        if unclean > 0
        else ClusterHealthIndicatorStatus.GOOD
    )
    return ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.UNCLEAN_PGS,
        current_value=f"{unclean} of {report.num_pgs}",
        current_value_status=status,
    )