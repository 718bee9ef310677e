"""Data types shared across the tool: configuration, cluster reports and health indicators."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

CephConfig = dict[str, dict[str, str]]
"""Runtime configuration: section name -> option name -> value."""


class _StrEnum(str, Enum):
    """String enumeration whose text form is its value."""

    def __str__(self) -> str:
        return self.value


class CephConfigDifferenceKind(_StrEnum):
    ADD = "add"
    CHANGE = "change"
    REMOVE = "remove"


@dataclass(frozen=True)
class CephConfigDifference:
    """A single difference between two runtime configurations."""

    kind: CephConfigDifferenceKind
    section: str
    key: str
    old_value: str | None = None
    value: str | None = None


@dataclass
class CephOSDConfig:
    """OSD map settings; field names match the specification keys."""

    allow_crimson: bool = False
    backfillfull_ratio: float = 0.9
    full_ratio: float = 0.95
    nearfull_ratio: float = 0.85
    require_min_compat_client: str = "reef"


@dataclass(frozen=True)
class CephOSDConfigDifference:
    """A single changed OSD map setting, with values rendered as text."""

    key: str
    old_value: str
    value: str


class ClusterHealthIndicatorType(_StrEnum):
    ALLOW_CRIMSON = "ALLOW_CRIMSON"
    CLUSTER_STATUS = "CLUSTER_STATUS"
    INACTIVE_PGS = "INACTIVE_PGS"
    IP_COLLISION = "IP_COLLISION"
    MONS_DOWN = "MON_DOWN"
    MUTES_AMOUNT = "MUTES_AMOUNT"
    OSDS_DOWN = "OSD_DOWN"
    OSDS_METADATA_SIZE = "OSD_METADATA_SIZE"
    OSDS_NUM_DAEMON_VERSIONS = "OSD_NUM_DAEMON_VERSIONS"
    OSDS_OUT = "OSD_OUT"
    QUORUM = "QUORUM"
    DOWN_PGS = "DOWN_PGS"
    UNCLEAN_PGS = "UNCLEAN_PGS"
    DEVICE_HEALTH_WEAROUT = "DEVICE_HEALTH_WEAROUT"


class ClusterHealthIndicatorStatus(_StrEnum):
    GOOD = "GOOD"
    AT_RISK = "AT_RISK"
    DANGEROUS = "DANGEROUS"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class ClusterHealthIndicator:
    """Result of one health check."""

    indicator: ClusterHealthIndicatorType
    current_value: str
    current_value_status: ClusterHealthIndicatorStatus


class ClusterStatusHealth(_StrEnum):
    OK = "HEALTH_OK"
    WARN = "HEALTH_WARN"
    ERR = "HEALTH_ERR"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class ClusterStatusMutedCheck:
    code: str
    summary: str


@dataclass(frozen=True)
class ClusterStatusCheck:
    code: str
    severity: ClusterStatusHealth
    summary: str


@dataclass
class ClusterStatus:
    health_status: ClusterStatusHealth = ClusterStatusHealth.UNKNOWN
    checks: list[ClusterStatusCheck] = field(default_factory=list)
    muted_checks: list[ClusterStatusMutedCheck] = field(default_factory=list)
    quorum_amount: int = 0
    mons_total: int = 0
    mons_down_amount: int = 0
    mgrs_down_amount: int = 0
    mdss_down_amount: int = 0
    osds_down_amount: int = 0
    unclean_pgs: int = 0
    inactive_pgs: int = 0


@dataclass
class Device:
    id: str = ""
    daemons: list[str] = field(default_factory=list)
    wear_level: float = 0.0


@dataclass
class OSDDaemon:
    id: int = 0
    hostname: str = ""
    architecture: str = ""
    front_ip: str = ""
    back_ip: str = ""
    memory_total_bytes: int = 0
    swap_total_bytes: int = 0
    is_rotational: bool = False
    devices: list[str] = field(default_factory=list)


@dataclass
class ClusterReport:
    """Aggregated facts about a cluster, used by the health checks."""

    allow_crimson: bool = False
    backfillfull_ratio: float = 0.0
    checks: list[ClusterStatusCheck] = field(default_factory=list)
    devices: list[Device] = field(default_factory=list)
    full_ratio: float = 0.0
    health_status: ClusterStatusHealth = ClusterStatusHealth.UNKNOWN
    muted_checks: list[ClusterStatusMutedCheck] = field(default_factory=list)
    nearfull_ratio: float = 0.0
    num_mons: int = 0
    num_mons_in_quorum: int = 0
    num_osds: int = 0
    num_osds_by_device_type: dict[str, int] = field(default_factory=dict)
    num_osds_by_release: dict[str, int] = field(default_factory=dict)
    num_osds_by_version: dict[str, int] = field(default_factory=dict)
    num_osds_in: int = 0
    num_osds_up: int = 0
    num_osds_without_cluster_address: int = 0
    num_pgs: int = 0
    num_pgs_by_state: dict[str, int] = field(default_factory=dict)
    num_pools: int = 0
    osd_daemons: list[OSDDaemon] = field(default_factory=list)
    require_min_compat_client: str = ""
    stretch_mode: bool = False
    total_osd_capacity_kb: int = 0
    total_osd_used_data_kb: int = 0
    total_osd_used_meta_kb: int = 0
    total_osd_used_omap_kb: int = 0