import pytest

from cephctl.cluster_health import device_health
from cephctl.differ import Differ
from cephctl.models import (
    CephConfigDifference,
    CephConfigDifferenceKind,
    CephOSDConfig,
    CephOSDConfigDifference,
    ClusterHealthIndicator,
    ClusterHealthIndicatorStatus,
    ClusterHealthIndicatorType,
    ClusterReport,
    ClusterStatusHealth,
    Device,
)
from cephctl.service import Service, ServiceError


class FakeCeph:
    def __init__(self, config=None, report=None, devices=None, error=None):
        self.config = config if config is not None else {}
        self.report = report if report is not None else ClusterReport()
        self.devices = devices if devices is not None else []
        self.error = error
        self.calls = []

    def dump_config(self):
        self.calls.append(("dump_config",))
        if self.error:
            raise self.error
        return self.config

    def cluster_report(self):
        self.calls.append(("cluster_report",))
        if self.error:
            raise self.error
        return self.report

    def list_devices(self):
        self.calls.append(("list_devices",))
        return self.devices

    def apply_ceph_config_option(self, section, key, value):
        self.calls.append(("apply", section, key, value))

    def remove_ceph_config_option(self, section, key):
        self.calls.append(("remove", section, key))

    def apply_ceph_osd_config_option(self, key, value):
        self.calls.append(("apply_osd", key, value))


class FakeDiffer:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def diff_ceph_config(self, from_config, to_config):
        self.calls.append((from_config, to_config))
        return self.result

    def diff_ceph_osd_config(self, from_config, to_config):
        self.calls.append((from_config, to_config))
        return self.result


CURRENT = {"osd": {"test_key": "value"}, "osd.3": {"test_key": "old_value"}}
DESIRED = {"mon": {"test_key": "value"}, "osd.3": {"test_key": "value"}}
RESULT = [
    CephConfigDifference(
        kind=CephConfigDifferenceKind.ADD, section="mon", key="test_key", value="value"
    ),
    CephConfigDifference(
        kind=CephConfigDifferenceKind.CHANGE,
        section="osd.3",
        key="test_key",
        old_value="old_value",
        value="value",
    ),
    CephConfigDifference(
        kind=CephConfigDifferenceKind.REMOVE, section="osd", key="test_key"
    ),
]


def test_apply_ceph_config():
    ceph = FakeCeph(config=CURRENT)
    differ = FakeDiffer(RESULT)
    Service(ceph, differ).apply_ceph_config(DESIRED)

    assert differ.calls == [(CURRENT, DESIRED)]
    assert ceph.calls[0] == ("dump_config",)
    assert sorted(ceph.calls[1:]) == sorted(
        [
            ("remove", "osd", "test_key"),
            ("apply", "mon", "test_key", "value"),
            ("apply", "osd.3", "test_key", "value"),
        ]
    )


def test_apply_ceph_config_with_real_differ():
    ceph = FakeCeph(config=CURRENT)
    Service(ceph, Differ()).apply_ceph_config(DESIRED)
    assert sorted(ceph.calls[1:]) == sorted(
        [
            ("remove", "osd", "test_key"),
            ("apply", "mon", "test_key", "value"),
            ("apply", "osd.3", "test_key", "value"),
        ]
    )


def test_apply_ceph_config_wraps_errors():
    ceph = FakeCeph(error=RuntimeError("boom"))
    with pytest.raises(ServiceError) as exc:
        Service(ceph, FakeDiffer([])).apply_ceph_config(DESIRED)
    assert str(exc.value) == (
        "error comparing current and desired configuration: "
        "error retrieving current configuration: boom"
    )


def test_apply_ceph_osd_config():
    new_cfg = CephOSDConfig(
        allow_crimson=True,
        backfillfull_ratio=0.95,
        full_ratio=0.98,
        nearfull_ratio=0.9,
        require_min_compat_client="reef",
    )
    ceph = FakeCeph(report=ClusterReport())
    differ = FakeDiffer(
        [
            CephOSDConfigDifference(key="blah", old_value="932", value="123"),
            CephOSDConfigDifference(key="some_key", old_value="123", value="456"),
        ]
    )
    Service(ceph, differ).apply_ceph_osd_config(new_cfg)

    assert differ.calls == [
        (
            CephOSDConfig(
                allow_crimson=False,
                backfillfull_ratio=0.0,
                full_ratio=0.0,
                nearfull_ratio=0.0,
                require_min_compat_client="",
            ),
            new_cfg,
        )
    ]
    assert ceph.calls == [
        ("cluster_report",),
        ("apply_osd", "blah", "123"),
        ("apply_osd", "some_key", "456"),
    ]


def test_check_cluster_health():
    report = ClusterReport(
        health_status=ClusterStatusHealth.OK,
        num_mons=5,
        num_mons_in_quorum=5,
        num_osds=15,
        num_osds_in=15,
        num_osds_up=15,
        num_osds_by_release={"reef": 15},
        num_osds_by_version={"18.2.2": 15},
        num_osds_by_device_type={"ssd": 15},
        total_osd_capacity_kb=22_321_704_960,
        total_osd_used_data_kb=10_986_978_208,
        total_osd_used_meta_kb=512_967_627,
        total_osd_used_omap_kb=5_822_580,
        num_pools=14,
        num_pgs=330,
        num_pgs_by_state={
            "active": 330,
            "backfill_wait": 50,
            "backfilling": 2,
            "clean": 278,
            "remapped": 52,
        },
    )
    devices = [
        Device(id="testdevice", daemons=["osd.0"], wear_level=0.000001),
        Device(id="testdevice2", daemons=["osd.0"], wear_level=0.510001),
    ]
    ceph = FakeCeph(report=report, devices=devices)
    indicator = ClusterHealthIndicator(
        indicator=ClusterHealthIndicatorType.CLUSTER_STATUS,
        current_value="HEALTH_OK",
        current_value_status=ClusterHealthIndicatorStatus.GOOD,
    )
    seen = []

    def check(cr):
        seen.append(cr)
        return indicator

    result = Service(ceph, FakeDiffer([])).check_cluster_health([check])
    assert result == [indicator]
    assert seen[0].devices == devices


def test_check_cluster_health_passes_devices_to_checks():
    devices = [Device(id="dev-a", daemons=["osd.0"], wear_level=0.6)]
    ceph = FakeCeph(report=ClusterReport(), devices=devices)
    result = Service(ceph, FakeDiffer([])).check_cluster_health([device_health])
    assert result[0].current_value_status == ClusterHealthIndicatorStatus.AT_RISK


def test_check_cluster_health_report_error():
    ceph = FakeCeph(error=RuntimeError("down"))
    with pytest.raises(ServiceError, match="error retrieving cluster status: down"):
        Service(ceph, FakeDiffer([])).check_cluster_health([])


def test_diff_ceph_config():
    ceph = FakeCeph(config=CURRENT)
    differ = FakeDiffer(RESULT)
    diff = Service(ceph, differ).diff_ceph_config(DESIRED)
    assert diff == RESULT
    assert differ.calls == [(CURRENT, DESIRED)]


def test_diff_ceph_osd_config():
    src = CephOSDConfig(
        allow_crimson=False,
        nearfull_ratio=0.85,
        backfillfull_ratio=0.90,
        full_ratio=0.95,
        require_min_compat_client="luminous",
    )
    dst = CephOSDConfig(
        allow_crimson=True,
        nearfull_ratio=0.89,
        backfillfull_ratio=0.92,
        full_ratio=0.97,
        require_min_compat_client="reef",
    )
    ceph = FakeCeph(
        report=ClusterReport(
            allow_crimson=False,
            nearfull_ratio=0.85,
            backfillfull_ratio=0.90,
            full_ratio=0.95,
            require_min_compat_client="luminous",
        )
    )
    expected = [
        CephOSDConfigDifference(key="AllowCrimson", old_value="false", value="true"),
        CephOSDConfigDifference(key="NearfullRatio", old_value="0.85", value="0.89"),
        CephOSDConfigDifference(key="BackfillfullRatio", old_value="0.90", value="0.92"),
        CephOSDConfigDifference(key="FullRatio", old_value="0.95", value="0.97"),
        CephOSDConfigDifference(
            key="RequireMinCompatClient", old_value="luminous", value="reef"
        ),
    ]
    differ = FakeDiffer(expected)
    diff = Service(ceph, differ).diff_ceph_osd_config(dst)
    assert diff == expected
    assert differ.calls == [(src, dst)]


def test_diff_ceph_osd_config_with_real_differ():
    ceph = FakeCeph(
        report=ClusterReport(
            allow_crimson=False,
            nearfull_ratio=0.85,
            backfillfull_ratio=0.90,
            full_ratio=0.95,
            require_min_compat_client="luminous",
        )
    )
    dst = CephOSDConfig(
        allow_crimson=False,
        nearfull_ratio=0.85,
        backfillfull_ratio=0.90,
        full_ratio=0.95,
        require_min_compat_client="reef",
    )
    diff = Service(ceph, Differ()).diff_ceph_osd_config(dst)
    assert diff == [
        CephOSDConfigDifference(
            key="require_min_compat_client", old_value="luminous", value="reef"
        )
    ]


def test_dump_config():
    ceph = FakeCeph(config={"osd": {"test_key": "value"}})
    assert Service(ceph, FakeDiffer([])).dump_config() == {"osd": {"test_key": "value"}}


def test_dump_osd_config():
    ceph = FakeCeph(
        report=ClusterReport(
            allow_crimson=True,
            nearfull_ratio=0.85,
            backfillfull_ratio=0.9,
            full_ratio=0.95,
            require_min_compat_client="reef",
        )
    )
    cfg = Service(ceph, FakeDiffer([])).dump_osd_config()
    assert cfg == CephOSDConfig(
        allow_crimson=True,
        nearfull_ratio=0.85,
        backfillfull_ratio=0.9,
        full_ratio=0.95,
        require_min_compat_client="reef",
    )


def test_dump_osd_config_error():
    ceph = FakeCeph(error=RuntimeError("nope"))
    with pytest.raises(ServiceError, match="error collecting cluster report: nope"):
        Service(ceph, FakeDiffer([])).dump_osd_config()