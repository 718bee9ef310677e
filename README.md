# cephctl

A library for managing a Ceph cluster's configuration declaratively:
describe the desired state, see how it differs from what is running, apply
only the difference, and check the cluster's health.

## Modules

- **`cephctl.models`** – dataclasses and string enums: `CephConfig` (a
  mapping of section → key → value), `CephOSDConfig` (OSD map settings with
  defaults `allow_crimson=False`, `backfillfull_ratio=0.9`,
  `full_ratio=0.95`, `nearfull_ratio=0.85`,
  `require_min_compat_client="reef"`), `CephConfigDifference` and
  `CephOSDConfigDifference`, `ClusterReport`, `OSDDaemon`, `Device`,
  `ClusterStatus`, and `ClusterHealthIndicator` with
  `ClusterHealthIndicatorType` and `ClusterHealthIndicatorStatus`.
- **`cephctl.differ`** – `Differ.diff_ceph_config(from_config, to_config)`
  reports additions, changes and removals between two `CephConfig`
  mappings; `Differ.diff_ceph_osd_config(from_config, to_config)` reports the
  `CephOSDConfig` fields that differ, with booleans written as
  `true`/`false` and ratios with two decimals. `flatten_map` turns a
  `CephConfig` into `"section:::key"` → value. Failures raise `DifferError`.
- **`cephctl.cluster_health`** – health checks, each taking a
  `ClusterReport` and returning a `ClusterHealthIndicator`:
  `cluster_status`, `quorum`, `osds_down`, `osds_out`, `mutes_amount`,
  `down_pgs`, `unclean_pgs`, `inactive_pgs`, `allow_crimson`,
  `osds_metadata_size`, `osds_num_daemon_versions`, `ip_collision` and
  `device_health`.
- **`cephctl.service`** – `Service(ceph, differ)` combines a Ceph client you
  supply (any object with `dump_config`, `cluster_report`, `list_devices`,
  `apply_ceph_config_option`, `remove_ceph_config_option` and
  `apply_ceph_osd_config_option`, as described by the `CephClient`
  protocol) with a `Differ`. It offers `dump_config`, `dump_osd_config`,
  `diff_ceph_config`, `diff_ceph_osd_config`, `apply_ceph_config`,
  `apply_ceph_osd_config` and `check_cluster_health(checks)`. Client
  failures are re-raised as `ServiceError`.
- **`cephctl.commands`** – `healthcheck(service, printer)` runs every check
  in `HEALTH_CHECKS` and prints a colour-coded line per indicator;
  `dump_ceph_config(service, printer)` and
  `dump_ceph_osd_config(service, printer)` print the running configuration
  as a YAML specification.
- **`cephctl.printer`** – `Printer(colorize=True, stream=None)` writes to a
  stream (standard output by default) with `printf`, `println`, `green`,
  `yellow`, `red` and `hi_red`; colours are ANSI codes and are left out when
  `colorize` is false.

## Comparing configurations

```python
from cephctl.differ import Differ

running = {
    "osd": {"test_key": "value"},
    "osd.3": {"test_key": "old_value"},
}
desired = {
    "mon": {"test_key": "value"},
    "osd.3": {"test_key": "value"},
}

for change in Differ().diff_ceph_config(running, desired):
    print(change.kind, change.section, change.key, change.old_value, change.value)
```

This reports three differences: `test_key` is added to `mon`, changed from
`old_value` to `value` in `osd.3`, and removed from `osd`. Empty section or
key names raise `DifferError`.

## Health report

`healthcheck` prints one line per indicator, for example:

```
[     GOOD] CLUSTER_STATUS = HEALTH_OK
[     GOOD] QUORUM = 5 of 5
[  AT_RISK] OSD_DOWN = 3 of 15
```

Lines are green when good, yellow when at risk, red when dangerous and
bright red when the status is unknown.

## Dumped specifications

`dump_ceph_osd_config` prints a document such as:

```yaml
kind: CephOSDConfig
spec:
    allow_crimson: false
    backfillfull_ratio: 0.9
    full_ratio: 0.95
    nearfull_ratio: 0.85
    require_min_compat_client: reef
```

`dump_ceph_config` prints `kind: CephConfig` with sections and keys sorted.

## What it does not do

- There is no command-line program; the functions in `cephctl.commands` are
  called from Python.
- There is no Ceph client: `Service` needs one supplied by the caller.
- Specification files are not read; desired configurations are passed in
  as `CephConfig` mappings or `CephOSDConfig` objects.

## Development

The test suite uses pytest, available through the `test` extra.