"""Declarative Ceph cluster configuration: diffing, applying, dumping and health checks."""

__version__ = "0.1.0"

__all__ = [
    "cluster_health",
    "commands",
    "differ",
    "models",
    "printer",
    "service",
]