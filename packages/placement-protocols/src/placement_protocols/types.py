"""
Generic types for the placement protocol system.

This module defines the data structures exchanged between the replica
division core and its collaborators (cluster discovery, capacity
estimation, deployment). They are plain dataclasses so any scheduler
component can build them without pulling in the division core.
"""

from dataclasses import dataclass, field


# Type aliases for common patterns
ClusterName = str
"""Unique identifier for a member cluster."""

MAX_REPLICAS = 2**31 - 1
"""Upper bound reported for a cluster that no estimator constrains."""

UNAUTHENTIC_REPLICAS = -1
"""Answer an estimator gives when it cannot judge a cluster."""


@dataclass
class TargetCluster:
    """
    A cluster paired with a replica count.

    Depending on context the count is either a placement decision (how
    many replicas run there) or a capacity figure (how many replicas the
    cluster can still accept).

    Attributes:
        name: Cluster identifier. Unique within a single result list.
        replicas: Replica count. Never negative in a division result.
    """

    name: ClusterName
    replicas: int = 0


@dataclass
class ClusterWeightInfo:
    """
    Relative weight of a cluster in a proportional division.

    Attributes:
        cluster_name: Cluster identifier.
        weight: Proportionality factor, >= 0. A zero weight excludes the
            cluster from the proportional share while still allowing it
            to appear in the result.
    """

    cluster_name: ClusterName
    weight: int


@dataclass
class Cluster:
    """
    A candidate member cluster as seen by the scheduler.

    Only the attributes used for weight-rule matching are carried.

    Attributes:
        name: Cluster identifier.
        labels: Cluster labels matched by label selectors.
        provider: Cloud provider name (e.g., "aws").
        region: Region the cluster runs in.
        zone: Availability zone the cluster runs in.
    """

    name: ClusterName
    labels: dict[str, str] = field(default_factory=dict)
    provider: str = ""
    region: str = ""
    zone: str = ""
