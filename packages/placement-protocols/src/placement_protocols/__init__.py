"""
Protocol definitions for the multi-cluster replica placement system.

This package provides the data types and Protocol definitions shared by
the division core and the scheduler components around it. It has zero
dependencies on other placement-* packages.

Key protocols:
- CapacityEstimatorProtocol: Interface for per-cluster capacity estimators
- ClusterMatcherProtocol: Interface for weight-rule cluster predicates

Key types:
- TargetCluster: A cluster with a replica count (placement or capacity)
- ClusterWeightInfo: A cluster with a division weight
- Cluster: Candidate cluster attributes used for matching
- ClusterName: Type alias for cluster identifiers
"""

from placement_protocols.estimator import CapacityEstimatorProtocol
from placement_protocols.matcher import ClusterMatcherProtocol
from placement_protocols.types import (
    MAX_REPLICAS,
    UNAUTHENTIC_REPLICAS,
    Cluster,
    ClusterName,
    ClusterWeightInfo,
    TargetCluster,
)

__all__ = [
    # Protocols
    "CapacityEstimatorProtocol",
    "ClusterMatcherProtocol",
    # Data types
    "Cluster",
    "ClusterName",
    "ClusterWeightInfo",
    "TargetCluster",
    # Constants
    "MAX_REPLICAS",
    "UNAUTHENTIC_REPLICAS",
]
