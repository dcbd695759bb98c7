"""
Capacity estimator protocol definition.

The CapacityEstimatorProtocol defines the interface for any component that
can tell how many more replicas of a workload each member cluster can
accept. Implementations range from a static table to a live query of the
member clusters' allocatable resources.
"""

from typing import Protocol, runtime_checkable

from placement_protocols.types import Cluster, TargetCluster


@runtime_checkable
class CapacityEstimatorProtocol(Protocol):
    """
    Protocol for per-cluster capacity estimators.

    Several estimators may be consulted for the same workload. The caller
    keeps the most conservative (smallest) answer per cluster, so an
    estimator only has to be right about the clusters it understands.

    Example answer for three clusters:
        [
            TargetCluster(name="member1", replicas=18),
            TargetCluster(name="member2", replicas=12),
            TargetCluster(name="member3", replicas=UNAUTHENTIC_REPLICAS),
        ]
    """

    def max_available_replicas(
        self, clusters: list[Cluster], replicas: int
    ) -> list[TargetCluster]:
        """
        Estimate remaining capacity for each cluster.

        Args:
            clusters: Candidate clusters to estimate.
            replicas: Desired total replica count of the workload.

        Returns:
            One TargetCluster per input cluster whose replicas field is the
            number of additional replicas the cluster can accept, or
            UNAUTHENTIC_REPLICAS when the estimator cannot judge it.
        """
        ...
