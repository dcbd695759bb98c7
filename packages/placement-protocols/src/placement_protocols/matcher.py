"""
Cluster matcher protocol.

The ClusterMatcherProtocol defines the predicate used to decide whether a
static weight rule applies to a candidate cluster.
"""

from typing import Any, Protocol, runtime_checkable

from placement_protocols.types import Cluster


@runtime_checkable
class ClusterMatcherProtocol(Protocol):
    """
    Protocol for cluster matching predicates.

    A matcher compares a candidate cluster against a cluster affinity term
    (cluster names, exclusions, label and field selectors). The affinity
    type is owned by the division core, so it is left untyped here.

    Implementations should:
    - Be pure: the same cluster and affinity always give the same answer
    - Never raise for a cluster that simply does not match
    """

    def matches(self, cluster: Cluster, affinity: Any) -> bool:
        """
        Check whether a cluster satisfies an affinity term.

        Args:
            cluster: The candidate cluster.
            affinity: The affinity term of a weight rule.

        Returns:
            True if the rule applies to the cluster.
        """
        ...
