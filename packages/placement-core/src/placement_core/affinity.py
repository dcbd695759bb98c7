"""
Cluster affinity matching.

Default implementation of ClusterMatcherProtocol used to decide which static
weight rules apply to a cluster. A cluster matches an affinity when:
1. It is not excluded
2. Its labels satisfy the label selector (if any)
3. Its provider/region/zone satisfy the field selector (if any)
4. It is listed in cluster_names (if the list is non-empty)
"""

from collections.abc import Mapping, Sequence

from placement_protocols import Cluster

from placement_core.types import (
    ClusterAffinity,
    FieldSelector,
    LabelSelector,
    LabelSelectorRequirement,
    SelectorOperator,
)

# Cluster attributes a field selector can address
FIELD_NAMES = ("provider", "region", "zone")


def _requirement_matches(requirement: LabelSelectorRequirement, values: Mapping[str, str]) -> bool:
    present = requirement.key in values
    if requirement.operator == SelectorOperator.EXISTS:
        return present
    if requirement.operator == SelectorOperator.DOES_NOT_EXIST:
        return not present
    if requirement.operator == SelectorOperator.IN:
        return present and values[requirement.key] in requirement.values
    if requirement.operator == SelectorOperator.NOT_IN:
        return not present or values[requirement.key] not in requirement.values
    return False


def _expressions_match(
    expressions: Sequence[LabelSelectorRequirement], values: Mapping[str, str]
) -> bool:
    return all(_requirement_matches(req, values) for req in expressions)


def label_selector_matches(selector: LabelSelector, labels: Mapping[str, str]) -> bool:
    """
    Check labels against a label selector.

    An empty selector matches everything.
    """
    for key, value in selector.match_labels.items():
        if labels.get(key) != value:
            return False
    return _expressions_match(selector.match_expressions, labels)


def field_selector_matches(selector: FieldSelector, cluster: Cluster) -> bool:
    """Check a cluster's provider/region/zone against a field selector."""
    # Unset fields are treated as absent so Exists/DoesNotExist behave
    fields = {name: getattr(cluster, name) for name in FIELD_NAMES if getattr(cluster, name)}
    return _expressions_match(selector.match_expressions, fields)


def cluster_matches(cluster: Cluster, affinity: ClusterAffinity) -> bool:
    """
    Check whether a cluster satisfies an affinity term.

    Args:
        cluster: Candidate cluster
        affinity: Affinity term of a weight rule

    Returns:
        True if every configured constraint of the affinity holds.
    """
    if cluster.name in affinity.exclude:
        return False

    if affinity.label_selector is not None and not label_selector_matches(
        affinity.label_selector, cluster.labels
    ):
        return False

    if affinity.field_selector is not None and not field_selector_matches(
        affinity.field_selector, cluster
    ):
        return False

    if affinity.cluster_names and cluster.name not in affinity.cluster_names:
        return False

    return True


class AffinityMatcher:
    """ClusterMatcherProtocol implementation backed by cluster_matches()."""

    def matches(self, cluster: Cluster, affinity: ClusterAffinity) -> bool:
        return cluster_matches(cluster, affinity)
