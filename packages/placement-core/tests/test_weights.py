"""Tests for weight list and target cluster list helpers."""

from placement_protocols import ClusterWeightInfo, TargetCluster
from placement_core.weights import (
    by_descending,
    duplicate_names,
    merge_target_clusters,
    remove_zero_replicas,
    sort_by_replicas,
    sort_by_weight,
    sum_replicas,
    weight_sum,
)


class TestWeightSum:
    """Tests for weight_sum()."""

    def test_sums_weights(self):
        weights = [
            ClusterWeightInfo(cluster_name="A", weight=1),
            ClusterWeightInfo(cluster_name="B", weight=2),
            ClusterWeightInfo(cluster_name="C", weight=3),
        ]
        assert weight_sum(weights) == 6

    def test_empty_list_is_zero(self):
        assert weight_sum([]) == 0

    def test_all_zero_weights_is_zero(self):
        assert weight_sum([ClusterWeightInfo(cluster_name="A", weight=0)]) == 0


class TestOrdering:
    """Tests for the descending stable sorts."""

    def test_sort_by_weight_descending(self):
        weights = [
            ClusterWeightInfo(cluster_name="A", weight=1),
            ClusterWeightInfo(cluster_name="B", weight=3),
            ClusterWeightInfo(cluster_name="C", weight=2),
        ]

        assert [w.cluster_name for w in sort_by_weight(weights)] == ["B", "C", "A"]

    def test_sort_by_weight_is_stable(self):
        """Equal weights keep their input order."""
        weights = [
            ClusterWeightInfo(cluster_name="x", weight=2),
            ClusterWeightInfo(cluster_name="y", weight=5),
            ClusterWeightInfo(cluster_name="z", weight=2),
            ClusterWeightInfo(cluster_name="w", weight=2),
        ]

        assert [w.cluster_name for w in sort_by_weight(weights)] == ["y", "x", "z", "w"]

    def test_sort_by_replicas_is_stable(self):
        clusters = [
            TargetCluster(name="member1", replicas=6),
            TargetCluster(name="member2", replicas=12),
            TargetCluster(name="member3", replicas=6),
        ]

        ordered = sort_by_replicas(clusters)

        assert [c.name for c in ordered] == ["member2", "member1", "member3"]

    def test_sort_returns_new_list(self):
        clusters = [TargetCluster(name="a", replicas=1), TargetCluster(name="b", replicas=2)]

        sort_by_replicas(clusters)

        assert [c.name for c in clusters] == ["a", "b"]

    def test_by_descending_key(self):
        key = by_descending("replicas")
        assert key(TargetCluster(name="a", replicas=5)) < key(TargetCluster(name="b", replicas=1))


class TestMergeTargetClusters:
    """Tests for merge_target_clusters()."""

    def test_sums_common_clusters(self):
        old = [TargetCluster(name="A", replicas=1), TargetCluster(name="B", replicas=2)]
        new = [TargetCluster(name="B", replicas=3), TargetCluster(name="A", replicas=4)]

        assert merge_target_clusters(old, new) == [
            TargetCluster(name="A", replicas=5),
            TargetCluster(name="B", replicas=5),
        ]

    def test_cluster_missing_on_one_side_counts_as_zero(self):
        old = [TargetCluster(name="A", replicas=1)]
        new = [TargetCluster(name="B", replicas=3)]

        assert merge_target_clusters(old, new) == [
            TargetCluster(name="A", replicas=1),
            TargetCluster(name="B", replicas=3),
        ]

    def test_empty_sides(self):
        clusters = [TargetCluster(name="A", replicas=1)]

        assert merge_target_clusters([], clusters) == clusters
        assert merge_target_clusters(clusters, []) == clusters
        assert merge_target_clusters([], []) == []

    def test_inputs_not_modified(self):
        old = [TargetCluster(name="A", replicas=1)]
        new = [TargetCluster(name="A", replicas=2)]

        merged = merge_target_clusters(old, new)

        assert old[0].replicas == 1
        assert merged[0] is not old[0]


class TestReplicaHelpers:
    def test_sum_replicas(self):
        clusters = [TargetCluster(name="A", replicas=2), TargetCluster(name="B", replicas=5)]
        assert sum_replicas(clusters) == 7

    def test_remove_zero_replicas(self):
        clusters = [TargetCluster(name="A", replicas=0), TargetCluster(name="B", replicas=5)]
        assert remove_zero_replicas(clusters) == [TargetCluster(name="B", replicas=5)]

    def test_duplicate_names(self):
        assert duplicate_names(["A", "B", "A", "C", "B", "A"]) == ["A", "B"]

    def test_duplicate_names_none_repeated(self):
        assert duplicate_names(["A", "B"]) == []
