"""Classifier - derive a TenantRecord from a HostedCluster's labels and annotations."""

from __future__ import annotations

from .models import NOT_AVAILABLE, HostedCluster, TenantRecord

ANNOTATION_RESOURCE_BASED_AUTOSCALING = "hypershift.openshift.io/resource-based-cp-auto-scaling"
ANNOTATION_CLUSTER_SIZE_OVERRIDE = "hypershift.openshift.io/cluster-size-override"
ANNOTATION_RECOMMENDED_CLUSTER_SIZE = "hypershift.openshift.io/recommended-cluster-size"

LABEL_HOSTED_CLUSTER_SIZE = "hypershift.openshift.io/hosted-cluster-size"
LABEL_CLUSTER_ID = "api.openshift.com/id"


def _size_or_sentinel(value: str | None) -> str:
    if not value:
        return NOT_AVAILABLE
    return value


def classify(hosted_cluster: HostedCluster) -> TenantRecord:
    """
    Classify a hosted cluster for control-plane autoscaling migration.

    Autoscaling counts as enabled only when the annotation is present with the
    exact value "true". The override annotation counts whenever the key exists,
    whatever its value. Missing or empty sizes become "N/A".

    Args:
        hosted_cluster: HostedCluster found in a tenant namespace

    Returns:
        Immutable TenantRecord
    """
    labels = hosted_cluster.labels
    annotations = hosted_cluster.annotations

    autoscaling = annotations.get(ANNOTATION_RESOURCE_BASED_AUTOSCALING)

    return TenantRecord(
        cluster_id=labels.get(LABEL_CLUSTER_ID, ""),
        cluster_name=hosted_cluster.name,
        namespace=hosted_cluster.namespace,
        autoscaling_enabled=autoscaling == "true",
        has_override_annotation=ANNOTATION_CLUSTER_SIZE_OVERRIDE in annotations,
        current_size=_size_or_sentinel(labels.get(LABEL_HOSTED_CLUSTER_SIZE)),
        recommended_size=_size_or_sentinel(annotations.get(ANNOTATION_RECOMMENDED_CLUSTER_SIZE)),
    )
