"""
Tests for resolving the HostedCluster of a tenant namespace.
"""

import pytest

from hcp_autoscaling_audit.errors import KubeClientError, TenantResolutionError
from hcp_autoscaling_audit.resolver import resolve_hosted_cluster

from conftest import FakeKubeClient, make_hosted_cluster

NAMESPACE = "ocm-production-001"


def test_exactly_one():
    """Test that a single HostedCluster is returned."""
    hc = make_hosted_cluster("hc-001", NAMESPACE)
    kube = FakeKubeClient(hosted_clusters={NAMESPACE: [hc]})

    assert resolve_hosted_cluster(kube, NAMESPACE) is hc
    assert kube.list_hosted_cluster_calls == [NAMESPACE]


def test_none_found():
    """Test that an empty namespace is an error."""
    kube = FakeKubeClient(hosted_clusters={NAMESPACE: []})

    with pytest.raises(TenantResolutionError) as exc_info:
        resolve_hosted_cluster(kube, NAMESPACE)

    assert str(exc_info.value) == "no HostedCluster found"
    assert exc_info.value.namespace == NAMESPACE
    assert exc_info.value.count == 0


def test_several_found():
    """Test that several HostedClusters are an error, not a first match."""
    kube = FakeKubeClient(hosted_clusters={
        NAMESPACE: [make_hosted_cluster("hc-a", NAMESPACE), make_hosted_cluster("hc-b", NAMESPACE)],
    })

    with pytest.raises(TenantResolutionError, match="found 2 HostedClusters, expected 1"):
        resolve_hosted_cluster(kube, NAMESPACE)


def test_listing_error_propagates():
    """Test that API errors reach the caller unchanged."""
    kube = FakeKubeClient(hosted_clusters={NAMESPACE: KubeClientError("forbidden", status_code=403)})

    with pytest.raises(KubeClientError, match="forbidden"):
        resolve_hosted_cluster(kube, NAMESPACE)
