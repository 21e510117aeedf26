"""Test configuration and fixtures"""

from datetime import datetime, timezone

import pytest

from hcp_autoscaling_audit.config import AuditConfig
from hcp_autoscaling_audit.errors import KubeClientError
from hcp_autoscaling_audit.models import AuditReport, HostedCluster, TenantRecord
from hcp_autoscaling_audit.ocm_client import ClusterRef


def make_record(
    cluster_id="cluster-001",
    cluster_name="test-cluster-001",
    namespace="ocm-production-001",
    autoscaling_enabled=False,
    has_override_annotation=False,
    current_size="medium",
    recommended_size="medium",
):
    """Create a TenantRecord with sensible defaults."""
    return TenantRecord(
        cluster_id=cluster_id,
        cluster_name=cluster_name,
        namespace=namespace,
        autoscaling_enabled=autoscaling_enabled,
        has_override_annotation=has_override_annotation,
        current_size=current_size,
        recommended_size=recommended_size,
    )


def make_hosted_cluster(name, namespace, labels=None, annotations=None):
    """Create a HostedCluster value object."""
    return HostedCluster(
        name=name,
        namespace=namespace,
        labels=labels or {},
        annotations=annotations or {},
    )


class FakeKubeClient:
    """
    In-memory stand-in for ManagementClusterClient.

    namespace_failures: number of list_namespace_names calls that fail before
    the listing succeeds.
    hosted_clusters: namespace -> list of HostedCluster, or an exception to raise.
    """

    def __init__(self, namespaces=None, hosted_clusters=None, namespace_failures=0):
        self.namespaces = list(namespaces or [])
        self.hosted_clusters = dict(hosted_clusters or {})
        self.namespace_failures = namespace_failures
        self.list_namespace_calls = 0
        self.list_hosted_cluster_calls = []

    def list_namespace_names(self):
        self.list_namespace_calls += 1
        if self.list_namespace_calls <= self.namespace_failures:
            raise KubeClientError("connection refused")
        return list(self.namespaces)

    def list_hosted_clusters(self, namespace):
        self.list_hosted_cluster_calls.append(namespace)
        result = self.hosted_clusters.get(namespace, [])
        if isinstance(result, Exception):
            raise result
        return list(result)


class FakeOcmClient:
    """In-memory stand-in for OcmClient."""

    def __init__(self, cluster=None, is_management_cluster=True):
        self.cluster = cluster or ClusterRef(id="2abc", name="hs-mc-test", external_id="ext-2abc")
        self._is_management_cluster = is_management_cluster
        self.lookups = []

    def get_cluster(self, cluster_key):
        self.lookups.append(cluster_key)
        return self.cluster

    def is_management_cluster(self, cluster_id):
        return self._is_management_cluster


@pytest.fixture
def timestamp():
    return datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_records():
    """Six records covering every bucket combination."""
    return [
        make_record("cluster-001", "test-cluster-001", "ocm-production-001",
                    autoscaling_enabled=False, has_override_annotation=True,
                    current_size="medium", recommended_size="medium"),
        make_record("cluster-002", "test-cluster-002", "ocm-production-002",
                    autoscaling_enabled=True, has_override_annotation=True,
                    current_size="large", recommended_size="large"),
        make_record("cluster-003", "test-cluster-003", "ocm-production-003",
                    autoscaling_enabled=True, has_override_annotation=False,
                    current_size="small", recommended_size="small"),
        make_record("cluster-004", "test-cluster-004", "ocm-production-004",
                    autoscaling_enabled=False, has_override_annotation=False,
                    current_size="N/A", recommended_size="N/A"),
        make_record("cluster-005", "test-cluster-005", "ocm-production-005",
                    autoscaling_enabled=True, has_override_annotation=True,
                    current_size="medium", recommended_size="large"),
        make_record("cluster-006", "test-cluster-006", "ocm-production-006",
                    autoscaling_enabled=True, has_override_annotation=True,
                    current_size="large", recommended_size="N/A"),
    ]


@pytest.fixture
def sample_report(timestamp, sample_records):
    return AuditReport(
        timestamp=timestamp,
        management_cluster="hs-mc-test",
        clusters=sample_records,
    )


@pytest.fixture
def audit_config():
    return AuditConfig(mgmt_cluster_id="hs-mc-test", ocm_token="test-token")
