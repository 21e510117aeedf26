"""Exception hierarchy for the audit engine."""

from __future__ import annotations

from typing import Any


class AuditError(Exception):
    """Base exception for fatal and per-tenant audit errors."""


class ClusterUnreachableError(AuditError):
    """Raised when the namespace listing keeps failing after all attempts."""
    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts


class NotManagementClusterError(AuditError):
    """Raised when the target cluster does not host any tenant control planes."""
    def __init__(self, cluster_id: str):
        super().__init__(f"cluster {cluster_id} is not a management cluster")
        self.cluster_id = cluster_id


class TenantResolutionError(AuditError):
    """Raised when a namespace does not hold exactly one HostedCluster."""
    def __init__(self, namespace: str, count: int):
        if count == 0:
            message = "no HostedCluster found"
        else:
            message = f"found {count} HostedClusters, expected 1"
        super().__init__(message)
        self.namespace = namespace
        self.count = count


class KubeClientError(AuditError):
    """Raised when a Kubernetes API call fails."""
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class OcmClientError(AuditError):
    """Base exception for OCM API errors."""
    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class ClusterNotFoundError(OcmClientError):
    """Raised when a cluster key does not resolve to exactly one cluster."""
    def __init__(self, cluster_key: str, count: int):
        if count == 0:
            message = f"there is no cluster with identifier or name '{cluster_key}'"
        else:
            message = f"there are {count} clusters with identifier or name '{cluster_key}'"
        super().__init__(message)
        self.cluster_key = cluster_key
        self.count = count
