"""Tenant Resolver - find the single HostedCluster owned by a tenant namespace."""

from __future__ import annotations

from .errors import TenantResolutionError
from .kube_client import ManagementClusterClient
from .models import HostedCluster


def resolve_hosted_cluster(kube: ManagementClusterClient, namespace: str) -> HostedCluster:
    """
    Return the HostedCluster in a namespace.

    Every tenant namespace must contain exactly one HostedCluster. Zero or
    several is a fleet misconfiguration and is reported, never papered over
    by picking the first match.

    Raises:
        TenantResolutionError: If the namespace holds zero or several HostedClusters
        KubeClientError: If the listing itself fails
    """
    hosted_clusters = kube.list_hosted_clusters(namespace)

    if len(hosted_clusters) != 1:
        raise TenantResolutionError(namespace, len(hosted_clusters))

    return hosted_clusters[0]
