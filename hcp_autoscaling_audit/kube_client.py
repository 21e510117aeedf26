"""
Kubernetes client for the management cluster.

Only performs list operations (read-only). Credentials come from a kubeconfig
context; logging in to the management cluster happens outside this tool.
"""

from __future__ import annotations

import logging
from typing import Any

from kubernetes import client, config
from kubernetes.client import ApiException
from urllib3.exceptions import HTTPError

from .errors import KubeClientError
from .models import HostedCluster

logger = logging.getLogger(__name__)

HOSTED_CLUSTER_GROUP = "hypershift.openshift.io"
HOSTED_CLUSTER_VERSION = "v1beta1"
HOSTED_CLUSTER_PLURAL = "hostedclusters"


class ManagementClusterClient:
    """
    Read-only access to namespaces and HostedClusters.

    API failures are raised as KubeClientError so callers can decide whether
    to retry, skip or abort.

    Usage:
        kube = ManagementClusterClient.from_kubeconfig(context="hs-mc-01")
        for name in kube.list_namespace_names():
            print(name)
    """

    def __init__(self, core: Any, custom_objects: Any):
        """
        Args:
            core: CoreV1Api instance
            custom_objects: CustomObjectsApi instance
        """
        self.core = core
        self.custom_objects = custom_objects

    @classmethod
    def from_kubeconfig(
        cls,
        kubeconfig: str | None = None,
        context: str | None = None,
    ) -> "ManagementClusterClient":
        """Load kubeconfig/context and create the API clients."""
        kwargs: dict[str, Any] = {}
        if kubeconfig:
            kwargs["config_file"] = kubeconfig
        if context:
            kwargs["context"] = context

        try:
            api_client = config.new_client_from_config(**kwargs)
        except config.ConfigException as e:
            raise KubeClientError(f"failed to load kubeconfig: {e}") from e

        logger.debug(f"Loaded kubeconfig (file={kubeconfig or 'default'}, context={context or 'current'})")
        return cls(
            core=client.CoreV1Api(api_client),
            custom_objects=client.CustomObjectsApi(api_client),
        )

    def list_namespace_names(self) -> list[str]:
        """List the names of all namespaces on the cluster."""
        try:
            items = self.core.list_namespace().items
        except ApiException as e:
            raise KubeClientError(f"failed to list namespaces: {e.reason}", status_code=e.status) from e
        except HTTPError as e:
            raise KubeClientError(f"failed to list namespaces: {e}") from e

        return [ns.metadata.name for ns in items]

    def list_hosted_clusters(self, namespace: str) -> list[HostedCluster]:
        """List HostedClusters in a single namespace."""
        try:
            response = self.custom_objects.list_namespaced_custom_object(
                group=HOSTED_CLUSTER_GROUP,
                version=HOSTED_CLUSTER_VERSION,
                namespace=namespace,
                plural=HOSTED_CLUSTER_PLURAL,
            )
        except ApiException as e:
            raise KubeClientError(
                f"failed to list HostedClusters in {namespace}: {e.reason}",
                status_code=e.status,
            ) from e
        except HTTPError as e:
            raise KubeClientError(f"failed to list HostedClusters in {namespace}: {e}") from e

        clusters = []
        for item in response.get("items") or []:
            hc = HostedCluster.from_dict(item)
            if not hc.namespace:
                hc = HostedCluster(hc.name, namespace, hc.labels, hc.annotations)
            clusters.append(hc)
        return clusters
