"""
Value objects shared by the audit pipeline.

HostedCluster is a typed view over the raw API object; TenantRecord and
AuditReport are the classified results handed to filters and renderers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping

# Substituted for size fields that are missing or empty.
NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class HostedCluster:
    """
    A hypershift.openshift.io/v1beta1 HostedCluster, reduced to its metadata.

    Labels and annotations are copied into read-only mappings. Instances hash
    by name and namespace.
    """
    name: str
    namespace: str
    labels: Mapping[str, str] = field(default_factory=dict)
    annotations: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))
        object.__setattr__(self, "annotations", MappingProxyType(dict(self.annotations)))

    def __hash__(self):
        return hash((self.name, self.namespace))

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> "HostedCluster":
        """Build from a custom object as returned by the Kubernetes API."""
        metadata = obj.get("metadata") or {}
        return cls(
            name=metadata.get("name") or "",
            namespace=metadata.get("namespace") or "",
            labels=dict(metadata.get("labels") or {}),
            annotations=dict(metadata.get("annotations") or {}),
        )


@dataclass(frozen=True)
class TenantRecord:
    """Migration-readiness facts for one hosted cluster."""
    cluster_id: str
    cluster_name: str
    namespace: str
    autoscaling_enabled: bool
    has_override_annotation: bool
    current_size: str
    recommended_size: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "cluster_id": self.cluster_id,
            "cluster_name": self.cluster_name,
            "namespace": self.namespace,
            "autoscaling_enabled": self.autoscaling_enabled,
            "has_override": self.has_override_annotation,
            "current_size": self.current_size,
            "recommended_size": self.recommended_size,
        }


@dataclass(frozen=True)
class AuditReport:
    """
    Result of auditing one management cluster.

    total_clusters is derived from clusters, so the two can never disagree,
    including after filtering.
    """
    timestamp: datetime
    management_cluster: str
    clusters: tuple[TenantRecord, ...] = ()

    def __post_init__(self):
        # Accept any iterable but always store an immutable tuple
        object.__setattr__(self, "clusters", tuple(self.clusters))

    @property
    def total_clusters(self) -> int:
        return len(self.clusters)

    def to_dict(self) -> dict[str, Any]:
        """Structured form used by the JSON and YAML renderers."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "management_cluster": self.management_cluster,
            "total_clusters": self.total_clusters,
            "clusters": [c.to_dict() for c in self.clusters],
        }
