"""
Orchestrator - main audit workflow controller.

Checks that the target is a management cluster, enumerates tenant
namespaces, classifies each tenant, optionally filters, and renders.
Namespaces are audited one at a time.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, TextIO

from .classifier import classify
from .config import AuditConfig
from .enumerator import list_tenant_namespaces
from .errors import KubeClientError, NotManagementClusterError, TenantResolutionError
from .filters import apply_filter, parse_bucket
from .kube_client import ManagementClusterClient
from .models import AuditReport, TenantRecord
from .ocm_client import ClusterRef, OcmClient
from .renderers import render
from .resolver import resolve_hosted_cluster
from .schema import validate_report

logger = logging.getLogger(__name__)


@dataclass
class AuditStats:
    """Counters for one audit run."""
    namespaces_found: int = 0
    namespaces_audited: int = 0
    namespaces_skipped: int = 0
    listing_attempts: int = 0


class AuditOrchestrator:
    """
    Orchestrates one audit of a management cluster.

    Collaborators can be injected; otherwise they are built from the config.
    """

    def __init__(
        self,
        config: AuditConfig,
        ocm_client: OcmClient | None = None,
        kube_client: ManagementClusterClient | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            config: Audit configuration
            ocm_client: Client used to resolve and verify the management cluster
            kube_client: Client scoped to the management cluster
            sleep: Blocking sleep used between namespace listing attempts
        """
        self.config = config
        self.ocm_client = ocm_client
        self.kube_client = kube_client
        self.sleep = sleep
        self.bucket = parse_bucket(config.show_only)
        self.stats = AuditStats()
        self.management_cluster: ClusterRef | None = None

    def run(self) -> AuditReport:
        """
        Run the audit.

        Returns:
            The (optionally filtered) report

        Raises:
            NotManagementClusterError: If the target does not host tenants
            ClusterUnreachableError: If namespaces could not be listed
            OcmClientError: If the cluster lookup failed
            KubeClientError: If the management cluster client could not be built
        """
        started_at = datetime.now(timezone.utc)
        logger.info(f"Starting autoscaling audit for management cluster {self.config.mgmt_cluster_id}")

        self.management_cluster = self._resolve_management_cluster()
        kube = self._get_kube_client()

        namespaces = list_tenant_namespaces(
            kube,
            sleep=self.sleep,
            cluster_name=self.management_cluster.name,
            on_attempt=self._record_listing_attempt,
        )
        self.stats.namespaces_found = len(namespaces)

        records = []
        for namespace in namespaces:
            record = self._audit_namespace(kube, namespace)
            if record is not None:
                records.append(record)

        report = AuditReport(
            timestamp=started_at,
            management_cluster=self.management_cluster.name,
            clusters=records,
        )
        self._validate(report)

        logger.info(
            f"Audit complete: {self.stats.namespaces_audited} hosted clusters audited, "
            f"{self.stats.namespaces_skipped} namespaces skipped, "
            f"{self.stats.listing_attempts} listing attempts"
        )

        if self.bucket is not None:
            report = apply_filter(report, self.bucket)
            logger.info(f"Filter {self.bucket.value}: {report.total_clusters} hosted clusters match")

        return report

    def execute(self, stream: TextIO) -> AuditReport:
        """Run the audit and render the report to a stream."""
        report = self.run()
        render(report, self.config.output, stream, no_headers=self.config.no_headers)
        return report

    def _resolve_management_cluster(self) -> ClusterRef:
        """Look up the target in OCM and make sure it is a management cluster."""
        if self.ocm_client is not None:
            return self._check_management_cluster(self.ocm_client)

        with OcmClient(
            base_url=self.config.ocm_url,
            token=self.config.ocm_token,
            timeout=self.config.timeout,
            verify_ssl=self.config.verify_ssl,
        ) as ocm:
            return self._check_management_cluster(ocm)

    def _check_management_cluster(self, ocm: OcmClient) -> ClusterRef:
        cluster = ocm.get_cluster(self.config.mgmt_cluster_id)
        logger.debug(f"Resolved {self.config.mgmt_cluster_id} to {cluster.id} ({cluster.name})")

        if not ocm.is_management_cluster(cluster.id):
            raise NotManagementClusterError(cluster.id)

        return cluster

    def _get_kube_client(self) -> ManagementClusterClient:
        if self.kube_client is None:
            self.kube_client = ManagementClusterClient.from_kubeconfig(
                kubeconfig=self.config.kubeconfig,
                context=self.config.kube_context,
            )
        return self.kube_client

    def _record_listing_attempt(self, attempt: int) -> None:
        self.stats.listing_attempts = attempt

    def _audit_namespace(self, kube: ManagementClusterClient, namespace: str) -> TenantRecord | None:
        """Classify the tenant in one namespace; None if the namespace was skipped."""
        try:
            hosted_cluster = resolve_hosted_cluster(kube, namespace)
        except (TenantResolutionError, KubeClientError) as e:
            self.stats.namespaces_skipped += 1
            logger.warning(f"Failed to audit namespace {namespace}: {e}", extra={"namespace": namespace})
            return None

        record = classify(hosted_cluster)
        self.stats.namespaces_audited += 1
        logger.debug(
            f"{namespace}: autoscaling={record.autoscaling_enabled} "
            f"override={record.has_override_annotation} "
            f"size={record.current_size} recommended={record.recommended_size}",
            extra={"namespace": namespace, "cluster_id": record.cluster_id},
        )
        return record

    def _validate(self, report: AuditReport) -> None:
        is_valid, errors = validate_report(report.to_dict())
        if not is_valid:
            logger.warning(f"Report validation errors: {errors}")
        else:
            logger.debug("Report validated successfully")


def run_audit(config: AuditConfig, stream: TextIO | None = None) -> AuditReport:
    """
    Run an audit and write the rendered report.

    Args:
        config: Audit configuration
        stream: Output stream (defaults to stdout)

    Returns:
        The rendered report
    """
    orchestrator = AuditOrchestrator(config)
    return orchestrator.execute(stream or sys.stdout)
