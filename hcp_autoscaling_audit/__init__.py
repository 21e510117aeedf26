"""
Control-plane autoscaling audit for HyperShift management clusters.

Inspects every hosted cluster on one management cluster and reports whether it
is ready to move to resource-based control-plane autoscaling.
This is a read-only tool. No cluster state is modified.
"""

__version__ = "0.1.0"

from .classifier import classify
from .filters import ReadinessBucket, apply_filter
from .models import AuditReport, HostedCluster, TenantRecord
from .orchestrator import AuditOrchestrator, run_audit
from .renderers import render

__all__ = [
    "AuditOrchestrator",
    "AuditReport",
    "HostedCluster",
    "ReadinessBucket",
    "TenantRecord",
    "apply_filter",
    "classify",
    "render",
    "run_audit",
    "__version__",
]
