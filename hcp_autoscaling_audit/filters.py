"""
Filter Engine - readiness buckets for classified tenants.

Each bucket has its own predicate. Predicates are evaluated independently, so a
record can belong to several buckets; a single invocation applies at most one.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from .models import NOT_AVAILABLE, AuditReport, TenantRecord


class ReadinessBucket(str, Enum):
    """Named readiness buckets accepted by --show-only."""

    NEEDS_REMOVAL = "needs-removal"
    READY_FOR_MIGRATION = "ready-for-migration"
    SAFE_TO_REMOVE_OVERRIDE = "safe-to-remove-override"


VALID_BUCKETS = tuple(b.value for b in ReadinessBucket)


def needs_removal(record: TenantRecord) -> bool:
    return record.has_override_annotation


def ready_for_migration(record: TenantRecord) -> bool:
    return not record.autoscaling_enabled


def safe_to_remove_override(record: TenantRecord) -> bool:
    """
    True when autoscaling already runs and the pinned size matches what it
    would recommend anyway.

    An empty recommendation and the "N/A" sentinel are both treated as
    "no recommendation".
    """
    return (
        record.autoscaling_enabled
        and record.has_override_annotation
        and record.recommended_size != ""
        and record.recommended_size != NOT_AVAILABLE
        and record.current_size == record.recommended_size
    )


BUCKET_PREDICATES: dict[ReadinessBucket, Callable[[TenantRecord], bool]] = {
    ReadinessBucket.NEEDS_REMOVAL: needs_removal,
    ReadinessBucket.READY_FOR_MIGRATION: ready_for_migration,
    ReadinessBucket.SAFE_TO_REMOVE_OVERRIDE: safe_to_remove_override,
}


def parse_bucket(value: str | None) -> ReadinessBucket | None:
    """
    Parse a --show-only value.

    Returns None when no filter was requested.

    Raises:
        ValueError: If the value names an unknown bucket
    """
    if not value:
        return None
    try:
        return ReadinessBucket(value)
    except ValueError:
        raise ValueError(
            f"invalid show-only filter '{value}'. Valid options: {', '.join(VALID_BUCKETS)}"
        ) from None


def apply_filter(report: AuditReport, bucket: ReadinessBucket | str) -> AuditReport:
    """
    Return a new report holding only the records in the given bucket.

    Timestamp and management cluster are carried over, record order is kept
    and total_clusters follows the filtered collection.
    """
    predicate = BUCKET_PREDICATES[ReadinessBucket(bucket)]
    return AuditReport(
        timestamp=report.timestamp,
        management_cluster=report.management_cluster,
        clusters=tuple(c for c in report.clusters if predicate(c)),
    )
