"""
JSON Schema for the structured audit report.

The JSON and YAML renderers both emit this structure; field names are a stable
contract for downstream tooling.
"""

from __future__ import annotations

from typing import Any

from jsonschema import Draft7Validator

REPORT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Control Plane Autoscaling Audit",
    "description": "Autoscaling migration readiness of hosted clusters on one management cluster",
    "type": "object",
    "required": ["timestamp", "management_cluster", "total_clusters", "clusters"],
    "additionalProperties": False,
    "properties": {
        "timestamp": {
            "type": "string",
            "format": "date-time",
            "description": "ISO8601 timestamp when the audit started",
        },
        "management_cluster": {
            "type": "string",
            "description": "Display name of the audited management cluster",
        },
        "total_clusters": {
            "type": "integer",
            "minimum": 0,
            "description": "Number of entries in clusters",
        },
        "clusters": {
            "type": "array",
            "items": {
                "type": "object",
                "required": [
                    "cluster_id",
                    "cluster_name",
                    "namespace",
                    "autoscaling_enabled",
                    "has_override",
                    "current_size",
                    "recommended_size",
                ],
                "additionalProperties": False,
                "properties": {
                    "cluster_id": {"type": "string"},
                    "cluster_name": {"type": "string"},
                    "namespace": {
                        "type": "string",
                        "pattern": "^ocm-(production|staging)-[a-zA-Z0-9]+$",
                    },
                    "autoscaling_enabled": {"type": "boolean"},
                    "has_override": {"type": "boolean"},
                    "current_size": {"type": "string", "minLength": 1},
                    "recommended_size": {"type": "string", "minLength": 1},
                },
            },
        },
    },
}


def validate_report(report: dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate a structured report against REPORT_SCHEMA.

    Also checks that total_clusters matches the number of clusters, which the
    schema alone cannot express.

    Args:
        report: Output of AuditReport.to_dict()

    Returns:
        Tuple of (is_valid, error_messages)
    """
    validator = Draft7Validator(REPORT_SCHEMA)

    error_messages = []
    for error in sorted(validator.iter_errors(report), key=lambda e: [str(p) for p in e.absolute_path]):
        path = ".".join(str(p) for p in error.absolute_path) if error.absolute_path else "root"
        error_messages.append(f"{path}: {error.message}")

    clusters = report.get("clusters")
    total = report.get("total_clusters")
    if isinstance(clusters, list) and isinstance(total, int) and total != len(clusters):
        error_messages.append(
            f"total_clusters: {total} does not match {len(clusters)} clusters"
        )

    return not error_messages, error_messages


def get_schema() -> dict[str, Any]:
    """Return the report JSON schema."""
    return REPORT_SCHEMA
