"""
Result Renderer - serialize an AuditReport as text, JSON, YAML or CSV.

All four formats carry the same fields. Only the text table sorts its rows,
and it sorts a copy so the report itself is never reordered.
"""

from __future__ import annotations

import csv
import json
from typing import Callable, Sequence, TextIO

import yaml

from .models import AuditReport, TenantRecord

OUTPUT_FORMATS = ("text", "json", "yaml", "csv")

TABLE_HEADERS = [
    "CLUSTER ID",
    "CLUSTER NAME",
    "NAMESPACE",
    "AUTOSCALING",
    "HAS OVERRIDE",
    "CURRENT SIZE",
    "RECOMMENDED SIZE",
]

CSV_HEADERS = [
    "cluster_id",
    "cluster_name",
    "namespace",
    "autoscaling_enabled",
    "has_override",
    "current_size",
    "recommended_size",
]

GLYPH_TRUE = "✅"
GLYPH_FALSE = "❌"

TABLE_MIN_WIDTH = 20
TABLE_PADDING = 3


def _glyph(value: bool) -> str:
    return GLYPH_TRUE if value else GLYPH_FALSE


def _row(record: TenantRecord, format_bool: Callable[[bool], str]) -> list[str]:
    return [
        record.cluster_id,
        record.cluster_name,
        record.namespace,
        format_bool(record.autoscaling_enabled),
        format_bool(record.has_override_annotation),
        record.current_size,
        record.recommended_size,
    ]


def format_table(rows: Sequence[Sequence[str]]) -> str:
    """
    Align rows into columns.

    Every column except the last is padded to max(min width, widest cell +
    padding); the last column is left as is.
    """
    if not rows:
        return ""

    num_columns = max(len(r) for r in rows)
    widths = [0] * num_columns
    for row in rows:
        for i, cell in enumerate(row[:-1]):
            widths[i] = max(widths[i], len(cell) + TABLE_PADDING, TABLE_MIN_WIDTH)

    lines = []
    for row in rows:
        cells = [cell.ljust(widths[i]) for i, cell in enumerate(row[:-1])]
        cells.append(row[-1])
        lines.append("".join(cells))
    return "\n".join(lines) + "\n"


def render_table(report: AuditReport, stream: TextIO, no_headers: bool = False) -> None:
    """Write the human-readable table, sorted by cluster name."""
    stream.write(f"\n=== Management Cluster: {report.management_cluster} ===\n")
    stream.write(f"Timestamp: {report.timestamp.isoformat(timespec='seconds')}\n")
    stream.write(f"Total Hosted Clusters: {report.total_clusters}\n\n")

    if not report.clusters:
        stream.write("No hosted clusters found\n")
        return

    # sorted() is stable, so equal names keep collection order
    ordered = sorted(report.clusters, key=lambda c: c.cluster_name)

    rows: list[list[str]] = []
    if not no_headers:
        rows.append(list(TABLE_HEADERS))
    rows.extend(_row(c, _glyph) for c in ordered)

    stream.write(format_table(rows))
    stream.write("\n")


def render_json(report: AuditReport, stream: TextIO, no_headers: bool = False) -> None:
    stream.write(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    stream.write("\n")


def render_yaml(report: AuditReport, stream: TextIO, no_headers: bool = False) -> None:
    stream.write(yaml.safe_dump(report.to_dict(), sort_keys=False, allow_unicode=True))


def render_csv(report: AuditReport, stream: TextIO, no_headers: bool = False) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    if not no_headers:
        writer.writerow(CSV_HEADERS)
    for record in report.clusters:
        writer.writerow(_row(record, lambda v: "true" if v else "false"))


RENDERERS: dict[str, Callable[[AuditReport, TextIO, bool], None]] = {
    "text": render_table,
    "json": render_json,
    "yaml": render_yaml,
    "csv": render_csv,
}


def render(
    report: AuditReport,
    output_format: str,
    stream: TextIO,
    no_headers: bool = False,
) -> None:
    """
    Render a report in the requested format.

    Args:
        report: Report to serialize
        output_format: One of text, json, yaml, csv
        stream: Destination text stream
        no_headers: Suppress the header row (text and csv only)

    Raises:
        ValueError: If the format is not supported
    """
    renderer = RENDERERS.get(output_format)
    if renderer is None:
        raise ValueError(f"unsupported output format: {output_format}")
    renderer(report, stream, no_headers)
