#!/usr/bin/env python3
"""
CLI entry point for the control-plane autoscaling audit.

Usage:
    python -m hcp_autoscaling_audit --mgmt-cluster-id <cluster-id>

Or with environment variables in .env file:
    python -m hcp_autoscaling_audit
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .config import AuditConfig
from .errors import AuditError
from .filters import VALID_BUCKETS
from .logging_config import setup_logging
from .orchestrator import run_audit
from .renderers import OUTPUT_FORMATS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hcp-cp-autoscaling-status",
        description="Get control plane autoscaling status for hosted clusters on a management cluster",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Get autoscaling status for all hosted clusters on a management cluster
  hcp-cp-autoscaling-status --mgmt-cluster-id <cluster-id>

  # Get status with CSV output
  hcp-cp-autoscaling-status --mgmt-cluster-id <cluster-id> --output csv > status.csv

  # Show only clusters ready for migration
  hcp-cp-autoscaling-status --mgmt-cluster-id <cluster-id> --show-only ready-for-migration

  # Show only clusters that need annotation removal
  hcp-cp-autoscaling-status --mgmt-cluster-id <cluster-id> --show-only needs-removal

  # Show only clusters safe to remove override
  hcp-cp-autoscaling-status --mgmt-cluster-id <cluster-id> --show-only safe-to-remove-override

Environment Variables (can be set in .env):
  MGMT_CLUSTER_ID     Management cluster ID or name
  OCM_TOKEN           OCM access token (e.g. output of `ocm token`)
  OCM_URL             OCM API URL or production/staging/integration
  OUTPUT_FORMAT       text, json, yaml or csv
  SHOW_ONLY           Readiness bucket filter
  KUBE_CONTEXT        Kubeconfig context of the management cluster
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--mgmt-cluster-id",
        metavar="ID",
        help="Management cluster ID or name (required)",
    )
    parser.add_argument(
        "--output",
        metavar="FORMAT",
        help=f"Output format: {', '.join(OUTPUT_FORMATS)} (default: text)",
    )
    parser.add_argument(
        "--show-only",
        metavar="BUCKET",
        help=f"Filter output: {', '.join(VALID_BUCKETS)}",
    )
    parser.add_argument(
        "--no-headers",
        action="store_true",
        default=None,
        help="Skip table headers in output",
    )

    # OCM connection
    parser.add_argument(
        "--ocm-url",
        metavar="URL",
        help="OCM API URL or environment (production, staging, integration)",
    )
    parser.add_argument(
        "--ocm-token",
        metavar="TOKEN",
        help="OCM access token",
    )

    # Management cluster access
    parser.add_argument(
        "--kubeconfig",
        metavar="PATH",
        help="Kubeconfig file for the management cluster",
    )
    parser.add_argument(
        "--context",
        metavar="NAME",
        help="Kubeconfig context for the management cluster",
    )

    # Logging
    parser.add_argument(
        "--log-format",
        metavar="FORMAT",
        help="Log format: text or json (default: text)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all output except errors",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.quiet:
        log_level = logging.ERROR
    elif args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    setup_logging(level=log_level, json_format=args.log_format == "json")
    logger = logging.getLogger("hcp_autoscaling_audit")

    try:
        config = AuditConfig.from_env(
            mgmt_cluster_id=args.mgmt_cluster_id,
            output=args.output,
            show_only=args.show_only,
            no_headers=args.no_headers,
            ocm_url=args.ocm_url,
            ocm_token=args.ocm_token,
            kubeconfig=args.kubeconfig,
            kube_context=args.context,
            log_format=args.log_format,
        )
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    # LOG_FORMAT from the environment only becomes known after loading config
    if args.log_format is None and config.log_format == "json":
        setup_logging(level=log_level, json_format=True)

    try:
        run_audit(config, sys.stdout)
        return 0

    except AuditError as e:
        logger.error(f"Audit failed: {e}")
        return 1

    except KeyboardInterrupt:
        logger.warning("Audit interrupted by user")
        return 130

    except Exception as e:
        logger.exception(f"Audit failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
