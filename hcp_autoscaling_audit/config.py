"""Configuration management for the autoscaling audit."""

import os
import re
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .filters import parse_bucket
from .renderers import OUTPUT_FORMATS

CLUSTER_KEY_PATTERN = re.compile(r"^[\w-]+$", re.ASCII)

LOG_FORMATS = ("text", "json")


def validate_cluster_key(key: str) -> None:
    """Reject identifiers that cannot be an OCM cluster ID, external ID or name."""
    if not CLUSTER_KEY_PATTERN.fullmatch(key):
        raise ValueError(
            f"Cluster key '{key}' isn't valid: it must contain only letters, "
            "digits, dashes and underscores"
        )


@dataclass
class AuditConfig:
    """Configuration for one audit run."""

    # Required settings
    mgmt_cluster_id: str
    ocm_token: str

    # Output
    output: str = "text"
    show_only: Optional[str] = None
    no_headers: bool = False

    # OCM connection
    ocm_url: str = "https://api.openshift.com"
    timeout: int = 30
    verify_ssl: bool = True

    # Management cluster access; unset falls back to $KUBECONFIG and the current context
    kubeconfig: Optional[str] = None
    kube_context: Optional[str] = None

    log_level: str = "INFO"
    log_format: str = "text"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.mgmt_cluster_id = (self.mgmt_cluster_id or "").strip()
        if not self.mgmt_cluster_id:
            raise ValueError("mgmt_cluster_id is required")
        validate_cluster_key(self.mgmt_cluster_id)

        if self.output not in OUTPUT_FORMATS:
            raise ValueError(
                f"invalid output format '{self.output}'. Valid options: {', '.join(OUTPUT_FORMATS)}"
            )

        # Normalize empty string to None; raises on unknown buckets
        if parse_bucket(self.show_only) is None:
            self.show_only = None

        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"invalid log format '{self.log_format}'. Valid options: {', '.join(LOG_FORMATS)}"
            )

        if not self.ocm_token:
            raise ValueError("ocm_token is required")

        if self.kubeconfig:
            self.kubeconfig = os.path.expanduser(self.kubeconfig)
        else:
            self.kubeconfig = None
        if self.kube_context == "":
            self.kube_context = None

    @classmethod
    def from_env(cls, **overrides) -> "AuditConfig":
        """Create configuration from environment variables with optional overrides."""
        load_dotenv()

        config_dict = {
            "mgmt_cluster_id": os.getenv("MGMT_CLUSTER_ID", ""),
            "ocm_token": os.getenv("OCM_TOKEN", ""),
            "output": os.getenv("OUTPUT_FORMAT", "text"),
            "show_only": os.getenv("SHOW_ONLY") or None,
            "no_headers": os.getenv("NO_HEADERS", "false").lower() == "true",
            "ocm_url": os.getenv("OCM_URL", "https://api.openshift.com"),
            "timeout": int(os.getenv("OCM_TIMEOUT", "30")),
            "verify_ssl": os.getenv("VERIFY_SSL", "true").lower() == "true",
            "kube_context": os.getenv("KUBE_CONTEXT") or None,
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "log_format": os.getenv("LOG_FORMAT", "text"),
        }

        # Apply overrides (filter out None values from CLI)
        for key, value in overrides.items():
            if value is not None:
                config_dict[key] = value

        return cls(**config_dict)
