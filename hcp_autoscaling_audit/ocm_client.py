"""
OCM REST API client for management cluster lookups.

Resolves a cluster identifier to its record and checks whether the cluster is
registered as a management cluster. Only performs GET requests.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import requests
from requests.exceptions import RequestException

from . import __version__
from .errors import ClusterNotFoundError, OcmClientError

logger = logging.getLogger(__name__)

OCM_ENVIRONMENTS = {
    "production": "https://api.openshift.com",
    "staging": "https://api.stage.openshift.com",
    "integration": "https://api.integration.openshift.com",
}

CLUSTERS_PATH = "/api/clusters_mgmt/v1/clusters"
MANAGEMENT_CLUSTERS_PATH = "/api/osd_fleet_mgmt/v1/management_clusters"


@dataclass
class APICallStats:
    """Track API call statistics."""
    total_calls: int = 0
    successful_calls: int = 0
    retried_calls: int = 0
    failed_calls: int = 0


@dataclass(frozen=True)
class ClusterRef:
    """The parts of an OCM cluster record the audit needs."""
    id: str
    name: str
    external_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClusterRef":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            external_id=data.get("external_id", ""),
        )


def resolve_ocm_url(url_or_env: str) -> str:
    """Map an environment alias (production, staging, integration) to its API URL."""
    return OCM_ENVIRONMENTS.get(url_or_env, url_or_env).rstrip("/")


class OcmClient:
    """
    OCM API client with retry and exponential backoff.

    Retries on 429, 5xx and connection errors, honouring Retry-After.

    Usage:
        with OcmClient("https://api.openshift.com", token) as ocm:
            cluster = ocm.get_cluster("hs-mc-abc123")
            ocm.is_management_cluster(cluster.id)
    """

    DEFAULT_TIMEOUT = 30
    MAX_RETRIES = 3
    BASE_BACKOFF_SECONDS = 1.0
    MAX_BACKOFF_SECONDS = 30.0

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: int = DEFAULT_TIMEOUT,
        max_retries: int = MAX_RETRIES,
        verify_ssl: bool = True,
    ):
        """
        Args:
            base_url: OCM API URL or environment alias
            token: OCM access token (e.g. from `ocm token`)
            timeout: Request timeout in seconds
            max_retries: Maximum attempts per request
            verify_ssl: Whether to verify SSL certificates
        """
        self.base_url = resolve_ocm_url(base_url)
        self.timeout = timeout
        self.max_retries = max_retries
        self.stats = APICallStats()

        self._session = requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "User-Agent": f"hcp-autoscaling-audit/{__version__}",
        })
        self._session.verify = verify_ssl

    def _calculate_backoff(self, attempt: int, retry_after: int | None = None) -> float:
        if retry_after is not None:
            return min(float(retry_after), self.MAX_BACKOFF_SECONDS)
        return min(self.BASE_BACKOFF_SECONDS * (2 ** attempt), self.MAX_BACKOFF_SECONDS)

    @staticmethod
    def _should_retry(status_code: int) -> bool:
        return status_code == 429 or 500 <= status_code < 600

    @staticmethod
    def _get_retry_after(headers: Any) -> int | None:
        value = headers.get("Retry-After")
        if value:
            try:
                return int(value)
            except ValueError:
                pass
        return None

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a path and return the decoded JSON body.

        Raises:
            OcmClientError: On a non-success status or when retries are exhausted
        """
        url = f"{self.base_url}{path}"
        last_error: Exception | None = None

        for attempt in range(self.max_retries):
            self.stats.total_calls += 1
            is_last = attempt == self.max_retries - 1

            try:
                logger.debug(f"GET {url} params={params} (attempt {attempt + 1})")
                response = self._session.get(url, params=params, timeout=self.timeout)
            except RequestException as e:
                last_error = e
                if is_last:
                    break
                backoff = self._calculate_backoff(attempt)
                self.stats.retried_calls += 1
                logger.warning(
                    f"OCM request error: {e}, retrying in {backoff:.1f}s "
                    f"(attempt {attempt + 1}/{self.max_retries})"
                )
                time.sleep(backoff)
                continue

            if self._should_retry(response.status_code) and not is_last:
                backoff = self._calculate_backoff(attempt, self._get_retry_after(response.headers))
                self.stats.retried_calls += 1
                logger.warning(
                    f"OCM request failed with {response.status_code}, "
                    f"retrying in {backoff:.1f}s (attempt {attempt + 1}/{self.max_retries})"
                )
                time.sleep(backoff)
                continue

            if response.status_code >= 400:
                self.stats.failed_calls += 1
                raise OcmClientError(
                    f"GET {path} failed with status {response.status_code}",
                    status_code=response.status_code,
                    response=response.text,
                )

            self.stats.successful_calls += 1
            try:
                return response.json()
            except ValueError as e:
                raise OcmClientError(
                    f"GET {path} returned invalid JSON",
                    status_code=response.status_code,
                    response=response.text,
                ) from e

        self.stats.failed_calls += 1
        raise OcmClientError(f"GET {path} failed after {self.max_retries} attempts: {last_error}")

    def get_cluster(self, cluster_key: str) -> ClusterRef:
        """
        Resolve a cluster by internal ID, external ID or name.

        Raises:
            ClusterNotFoundError: If the key matches zero or several clusters
        """
        search = f"id = '{cluster_key}' or name = '{cluster_key}' or external_id = '{cluster_key}'"
        data = self.get(CLUSTERS_PATH, params={"search": search, "size": 2})
        items = data.get("items") or []

        if len(items) != 1:
            raise ClusterNotFoundError(cluster_key, len(items))

        return ClusterRef.from_dict(items[0])

    def is_management_cluster(self, cluster_id: str) -> bool:
        """Return True if the fleet manager knows the cluster as a management cluster."""
        search = f"cluster_management_reference.cluster_id = '{cluster_id}'"
        data = self.get(MANAGEMENT_CLUSTERS_PATH, params={"search": search})
        return len(data.get("items") or []) > 0

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self) -> "OcmClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
