"""Namespace Enumerator - find tenant namespaces on the management cluster."""

from __future__ import annotations

import logging
import re
import time
from typing import Callable, Iterable

from .errors import ClusterUnreachableError, KubeClientError
from .kube_client import ManagementClusterClient

logger = logging.getLogger(__name__)

TENANT_NAMESPACE_PATTERN = re.compile(r"^ocm-(production|staging)-[a-zA-Z0-9]+$")

MAX_LIST_ATTEMPTS = 3
LIST_RETRY_DELAY_SECONDS = 2.0


def filter_tenant_namespaces(names: Iterable[str]) -> list[str]:
    """Keep namespace names that follow the tenant naming convention, in order."""
    return [name for name in names if TENANT_NAMESPACE_PATTERN.fullmatch(name)]


def list_tenant_namespaces(
    kube: ManagementClusterClient,
    max_attempts: int = MAX_LIST_ATTEMPTS,
    retry_delay: float = LIST_RETRY_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
    cluster_name: str | None = None,
    on_attempt: Callable[[int], None] | None = None,
) -> list[str]:
    """
    List tenant namespaces, retrying the listing with a fixed delay.

    The full namespace list is fetched and filtered locally. Only the listing
    is retried; a successful attempt returns immediately.

    Args:
        kube: Management cluster client
        max_attempts: Total listing attempts before giving up
        retry_delay: Seconds to wait between attempts
        sleep: Blocking sleep function
        cluster_name: Management cluster name used in the failure message
        on_attempt: Called with the attempt number before each listing

    Returns:
        Matching namespace names

    Raises:
        ClusterUnreachableError: If every attempt failed
    """
    target = f"management cluster {cluster_name}" if cluster_name else "cluster"

    for attempt in range(1, max_attempts + 1):
        if on_attempt is not None:
            on_attempt(attempt)
        try:
            names = kube.list_namespace_names()
        except KubeClientError as e:
            if attempt == max_attempts:
                raise ClusterUnreachableError(
                    f"failed to list namespaces after {max_attempts} attempts "
                    f"({target} may be unreachable): {e}",
                    attempts=attempt,
                ) from e

            logger.warning(
                f"Namespace listing failed: {e}, retrying in {retry_delay:.0f}s "
                f"(attempt {attempt}/{max_attempts})",
                extra={"attempt": attempt},
            )
            sleep(retry_delay)
            continue

        namespaces = filter_tenant_namespaces(names)
        logger.info(f"Found {len(namespaces)} tenant namespaces out of {len(names)}")
        return namespaces

    # max_attempts < 1
    raise ClusterUnreachableError("namespace listing was never attempted", attempts=0)
