from __future__ import annotations

from .base import ClusterQuery, ClusterMutation, Readiness, ClusterClient
from .kubectl_client import KubectlClient
from .mock_cluster import MockCluster

__all__ = [
    "ClusterQuery",
    "ClusterMutation",
    "Readiness",
    "ClusterClient",
    "KubectlClient",
    "MockCluster",
]
