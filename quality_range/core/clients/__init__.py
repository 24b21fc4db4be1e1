"""
Platform Service Clients
========================

aiohttp clients for the platform services the range queries depend on.
"""

from quality_range.core.clients.base import ServiceClient, ServiceClientError
from quality_range.core.clients.process_client import ProcessClient
from quality_range.core.clients.quality_client import QualityClient
from quality_range.core.clients.store_client import StoreClient

__all__ = [
    "ServiceClient",
    "ServiceClientError",
    "ProcessClient",
    "QualityClient",
    "StoreClient",
]
