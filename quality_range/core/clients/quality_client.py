"""
Quality Service Client
======================

Indicator lookup by numeric ID.
"""

from typing import Optional, List, Iterable

from quality_range.config.settings import get_settings
from quality_range.core.clients.base import ServiceClient
from quality_range.models.schemas import QualityIndicator


class QualityClient(ServiceClient):
    """Client for the quality indicator service."""

    service_name = "quality"

    def __init__(self, service_url: Optional[str] = None, **kwargs):
        super().__init__(service_url or get_settings().quality_service_url, **kwargs)

    async def list_indicators(self, indicator_ids: Iterable[int]) -> Optional[List[QualityIndicator]]:
        """List indicators by numeric ID, in the order returned by the service."""
        data = await self._post("/api/service/indicators/list", json=list(indicator_ids))
        if data is None:
            return None
        return [QualityIndicator.model_validate(item) for item in data]
