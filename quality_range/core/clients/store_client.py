"""
Store Service Client
====================

Project-scoped atom display names, including custom plugins installed in a project.
"""

from typing import Optional, Dict, Iterable

from quality_range.config.settings import get_settings
from quality_range.core.clients.base import ServiceClient


class StoreClient(ServiceClient):
    """Client for the store (atom market) service."""

    service_name = "store"

    def __init__(self, service_url: Optional[str] = None, **kwargs):
        super().__init__(service_url or get_settings().store_service_url, **kwargs)

    async def get_atom_names(self, project_id: str, atom_codes: Iterable[str]) -> Optional[Dict[str, str]]:
        """Resolve atom codes to display names as seen by the project."""
        return await self._post(
            f"/api/service/market/atom/projects/{project_id}/names",
            json=list(atom_codes),
        )
