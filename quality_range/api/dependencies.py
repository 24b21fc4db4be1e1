"""
API Dependencies
================

FastAPI dependencies wiring the shared upstream clients into request-scoped services.
"""

from dataclasses import dataclass

from fastapi import Request

from quality_range.core.clients import ProcessClient, QualityClient, StoreClient
from quality_range.core.elements import ElementNameResolver
from quality_range.core.range_query import RangeQueryService


@dataclass
class ServiceClients:
    """Upstream clients shared by all requests of the application."""

    process: ProcessClient
    quality: QualityClient
    store: StoreClient

    @classmethod
    def from_settings(cls) -> "ServiceClients":
        return cls(process=ProcessClient(), quality=QualityClient(), store=StoreClient())

    async def close(self) -> None:
        await self.process.close()
        await self.quality.close()
        await self.store.close()


def get_service_clients(request: Request) -> ServiceClients:
    return request.app.state.clients


def get_range_query_service(request: Request) -> RangeQueryService:
    """Build the range query service over the application's clients."""
    clients = get_service_clients(request)
    return RangeQueryService(
        process_client=clients.process,
        quality_client=clients.quality,
        name_resolver=ElementNameResolver(clients.store),
    )
