from __future__ import annotations

from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.domain.entities.service_catalog import Service
from salon_booking.infrastructure.knowledge.service_catalog_data import SERVICE_CATALOG


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(self, catalog: dict[str, Service] | None = None) -> None:
        self._catalog = catalog if catalog is not None else SERVICE_CATALOG

    def list_services(self) -> list[Service]:
        return list(self._catalog.values())

    def get_service(self, service_id: str) -> Service | None:
        normalized_key = service_id.lower().strip()
        return self._catalog.get(normalized_key)
