from __future__ import annotations

from salon_booking.domain.entities.service_catalog import Service

# Prices are not listed here; they depend on the assistant's hourly rate.
SERVICE_CATALOG: dict[str, Service] = {
    "cut": Service(
        service_id="cut",
        name="Cut",
        duration_minutes=60,
        description="Shampoo, cut and blow-dry",
    ),
    "color": Service(
        service_id="color",
        name="Color",
        duration_minutes=120,
        description="Shampoo, color and blow-dry",
    ),
    "perm": Service(
        service_id="perm",
        name="Perm",
        duration_minutes=150,
        description="Shampoo, perm, cut and blow-dry",
    ),
    "treatment": Service(
        service_id="treatment",
        name="Treatment",
        duration_minutes=45,
        description="Shampoo, treatment and blow-dry",
    ),
    "shampoo-blow": Service(
        service_id="shampoo-blow",
        name="Shampoo & Blow-dry",
        duration_minutes=30,
        description="Shampoo and blow-dry only",
    ),
}
