from src.services import (
    care_status,
    dashboard_service,
    pet_service,
)


__all__ = [
    "care_status",
    "dashboard_service",
    "pet_service",
]
