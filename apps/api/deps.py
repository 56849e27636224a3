"""FastAPI dependencies: service access and caller identity."""

from fastapi import Header, Request

from services.reservation_service import ReservationService


def get_reservation_service(request: Request) -> ReservationService:
    """Reservation service built by the application factory."""
    return request.app.state.reservation_service


def get_customer_id(x_customer_id: int = Header(..., alias="X-Customer-Id", ge=1)) -> int:
    """
    Customer identity, verified upstream by the authentication gateway.

    Returns:
        int: Customer ID
    """
    return x_customer_id


def get_admin_id(x_admin_id: int = Header(..., alias="X-Admin-Id", ge=1)) -> int:
    """Admin identity, verified upstream by the authentication gateway."""
    return x_admin_id
