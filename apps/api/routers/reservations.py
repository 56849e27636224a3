"""Customer endpoints for checking availability and managing reservations."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status as http_status

from apps.api.deps import get_customer_id, get_reservation_service
from domain.enums import ReservationStatus
from domain.models import ReservationCreate, ReservationListQuery, ReservationUpdate
from services.reservation_service import ReservationService


router = APIRouter(tags=["reservations"])


@router.get("/restaurants/{restaurant_id}/availability")
def check_availability(
    restaurant_id: int,
    date: date = Query(..., description="Reservation date (YYYY-MM-DD)"),
    time: str = Query(..., pattern=r"^\d{2}:\d{2}$", description="Start time (HH:MM)"),
    guests: int = Query(..., ge=1, le=12, description="Number of guests"),
    service: ReservationService = Depends(get_reservation_service),
):
    """
    Check whether a party can be seated, without booking anything.

    Returns:
        dict: available, tables_needed and assigned_capacity
    """
    result = service.check_availability(restaurant_id, date, time, guests).unwrap()
    return {"success": True, "data": result}


@router.get("/reservations")
def list_my_reservations(
    status: Optional[ReservationStatus] = Query(None, description="Filter by reservation status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    customer_id: int = Depends(get_customer_id),
    service: ReservationService = Depends(get_reservation_service),
):
    """List the caller's reservations, newest first."""
    query = ReservationListQuery(status=status, page=page, limit=limit)
    page_result = service.list_customer_reservations(customer_id, query).unwrap()
    return {"success": True, "data": page_result.data, "pagination": page_result.pagination}


@router.post("/reservations", status_code=http_status.HTTP_201_CREATED)
def create_reservation(
    payload: ReservationCreate,
    customer_id: int = Depends(get_customer_id),
    service: ReservationService = Depends(get_reservation_service),
):
    """Create a reservation; tables are assigned automatically."""
    record = service.create_reservation(customer_id, payload).unwrap()
    return {"success": True, "data": record}


@router.get("/reservations/{reservation_id}")
def get_reservation(
    reservation_id: int,
    customer_id: int = Depends(get_customer_id),
    service: ReservationService = Depends(get_reservation_service),
):
    """Get one of the caller's reservations."""
    record = service.get_reservation(customer_id, reservation_id).unwrap()
    return {"success": True, "data": record}


@router.patch("/reservations/{reservation_id}")
def modify_reservation(
    reservation_id: int,
    payload: ReservationUpdate,
    customer_id: int = Depends(get_customer_id),
    service: ReservationService = Depends(get_reservation_service),
):
    """Change a PENDING reservation; tables are re-assigned."""
    record = service.modify_reservation(customer_id, reservation_id, payload).unwrap()
    return {"success": True, "data": record}


@router.delete("/reservations/{reservation_id}")
def cancel_reservation(
    reservation_id: int,
    customer_id: int = Depends(get_customer_id),
    service: ReservationService = Depends(get_reservation_service),
):
    """Cancel a reservation. It is kept for history, never deleted."""
    record = service.cancel_reservation(customer_id, reservation_id).unwrap()
    return {"success": True, "data": record}
