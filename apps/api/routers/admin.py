"""Admin endpoints for viewing reservations and changing their status."""

from datetime import date as date_type
from typing import Optional

from fastapi import APIRouter, Depends, Query

from apps.api.deps import get_admin_id, get_reservation_service
from domain.enums import ReservationStatus
from domain.models import ReservationListQuery, StatusUpdate
from services.reservation_service import ReservationService


router = APIRouter(prefix="/reservations/admin", tags=["admin"])


@router.get("/all")
def list_reservations(
    status: Optional[ReservationStatus] = Query(None, description="Filter by reservation status"),
    date: Optional[date_type] = Query(None, description="Filter by reservation date"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=50, description="Number of reservations per page"),
    admin_id: int = Depends(get_admin_id),
    service: ReservationService = Depends(get_reservation_service),
):
    """
    List reservations of the admin's restaurant with optional filtering.

    Args:
        status: Filter by reservation status (pending, confirmed, cancelled, completed)
        date: Only reservations on this date
        page: Page number
        limit: Page size

    Returns:
        dict: data and pagination
    """
    query = ReservationListQuery(status=status, page=page, limit=limit)
    page_result = service.list_restaurant_reservations(admin_id, query, reservation_date=date).unwrap()
    return {"success": True, "data": page_result.data, "pagination": page_result.pagination}


@router.get("/customers")
def list_customers(
    admin_id: int = Depends(get_admin_id),
    service: ReservationService = Depends(get_reservation_service),
):
    """List customers who have booked at the admin's restaurant, with their reservation counts."""
    customers = service.list_restaurant_customers(admin_id).unwrap()
    return {"success": True, "data": customers}


@router.patch("/{reservation_id}/status")
def update_status(
    reservation_id: int,
    payload: StatusUpdate,
    admin_id: int = Depends(get_admin_id),
    service: ReservationService = Depends(get_reservation_service),
):
    """Move a reservation to a new status (confirm, cancel or complete)."""
    record = service.change_status(admin_id, reservation_id, payload.status).unwrap()
    return {"success": True, "data": record}
