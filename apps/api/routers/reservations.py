"""Reservation endpoints: submission, server-side check and management edits."""

from fastapi import APIRouter, Depends, HTTPException

from apps.api.deps import get_reservation_service
from domain.models import (
    ReservationRecord,
    ReservationRequest,
    ReservationStatusUpdate,
    ReservationUpdate,
    ValidationResponse,
)
from services.reservation_service import (
    ReservationNotFoundError,
    ReservationRejectedError,
    ReservationService,
    RestaurantNotFoundError,
)


router = APIRouter(prefix="/reservations", tags=["reservations"])


def _rejection(error: ReservationRejectedError) -> HTTPException:
    result = error.result
    return HTTPException(
        status_code=422,
        detail={
            "reason": result.reason.value,
            "message": result.message,
            "field": result.field,
        },
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate_reservation(
    request: ReservationRequest,
    service: ReservationService = Depends(get_reservation_service),
):
    """
    Check a reservation against the current rules without storing it.

    Args:
        request: Reservation request
        service: Reservation service

    Returns:
        ValidationResponse: valid flag plus rejection reason when invalid
    """
    try:
        result = service.validate(request)
    except RestaurantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ValidationResponse(valid=result.is_valid, reason=result.reason, message=result.message)


@router.post("", response_model=ReservationRecord, status_code=201)
async def create_reservation(
    request: ReservationRequest,
    service: ReservationService = Depends(get_reservation_service),
):
    """
    Create a pending reservation.

    Args:
        request: Reservation request
        service: Reservation service

    Returns:
        ReservationRecord: Stored reservation
    """
    try:
        return service.create_reservation(request)
    except RestaurantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ReservationRejectedError as e:
        raise _rejection(e)


@router.get("/{reservation_id}", response_model=ReservationRecord)
async def get_reservation(
    reservation_id: int,
    service: ReservationService = Depends(get_reservation_service),
):
    """Get a specific reservation by ID."""
    try:
        return service.get_reservation(reservation_id)
    except ReservationNotFoundError:
        raise HTTPException(status_code=404, detail="Reservation not found")


@router.patch("/{reservation_id}", response_model=ReservationRecord)
async def update_reservation(
    reservation_id: int,
    changes: ReservationUpdate,
    service: ReservationService = Depends(get_reservation_service),
):
    """
    Edit a reservation; the result is re-validated before it is stored.

    Args:
        reservation_id: Reservation ID
        changes: Fields to change
        service: Reservation service

    Returns:
        ReservationRecord: Updated reservation
    """
    try:
        return service.update_reservation(reservation_id, changes)
    except ReservationNotFoundError:
        raise HTTPException(status_code=404, detail="Reservation not found")
    except ReservationRejectedError as e:
        raise _rejection(e)


@router.patch("/{reservation_id}/status", response_model=ReservationRecord)
async def update_reservation_status(
    reservation_id: int,
    payload: ReservationStatusUpdate,
    service: ReservationService = Depends(get_reservation_service),
):
    """Set the status of a reservation (pending, confirmed, cancelled, completed)."""
    try:
        return service.update_status(reservation_id, payload.status)
    except ReservationNotFoundError:
        raise HTTPException(status_code=404, detail="Reservation not found")
