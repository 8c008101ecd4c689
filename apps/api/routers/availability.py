"""Availability endpoints backing the booking form pickers."""

from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from apps.api.deps import get_reservation_service
from core.restaurant_config import describe_booking_rules
from domain.models import (
    DateAvailabilityResponse,
    PartySizeResponse,
    ReservationAreaProfile,
    SlotAvailabilityResponse,
)
from services.reservation_service import ReservationService, RestaurantNotFoundError


router = APIRouter(prefix="/restaurants", tags=["availability"])


@router.get("/{restaurant_id}/areas", response_model=List[ReservationAreaProfile])
async def list_areas(
    restaurant_id: str,
    service: ReservationService = Depends(get_reservation_service),
):
    """
    List the active reservation areas of a restaurant.

    Args:
        restaurant_id: Restaurant ID
        service: Reservation service

    Returns:
        List[ReservationAreaProfile]: Active areas in display order
    """
    try:
        return service.list_active_areas(restaurant_id)
    except RestaurantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{restaurant_id}/rules")
async def get_effective_rules(
    restaurant_id: str,
    area_id: Optional[str] = Query(None, description="Reservation area ID"),
    service: ReservationService = Depends(get_reservation_service),
) -> Dict[str, Any]:
    """Effective booking rules after merging area overrides with restaurant defaults."""
    try:
        rules = service.effective_rules(restaurant_id, area_id)
    except RestaurantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return describe_booking_rules(rules)


@router.get("/{restaurant_id}/availability/dates", response_model=DateAvailabilityResponse)
async def get_available_dates(
    restaurant_id: str,
    area_id: Optional[str] = Query(None, description="Reservation area ID"),
    service: ReservationService = Depends(get_reservation_service),
):
    """
    Get bookable dates within the advance booking window.

    Args:
        restaurant_id: Restaurant ID
        area_id: Optional reservation area ID
        service: Reservation service

    Returns:
        DateAvailabilityResponse: Dates in ascending order
    """
    try:
        dates = service.available_dates(restaurant_id, area_id)
    except RestaurantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return DateAvailabilityResponse(restaurant_id=restaurant_id, area_id=area_id, dates=dates)


@router.get("/{restaurant_id}/availability/slots", response_model=SlotAvailabilityResponse)
async def get_available_slots(
    restaurant_id: str,
    reservation_date: date = Query(..., alias="date", description="Date as YYYY-MM-DD"),
    area_id: Optional[str] = Query(None, description="Reservation area ID"),
    service: ReservationService = Depends(get_reservation_service),
):
    """
    Get bookable time slots for a date.

    Args:
        restaurant_id: Restaurant ID
        reservation_date: Date to list slots for
        area_id: Optional reservation area ID
        service: Reservation service

    Returns:
        SlotAvailabilityResponse: Slots as HH:MM in ascending order
    """
    try:
        slots = service.available_slots(restaurant_id, reservation_date, area_id)
    except RestaurantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SlotAvailabilityResponse(
        restaurant_id=restaurant_id,
        area_id=area_id,
        reservation_date=reservation_date,
        slots=slots,
    )


@router.get("/{restaurant_id}/availability/party-sizes", response_model=PartySizeResponse)
async def get_party_sizes(
    restaurant_id: str,
    area_id: Optional[str] = Query(None, description="Reservation area ID"),
    service: ReservationService = Depends(get_reservation_service),
):
    """Party size options and reservation types for the booking form."""
    try:
        options = service.party_size_options(restaurant_id, area_id)
        types = service.reservation_types(restaurant_id, area_id)
    except RestaurantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return PartySizeResponse(
        restaurant_id=restaurant_id,
        area_id=area_id,
        options=options,
        reservation_types=types,
    )
