"""
Booking endpoints: locks, bookings and weekly schedules.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from laundry.api.deps import MISSING_AUTH_MESSAGE, get_controller, get_current_username, require_result
from laundry.core.exceptions import AuthenticationError, RequestError
from laundry.schemas import BookingStatusCode, PassScheduleDTO, ScheduleStatusCode
from laundry.schemas.requests import PassRequest
from laundry.services import Controller

router = APIRouter(prefix="/booking", tags=["Bookings"])

BOOKING_ERRORS = {
    BookingStatusCode.INVALID_PASS_INFO: "Invalid pass information.",
    BookingStatusCode.EXISTENT_ACTIVE_PASS: "The user already has an active pass.",
    BookingStatusCode.PASS_COUNT_EXCEEDED: "The monthly pass limit has been reached.",
    BookingStatusCode.BOOKED_PASS: "The pass is already booked.",
    BookingStatusCode.LOCKED_PASS: "The pass is locked by another user.",
    BookingStatusCode.INVALID_DATE: "Invalid pass date.",
}


def _schedule_response(schedule: PassScheduleDTO) -> Dict[str, Any]:
    if schedule.status_code == ScheduleStatusCode.INVALID_WEEK:
        raise RequestError("Invalid week.")
    if schedule.status_code != ScheduleStatusCode.OK:
        raise AuthenticationError(MISSING_AUTH_MESSAGE)
    return schedule.to_response()


@router.post("/lockPass")
def lock_pass(
    body: PassRequest,
    username: str = Depends(get_current_username),
    controller: Controller = Depends(get_controller),
) -> Dict[str, bool]:
    result = require_result(
        controller.lock_pass(username, body.room_number, body.date, body.pass_range), "lock pass"
    )
    return {"result": result}


@router.post("/unlockPass")
def unlock_pass(
    username: str = Depends(get_current_username),
    controller: Controller = Depends(get_controller),
) -> Dict[str, bool]:
    return {"result": require_result(controller.unlock_pass(username), "unlock pass")}


@router.post("/bookPass")
def book_pass(
    body: PassRequest,
    username: str = Depends(get_current_username),
    controller: Controller = Depends(get_controller),
) -> Dict[str, Any]:
    booking = require_result(
        controller.book_pass(username, body.room_number, body.date, body.pass_range), "book pass"
    )
    if booking.status_code == BookingStatusCode.INVALID_USER:
        raise AuthenticationError(MISSING_AUTH_MESSAGE)
    if booking.status_code != BookingStatusCode.OK:
        raise RequestError(BOOKING_ERRORS[booking.status_code],
                           details={"statusCode": int(booking.status_code)})
    return booking.to_response()


@router.get("/getBookedPass")
def get_booked_pass(
    username: str = Depends(get_current_username),
    controller: Controller = Depends(get_controller),
) -> Dict[str, Any]:
    booking = require_result(controller.get_booked_pass(username), "get booked pass")
    if booking.status_code == BookingStatusCode.INVALID_USER:
        raise AuthenticationError(MISSING_AUTH_MESSAGE)
    return booking.to_response()


@router.post("/cancelBookedPass")
def cancel_booked_pass(
    body: PassRequest,
    username: str = Depends(get_current_username),
    controller: Controller = Depends(get_controller),
) -> Dict[str, bool]:
    result = require_result(
        controller.cancel_booked_pass(username, body.room_number, body.date, body.pass_range),
        "cancel booked pass",
    )
    return {"result": result}


@router.get("/getResidentPasses")
def get_resident_passes(
    week: int = Query(0, description="Week relative to the current one"),
    username: str = Depends(get_current_username),
    controller: Controller = Depends(get_controller),
) -> Dict[str, Any]:
    schedule = require_result(controller.get_resident_passes(username, week), "get resident passes")
    return _schedule_response(schedule)


@router.get("/getPasses")
def get_passes(
    week: int = Query(0, description="Week relative to the current one"),
    username: str = Depends(get_current_username),
    controller: Controller = Depends(get_controller),
) -> Dict[str, Any]:
    schedule = require_result(controller.get_passes(username, week), "get passes")
    return _schedule_response(schedule)
