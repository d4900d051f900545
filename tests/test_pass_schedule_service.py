from datetime import date, datetime

from laundry.models import Privilege, SlotStatus
from laundry.schemas import ScheduleStatusCode
from laundry.services import Controller
from laundry.core.security import PasswordHasher

from helpers import (
    NEXT_WEEK,
    NOW,
    TOMORROW,
    FixedClock,
    insert_booking,
    insert_lock,
    insert_person,
    register_details,
)


def test_empty_week_grid(controller, admin):
    schedule = controller.get_passes(admin, 0)

    assert schedule.status_code == ScheduleStatusCode.OK
    assert schedule.week_number == 20
    assert schedule.room_count == 2
    assert (schedule.week_start_date, schedule.week_end_date) == ("2024-05-13", "2024-05-19")
    assert [room.room_num for room in schedule.room_passes] == [1, 2]
    for room in schedule.room_passes:
        assert [day.date for day in room.passes] == [f"2024-05-{d}" for d in range(13, 20)]
        for day in room.passes:
            assert [slot.range for slot in day.slots] == ["07-12", "12-17", "17-22"]
    assert all(
        slot.status == SlotStatus.AVAILABLE and slot.username == ""
        for slot in schedule.iter_slots()
    )


def test_relative_weeks(controller, admin):
    assert controller.get_passes(admin, 1).week_start_date == "2024-05-20"
    assert controller.get_passes(admin, -1).week_start_date == "2024-05-06"
    assert controller.get_passes(admin, 5).week_number == 25


def test_weeks_across_the_year_boundary(session_factory, test_settings, admin):
    clock = FixedClock(datetime(2024, 12, 23, 9, 0))
    controller = Controller(session_factory, test_settings, clock, PasswordHasher(4))

    schedule = controller.get_passes(admin, 1)

    assert schedule.week_number == 1
    assert (schedule.week_start_date, schedule.week_end_date) == ("2024-12-30", "2025-01-05")


def test_administrator_sees_occupants(controller, admin, resident, other_resident):
    controller.book_pass(resident, 1, TOMORROW, "12-17")
    controller.lock_pass(other_resident, 2, TOMORROW, "07-12")

    schedule = controller.get_passes(admin, 0)

    booked = schedule.find_slot(1, TOMORROW, "12-17")
    locked = schedule.find_slot(2, TOMORROW, "07-12")
    assert (booked.status, booked.username) == (SlotStatus.TAKEN, resident)
    assert (locked.status, locked.username) == (SlotStatus.TAKEN, other_resident)


def test_expired_lock_shows_available(controller, clock, admin, resident):
    controller.lock_pass(resident, 1, TOMORROW, "12-17")
    clock.advance(minutes=6)

    assert controller.get_passes(admin, 0).find_slot(1, TOMORROW, "12-17").status == SlotStatus.AVAILABLE


def test_booking_wins_over_lock(controller, session_factory, admin, resident, other_resident):
    controller.book_pass(resident, 1, TOMORROW, "12-17")
    insert_lock(session_factory, other_resident, 1, date(2024, 5, 16), "12-17", NOW)

    slot = controller.get_passes(admin, 0).find_slot(1, TOMORROW, "12-17")

    assert (slot.status, slot.username) == (SlotStatus.TAKEN, resident)


def test_past_bookings_in_the_week_are_shown(controller, session_factory, admin, resident):
    insert_booking(session_factory, resident, 2, date(2024, 5, 13), "17-22")

    assert controller.get_passes(admin, 0).find_slot(2, "2024-05-13", "17-22").status == SlotStatus.TAKEN


def test_resident_view_hides_occupants(controller, resident, other_resident):
    controller.book_pass(resident, 1, TOMORROW, "12-17")
    controller.lock_pass(other_resident, 2, TOMORROW, "07-12")

    own_view = controller.get_resident_passes(resident, 0)
    other_view = controller.get_resident_passes(other_resident, 0)

    assert own_view.find_slot(1, TOMORROW, "12-17").status == SlotStatus.SELF_BOOKING
    assert other_view.find_slot(1, TOMORROW, "12-17").status == SlotStatus.TAKEN
    assert own_view.find_slot(2, TOMORROW, "07-12").status == SlotStatus.TAKEN
    for schedule in (own_view, other_view):
        assert all(slot.username == "" for slot in schedule.iter_slots())


def test_self_booking_only_in_its_week(controller, resident):
    controller.book_pass(resident, 1, NEXT_WEEK, "12-17")

    current = controller.get_resident_passes(resident, 0)
    following = controller.get_resident_passes(resident, 1)

    assert SlotStatus.SELF_BOOKING not in {slot.status for slot in current.iter_slots()}
    assert following.find_slot(1, NEXT_WEEK, "12-17").status == SlotStatus.SELF_BOOKING


def test_resident_weeks_are_limited(controller, resident):
    for week in (-1, 0, 1):
        assert controller.get_resident_passes(resident, week).status_code == ScheduleStatusCode.OK
    for week in (-2, 2):
        result = controller.get_resident_passes(resident, week)
        assert result.status_code == ScheduleStatusCode.INVALID_WEEK
        assert result.room_passes == []


def test_authorization(controller, session_factory, resident):
    insert_person(session_factory, "ghost", Privilege.INVALID)

    assert controller.get_passes("nobody", 0).status_code == ScheduleStatusCode.INVALID_USER
    assert controller.get_passes(resident, 0).status_code == ScheduleStatusCode.INVALID_PRIVILEGE
    assert controller.get_resident_passes("nobody", 0).status_code == ScheduleStatusCode.INVALID_USER
    assert controller.get_resident_passes("ghost", 0).status_code == ScheduleStatusCode.INVALID_PRIVILEGE


def test_missing_configuration_returns_none(empty_session_factory, test_settings, clock):
    controller = Controller(empty_session_factory, test_settings, clock, PasswordHasher(4))
    controller.register_administrator(register_details("root"))

    assert controller.get_passes("root", 0) is None
