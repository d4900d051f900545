from datetime import date, datetime

from laundry.models import PassLock
from laundry.repositories import LockRepository

from helpers import IN_TWO_WEEKS, NEXT_WEEK, NOW, TODAY, TOMORROW, YESTERDAY, count_rows, insert_lock


def test_lock_free_cell(controller, session_factory, resident):
    assert controller.lock_pass(resident, 1, TOMORROW, "12-17") is True
    assert count_rows(session_factory, PassLock) == 1


def test_relocking_the_same_cell_fails(controller, resident):
    controller.lock_pass(resident, 1, TOMORROW, "12-17")

    assert controller.lock_pass(resident, 1, TOMORROW, "12-17") is False


def test_cell_locked_by_another_account(controller, resident, other_resident):
    controller.lock_pass(resident, 1, TOMORROW, "12-17")

    assert controller.lock_pass(other_resident, 1, TOMORROW, "12-17") is False


def test_lock_is_live_for_the_whole_duration(controller, clock, resident, other_resident):
    controller.lock_pass(resident, 1, TOMORROW, "12-17")
    clock.advance(minutes=5)

    assert controller.lock_pass(other_resident, 1, TOMORROW, "12-17") is False


def test_expired_lock_is_replaced(controller, session_factory, clock, resident, other_resident):
    controller.lock_pass(resident, 1, TOMORROW, "12-17")
    clock.advance(minutes=5, seconds=1)

    assert controller.lock_pass(other_resident, 1, TOMORROW, "12-17") is True
    assert count_rows(session_factory, PassLock) == 1


def test_locking_another_cell_releases_the_previous_lock(controller, resident, other_resident):
    controller.lock_pass(resident, 1, TOMORROW, "12-17")
    assert controller.lock_pass(resident, 2, TOMORROW, "17-22") is True

    assert controller.lock_pass(other_resident, 1, TOMORROW, "12-17") is True


def test_unknown_user(controller):
    assert controller.lock_pass("nobody", 1, TOMORROW, "12-17") is False


def test_unknown_pass(controller, resident):
    assert controller.lock_pass(resident, 3, TOMORROW, "12-17") is False
    assert controller.lock_pass(resident, 1, TOMORROW, "09-12") is False


def test_dates_outside_the_booking_window(controller, resident):
    assert controller.lock_pass(resident, 1, YESTERDAY, "12-17") is False
    assert controller.lock_pass(resident, 1, IN_TWO_WEEKS, "12-17") is False
    assert controller.lock_pass(resident, 1, NEXT_WEEK, "12-17") is True


def test_elapsed_range_today(controller, clock, resident):
    clock.current = datetime(2024, 5, 15, 13, 0)

    assert controller.lock_pass(resident, 1, TODAY, "07-12") is False
    assert controller.lock_pass(resident, 1, TODAY, "12-17") is True


def test_booked_cell(controller, resident, other_resident):
    controller.book_pass(resident, 1, TOMORROW, "12-17")

    assert controller.lock_pass(other_resident, 1, TOMORROW, "12-17") is False


def test_account_with_an_active_pass(controller, resident):
    controller.book_pass(resident, 1, TOMORROW, "12-17")

    assert controller.lock_pass(resident, 2, NEXT_WEEK, "07-12") is False


def test_active_pass_ending_earlier_does_not_block(controller, resident):
    controller.book_pass(resident, 1, NEXT_WEEK, "07-12")

    assert controller.lock_pass(resident, 2, TOMORROW, "17-22") is True


def test_lost_race_returns_false(controller, session_factory, resident, other_resident, monkeypatch):
    controller.lock_pass(resident, 1, TOMORROW, "12-17")
    monkeypatch.setattr(LockRepository, "find_live_owner", lambda self, day, schedule_id, cutoff: None)

    assert controller.lock_pass(other_resident, 1, TOMORROW, "12-17") is False
    assert count_rows(session_factory, PassLock) == 1


def test_unlock_releases_every_lock(controller, session_factory, resident, other_resident):
    controller.lock_pass(resident, 1, TOMORROW, "12-17")

    assert controller.unlock_pass(resident) is True
    assert count_rows(session_factory, PassLock) == 0
    assert controller.lock_pass(other_resident, 1, TOMORROW, "12-17") is True


def test_unlock_without_locks(controller, resident):
    assert controller.unlock_pass(resident) is True


def test_unlock_unknown_user(controller):
    assert controller.unlock_pass("nobody") is False


def test_expired_rows_on_the_cell_are_purged(controller, session_factory, resident, other_resident):
    insert_lock(session_factory, other_resident, 1, date(2024, 5, 16), "12-17",
                datetime(2024, 5, 15, 9, 0))

    assert controller.lock_pass(resident, 1, TOMORROW, "12-17") is True
    assert count_rows(session_factory, PassLock) == 1


def test_lock_start_is_the_request_time(controller, session_factory, resident):
    controller.lock_pass(resident, 1, TOMORROW, "12-17")

    with session_factory() as session:
        assert session.query(PassLock).one().lock_start == NOW
