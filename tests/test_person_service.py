import pytest
from datetime import date
from pydantic import ValidationError

from laundry.models import Account, PassBooking, PassLock, Person, Privilege
from laundry.schemas import RegisterDTO, UserInfoStatusCode, UserStatusCode

from helpers import NOW, PASSWORD, TOMORROW, count_rows, insert_lock, register_details


class TestLogin:

    def test_valid_credentials(self, controller, resident):
        user = controller.login_user(resident, PASSWORD)

        assert user.status_code == UserStatusCode.OK
        assert user.username == resident
        assert user.privilege_id == Privilege.STANDARD

    def test_administrator_privilege(self, controller, admin):
        assert controller.login_user(admin, PASSWORD).privilege_id == Privilege.ADMINISTRATOR

    @pytest.mark.parametrize("username, password", [
        ("alice", "wrongpassword"),
        ("nobody", PASSWORD),
        ("alice", ""),
    ])
    def test_failures_look_alike(self, controller, resident, username, password):
        user = controller.login_user(username, password)

        assert user.status_code == UserStatusCode.LOGIN_FAILURE
        assert user.username is None
        assert user.privilege_id == Privilege.INVALID


class TestRegisterResident:

    def test_administrator_registers_resident(self, controller, session_factory, admin):
        user = controller.register_resident(admin, register_details("carol"))

        assert user.status_code == UserStatusCode.OK
        assert (user.username, user.privilege_id) == ("carol", Privilege.STANDARD)
        with session_factory() as session:
            stored = session.query(Account).filter_by(username="carol").one()
            assert stored.password != PASSWORD
            assert stored.person.privilege == Privilege.STANDARD

    def test_resident_cannot_register(self, controller, resident):
        user = controller.register_resident(resident, register_details("carol"))

        assert user.status_code == UserStatusCode.INVALID_PRIVILEGE

    def test_unknown_issuer(self, controller):
        assert controller.register_resident("nobody", register_details("carol")).status_code == UserStatusCode.INVALID_USER

    def test_existing_email_is_reported_first(self, controller, admin, resident):
        user = controller.register_resident(admin, register_details(resident, email="alice@laundry.se"))

        assert user.status_code == UserStatusCode.EXISTENT_EMAIL

    def test_email_comparison_ignores_case(self, controller, admin, resident):
        user = controller.register_resident(admin, register_details("carol", email="ALICE@laundry.se"))

        assert user.status_code == UserStatusCode.EXISTENT_EMAIL

    def test_existing_username(self, controller, session_factory, admin, resident):
        user = controller.register_resident(admin, register_details(resident, email="new@laundry.se"))

        assert user.status_code == UserStatusCode.EXISTENT_USERNAME
        assert count_rows(session_factory, Person) == 2

    def test_registered_resident_can_log_in(self, controller, admin):
        controller.register_resident(admin, register_details("carol", password="s3cretpass"))

        assert controller.login_user("carol", "s3cretpass").status_code == UserStatusCode.OK


class TestRegisterDetails:

    @pytest.mark.parametrize("field, value", [
        ("personal_number", "19811218-9875"),
        ("personal_number", "198112189876"),
        ("personal_number", "19811318-9876"),
        ("email", "not-an-email"),
        ("username", "bad name"),
        ("first_name", "R2D2"),
        ("password", "short"),
    ])
    def test_invalid_fields(self, field, value):
        data = register_details("carol").model_dump()
        data[field] = value

        with pytest.raises(ValidationError):
            RegisterDTO(**data)

    def test_camel_case_aliases(self):
        details = RegisterDTO.model_validate({
            "firstName": "Carol",
            "lastName": "Smith",
            "personalNumber": "19900101-0017",
            "email": "carol@laundry.se",
            "username": "carol",
            "password": "password123",
        })

        assert details.personal_number == "19900101-0017"


class TestListUsers:

    def test_lists_residents_only(self, controller, admin, resident, other_resident):
        result = controller.list_users(admin)

        assert result.status_code == UserInfoStatusCode.OK
        assert sorted(info.username for info in result.person_info) == [resident, other_resident]
        assert result.person_info[0].personal_number == "19811218-9876"

    def test_requires_administrator(self, controller, resident):
        assert controller.list_users(resident).status_code == UserInfoStatusCode.INVALID_PRIVILEGE
        assert controller.list_users("nobody").status_code == UserInfoStatusCode.INVALID_USER


class TestDeleteUser:

    def test_removes_account_bookings_and_locks(self, controller, session_factory, admin,
                                               resident, other_resident):
        controller.book_pass(resident, 1, TOMORROW, "12-17")
        insert_lock(session_factory, resident, 2, date(2024, 5, 17), "07-12",
                    NOW)

        assert controller.delete_user(admin, resident) is True
        assert count_rows(session_factory, PassBooking) == 0
        assert count_rows(session_factory, PassLock) == 0
        assert controller.get_person_info(resident) is None
        assert controller.login_user(resident, PASSWORD).status_code == UserStatusCode.LOGIN_FAILURE
        assert controller.get_person_info(other_resident) is not None

    def test_freed_cell_is_bookable(self, controller, admin, resident, other_resident):
        controller.book_pass(resident, 1, TOMORROW, "12-17")
        controller.delete_user(admin, resident)

        assert controller.book_pass(other_resident, 1, TOMORROW, "12-17").status_code == 0

    def test_requires_administrator(self, controller, resident, other_resident):
        assert controller.delete_user(resident, other_resident) is False

    def test_unknown_target(self, controller, admin):
        assert controller.delete_user(admin, "nobody") is False


class TestPersonInfo:

    def test_known_user(self, controller, resident):
        info = controller.get_person_info(resident)

        assert info.username == resident
        assert info.email == "alice@laundry.se"
        assert info.privilege == Privilege.STANDARD

    def test_unknown_user(self, controller):
        assert controller.get_person_info("nobody") is None
