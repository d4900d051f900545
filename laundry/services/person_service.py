"""
Person and account directory: authentication, registration and removal.
"""

from typing import Optional

from laundry.config.settings import Settings
from laundry.core.exceptions import DuplicateEntryError, ServiceUnavailableError
from laundry.core.security import PasswordHasher
from laundry.models import Privilege
from laundry.repositories import BookingRepository, LockRepository, PersonInfo, PersonRepository
from laundry.schemas import (
    RegisterDTO,
    ResidentInfo,
    UserDTO,
    UserInfoDTO,
    UserInfoStatusCode,
    UserStatusCode,
)
from laundry.services.base import BaseService, TransactionManager
from laundry.utils.date_utils import Clock


class PersonService(BaseService):

    def __init__(self, transactions: TransactionManager, config: Settings, clock: Clock,
                 hasher: PasswordHasher):
        super().__init__(transactions, config, clock)
        self.hasher = hasher

    def get_person_info(self, username: str) -> Optional[PersonInfo]:
        """
        Identity and privilege of ``username``; ``None`` only for an unknown user.

        Raises:
            ServiceUnavailableError: If the lookup could not be performed
        """
        try:
            with self.transactions.start() as session:
                return PersonRepository(session).get_person_info(username)
        except Exception as e:
            self._handle_exception(e, "get person info", {"username": username})
            raise ServiceUnavailableError(operation="get person info") from e

    def login_user(self, username: str, password: str) -> Optional[UserDTO]:
        """An unknown username and a wrong password give the same result."""
        try:
            with self.transactions.start() as session:
                account = PersonRepository(session).get_account(username)
                if account is None or not self.hasher.verify(password, account.password):
                    self._logger.debug(f"Login failed for {username}")
                    return UserDTO.rejected(UserStatusCode.LOGIN_FAILURE)

                return UserDTO(
                    username=account.username,
                    privilege_id=account.person.privilege,
                    status_code=UserStatusCode.OK,
                )
        except Exception as e:
            return self._handle_exception(e, "login user", {"username": username})

    def register_resident(self, issuer: str, details: RegisterDTO) -> Optional[UserDTO]:
        """Create a resident account; the issuer must be an administrator."""
        try:
            with self.transactions.start() as session:
                repo = PersonRepository(session)
                info = repo.get_person_info(issuer)
                if info is None:
                    return UserDTO.rejected(UserStatusCode.INVALID_USER)
                if info.privilege != Privilege.ADMINISTRATOR:
                    return UserDTO.rejected(UserStatusCode.INVALID_PRIVILEGE)

                return self._register(repo, details, Privilege.STANDARD)
        except DuplicateEntryError:
            return self._conflict_status(details)
        except Exception as e:
            return self._handle_exception(e, "register resident", {"username": details.username})

    def register_administrator(self, details: RegisterDTO) -> Optional[UserDTO]:
        """Create an administrator account without an issuing account."""
        try:
            with self.transactions.start() as session:
                return self._register(PersonRepository(session), details, Privilege.ADMINISTRATOR)
        except DuplicateEntryError:
            return self._conflict_status(details)
        except Exception as e:
            return self._handle_exception(e, "register administrator", {"username": details.username})

    def list_users(self, issuer: str) -> Optional[UserInfoDTO]:
        """All residents; the issuer must be an administrator."""
        try:
            with self.transactions.start() as session:
                repo = PersonRepository(session)
                info = repo.get_person_info(issuer)
                if info is None:
                    return UserInfoDTO(status_code=UserInfoStatusCode.INVALID_USER)
                if info.privilege != Privilege.ADMINISTRATOR:
                    return UserInfoDTO(status_code=UserInfoStatusCode.INVALID_PRIVILEGE)

                residents = [
                    ResidentInfo(
                        first_name=person.firstname,
                        last_name=person.lastname,
                        personal_number=person.personal_number,
                        username=username,
                    )
                    for person, username in repo.list_by_privilege(Privilege.STANDARD)
                ]
                return UserInfoDTO(person_info=residents, status_code=UserInfoStatusCode.OK)
        except Exception as e:
            return self._handle_exception(e, "list users", {"username": issuer})

    def delete_user(self, issuer: str, username: str) -> Optional[bool]:
        """
        Remove a user together with its bookings and locks.
        """
        try:
            with self.transactions.start() as session:
                repo = PersonRepository(session)
                info = repo.get_person_info(issuer)
                if info is None or info.privilege != Privilege.ADMINISTRATOR:
                    return False

                target = repo.get_person_info(username)
                if target is None:
                    return False

                BookingRepository(session).delete_for_account(target.account_id)
                LockRepository(session).delete_for_account(target.account_id)
                repo.delete_account_and_person(target)
                self._logger.info(f"{issuer} deleted user {username}")
                return True
        except Exception as e:
            return self._handle_exception(e, "delete user", {"username": username, "issuer": issuer})

    def _register(self, repo: PersonRepository, details: RegisterDTO, privilege: Privilege) -> UserDTO:
        if repo.email_exists(details.email):
            return UserDTO.rejected(UserStatusCode.EXISTENT_EMAIL)
        if repo.username_exists(details.username):
            return UserDTO.rejected(UserStatusCode.EXISTENT_USERNAME)

        repo.create_with_account(
            firstname=details.first_name,
            lastname=details.last_name,
            personal_number=details.personal_number,
            email=details.email,
            privilege=privilege,
            username=details.username,
            password_hash=self.hasher.hash(details.password),
        )
        self._logger.info(f"Registered {privilege.name.lower()} {details.username}")
        return UserDTO(username=details.username, privilege_id=privilege, status_code=UserStatusCode.OK)

    def _conflict_status(self, details: RegisterDTO) -> Optional[UserDTO]:
        """Status for a registration that lost a race on a unique column."""
        try:
            with self.transactions.start() as session:
                if PersonRepository(session).email_exists(details.email):
                    return UserDTO.rejected(UserStatusCode.EXISTENT_EMAIL)
                return UserDTO.rejected(UserStatusCode.EXISTENT_USERNAME)
        except Exception as e:
            return self._handle_exception(e, "register user", {"username": details.username})
