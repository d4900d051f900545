"""
Person and account lookups.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from laundry.models import Account, Person, Privilege
from laundry.repositories.base import BaseRepository


@dataclass(frozen=True)
class PersonInfo:
    """Identity and privilege of an account holder."""

    account_id: int
    person_id: int
    username: str
    email: str
    privilege: Privilege


class PersonRepository(BaseRepository[Person]):

    def __init__(self, db: Session):
        super().__init__(Person, db)

    def get_person_info(self, username: str) -> Optional[PersonInfo]:
        row = self.db.execute(
            select(Account.id, Person.id, Account.username, Person.email, Person.privilege_id)
            .join(Person, Account.person_id == Person.id)
            .where(Account.username == username)
        ).first()
        if row is None:
            return None
        account_id, person_id, name, email, privilege_id = row
        try:
            privilege = Privilege(privilege_id)
        except ValueError:
            privilege = Privilege.INVALID
        return PersonInfo(account_id, person_id, name, email, privilege)

    @property
    def accounts(self) -> BaseRepository[Account]:
        return BaseRepository(Account, self.db)

    def get_account(self, username: str) -> Optional[Account]:
        return self.accounts.find_one_by_criteria({"username": username})

    def email_exists(self, email: str) -> bool:
        return self.db.execute(
            select(func.count(Person.id)).where(func.lower(Person.email) == email.lower())
        ).scalar_one() > 0

    def username_exists(self, username: str) -> bool:
        return self.accounts.exists({"username": username})

    def create_with_account(
        self,
        firstname: str,
        lastname: str,
        personal_number: str,
        email: str,
        privilege: Privilege,
        username: str,
        password_hash: str,
    ) -> Account:
        person = self.create(Person(
            firstname=firstname,
            lastname=lastname,
            personal_number=personal_number,
            email=email,
            privilege_id=int(privilege),
        ))
        account = Account(username=username, password=password_hash, person_id=person.id)
        return self.accounts.create(account)

    def list_by_privilege(self, privilege: Privilege) -> List[Tuple[Person, str]]:
        rows = self.db.execute(
            select(Person, Account.username)
            .join(Account, Account.person_id == Person.id)
            .where(Person.privilege_id == int(privilege))
            .order_by(Person.lastname, Person.firstname, Account.username)
        ).all()
        return [(person, username) for person, username in rows]

    def delete_account_and_person(self, info: PersonInfo) -> None:
        self.accounts.delete_where(Account.id == info.account_id)
        self.delete_where(Person.id == info.person_id)
