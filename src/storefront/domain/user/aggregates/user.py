from datetime import datetime
from typing import Optional, Union
from uuid import UUID, uuid4

from storefront.domain.shared.time import utc_now
from storefront.domain.user.value_objects.email import Email


class User:
    """
    User aggregate root.

    Holds a user's identity and password hash. Created once at registration
    and only read afterwards. The password hash is the output of the
    password hashing service, never the plaintext.
    """

    def __init__(  # NOQA: PLR0913
        self,
        username: str,
        email: Union[str, Email],
        password_hash: str,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._username = username
        self._email = email if isinstance(email, Email) else Email(email)
        self._password_hash = password_hash
        self._id = id if id is not None else uuid4()
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @classmethod
    def create(
        cls,
        username: str,
        email: Union[str, Email],
        password_hash: str,
    ) -> "User":
        return cls(username=username, email=email, password_hash=password_hash)

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        username: str,
        email: Union[str, Email],
        password_hash: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value})"
