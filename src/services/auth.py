import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from models.user import User
from services.validation import validate_registration, validate_user_status

logger = logging.getLogger(__name__)

DEMO_USER = {"id": "1", "name": "John Doe", "role": "Manager"}


class AuthService(QObject):
    """Mock authentication: one demo account, registration always succeeds."""

    user_changed = Signal(object)  # User | None

    def __init__(self, demo_email: str, demo_password: str, parent=None):
        super().__init__(parent)
        self._demo_email = demo_email
        self._demo_password = demo_password
        self._user: Optional[User] = None

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def login(self, email: str, password: str) -> bool:
        if (email or "").strip().lower() != self._demo_email.lower() or password != self._demo_password:
            logger.info("Login rejected email=%s", email)
            return False
        self._set_user(User(email=self._demo_email, status="online", **DEMO_USER))
        logger.info("Logged in email=%s", email)
        return True

    def register(self, form: dict) -> bool:
        data = validate_registration(form)
        self._set_user(
            User(
                id=DEMO_USER["id"],
                name=data["name"],
                email=data["email"],
                role=data.get("role") or "",
                status="online",
            )
        )
        logger.info("Registered email=%s", data["email"])
        return True

    def logout(self) -> None:
        if self._user is None:
            return
        logger.info("Logged out email=%s", self._user.email)
        self._set_user(None)

    def update_user_status(self, status: str) -> None:
        validate_user_status(status)
        if self._user is None or self._user.status == status:
            return
        self._set_user(User(**{**self._user.to_dict(), "status": status}))

    def update_profile(self, name: Optional[str] = None, role: Optional[str] = None) -> None:
        if self._user is None:
            return
        data = self._user.to_dict()
        if name and name.strip():
            data["name"] = name.strip()
        if role is not None:
            data["role"] = role.strip()
        self._set_user(User(**data))

    def _set_user(self, user: Optional[User]) -> None:
        self._user = user
        self.user_changed.emit(user)
