"""Distributor directory service: registration, login and listing."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from wasteflow.app.errors import AuthenticationError, ConflictError, ValidationError
from wasteflow.auth import create_token, hash_password, verify_password
from wasteflow.models.distributor import Distributor

if TYPE_CHECKING:
    from wasteflow.config.settings import AuthSettings
    from wasteflow.repositories.distributor import DistributorRepository

log = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")
_NAME_MIN, _NAME_MAX = 2, 100
_ADDRESS_MAX = 255


class DistributorService:
    """Register and authenticate distributors."""

    def __init__(
        self,
        distributor_repo: DistributorRepository,
        auth_settings: AuthSettings,
    ) -> None:
        self._distributors = distributor_repo
        self._settings = auth_settings

    def register(self, data: dict[str, Any] | None) -> tuple[Distributor, str]:
        """Create a distributor account and return it with a fresh token.

        Raises ``ValidationError`` for missing or malformed fields and
        ``ConflictError`` when the email is already registered.
        """
        data = data or {}
        fields = {key: data.get(key) for key in ("name", "email", "password", "address")}
        if not all(isinstance(v, str) and v.strip() for v in fields.values()):
            raise ValidationError("All fields are required.")

        name = fields["name"].strip()
        email = fields["email"].strip().lower()
        address = fields["address"].strip()
        password = fields["password"]

        problems = []
        if not _NAME_MIN <= len(name) <= _NAME_MAX:
            problems.append(f"Name must be between {_NAME_MIN} and {_NAME_MAX} characters")
        if not _EMAIL_RE.match(email):
            problems.append("Please use a valid email address")
        if len(password) < self._settings.min_password_length:
            problems.append(
                f"Password must be at least {self._settings.min_password_length} characters"
            )
        if len(address) > _ADDRESS_MAX:
            problems.append(f"Address must be at most {_ADDRESS_MAX} characters")
        if problems:
            raise ValidationError("Invalid input data: " + ". ".join(problems))

        if self._distributors.find_by_email(email) is not None:
            raise ConflictError("Email already registered.")

        distributor = self._distributors.create(
            Distributor(
                id=uuid4(),
                name=name,
                email=email,
                password_hash=hash_password(password),
                address=address,
            )
        )
        log.info("Registered distributor %s", distributor.email)
        return distributor, create_token(distributor, self._settings.token_secret)

    def login(self, data: dict[str, Any] | None) -> tuple[Distributor, str]:
        data = data or {}
        email = data.get("email")
        password = data.get("password")
        if not isinstance(email, str) or not email or not isinstance(password, str) or not password:
            raise ValidationError("Email and password required.")

        distributor = self._distributors.find_by_email(email)
        if distributor is None or not verify_password(password, distributor.password_hash):
            raise AuthenticationError("Invalid email or password.")

        log.info("Distributor %s logged in", distributor.email)
        return distributor, create_token(distributor, self._settings.token_secret)

    def get_all(self) -> list[Distributor]:
        return self._distributors.list_all()
