"""Value Objects of the Ordering context."""

from __future__ import annotations

import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone

from commerce.shared.domain.exceptions import ValidationError

_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+$")
_PHONE_PATTERN = re.compile(r"^\+?[0-9\-\s()]{7,20}$")
_ORDER_NUMBER_PATTERN = re.compile(r"^ORD-(\d{4})-(\d{5})$")


@dataclass(frozen=True)
class Address:
    """A shipping address.  Every part is required."""

    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def __post_init__(self) -> None:
        for attr, label in (
            ("street", "Street"),
            ("city", "City"),
            ("state", "State"),
            ("zip_code", "Zip code"),
            ("country", "Country"),
        ):
            value = getattr(self, attr)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"{label} is required")
            object.__setattr__(self, attr, value.strip())

    @property
    def full_address(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.zip_code}, {self.country}"

    def __str__(self) -> str:
        return self.full_address


@dataclass(frozen=True)
class CustomerInfo:
    """Contact details captured on the order before it is submitted."""

    name: str
    email: str
    phone: str | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Customer name is required")
        name = self.name.strip()
        if not 2 <= len(name) <= 100:
            raise ValidationError("Customer name must be between 2 and 100 characters")
        if not self.email or not self.email.strip():
            raise ValidationError("Customer email is required")
        email = self.email.strip()
        if not _EMAIL_PATTERN.match(email):
            raise ValidationError(f"Invalid email format: {email}")
        phone = self.phone.strip() if self.phone else None
        if phone and not _PHONE_PATTERN.match(phone):
            raise ValidationError(f"Invalid phone format: {phone}")

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "email", email)
        object.__setattr__(self, "phone", phone or None)


@dataclass(frozen=True)
class OrderNumber:
    """Human-readable order reference, ``ORD-YYYY-NNNNN``.

    Assigned once, when the order is submitted.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not _ORDER_NUMBER_PATTERN.match(self.value):
            raise ValidationError(
                f"Order number must match format ORD-YYYY-NNNNN: {self.value!r}"
            )

    @staticmethod
    def generate(now: datetime | None = None, sequence: int | None = None) -> OrderNumber:
        now = now or datetime.now(timezone.utc)
        if sequence is None:
            sequence = secrets.randbelow(99999) + 1
        return OrderNumber(f"ORD-{now.year:04d}-{sequence:05d}")

    @property
    def year(self) -> int:
        return int(self.value.split("-")[1])

    @property
    def sequence(self) -> int:
        return int(self.value.split("-")[2])

    def __str__(self) -> str:
        return self.value
