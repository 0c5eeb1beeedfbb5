from __future__ import annotations

import math


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"


class AuthenticationError(DomainError):
    """Raised when kiosk credentials are invalid."""

    code = "invalid_credentials"
    public_message = "Invalid CPF or PIN"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class EmployeeNotFound(AuthenticationError):
    """No active employee matches the given identity."""


class InvalidCredentials(AuthenticationError):
    """The PIN does not match the stored hash."""


class AccountLocked(AuthenticationError):
    code = "account_locked"

    def __init__(self, remaining_seconds: float):
        self.remaining_minutes = max(1, math.ceil(remaining_seconds / 60))
        super().__init__(f"Account locked. Try again in {self.remaining_minutes} minute(s).")


class AuthorizationError(DomainError):
    """Raised when the actor lacks permission for an action."""

    code = "forbidden"


class DeviceUnauthorized(DomainError):
    code = "device_unauthorized"

    def __init__(self, message: str = "Device not authorized"):
        super().__init__(message)


class TooSoon(DomainError):
    code = "too_soon"

    def __init__(self, retry_after_seconds: int, cooldown_minutes: int):
        self.retry_after_seconds = int(retry_after_seconds)
        super().__init__(f"Wait at least {cooldown_minutes} minutes between punches.")


class StorageFailure(DomainError):
    code = "storage_failure"

    def __init__(self, message: str = "Could not store the selfie, please try again"):
        super().__init__(message)


class PersistenceFailure(DomainError):
    code = "persistence_failure"

    def __init__(self, message: str = "Could not record the punch, please try again"):
        super().__init__(message)
