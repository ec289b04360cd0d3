from __future__ import annotations


class CustomerServiceError(Exception):
    """Base class for every failure the core reports to its callers."""


class NotFound(CustomerServiceError):
    pass


class InvalidCredentials(CustomerServiceError):
    """Phone or password is wrong. The two cases are never told apart."""


class ExpiredToken(CustomerServiceError):
    pass


class NoSuchUser(CustomerServiceError):
    """The presented token is not known at all."""


class InternalError(CustomerServiceError):
    """Store, crypto or random-source failure."""
