from __future__ import annotations

from contextvars import ContextVar


_REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("request_id", default=None)
_CUSTOMER_ID_CTX: ContextVar[str | None] = ContextVar("customer_id", default=None)


def set_request_context(*, request_id: str | None = None, customer_id: int | str | None = None) -> None:
    if request_id is not None:
        _REQUEST_ID_CTX.set(request_id)
    if customer_id is not None:
        _CUSTOMER_ID_CTX.set(str(customer_id))


def get_request_id() -> str | None:
    return _REQUEST_ID_CTX.get()


def get_customer_id() -> str | None:
    return _CUSTOMER_ID_CTX.get()


def clear_request_context() -> None:
    _REQUEST_ID_CTX.set(None)
    _CUSTOMER_ID_CTX.set(None)


def bind_customer_id(customer_id: int | str | None) -> None:
    """Bind (or with ``None`` unbind) the customer of the current request."""
    _CUSTOMER_ID_CTX.set(None if customer_id is None else str(customer_id))
