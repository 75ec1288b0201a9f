"""Caller identity.

Authentication happens upstream; the gateway forwards the verified user
in ``X-User-*`` headers and this service trusts them.
"""

from __future__ import annotations

from fastapi import Header, HTTPException, Request, status

from shophub.domain.model.value_objects import Customer, UserId
from shophub.infrastructure.bootstrap import Container


def get_container(request: Request) -> Container:
    return request.app.state.container


def current_customer(
    x_user_id: str | None = Header(None),
    x_user_name: str = Header(""),
    x_user_email: str = Header(""),
    x_user_role: str = Header(""),
) -> Customer:
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no user identity",
        )
    return Customer(
        user_id=UserId(x_user_id.strip()),
        name=x_user_name,
        email=x_user_email,
        is_admin=x_user_role.strip().lower() == "admin",
    )
