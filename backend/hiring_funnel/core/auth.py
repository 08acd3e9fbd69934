from __future__ import annotations

from typing import Iterable

from fastapi import Depends, HTTPException, Request, status

from hiring_funnel.core.roles import Role, has_required_role
from hiring_funnel.schemas.user import UserContext


async def get_current_user(request: Request) -> UserContext:
    # Identity is established upstream; this service trusts the forwarded headers:
    # - X-User-Id: 42
    # - X-User-Email: user@company.com
    # - X-User-Roles: recruiter,hiring_manager
    raw_id = (request.headers.get("x-user-id") or "").strip()
    if not raw_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing user identity")
    try:
        user_id = int(raw_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid user identity")

    roles: list[Role] = []
    for raw in (request.headers.get("x-user-roles") or "").split(","):
        raw = raw.strip().lower()
        if not raw:
            continue
        try:
            roles.append(Role(raw))
        except ValueError:
            continue
    if not roles:
        roles = [Role.CANDIDATE]

    email = (request.headers.get("x-user-email") or "").strip().lower() or None
    full_name = request.headers.get("x-user-name") or (_derive_name_from_email(email) if email else None)
    return UserContext(user_id=user_id, email=email, roles=roles, full_name=full_name)


def _derive_name_from_email(email: str) -> str:
    local = email.split("@", 1)[0].strip()
    if not local:
        return email
    parts = [p for p in local.replace("_", ".").split(".") if p]
    if not parts:
        return local
    return " ".join(p[:1].upper() + p[1:] for p in parts)


def require_roles(required: Iterable[Role]):
    required = list(required)

    async def dependency(user: UserContext = Depends(get_current_user)) -> UserContext:
        if not has_required_role(user.roles, required):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return user

    return dependency
