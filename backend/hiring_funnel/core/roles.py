from enum import Enum
from typing import Iterable


class Role(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    RECRUITER = "recruiter"
    HIRING_MANAGER = "hiring_manager"
    CANDIDATE = "candidate"


ROLE_HIERARCHY = {
    Role.SUPER_ADMIN: {Role.SUPER_ADMIN, Role.ADMIN, Role.RECRUITER, Role.HIRING_MANAGER},
    Role.ADMIN: {Role.ADMIN, Role.RECRUITER, Role.HIRING_MANAGER},
    Role.RECRUITER: {Role.RECRUITER},
    Role.HIRING_MANAGER: {Role.HIRING_MANAGER},
    Role.CANDIDATE: {Role.CANDIDATE},
}

# Roles whose analytics scope covers every job, not only self-posted ones.
ALL_JOBS_ROLES = frozenset({Role.SUPER_ADMIN, Role.ADMIN})


def effective_roles(user_roles: Iterable[Role]) -> set[Role]:
    granted: set[Role] = set()
    for role in user_roles:
        granted |= ROLE_HIERARCHY[Role(role)]
    return granted


def has_required_role(user_roles: Iterable[Role], required: Iterable[Role]) -> bool:
    required_set = {Role(r) for r in required}
    return bool(effective_roles(user_roles) & required_set)


def sees_all_jobs(user_roles: Iterable[Role]) -> bool:
    return bool({Role(r) for r in user_roles} & ALL_JOBS_ROLES)
