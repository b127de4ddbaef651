"""Authentication and authorization module."""

from app.auth.permissions import (
    ACCESS_POLICIES,
    AccessPolicy,
    AdminUserDep,
    Operation,
    Role,
    WriterUserDep,
    build_access_policies,
    enforce_ownership,
    has_role,
    require_policy,
    require_roles,
)

__all__ = [
    "ACCESS_POLICIES",
    "AccessPolicy",
    "AdminUserDep",
    "Operation",
    "Role",
    "WriterUserDep",
    "build_access_policies",
    "enforce_ownership",
    "has_role",
    "require_policy",
    "require_roles",
]
