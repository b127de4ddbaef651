"""
Role-based access control (RBAC) and resource ownership rules.

Every protected operation is listed once in ``ACCESS_POLICIES`` with the
roles allowed to attempt it and whether the actor must also own the
resource. Routes apply the role gate through ``require_policy`` and the
ownership rule through ``enforce_ownership`` after loading the resource.
"""

from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Annotated, NamedTuple
from uuid import UUID

from fastapi import Depends

from app.configs import settings
from app.dependencies.dependencies import get_current_user
from app.errors.auth import ForbiddenError
from app.models import Role, UserDB
from app.monitoring import get_logger

logger = get_logger(__name__)


ALL_ROLES = frozenset(Role)
WRITER_ROLES = frozenset({Role.ADMIN, Role.EDITOR, Role.AUTHOR})


class Operation(StrEnum):
    """Operations that pass through the access policy table."""

    USER_DELETE = "user:delete"
    BLOG_CREATE = "blog:create"
    BLOG_READ = "blog:read"
    BLOG_UPDATE = "blog:update"
    BLOG_DELETE = "blog:delete"
    BLOG_PUBLISH = "blog:publish"
    BLOG_REACT = "blog:react"
    COMMENT_CREATE = "comment:create"
    COMMENT_EDIT = "comment:edit"
    COMMENT_DELETE = "comment:delete"
    ADMIN_ANALYTICS = "admin:analytics"


class AccessPolicy(NamedTuple):
    """
    Who may perform an operation.

    Attributes:
        roles: Roles that pass the coarse gate.
        ownership_required: If True, non-admin actors must also own the resource.
    """

    roles: frozenset[Role]
    ownership_required: bool = False


def build_access_policies(
    *,
    blog_mutation_requires_ownership: bool,
) -> dict[Operation, AccessPolicy]:
    """
    Build the operation policy table.

    Blog update and delete are role-gated only unless
    ``blog_mutation_requires_ownership`` is set, while publish and
    unpublish always check ownership.
    """
    return {
        Operation.USER_DELETE: AccessPolicy(ALL_ROLES, ownership_required=True),
        Operation.BLOG_CREATE: AccessPolicy(WRITER_ROLES),
        Operation.BLOG_READ: AccessPolicy(ALL_ROLES),
        Operation.BLOG_UPDATE: AccessPolicy(
            WRITER_ROLES,
            ownership_required=blog_mutation_requires_ownership,
        ),
        Operation.BLOG_DELETE: AccessPolicy(
            WRITER_ROLES,
            ownership_required=blog_mutation_requires_ownership,
        ),
        Operation.BLOG_PUBLISH: AccessPolicy(WRITER_ROLES, ownership_required=True),
        Operation.BLOG_REACT: AccessPolicy(ALL_ROLES),
        Operation.COMMENT_CREATE: AccessPolicy(ALL_ROLES),
        Operation.COMMENT_EDIT: AccessPolicy(ALL_ROLES, ownership_required=True),
        Operation.COMMENT_DELETE: AccessPolicy(ALL_ROLES, ownership_required=True),
        Operation.ADMIN_ANALYTICS: AccessPolicy(frozenset({Role.ADMIN})),
    }


ACCESS_POLICIES = build_access_policies(
    blog_mutation_requires_ownership=settings.BLOG_MUTATION_REQUIRES_OWNERSHIP,
)


def has_role(user: UserDB, roles: frozenset[Role]) -> bool:
    return user.role in roles


def require_roles(*roles: Role) -> Callable[..., Awaitable[UserDB]]:
    """
    Create a dependency that requires one of the given roles.

    Args:
        roles: Accepted roles

    Returns:
        Callable: Dependency resolving to the authenticated user

    Example:
        @router.get("/editors-only")
        async def editors_route(
            user: Annotated[UserDB, Depends(require_roles(Role.ADMIN, Role.EDITOR))],
        ): ...
    """
    accepted = frozenset(roles)

    async def role_checker(
        user: Annotated[UserDB, Depends(get_current_user)],
    ) -> UserDB:
        if not has_role(user, accepted):
            logger.info("Role gate rejected request", user_id=str(user.id), role=user.role)
            raise ForbiddenError()
        return user

    return role_checker


def require_policy(operation: Operation) -> Callable[..., Awaitable[UserDB]]:
    """Role gate for ``operation`` as configured in ``ACCESS_POLICIES``."""
    return require_roles(*ACCESS_POLICIES[operation].roles)


def enforce_ownership(operation: Operation, actor: UserDB, owner_id: UUID | None) -> None:
    """
    Apply the ownership half of an operation's policy.

    Must run after the resource is loaded and before it is mutated.
    Admins always pass; otherwise the actor must be the owner when the
    policy demands it.

    Parameters
    ----------
    operation : Operation
        Operation being attempted.
    actor : UserDB
        Authenticated user.
    owner_id : UUID | None
        Owner of the target resource; None when the owner was deleted.

    Raises
    ------
    ForbiddenError
        If ownership is required and the actor is neither admin nor owner.
    """
    policy = ACCESS_POLICIES[operation]
    if not policy.ownership_required or actor.role == Role.ADMIN:
        return
    if owner_id is None or actor.id != owner_id:
        logger.info(
            "Ownership check rejected request",
            operation=operation.value,
            user_id=str(actor.id),
        )
        raise ForbiddenError()


AdminUserDep = Annotated[UserDB, Depends(require_policy(Operation.ADMIN_ANALYTICS))]
WriterUserDep = Annotated[UserDB, Depends(require_policy(Operation.BLOG_CREATE))]
