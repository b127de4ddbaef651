# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AuthServiceDep,
    BlogListQuery,
    BlogQueryListDep,
    BlogRepoDep,
    BlogServiceDep,
    CategoryRepoDep,
    CommentRepoDep,
    CredentialsDep,
    HasherDep,
    SessionDep,
    TagRepoDep,
    UserDBDep,
    UserRepoDep,
    get_blog_list_query,
    get_credentials,
    get_current_user,
    get_password_hasher,
)

__all__ = [
    "AuthServiceDep",
    "BlogListQuery",
    "BlogQueryListDep",
    "BlogRepoDep",
    "BlogServiceDep",
    "CategoryRepoDep",
    "CommentRepoDep",
    "CredentialsDep",
    "HasherDep",
    "SessionDep",
    "TagRepoDep",
    "UserDBDep",
    "UserRepoDep",
    "get_blog_list_query",
    "get_credentials",
    "get_current_user",
    "get_password_hasher",
]
