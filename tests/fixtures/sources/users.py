"""Users data source used across the test suite."""

from __future__ import annotations

import itertools
from enum import Enum

import strawberry

from gramps import DataSource


@strawberry.enum
class Role(Enum):
    ADMIN = "admin"
    MEMBER = "member"


@strawberry.type
class User:
    id: strawberry.ID
    name: str
    email: str | None
    role: Role


class UserModel:
    """In-memory user store."""

    def __init__(self) -> None:
        self._ids = itertools.count(3)
        self._users = {
            "1": User(id=strawberry.ID("1"), name="Ada", email="ada@example.com", role=Role.ADMIN),
            "2": User(id=strawberry.ID("2"), name="Grace", email=None, role=Role.MEMBER),
        }

    def get(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def all(self) -> list[User]:
        return list(self._users.values())

    def create(self, name: str) -> User:
        user_id = str(next(self._ids))
        user = User(id=strawberry.ID(user_id), name=name, email=None, role=Role.MEMBER)
        self._users[user_id] = user
        return user


def user_query(info: strawberry.Info, id: strawberry.ID) -> User | None:
    return info.context["users"].get(id)


def users_query(info: strawberry.Info) -> list[User]:
    return info.context["users"].all()


def create_user_mutation(info: strawberry.Info, name: str) -> User:
    return info.context["users"].create(name)


def make_data_source() -> DataSource:
    return DataSource(
        namespace="Users",
        context="users",
        model=UserModel(),
        queries=[user_query, users_query],
        mutations=[create_user_mutation],
        mocks={"User": lambda: {"name": "Mock User"}},
    )


data_source = make_data_source
