"""Local replacement for the Users data source."""

from __future__ import annotations

import strawberry

from gramps import DataSource


class LocalUserModel:
    def names(self) -> list[str]:
        return ["local-ada", "local-grace"]


def users_query(info: strawberry.Info) -> list[str]:
    return info.context["users"].names()


data_source = DataSource(
    namespace="Users",
    context="users",
    model=LocalUserModel(),
    queries=[users_query],
)
