"""Posts data source with an interface, async resolvers and a subscription."""

from __future__ import annotations

import datetime
from collections.abc import AsyncGenerator

import strawberry

from gramps import DataSource


@strawberry.interface
class Node:
    id: strawberry.ID


@strawberry.type
class Post(Node):
    title: str
    published_at: datetime.datetime
    tags: list[str]


@strawberry.type
class Comment(Node):
    body: str


class PostModel:
    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {
            "p1": Post(
                id=strawberry.ID("p1"),
                title="Hello gramps",
                published_at=datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc),
                tags=["intro"],
            ),
            "c1": Comment(id=strawberry.ID("c1"), body="First!"),
        }

    async def latest(self) -> Post | None:
        return self._nodes["p1"]  # type: ignore[return-value]

    def get(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)


async def latest_post_query(info: strawberry.Info) -> Post | None:
    return await info.context["posts"].latest()


def node_query(info: strawberry.Info, id: strawberry.ID) -> Node | None:
    return info.context["posts"].get(id)


async def post_added_subscription(info: strawberry.Info) -> AsyncGenerator[Post, None]:
    post = await info.context["posts"].latest()
    if post is not None:
        yield post


def make_data_source() -> DataSource:
    return DataSource(
        namespace="Posts",
        context="posts",
        model=PostModel(),
        queries=[latest_post_query, node_query],
        subscriptions=[post_added_subscription],
        types=[Comment],
        mocks={"Post": lambda: {"title": "Mocked post"}},
    )


data_source = make_data_source
