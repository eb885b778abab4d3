"""Blog use-case commands: create, update, delete posts.

Update and delete share one ownership policy: fetch first to tell ``NotFound`` from
``Forbidden``, then mutate with a statement guarded by ``author_id`` so a concurrent
change between the two steps can never be applied twice.
"""
from __future__ import annotations

from inkwell.domain.blog.entities import NewPost, Post, PostPatch
from inkwell.domain.blog.repositories import IPostRepository
from inkwell.domain.blog.value_objects import Content, Title, is_storable_id, require_positive
from inkwell.domain.errors import ForbiddenError, NotFoundError

POST = "post"


async def create_post(
    *,
    author_id: int,
    title: str,
    content: str,
    repo: IPostRepository,
) -> Post:
    new_post = NewPost(
        title=Title(title),
        content=Content(content),
        author_id=require_positive("author_id", author_id),
    )
    return await repo.create(new_post)


async def _get_owned(post_id: int, actor_id: int, repo: IPostRepository) -> Post:
    post = await repo.get_by_id(post_id) if is_storable_id(post_id) else None
    if post is None:
        raise NotFoundError(POST)
    if not post.is_owned_by(actor_id):
        raise ForbiddenError()
    return post


async def update_post(
    *,
    actor_id: int,
    post_id: int,
    title: str,
    content: str,
    repo: IPostRepository,
) -> Post:
    patch = PostPatch(title=Title(title), content=Content(content))
    await _get_owned(post_id, actor_id, repo)

    updated = await repo.update_owned(post_id, actor_id, patch)
    if updated is None:
        # deleted between the fetch and the guarded update
        raise NotFoundError(POST)
    return updated


async def delete_post(*, actor_id: int, post_id: int, repo: IPostRepository) -> None:
    await _get_owned(post_id, actor_id, repo)

    if not await repo.delete_owned(post_id, actor_id):
        raise NotFoundError(POST)
