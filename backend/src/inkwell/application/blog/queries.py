"""Blog use-case queries."""
from dataclasses import dataclass

from inkwell.domain.blog.entities import Post
from inkwell.domain.blog.repositories import IPostRepository
from inkwell.domain.blog.value_objects import is_storable_id
from inkwell.domain.errors import NotFoundError

from .pagination import to_pagination


@dataclass
class ListPostsResult:
    posts: list[Post]
    page: int
    page_size: int
    total: int

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


async def get_post(post_id: int, repo: IPostRepository) -> Post:
    post = await repo.get_by_id(post_id) if is_storable_id(post_id) else None
    if post is None:
        raise NotFoundError("post")
    return post


async def list_posts(*, limit: int, offset: int, repo: IPostRepository) -> ListPostsResult:
    """One page of posts, newest first, plus the overall count.

    ``total`` comes from a separate count query, so under concurrent writes it may
    briefly disagree with the page contents.
    """
    pagination = to_pagination(limit, offset)
    posts = await repo.list_page(pagination)
    total = await repo.count()
    return ListPostsResult(
        posts=posts,
        page=pagination.page,
        page_size=pagination.page_size,
        total=total,
    )
