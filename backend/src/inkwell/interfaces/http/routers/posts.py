"""Posts router: public reads, owner-only writes."""
from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from inkwell.application.blog.pagination import resolve_window
from inkwell.interfaces.http.dependencies import CurrentUserId, Facade
from inkwell.interfaces.http.schemas.blog import PostListResponse, PostResponse, PostWrite

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=PostListResponse)
async def list_posts(
    facade: Facade,
    limit: Annotated[int | None, Query(description="Items per page (1..=100)")] = None,
    offset: Annotated[int | None, Query(description="Offset from the beginning (>= 0)")] = None,
):
    limit, offset = resolve_window(limit, offset)
    result = await facade.list_posts(limit, offset)
    return PostListResponse.from_result(result)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, facade: Facade):
    post = await facade.get_post(post_id)
    return PostResponse.from_post(post)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(body: PostWrite, facade: Facade, current_user_id: CurrentUserId):
    post = await facade.create_post(current_user_id, title=body.title, content=body.content)
    return PostResponse.from_post(post)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(post_id: int, body: PostWrite, facade: Facade, current_user_id: CurrentUserId):
    post = await facade.update_post(
        current_user_id, post_id, title=body.title, content=body.content
    )
    return PostResponse.from_post(post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, facade: Facade, current_user_id: CurrentUserId):
    await facade.delete_post(current_user_id, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
