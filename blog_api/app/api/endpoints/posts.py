"""
Blog post endpoints.

These routes expose the CRUD API consumed by the frontend.  Handlers
are coroutines that call the synchronous ``PostStore`` without
awaiting anything in between, so every store operation completes
before the event loop switches to another request.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from blog_api.app.api.deps import get_post_create, get_post_store, get_post_update
from blog_api.app.schemas.post import MessageResponse, PostCreate, PostRead, PostUpdate
from blog_api.app.services.post_service import PostResult, PostStore

router = APIRouter()

NOT_FOUND_RESPONSES = {status.HTTP_404_NOT_FOUND: {"model": MessageResponse}}


def _not_found(result: PostResult) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": result.message})


@router.get("", response_model=List[PostRead])
async def list_posts(store: PostStore = Depends(get_post_store)) -> List[PostRead]:
    """Return all posts in the order they were created."""
    return store.list_posts()


@router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_in: PostCreate = Depends(get_post_create),
    store: PostStore = Depends(get_post_store),
) -> PostRead:
    """Create a post; ``id`` and ``timestamp`` are assigned by the server."""
    result = store.create_post(post_in)
    return result.post


@router.put("/{post_id}", response_model=PostRead, responses=NOT_FOUND_RESPONSES)
async def update_post(
    post_id: str,
    post_in: PostUpdate = Depends(get_post_update),
    store: PostStore = Depends(get_post_store),
):
    """Apply the fields present in the body to an existing post.

    Returns HTTP 404 with ``{"message": "Post not found"}`` if no post
    has this ID.
    """
    result = store.update_post(post_id, post_in)
    if not result.found:
        return _not_found(result)
    return result.post


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND_RESPONSES,
)
async def delete_post(post_id: str, store: PostStore = Depends(get_post_store)) -> Response:
    """Delete a post.  Returns an empty 204 response on success."""
    result = store.delete_post(post_id)
    if not result.found:
        return _not_found(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
