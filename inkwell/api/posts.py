# inkwell/api/posts.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from inkwell.api.deps import get_post_store

router = APIRouter(prefix="/posts", tags=["Posts"])


class PostBody(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    outline: Optional[str] = None
    style: Optional[str] = None
    tone: Optional[str] = None


@router.get("")
def list_posts(store=Depends(get_post_store)):
    return store.list_posts()


@router.get("/{post_id}")
def get_post(post_id: int, store=Depends(get_post_store)):
    post = store.get_post(post_id)
    if post is None:
        raise HTTPException(404, "Post not found")
    return post


@router.post("", status_code=201)
def create_post(body: Optional[PostBody] = None, store=Depends(get_post_store)):
    body = body or PostBody()
    return store.create_post(
        title=body.title or "",
        content=body.content or "",
        outline=body.outline or "",
        style=body.style or "",
        tone=body.tone or "",
    )


@router.put("/{post_id}")
def update_post(
    post_id: int,
    body: Optional[PostBody] = None,
    store=Depends(get_post_store),
):
    body = body or PostBody()
    post = store.update_post(post_id, **body.model_dump())
    if post is None:
        raise HTTPException(404, "Post not found")
    return post


@router.delete("/{post_id}", status_code=204)
def delete_post(post_id: int, store=Depends(get_post_store)):
    if not store.delete_post(post_id):
        raise HTTPException(404, "Post not found")
    return Response(status_code=204)
