from typing import Dict, List

from fastapi import APIRouter, Response

from dependencies import Posts, CurrentUser
from models.post import Post, PostRequest

router = APIRouter()


@router.get("/test")
async def test_posts() -> Dict[str, str]:
    """Tests posts route"""
    return {"msg": "Posts Works"}


@router.get("", response_model=List[Post])
async def get_posts(posts: Posts):
    """Get all posts, newest first"""
    return posts.list_posts()


@router.get("/{post_id}", response_model=Post)
async def get_post(posts: Posts, post_id: str):
    """Get post by id"""
    return posts.get_post(post_id)


@router.post("", response_model=Post)
async def create_post(posts: Posts, post_data: PostRequest, current_user: CurrentUser):
    """Create a new post owned by the caller"""
    return posts.create_post(current_user, post_data)


@router.post("/like/{post_id}", response_model=Post)
async def like_post(posts: Posts, post_id: str, current_user: CurrentUser):
    return posts.like_post(current_user, post_id)


@router.post("/unlike/{post_id}", response_model=Post)
async def unlike_post(posts: Posts, post_id: str, current_user: CurrentUser):
    return posts.unlike_post(current_user, post_id)


@router.post("/comment/{post_id}", response_model=Post)
async def add_comment(posts: Posts, post_id: str, comment: PostRequest, current_user: CurrentUser):
    """Add a comment to a post"""
    return posts.add_comment(current_user, post_id, comment)


@router.delete("/comment/{post_id}/{comment_id}", status_code=204)
async def remove_comment(posts: Posts, post_id: str, comment_id: str, current_user: CurrentUser):
    """Remove a comment from a post"""
    posts.remove_comment(current_user, post_id, comment_id)
    return Response(status_code=204)


@router.delete("/{post_id}", status_code=204)
async def delete_post(posts: Posts, post_id: str, current_user: CurrentUser):
    """Delete a post, only its owner may do so"""
    posts.delete_post(current_user, post_id)
    return Response(status_code=204)
