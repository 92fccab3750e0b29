from typing import Callable, List, TypeVar

from models.post import Comment, Like, Post, PostRequest
from models.user import User
from services.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)
from services.firestore import FirestoreDB
from services.validation import validate_post_input

T = TypeVar("T")


class PostManager:
    """
    Create/read/update/delete operations over posts and their likes and comments.

    Likes and comments are read-modify-write: the post is fetched, changed in memory
    and written back whole. Two callers changing the same post at the same moment can
    overwrite each other's change (no transaction or conditional write is used).
    """

    def __init__(self, db: FirestoreDB):
        self.db = db

    @staticmethod
    def _store(call: Callable[..., T], *args) -> T:
        try:
            return call(*args)
        except StoreError as e:
            raise InternalError(str(e)) from e

    @staticmethod
    def _validate(data: PostRequest):
        errors, is_valid = validate_post_input(data)
        if not is_valid:
            raise ValidationError(errors)

    def _find(self, post_id: str) -> Post:
        post = self._store(self.db.get_post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def list_posts(self) -> List[Post]:
        return self._store(self.db.get_all_posts)

    def get_post(self, post_id: str) -> Post:
        return self._find(post_id)

    def create_post(self, caller: User, data: PostRequest) -> Post:
        self._validate(data)
        post = Post(
            text=data.text,
            name=data.name,
            avatar=data.avatar,
            user=caller.user_id,
        )
        return self._store(self.db.create_post, post)

    def like_post(self, caller: User, post_id: str) -> Post:
        post = self._find(post_id)
        if any(like.user == caller.user_id for like in post.likes):
            raise ConflictError("User already liked this post")

        post.likes.insert(0, Like(user=caller.user_id))
        return self._store(self.db.update_post, post)

    def unlike_post(self, caller: User, post_id: str) -> Post:
        post = self._find(post_id)
        if not any(like.user == caller.user_id for like in post.likes):
            raise ConflictError("User has not yet liked this post")

        post.likes = [like for like in post.likes if like.user != caller.user_id]
        return self._store(self.db.update_post, post)

    def add_comment(self, caller: User, post_id: str, data: PostRequest) -> Post:
        self._validate(data)
        post = self._find(post_id)

        comment = Comment(
            text=data.text,
            name=data.name,
            avatar=data.avatar,
            user=caller.user_id,
        )
        post.comments.insert(0, comment)
        return self._store(self.db.update_post, post)

    def remove_comment(self, caller: User, post_id: str, comment_id: str) -> None:
        # any authenticated caller may remove any comment
        post = self._find(post_id)
        if not any(comment.id == comment_id for comment in post.comments):
            raise NotFoundError("Comment not found")

        post.comments = [comment for comment in post.comments if comment.id != comment_id]
        self._store(self.db.update_post, post)

    def delete_post(self, caller: User, post_id: str) -> None:
        post = self._find(post_id)
        if post.user != caller.user_id:
            raise UnauthorizedError("User not authorized")

        if not self._store(self.db.delete_post, post_id):
            raise NotFoundError("Post not found")
