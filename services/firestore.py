import logging
from typing import Any, Dict, List, Optional

import firebase_admin
from firebase_admin import firestore as fs
from google.api_core.exceptions import GoogleAPIError, NotFound
from google.cloud import firestore

from models.post import Post
from services.errors import StoreError

logger = logging.getLogger(__name__)


class FirestoreDB:
    """Post documents kept in a single Firestore collection.

    Likes and comments live inside the post document as arrays of maps, so every
    write replaces the whole document.
    """

    def __init__(self, app: firebase_admin.App, collection_name: str = "posts"):
        self.db = fs.client(app)
        self.collection_name = collection_name

    def collection(self):
        return self.db.collection(self.collection_name)

    @staticmethod
    def _to_post(snapshot) -> Post:
        return Post(id=snapshot.id, **snapshot.to_dict())

    @staticmethod
    def _to_document(post: Post) -> Dict[str, Any]:
        return post.model_dump(exclude={"id"})

    def get_all_posts(self) -> List[Post]:
        """Get all posts sorted by date descending"""
        try:
            docs = self.collection().order_by("date", direction=firestore.Query.DESCENDING).stream()
            return [self._to_post(doc) for doc in docs]
        except GoogleAPIError as e:
            logger.error("Failed to list posts: %s", e)
            raise StoreError("Failed to list posts") from e

    def get_post(self, post_id: str) -> Optional[Post]:
        """Get a post by ID, None when it does not exist"""
        try:
            snapshot = self.collection().document(post_id).get()
        except GoogleAPIError as e:
            logger.error("Failed to fetch post %s: %s", post_id, e)
            raise StoreError(f"Failed to fetch post {post_id}") from e

        if not snapshot.exists:
            return None
        return self._to_post(snapshot)

    def create_post(self, post: Post) -> Post:
        """Insert a new post and return it with its generated ID"""
        new_post_ref = self.collection().document()
        try:
            new_post_ref.set(self._to_document(post))
        except GoogleAPIError as e:
            logger.error("Failed to create post: %s", e)
            raise StoreError("Failed to create post") from e
        return post.model_copy(update={"id": new_post_ref.id})

    def update_post(self, post: Post) -> Post:
        """Overwrite the stored document with the given post"""
        try:
            self.collection().document(post.id).set(self._to_document(post))
        except GoogleAPIError as e:
            logger.error("Failed to update post %s: %s", post.id, e)
            raise StoreError(f"Failed to update post {post.id}") from e
        return post

    def delete_post(self, post_id: str) -> bool:
        """Delete a post, False when there was nothing to delete"""
        post_ref = self.collection().document(post_id)
        try:
            post_ref.delete(option=self.db.write_option(exists=True))
        except NotFound:
            return False
        except GoogleAPIError as e:
            logger.error("Failed to delete post %s: %s", post_id, e)
            raise StoreError(f"Failed to delete post {post_id}") from e
        return True
