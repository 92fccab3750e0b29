import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    user: str
    date: datetime = Field(default_factory=utc_now)


class Post(BaseModel):
    id: Optional[str] = None
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    user: str
    likes: List[Like] = []
    comments: List[Comment] = []
    date: datetime = Field(default_factory=utc_now)


class PostRequest(BaseModel):
    """Payload for creating a post or adding a comment.

    Anything outside text/name/avatar (a client-supplied ``user`` included) is dropped.
    """
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = None
    name: Optional[str] = None
    avatar: Optional[str] = None
