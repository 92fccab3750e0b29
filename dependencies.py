import logging
from typing import Annotated

from fastapi import Request, Depends
from firebase_admin.auth import verify_id_token, InvalidIdTokenError, CertificateFetchError, UserDisabledError

from models.user import User
from services.errors import UnauthorizedError
from services.firestore import FirestoreDB
from services.posts import PostManager

logger = logging.getLogger(__name__)


async def get_current_user(request: Request) -> User:
    """
    Verify Firebase ID token from Authorization header and return user info
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("Invalid authorization header")

    token = authorization.split("Bearer ")[1]
    try:
        decoded_token = verify_id_token(token, check_revoked=True, clock_skew_seconds=10)
    except (ValueError, InvalidIdTokenError, CertificateFetchError, UserDisabledError) as e:
        logger.info("Rejected authentication token: %s", e)
        raise UnauthorizedError("Invalid authentication token")

    return User(
        user_id=decoded_token["uid"],
        email=decoded_token.get("email"),
    )


async def get_firestore(request: Request) -> FirestoreDB:
    """ Get Firestore DB from app state """
    return request.app.state.firestore


Firestore = Annotated[FirestoreDB, Depends(get_firestore)]


async def get_post_manager(db: Firestore) -> PostManager:
    """Build the post manager over the app's document store"""
    return PostManager(db)


CurrentUser = Annotated[User, Depends(get_current_user)]
Posts = Annotated[PostManager, Depends(get_post_manager)]
