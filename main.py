import logging
import os
from contextlib import asynccontextmanager

import firebase_admin
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware

from routes.posts import router as posts_router
from services.errors import PostError, InternalError, ValidationError
from services.firestore import FirestoreDB

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS", "./firebase.json")
POSTS_COLLECTION = os.getenv("POSTS_COLLECTION", "posts")
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(FIREBASE_CREDENTIALS)
    firebase_app = firebase_admin.initialize_app(cred)

    app.state.firestore = FirestoreDB(firebase_app, POSTS_COLLECTION)
    logger.info("Serving posts from Firestore collection '%s'", POSTS_COLLECTION)

    yield
    firebase_admin.delete_app(firebase_app)


app = FastAPI(lifespan=lifespan)


@app.exception_handler(PostError)
async def post_error_handler(request: Request, exc: PostError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.body())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed post bodies are reported like any other invalid post input"""
    errors = {}
    for error in exc.errors():
        loc = error["loc"]
        if len(loc) < 2:
            # no body at all, or a body that is not an object
            errors.setdefault("text", "Text field is required")
            continue
        field = str(loc[1])
        if error["type"] == "string_type":
            errors.setdefault(field, f"{field.capitalize()} must be a string")
        else:
            errors.setdefault(field, error["msg"])
    return await post_error_handler(request, ValidationError(errors))


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(posts_router, prefix="/api/posts", tags=["posts"])
