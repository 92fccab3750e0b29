from typing import Any, Dict


class PostError(Exception):
    """Base of every failure the posts API reports to a caller"""
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message

    def body(self) -> Dict[str, Any]:
        return {"result": self.message}


class ValidationError(PostError):
    status_code = 400

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Invalid post input")
        self.errors = errors

    def body(self) -> Dict[str, Any]:
        return dict(self.errors)


class NotFoundError(PostError):
    status_code = 404


class ConflictError(PostError):
    # reported as a plain client error, same as the original API
    status_code = 400


class UnauthorizedError(PostError):
    status_code = 401


class InternalError(PostError):
    status_code = 500


class StoreError(Exception):
    """Raised by the document store when the backing database call fails"""
