"""Custom exception hierarchy for LearnLoop application."""


class LearnLoopError(Exception):
    """Base exception for all LearnLoop errors."""

    error_code = "internal_error"
    retryable = False
    partial = False

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    def to_response(self) -> dict[str, object]:
        """Serialize the error for an API response body."""
        return {
            "detail": self.message,
            "error": self.error_code,
            "retryable": self.retryable,
            "partial": self.partial,
        }


class NotFoundError(LearnLoopError):
    """Resource not found error."""

    error_code = "not_found"

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User with id {user_id} not found")


class TopicNotFoundError(NotFoundError):
    """Topic not found error."""

    def __init__(self, topic_id: int) -> None:
        self.topic_id = topic_id
        super().__init__(f"Topic with id {topic_id} not found")


class PostNotFoundError(NotFoundError):
    """Post not found error."""

    def __init__(self, post_id: int) -> None:
        self.post_id = post_id
        super().__init__(f"Post with id {post_id} not found")


class QuizNotFoundError(NotFoundError):
    """Quiz not found error."""

    def __init__(self, quiz_id: int) -> None:
        self.quiz_id = quiz_id
        super().__init__(f"Quiz with id {quiz_id} not found")


class ValidationError(LearnLoopError):
    """Malformed input, rejected before any mutation."""

    error_code = "validation_error"

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code=status_code)


class ConflictError(LearnLoopError):
    """Concurrent write collision that exhausted the retry budget."""

    error_code = "conflict"
    retryable = True

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=409)


class ProviderError(LearnLoopError):
    """Content provider call failed or timed out."""

    error_code = "provider_error"

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        self.kind = kind
        super().__init__(message, status_code=502)


class StoreError(LearnLoopError):
    """Underlying persistence failure."""

    error_code = "store_error"

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=500)


class PartialActivityError(StoreError):
    """Learning session was recorded but a progress update failed afterwards."""

    error_code = "activity_partially_applied"
    partial = True

    def __init__(self, session_id: int, reason: str) -> None:
        self.session_id = session_id
        self.reason = reason
        super().__init__(
            f"Learning session {session_id} was recorded but progress was not fully "
            f"updated: {reason}"
        )

    def to_response(self) -> dict[str, object]:
        body = super().to_response()
        body["session_id"] = self.session_id
        return body


class QuizAlreadySubmittedError(ConflictError):
    """Quiz was graded by an earlier submission."""

    error_code = "quiz_already_submitted"
    retryable = False

    def __init__(self, quiz_id: int) -> None:
        self.quiz_id = quiz_id
        super().__init__(f"Quiz {quiz_id} was already submitted")


class UnauthenticatedError(LearnLoopError):
    """Request did not identify its caller."""

    error_code = "unauthenticated"

    def __init__(self) -> None:
        super().__init__("Missing X-User-Id header", status_code=401)
