"""Error Hierarchy — typed, categorized exceptions for all MelodyHub failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every JSON error
    - No absolute filesystem paths leaked in user-facing messages

Design Decisions:
    - Single hierarchy with MelodyHubError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    UNSUPPORTED = "unsupported"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    queue_id: str | None = None
    media_path: str | None = None
    debug_info: dict[str, Any] | None = None


class MelodyHubError(Exception):
    """Base exception for all MelodyHub errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.headers: dict[str, str] = {}

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "queue_id": self.context.queue_id,
                    "media_path": self.context.media_path,
                },
            }
        }


# ─── Library Errors (400-level) ─────────────────────────────────

class InvalidPathError(MelodyHubError):
    """Requested path escapes the media root or is malformed."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.media_path = path
        super().__init__(
            "Invalid path", "INVALID_PATH", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )


class DirectoryNotFoundError(MelodyHubError):
    """Path resolved inside the root but is not a directory."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.media_path = path
        super().__init__(
            "Directory not found", "DIRECTORY_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, ctx, 404,
        )


class MediaNotFoundError(MelodyHubError):
    """Audio or image file missing (or outside the root — reported identically)."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.media_path = path
        super().__init__(
            "File not found", "MEDIA_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, ctx, 404,
        )


class PlaylistNotFoundError(MelodyHubError):
    """Playlist file does not exist."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.media_path = path
        super().__init__(
            "Playlist not found", "PLAYLIST_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, ctx, 404,
        )


class UnsupportedPlaylistFormatError(MelodyHubError):
    """Playlist extension is not m3u, m3u8 or pls."""
    def __init__(self, extension: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unsupported playlist format: '{extension or '(none)'}'",
            "UNSUPPORTED_PLAYLIST_FORMAT", ErrorCategory.UNSUPPORTED,
            ErrorSeverity.ERROR, context, 415,
        )
        self.extension = extension


class PlaylistTooLargeError(MelodyHubError):
    """Imported playlist text exceeds the configured upload limit."""
    def __init__(self, size: int, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Playlist upload is {size} bytes (limit {limit})",
            "PLAYLIST_TOO_LARGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 413,
        )


class RangeNotSatisfiableError(MelodyHubError):
    """Range header lies entirely outside the file."""
    def __init__(self, size: int, context: ErrorContext | None = None):
        super().__init__(
            f"Requested range not satisfiable (size {size})",
            "RANGE_NOT_SATISFIABLE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 416,
        )
        self.size = size
        self.headers = {"Content-Range": f"bytes */{size}"}


class InvalidRangeError(MelodyHubError):
    """Range header is not a bytes range or names no usable range."""
    def __init__(self, header: str, context: ErrorContext | None = None):
        super().__init__(
            "Malformed Range header", "INVALID_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.header = header


class InvalidActionError(MelodyHubError):
    """Legacy dispatcher received an unknown action."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            "Invalid action", "INVALID_ACTION", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.action = action


# ─── Queue Errors (400-level) ───────────────────────────────────

class TrackIndexError(MelodyHubError):
    """Track index outside the queue."""
    def __init__(self, index: int, length: int, context: ErrorContext | None = None):
        super().__init__(
            f"Track index {index} out of range (queue has {length} track(s))",
            "TRACK_INDEX_OUT_OF_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.index = index
        self.length = length


class EmptyQueueError(MelodyHubError):
    """Operation needs at least one track."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Playlist is empty", "QUEUE_EMPTY", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )


class ResourceNotFoundError(MelodyHubError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(MelodyHubError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
