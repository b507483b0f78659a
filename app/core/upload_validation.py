"""File validation for uploads. Runs before anything is sent to storage."""

from app.core.errors import FileTooLargeError, InvalidFileTypeError


def format_size_mb(size: int) -> str:
    """5242880 -> '5', 1572864 -> '1.5'."""
    return f"{size / (1024 * 1024):g}"


def validate_upload(
    mime_type: str,
    size: int,
    allowed_types: list[str] | tuple[str, ...],
    max_size: int,
) -> None:
    """
    Check declared MIME type and size against the upload policy.
    Type is checked first; raises InvalidFileTypeError or FileTooLargeError.
    """
    if mime_type not in allowed_types:
        raise InvalidFileTypeError(
            f"Invalid file type. Allowed types: {', '.join(allowed_types)}"
        )
    if size > max_size:
        raise FileTooLargeError(
            f"File too large. Maximum size: {format_size_mb(max_size)}MB"
        )
