"""Validation for files handed to DocumentService.add()."""

from __future__ import annotations

from typing import Optional

from docsync.errors import ValidationError
from docsync.models import UploadFile
from docsync.util.files import MAX_FILE_SIZE, PDF_EXTENSION, has_extension


def validate_present(file: Optional[UploadFile]) -> UploadFile:
    if file is None:
        raise ValidationError("No file provided", rule="missing")
    return file


def validate_not_empty(file: UploadFile) -> None:
    if file.size <= 0:
        raise ValidationError(
            f"File is empty: {file.filename}",
            rule="empty",
            details={"filename": file.filename},
        )


def validate_max_size(file: UploadFile, max_size: int) -> None:
    if file.size > max_size:
        raise ValidationError(
            f"File is too large: {file.size} bytes (max {max_size})",
            rule="too_large",
            details={"filename": file.filename, "size": file.size, "max_size": max_size},
        )


def validate_extension(file: UploadFile, extension: str = PDF_EXTENSION) -> None:
    if not has_extension(file.filename, extension):
        raise ValidationError(
            f"File must be a {extension} file: {file.filename!r}",
            rule="extension",
            details={"filename": file.filename, "extension": extension},
        )


def validate_upload(
    file: Optional[UploadFile],
    *,
    max_size: int = MAX_FILE_SIZE,
    extension: str = PDF_EXTENSION,
) -> UploadFile:
    """Run every rule in order; the first failure raises ValidationError."""
    checked = validate_present(file)
    validate_not_empty(checked)
    validate_max_size(checked, max_size)
    validate_extension(checked, extension)
    return checked
