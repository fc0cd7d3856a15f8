from .files import (
    MAX_FILE_SIZE,
    PDF_EXTENSION,
    PDF_KIND,
    PDF_MIME,
    has_extension,
    strip_extension,
    tags_from_filename,
)
from .ids import new_document_id, new_uuid
from .time import EPOCH, epoch_millis, normalize_dt, now_utc, parse_timestamp, to_timestamp

__all__ = [
    "new_uuid",
    "new_document_id",
    "PDF_KIND",
    "PDF_MIME",
    "PDF_EXTENSION",
    "MAX_FILE_SIZE",
    "has_extension",
    "strip_extension",
    "tags_from_filename",
    "EPOCH",
    "now_utc",
    "parse_timestamp",
    "to_timestamp",
    "normalize_dt",
    "epoch_millis",
]
