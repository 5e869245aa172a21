"""Extraction payload input and matched-extraction output adapters."""

from __future__ import annotations

from .schema import ExtractionPayloadModel, MatchedExtractionRecord
from .translator import (
    matched_extraction_document,
    matched_extraction_record,
    parse_extraction_payload,
    translate_payload,
)

__all__ = [
    "ExtractionPayloadModel",
    "MatchedExtractionRecord",
    "matched_extraction_document",
    "matched_extraction_record",
    "parse_extraction_payload",
    "translate_payload",
]
