"""Read and write sequence definitions embedded in PNG text chunks.

A pictograph PNG carries a ``metadata`` text chunk whose value is a JSON
object with a ``sequence`` array (``[meta, step, step, ...]``).
"""

from __future__ import annotations

import io
import json
import logging
import struct
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from PIL import Image, PngImagePlugin, UnidentifiedImageError

from .constants import METADATA_KEYWORD, PNG_SIGNATURE, SEQUENCE_KEY
from .types import SequenceData, SequenceFormatError

logger = logging.getLogger(__name__)


class CodecError(str, Enum):
    NO_SEQUENCE = "no embedded sequence"
    CORRUPT_CONTAINER = "corrupt container"
    INVALID_PAYLOAD = "invalid JSON payload"


@dataclass
class CodecResult:
    success: bool
    data: SequenceData | None = None
    error: CodecError | None = None
    detail: str = ""

    @classmethod
    def failure(cls, error: CodecError, detail: str = "") -> CodecResult:
        return cls(success=False, error=error, detail=detail)


def _read_text_chunk(raw: bytes) -> str | None:
    """Return the metadata chunk text, or None if the PNG has none.

    Raises:
        OSError, SyntaxError, ValueError: if Pillow cannot parse the container.
    """
    with Image.open(io.BytesIO(raw)) as img:
        if img.format != "PNG":
            raise ValueError(f"Expected a PNG container, got {img.format}")
        # .text also picks up chunks stored after the image data.
        text = img.text.get(METADATA_KEYWORD)
    return str(text) if text is not None else None


def extract_sequence(raw: bytes) -> CodecResult:
    """Decode the embedded sequence from PNG bytes. Never raises for bad input."""
    if not raw.startswith(PNG_SIGNATURE):
        return CodecResult.failure(CodecError.CORRUPT_CONTAINER, "missing PNG signature")

    try:
        text = _read_text_chunk(raw)
    except (
        UnidentifiedImageError, OSError, EOFError, SyntaxError, ValueError, struct.error,
    ) as e:
        logger.warning("Could not read PNG container: %s", e)
        return CodecResult.failure(CodecError.CORRUPT_CONTAINER, str(e))

    if text is None:
        return CodecResult.failure(CodecError.NO_SEQUENCE)

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Metadata chunk is not valid JSON: %s", e)
        return CodecResult.failure(CodecError.INVALID_PAYLOAD, str(e))

    if not isinstance(payload, dict) or SEQUENCE_KEY not in payload:
        return CodecResult.failure(CodecError.NO_SEQUENCE, "metadata has no sequence")

    try:
        data = SequenceData.from_raw(payload[SEQUENCE_KEY])
    except SequenceFormatError as e:
        logger.warning("Embedded sequence failed validation: %s", e)
        return CodecResult.failure(CodecError.INVALID_PAYLOAD, str(e))

    logger.debug("Decoded sequence %r with %d steps", data.meta.word, len(data.steps))
    return CodecResult(success=True, data=data)


def read_sequence_file(path: str | Path) -> CodecResult:
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        logger.warning("Could not read %s: %s", path, e)
        return CodecResult.failure(CodecError.CORRUPT_CONTAINER, str(e))
    return extract_sequence(raw)


def embed_sequence(image: bytes, sequence: SequenceData | list[Any]) -> bytes:
    """Return a copy of a PNG with ``sequence`` written to its metadata chunk.

    Existing text chunks are kept, except a previous metadata chunk.

    Raises:
        OSError: if ``image`` is not a readable image.
    """
    raw_sequence = sequence.to_raw() if isinstance(sequence, SequenceData) else sequence

    info = PngImagePlugin.PngInfo()
    with Image.open(io.BytesIO(image)) as img:
        for key, value in getattr(img, "text", {}).items():
            if key != METADATA_KEYWORD:
                info.add_text(key, value)
        info.add_text(METADATA_KEYWORD, json.dumps({SEQUENCE_KEY: raw_sequence}))

        out = io.BytesIO()
        img.save(out, format="PNG", pnginfo=info)
    return out.getvalue()
