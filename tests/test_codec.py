"""Tests for the PNG metadata codec."""

import io
import json

from PIL import Image, PngImagePlugin

from pictovis.codec import (
    CodecError,
    embed_sequence,
    extract_sequence,
    read_sequence_file,
)
from pictovis.types import SequenceData

from .conftest import blank_png, make_meta, write_sequence_png


def _png_with_text(**chunks: str) -> bytes:
    info = PngImagePlugin.PngInfo()
    for key, value in chunks.items():
        info.add_text(key, value)
    out = io.BytesIO()
    Image.new("RGB", (2, 2)).save(out, format="PNG", pnginfo=info)
    return out.getvalue()


class TestExtractSequence:
    """Test decoding embedded sequences."""

    def test_embedded_sequence(self, scenario_raw):
        """A sequence written with embed_sequence decodes back."""
        result = extract_sequence(embed_sequence(blank_png(), scenario_raw))
        assert result.success
        assert result.error is None
        assert result.data == SequenceData.from_raw(scenario_raw)

    def test_non_ascii_word(self, scenario_raw):
        """Words outside latin-1 survive the text chunk."""
        scenario_raw[0]["word"] = "AKIΦ"
        result = extract_sequence(embed_sequence(blank_png(), scenario_raw))
        assert result.data.meta.word == "AKIΦ"

    def test_no_metadata_chunk(self):
        """A plain PNG has no embedded sequence."""
        result = extract_sequence(blank_png())
        assert not result.success
        assert result.error == CodecError.NO_SEQUENCE
        assert result.error.value == "no embedded sequence"

    def test_metadata_without_sequence_key(self):
        """Metadata JSON lacking a sequence array is treated as absent."""
        result = extract_sequence(_png_with_text(metadata=json.dumps({"word": "x"})))
        assert result.error == CodecError.NO_SEQUENCE

    def test_other_chunks_ignored(self):
        """Only the metadata keyword is read."""
        result = extract_sequence(_png_with_text(Comment="hello"))
        assert result.error == CodecError.NO_SEQUENCE

    def test_invalid_json(self):
        """Unparseable metadata is an invalid payload."""
        result = extract_sequence(_png_with_text(metadata="{not json"))
        assert result.error == CodecError.INVALID_PAYLOAD
        assert result.error.value == "invalid JSON payload"
        assert result.detail

    def test_schema_violation(self):
        """Valid JSON with a malformed sequence is an invalid payload."""
        payload = json.dumps({"sequence": [make_meta(), {"beat": 0}]})
        result = extract_sequence(_png_with_text(metadata=payload))
        assert result.error == CodecError.INVALID_PAYLOAD

    def test_garbage_bytes(self):
        """Bytes that are not a PNG are a corrupt container."""
        result = extract_sequence(b"definitely not an image")
        assert result.error == CodecError.CORRUPT_CONTAINER
        assert result.error.value == "corrupt container"

    def test_broken_png(self):
        """A PNG signature followed by junk is a corrupt container."""
        result = extract_sequence(b"\x89PNG\r\n\x1a\n" + b"garbage")
        assert result.error == CodecError.CORRUPT_CONTAINER

    def test_truncated_png(self, scenario_raw):
        """A PNG cut short inside its chunks is a corrupt container."""
        raw = embed_sequence(blank_png(), scenario_raw)
        result = extract_sequence(raw[:40])
        assert result.error == CodecError.CORRUPT_CONTAINER

    def test_other_image_format(self):
        """Non-PNG images are not valid carriers."""
        out = io.BytesIO()
        Image.new("RGB", (2, 2)).save(out, format="GIF")
        assert extract_sequence(out.getvalue()).error == CodecError.CORRUPT_CONTAINER


class TestEmbedSequence:
    """Test writing sequences into PNGs."""

    def test_accepts_sequence_data(self, scenario_raw):
        """SequenceData instances are serialized with to_raw."""
        data = SequenceData.from_raw(scenario_raw)
        assert extract_sequence(embed_sequence(blank_png(), data)).data == data

    def test_replaces_previous_metadata(self, scenario_raw, single_step_raw):
        """Re-embedding overwrites the old sequence."""
        first = embed_sequence(blank_png(), scenario_raw)
        second = embed_sequence(first, single_step_raw)
        assert extract_sequence(second).data.meta.word == "ONE"

    def test_keeps_other_text_chunks(self, scenario_raw):
        """Unrelated text chunks are preserved."""
        raw = embed_sequence(_png_with_text(Author="someone"), scenario_raw)
        with Image.open(io.BytesIO(raw)) as img:
            assert img.text["Author"] == "someone"


class TestReadSequenceFile:
    """Test reading sequences from disk."""

    def test_reads_file(self, tmp_path, scenario_raw):
        """A PNG on disk decodes like its bytes."""
        path = write_sequence_png(tmp_path / "A" / "A_ver1.png", scenario_raw)
        assert read_sequence_file(path).success

    def test_missing_file(self, tmp_path):
        """An unreadable path is reported as a corrupt container."""
        result = read_sequence_file(tmp_path / "missing.png")
        assert result.error == CodecError.CORRUPT_CONTAINER
