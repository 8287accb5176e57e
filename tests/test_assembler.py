"""Tests for transcript and cue track assembly."""

from __future__ import annotations

from vidscribe.captions.models import Cue, RawBlock
from vidscribe.captions.vtt import parse_vtt
from vidscribe.transcription.assembler import assemble
from vidscribe.transcription.base import Transcriber
from vidscribe.transcription.models import Chunk, ChunkResult, TranscriptionResponse
from vidscribe.transcription.orchestrator import run_chunks
from vidscribe.transcription.planner import plan_chunks

HELLO = Cue(start=0.0, end=1.0, text="Hello")


class TestAssemble:
    def test_text_joined_in_chunk_order(self, make_result):
        results = [
            make_result(0, 0, 60, " First part. "),
            make_result(1, 60, 60, "Second part."),
        ]
        assert assemble(results).text == "First part. Second part."

    def test_duplicate_texts_collapsed(self, make_result):
        results = [
            make_result(0, 0, 60, "Same sentence."),
            make_result(1, 60, 60, "  Same sentence.\n"),
        ]
        assert assemble(results).text == "Same sentence."

    def test_non_adjacent_duplicates_collapsed(self, make_result):
        results = [
            make_result(0, 0, 60, "A"),
            make_result(1, 60, 60, "B"),
            make_result(2, 120, 60, "A"),
        ]
        assert assemble(results).text == "A B"

    def test_partial_overlap_is_kept(self, make_result):
        results = [
            make_result(0, 0, 60, "Hello there."),
            make_result(1, 60, 60, "Hello there. General Kenobi."),
        ]
        assert assemble(results).text == "Hello there. Hello there. General Kenobi."

    def test_empty_texts_skipped(self, make_result):
        results = [
            make_result(0, 0, 60, "A"),
            make_result(1, 60, 60, "   "),
            make_result(2, 120, 60, "B"),
        ]
        assert assemble(results).text == "A B"

    def test_cues_shifted_by_chunk_start(self, make_result):
        results = [
            make_result(0, 0, 120, "a", [HELLO]),
            make_result(1, 120, 120, "b", [HELLO, Cue(start=2.0, end=3.5, text="World")]),
        ]
        assert assemble(results).cues == [
            Cue(start=0.0, end=1.0, text="Hello"),
            Cue(start=120.0, end=121.0, text="Hello"),
            Cue(start=122.0, end=123.5, text="World"),
        ]

    def test_raw_blocks_carried_through(self, make_result):
        raw = RawBlock(lines=("bad --> line", "x"))
        results = [make_result(0, 0, 60, "a", [raw]), make_result(1, 60, 60, "b", [HELLO])]
        assert assemble(results).cues == [raw, Cue(start=60.0, end=61.0, text="Hello")]

    def test_reverse_arrival_order(self, make_result):
        results = [
            make_result(0, 0, 120, "zero", [HELLO]),
            make_result(1, 120, 120, "one", [HELLO]),
            make_result(2, 240, 10, "two", [Cue(start=0.5, end=2.0, text="End")]),
        ]
        in_order = assemble(results)
        reversed_order = assemble(list(reversed(results)))
        assert reversed_order.cues == in_order.cues
        assert reversed_order.text == in_order.text == "zero one two"

    def test_failed_results_dropped(self, make_result):
        failed = ChunkResult(chunk=Chunk(index=1, start=60, length=60), failed=True, error="boom")
        assembled = assemble([make_result(0, 0, 60, "a", [HELLO]), failed])
        assert assembled.text == "a"
        assert assembled.cues == [HELLO]
        assert assembled.dropped_chunks == 1
        assert assembled.total_chunks == 2
        assert assembled.is_partial is True

    def test_complete_result_not_partial(self, make_result):
        assembled = assemble([make_result(0, 0, 60, "a")])
        assert assembled.is_partial is False

    def test_vtt_property_serializes_global_track(self, make_result):
        assembled = assemble([make_result(0, 0, 60, "a"), make_result(1, 60, 60, "b", [HELLO])])
        assert assembled.vtt == "WEBVTT\n\n00:01:00.000 --> 00:01:01.000\nHello\n"


class _ScenarioTranscriber(Transcriber):
    def is_available(self) -> bool:
        return True

    def transcribe(self, audio: bytes) -> TranscriptionResponse:
        if audio == b"2":
            raise ConnectionError("chunk 2 lost")
        return TranscriptionResponse(text="Hello", vtt="WEBVTT\n\n00:00:00.000 --> 00:00:01.000\nHello\n")


class TestEndToEnd:
    def test_partial_run_with_duplicate_text(self):
        chunks = plan_chunks(250, 120)
        assert [(c.start, c.length) for c in chunks] == [(0, 120), (120, 120), (240, 10)]

        results = run_chunks(chunks, lambda c: str(c.index).encode(), _ScenarioTranscriber(), concurrency=3)
        assembled = assemble(results)

        assert assembled.cues == [
            Cue(start=0.0, end=1.0, text="Hello"),
            Cue(start=120.0, end=121.0, text="Hello"),
        ]
        assert assembled.text == "Hello"
        assert assembled.dropped_chunks == 1
        assert parse_vtt(assembled.vtt) == assembled.cues
