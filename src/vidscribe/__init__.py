"""Chunked transcription and subtitle generation for long recordings."""
