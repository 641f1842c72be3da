# tests/unit/logging/test_handlers.py - v1
"""Tests for logging/handlers.py: file rotation handler."""

from __future__ import annotations

import pytest

from clusterability.logging.handlers import _parse_size, create_rotating_handler


class TestParseSize:
    def test_mb(self):
        assert _parse_size("10MB") == 10 * 1024 * 1024

    def test_kb_with_space(self):
        assert _parse_size("512 KB") == 512 * 1024

    def test_bytes(self):
        assert _parse_size("100B") == 100

    def test_case_insensitive(self):
        assert _parse_size("1gb") == 1024 ** 3

    def test_invalid_format(self):
        with pytest.raises(ValueError, match="Invalid size"):
            _parse_size("10bytes")

    def test_empty_string(self):
        with pytest.raises(ValueError):
            _parse_size("")


class TestCreateRotatingHandler:
    def test_creates_handler(self, tmp_path):
        handler = create_rotating_handler(tmp_path / "run.log", rotation="1MB", retention=3)
        try:
            assert handler.maxBytes == 1024 * 1024
            assert handler.backupCount == 3
        finally:
            handler.close()

    def test_creates_parent_dirs(self, tmp_path):
        log_file = tmp_path / "a" / "b" / "run.log"
        handler = create_rotating_handler(log_file)
        try:
            assert log_file.parent.is_dir()
        finally:
            handler.close()
