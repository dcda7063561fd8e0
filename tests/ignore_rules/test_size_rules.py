"""Unit tests for the skip-large size threshold."""

import pytest

from dirstruct.ignore_rules.size_rules import SizeThreshold, parse_file_size


class TestParseFileSize:
    """Test the parse_file_size utility function."""

    def test_bare_numbers_are_megabytes(self):
        assert parse_file_size("1") == 1048576
        assert parse_file_size("50") == 50 * 1024 * 1024
        assert parse_file_size("0") == 0

    def test_parse_human_readable_decimal(self):
        assert parse_file_size("1KB") == 1000
        assert parse_file_size("1MB") == 1000000
        assert parse_file_size("1GB") == 1000000000
        assert parse_file_size("2.5MB") == 2500000

    def test_parse_human_readable_binary(self):
        assert parse_file_size("1KiB") == 1024
        assert parse_file_size("1MiB") == 1048576
        assert parse_file_size("1GiB") == 1073741824

    def test_parse_with_spaces(self):
        assert parse_file_size("1 GB") == 1000000000
        assert parse_file_size(" 2 KiB ") == 2048

    @pytest.mark.parametrize("value", ["invalid", "", "1XB"])
    def test_parse_invalid_format(self, value):
        with pytest.raises(ValueError, match="Invalid size format"):
            parse_file_size(value)

    def test_parse_negative(self):
        with pytest.raises(ValueError, match="Invalid size format"):
            parse_file_size("-1")


class TestSizeThreshold:
    """Test the SizeThreshold class."""

    def test_init_with_string(self):
        assert SizeThreshold("1MB").max_size_bytes == 1000000
        assert SizeThreshold("100").max_size_bytes == 100 * 1024 * 1024

    def test_init_with_int(self):
        assert SizeThreshold(1048576).max_size_bytes == 1048576

    def test_init_with_negative_int(self):
        with pytest.raises(ValueError, match="Size cannot be negative"):
            SizeThreshold(-1)

    @pytest.mark.parametrize("value", [1.5, None, True])
    def test_init_with_invalid_type(self, value):
        with pytest.raises(ValueError, match="max_size must be string or int"):
            SizeThreshold(value)

    def test_exceeded_is_strict(self):
        threshold = SizeThreshold(100)
        assert not threshold.exceeded(99)
        assert not threshold.exceeded(100)
        assert threshold.exceeded(101)

    def test_zero_threshold_summarizes_any_content(self):
        threshold = SizeThreshold(0)
        assert not threshold.exceeded(0)
        assert threshold.exceeded(1)
