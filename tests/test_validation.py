"""Tests for input validation."""

import pytest

from hvz_orgs.shared.validation import ValidationError, validate_id, validate_name, validate_slug


class TestValidateName:
    def test_valid_name(self):
        assert validate_name("Spring HvZ 2026") == "Spring HvZ 2026"

    def test_strips_whitespace(self):
        assert validate_name("  test  ") == "test"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_name("")

    def test_too_long_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            validate_name("a" * 129)

    @pytest.mark.parametrize(
        "name",
        ["Café Zombies", "UNC Charlotte: Fall 2024", "Humans & Zombies", "HvZ!", "Week #1", "ゾンビ"],
    )
    def test_free_form_labels_accepted(self, name):
        assert validate_name(name) == name

    def test_control_characters_rejected(self):
        with pytest.raises(ValidationError, match="control characters"):
            validate_name("Spring\nGame")


class TestValidateSlug:
    def test_valid_slug(self):
        assert validate_slug("umd-hvz") == "umd-hvz"

    def test_uppercase_rejected(self):
        with pytest.raises(ValidationError, match="lowercase"):
            validate_slug("UMD")

    def test_trailing_hyphen_rejected(self):
        with pytest.raises(ValidationError):
            validate_slug("umd-")

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_slug("")


class TestValidateId:
    def test_opaque_ids_accepted(self):
        assert validate_id("111111111111111111111111") == "111111111111111111111111"
        assert validate_id("0") == "0"

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_id(" ")

    def test_too_long_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            validate_id("x" * 129)
