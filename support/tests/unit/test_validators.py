"""
Unit tests for linear_cli.validators
"""

import pytest

from linear_cli.errors import InvalidInputError
from linear_cli.validators import (
    sanitize_string,
    validate_choice,
    validate_comment_body,
    validate_description,
    validate_email,
    validate_issue_id,
    validate_limit,
    validate_priority,
    validate_title,
)

pytestmark = pytest.mark.unit


class TestIssueId:
    """Test issue identifier format."""

    @pytest.mark.parametrize("issue_id", ["ABC-123", "A-123", "ABCDEF-123", "eng-1"])
    def test_valid(self, issue_id):
        assert validate_issue_id(issue_id) == issue_id

    @pytest.mark.parametrize("issue_id", ["ABC123", "123", "ABC-", "ABC!-123", "", "ABC-12 ", None])
    def test_invalid(self, issue_id):
        with pytest.raises(InvalidInputError, match="Invalid issue ID format"):
            validate_issue_id(issue_id)

    def test_is_value_error(self):
        """Callers may catch ValueError."""
        with pytest.raises(ValueError):
            validate_issue_id("nope")


class TestPriority:
    """Test priority range."""

    @pytest.mark.parametrize("value,expected", [(0, 0), (4, 4), ("2", 2), (" 3 ", 3)])
    def test_valid(self, value, expected):
        assert validate_priority(value) == expected

    @pytest.mark.parametrize("value", [-1, 5, 10, "high", "", None, True, "2.5"])
    def test_invalid(self, value):
        with pytest.raises(InvalidInputError, match="Invalid priority"):
            validate_priority(value)


class TestText:
    """Test sanitizing and required text."""

    def test_sanitize_strips_control_characters(self):
        assert sanitize_string("  Fix\x00 login\x1f\x7f  ") == "Fix login"

    def test_sanitize_none(self):
        assert sanitize_string(None) is None

    def test_title_required(self):
        with pytest.raises(InvalidInputError, match="Title cannot be blank"):
            validate_title(" \x01 ")

    def test_comment_sanitized(self):
        assert validate_comment_body("Looks good\n") == "Looks good"

    def test_description_optional(self):
        assert validate_description(None) is None
        assert validate_description(" text ") == "text"


class TestLimitsAndChoices:
    """Test limits, emails and option choices."""

    def test_limit_clamped(self):
        assert validate_limit(500) == 100
        assert validate_limit("20") == 20
        assert validate_limit(30, maximum=25) == 25

    @pytest.mark.parametrize("value", [0, -5, "many", None])
    def test_limit_invalid(self, value):
        with pytest.raises(InvalidInputError, match="Limit must be a positive number"):
            validate_limit(value)

    def test_email(self):
        assert validate_email("dev@example.com") == "dev@example.com"
        with pytest.raises(InvalidInputError):
            validate_email("dev@")

    def test_choice_normalized(self):
        assert validate_choice("JSON", ["table", "json"], "format") == "json"

    def test_choice_invalid_lists_options(self):
        with pytest.raises(InvalidInputError, match="Must be one of 'table', 'json'"):
            validate_choice("xml", ["table", "json"], "format")
