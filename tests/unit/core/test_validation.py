"""Tests for input sanitization and validation helpers."""
import pytest

from app.core.exceptions import ValidationError
from app.core.validation import pagination_offset, require_fields, sanitize_content


class TestSanitizeContent:
    """Test sanitize_content."""

    def test_strips_script_block(self):
        assert sanitize_content("hello <script>alert(1)</script> world") == "hello  world"

    def test_strips_iframe_block(self):
        assert sanitize_content('<iframe src="http://evil">x</iframe>ok') == "ok"

    def test_case_insensitive_and_multiline(self):
        content = "a<SCRIPT type='text/javascript'>\nvar x = 1;\n</Script>b"
        assert sanitize_content(content) == "ab"

    def test_trims_whitespace(self):
        assert sanitize_content("  padded  ") == "padded"

    def test_leaves_other_markup(self):
        assert sanitize_content("<b>bold</b>") == "<b>bold</b>"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_input(self, value):
        assert sanitize_content(value) == ""

    def test_script_only_becomes_empty(self):
        assert sanitize_content("<script>x</script>") == ""


class TestRequireFields:
    """Test require_fields."""

    def test_all_present(self):
        require_fields(sender_id=1, content="hi")

    def test_none_value(self):
        with pytest.raises(ValidationError) as exc_info:
            require_fields(sender_id=1, recipient_id=None)
        assert exc_info.value.details["field"] == "recipient_id"

    def test_empty_string(self):
        with pytest.raises(ValidationError) as exc_info:
            require_fields(content="")
        assert exc_info.value.details["field"] == "content"

    def test_zero_is_present(self):
        require_fields(duration=0)


class TestPaginationOffset:
    """Test pagination_offset."""

    def test_first_page(self):
        assert pagination_offset(1, 20) == 0

    def test_later_page(self):
        assert pagination_offset(2, 10) == 10
        assert pagination_offset(3, 50) == 100

    def test_rejects_page_below_one(self):
        with pytest.raises(ValidationError) as exc_info:
            pagination_offset(0, 10)
        assert exc_info.value.details["field"] == "page"

    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValidationError) as exc_info:
            pagination_offset(1, 0)
        assert exc_info.value.details["field"] == "limit"
