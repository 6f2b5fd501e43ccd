"""
Tests for the SearchTemplate entity.
"""

import pytest

from workspace_engine.entities.search_template import SearchTemplate
from workspace_engine.exceptions import ContentMismatchError, MalformedTemplateError

BLOCK = "  const a = 1;\n  const b = 2;\n  const c = 3;\n  return a + b + c;"


class TestSearchTemplate:
    """Test cases for SearchTemplate."""

    def test_verbatim_parse(self):
        template = SearchTemplate.parse("one\ntwo")
        assert not template.has_ellipsis
        assert template.text == "one\ntwo"

    def test_crlf_is_normalized(self):
        template = SearchTemplate.parse("one\r\ntwo")
        assert template.matches("one\ntwo")

    def test_verbatim_requires_exact_match(self):
        template = SearchTemplate.parse(BLOCK)
        assert template.matches(BLOCK)

    @pytest.mark.parametrize(
        "variant",
        [
            BLOCK + " ",
            BLOCK + "\n",
            " " + BLOCK,
            BLOCK.replace("b = 2", "b = 3"),
            BLOCK.replace("  const", "\tconst", 1),
        ],
    )
    def test_verbatim_single_deviation_fails(self, variant):
        template = SearchTemplate.parse(BLOCK)
        assert not template.matches(variant)
        with pytest.raises(ContentMismatchError, match="Search content mismatch"):
            template.verify(variant, file="x.ts")

    def test_ellipsis_split(self):
        template = SearchTemplate.parse("  const a = 1;\n...\n  return a + b + c;")
        assert template.has_ellipsis
        assert template.prefix == "  const a = 1;"
        assert template.suffix == "  return a + b + c;"
        assert template.matches(BLOCK)

    def test_indented_ellipsis_line_is_a_marker(self):
        template = SearchTemplate.parse("  const a = 1;\n    ...\n  return a + b + c;")
        assert template.has_ellipsis
        assert template.matches(BLOCK)

    def test_inline_ellipsis_is_verbatim(self):
        template = SearchTemplate.parse("const x = { ...task };")
        assert not template.has_ellipsis
        assert template.matches("const x = { ...task };")

    def test_ellipsis_with_empty_middle(self):
        template = SearchTemplate.parse("L2\n...\nL3")
        assert template.matches("L2\nL3")

    def test_ellipsis_middle_is_unconstrained(self):
        template = SearchTemplate.parse("L2\n...\nL9")
        middle = "\n".join(f"anything {i}" for i in range(100))
        assert template.matches(f"L2\n{middle}\nL9")

    def test_ellipsis_prefix_mismatch(self):
        template = SearchTemplate.parse("  const z = 1;\n...\n  return a + b + c;")
        with pytest.raises(ContentMismatchError, match="Prefix/suffix do not match"):
            template.verify(BLOCK)

    def test_ellipsis_suffix_mismatch(self):
        template = SearchTemplate.parse("  const a = 1;\n...\n  return 0;")
        assert not template.matches(BLOCK)

    def test_multiple_ellipsis_lines_fail(self):
        with pytest.raises(MalformedTemplateError):
            SearchTemplate.parse("a\n...\nb\n...\nc")

    def test_leading_ellipsis_only_checks_suffix(self):
        template = SearchTemplate.parse("...\n  return a + b + c;")
        assert template.prefix == ""
        assert template.matches(BLOCK)
