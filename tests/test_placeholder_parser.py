"""Tests for placeholder expression parsing."""

import pytest

from coords.parser import is_placeholder, parse_placeholder, strip_options


class TestLiterals:
    """Strings that are not ${...} come back unchanged."""

    @pytest.mark.parametrize("raw", [
        "com.example:baz:1.2.3",
        "",
        "$",
        "${",
        "${foo",
        "foo}",
        "$ {foo}",
        "{foo}",
        "prefix${foo}",
        "${foo}suffix",
    ])
    def test_literal_passthrough(self, raw):
        expr = parse_placeholder(raw)
        assert expr.is_placeholder is False
        assert expr.key == raw
        assert expr.options is None
        assert expr.jandex is False

    def test_markers_must_not_overlap(self):
        """'${}' is the shortest placeholder; '${' + '}' sharing a brace is not one."""
        assert is_placeholder("${}") is True
        assert is_placeholder("$}") is False


class TestPlaceholders:
    """Key and option extraction."""

    @pytest.mark.parametrize("key", ["foo.bar:baz", "org.wildfly:wildfly-ee", "x", ""])
    def test_plain_key(self, key):
        expr = parse_placeholder("${" + key + "}")
        assert expr.is_placeholder is True
        assert expr.key == key
        assert expr.options is None
        assert expr.jandex is False

    def test_jandex_option(self):
        expr = parse_placeholder("${org.hibernate:hibernate-core?jandex}")
        assert expr.key == "org.hibernate:hibernate-core"
        assert expr.options == "jandex"
        assert expr.jandex is True

    def test_other_option_does_not_set_flag(self):
        expr = parse_placeholder("${org.hibernate:hibernate-core?other}")
        assert expr.key == "org.hibernate:hibernate-core"
        assert expr.jandex is False

    def test_substring_match_sets_flag(self):
        """Option detection is containment, not token matching."""
        assert parse_placeholder("${a:b?nojandexplease}").jandex is True
        assert parse_placeholder("${a:b?foo,jandex}").jandex is True

    def test_jandex_in_key_is_ignored(self):
        assert parse_placeholder("${jandex:jandex}").jandex is False

    def test_empty_key_with_options(self):
        expr = parse_placeholder("${?jandex}")
        assert expr.key == ""
        assert expr.jandex is True

    def test_only_first_question_mark_splits(self):
        expr = parse_placeholder("${a:b?x?jandex}")
        assert expr.key == "a:b"
        assert expr.options == "x?jandex"
        assert expr.jandex is True

    def test_nested_markers_are_kept_in_key(self):
        expr = parse_placeholder("${${inner}}")
        assert expr.is_placeholder is True
        assert expr.key == "${inner}"


class TestStripOptions:
    """Option trimming used by the module version header."""

    def test_strips_suffix(self):
        assert strip_options("a:b?jandex") == "a:b"

    def test_without_options(self):
        assert strip_options("a:b") == "a:b"

    def test_leading_question_mark_is_kept(self):
        assert strip_options("?jandex") == "?jandex"
