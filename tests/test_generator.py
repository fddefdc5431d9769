"""Tests for waymark.routing.generator — URL generators from path segments."""

import pytest

from waymark.errors import MissingParameterError
from waymark.routing.generator import resolve_part, resolve_segment, route_generator
from waymark.routing.route import RoutePart


def _lit(content: str) -> RoutePart:
    return RoutePart(content)


def _dyn(content: str) -> RoutePart:
    return RoutePart(content, dynamic=True)


def _spread(content: str) -> RoutePart:
    return RoutePart(content, spread=True)


class TestLiteralRoutes:
    def test_single_segment(self) -> None:
        generate = route_generator([[_lit("blog")]])
        assert generate({}) == "/blog"

    def test_multiple_segments(self) -> None:
        generate = route_generator([[_lit("pagefind")], [_lit("pagefind.js")]])
        assert generate({}) == "/pagefind/pagefind.js"

    def test_ignores_unused_params(self) -> None:
        generate = route_generator([[_lit("blog")]])
        assert generate({"post": "hello"}) == "/blog"

    def test_literal_escapes_hash_and_question(self) -> None:
        generate = route_generator([[_lit("c#?")]])
        assert generate({}) == "/c%23%3F"

    def test_literal_unescapes_brackets(self) -> None:
        generate = route_generator([[_lit("%5Bliteral%5D")]])
        assert generate({}) == "/[literal]"


class TestDynamicParts:
    def test_substitutes_value(self) -> None:
        generate = route_generator([[_lit("blog")], [_dyn("post")]])
        assert generate({"post": "hello"}) == "/blog/hello"

    def test_missing_raises(self) -> None:
        generate = route_generator([[_lit("blog")], [_dyn("post")]])
        with pytest.raises(MissingParameterError) as exc_info:
            generate({})
        assert exc_info.value.name == "post"
        assert str(exc_info.value) == "Missing parameter: post"

    def test_none_counts_as_missing(self) -> None:
        generate = route_generator([[_dyn("post")]])
        with pytest.raises(MissingParameterError):
            generate({"post": None})

    def test_empty_string_counts_as_missing(self) -> None:
        generate = route_generator([[_dyn("post")]])
        with pytest.raises(MissingParameterError):
            generate({"post": ""})

    def test_int_value(self) -> None:
        generate = route_generator([[_lit("page")], [_dyn("n")]])
        assert generate({"n": 2}) == "/page/2"

    def test_parts_concatenate_within_segment(self) -> None:
        generate = route_generator([[_dyn("name"), _lit(".json")]])
        assert generate({"name": "feed"}) == "/feed.json"

    def test_value_not_bracket_unescaped(self) -> None:
        generate = route_generator([[_dyn("q")]])
        assert generate({"q": "%5Bx%5D"}) == "/%5Bx%5D"


class TestSpreadParts:
    def test_absent_defaults_to_root(self) -> None:
        generate = route_generator([[_spread("...rest")]])
        assert generate({}) == "/"

    def test_key_drops_marker(self) -> None:
        generate = route_generator([[_lit("docs")], [_spread("...slug")]])
        assert generate({"slug": "guides/intro"}) == "/docs/guides/intro"

    def test_absent_after_literal(self) -> None:
        generate = route_generator([[_lit("docs")], [_spread("...slug")]])
        assert generate({}) == "/docs"

    def test_spread_checked_before_dynamic(self) -> None:
        part = RoutePart("...slug", dynamic=True, spread=True)
        assert resolve_part(part, {}) == ""


class TestSanitization:
    def test_hash_and_question_escaped(self) -> None:
        generate = route_generator([[_dyn("post")]])
        assert generate({"post": "a#b?c"}) == "/a%23b%3Fc"

    def test_single_pass(self) -> None:
        generate = route_generator([[_dyn("post")]])
        assert generate({"post": "#"}) == "/%23"
        assert generate({"post": "%23"}) == "/%23"

    def test_unicode_normalized(self) -> None:
        generate = route_generator([[_dyn("post")]])
        decomposed = "cafe\u0301"
        assert generate({"post": decomposed}) == "/caf\u00e9"

    def test_spread_values_sanitized(self) -> None:
        generate = route_generator([[_spread("...rest")]])
        assert generate({"rest": "a?b"}) == "/a%3Fb"


class TestTrailingSlash:
    def test_always_appends_once(self) -> None:
        generate = route_generator([[_lit("blog")], [_dyn("post")]], "always")
        assert generate({"post": "hello"}) == "/blog/hello/"

    def test_always_with_no_segments(self) -> None:
        generate = route_generator([], "always")
        assert generate({}) == "/"

    def test_always_with_empty_spread(self) -> None:
        generate = route_generator([[_spread("...rest")]], "always")
        assert generate({}) == "/"

    @pytest.mark.parametrize("policy", ["ignore", "never"])
    def test_other_policies_leave_path(self, policy: str) -> None:
        generate = route_generator([[_lit("blog")]], policy)
        assert generate({}) == "/blog"

    def test_root_fallback(self) -> None:
        assert route_generator([])({}) == "/"


class TestResolveSegment:
    def test_empty_segment_contributes_nothing(self) -> None:
        assert resolve_segment([], {}) == ""

    def test_prefixes_slash(self) -> None:
        assert resolve_segment([_lit("a"), _lit("b")], {}) == "/ab"


class TestDeterminism:
    def test_same_params_same_path(self) -> None:
        generate = route_generator([[_lit("blog")], [_dyn("post")]])
        params = {"post": "x#y"}
        assert generate(params) == generate(params)
        assert params == {"post": "x#y"}
