"""Tests for annals.text transforms."""

from annals.parse import KEYWORDS
from annals.text import COMMANDS, apply, capitalize, indefinite_article, lowercase, titlecase


class TestTransforms:
    def test_capitalize_first_only(self):
        assert capitalize("milk snake") == "Milk snake"
        assert capitalize("mILK") == "MILK"

    def test_lowercase(self):
        assert lowercase("Milk SNAKE") == "milk snake"

    def test_titlecase(self):
        assert titlecase("the milk  snake") == "The Milk  Snake"

    def test_article_vowel(self):
        assert indefinite_article("elephant") == "an elephant"
        assert indefinite_article("Owl") == "an Owl"

    def test_article_consonant(self):
        assert indefinite_article("whale") == "a whale"

    def test_empty_stays_empty(self):
        for command in ("capitalize", "lowercase", "titlecase", "article"):
            assert apply(command, "") == ""


class TestRegistry:
    def test_every_keyword_has_a_transform(self):
        assert set(KEYWORDS.values()) == set(COMMANDS)
        for command, fn in COMMANDS.items():
            assert callable(fn)
            assert isinstance(fn("owl"), str)

    def test_apply_dispatches(self):
        assert apply("article", "owl") == "an owl"
        assert apply("titlecase", "milk snake") == "Milk Snake"
