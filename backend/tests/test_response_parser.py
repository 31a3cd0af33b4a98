"""
LexiNote Backend — Reply Parsing Unit Tests
=============================================

What:  Tests for turning vendor reply text into suggestions and hard words.

What we test:
    ✅ Comma lists are split, trimmed, and emptied of blanks
    ✅ A valid {"hardWords": [...]} reply parses: bare, fenced, or wrapped in prose
    ✅ null alternatives / context read as empty
    ✅ Anything else raises ResponseParseError("Failed to parse AI response")
    ✅ HardWord positions point at the word in the analysed text
"""

import json

import pytest

from lexinote.exceptions import ResponseParseError
from lexinote.services.response_parser import (
    parse_hard_words,
    parse_word_suggestions,
    to_hard_words,
    to_word_suggestion,
)

ANALYSIS = {
    "hardWords": [
        {
            "word": "loquacious",
            "alternatives": ["talkative", "chatty"],
            "context": "Her loquacious colleague was ubiquitous.",
        },
        {"word": "ubiquitous", "alternatives": ["everywhere"], "context": ""},
    ]
}


class TestParseWordSuggestions:

    def test_comma_list(self):
        assert parse_word_suggestions("calm, quiet, peaceful") == ["calm", "quiet", "peaceful"]

    def test_blanks_and_padding_removed(self):
        assert parse_word_suggestions(" calm,, quiet ,\n") == ["calm", "quiet"]

    def test_single_word(self):
        assert parse_word_suggestions("tranquil") == ["tranquil"]

    def test_empty_reply(self):
        assert parse_word_suggestions("") == []


class TestToWordSuggestion:

    def test_wraps_reply_with_word_and_context(self):
        suggestion = to_word_suggestion("serene", "The lake was serene.", "calm, quiet, peaceful")

        assert suggestion.original == "serene"
        assert suggestion.context == "The lake was serene."
        assert suggestion.suggestions == ["calm", "quiet", "peaceful"]

    def test_empty_reply_gives_no_suggestions(self):
        assert to_word_suggestion("serene", "", "").suggestions == []


class TestParseHardWords:

    def test_valid_reply(self):
        analysis = parse_hard_words(json.dumps(ANALYSIS))

        assert [w.word for w in analysis.hard_words] == ["loquacious", "ubiquitous"]
        assert analysis.hard_words[0].alternatives == ["talkative", "chatty"]

    def test_code_fenced_reply(self):
        text = "```json\n" + json.dumps(ANALYSIS, indent=2) + "\n```"

        analysis = parse_hard_words(text)

        assert len(analysis.hard_words) == 2

    def test_empty_list_is_valid(self):
        assert parse_hard_words('{"hardWords": []}').hard_words == []

    def test_missing_optional_fields_default(self):
        analysis = parse_hard_words('{"hardWords": [{"word": "esoteric"}]}')

        assert analysis.hard_words[0].alternatives == []
        assert analysis.hard_words[0].context == ""

    def test_null_optional_fields_read_as_empty(self):
        text = (
            '{"hardWords": ['
            '{"word": "ubiquitous", "alternatives": ["common"], "context": null},'
            '{"word": "esoteric", "alternatives": null, "context": "An esoteric topic."}'
            "]}"
        )

        analysis = parse_hard_words(text)

        assert analysis.hard_words[0].alternatives == ["common"]
        assert analysis.hard_words[0].context == ""
        assert analysis.hard_words[1].alternatives == []
        assert analysis.hard_words[1].context == "An esoteric topic."

    def test_prose_before_code_fence(self):
        text = (
            "Sure! Here is the analysis:\n\n```json\n"
            + json.dumps(ANALYSIS)
            + "\n```\nLet me know if you need more."
        )

        analysis = parse_hard_words(text)

        assert [w.word for w in analysis.hard_words] == ["loquacious", "ubiquitous"]

    def test_bare_object_inside_prose(self):
        text = "Here you go: " + json.dumps(ANALYSIS) + " Hope this helps."

        analysis = parse_hard_words(text)

        assert len(analysis.hard_words) == 2

    @pytest.mark.parametrize(
        "text,reason",
        [
            ("Here are the hard words: loquacious, ubiquitous", "invalid_json"),
            ('{"hardWords": [', "invalid_json"),
            ("[]", "missing_hardWords"),
            ('{"words": []}', "missing_hardWords"),
            ('{"hardWords": "loquacious"}', "missing_hardWords"),
            ('{"hardWords": [{"alternatives": ["x"]}]}', "invalid_entry"),
            ('{"hardWords": [{"word": "x", "alternatives": "y"}]}', "invalid_entry"),
        ],
    )
    def test_rejected_replies(self, text, reason):
        with pytest.raises(ResponseParseError) as exc_info:
            parse_hard_words(text)

        assert exc_info.value.message == "Failed to parse AI response"
        assert exc_info.value.context["reason"] == reason


class TestToHardWords:

    def test_positions_and_suggestions(self):
        text = "Her loquacious colleague was ubiquitous."
        analysis = parse_hard_words(json.dumps(ANALYSIS))

        words = to_hard_words(analysis, text)

        assert words[0].word == "loquacious"
        assert words[0].position == text.index("loquacious") == 4
        assert words[0].suggestions == ["talkative", "chatty"]
        assert words[0].difficulty == 1
        assert words[1].position == text.index("ubiquitous")

    def test_word_absent_from_text(self):
        analysis = parse_hard_words('{"hardWords": [{"word": "esoteric"}]}')

        assert to_hard_words(analysis, "plain words only")[0].position == -1
