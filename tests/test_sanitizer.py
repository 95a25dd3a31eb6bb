# tests/test_sanitizer.py
"""Tests for response sanitizing."""

import pytest

from pocketscholar.sanitizer import ResponseSanitizer, sanitize_response, truncate_repetition


class TestLeadingEcho:
    def test_strips_response_header(self):
        assert sanitize_response("### Response: Paris is the capital.") == "Paris is the capital."

    def test_strips_question_label(self):
        raw = "Question: What is the capital?\nParis is the capital."
        # Everything after the fragment is kept; the label itself goes
        assert sanitize_response(raw).startswith("What is the capital?")

    def test_fragment_outside_window_is_kept(self):
        sanitizer = ResponseSanitizer(leading_window=10)
        text = "The answer is long enough here. Context: something"
        assert sanitizer.strip_leading_echo(text) == text

    def test_fragment_with_nothing_after_is_kept(self):
        sanitizer = ResponseSanitizer()
        assert sanitizer.strip_leading_echo("### Response:") == "### Response:"


class TestAnswerLabel:
    def test_strips_answer_label(self):
        assert sanitize_response("Answer: 1648") == "1648"

    def test_case_insensitive(self):
        assert ResponseSanitizer().strip_answer_label("answer: yes") == "yes"

    def test_short_label(self):
        assert ResponseSanitizer().strip_answer_label("A: yes") == "yes"

    def test_label_inside_text_is_kept(self):
        text = "The Answer: is not a label here"
        assert ResponseSanitizer().strip_answer_label(text) == text


class TestTrailingEcho:
    def test_cuts_at_echoed_marker(self):
        raw = "The treaty was signed in 1648 in Westphalia.\nQ: What else?"
        assert sanitize_response(raw) == "The treaty was signed in 1648 in Westphalia."

    def test_marker_in_first_characters_is_ignored(self):
        sanitizer = ResponseSanitizer(trailing_offset=30)
        text = "Q: is short but the rest of this answer matters"
        assert sanitizer.truncate_trailing_echo(text) == text

    def test_case_insensitive_marker(self):
        raw = "The treaty was signed in 1648 in Westphalia. based on the context, yes."
        assert sanitize_response(raw) == "The treaty was signed in 1648 in Westphalia."


class TestRepetition:
    def test_short_text_untouched(self):
        assert truncate_repetition("no no no no no") == "no no no no no"

    def test_repeated_lines(self):
        raw = "\n".join(["Line one here", "Repeat me please"] * 4)
        assert truncate_repetition(raw) == "Line one here Repeat me please"

    def test_repeated_pattern_cuts_at_run_start(self):
        # "s ye" is the first pattern found three times in a row
        raw = "The answer is yes yes yes yes yes yes"
        assert truncate_repetition(raw) == "The answer i"

    def test_repeated_word(self):
        word = "abcdefghijklmnopqrstu"
        raw = "Intro text here. " + " ".join([word] * 6)
        assert truncate_repetition(raw) == "Intro text here."

    def test_clean_text_untouched(self):
        text = "The treaty was signed in 1648 and ended the Thirty Years War."
        assert truncate_repetition(text) == text


class TestCapLength:
    def test_short_answer_untouched(self):
        assert ResponseSanitizer().cap_length("Short answer.") == "Short answer."

    def test_hard_cut_with_ellipsis(self):
        text = " ".join(f"word{i}" for i in range(400))
        capped = ResponseSanitizer(max_chars=800).cap_length(text)

        assert len(capped) == 803
        assert capped.endswith("...")
        assert capped[:800] == text[:800]

    def test_cut_at_last_sentence(self):
        text = ("This is a full sentence. " * 40).strip()
        capped = ResponseSanitizer(max_chars=800, min_sentence_cut=200).cap_length(text)

        assert len(capped) <= 800
        assert capped.endswith("sentence.")

    def test_early_sentence_end_is_not_used(self):
        text = "Short. " + "x" * 1000
        capped = ResponseSanitizer(max_chars=800, min_sentence_cut=200).cap_length(text)
        assert capped.endswith("...")


class TestSanitize:
    def test_trims_whitespace(self):
        assert sanitize_response("   Paris.   ") == "Paris."

    def test_combined_passes(self):
        raw = "### Response:\nAnswer: The treaty was signed in 1648.\nQ: When?"
        assert sanitize_response(raw) == "The treaty was signed in 1648."

    def test_empty(self):
        assert sanitize_response("   ") == ""


class TestIdempotence:
    @pytest.mark.parametrize(
        "raw",
        [
            "Answer: The treaty was signed in 1648.",
            "\n".join(["The treaty was signed in 1648."] * 3),
            "Intro text here. " + " ".join(["abcdefghijklmnopqrstu"] * 6),
            "Paris is the capital. Q: What else?",
        ],
    )
    def test_sanitize_twice_is_stable(self, raw):
        once = sanitize_response(raw)
        assert sanitize_response(once) == once
