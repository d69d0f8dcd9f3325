"""Tests for the contiguous, fuzzy and word-based match strategies."""

import pytest

from settings_search.matching.models import HighlightSpan
from settings_search.matching.strategies import (
    contiguous_match,
    edit_distance,
    fuzzy_match,
    get_match_function,
    word_based_match,
)


class TestEditDistance:
    def test_classic_example(self) -> None:
        assert edit_distance("kitten", "sitting") == 3

    def test_adjacent_transposition_is_one_edit(self) -> None:
        assert edit_distance("braek", "break") == 1

    def test_identity_and_empty(self) -> None:
        assert edit_distance("wrap", "wrap") == 0
        assert edit_distance("", "abc") == 3


class TestContiguousMatch:
    """Literal occurrence matching with prefix fallback."""

    def test_prefix_of_text(self) -> None:
        result = contiguous_match("git", "gitlab")

        assert result.score > 0
        assert result.highlights == [HighlightSpan(0, 3)]

    def test_case_insensitive(self) -> None:
        assert contiguous_match("GIT", "GitLab").score == pytest.approx(1.0)

    def test_late_occurrence_is_penalised(self) -> None:
        # coverage 4/8*2 = 1.0, first occurrence at 4 of 8 -> 1 - 0.5*0.2
        result = contiguous_match("save", "autosave")

        assert result.score == pytest.approx(0.9)
        assert result.highlights == [HighlightSpan(4, 8)]

    def test_every_occurrence_is_highlighted(self) -> None:
        result = contiguous_match("ab", "ab-xx-ab")

        assert result.highlights == [HighlightSpan(0, 2), HighlightSpan(6, 8)]

    def test_overlapping_occurrences_merge(self) -> None:
        assert contiguous_match("aa", "aaa").highlights == [HighlightSpan(0, 3)]

    def test_falls_back_to_longest_prefix(self) -> None:
        result = contiguous_match("format", "formal")

        assert result.score == pytest.approx(5 / 6 * 0.8)
        assert result.highlights == [HighlightSpan(0, 5)]

    def test_prefix_shorter_than_three_is_not_tried(self) -> None:
        assert contiguous_match("fox", "fo").score == 0

    def test_no_match(self) -> None:
        result = contiguous_match("xyz", "minimap")

        assert result.score == 0
        assert result.highlights == []

    @pytest.mark.parametrize("query,text", [("", "abc"), ("abc", "")])
    def test_empty_inputs(self, query, text) -> None:
        assert contiguous_match(query, text).score == 0


class TestFuzzyMatch:
    """Subsequence matching."""

    def test_out_of_order_characters_do_not_match(self) -> None:
        result = fuzzy_match("abc", "xbyacz")

        assert result.score == 0
        assert result.highlights == []

    def test_in_order_characters_match(self) -> None:
        result = fuzzy_match("abc", "xaybycz")

        assert result.score > 0
        assert result.highlights == [HighlightSpan(1, 2), HighlightSpan(3, 4), HighlightSpan(5, 6)]

    def test_spread_out_score(self) -> None:
        # compactness 3/5, no runs, first match at 1 of 7
        expected = (3 / 5) * 0.6 + (1 - (1 / 7) * 0.3) * 0.1

        assert fuzzy_match("abc", "xaybycz").score == pytest.approx(expected)

    def test_exact_match_scores_one(self) -> None:
        result = fuzzy_match("abc", "abc")

        assert result.score == pytest.approx(1.0)
        assert result.highlights == [HighlightSpan(0, 3)]

    def test_tight_match_beats_scattered_match(self) -> None:
        tight = fuzzy_match("save", "autosave")
        scattered = fuzzy_match("save", "s-a-v-e-x")

        assert tight.score > scattered.score

    def test_runs_become_highlights(self) -> None:
        result = fuzzy_match("formonsave", "editor.formatOnSave")

        assert result.highlights == [HighlightSpan(7, 11), HighlightSpan(13, 19)]

    def test_score_is_bounded(self) -> None:
        for query, text in [("a", "a"), ("ab", "ab" * 20), ("abcdefgh", "abcdefgh")]:
            assert 0.0 <= fuzzy_match(query, text).score <= 1.0

    def test_empty_inputs(self) -> None:
        assert fuzzy_match("", "abc").score == 0
        assert fuzzy_match("abc", "").score == 0


class TestWordBasedMatch:
    """Per-word substring and edit-distance matching."""

    def test_typo_matches_nearest_word(self) -> None:
        result = word_based_match("braek", "line break point")

        assert result.score == pytest.approx(0.8)
        assert result.highlights == [HighlightSpan(5, 10)]

    def test_exact_words(self) -> None:
        result = word_based_match("tab size", "Editor: Tab Size")

        assert result.score == pytest.approx(1.0)
        assert result.highlights == [HighlightSpan(8, 11), HighlightSpan(12, 16)]

    def test_partial_coverage_is_penalised_twice(self) -> None:
        # one of two words matched exactly: (1/2) * (1/2)
        assert word_based_match("quick zzzzz", "quick brown").score == pytest.approx(0.25)

    def test_similarity_must_exceed_threshold(self) -> None:
        # 'wrod' vs 'wrap' is 2 edits in 4 characters, exactly 0.5
        assert word_based_match("wrod", "wrap").score == 0

    def test_blank_query(self) -> None:
        assert word_based_match("   ", "anything").score == 0

    def test_text_with_leading_separator(self) -> None:
        assert word_based_match("fnot", ".font size").score == pytest.approx(0.75)


class TestGetMatchFunction:
    @pytest.mark.parametrize(
        "mode,expected",
        [("fuzzy", fuzzy_match), ("contiguous", contiguous_match), ("word", word_based_match)],
    )
    def test_known_modes(self, mode, expected) -> None:
        assert get_match_function(mode) is expected

    def test_unknown_mode_defaults_to_fuzzy(self) -> None:
        assert get_match_function("regex") is fuzzy_match


class TestNonAsciiText:
    """Offsets stay valid when lowercasing would change a string's length."""

    @pytest.mark.parametrize("match_fn", [contiguous_match, fuzzy_match, word_based_match])
    def test_spans_point_into_raw_text(self, match_fn) -> None:
        text = "İstanbul"

        result = match_fn("bul", text)

        assert result.score > 0
        assert result.highlights == [HighlightSpan(5, 8)]
        assert text[5:8] == "bul"

    def test_other_characters_still_fold(self) -> None:
        result = contiguous_match("straße", "Große STRASSE Straße")

        assert result.highlights == [HighlightSpan(14, 20)]
