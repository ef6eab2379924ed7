"""Tests for the matcher building blocks and single-string search.

Covers the score function, pattern alphabet, range extraction, case
folding, highlighting, pattern compilation and the Bitap matcher itself.
"""

import warnings

import pytest

import fuzzyfuse as ff
from fuzzyfuse._core import NO_MATCH_TOLERANCE


class TestCalculateScore:
    """Tests for the accuracy plus proximity score."""

    def test_exact_at_location(self):
        assert ff.calculate_score(5, 0, 0, 0, 100) == 0.0

    def test_errors_only(self):
        assert ff.calculate_score(4, 1, 0, 0, 100) == 0.25

    def test_errors_and_proximity(self):
        assert ff.calculate_score(4, 2, 25, 0, 100) == 0.75

    def test_proximity_is_symmetric(self):
        """Distance from the expected location counts in both directions."""
        assert ff.calculate_score(3, 0, 10, 20, 100) == ff.calculate_score(3, 0, 30, 20, 100)

    def test_zero_distance_off_location_is_full_mismatch(self):
        assert ff.calculate_score(4, 0, 1, 0, 0) == 1.0

    def test_zero_distance_at_location_keeps_accuracy(self):
        assert ff.calculate_score(4, 1, 3, 3, 0) == 0.25

    def test_score_is_not_clamped(self):
        assert ff.calculate_score(2, 2, 50, 0, 100) == pytest.approx(1.5)


class TestPatternAlphabet:
    """Tests for the per-character position bitmasks."""

    def test_repeated_character(self):
        assert ff.calculate_pattern_alphabet("abca") == {"a": 9, "b": 4, "c": 2}

    def test_last_character_is_bit_zero(self):
        alphabet = ff.calculate_pattern_alphabet("xyz")
        assert alphabet["z"] == 1
        assert alphabet["x"] == 4

    def test_masks_are_disjoint_and_cover_pattern(self):
        pattern = "mississippi"
        alphabet = ff.calculate_pattern_alphabet(pattern)
        combined = 0
        for mask in alphabet.values():
            assert combined & mask == 0
            combined |= mask
        assert combined == (1 << len(pattern)) - 1

    def test_multibyte_characters(self):
        assert ff.calculate_pattern_alphabet("∮f") == {"∮": 2, "f": 1}


class TestFindRanges:
    """Tests for turning a match mask into half-open ranges."""

    def test_runs(self):
        assert ff.find_ranges([0, 1, 1, 0, 1]) == [(1, 3), (4, 5)]

    def test_all_set(self):
        assert ff.find_ranges([1, 1, 1]) == [(0, 3)]

    def test_none_set(self):
        assert ff.find_ranges([0, 0, 0]) == []

    def test_run_at_start_and_end(self):
        assert ff.find_ranges([1, 0, 0, 1]) == [(0, 1), (3, 4)]

    def test_empty_mask_raises(self):
        with pytest.raises(ff.ValidationError, match="Input array is empty"):
            ff.find_ranges([])


class TestFoldCase:
    """Tests for length-preserving case folding."""

    def test_ascii(self):
        assert ff.fold_case("Old Man's War") == "old man's war"

    def test_non_ascii(self):
        assert ff.fold_case("ΓΝΩΡΊΖΩ") == "ΓΝΩΡΊΖΩ".lower()

    def test_expanding_character_is_kept(self):
        """'İ' lowercases to two code points, so it is left unchanged."""
        folded = ff.fold_case("İstanbul")
        assert len(folded) == len("İstanbul")
        assert folded == "İstanbul"

    def test_empty(self):
        assert ff.fold_case("") == ""


class TestHighlight:
    """Tests for wrapping matched ranges in markers."""

    def test_basic(self):
        assert ff.highlight("Old Man's War", [(0, 1), (2, 7), (9, 13)]) == "[O]l[d Man]'s[ War]"

    def test_custom_markers(self):
        assert ff.highlight("Syrup", [(0, 5)], "<b>", "</b>") == "<b>Syrup</b>"

    def test_overlapping_and_unsorted_ranges_are_merged(self):
        assert ff.highlight("old man", [(0, 7), (0, 3), (4, 7)]) == "[old man]"
        assert ff.highlight("abcdef", [(4, 6), (0, 2), (1, 3)]) == "[abc]d[ef]"

    def test_no_ranges(self):
        assert ff.highlight("Lamb", []) == "Lamb"

    def test_empty_text(self):
        assert ff.highlight("", [(0, 1)]) == ""


class TestCreatePattern:
    """Tests for Fuse.create_pattern."""

    def test_fields(self, fuse):
        pattern = fuse.create_pattern("abca")
        assert pattern.text == "abca"
        assert pattern.length == 4
        assert pattern.mask == 8
        assert dict(pattern.alphabet) == {"a": 9, "b": 4, "c": 2}

    def test_case_folded_by_default(self, fuse):
        assert fuse.create_pattern("Syrup").text == "syrup"

    def test_case_sensitive_keeps_case(self):
        assert ff.Fuse(is_case_sensitive=True).create_pattern("Syrup").text == "Syrup"

    def test_empty_returns_none(self, fuse):
        assert fuse.create_pattern("") is None

    def test_length_counts_characters(self, fuse):
        pattern = fuse.create_pattern("😊🥺")
        assert pattern.length == 2
        assert pattern.mask == 2

    def test_alphabet_is_read_only(self, fuse):
        pattern = fuse.create_pattern("abc")
        with pytest.raises(TypeError):
            pattern.alphabet["z"] = 1

    def test_long_pattern_warns(self):
        fuse = ff.Fuse(max_pattern_length=4)
        with pytest.warns(UserWarning, match="max_pattern_length"):
            pattern = fuse.create_pattern("abcdefgh")
        assert pattern.length == 8

    def test_pattern_at_limit_does_not_warn(self):
        fuse = ff.Fuse(max_pattern_length=4)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert fuse.create_pattern("abcd") is not None


class TestSearchUtil:
    """Tests for the raw Bitap matcher."""

    def test_exact_match(self, fuse):
        result = fuse.search_util(fuse.create_pattern("Syrup"), "syrup")
        assert result.score == 0.0
        assert result.ranges == [(0, 5)]

    def test_no_match_scores_one(self):
        fuse = ff.Fuse(threshold=0.0)
        result = fuse.search_util(fuse.create_pattern("xyz"), "abc")
        assert result.score == 1.0
        assert result.ranges == []

    def test_literal_occurrence_scores_by_position(self, fuse):
        result = fuse.search_util(fuse.create_pattern("abc"), "xxxxxxxabc")
        assert result.score == pytest.approx(0.07)
        assert result.ranges == [(7, 10)]

    def test_empty_string_raises(self, fuse):
        with pytest.raises(ff.ValidationError, match="empty"):
            fuse.search_util(fuse.create_pattern("a"), "")


class TestSearchTextInString:
    """Tests for Fuse.search_text_in_string and Fuse.search."""

    def test_reference_example(self, fuse):
        result = fuse.search_text_in_string("od mn war", "Old Man's War")
        assert result.score == pytest.approx(0.4444444444444444, abs=1e-12)
        assert result.ranges == [(0, 1), (2, 7), (9, 13)]

    def test_exact_match_ignores_case(self, fuse):
        result = fuse.search_text_in_string("SYRUP", "Syrup")
        assert result == ff.ScoreResult(score=0.0, ranges=[(0, 5)])

    def test_no_match_returns_none(self):
        assert ff.Fuse(threshold=0.0).search_text_in_string("xyz", "abc") is None

    def test_disjoint_alphabets_do_not_match(self, fuse):
        assert fuse.search_text_in_string("od mn war", "Fizz") is None

    def test_empty_query_returns_none(self, fuse):
        assert fuse.search_text_in_string("", "anything") is None

    def test_none_pattern_returns_none(self, fuse):
        assert fuse.search(None, "anything") is None

    def test_pattern_reuse(self, fuse):
        pattern = fuse.create_pattern("od mn war")
        first = fuse.search(pattern, "Old Man's War")
        second = fuse.search(pattern, "Old Man's War")
        assert first == second

    def test_score_is_never_reported_as_one(self, fuse, books):
        pattern = fuse.create_pattern("jeves")
        for book in books:
            result = fuse.search(pattern, book)
            if result is not None:
                assert abs(result.score - 1.0) >= NO_MATCH_TOLERANCE

    def test_ranges_index_into_target_string(self, fuse):
        target = "Old Man's War"
        result = fuse.search_text_in_string("od mn war", target)
        matched = "".join(target[s:e] for s, e in result.ranges)
        assert matched == "Od Man War"

    def test_convenience_search(self):
        result = ff.search("od mn war", "Old Man's War")
        assert result.ranges == [(0, 1), (2, 7), (9, 13)]

    def test_convenience_search_passes_config(self):
        assert ff.search("abc", "xxabc", distance=0) is None


class TestCaseSensitivity:
    """Tests for the is_case_sensitive option."""

    def test_insensitive_is_exact(self, fuse):
        assert fuse.search_text_in_string("Man", "man").score == 0.0

    def test_sensitive_costs_an_error(self):
        result = ff.Fuse(is_case_sensitive=True).search_text_in_string("Man", "man")
        assert result.score == pytest.approx(1 / 3)
        assert result.ranges == [(1, 3)]


class TestDistance:
    """Tests for the distance option."""

    def test_zero_distance_at_location(self):
        result = ff.Fuse(distance=0).search_text_in_string("abc", "abcxx")
        assert result.score == 0.0
        assert result.ranges == [(0, 3)]

    def test_zero_distance_elsewhere_never_matches(self):
        assert ff.Fuse(distance=0).search_text_in_string("abc", "xxabc") is None

    def test_farther_match_scores_worse(self, fuse):
        near = fuse.search_text_in_string("abc", "xabcxxxxxx")
        far = fuse.search_text_in_string("abc", "xxxxxxxabc")
        assert near.score < far.score


class TestTokenize:
    """Tests for tokenized search."""

    def test_scores_are_averaged_and_ranges_concatenated(self):
        fuse = ff.Fuse(tokenize=True)
        result = fuse.search_text_in_string("old man", "old man")
        # whole pattern 0.0, "old" 0.0, "man" 0.04
        assert result.score == pytest.approx(0.04 / 3)
        assert result.ranges == [(0, 7), (0, 3), (4, 7)]

    def test_single_word_matches_untokenized_score(self):
        plain = ff.Fuse().search_text_in_string("man", "Old Man's War")
        tokenized = ff.Fuse(tokenize=True).search_text_in_string("man", "Old Man's War")
        assert tokenized.score == pytest.approx(plain.score)
        assert tokenized.ranges == plain.ranges + plain.ranges

    def test_whitespace_only_pattern(self):
        fuse = ff.Fuse(tokenize=True)
        result = fuse.search_text_in_string("  ", "  ")
        assert result.score == 0.0

    def test_tokenized_no_match_returns_none(self):
        fuse = ff.Fuse(tokenize=True, threshold=0.0)
        assert fuse.search_text_in_string("xyz qrs", "abc") is None
