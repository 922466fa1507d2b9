"""Unit and property-based tests for fuzzy path matching."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from vaultchat.search import MATCH_THRESHOLD, MAX_RESULTS, fuzzy_score, rank_candidates

words = st.text(alphabet="abcdefghijklmnopqrstuvwxyz/._-", min_size=1, max_size=20)


class TestFuzzyScore:
    """Tests for fuzzy_score."""

    def test_prefix_scores_one(self):
        """Test that a contiguous match at the start scores 1.0."""
        assert fuzzy_score("not", "notes/alpha.md") == 1.0

    def test_interrupted_match_is_partial(self):
        """Test that gaps between matches lower the score."""
        score = fuzzy_score("na", "notes/alpha.md")
        assert 0 < score < 1
        assert score == pytest.approx((1.0 + 0.5) / 2)

    def test_no_match_scores_zero(self):
        """Test that a pattern with no character found scores 0."""
        assert fuzzy_score("xyz", "notes/alpha.md") == 0.0

    def test_case_insensitive(self):
        """Test that case is ignored on both sides."""
        assert fuzzy_score("NOTES", "notes/Alpha.md") == fuzzy_score("notes", "NOTES/alpha.md")

    def test_unmatched_trailing_characters_contribute_nothing(self):
        """Test that characters never found add no points."""
        assert fuzzy_score("abz", "ab") == pytest.approx(2 / 3)

    def test_first_match_scores_one_even_mid_string(self):
        """Test that the first matched character earns a full point wherever it is."""
        assert fuzzy_score("a", "xxxa") == 1.0

    def test_empty_pattern_rejected(self):
        """Test that an empty pattern raises ValueError."""
        with pytest.raises(ValueError):
            fuzzy_score("", "anything")

    @given(words, st.text(max_size=40))
    def test_score_within_bounds(self, pattern: str, candidate: str):
        """Property test: scores always lie in [0, 1]."""
        assert 0.0 <= fuzzy_score(pattern, candidate) <= 1.0

    @given(words, st.text(max_size=20), st.text(max_size=20))
    def test_embedded_pattern_matches_fully(self, pattern: str, prefix: str, suffix: str):
        """Property test: a pattern contained in the candidate is matched to some degree."""
        assert fuzzy_score(pattern, prefix + pattern + suffix) > 0

    @given(words)
    def test_self_match_is_perfect(self, pattern: str):
        """Property test: a string matches itself with score 1."""
        assert fuzzy_score(pattern, pattern) == 1.0


class TestRankCandidates:
    """Tests for rank_candidates."""

    @pytest.fixture
    def paths(self):
        return [
            "projects/gamma.md",
            "notes/alpha.md",
            "notes/beta.md",
            "archive/notes-old.md",
        ]

    def test_blank_query_means_no_search(self, paths):
        """Test that an empty or blank query returns nothing."""
        assert rank_candidates("", paths) == []
        assert rank_candidates("   ", paths) == []

    def test_orders_by_descending_score(self, paths):
        """Test that the best match comes first."""
        results = rank_candidates("notes/b", paths)
        assert results[0] == "notes/beta.md"

    def test_ties_keep_enumeration_order(self):
        """Test that equal scores keep the input order."""
        results = rank_candidates("note", ["note-b.md", "note-a.md", "note-c.md"])
        assert results == ["note-b.md", "note-a.md", "note-c.md"]

    def test_threshold_is_exclusive(self):
        """Test that candidates at or below the threshold are dropped."""
        results = rank_candidates("abc", ["a", "zzz"], threshold=1 / 3)
        assert results == []

    def test_limit_defaults_to_five(self):
        """Test that at most MAX_RESULTS candidates are returned."""
        candidates = [f"note-{i}.md" for i in range(10)]
        assert len(rank_candidates("note", candidates)) == MAX_RESULTS

    def test_exclude_skips_selected(self, paths):
        """Test that excluded keys never appear."""
        results = rank_candidates("notes", paths, exclude=["notes/alpha.md"])
        assert "notes/alpha.md" not in results

    def test_key_extracts_text(self):
        """Test ranking of arbitrary objects through a key function."""
        items = [{"path": "x.md"}, {"path": "notes.md"}]
        results = rank_candidates("notes", items, key=lambda item: item["path"])
        assert results == [{"path": "notes.md"}]

    @given(st.lists(words, max_size=15), words)
    def test_results_exceed_threshold(self, candidates: list[str], query: str):
        """Property test: every result scores above the threshold, best first."""
        results = rank_candidates(query, candidates)
        scores = [fuzzy_score(query, r) for r in results]
        assert len(results) <= MAX_RESULTS
        assert all(s > MATCH_THRESHOLD for s in scores)
        assert scores == sorted(scores, reverse=True)
