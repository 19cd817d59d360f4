"""
Tests for keyword extraction and Jaccard similarity.
"""

import pytest

from jobmatch.config import MAX_KEYWORDS, STOP_WORDS, stop_words
from jobmatch.keywords import extract_keywords, jaccard_similarity


class TestExtractKeywords:
    """Test keyword extraction from free text."""

    def test_portuguese_sentence(self):
        """Stop words and short tokens are dropped, order is kept."""
        keywords = extract_keywords("Procuramos desenvolvedor javascript react para o time")
        assert keywords == ["procuramos", "desenvolvedor", "javascript", "react", "time"]

    def test_empty_and_none(self):
        """Empty input yields no keywords."""
        assert extract_keywords("") == []
        assert extract_keywords(None) == []

    def test_lowercases_tokens(self):
        assert extract_keywords("Python DJANGO") == ["python", "django"]

    def test_drops_tokens_shorter_than_three(self):
        assert extract_keywords("go ai sql ml") == ["sql"]

    def test_english_stop_words(self):
        assert extract_keywords("experience with the cloud and from home") == ["experience", "cloud", "home"]

    def test_accented_letters_split_words(self):
        """Non-ASCII letters are separators, leaving only ASCII fragments."""
        assert extract_keywords("também não já python") == ["tamb", "python"]

    def test_accented_word_is_truncated(self):
        assert extract_keywords("comunicação") == ["comunica"]
        assert extract_keywords("Balanço patrimonial") == ["balan", "patrimonial"]

    def test_splits_on_punctuation(self):
        assert extract_keywords("node.js, react/redux; docker!") == ["node", "react", "redux", "docker"]

    def test_truncates_to_limit(self):
        """Only the first MAX_KEYWORDS qualifying tokens are kept."""
        text = " ".join(f"word{i:02d}" for i in range(30))
        keywords = extract_keywords(text)
        assert len(keywords) == MAX_KEYWORDS
        assert keywords[0] == "word00"
        assert keywords[-1] == f"word{MAX_KEYWORDS - 1:02d}"

    def test_stop_words_do_not_count_towards_limit(self):
        text = "para " * 50 + "python"
        assert extract_keywords(text) == ["python"]

    def test_duplicates_kept(self):
        assert extract_keywords("python python") == ["python", "python"]

    def test_custom_limit_and_ignore(self):
        assert extract_keywords("alpha beta gamma", limit=2, ignore=["alpha"]) == ["beta", "gamma"]

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_returns_nothing(self, limit):
        assert extract_keywords("alpha beta gamma", limit=limit) == []


class TestStopWords:
    """Test stop-word configuration tables."""

    def test_union_of_languages(self):
        words = stop_words()
        assert "para" in words
        assert "the" in words

    def test_single_language(self):
        words = stop_words(["en"])
        assert "the" in words
        assert "para" not in words

    def test_unknown_language_is_empty(self):
        assert stop_words(["xx"]) == frozenset()

    def test_tables_are_lowercase(self):
        for words in STOP_WORDS.values():
            assert all(w == w.lower() for w in words)


class TestJaccardSimilarity:
    """Test set similarity."""

    def test_identical_sets(self):
        assert jaccard_similarity(["python", "sql"], ["sql", "python"]) == 1.0

    def test_disjoint_sets(self):
        assert jaccard_similarity(["python"], ["java"]) == 0.0

    def test_empty_side_returns_zero(self):
        """No division by zero when either side is empty."""
        assert jaccard_similarity([], ["python"]) == 0.0
        assert jaccard_similarity(["python"], []) == 0.0
        assert jaccard_similarity([], []) == 0.0

    def test_normalizes_elements(self):
        assert jaccard_similarity(["  Python ", "SQL"], ["python", "sql"]) == 1.0

    def test_partial_overlap(self):
        similarity = jaccard_similarity(
            ["javascript", "react"],
            ["procuramos", "desenvolvedor", "javascript", "react", "time"],
        )
        assert similarity == pytest.approx(0.4)

    def test_duplicates_collapse(self):
        assert jaccard_similarity(["a", "a", "b"], ["a"]) == pytest.approx(0.5)
