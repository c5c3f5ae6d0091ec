import pytest

from recipebox.core.text import (
    clean_name,
    normalize_name,
    split_csv_values,
    trigram_similarity,
    trigrams,
)


def test_trigrams_pad_each_word():
    assert trigrams("cat") == {"  c", " ca", "cat", "at "}


def test_trigrams_ignore_case_and_punctuation():
    assert trigrams("Cat!") == trigrams("cat")


def test_trigrams_empty():
    assert trigrams("") == set()
    assert trigrams("  --  ") == set()


def test_identical_strings_are_fully_similar():
    assert trigram_similarity("tomato soup", "Tomato Soup") == 1.0


def test_misspelling_still_similar():
    # 6 shared of 14 distinct trigrams
    score = trigram_similarity("tomato soup", "tomatoe")
    assert score == pytest.approx(6 / 14)
    assert score > 0.1


def test_unrelated_strings_score_zero():
    assert trigram_similarity("tomato soup", "xyz123") == 0.0


def test_null_or_empty_scores_zero():
    assert trigram_similarity(None, "soup") == 0.0
    assert trigram_similarity("soup", None) == 0.0
    assert trigram_similarity("", "soup") == 0.0


def test_similarity_is_symmetric():
    assert trigram_similarity("Dutch Oven", "oven") == trigram_similarity("oven", "Dutch Oven")


def test_clean_and_normalize_name():
    assert clean_name("  Cast Iron  ") == "Cast Iron"
    assert normalize_name("  Cast Iron  ") == "cast iron"
    assert clean_name(None) == ""


def test_split_csv_values():
    assert split_csv_values(None) == []
    assert split_csv_values(["Italian,Thai", " Mexican ", ",,"]) == ["Italian", "Thai", "Mexican"]
