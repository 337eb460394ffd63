import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tag_extractor.application.services.stopwords import StopWordSet


def test_load_trims_lowercases_and_drops_blank_lines():
    stop = StopWordSet.load(["  The  ", "AND", "", "   ", "\tof\n"])
    assert stop.words == {"the", "and", "of"}


def test_load_collapses_duplicates():
    stop = StopWordSet.load(["a", "A", " a "])
    assert len(stop) == 1


def test_load_empty_input_is_empty_set():
    stop = StopWordSet.load([])
    assert len(stop) == 0
    assert not stop.contains("the")


def test_second_load_replaces_first():
    first = StopWordSet.load(["the", "a"])
    second = StopWordSet.load(["of"])
    assert second.words == {"of"}
    assert "the" not in second
    # the first set is untouched
    assert first.words == {"the", "a"}


def test_contains_is_exact_match_on_normalized_words():
    stop = StopWordSet.load(["The"])
    assert stop.contains("the")
    assert "the" in stop
    assert not stop.contains("The")
    assert not stop.contains("them")
