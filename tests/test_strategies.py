"""Test each extraction strategy in isolation."""
from __future__ import annotations

import pytest

from flashcard_pairs.config import SegmenterConfig
from flashcard_pairs.strategies import (
    STRATEGIES,
    alternating_pairs,
    explicit_applies,
    explicit_pairs,
    is_label_led,
    labeled_applies,
    labeled_pairs,
    numbered_applies,
    numbered_pairs,
    split_explicit,
    split_table_row,
    split_tokens,
    split_whitespace_columns,
    table_applies,
    table_pairs,
    two_column_applies,
    two_column_pairs,
)
from flashcard_pairs.types import FormatClassification, Pair

CFG = SegmenterConfig()


# ═══════════════════════════════════════════════════════════════════════════════
# REGISTRY
# ═══════════════════════════════════════════════════════════════════════════════

class TestRegistry:

    def test_order_matches_enum(self):
        """Strategies are tried in the declared enum order."""
        assert [s.format for s in STRATEGIES] == list(FormatClassification)


# ═══════════════════════════════════════════════════════════════════════════════
# TABLE
# ═══════════════════════════════════════════════════════════════════════════════

class TestTableStrategy:

    def test_applies_only_with_bar(self):
        assert table_applies(["huis | house"], CFG)
        assert table_applies(["huis │ house"], CFG)
        assert not table_applies(["huis     house"], CFG)

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("huis | house", ("huis", "house")),
            ("| hond | dog |", ("hond", "dog")),
            ("boom ┃ tree", ("boom", "tree")),
            ("vis ╎ fish", ("vis", "fish")),
            ("auto   car", ("auto", "car")),
            ("a | b | c", None),
            ("alleen |", None),
            ("auto car", None),
        ],
    )
    def test_split_row(self, line: str, expected):
        assert split_table_row(line) == expected

    def test_columns_zip_positionally(self):
        lines = ["huis | house", "alleen |", "auto   car", "niets"]
        assert table_pairs(lines, CFG) == [Pair("huis", "house"), Pair("auto", "car")]


# ═══════════════════════════════════════════════════════════════════════════════
# EXPLICIT SEPARATOR
# ═══════════════════════════════════════════════════════════════════════════════

class TestExplicitSeparator:

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("hond - dog", ("hond", "dog")),
            ("kat: cat", ("kat", "cat")),
            ("x = y", ("x", "y")),
            ("huis → house", ("huis", "house")),
            ("hond -", None),
            ("- dog", None),
            ("geen scheiding", None),
        ],
    )
    def test_split(self, line: str, expected):
        assert split_explicit(line) == expected

    def test_lines_are_independent(self):
        lines = ["hond - dog", "rommel", "kat : cat"]
        assert explicit_pairs(lines, CFG) == [Pair("hond", "dog"), Pair("kat", "cat")]

    def test_not_applicable_to_labeled_worksheet(self):
        lines = ["Vraag 1: Wat is H2O?", "Antwoord: water"]
        assert is_label_led(lines, CFG)
        assert not explicit_applies(lines, CFG)

    def test_applicable_when_a_separator_line_is_unlabeled(self):
        lines = ["hond: dog", "vraag: question", "antwoord: answer"]
        assert not is_label_led(lines, CFG)
        assert explicit_applies(lines, CFG)

    def test_not_applicable_without_separator(self):
        assert not explicit_applies(["appel      apple"], CFG)


# ═══════════════════════════════════════════════════════════════════════════════
# LABELED QUESTION/ANSWER
# ═══════════════════════════════════════════════════════════════════════════════

class TestLabeledStrategy:

    def test_applies_needs_both_markers(self):
        assert labeled_applies(["Vraag: x", "Antwoord: y"], CFG)
        assert not labeled_applies(["Vraag: x", "y"], CFG)

    def test_bare_labels_take_next_line(self):
        lines = ["Vraag 1", "Wat is H2O?", "Antwoord", "water"]
        assert labeled_pairs(lines, CFG) == [Pair("Wat is H2O?", "water")]

    def test_question_mark_starts_question(self):
        lines = ["Vraag en antwoord oefening", "Wat is 2+2?", "vier"]
        assert labeled_pairs(lines, CFG) == [Pair("Wat is 2+2?", "vier")]

    def test_orphan_answer_is_dropped(self):
        lines = ["Antwoord: 42", "Vraag: Wat is 6x7?", "Antwoord: 42"]
        assert labeled_pairs(lines, CFG) == [Pair("Wat is 6x7?", "42")]

    def test_unlabeled_line_after_question_is_answer(self):
        lines = ["Vraag: Hoe heet de hoofdstad van België?", "Brussel", "extra regel"]
        assert labeled_pairs(lines, CFG) == [Pair("Hoe heet de hoofdstad van België?", "Brussel")]

    def test_label_inside_word_is_not_stripped(self):
        lines = ["Vraagstuk: los op", "Antwoord: x = 3"]
        assert labeled_pairs(lines, CFG) == [Pair("Vraagstuk: los op", "x = 3")]

    def test_no_markers_configured(self):
        cfg = SegmenterConfig(question_markers=(), answer_markers=())
        assert not labeled_applies(["Vraag: x", "Antwoord: y"], cfg)
        assert labeled_pairs(["Vraag: x", "Antwoord: y"], cfg) == []


# ═══════════════════════════════════════════════════════════════════════════════
# NUMBERED LIST
# ═══════════════════════════════════════════════════════════════════════════════

class TestNumberedStrategy:

    def test_applies_on_first_line_only(self):
        assert numbered_applies(["1. hond", "dog"], CFG)
        assert not numbered_applies(["titel", "1. hond", "dog"], CFG)
        assert not numbered_applies([], CFG)

    def test_consecutive_numbers_skip(self):
        lines = ["1. hond", "dog", "2. kat", "3. boom", "tree"]
        assert numbered_pairs(lines, CFG) == [Pair("hond", "dog"), Pair("boom", "tree")]

    def test_trailing_question_without_answer(self):
        assert numbered_pairs(["1. hond", "dog", "2. kat"], CFG) == [Pair("hond", "dog")]


# ═══════════════════════════════════════════════════════════════════════════════
# TWO-COLUMN WHITESPACE
# ═══════════════════════════════════════════════════════════════════════════════

class TestTwoColumnStrategy:

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("appel    apple", ("appel", "apple")),
            ("boom\ttree", ("boom", "tree")),
            ("vis   fish", ("vis", "fish")),
            ("kip  chicken", ("kip", "chicken")),
            ("de hond  the dog", ("de hond", "the dog")),
            ("hond dog", None),
            ("a  b  c", None),
        ],
    )
    def test_whitespace_cascade(self, line: str, expected):
        assert split_whitespace_columns(line) == expected

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("de hond the dog", ("de hond", "the dog")),
            ("het grote huis the big house", ("het grote huis", "the big house")),
            ("dog a", ("dog", "a")),
            ("a big dog", None),
            ("hond", None),
        ],
    )
    def test_token_split(self, line: str, expected):
        assert split_tokens(line) == expected

    def test_applies_needs_a_clean_split(self):
        assert two_column_applies(["hond dog", "kat  cat"], CFG)
        assert not two_column_applies(["hond dog", "kat cat"], CFG)

    def test_mixed_lines(self):
        lines = ["appel    apple", "de hond the dog", "boom\ttree", "alleen"]
        assert two_column_pairs(lines, CFG) == [
            Pair("appel", "apple"),
            Pair("de hond", "the dog"),
            Pair("boom", "tree"),
        ]


# ═══════════════════════════════════════════════════════════════════════════════
# ALTERNATING LINES
# ═══════════════════════════════════════════════════════════════════════════════

class TestAlternatingStrategy:

    def test_pairs_sequentially(self):
        lines = ["hond", "dog", "kat", "cat", "boom"]
        assert alternating_pairs(lines, CFG) == [Pair("hond", "dog"), Pair("kat", "cat")]

    def test_empty(self):
        assert alternating_pairs([], CFG) == []
