import random

from models.review import PracticeMode
from models.verse import MemoryVerse
from utils.grading import check_blanks, grade_typed_recall, similarity, token_diff, word_overlap
from utils.practice import BLANK, build_blanks, build_prompt, first_letters, normalize_practice_mode

VERSE = "The Lord is my shepherd, I lack nothing."
LEV = {"grading": {"typed_threshold": 0.8, "method": "levenshtein"}}
OVERLAP = {"grading": {"typed_threshold": 0.8, "method": "word_overlap"}}


def test_exact_match_ignores_case_and_outer_whitespace():
    grade = grade_typed_recall(VERSE, "  the lord is my shepherd, i lack nothing.  ", LEV)
    assert grade.correct is True
    assert grade.percent == 100


def test_empty_answer_fails():
    assert grade_typed_recall(VERSE, "   ", LEV).correct is False
    assert similarity(VERSE, "") == 0.0


def test_levenshtein_tolerates_small_typos():
    assert grade_typed_recall(VERSE, "The Lord is my shepard, I lack nothing", LEV).correct is True
    assert grade_typed_recall(VERSE, "The Lord", LEV).correct is False


def test_word_overlap_counts_distinct_expected_words():
    assert word_overlap("a b c d", "a b c") == 0.75
    assert word_overlap("", "anything") == 0.0
    grade = grade_typed_recall("one two three four five", "one two three four", OVERLAP)
    assert grade.correct is True
    assert grade.percent == 80


def test_check_blanks():
    assert check_blanks(["Lord", "shepherd,"], [" lord ", "SHEPHERD,"]) == (True, 2, 2)
    assert check_blanks(["Lord", "shepherd,"], ["lord"]) == (False, 1, 2)


def test_build_blanks_is_seeded_and_sized():
    text = "For God so loved the world that he gave his one and only Son"
    masked, hidden = build_blanks(text, random.Random(3))
    assert build_blanks(text, random.Random(3)) == (masked, hidden)
    assert len(hidden) == 14 // 4
    assert masked.split(" ").count(BLANK) == len(hidden)


def test_build_blanks_short_text_caps_at_word_count():
    masked, hidden = build_blanks("Jesus wept.", random.Random(1))
    assert hidden == ["Jesus", "wept."]
    assert masked == f"{BLANK} {BLANK}"


def test_first_letters():
    assert first_letters("God is our refuge") == "G i o r"


def test_practice_prompts():
    verse = MemoryVerse(reference="Psalm 23:1", text=VERSE)
    assert normalize_practice_mode("bogus") == PracticeMode.FLASHCARD
    assert build_prompt(verse, PracticeMode.FLASHCARD)["hint"].startswith("T L i m")
    quiz = build_prompt(verse, PracticeMode.REFERENCE)
    assert "reference" not in quiz
    assert quiz["text"] == VERSE
    blanks = build_prompt(verse, PracticeMode.FILL_BLANK, seed=5)
    assert blanks["masked_text"] == build_blanks(VERSE, random.Random(5))[0]
    assert build_prompt(verse, PracticeMode.TYPE_VERSE)["word_count"] == 8


def test_token_diff_marks_missing_words():
    diff = token_diff("the Lord is my shepherd", "the Lord my shepherd")
    assert {"token": "is", "status": "missing"} in diff["expected"]
