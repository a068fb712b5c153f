"""Tests for content type detection, the media knowledge base and line classification."""

from confract.classify.detector import detect_content_type
from confract.classify.lines import classify_line, classify_lines
from confract.classify.media import ANIME_TITLES, MOVIE_TITLES, TV_TITLES, lookup_media
from confract.classify.profiles import DOCUMENTATION, NOTES, PROFILES, RESEARCH, TASKS, WATCHLIST
from confract.ingest.segmenter import segment
from confract.text import title_case, truncate_words

# 20 words, none containing a content type keyword
LONG_SENTENCE = (
    "the quiet river flows gently past the old stone bridge near our "
    "little village every single morning in early spring"
)


def _detect(raw):
    return detect_content_type(raw, segment(raw))


def test_profiles_are_the_fixed_five_in_order():
    assert [p.type for p in PROFILES] == ["watchlist", "research", "tasks", "documentation", "notes"]
    assert NOTES.keywords == ()


def test_short_title_list_is_watchlist():
    assert _detect("Breaking Bad\nInception\nAttack on Titan").profile is WATCHLIST


def test_long_keywordless_sentences_are_research():
    raw = "\n".join([LONG_SENTENCE] * 20)
    detection = _detect(raw)
    assert detection.avg_words > 15
    assert detection.scores["research"] == 2
    assert detection.scores["documentation"] == 1
    assert detection.profile is RESEARCH


def test_keywordless_medium_lines_fall_back_to_notes():
    raw = "the quiet river flows gently past\nour little village every single morning"
    detection = _detect(raw)
    assert all(score == 0 for score in detection.scores.values())
    assert detection.profile is NOTES


def test_task_keywords_win():
    raw = (
        "Finish the quarterly report before the deadline\n"
        "Review pending pull requests from the team\n"
        "Mark the sprint backlog item as done"
    )
    assert _detect(raw).profile is TASKS


def test_documentation_keywords_win():
    raw = (
        "Run pip install confract inside a fresh virtualenv first\n"
        "The process function returns a result with every section\n"
        "Set the config option through an environment variable"
    )
    assert _detect(raw).profile is DOCUMENTATION


def test_keyword_counted_once():
    raw = "watch watch watch watch watch watch watch watch"
    # one keyword hit, no heuristic (8 words on one line)
    assert _detect(raw).scores["watchlist"] == 1


def test_tie_goes_to_first_declared_profile():
    # "watch" (watchlist) and "paper" (research) each score 1; avg 5 words, no bonus
    raw = "watch this paper very closely"
    detection = _detect(raw)
    assert detection.scores["watchlist"] == detection.scores["research"] == 1
    assert detection.profile is WATCHLIST


def test_detection_always_returns_a_known_profile():
    for raw in ["x1", "Hello there", LONG_SENTENCE, "todo: api docs for the movie"]:
        assert _detect(raw).profile in PROFILES


# --- Media knowledge base ---

def test_knowledge_base_sets_are_disjoint():
    assert not ANIME_TITLES & TV_TITLES
    assert not ANIME_TITLES & MOVIE_TITLES
    assert not TV_TITLES & MOVIE_TITLES


def test_lookup_exact():
    assert lookup_media("attack on titan") == "anime"
    assert lookup_media("breaking bad") == "tv"
    assert lookup_media("inception") == "movies"


def test_lookup_partial_both_directions():
    assert lookup_media("breaking bad season 2") == "tv"
    assert lookup_media("fullmetal") == "anime"


def test_lookup_unknown_and_empty():
    assert lookup_media("my cousins home videos") == "unclear"
    assert lookup_media("") == "unclear"


# --- Line classification ---

def test_title_case_keeps_minor_words_lower():
    assert title_case("attack on titan") == "Attack on Titan"
    assert title_case("the lord of the rings") == "The Lord of the Rings"
    assert title_case("BREAKING bad") == "Breaking Bad"


def test_truncate_words():
    assert truncate_words("one two three four five six seven", 6) == "one two three four five six…"
    assert truncate_words("short line", 6) == "Short Line"


def test_watchlist_lines_use_knowledge_base():
    items = classify_lines(segment("Breaking Bad\nInception\nattack on titan\nMy cousins home videos"), WATCHLIST)
    assert [(i.name, i.section, i.category) for i in items] == [
        ("Breaking Bad", "tv", "tv"),
        ("Inception", "movies", "movies"),
        ("Attack on Titan", "anime", "anime"),
        ("My Cousins Home Videos", "unclear", "unclear"),
    ]
    assert all(i.note == "" and not i.is_new for i in items)


def test_task_lines_by_keyword_overlap():
    todo, done = classify_lines(segment("TODO: fix bug\nDONE: shipped release"), TASKS)
    assert todo.section == "pending"
    assert done.section == "done"
    assert todo.category == done.category == "tasks"
    assert todo.name == "Todo: Fix Bug"
    assert todo.raw == "todo fix bug"


def test_no_keyword_hits_falls_back_to_first_section():
    (line,) = segment("plain words only")
    assert classify_line(line, TASKS).section == "urgent"
    assert classify_line(line, NOTES).section == "main"
    assert classify_line(line, NOTES).category == "notes"


def test_section_tie_goes_to_first_declared():
    # one hit each for "urgent" (urgent) and "done" (done)
    (line,) = segment("urgent but done")
    assert classify_line(line, TASKS).section == "urgent"


def test_long_line_gets_truncated_name_and_note():
    (line,) = segment("The mean result measured across all twelve sites was higher than expected")
    item = classify_line(line, RESEARCH)
    assert item.section == "data"
    assert item.name == "The mean result measured across all…"
    assert item.note == line.text


def test_eight_word_line_is_not_long():
    (line,) = segment("one two three four five six seven eight")
    item = classify_line(line, NOTES)
    assert item.note == ""
    assert item.name == "One Two Three Four Five Six Seven Eight"


def test_classification_is_idempotent():
    lines = segment("TODO: fix bug\nthe mean result was measured twice over several long weeks")
    for profile in PROFILES:
        first = classify_lines(lines, profile)
        second = classify_lines(lines, profile)
        assert [(i.section, i.name) for i in first] == [(i.section, i.name) for i in second]
