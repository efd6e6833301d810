"""
Tests for review statistics: grouping, averages, short excerpts, merging.
"""

from datetime import datetime, timezone

from expathub_api.schemas.place import PlaceAggregate
from expathub_api.services.review_stats import (
    aggregate,
    assemble,
    build_place_aggregates,
    extract_excerpt,
    latest_reviews,
    round_rating,
)


def test_average_and_count_for_single_place(make_review):
    reviews = [make_review("p1", 5), make_review("p1", 4), make_review("p1", 5)]

    result = aggregate(reviews)

    assert result["p1"].average_rating == 4.7
    assert result["p1"].review_count == 3


def test_counts_sum_to_number_of_reviews(make_review):
    reviews = [
        make_review("p1", 3),
        make_review("p2", 4),
        make_review("p1", 2),
        make_review("p3", 5),
        make_review("p2", 1),
    ]

    result = aggregate(reviews)

    assert sum(s.review_count for s in result.values()) == len(reviews)
    assert set(result) == {"p1", "p2", "p3"}


def test_place_without_reviews_is_absent(make_review):
    result = aggregate([make_review("p1", 4)])
    assert "p2" not in result


def test_out_of_range_ratings_are_clamped(make_review):
    result = aggregate([make_review("p1", 9), make_review("p1", 0)])

    # 9 -> 5, 0 -> 1
    assert result["p1"].average_rating == 3.0
    assert 1 <= result["p1"].average_rating <= 5


def test_rounding_is_half_up():
    # 4.65 -> 4.7, 4.25 -> 4.3 (banker's rounding would give 4.6 / 4.2)
    assert round_rating(93, 20) == 4.7
    assert round_rating(17, 4) == 4.3
    assert round_rating(0, 0) == 0.0


def test_aggregate_is_repeatable(make_review):
    reviews = (make_review("p1", 5), make_review("p2", 2), make_review("p1", 3))
    assert aggregate(reviews) == aggregate(reviews)


def test_latest_review_by_created_at(make_review):
    old = make_review("p1", 5, "old", days=0)
    new = make_review("p1", 3, "new", days=5)
    other = make_review("p2", 4, "other", days=1)

    latest = latest_reviews([old, new, other])

    assert latest["p1"] is new
    assert latest["p2"] is other


def test_latest_review_handles_missing_and_naive_dates(make_review):
    undated = make_review("p1", 5, "undated", created_at=None)
    naive = make_review("p1", 4, "naive", created_at=datetime(2024, 1, 1))

    assert latest_reviews([undated, naive])["p1"] is naive


def test_latest_review_tie_keeps_first_seen(make_review):
    first = make_review("p1", 5, "first", days=1)
    second = make_review("p1", 4, "second", days=1)

    assert latest_reviews([first, second])["p1"] is first


def test_excerpt_from_pros_tag():
    content = "[pros] Great team and flexible hours [cons] Long commute"
    assert extract_excerpt(content) == "Great team and flexible hours"


def test_excerpt_from_korean_pros_tag():
    content = "[장점] 외국인 직원이 많아서 편해요\n\n[단점] 주말에 바빠요"
    assert extract_excerpt(content) == "외국인 직원이 많아서 편해요"


def test_excerpt_marker_is_case_insensitive():
    assert extract_excerpt("[PROS]  Friendly manager") == "Friendly manager"


def test_long_pros_section_is_truncated():
    pros = "a" * 80
    excerpt = extract_excerpt(f"[pros] {pros} [cons] none")

    assert excerpt == "a" * 50 + "..."
    assert len(excerpt) == 53


def test_fallback_to_raw_text_when_no_tag():
    content = "x" * 200
    assert extract_excerpt(content) == "x" * 50 + "..."


def test_short_text_is_returned_verbatim():
    content = "  Nice place, good pay "
    assert extract_excerpt(content) == content


def test_exactly_fifty_characters_gets_no_ellipsis():
    content = "b" * 50
    assert extract_excerpt(content) == content


def test_empty_and_missing_content():
    assert extract_excerpt("") == ""
    assert extract_excerpt(None) == ""


def test_truncation_does_not_split_hangul_syllables():
    # Декомпозированный хангыль (NFD) считается по слогам после нормализации
    import unicodedata
    syllables = "가" * 60
    decomposed = unicodedata.normalize("NFD", syllables)

    excerpt = extract_excerpt(decomposed)

    assert excerpt == "가" * 50 + "..."


def test_excerpt_with_custom_markers_and_length():
    content = "[good] short and sweet [bad] nothing"
    assert extract_excerpt(content, max_length=5, markers=("good",)) == "short..."


def test_excerpt_length_bound_for_various_inputs():
    samples = [
        "",
        "[pros]",
        "[pros] " + "z" * 300,
        "no tag " * 40,
        "[장점] " + "좋아요 " * 30,
        "[cons] only cons here",
    ]
    for sample in samples:
        assert len(extract_excerpt(sample)) <= 53


def test_empty_pros_tag_falls_back_to_raw_text():
    # После "[pros]" нет текста до следующего тега
    content = "[pros][cons] noisy"
    assert extract_excerpt(content) == content


def test_whitespace_only_pros_falls_back_to_raw_text():
    assert extract_excerpt("[pros]   [cons] noisy at night") == "[pros]   [cons] noisy at night"
    assert extract_excerpt("정말 좋은 곳 [장점] ") == "정말 좋은 곳 [장점] "


def test_truncation_keeps_emoji_sequences_whole():
    family = "\U0001F468\u200D\U0001F469\u200D\U0001F467"
    content = "a" * 49 + family + "b" * 10

    excerpt = extract_excerpt(content)

    assert excerpt == "a" * 49 + family + "..."


def test_truncation_keeps_flags_whole():
    flag = "\U0001F1F0\U0001F1F7"
    content = flag * 60

    assert extract_excerpt(content) == flag * 50 + "..."


def test_build_place_aggregates_uses_latest_review(make_review):
    reviews = [
        make_review("p1", 4, "[pros] older pros", days=1),
        make_review("p1", 2, "[pros] newest pros [cons] meh", days=3),
        make_review("p2", 5, "plain text review", days=2),
    ]

    result = build_place_aggregates(reviews)

    assert result["p1"] == PlaceAggregate(
        place_id="p1", average_rating=3.0, review_count=2, short_excerpt="newest pros"
    )
    assert result["p2"].short_excerpt == "plain text review"


def test_assemble_keeps_order_and_defaults(make_place):
    places = [make_place("p3"), make_place("p1"), make_place("p2")]
    aggregates = {
        "p1": PlaceAggregate(place_id="p1", average_rating=4.5, review_count=2, short_excerpt="good"),
    }

    result = assemble(places, aggregates)

    assert [p.id for p in result] == ["p3", "p1", "p2"]
    assert result[1].average_rating == 4.5
    assert result[1].review_count == 2
    assert result[1].short_excerpt == "good"
    for item in (result[0], result[2]):
        assert item.average_rating == 0
        assert item.review_count == 0
        assert item.short_excerpt == ""


def test_assemble_empty_places():
    assert assemble([], {}) == []
