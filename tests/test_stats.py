"""Unit tests for :mod:`charview.core.stats`."""

from charview.core.stats import CharStats, character_stats


def test_empty_string_counts_nothing() -> None:
    assert character_stats("") == CharStats()


def test_mixed_text_is_tallied_per_category() -> None:
    stats = character_stats("Ab 1!\té")
    assert stats == CharStats(numbers=1, uppercase=1, lowercase=1, symbols=2, spaces=2, total=7)


def test_total_is_sum_of_categories() -> None:
    samples = ["Hello, World! 123", "\t\t  ", "ÀÉÎõü", "a\nb\r\nc", "x" * 50]
    for text in samples:
        s = character_stats(text)
        assert s.total == len(text)
        assert s.numbers + s.uppercase + s.lowercase + s.symbols + s.spaces == s.total


def test_items_are_in_display_order() -> None:
    labels = [label for label, _ in character_stats("a").items()]
    assert labels == ["Numbers", "Uppercase", "Lowercase", "Symbols", "Spaces", "Total"]
