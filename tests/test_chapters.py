import unittest

from sponsorskip.categories import ALL_CATEGORIES, Category
from sponsorskip.chapters import (
    ChapterEntry,
    chapters_from_native,
    decode_chapter_title,
    skippable_interval_at,
)


def _chapters(*pairs: tuple[str, float]) -> tuple[ChapterEntry, ...]:
    return tuple(ChapterEntry(title, time) for title, time in pairs)


class TestSkippableIntervalAt(unittest.TestCase):
    def setUp(self) -> None:
        self.chapters = _chapters(
            ("[SponsorBlock]: Sponsor", 10.0),
            ("Intro", 40.0),
            ("[SponsorBlock]: Self-promotion", 95.5),
            ("Main", 120.0),
            ("[SponsorBlock]: Preview", 300.0),
        )

    def test_sponsor_chapter_jumps_to_next_start(self) -> None:
        self.assertEqual(
            skippable_interval_at(self.chapters, 0, {Category.SPONSOR}),
            (Category.SPONSOR, 40.0),
        )

    def test_two_chapter_example(self) -> None:
        chapters = _chapters(("[SponsorBlock]: Sponsor", 10.0), ("Intro", 40.0))
        self.assertEqual(
            skippable_interval_at(chapters, 0, {Category.SPONSOR}),
            (Category.SPONSOR, 40.0),
        )
        self.assertIsNone(skippable_interval_at(chapters, 1, {Category.SPONSOR}))

    def test_label_with_hyphen(self) -> None:
        self.assertEqual(
            skippable_interval_at(self.chapters, 2, ALL_CATEGORIES),
            (Category.SELF_PROMOTION, 120.0),
        )

    def test_last_chapter_is_never_skippable(self) -> None:
        self.assertIsNone(skippable_interval_at(self.chapters, 4, ALL_CATEGORIES))

    def test_plain_chapter(self) -> None:
        self.assertIsNone(skippable_interval_at(self.chapters, 1, ALL_CATEGORIES))

    def test_disabled_category(self) -> None:
        self.assertIsNone(
            skippable_interval_at(self.chapters, 0, {Category.PREVIEW})
        )

    def test_no_current_chapter(self) -> None:
        self.assertIsNone(skippable_interval_at(self.chapters, None, ALL_CATEGORIES))
        self.assertIsNone(skippable_interval_at(self.chapters, -1, ALL_CATEGORIES))

    def test_index_out_of_range(self) -> None:
        self.assertIsNone(skippable_interval_at(self.chapters, 5, ALL_CATEGORIES))
        self.assertIsNone(skippable_interval_at((), 0, ALL_CATEGORIES))

    def test_label_match_is_exact(self) -> None:
        chapters = _chapters(("[SponsorBlock]: sponsor", 0.0), ("Main", 30.0))
        self.assertIsNone(skippable_interval_at(chapters, 0, ALL_CATEGORIES))
        chapters = _chapters(("[SponsorBlock]:Sponsor", 0.0), ("Main", 30.0))
        self.assertIsNone(skippable_interval_at(chapters, 0, ALL_CATEGORIES))


class TestDecodeChapterTitle(unittest.TestCase):
    def test_strips_prefix_verbatim(self) -> None:
        self.assertEqual(
            decode_chapter_title("[SponsorBlock]: Music Off-Topic"), "Music Off-Topic"
        )

    def test_prefix_must_lead(self) -> None:
        self.assertIsNone(decode_chapter_title("Intro [SponsorBlock]: Sponsor"))


class TestChaptersFromNative(unittest.TestCase):
    def test_converts_mappings(self) -> None:
        native = [{"title": "A", "time": 0}, {"title": "B", "time": 12.5}]
        self.assertEqual(
            chapters_from_native(native), _chapters(("A", 0.0), ("B", 12.5))
        )

    def test_missing_title_and_bad_time_keep_positions(self) -> None:
        native = [{"time": 1.0}, {"title": "x", "time": "soon"}, "junk"]
        self.assertEqual(
            chapters_from_native(native),
            (
                ChapterEntry("", 1.0),
                ChapterEntry("x", None),
                ChapterEntry("", None),
            ),
        )

    def test_marked_chapter_after_untimed_entry(self) -> None:
        native = [
            {"title": "Intro"},
            {"title": "[SponsorBlock]: Sponsor", "time": 10},
            {"title": "Main", "time": 40},
        ]
        self.assertEqual(
            skippable_interval_at(chapters_from_native(native), 1, ALL_CATEGORIES),
            (Category.SPONSOR, 40.0),
        )

    def test_untimed_successor_is_not_jumped_over(self) -> None:
        native = [
            {"title": "[SponsorBlock]: Sponsor", "time": 10},
            {"title": "Glitch", "time": None},
            {"title": "Outro", "time": 200},
        ]
        self.assertIsNone(
            skippable_interval_at(chapters_from_native(native), 0, ALL_CATEGORIES)
        )

    def test_non_list(self) -> None:
        self.assertEqual(chapters_from_native(None), ())
        self.assertEqual(chapters_from_native({"title": "A"}), ())


if __name__ == "__main__":
    unittest.main()
