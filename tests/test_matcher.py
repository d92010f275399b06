import unittest

from sponsorskip.categories import Category
from sponsorskip.matcher import decide, find_segment
from sponsorskip.sponsorblock import Segment

SEGMENTS = (
    Segment(Category.PREVIEW, 300.0, 320.0),
    Segment(Category.SPONSOR, 10.0, 40.0),
    Segment(Category.SELF_PROMOTION, 95.5, 120.0),
)


class TestDecide(unittest.TestCase):
    def test_inside_segment_returns_end(self) -> None:
        self.assertEqual(decide(25.0, SEGMENTS), 40.0)
        self.assertEqual(decide(310.0, SEGMENTS), 320.0)

    def test_start_is_inclusive(self) -> None:
        self.assertEqual(decide(10.0, SEGMENTS), 40.0)

    def test_end_is_exclusive(self) -> None:
        # After a jump the position sits exactly on the end; no second skip.
        for segment in SEGMENTS:
            self.assertIsNone(decide(segment.end, SEGMENTS))

    def test_outside_all_segments(self) -> None:
        for position in (0.0, 9.999, 40.0, 50.0, 200.0, 1000.0):
            self.assertIsNone(decide(position, SEGMENTS))

    def test_empty_set(self) -> None:
        self.assertIsNone(decide(5.0, ()))

    def test_overlap_takes_first_encountered(self) -> None:
        overlapping = (
            Segment(Category.SPONSOR, 10.0, 30.0),
            Segment(Category.PREVIEW, 20.0, 50.0),
        )
        self.assertEqual(decide(25.0, overlapping), 30.0)
        self.assertEqual(decide(25.0, tuple(reversed(overlapping))), 50.0)

    def test_matches_iff_contained(self) -> None:
        positions = [x / 2 for x in range(0, 700)]
        for position in positions:
            contained = [s for s in SEGMENTS if s.start <= position < s.end]
            result = decide(position, SEGMENTS)
            if contained:
                self.assertEqual(result, contained[0].end)
            else:
                self.assertIsNone(result)


class TestFindSegment(unittest.TestCase):
    def test_returns_segment(self) -> None:
        self.assertEqual(find_segment(100.0, SEGMENTS), SEGMENTS[2])

    def test_accepts_unordered_iterables(self) -> None:
        self.assertEqual(find_segment(11.0, set(SEGMENTS)), SEGMENTS[1])


if __name__ == "__main__":
    unittest.main()
