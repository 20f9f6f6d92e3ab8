"""
Regression tests for per-resolution bitrate range defaults.

A bound of 0 is a real bound and must not be replaced with the ladder
minimum, and missing bounds always come from the default ladder even when
the caller supplies a different bitrate list.
"""

import unittest

from abr_explorer.core.models import BitrateRange, Resolution
from abr_explorer.core.modules.pair_generator import bitrate_in_range, prepare_pairs


def accept_all(bitrate, resolution):
    return True


class TestRangeDefaultsRegression(unittest.TestCase):

    def test_zero_min_is_honored(self):
        """min=0 keeps bitrates below the ladder minimum."""
        self.assertEqual(BitrateRange(min=0).effective((150000, 9000000)), (0, 9000000))
        self.assertTrue(bitrate_in_range(100000, BitrateRange(min=0)))

    def test_zero_max_excludes_everything(self):
        resolution = Resolution(640, 360, BitrateRange(min=0, max=0))
        self.assertEqual(prepare_pairs([resolution], [100000, 500000], accept_all), [])

    def test_sub_ladder_bitrate_with_zero_min(self):
        resolution = Resolution(640, 360, BitrateRange(min=0, max=200000))
        pairs = prepare_pairs([resolution], [100000, 200000, 300000], accept_all)

        self.assertEqual([p.bitrate for p in pairs], [100000, 200000])

    def test_missing_bounds_come_from_default_ladder(self):
        """Supplied bitrates outside 150k-9M stay excluded for a ranged resolution."""
        ranged = Resolution(1920, 1080, BitrateRange(min=None, max=None))
        unranged = Resolution(1280, 720)
        pairs = prepare_pairs([ranged, unranged], [120000, 9500000], accept_all)

        self.assertEqual([(p.resolution.width, p.bitrate) for p in pairs],
                         [(1280, 120000), (1280, 9500000)])


if __name__ == '__main__':
    unittest.main()
