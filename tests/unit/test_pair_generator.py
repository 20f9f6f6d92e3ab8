"""Unit tests for bitrate/resolution pair generation."""

import unittest

from abr_explorer.core.models import (
    DEFAULT_BITRATES,
    DEFAULT_RESOLUTIONS,
    BitrateRange,
    BitrateResolutionPair,
    Resolution,
    default_filter,
)
from abr_explorer.core.modules.pair_generator import bitrate_in_range, prepare_pairs


def accept_all(bitrate, resolution):
    return True


class TestDefaultFilter(unittest.TestCase):
    """Test the 0.3-8 bits per pixel default filter."""

    def test_accepts_720p_at_920k(self):
        """0.3*921600=276480 <= 920000 <= 8*921600=7372800"""
        self.assertTrue(default_filter(920000, Resolution(1280, 720)))

    def test_rejects_360p_below_floor(self):
        self.assertFalse(default_filter(50000, Resolution(640, 360)))

    def test_bounds_are_inclusive(self):
        resolution = Resolution(100, 100)
        self.assertTrue(default_filter(3000, resolution))
        self.assertTrue(default_filter(80000, resolution))
        self.assertFalse(default_filter(2999, resolution))
        self.assertFalse(default_filter(80001, resolution))


class TestPreparePairs(unittest.TestCase):
    """Test candidate pair generation."""

    def test_membership_matches_filter_and_range(self):
        """A pair is generated iff the filter holds and the bitrate is in range."""
        resolutions = list(DEFAULT_RESOLUTIONS) + [
            Resolution(1024, 576, BitrateRange(min=2000000, max=6000000)),
        ]
        pairs = prepare_pairs(resolutions, DEFAULT_BITRATES)
        generated = {(p.resolution.width, p.resolution.height, p.bitrate) for p in pairs}

        expected = set()
        for resolution in resolutions:
            for bitrate in DEFAULT_BITRATES:
                in_range = resolution.range is None or bitrate_in_range(bitrate, resolution.range)
                if default_filter(bitrate, resolution) and in_range:
                    expected.add((resolution.width, resolution.height, bitrate))

        self.assertEqual(generated, expected)

    def test_contains_known_pairs(self):
        pairs = prepare_pairs([Resolution(1280, 720), Resolution(640, 360)], [50000, 920000])

        self.assertIn(BitrateResolutionPair(Resolution(1280, 720), 920000), pairs)
        self.assertNotIn(BitrateResolutionPair(Resolution(640, 360), 50000), pairs)

    def test_range_max_only_defaults_min_to_ladder_minimum(self):
        resolution = Resolution(640, 360, BitrateRange(max=500000))
        pairs = prepare_pairs([resolution], [100000, 150000, 300000, 500000, 600000], accept_all)

        self.assertEqual([p.bitrate for p in pairs], [150000, 300000, 500000])

    def test_range_defaults_ignore_supplied_bitrates(self):
        """Missing bounds come from the default ladder, not the caller's bitrates."""
        resolution = Resolution(1920, 1080, BitrateRange())
        pairs = prepare_pairs([resolution], [100000, 150000, 9000000, 9500000], accept_all)

        self.assertEqual([p.bitrate for p in pairs], [150000, 9000000])

    def test_injected_default_ladder(self):
        resolution = Resolution(1280, 720, BitrateRange(min=300000))
        pairs = prepare_pairs([resolution], [300000, 400000, 500000], accept_all,
                              default_bitrates=(200000, 400000))

        self.assertEqual([p.bitrate for p in pairs], [300000, 400000])

    def test_inverted_range_yields_nothing_for_that_resolution(self):
        inverted = Resolution(640, 360, BitrateRange(min=800000, max=400000))
        normal = Resolution(1280, 720)
        pairs = prepare_pairs([inverted, normal], [500000, 1000000], accept_all)

        self.assertEqual([(p.resolution, p.bitrate) for p in pairs],
                         [(normal, 500000), (normal, 1000000)])

    def test_order_follows_inputs(self):
        resolutions = [Resolution(1920, 1080), Resolution(640, 360)]
        bitrates = [900000, 300000, 600000]
        pairs = prepare_pairs(resolutions, bitrates, accept_all)

        self.assertEqual(
            [(p.resolution.width, p.bitrate) for p in pairs],
            [(1920, 900000), (1920, 300000), (1920, 600000),
             (640, 900000), (640, 300000), (640, 600000)],
        )

    def test_no_duplicate_pairs(self):
        pairs = prepare_pairs([Resolution(1280, 720), Resolution(1280, 720)],
                              [1000000, 1000000, 2000000], accept_all)

        self.assertEqual(len(pairs), 2)
        self.assertEqual(len(set(pairs)), 2)

    def test_no_match_returns_empty_list(self):
        self.assertEqual(prepare_pairs([Resolution(1920, 1080)], [1000]), [])
        self.assertEqual(prepare_pairs([], DEFAULT_BITRATES), [])

    def test_filter_receives_bitrate_then_resolution(self):
        calls = []

        def recording_filter(bitrate, resolution):
            calls.append((bitrate, resolution))
            return bitrate > 400000

        resolution = Resolution(1280, 720)
        pairs = prepare_pairs([resolution], [300000, 500000], recording_filter)

        self.assertEqual(calls, [(300000, resolution), (500000, resolution)])
        self.assertEqual([p.bitrate for p in pairs], [500000])

    def test_pairs_carry_no_variables(self):
        pairs = prepare_pairs([Resolution(1280, 720)], [1000000])
        self.assertEqual(pairs[0].variables, ())


class TestBitrateInRange(unittest.TestCase):

    def test_explicit_bounds_inclusive(self):
        range_ = BitrateRange(min=300000, max=600000)
        self.assertTrue(bitrate_in_range(300000, range_))
        self.assertTrue(bitrate_in_range(600000, range_))
        self.assertFalse(bitrate_in_range(299999, range_))
        self.assertFalse(bitrate_in_range(600001, range_))

    def test_missing_bounds_use_ladder(self):
        self.assertTrue(bitrate_in_range(150000, BitrateRange()))
        self.assertTrue(bitrate_in_range(9000000, BitrateRange()))
        self.assertFalse(bitrate_in_range(9000001, BitrateRange()))


if __name__ == '__main__':
    unittest.main()
