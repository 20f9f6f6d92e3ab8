"""Unit tests for candidate output naming."""

import unittest
from pathlib import Path

from abr_explorer.core.models import (
    DEFAULT_BITRATES,
    DEFAULT_RESOLUTIONS,
    BitrateResolutionPair,
    QualityAnalysisModel,
    Resolution,
)
from abr_explorer.core.modules.candidate_namer import candidate_output_path, quality_file_path
from abr_explorer.core.modules.pair_generator import prepare_pairs
from abr_explorer.core.modules.variant_expander import expand_variables


class TestCandidateOutputPath(unittest.TestCase):

    def test_name_without_variables(self):
        candidate = BitrateResolutionPair(Resolution(1280, 720), 2000000)
        self.assertEqual(candidate_output_path("/out", candidate), Path("/out/1280x720_2000000.mp4"))

    def test_name_with_variables_in_stored_order(self):
        candidate = BitrateResolutionPair(Resolution(1280, 720), 2000000,
                                          (("preset", "fast"), ("tune", "film")))
        self.assertEqual(candidate_output_path(Path("/out"), candidate),
                         Path("/out/1280x720_2000000_preset_fast_tune_film.mp4"))

    def test_custom_suffix(self):
        candidate = BitrateResolutionPair(Resolution(640, 360), 500000)
        self.assertEqual(candidate_output_path("/out", candidate, ".mkv").name, "640x360_500000.mkv")

    def test_deterministic_for_equal_candidates(self):
        a = BitrateResolutionPair(Resolution(960, 540), 1200000, (("preset", "slow"),))
        b = BitrateResolutionPair(Resolution(960, 540), 1200000, (("preset", "slow"),))
        self.assertEqual(candidate_output_path("/out", a), candidate_output_path("/out", b))

    def test_injective_over_expanded_candidates(self):
        pairs = prepare_pairs(DEFAULT_RESOLUTIONS, DEFAULT_BITRATES)
        candidates = expand_variables(pairs, {"preset": ["fast", "slow"], "g": ["48", "96"]})
        paths = [candidate_output_path("/out", c) for c in candidates]

        self.assertEqual(len(set(paths)), len(candidates))


class TestQualityFilePath(unittest.TestCase):

    def test_model_segment_inserted_before_file_name(self):
        variant = Path("/out/1280x720_2000000.mp4")
        self.assertEqual(quality_file_path(variant, QualityAnalysisModel.HD),
                         Path("/out/HD/1280x720_2000000_vmaf.json"))
        self.assertEqual(quality_file_path(variant, QualityAnalysisModel.PHONE_HD),
                         Path("/out/PhoneHD/1280x720_2000000_vmaf.json"))

    def test_accepts_string_variant(self):
        self.assertEqual(quality_file_path("/out/640x360_500000_preset_fast.mp4", QualityAnalysisModel.UHD),
                         Path("/out/UHD/640x360_500000_preset_fast_vmaf.json"))


if __name__ == '__main__':
    unittest.main()
