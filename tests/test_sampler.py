import pytest

from tetrolab.sampler import AdaptiveSampler, DifficultyBin, format_histogram


class FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def test_bin_of_empty_board_is_lowest():
    assert DifficultyBin.from_board(0, 0) == DifficultyBin(0, 0)


def test_bins_are_clamped():
    difficulty = DifficultyBin.from_board(1000, 1000)
    assert difficulty.height_bin == DifficultyBin.MAX_HEIGHT_BIN
    assert difficulty.holes_bin == DifficultyBin.MAX_HOLES_BIN


def test_bin_boundaries_follow_widths():
    width_h = DifficultyBin.HEIGHT_BIN_WIDTH
    width_o = DifficultyBin.HOLES_BIN_WIDTH
    assert DifficultyBin.from_board(width_h - 1, width_o - 1) == DifficultyBin(0, 0)
    assert DifficultyBin.from_board(width_h, width_o) == DifficultyBin(1, 1)


def test_negative_inputs_rejected():
    with pytest.raises(ValueError):
        DifficultyBin.from_board(-1, 0)


def test_new_sampler_has_sixteen_empty_bins():
    sampler = AdaptiveSampler()
    assert len(sampler.bin_counts) == 16
    assert sum(sampler.bin_counts.values()) == 0
    assert sampler.total_captured == 0


def test_hardest_late_board_is_always_captured():
    sampler = AdaptiveSampler()
    assert sampler.capture_probability(100, 100, 500) == 1.0


def test_probability_stays_within_bounds():
    sampler = AdaptiveSampler()
    for height in range(0, 25, 3):
        for holes in range(0, 15, 2):
            for pieces in (0, 50, 200):
                p = sampler.capture_probability(height, holes, pieces)
                assert 0.05 <= p <= 1.0


def test_later_turns_raise_probability():
    sampler = AdaptiveSampler()
    early = sampler.capture_probability(4, 3, 10)
    mid = sampler.capture_probability(4, 3, 50)
    late = sampler.capture_probability(4, 3, 150)
    assert early < mid < late


def test_overfilled_bin_drops_to_floor():
    sampler = AdaptiveSampler()
    for _ in range(200):
        sampler.should_capture(0, 0, 0, FixedRandom(0.0))
    assert sampler.capture_probability(0, 0, 0) == 0.05


def test_capture_records_bin_and_total():
    sampler = AdaptiveSampler()
    assert sampler.should_capture(5, 4, 40, FixedRandom(0.0)) is True
    assert sampler.total_captured == 1
    assert sampler.bin_counts[DifficultyBin.from_board(5, 4)] == 1


def test_rejection_leaves_counts_unchanged():
    sampler = AdaptiveSampler()
    assert sampler.should_capture(0, 0, 0, FixedRandom(0.99)) is False
    assert sampler.total_captured == 0
    assert sum(sampler.bin_counts.values()) == 0


def test_capture_into_new_bin_adds_it():
    sampler = AdaptiveSampler()
    sampler.should_capture(100, 0, 0, FixedRandom(0.0))
    assert len(sampler.bin_counts) == 17


def test_progress_lines_report_total():
    sampler = AdaptiveSampler()
    sampler.should_capture(0, 0, 0, FixedRandom(0.0))
    lines = sampler.progress_lines()
    assert lines[0] == "Captured 1 boards"
    assert lines[1] == "Height & Holes distribution:"
    assert len(lines) == 2 + 16


def test_histogram_scales_to_largest():
    lines = format_histogram([("a", 10), ("b", 5)])
    assert lines[0].count("#") == 50
    assert lines[1].count("#") == 25
    assert lines[0].startswith(" " * 14 + "a | 10")


def test_histogram_of_zero_counts_has_no_bars():
    lines = format_histogram([("x", 0)])
    assert "#" not in lines[0]