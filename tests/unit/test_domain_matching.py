"""Tests for candidate selection, strategies and title similarity.

These run against pure domain code: no connectors, no event loop.
"""

import pytest

from tests.fixtures.factories import make_backend_track
from trackbridge.domain.matching import (
    DURATION_TOLERANCE_MS,
    CallableMatchStrategy,
    DefaultMatchStrategy,
    MatchOptions,
    MatchStrategy,
    PreferOriginalStrategy,
    calculate_title_similarity,
    find_same_duration,
    is_same_duration,
    select_best_match,
)
from trackbridge.domain.matching.algorithms import TITLE_SIMILARITY_CONFIG


def _reject_all(candidate, track):
    return False


class TestDurationWindow:
    """Test the duration proximity helpers."""

    def test_window_is_inclusive(self):
        assert DURATION_TOLERANCE_MS == 1500
        assert is_same_duration(201500, 200000)
        assert is_same_duration(198500, 200000)
        assert not is_same_duration(201501, 200000)
        assert not is_same_duration(198499, 200000)

    def test_first_match_wins_over_closest(self):
        """The earliest in-window candidate is returned, not the nearest."""
        candidates = [
            make_backend_track(250000),
            make_backend_track(201400, identifier="first-in-window"),
            make_backend_track(200000, identifier="exact"),
        ]

        match = find_same_duration(candidates, 200000)

        assert match.info.identifier == "first-in-window"

    def test_no_candidate_in_window(self):
        assert find_same_duration([make_backend_track(250000)], 200000) is None


class TestSelectBestMatch:
    """Test the two-stage selection heuristic."""

    def test_prioritized_duration_scenario(self, catalog_track, candidates):
        # 198000 is outside the window; the default strategy picks it as first
        options = MatchOptions(prioritize_same_duration=True)

        match = select_best_match(candidates, catalog_track, options)

        assert match.length == 198000

    def test_default_options_return_first_candidate(self, catalog_track, candidates):
        assert select_best_match(candidates, catalog_track) is candidates[0]
        assert select_best_match(candidates, catalog_track, MatchOptions()) is candidates[0]

    def test_omitted_hooks_match_explicit_defaults(self, catalog_track, candidates):
        explicit = MatchOptions(strategy=DefaultMatchStrategy())
        adapted = MatchOptions(strategy=CallableMatchStrategy())

        assert select_best_match(candidates, catalog_track, explicit) is candidates[0]
        assert select_best_match(candidates, catalog_track, adapted) is candidates[0]

    @pytest.mark.parametrize("prioritize", [True, False])
    def test_no_candidates(self, catalog_track, prioritize):
        options = MatchOptions(prioritize_same_duration=prioritize)
        assert select_best_match([], catalog_track, options) is None

    def test_duration_shortcut_ignores_strategy(self, catalog_track):
        """An in-window candidate is returned even if the filter would reject it."""
        candidates = [
            make_backend_track(250000),
            make_backend_track(201500, identifier="in-window"),
        ]
        options = MatchOptions(
            prioritize_same_duration=True,
            strategy=CallableMatchStrategy(filter=_reject_all),
        )

        match = select_best_match(candidates, catalog_track, options)

        assert match is candidates[1]

    def test_duration_shortcut_ignores_sort(self, catalog_track):
        candidates = [
            make_backend_track(199000, identifier="in-window"),
            make_backend_track(250000),
        ]
        longest_first = CallableMatchStrategy(sort=lambda a, b, track: b.length - a.length)
        options = MatchOptions(prioritize_same_duration=True, strategy=longest_first)

        match = select_best_match(candidates, catalog_track, options)

        assert match.info.identifier == "in-window"

    def test_falls_through_to_strategy_without_duration_match(self, catalog_track):
        candidates = [make_backend_track(100000), make_backend_track(300000)]
        longest_first = CallableMatchStrategy(sort=lambda a, b, track: b.length - a.length)
        options = MatchOptions(prioritize_same_duration=True, strategy=longest_first)

        match = select_best_match(candidates, catalog_track, options)

        assert match.length == 300000

    def test_shortcut_disabled_leaves_choice_to_strategy(self, catalog_track):
        """With the shortcut off, an exact-duration candidate has no special weight."""
        candidates = [make_backend_track(200000), make_backend_track(300000)]
        longest_first = CallableMatchStrategy(sort=lambda a, b, track: b.length - a.length)

        match = select_best_match(candidates, catalog_track, MatchOptions(strategy=longest_first))

        assert match.length == 300000

    def test_track_without_duration_skips_shortcut(self, catalog_track, candidates):
        from attrs import evolve

        track = evolve(catalog_track, duration_ms=None)
        options = MatchOptions(
            prioritize_same_duration=True,
            strategy=CallableMatchStrategy(sort=lambda a, b, t: b.length - a.length),
        )

        assert select_best_match(candidates, track, options).length == 250000

    def test_filtered_candidates_never_returned(self, catalog_track):
        """Filtering happens before sorting: a rejected top-ranked candidate is dropped."""
        candidates = [make_backend_track(100000), make_backend_track(300000)]
        strategy = CallableMatchStrategy(
            filter=lambda c, track: c.length < 250000,
            sort=lambda a, b, track: b.length - a.length,
        )

        match = select_best_match(candidates, catalog_track, MatchOptions(strategy=strategy))

        assert match.length == 100000

    def test_everything_filtered_out(self, catalog_track, candidates):
        options = MatchOptions(strategy=CallableMatchStrategy(filter=_reject_all))
        assert select_best_match(candidates, catalog_track, options) is None

    def test_sort_is_stable(self, catalog_track):
        """Candidates the comparator treats as equal keep backend order."""
        candidates = [
            make_backend_track(200000, identifier="a"),
            make_backend_track(200000, identifier="b"),
            make_backend_track(100000, identifier="c"),
        ]
        shortest_first = CallableMatchStrategy(sort=lambda x, y, t: x.length - y.length)

        match = select_best_match(candidates, catalog_track, MatchOptions(strategy=shortest_first))
        assert match.info.identifier == "c"

        reverse = CallableMatchStrategy(sort=lambda x, y, t: y.length - x.length)
        match = select_best_match(candidates, catalog_track, MatchOptions(strategy=reverse))
        assert match.info.identifier == "a"

    def test_hooks_receive_catalog_track(self, catalog_track, candidates):
        seen = []

        def record(candidate, track):
            seen.append(track)
            return True

        select_best_match(candidates, catalog_track, MatchOptions(strategy=CallableMatchStrategy(filter=record)))

        assert seen == [catalog_track, catalog_track]

    def test_result_is_always_a_candidate(self, catalog_track, candidates):
        strategies = [
            DefaultMatchStrategy(),
            PreferOriginalStrategy(),
            CallableMatchStrategy(sort=lambda a, b, t: a.length - b.length),
        ]
        for strategy in strategies:
            for prioritize in (True, False):
                options = MatchOptions(prioritize_same_duration=prioritize, strategy=strategy)
                match = select_best_match(candidates, catalog_track, options)
                assert any(match is c for c in candidates)

    def test_custom_tolerance(self, catalog_track):
        candidates = [make_backend_track(250000), make_backend_track(203000)]
        options = MatchOptions(prioritize_same_duration=True, duration_tolerance_ms=5000)

        assert select_best_match(candidates, catalog_track, options).length == 203000


class TestStrategies:
    """Test built-in strategies against the protocol."""

    @pytest.mark.parametrize(
        "strategy",
        [DefaultMatchStrategy(), CallableMatchStrategy(), PreferOriginalStrategy()],
    )
    def test_builtins_satisfy_protocol(self, strategy):
        assert isinstance(strategy, MatchStrategy)

    def test_prefer_original_rejects_streams(self, catalog_track):
        strategy = PreferOriginalStrategy()
        assert not strategy.accept(make_backend_track(0, is_stream=True), catalog_track)
        assert strategy.accept(make_backend_track(200000), catalog_track)
        assert PreferOriginalStrategy(allow_streams=True).accept(
            make_backend_track(0, is_stream=True), catalog_track
        )

    def test_prefer_original_ranks_studio_over_live(self, catalog_track):
        candidates = [
            make_backend_track(260000, title="Artist A - Song (Live at Wembley)", identifier="live"),
            make_backend_track(201000, title="Artist A - Song", identifier="studio"),
        ]

        match = select_best_match(
            candidates, catalog_track, MatchOptions(strategy=PreferOriginalStrategy())
        )

        assert match.info.identifier == "studio"

    def test_prefer_original_matches_bare_titles(self, catalog_track):
        candidates = [
            make_backend_track(200000, title="Completely Different", identifier="other"),
            make_backend_track(200000, title="Song", identifier="bare"),
        ]

        match = select_best_match(
            candidates, catalog_track, MatchOptions(strategy=PreferOriginalStrategy())
        )

        assert match.info.identifier == "bare"


class TestTitleSimilarity:
    """Test title similarity calculation algorithm."""

    def test_identical_titles(self):
        assert calculate_title_similarity("Paranoid Android", "Paranoid Android") == 1.0

    def test_case_insensitive(self):
        assert calculate_title_similarity("PARANOID ANDROID", "paranoid android") == 1.0

    def test_variation_markers(self):
        expected = TITLE_SIMILARITY_CONFIG["variation_similarity_score"]
        assert calculate_title_similarity("Paranoid Android", "Paranoid Android - Live") == expected
        assert calculate_title_similarity("Song Title (Remix)", "Song Title") == expected

    def test_fuzzy_matching(self):
        result = calculate_title_similarity("Yesterday", "Yellow Submarine")
        assert 0.0 <= result < 0.5

    def test_word_order_tolerance(self):
        assert calculate_title_similarity("The Final Countdown", "Final Countdown, The") > 0.8


def test_none_strategy_falls_back_to_default():
    assert MatchOptions(strategy=None).strategy == DefaultMatchStrategy()
