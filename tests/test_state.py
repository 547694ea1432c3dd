# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Presentation state machine: slot rotation, fades, zoom and aspect correction."""
import numpy as np
import pytest

from kenburns.media.images import Image
from kenburns.presentation.state import (
    PictureSlot,
    PresentationState,
    TimingState,
    ZoomDirection,
    aspect_correction,
    cover_size,
    slot_transform,
)
from kenburns.presentation.timing import SHOW_DURATION, TRANSITION_DURATION


def make_image(name="pic", width=4, height=3):
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    return Image(width=width, height=height, pixels=pixels, source=name)


class FakePipeline:
    """Non-blocking poll that only yields images once they are 'ready'."""

    def __init__(self):
        self.ready = []
        self.polls = 0

    def offer(self, *names):
        self.ready.extend(make_image(n) for n in names)

    def poll(self):
        self.polls += 1
        return self.ready.pop(0) if self.ready else None


@pytest.fixture
def pipeline():
    return FakePipeline()


@pytest.fixture
def state(pipeline):
    return PresentationState(pipeline.poll, clock=lambda: 0)


class TestTimingState:
    def test_alpha_fades_in_linearly_then_holds(self):
        timing = TimingState(start_us=1_000, zoom_direction=ZoomDirection.IN)

        assert timing.alpha(1_000) == 0.0
        assert timing.alpha(1_000 + TRANSITION_DURATION // 2) == pytest.approx(0.5)
        assert timing.alpha(1_000 + TRANSITION_DURATION) == 1.0
        assert timing.alpha(1_000 + 10 * SHOW_DURATION) == 1.0

    def test_alpha_is_monotonic(self):
        timing = TimingState(start_us=0, zoom_direction=ZoomDirection.OUT)
        samples = [timing.alpha(t) for t in range(0, 2 * TRANSITION_DURATION, 10_000)]
        assert samples == sorted(samples)

    def test_zoom_in_grows_linearly_and_keeps_growing(self):
        timing = TimingState(start_us=0, zoom_direction=ZoomDirection.IN)

        assert timing.zoom(0) == pytest.approx(1.0)
        assert timing.zoom(SHOW_DURATION) == pytest.approx(1.1)
        assert timing.zoom(2 * SHOW_DURATION) == pytest.approx(1.2)

    def test_zoom_out_eases_to_one_and_stays(self):
        timing = TimingState(start_us=0, zoom_direction=ZoomDirection.OUT)

        assert timing.zoom(0) == pytest.approx(1.1)
        assert timing.zoom(SHOW_DURATION // 2) == pytest.approx(1.0 + 0.1 * 0.25)
        assert timing.zoom(SHOW_DURATION) == pytest.approx(1.0)
        assert timing.zoom(3 * SHOW_DURATION) == pytest.approx(1.0)

    def test_overflowing_t_is_unclamped(self):
        timing = TimingState(start_us=0, zoom_direction=ZoomDirection.IN)
        assert timing.overflowing_t(SHOW_DURATION + SHOW_DURATION // 2) == pytest.approx(1.5)

    def test_has_transitioned_is_strict(self):
        timing = TimingState(start_us=0, zoom_direction=ZoomDirection.IN)
        assert not timing.has_transitioned(TRANSITION_DURATION)
        assert timing.has_transitioned(TRANSITION_DURATION + 1)

    def test_zoom_direction_negation(self):
        assert ~ZoomDirection.IN is ZoomDirection.OUT
        assert ~ZoomDirection.OUT is ZoomDirection.IN


class TestPresentationState:
    def test_bootstrap_polls_until_first_image(self, state, pipeline):
        state.update(0)
        state.update(10)
        assert state.current is None and state.next is None
        assert state.starved_polls == 2

        pipeline.offer("first")
        state.update(20)
        assert state.current is None
        assert state.next.image.source == "first"
        assert state.next.timing.start_us == 20

    def test_first_slot_zooms_out(self, state, pipeline):
        pipeline.offer("first")
        state.update(0)
        assert state.next.timing.zoom_direction is ZoomDirection.OUT

    def test_rotation_only_after_transition_window(self, state, pipeline):
        pipeline.offer("first")
        state.update(0)

        state.update(TRANSITION_DURATION)
        assert state.current is None
        assert state.next.image.source == "first"

        state.update(TRANSITION_DURATION + 1)
        assert state.current.image.source == "first"
        assert state.next is None
        assert state.rotations == 1

    def test_current_unchanged_while_next_fades_in(self, state, pipeline):
        pipeline.offer("a", "b")
        state.update(0)
        state.update(TRANSITION_DURATION + 1)
        current = state.current

        create_at = SHOW_DURATION - TRANSITION_DURATION
        state.update(create_at)
        assert state.next.image.source == "b"

        for t in range(create_at, create_at + TRANSITION_DURATION + 1, 50_000):
            state.update(t)
            assert state.current is current

    def test_no_poll_before_final_window(self, state, pipeline):
        pipeline.offer("a")
        state.update(0)
        state.update(TRANSITION_DURATION + 1)
        polls = pipeline.polls

        state.update(SHOW_DURATION - TRANSITION_DURATION - 1)
        assert pipeline.polls == polls

        state.update(SHOW_DURATION - TRANSITION_DURATION)
        assert pipeline.polls == polls + 1

    def test_zoom_direction_alternates(self, state, pipeline):
        pipeline.offer("a", "b", "c", "d")
        directions = []
        t = 0
        while state.created < 4:
            state.update(t)
            if state.next is not None and state.next.timing.start_us == t:
                directions.append(state.next.timing.zoom_direction)
            t += 10_000

        assert directions == [ZoomDirection.OUT, ZoomDirection.IN, ZoomDirection.OUT, ZoomDirection.IN]

    def test_never_more_than_two_slots(self, state, pipeline):
        pipeline.offer(*[str(i) for i in range(10)])
        for t in range(0, 10 * SHOW_DURATION, 25_000):
            state.update(t)
            assert len(state.slots()) <= 2

    def test_current_lingers_while_pipeline_starves(self, state, pipeline):
        # current created at t=0 (bootstrap at t=0, promoted once faded in)
        pipeline.offer("current")
        state.update(0)
        state.update(TRANSITION_DURATION + 1)
        current = state.current
        assert current.timing.start_us == 0

        # from 2.7s on the machine polls, but nothing arrives until 3.1s
        for t in range(2_700_000, 3_100_000, 20_000):
            state.update(t)
            assert state.current is current
            assert state.next is None

        pipeline.offer("late")
        state.update(3_100_000)
        assert state.current is current
        assert state.next.image.source == "late"
        assert state.next.timing.start_us == 3_100_000

        state.update(3_100_000 + TRANSITION_DURATION + 1)
        assert state.current.image.source == "late"

    def test_update_always_keeps_running(self, state):
        assert state.update(0) is True

    def test_update_uses_clock_when_no_time_given(self, pipeline):
        pipeline.offer("a")
        state = PresentationState(pipeline.poll, clock=lambda: 42)
        state.update()
        assert state.next.timing.start_us == 42

    def test_custom_durations_flow_into_slots(self, pipeline):
        pipeline.offer("a")
        state = PresentationState(pipeline.poll, show_duration=1_000, transition_duration=100, zoom_amount=0.5)
        state.update(0)
        timing = state.next.timing
        assert (timing.show_duration, timing.transition_duration, timing.zoom_amount) == (1_000, 100, 0.5)
        assert timing.zoom(0) == pytest.approx(1.5)

    @pytest.mark.parametrize("show, transition", [(300, 300), (300, 400), (300, 0)])
    def test_rejects_invalid_durations(self, pipeline, show, transition):
        with pytest.raises(ValueError):
            PresentationState(pipeline.poll, show_duration=show, transition_duration=transition)


class TestAspectCorrection:
    def test_wide_viewport_stretches_y(self):
        sx, sy = aspect_correction(16 / 9, 4 / 3)
        assert sx == 1.0
        assert sy == pytest.approx(1.3333, rel=1e-3)

    def test_tall_viewport_stretches_x(self):
        sx, sy = aspect_correction(9 / 16, 4 / 3)
        assert sx == pytest.approx((4 / 3) / (9 / 16))
        assert sy == 1.0

    def test_matching_aspect_is_identity(self):
        assert aspect_correction(1.5, 1.5) == (1.0, 1.0)

    def test_slot_transform_combines_zoom_and_alpha(self):
        slot = PictureSlot(make_image(width=4, height=3), TimingState(0, ZoomDirection.IN))
        sx, sy, alpha = slot_transform(slot, 16 / 9, SHOW_DURATION)

        assert sx == pytest.approx(1.1)
        assert sy == pytest.approx((16 / 9) / (4 / 3) * 1.1)
        assert alpha == 1.0

    def test_cover_size_keeps_image_aspect(self):
        w, h = cover_size((1600, 900), 4 / 3)
        assert (w, h) == (1600, 1200)

    def test_cover_size_includes_zoom(self):
        w, h = cover_size((1600, 900), 4 / 3, zoom=1.1)
        assert w == pytest.approx(1760, abs=1)
        assert h == pytest.approx(1320, abs=1)
        assert w >= 1760 and h >= 1320
