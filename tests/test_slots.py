"""Tests for available slot calculation."""

from studyweek.core.busy import BusyPeriod, group_busy_periods
from studyweek.core.slots import AvailableSlot, calculate_available_slots, calculate_week_slots


def busy(start: int, end: int, day: int = 0) -> BusyPeriod:
    return BusyPeriod(day=day, start=start, end=end)


class TestAvailableSlot:
    def test_key(self):
        slot = AvailableSlot(day=2, start=485, end=545, duration=60)
        assert slot.key == (2, 485, 545)

    def test_format(self):
        slot = AvailableSlot(day=0, start=545, end=605, duration=60)
        assert slot.format() == "09:05-10:05 (60 min)"


class TestCalculateAvailableSlots:
    def test_free_day(self):
        slots = calculate_available_slots([], day=3)
        assert slots == [AvailableSlot(day=3, start=5, end=1435, duration=1435)]

    def test_single_busy_period(self):
        slots = calculate_available_slots([busy(540, 600)], day=0)
        assert slots == [
            AvailableSlot(day=0, start=5, end=535, duration=530),
            AvailableSlot(day=0, start=605, end=1435, duration=835),
        ]

    def test_trailing_gap_uses_single_buffer(self):
        """The slot after the last busy period reports one buffer more than its span."""
        slots = calculate_available_slots([busy(540, 600)], day=0)
        trailing = slots[-1]
        assert trailing.end - trailing.start == 830
        assert trailing.duration == 835

    def test_full_day_busy_has_no_slots(self):
        assert calculate_available_slots([busy(0, 1440)], day=0) == []

    def test_gap_consumed_by_buffers(self):
        slots = calculate_available_slots([busy(540, 600), busy(610, 700)], day=0)
        starts = [s.start for s in slots]
        assert 605 not in starts

    def test_min_session_length_is_inclusive(self):
        slots = calculate_available_slots(
            [busy(0, 600), busy(640, 1440)], day=0, buffer_time=5, min_session_length=30
        )
        assert slots == [AvailableSlot(day=0, start=605, end=635, duration=30)]

    def test_min_session_length_filters_short_gaps(self):
        slots = calculate_available_slots(
            [busy(0, 600), busy(639, 1440)], day=0, buffer_time=5, min_session_length=30
        )
        assert slots == []

    def test_zero_buffer(self):
        slots = calculate_available_slots([busy(0, 480), busy(1320, 1440)], day=1, buffer_time=0)
        assert slots == [AvailableSlot(day=1, start=480, end=1320, duration=840)]

    def test_unmerged_overlap_moves_cursor_back(self):
        """A period nested inside an earlier one rewinds the sweep to its own end."""
        slots = calculate_available_slots([busy(540, 720), busy(600, 660)], day=0)
        assert slots[-1] == AvailableSlot(day=0, start=665, end=1435, duration=775)

    def test_slots_ordered_by_start(self):
        slots = calculate_available_slots([busy(300, 360), busy(600, 660), busy(900, 960)], day=0)
        assert [s.start for s in slots] == sorted(s.start for s in slots)
        assert len(slots) == 4


class TestCalculateWeekSlots:
    def test_seven_days(self):
        week = calculate_week_slots(group_busy_periods([]))
        assert len(week) == 7
        assert [day[0].day for day in week] == list(range(7))

    def test_busy_day_is_empty(self):
        week = calculate_week_slots(group_busy_periods([busy(0, 1440, day=2)]))
        assert week[2] == []
        assert len(week[1]) == 1

    def test_merge_overlaps(self):
        days = group_busy_periods([busy(540, 720), busy(600, 660)])
        week = calculate_week_slots(days, merge_overlaps=True)
        assert week[0][-1] == AvailableSlot(day=0, start=725, end=1435, duration=715)

    def test_short_input_padded(self):
        week = calculate_week_slots([[busy(0, 1440)]])
        assert len(week) == 7
        assert week[0] == []
