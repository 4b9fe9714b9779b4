"""
Tests for the month grid and blocked dates
"""
import pytest
from datetime import date
from services.calendar_service import (
    BLOCKED_DATES_SESSION_KEY,
    BlockedDates,
    tile_class,
    adjacent_months,
    month_grid,
    month_title,
)


@pytest.mark.unit
class TestBlockedDates:
    """Tests for the session-held blocked days"""

    def test_toggle_blocks_then_unblocks(self):
        """Test that toggling twice restores the original state"""
        blocked = BlockedDates()
        assert blocked.toggle(date(2024, 5, 20)) is True
        assert date(2024, 5, 20) in blocked
        assert blocked.toggle(date(2024, 5, 20)) is False
        assert len(blocked) == 0

    def test_as_list_is_sorted_iso(self):
        """Test that the list form is sorted YYYY-MM-DD strings"""
        blocked = BlockedDates([date(2024, 6, 1), date(2024, 5, 20)])
        assert blocked.as_list() == ['2024-05-20', '2024-06-01']

    def test_session_round_trip(self):
        """Test that blocked days survive a trip through the session"""
        session = {}
        BlockedDates([date(2024, 5, 20)]).to_session(session)
        assert session[BLOCKED_DATES_SESSION_KEY] == ['2024-05-20']
        assert BlockedDates.from_session(session).is_blocked(date(2024, 5, 20))

    def test_from_session_drops_malformed_entries(self):
        """Test that garbage in the session is ignored"""
        session = {BLOCKED_DATES_SESSION_KEY: ['2024-05-20', 'tomorrow', None]}
        assert BlockedDates.from_session(session).as_list() == ['2024-05-20']

    def test_from_empty_session(self):
        """Test that a fresh session has no blocked days"""
        assert len(BlockedDates.from_session({})) == 0


@pytest.mark.unit
class TestTileClass:
    """Tests for calendar tile styling"""

    def test_job_day_is_highlighted(self):
        """Test that a day with jobs is highlighted"""
        assert tile_class(date(2024, 5, 15), {date(2024, 5, 15)}, BlockedDates()) == 'highlight'

    def test_blocked_wins_over_highlight(self):
        """Test that a blocked day with jobs shows as blocked only"""
        day = date(2024, 5, 15)
        assert tile_class(day, {day}, BlockedDates([day])) == 'blocked'

    def test_plain_day_has_no_class(self):
        """Test that an empty day is unstyled"""
        assert tile_class(date(2024, 5, 15), set(), BlockedDates()) is None


@pytest.mark.unit
class TestMonthGrid:
    """Tests for the month grid"""

    def test_weeks_start_on_sunday(self):
        """Test that May 2024 starts on its Wednesday column"""
        weeks = month_grid(2024, 5, set(), BlockedDates(), today=date(2024, 5, 15))
        assert weeks[0][:3] == [None, None, None]
        assert weeks[0][3]['day'] == 1
        assert weeks[-1][-1] is None
        assert len(weeks) == 5

    def test_tiles_carry_state(self):
        """Test that tiles report jobs, blocks, selection and today"""
        job_day = date(2024, 5, 17)
        blocked_day = date(2024, 5, 20)
        weeks = month_grid(
            2024, 5, {job_day}, BlockedDates([blocked_day]),
            selected=date(2024, 5, 15), today=date(2024, 5, 15),
        )
        tiles = {tile['iso']: tile for week in weeks for tile in week if tile}

        assert len(tiles) == 31
        assert tiles['2024-05-17']['css_class'] == 'highlight'
        assert tiles['2024-05-17']['has_jobs'] is True
        assert tiles['2024-05-20']['css_class'] == 'blocked'
        assert tiles['2024-05-15']['selected'] is True
        assert tiles['2024-05-15']['today'] is True
        assert tiles['2024-05-16']['css_class'] is None

    def test_adjacent_months_wrap_years(self):
        """Test that navigation wraps around the year"""
        assert adjacent_months(2024, 1)['prev'] == {'year': 2023, 'month': 12}
        assert adjacent_months(2024, 12)['next'] == {'year': 2025, 'month': 1}
        assert adjacent_months(2024, 5) == {
            'prev': {'year': 2024, 'month': 4},
            'next': {'year': 2024, 'month': 6},
        }

    def test_month_title(self):
        """Test the heading text"""
        assert month_title(2024, 5) == 'May 2024'
