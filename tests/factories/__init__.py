"""Test data factories for the competition lifecycle service."""

from tests.factories.competition_factory import make_competition, make_competition_row_data

__all__ = ["make_competition", "make_competition_row_data"]
