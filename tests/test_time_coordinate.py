import unittest

from gantry.service.coordinate import DateCoordinateMapper, pixels_per_day_for
from gantry.time import add_days, date_to_str, days_between, round_half_up

from helpers import d


class TestCalendarHelpers(unittest.TestCase):
    def test_days_between_is_signed_and_crosses_leap_day(self):
        self.assertEqual(days_between(d("2024-02-27"), d("2024-03-01")), 3)
        self.assertEqual(days_between(d("2024-03-01"), d("2024-02-27")), -3)
        self.assertEqual(days_between(d("2024-12-28"), d("2025-01-05")), 8)

    def test_add_days_crosses_month_and_year(self):
        self.assertEqual(date_to_str(add_days(d("2024-12-30"), 3)), "2025-01-02")
        self.assertEqual(date_to_str(add_days(d("2024-03-01"), -1)), "2024-02-29")

    def test_date_from_str_rejects_garbage(self):
        with self.assertRaises(ValueError):
            d("2024-13-01")
        with self.assertRaises(ValueError):
            d("next tuesday")

    def test_round_half_up(self):
        self.assertEqual(round_half_up(1.5), 2)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(-1.5), -1)
        self.assertEqual(round_half_up(1.49), 1)


class TestDateCoordinateMapper(unittest.TestCase):
    def test_whole_days_round_trip_for_both_densities(self):
        for density in ("comfortable", "compact"):
            mapper = DateCoordinateMapper.for_density(d("2024-02-27"), density)
            ppd = pixels_per_day_for(density)
            for days in range(-30, 61):
                self.assertEqual(mapper.x_to_days(days * ppd), days)

    def test_dates_round_trip(self):
        mapper = DateCoordinateMapper(d("2024-02-27"), 20)
        for offset in (0, 1, 2, 3, 35, 400):
            date = add_days(d("2024-02-27"), offset)
            self.assertEqual(mapper.x_to_date(mapper.date_to_x(date)), date)

    def test_partial_days_snap_to_nearest(self):
        mapper = DateCoordinateMapper(d("2024-03-01"), 50)
        self.assertEqual(mapper.x_to_days(74), 1)
        self.assertEqual(mapper.x_to_days(75), 2)
        self.assertEqual(mapper.x_to_days(-24), 0)
        self.assertEqual(mapper.x_to_days(-26), -1)

    def test_positions(self):
        mapper = DateCoordinateMapper(d("2024-02-27"), 50)
        self.assertEqual(mapper.date_to_x(d("2024-03-05")), 350)
        self.assertEqual(mapper.days_to_width(5), 250)
        self.assertEqual(date_to_str(mapper.x_to_date(350)), "2024-03-05")

    def test_rejects_non_positive_scale(self):
        with self.assertRaises(ValueError):
            DateCoordinateMapper(d("2024-03-01"), 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
