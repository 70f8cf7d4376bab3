# SPDX-License-Identifier: MIT

import pendulum

from gantry.configuration import Density
from gantry.time import add_days, days_between, round_half_up

DENSITY_PIXELS_PER_DAY: dict[Density, int] = {
    "comfortable": 50,
    "compact": 20,
}


def pixels_per_day_for(density: Density) -> int:
    return DENSITY_PIXELS_PER_DAY[density]


class DateCoordinateMapper:
    """
    Converts calendar dates to horizontal pixel positions and back.

    x = 0 is the first day of the chart window. Pixel offsets are turned
    back into whole days by rounding, so a pointer released anywhere
    within half a day of a column boundary snaps to that boundary.
    """

    def __init__(self, chart_start: pendulum.Date, pixels_per_day: int) -> None:
        if pixels_per_day <= 0:
            raise ValueError(f"pixels_per_day must be positive, got {pixels_per_day}")
        self.chart_start = chart_start
        self.pixels_per_day = pixels_per_day

    @classmethod
    def for_density(
        cls, chart_start: pendulum.Date, density: Density
    ) -> "DateCoordinateMapper":
        return cls(chart_start, pixels_per_day_for(density))

    def date_to_x(self, date: pendulum.Date) -> int:
        return days_between(self.chart_start, date) * self.pixels_per_day

    def x_to_days(self, pixel_offset: float) -> int:
        return round_half_up(pixel_offset / self.pixels_per_day)

    def x_to_date(self, x: float) -> pendulum.Date:
        return add_days(self.chart_start, self.x_to_days(x))

    def days_to_width(self, days: int) -> int:
        return days * self.pixels_per_day
