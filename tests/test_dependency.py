import unittest

from gantry.service.board import GanttBoard
from gantry.service.dependency import arrow_path, dependency_arrows
from gantry.service.layout import build_layout, row_for_task

from helpers import FakeStore, d, make_project, make_task


class TestArrowPath(unittest.TestCase):
    def test_cubic_bezier_with_horizontal_tangents(self):
        path = arrow_path({"x": 600, "y": 24}, {"x": 700, "y": 72})
        self.assertEqual(path, "M 600 24 C 620 24, 680 72, 700 72")

    def test_fractional_coordinates(self):
        path = arrow_path({"x": 10.5, "y": 24}, {"x": 30, "y": 72})
        self.assertEqual(path, "M 10.5 24 C 30.5 24, 10 72, 30 72")


class TestDependencyArrows(unittest.TestCase):
    def setUp(self):
        self.tasks = [
            make_task("design", "2024-03-05", "2024-03-10", progress=40),
            make_task("build", "2024-03-12", "2024-03-15", dependencies=["design"]),
            make_task(
                "ship", "2024-03-18", "2024-03-19", dependencies=["build", "ghost"]
            ),
        ]

    def test_endpoints_follow_rows(self):
        layout = build_layout(self.tasks, d("2024-03-01"), d("2024-03-31"))
        arrows = dependency_arrows(layout)
        self.assertEqual(
            [(a["prerequisite_id"], a["dependent_id"]) for a in arrows],
            [("design", "build"), ("build", "ship")],
        )
        first = arrows[0]
        self.assertEqual(first["start"], {"x": 600, "y": 24})
        self.assertEqual(first["end"], {"x": 700, "y": 72})
        self.assertEqual(first["control_start"], {"x": 620, "y": 24})
        self.assertEqual(first["control_end"], {"x": 680, "y": 72})

    def test_dangling_dependency_is_skipped(self):
        layout = build_layout(self.tasks, d("2024-03-01"), d("2024-03-31"))
        ids = {a["prerequisite_id"] for a in dependency_arrows(layout)}
        self.assertNotIn("ghost", ids)

    def test_cycles_are_drawn_edge_by_edge(self):
        tasks = [
            make_task("a", "2024-03-05", "2024-03-06", dependencies=["b"]),
            make_task("b", "2024-03-07", "2024-03-08", dependencies=["a"]),
        ]
        layout = build_layout(tasks, d("2024-03-01"), d("2024-03-31"))
        self.assertEqual(len(dependency_arrows(layout)), 2)

    def test_arrows_track_live_preview(self):
        store = FakeStore(self.tasks)
        with GanttBoard(make_project(), store) as board:
            board.pointer_down(520, 24)
            board.pointer_move(580, 24)
            layout = board.layout()
            design = row_for_task(layout, "design")
            build = row_for_task(layout, "build")
            assert design is not None and build is not None
            arrow = board.arrows(layout)[0]
            self.assertEqual(arrow["start"]["x"], design["left"] + design["width"])
            self.assertEqual(arrow["start"]["x"], 660)
            self.assertEqual(arrow["end"]["x"], build["left"])

            board.pointer_up(520, 24)
            board.pointer_down(848, 72)
            board.pointer_move(748, 72)
            arrow = board.arrows()[1]
            self.assertEqual(arrow["start"]["x"], 750)


if __name__ == "__main__":
    unittest.main(verbosity=2)
