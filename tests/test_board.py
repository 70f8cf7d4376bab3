import unittest

from gantry.configuration import DEFAULT_CONFIGURATION
from gantry.service.board import GanttBoard
from gantry.service.draft import (
    dependency_candidates,
    new_task_draft,
    toggle_dependency,
    validate_draft,
)
from gantry.time import date_to_str

from helpers import FakeStore, make_project, make_task


class TestGanttBoard(unittest.TestCase):
    def setUp(self):
        self.store = FakeStore(
            [
                make_task(
                    "design",
                    "2024-03-05",
                    "2024-03-10",
                    progress=40,
                    status="IN_PROGRESS",
                ),
                make_task("build", "2024-03-12", "2024-03-15", status="REVIEW"),
                make_task("other", "2024-03-12", "2024-03-15", project_id="elsewhere"),
            ]
        )
        self.board = GanttBoard(make_project(), self.store)

    def tearDown(self):
        self.board.close()

    def test_snapshot_is_project_scoped(self):
        self.assertEqual([t["id"] for t in self.board.tasks], ["design", "build"])

    def test_set_progress_snaps_and_resolves(self):
        commit = self.board.set_progress("design", 83)
        assert commit is not None
        self.assertEqual(commit["update"], {"progress": 85, "status": "IN_PROGRESS"})
        self.assertEqual(self.store.get("design")["progress"], 85)

        self.board.set_progress("build", 52)
        self.assertEqual(self.store.get("build")["status"], "REVIEW")
        self.board.set_progress("build", 100)
        self.assertEqual(self.store.get("build")["status"], "DONE")

    def test_set_progress_without_change(self):
        self.assertIsNone(self.board.set_progress("design", 41))
        self.assertEqual(self.store.mutations, [])

    def test_unknown_task(self):
        with self.assertRaises(ValueError):
            self.board.set_progress("missing", 10)
        with self.assertRaises(ValueError):
            self.board.get_task("other")

    def test_shift_bar_moves_and_resizes(self):
        self.board.shift_bar("design", "body", -2)
        design = self.store.get("design")
        self.assertEqual(date_to_str(design["start_date"]), "2024-03-03")
        self.assertEqual(date_to_str(design["end_date"]), "2024-03-08")

        self.board.shift_bar("design", "right_edge", 3)
        self.assertEqual(date_to_str(self.store.get("design")["end_date"]), "2024-03-11")

        self.board.shift_bar("design", "left_edge", 1)
        self.assertEqual(
            date_to_str(self.store.get("design")["start_date"]), "2024-03-04"
        )
        self.assertEqual(len(self.board.commit_log), 3)
        self.assertEqual(self.board.scope.listener_count, 0)

    def test_shift_bar_refuses_inverted_dates(self):
        self.assertIsNone(self.board.shift_bar("design", "left_edge", 10))
        self.assertEqual(self.store.mutations, [])

    def test_shift_bar_refuses_while_dragging(self):
        self.board.pointer_down(520, 24)
        with self.assertRaises(ValueError):
            self.board.shift_bar("build", "body", 1)

    def test_reload_waits_for_drag_to_finish(self):
        self.board.pointer_down(520, 24)
        self.store.tasks[0]["name"] = "Renamed"
        self.board.reload()
        self.assertEqual(self.board.get_task("design")["name"], "Design")
        self.board.pointer_up(520, 24)
        self.board.reload()
        self.assertEqual(self.board.get_task("design")["name"], "Renamed")

    def test_density_change_cancels_drag(self):
        self.board.pointer_down(520, 24)
        self.board.set_density("compact")
        self.assertIsNone(self.board.session())
        self.assertEqual(self.board.layout()["pixels_per_day"], 20)

    def test_density_from_configuration(self):
        config = dict(DEFAULT_CONFIGURATION, density="compact")
        board = GanttBoard(make_project(), self.store, config)  # type: ignore[arg-type]
        self.assertEqual(board.layout()["pixels_per_day"], 20)

    def test_unsaved_project(self):
        project = make_project()
        project["id"] = None
        with self.assertRaises(ValueError):
            GanttBoard(project, self.store)


class TestTaskDraft(unittest.TestCase):
    def test_draft_takes_project_dates(self):
        draft = new_task_draft(make_project())
        self.assertEqual(draft["project_id"], "project-1")
        self.assertEqual(date_to_str(draft["start_date"]), "2024-03-01")
        self.assertEqual(date_to_str(draft["end_date"]), "2024-03-31")
        self.assertEqual(draft["status"], "TODO")
        self.assertEqual(draft["progress"], 0)

    def test_toggle_dependency(self):
        draft = new_task_draft(make_project())
        toggle_dependency(draft, "a")
        toggle_dependency(draft, "b")
        self.assertEqual(draft["dependencies"], ["a", "b"])
        toggle_dependency(draft, "a")
        self.assertEqual(draft["dependencies"], ["b"])

    def test_candidates_match_case_insensitively(self):
        tasks = [
            make_task("design", "2024-03-05", "2024-03-10", name="UI Design"),
            make_task("build", "2024-03-12", "2024-03-15", name="Build"),
            make_task("review", "2024-03-16", "2024-03-17", name="Design review"),
        ]
        names = [t["name"] for t in dependency_candidates(tasks, "design")]
        self.assertEqual(names, ["UI Design", "Design review"])
        self.assertEqual(len(dependency_candidates(tasks)), 3)

    def test_validate_draft(self):
        draft = new_task_draft(make_project())
        with self.assertRaises(ValueError):
            validate_draft(draft)
        draft["name"] = "Write docs"
        validate_draft(draft)
        draft["end_date"], draft["start_date"] = draft["start_date"], draft["end_date"]
        with self.assertRaises(ValueError):
            validate_draft(draft)


if __name__ == "__main__":
    unittest.main(verbosity=2)
