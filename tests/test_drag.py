import asyncio
import unittest

from gantry.service.board import GanttBoard
from gantry.service.drag import hit_test
from gantry.service.pointer import PointerScope
from gantry.time import date_to_str, days_between

from helpers import FakeStore, make_project, make_task

ROW0_Y = 24
ROW1_Y = 72


def dates(task):
    return date_to_str(task["start_date"]), date_to_str(task["end_date"])


class DragTestCase(unittest.TestCase):
    """
    Design spans 2024-03-05..03-10 at 40%: its bar covers x 350..600 with
    the progress handle at x 450. Build spans 03-12..03-15 (x 700..850).
    """

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
                make_task(
                    "build", "2024-03-12", "2024-03-15", dependencies=["design"]
                ),
            ]
        )
        self.board = GanttBoard(make_project(), self.store)

    def tearDown(self):
        self.board.close()


class TestHitTest(DragTestCase):
    def test_regions(self):
        layout = self.board.layout()
        cases = [
            (455, "progress_handle"),
            (352, "left_edge"),
            (598, "right_edge"),
            (520, "body"),
        ]
        for x, region in cases:
            target = hit_test(layout, x, ROW0_Y)
            assert target is not None
            self.assertEqual(target["region"], region, x)
            self.assertEqual(target["task_id"], "design")

    def test_handle_wins_over_edge(self):
        store = FakeStore([make_task("t", "2024-03-05", "2024-03-10", progress=0)])
        with GanttBoard(make_project(), store) as board:
            target = hit_test(board.layout(), 352, ROW0_Y)
        assert target is not None
        self.assertEqual(target["region"], "progress_handle")

    def test_misses(self):
        layout = self.board.layout()
        self.assertIsNone(hit_test(layout, 300, ROW0_Y))
        self.assertIsNone(hit_test(layout, 520, 2))
        self.assertIsNone(hit_test(layout, 520, 500))


class TestMove(DragTestCase):
    def test_move_commits_whole_days_and_keeps_duration(self):
        self.board.pointer_down(520, ROW0_Y)
        self.board.pointer_move(600, ROW0_Y)
        self.assertEqual(self.board.layout()["rows"][0]["left"], 430)
        self.assertEqual(self.store.mutations, [])

        self.board.pointer_up(620, ROW0_Y)

        design = self.store.get("design")
        self.assertEqual(dates(design), ("2024-03-07", "2024-03-12"))
        self.assertEqual(days_between(design["start_date"], design["end_date"]), 5)
        self.assertEqual(dates(self.board.get_task("design")), dates(design))
        self.assertEqual(len(self.store.mutations), 1)

    def test_move_rounds_to_nearest_day(self):
        self.board.pointer_down(520, ROW0_Y)
        self.board.pointer_up(520 - 74, ROW0_Y)
        self.assertEqual(dates(self.store.get("design")), ("2024-03-04", "2024-03-09"))

    def test_pointer_up_away_from_bar_still_commits(self):
        self.board.pointer_down(520, ROW0_Y)
        self.board.pointer_up(720, 900)
        self.assertEqual(dates(self.store.get("design")), ("2024-03-09", "2024-03-14"))

    def test_small_move_commits_nothing(self):
        self.board.pointer_down(520, ROW0_Y)
        self.board.pointer_up(540, ROW0_Y)
        self.assertEqual(self.store.mutations, [])
        self.assertIsNone(self.board.session())


class TestResize(DragTestCase):
    def test_resize_right(self):
        self.board.pointer_down(598, ROW0_Y)
        self.assertEqual(self.board.session()["mode"], "resizing_right")
        self.board.pointer_up(698, ROW0_Y)
        self.assertEqual(dates(self.store.get("design")), ("2024-03-05", "2024-03-12"))
        self.assertEqual(self.store.mutations[0][1].keys(), {"end_date"})

    def test_resize_left(self):
        self.board.pointer_down(352, ROW0_Y)
        self.board.pointer_move(452, ROW0_Y)
        row = self.board.layout()["rows"][0]
        self.assertEqual((row["left"], row["width"]), (450, 150))
        self.board.pointer_up(452, ROW0_Y)
        self.assertEqual(dates(self.store.get("design")), ("2024-03-07", "2024-03-10"))

    def test_resize_to_zero_length_is_allowed(self):
        self.board.pointer_down(598, ROW0_Y)
        self.board.pointer_up(598 - 250, ROW0_Y)
        self.assertEqual(dates(self.store.get("design")), ("2024-03-05", "2024-03-05"))

    def test_inverting_resize_right_is_discarded(self):
        self.board.pointer_down(598, ROW0_Y)
        self.board.pointer_move(248, ROW0_Y)
        self.board.pointer_up(248, ROW0_Y)
        self.assertEqual(self.store.mutations, [])
        self.assertEqual(dates(self.board.get_task("design")), ("2024-03-05", "2024-03-10"))
        self.assertIsNone(self.board.session())
        self.assertEqual(self.board.scope.listener_count, 0)

    def test_inverting_resize_left_is_discarded(self):
        self.board.pointer_down(352, ROW0_Y)
        self.board.pointer_up(702, ROW0_Y)
        self.assertEqual(self.store.mutations, [])
        self.assertEqual(dates(self.store.get("design")), ("2024-03-05", "2024-03-10"))


class TestProgressEdit(DragTestCase):
    def test_progress_commits_on_every_move(self):
        self.board.pointer_down(455, ROW0_Y)
        self.assertEqual(self.board.session()["mode"], "editing_progress")

        self.board.pointer_move(505, ROW0_Y)
        self.assertEqual(self.store.get("design")["progress"], 60)
        self.assertEqual(self.store.get("design")["status"], "IN_PROGRESS")

        self.board.pointer_move(620, ROW0_Y)
        self.assertEqual(self.store.get("design")["progress"], 100)
        self.assertEqual(self.store.get("design")["status"], "DONE")

        self.board.pointer_move(340, ROW0_Y)
        self.assertEqual(self.store.get("design")["progress"], 0)
        self.assertEqual(self.store.get("design")["status"], "TODO")

        self.board.pointer_up(340, ROW0_Y)
        self.assertEqual(len(self.store.mutations), 3)
        for _, update in self.store.mutations:
            self.assertEqual(update["progress"] % 5, 0)

    def test_unchanged_progress_is_not_committed(self):
        self.board.pointer_down(455, ROW0_Y)
        self.board.pointer_move(451, ROW0_Y)
        self.board.pointer_up(451, ROW0_Y)
        self.assertEqual(self.store.mutations, [])

    def test_review_is_kept(self):
        store = FakeStore(
            [make_task("t", "2024-03-05", "2024-03-10", progress=40, status="REVIEW")]
        )
        with GanttBoard(make_project(), store) as board:
            board.pointer_down(450, ROW0_Y)
            board.pointer_move(500, ROW0_Y)
            board.pointer_up(500, ROW0_Y)
        self.assertEqual(store.get("t")["progress"], 60)
        self.assertEqual(store.get("t")["status"], "REVIEW")


class TestSessionLifecycle(DragTestCase):
    def test_second_pointer_down_is_ignored(self):
        self.board.pointer_down(520, ROW0_Y)
        self.board.pointer_down(775, ROW1_Y)
        self.assertEqual(self.board.session()["task_id"], "design")
        self.assertEqual(self.board.scope.listener_count, 1)

        self.board.pointer_up(570, ROW1_Y)
        self.assertEqual(dates(self.store.get("build")), ("2024-03-12", "2024-03-15"))
        self.assertEqual(dates(self.store.get("design")), ("2024-03-06", "2024-03-11"))

    def test_listener_released_on_pointer_up(self):
        self.assertEqual(self.board.scope.listener_count, 0)
        self.board.pointer_down(520, ROW0_Y)
        self.assertEqual(self.board.scope.listener_count, 1)
        self.board.pointer_up(520, ROW0_Y)
        self.assertEqual(self.board.scope.listener_count, 0)

    def test_close_abandons_session_without_commit(self):
        self.board.pointer_down(520, ROW0_Y)
        self.board.pointer_move(720, ROW0_Y)
        self.board.close()
        self.assertEqual(self.board.scope.listener_count, 0)
        self.assertIsNone(self.board.session())
        self.assertEqual(self.store.mutations, [])
        self.assertEqual(self.board.layout()["rows"][0]["left"], 350)

    def test_moves_without_session_do_nothing(self):
        self.board.pointer_move(600, ROW0_Y)
        self.board.pointer_up(600, ROW0_Y)
        self.assertEqual(self.store.mutations, [])

    def test_failing_store_keeps_local_change_and_ends_session(self):
        store = FakeStore(
            [make_task("t", "2024-03-05", "2024-03-10", progress=40)],
            fail_with=RuntimeError("disk full"),
        )
        with GanttBoard(make_project(), store) as board:
            board.pointer_down(520, ROW0_Y)
            with self.assertLogs("gantry.service.board", level="WARNING") as logs:
                board.pointer_up(620, ROW0_Y)
            self.assertIn("store rejected commit for t", logs.output[0])
            self.assertEqual(
                dates(board.get_task("t")), ("2024-03-07", "2024-03-12")
            )
            self.assertEqual(len(board.commit_log), 1)
            self.assertIsNone(board.session())
            self.assertEqual(board.scope.listener_count, 0)


class AsyncStore(FakeStore):
    async def mutate(self, task_id, update):
        await asyncio.sleep(0)
        super().mutate(task_id, update)


class TestAsyncStore(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.store = AsyncStore([make_task("t", "2024-03-05", "2024-03-10")])

    async def test_mutation_is_scheduled_without_blocking(self):
        with GanttBoard(make_project(), self.store) as board:
            board.pointer_down(520, ROW0_Y)
            board.pointer_up(620, ROW0_Y)
            self.assertEqual(
                dates(board.get_task("t")), ("2024-03-07", "2024-03-12")
            )
            self.assertEqual(len(board.pending_mutations), 1)

            await asyncio.gather(*board.pending_mutations)

        self.assertEqual(len(self.store.mutations), 1)
        self.assertEqual(dates(self.store.get("t")), ("2024-03-07", "2024-03-12"))
        self.assertEqual(board.pending_mutations, ())

    async def test_failed_mutation_is_logged(self):
        self.store.fail_with = RuntimeError("offline")
        with GanttBoard(make_project(), self.store) as board:
            board.pointer_down(520, ROW0_Y)
            board.pointer_up(620, ROW0_Y)
            with self.assertLogs("gantry.service.board", level="WARNING"):
                await asyncio.gather(*board.pending_mutations)
            self.assertEqual(
                dates(board.get_task("t")), ("2024-03-07", "2024-03-12")
            )


class TestAsyncStoreWithoutLoop(unittest.TestCase):
    def test_mutation_completes_when_no_loop_is_running(self):
        store = AsyncStore([make_task("t", "2024-03-05", "2024-03-10")])
        with GanttBoard(make_project(), store) as board:
            board.pointer_down(520, ROW0_Y)
            board.pointer_up(620, ROW0_Y)
            self.assertEqual(board.pending_mutations, ())
        self.assertEqual(dates(store.get("t")), ("2024-03-07", "2024-03-12"))


class TestPointerScope(unittest.TestCase):
    def test_release_is_idempotent(self):
        scope = PointerScope()
        received = []
        subscription = scope.subscribe(received.append)
        self.assertTrue(subscription.active)

        scope.dispatch({"kind": "move", "x": 1, "y": 2})
        subscription.release()
        subscription.release()
        scope.dispatch({"kind": "up", "x": 1, "y": 2})

        self.assertFalse(subscription.active)
        self.assertEqual(scope.listener_count, 0)
        self.assertEqual([event["kind"] for event in received], ["move"])

    def test_context_manager_releases(self):
        scope = PointerScope()
        with scope.subscribe(lambda event: None) as subscription:
            self.assertEqual(scope.listener_count, 1)
        self.assertFalse(subscription.active)
        self.assertEqual(scope.listener_count, 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
