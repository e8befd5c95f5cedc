"""Tests for the ThreadPoolController class."""

import threading
import unittest

from harvester.controller import ThreadPoolController
from harvester.models import TaskOutcome, WeatherReading


def _ok(url):
    return TaskOutcome.ok(url, WeatherReading(area_name=url, temperature="1°"))


class TestThreadPoolController(unittest.TestCase):
    """Verify non-blocking dispatch and failure-transparent join."""

    def setUp(self):
        self.controller = ThreadPoolController(max_workers=4)
        self.controller.start()

    def tearDown(self):
        self.controller.stop(wait=True)

    def test_join_returns_outcomes_in_submission_order(self):
        """join() should return one outcome per submitted URL, in order."""
        for url in ("a", "b", "c"):
            self.controller.submit(_ok, url)
        outcomes = self.controller.join()
        self.assertEqual([o.url for o in outcomes], ["a", "b", "c"])
        self.assertEqual(self.controller.dispatched, 3)

    def test_raising_task_does_not_abort_join(self):
        """A task that raises should become a failed outcome, not break join()."""
        def explode(url):
            raise KeyError(url)

        self.controller.submit(_ok, "a")
        self.controller.submit(explode, "b")
        self.controller.submit(_ok, "c")
        outcomes = self.controller.join()
        self.assertEqual([o.success for o in outcomes], [True, False, True])
        self.assertEqual(outcomes[1].error_type, "KeyError")

    def test_submit_does_not_wait_for_running_tasks(self):
        """submit() should return while earlier tasks are still blocked."""
        release = threading.Event()

        def blocked(url):
            release.wait(5)
            return _ok(url)

        for url in ("a", "b", "c", "d", "e", "f"):
            self.controller.submit(blocked, url)
        self.assertEqual(self.controller.dispatched, 6)
        release.set()
        self.assertEqual(len(self.controller.join()), 6)

    def test_submit_after_stop_raises(self):
        """Submitting to a stopped controller should raise RuntimeError."""
        self.controller.stop(wait=True)
        with self.assertRaises(RuntimeError):
            self.controller.submit(_ok, "a")


if __name__ == "__main__":
    unittest.main()
