"""Tests for the command-line entry point."""

import unittest
from unittest import mock

import main
from harvester.config import PROVINCES
from harvester.errors import SelectorParseError


class TestRunHarvest(unittest.TestCase):
    """Verify the command-line runner builds and drives a Harvester."""

    def _run(self, **overrides):
        kwargs = dict(
            provinces=PROVINCES,
            max_concurrent=5,
            max_workers=16,
            delay=2.0,
            timeout=20.0,
            discover=False,
            impersonate=None,
        )
        kwargs.update(overrides)
        return main.run_harvest(**kwargs)

    def test_selector_error_aborts_with_exit_code_2(self):
        """A selector error at startup should return exit code 2."""
        with mock.patch("main.Harvester", side_effect=SelectorParseError("a[", "bad")):
            self.assertEqual(self._run(), 2)

    def test_settings_are_passed_through(self):
        """Command-line values should reach HarvestSettings unchanged."""
        with mock.patch("main.Harvester") as harvester_cls:
            self.assertEqual(self._run(provinces=("hebei",), max_concurrent=3, impersonate="chrome120"), 0)
        settings = harvester_cls.call_args.args[0]
        self.assertEqual(settings.provinces, ("hebei",))
        self.assertEqual(settings.max_concurrent, 3)
        self.assertEqual(settings.impersonate, "chrome120")
        harvester_cls.return_value.harvest.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
