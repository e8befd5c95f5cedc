"""Tests for the PermitPool class."""

import threading
import time
import unittest

from harvester.permits import PermitPool


class TestPermitPool(unittest.TestCase):
    """Verify capacity is never exceeded and permits always come back."""

    def test_concurrent_holders_never_exceed_capacity(self):
        """Twelve threads should never hold more than three permits at once."""
        pool = PermitPool(3)
        lock = threading.Lock()
        state = {"active": 0, "max": 0}

        def work():
            with pool.permit():
                with lock:
                    state["active"] += 1
                    state["max"] = max(state["max"], state["active"])
                time.sleep(0.02)
                with lock:
                    state["active"] -= 1

        threads = [threading.Thread(target=work) for _ in range(12)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertLessEqual(state["max"], 3)
        self.assertLessEqual(pool.peak, 3)
        self.assertEqual(pool.available, 3)

    def test_permit_released_when_body_raises(self):
        """The permit should come back when the with-block raises."""
        pool = PermitPool(1)
        with self.assertRaises(RuntimeError):
            with pool.permit():
                self.assertEqual(pool.in_use, 1)
                raise RuntimeError("boom")
        self.assertEqual(pool.in_use, 0)
        self.assertEqual(pool.available, 1)

    def test_acquire_times_out_when_full(self):
        """acquire() with a timeout should return False on a full pool."""
        pool = PermitPool(1)
        self.assertTrue(pool.acquire())
        self.assertFalse(pool.acquire(timeout=0.05))
        pool.release()
        self.assertTrue(pool.acquire(timeout=0.05))
        pool.release()

    def test_release_without_acquire_raises(self):
        """Releasing an unheld permit should raise RuntimeError."""
        pool = PermitPool(2)
        with self.assertRaises(RuntimeError):
            pool.release()

    def test_blocked_acquirer_wakes_on_release(self):
        """A waiting thread should get the permit as soon as it is released."""
        pool = PermitPool(1)
        pool.acquire()
        acquired = threading.Event()

        def waiter():
            with pool.permit():
                acquired.set()

        t = threading.Thread(target=waiter)
        t.start()
        self.assertFalse(acquired.wait(0.05))
        pool.release()
        self.assertTrue(acquired.wait(1.0))
        t.join()
        self.assertEqual(pool.in_use, 0)

    def test_zero_capacity_rejected(self):
        """A capacity below one should raise ValueError."""
        with self.assertRaises(ValueError):
            PermitPool(0)


if __name__ == "__main__":
    unittest.main()
