import unittest

import numpy as np
import cachematrix
from cachematrix._internal.observability import SolveObservability


class TestSolveTraces(unittest.TestCase):
    def setUp(self):
        cachematrix.clear_solve_traces()

    def tearDown(self):
        cachematrix.clear_solve_traces()

    def test_miss_then_hit_records(self):
        m = cachematrix.make_cache_matrix(np.eye(3))

        cachematrix.cache_solve(m)
        miss = cachematrix.last_solve_trace()
        self.assertEqual(miss["op"], "cache_solve")
        self.assertEqual(miss["outcome"], "miss")
        self.assertEqual(miss["method"], "inv")
        self.assertEqual(miss["shape"], (3, 3))
        self.assertIsNone(miss["error"])

        cachematrix.cache_solve(m)
        hit = cachematrix.last_solve_trace()
        self.assertEqual(hit["outcome"], "hit")
        self.assertIsNone(hit["method"])
        self.assertNotEqual(hit["trace_tag"], miss["trace_tag"])
        self.assertEqual(cachematrix.last_solve_trace("miss")["trace_tag"], miss["trace_tag"])

        self.assertEqual(cachematrix.solve_stats(), {"hit": 1, "miss": 1, "error": 0})

    def test_error_record_carries_exception_text(self):
        m = cachematrix.make_cache_matrix([[1, 2], [2, 4]])
        with self.assertRaises(cachematrix.InversionError):
            cachematrix.cache_solve(m)

        trace = cachematrix.last_solve_trace("error")
        self.assertIsNotNone(trace)
        self.assertTrue(trace["error"].startswith("InversionError"))
        self.assertEqual(trace["shape"], (2, 2))
        self.assertEqual(cachematrix.solve_stats()["error"], 1)

    def test_precondition_failure_is_not_recorded(self):
        with self.assertRaises(cachematrix.MatrixNotSetError):
            cachematrix.cache_solve(cachematrix.make_cache_matrix())
        self.assertIsNone(cachematrix.last_solve_trace())
        self.assertEqual(cachematrix.solve_stats(), {"hit": 0, "miss": 0, "error": 0})

    def test_clear_resets_traces_and_counts(self):
        cachematrix.cache_solve(cachematrix.make_cache_matrix(np.eye(2)))
        cachematrix.clear_solve_traces()
        self.assertIsNone(cachematrix.last_solve_trace())
        self.assertEqual(cachematrix.solve_stats(), {"hit": 0, "miss": 0, "error": 0})

    def test_returned_trace_is_a_copy(self):
        cachematrix.cache_solve(cachematrix.make_cache_matrix(np.eye(2)))
        trace = cachematrix.last_solve_trace()
        trace["outcome"] = "tampered"
        self.assertEqual(cachematrix.last_solve_trace()["outcome"], "miss")


class TestSolveObservability(unittest.TestCase):
    def test_unknown_outcome_rejected(self):
        obs = SolveObservability()
        with self.assertRaises(ValueError):
            obs.record("maybe", np.eye(2))

    def test_shape_from_nested_sequence(self):
        obs = SolveObservability()
        payload = obs.record("miss", [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]], method="inv")
        self.assertEqual(payload["shape"], (2, 3))
        self.assertTrue(payload["trace_tag"].startswith("cache_solve:miss"))


if __name__ == "__main__":
    unittest.main()
