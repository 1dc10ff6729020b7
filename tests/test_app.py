import json
import unittest

from app import app as flask_app  # noqa: E402
import app as app_mod             # noqa: E402
from game import Puzzle           # noqa: E402


def _stub_generate_puzzle(seed=None):
    return Puzzle(start="6+4=4", solution="0+4=4")


def _stub_get_hint(equation_text):
    return f"hint for {equation_text}"


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        # Monkeypatch app-level imported collaborators so no network is needed
        self._orig_generate = app_mod.generate_puzzle
        self._orig_hint = app_mod.get_hint
        app_mod.generate_puzzle = _stub_generate_puzzle
        app_mod.get_hint = _stub_get_hint
        self.client = flask_app.test_client()

    def tearDown(self):
        app_mod.generate_puzzle = self._orig_generate
        app_mod.get_hint = self._orig_hint

    def _post(self, path, payload):
        return self.client.post(path, data=json.dumps(payload), content_type="application/json")

    def _new(self, **payload):
        r = self._post("/api/new", payload)
        self.assertEqual(r.status_code, 200)
        return r.get_json()

    def _touch(self, state, cell_id, segment):
        r = self._post("/api/touch", {"state": state, "cellId": cell_id, "segment": segment})
        self.assertEqual(r.status_code, 200)
        return r.get_json()

    def test_given_index_and_puzzles_when_requested_then_json(self):
        r = self.client.get("/")
        self.assertEqual(r.status_code, 200)
        self.assertIn("/api/touch", r.get_json()["endpoints"])
        r2 = self.client.get("/api/puzzles")
        d2 = r2.get_json()
        self.assertTrue(d2["ok"])
        self.assertEqual(d2["default"]["start"], "9+9=15")
        self.assertTrue(d2["fallbacks"])

    def test_given_new_game_when_posted_then_default_state_returned(self):
        d = self._new()
        self.assertTrue(d["ok"])
        state = d["state"]
        self.assertEqual(d["outcome"], "valid_false")
        self.assertEqual("".join(c["symbol"] for c in state["cells"]), "9+9=15")
        self.assertIsNone(state["held"])
        self.assertFalse(state["won"])
        self.assertEqual(state["generation"], 0)
        self.assertEqual(state["sticks"], 23)
        self.assertEqual(state["messageKind"], "neutral")

    def test_given_custom_equation_when_new_then_parsed(self):
        d = self._new(equation="3+3=8", solution="3+5=8")
        self.assertEqual(d["state"]["text"], "3+3=8")
        self.assertEqual(d["state"]["solution"], "3+5=8")

    def test_given_pickup_and_place_when_touching_then_state_round_trips_to_win(self):
        state = self._new()["state"]
        d1 = self._touch(state, 2, 1)
        self.assertEqual(d1["action"], "picked_up")
        self.assertTrue(d1["accepted"])
        self.assertEqual(d1["state"]["held"], {"cellId": 2, "segment": 1})
        self.assertEqual(d1["state"]["sticks"], 22)

        d2 = self._touch(d1["state"], 2, 4)
        self.assertEqual(d2["action"], "placed")
        self.assertEqual(d2["outcome"], "valid_true")
        self.assertEqual(d2["move"], {"from": [2, 1], "to": [2, 4]})
        self.assertTrue(d2["state"]["won"])
        self.assertEqual(d2["state"]["messageKind"], "success")
        self.assertEqual(d2["state"]["sticks"], 23)

        d3 = self._touch(d2["state"], 0, 0)
        self.assertEqual(d3["action"], "ignored")
        self.assertFalse(d3["accepted"])

    def test_given_state_when_evaluating_then_outcome_and_text(self):
        state = self._new()["state"]
        r = self._post("/api/evaluate", {"state": state})
        d = r.get_json()
        self.assertTrue(d["ok"])
        self.assertEqual(d["outcome"], "valid_false")
        self.assertEqual(d["text"], "9+9=15")

    def test_given_generate_when_posted_then_new_puzzle_and_generation_bumped(self):
        state = self._new()["state"]
        r = self._post("/api/generate", {"state": state})
        self.assertEqual(r.status_code, 200)
        d = r.get_json()
        self.assertEqual(d["state"]["text"], "6+4=4")
        self.assertEqual(d["state"]["solution"], "0+4=4")
        self.assertEqual(d["state"]["generation"], 1)

    def test_given_hint_when_posted_then_hint_for_current_sticks(self):
        state = self._new()["state"]
        picked = self._touch(state, 2, 6)["state"]  # second 9 without its middle is no digit
        r = self._post("/api/hint", {"state": picked})
        d = r.get_json()
        self.assertTrue(d["ok"])
        self.assertEqual(d["hint"], "hint for 9+?=15")
        self.assertEqual(d["generation"], 0)
        self.assertEqual(d["state"]["hint"], "hint for 9+?=15")

    def test_given_reset_when_posted_then_default_puzzle_with_next_generation(self):
        state = self._new(equation="3+3=8")["state"]
        state["generation"] = 4
        r = self._post("/api/reset", {"state": state})
        d = r.get_json()
        self.assertEqual(d["state"]["text"], "9+9=15")
        self.assertEqual(d["state"]["generation"], 5)


if __name__ == "__main__":
    unittest.main(verbosity=2)
