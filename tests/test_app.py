import json
import unittest

from app import app as flask_app
from app import session_to_json
from game import Board, GameSession, Mode


def _post(client, path, payload):
    return client.post(path, data=json.dumps(payload), content_type="application/json")


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        self.client = flask_app.test_client()

    def test_given_health_when_requested_then_ok(self):
        r = self.client.get("/api/health")
        self.assertEqual(r.status_code, 200)
        self.assertTrue(r.get_json()["ok"])

    def test_given_new_game_when_posted_then_returns_session_and_snapshot(self):
        r = _post(self.client, "/api/new", {"mode": "free", "shape": "wide", "seed": 5})
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["ok"])
        snap = data["snapshot"]
        self.assertEqual(snap["board"]["rows"], 15)
        self.assertEqual(snap["board"]["cols"], 25)
        self.assertEqual(snap["remaining"], 15 * 25 - 1)
        self.assertIsNone(snap["timeLeft"])
        self.assertEqual(snap["phase"], "active")
        self.assertEqual(snap["mode"], "free")
        self.assertEqual(snap["shape"], "wide")
        self.assertIsNone(snap["board"]["grid"][7][12])
        self.assertIn("session", data)

    def test_given_new_game_defaults_when_posted_then_timed_tall(self):
        r = _post(self.client, "/api/new", {"seed": 1})
        snap = r.get_json()["snapshot"]
        self.assertEqual(snap["mode"], "timed")
        self.assertEqual(snap["shape"], "tall")
        self.assertEqual(snap["timeLeft"], 120)

    def test_given_hint_when_tapped_then_hit_scores_and_timer_starts(self):
        d = _post(self.client, "/api/new", {"mode": "timed", "shape": "tall", "seed": 9}).get_json()
        session = d["session"]

        r1 = _post(self.client, "/api/hint", {"session": session})
        self.assertEqual(r1.status_code, 200)
        cell = r1.get_json()["cell"]
        self.assertIsInstance(cell, list)

        r2 = _post(self.client, "/api/preview", {"session": session, "x": cell[0], "y": cell[1]})
        tiles = r2.get_json()["tiles"]
        self.assertIn(len(tiles), (2, 3, 4))

        r3 = _post(self.client, "/api/tap", {"session": session, "x": cell[0], "y": cell[1]})
        self.assertEqual(r3.status_code, 200)
        d3 = r3.get_json()
        result = d3["result"]
        self.assertEqual(result["outcome"], "hit")
        self.assertEqual(result["removedCount"], len(tiles))
        self.assertEqual(result["scoreAfter"], len(tiles))
        self.assertEqual(sorted((t["x"], t["y"]) for t in result["removed"]),
                         sorted((t["x"], t["y"]) for t in tiles))
        self.assertTrue(d3["session"]["timerStarted"])

    def test_given_first_hit_in_timed_game_when_ticking_then_time_counts_down(self):
        s = GameSession.from_board(Board.from_rows(["RRR", "R.R", "RRR"]), mode=Mode.TIMED)
        d = _post(self.client, "/api/tap", {"session": session_to_json(s), "x": 1, "y": 1}).get_json()
        self.assertEqual(d["result"]["timeLeft"], 120)
        self.assertFalse(d["result"]["ended"])
        self.assertTrue(d["session"]["timerStarted"])

        d2 = _post(self.client, "/api/tick", {"session": d["session"]}).get_json()
        self.assertTrue(d2["result"]["ticked"])
        self.assertEqual(d2["result"]["timeLeftAfter"], 119)
        self.assertEqual(d2["session"]["timeLeft"], 119)

    def test_given_timer_not_started_when_ticking_then_not_ticked(self):
        session = _post(self.client, "/api/new", {"mode": "timed", "seed": 2}).get_json()["session"]
        d = _post(self.client, "/api/tick", {"session": session}).get_json()
        self.assertFalse(d["result"]["ticked"])
        self.assertEqual(d["result"]["timeLeftAfter"], 120)

    def test_given_last_second_when_ticking_then_time_expired(self):
        s = GameSession.from_board(Board.from_rows(["R.R"]), mode=Mode.TIMED, time_left=1, timer_started=True)
        d = _post(self.client, "/api/tick", {"session": session_to_json(s)}).get_json()
        self.assertTrue(d["result"]["ended"])
        self.assertEqual(d["result"]["endReason"], "time expired")
        self.assertTrue(d["session"]["ended"])

        # Ended sessions ignore further taps.
        d2 = _post(self.client, "/api/tap", {"session": d["session"], "x": 1, "y": 0}).get_json()
        self.assertEqual(d2["result"]["outcome"], "ignored")

    def test_given_cross_board_when_tapping_center_then_board_cleared(self):
        s = GameSession.from_board(Board.from_rows([".R.", "R.R", ".R."]), mode=Mode.FREE)
        d = _post(self.client, "/api/tap", {"session": session_to_json(s), "x": 1, "y": 1}).get_json()
        self.assertEqual(d["result"]["removedCount"], 4)
        self.assertEqual(d["result"]["remainingTiles"], 0)
        self.assertEqual(d["result"]["endReason"], "board cleared")

        snap = _post(self.client, "/api/snapshot", {"session": d["session"]}).get_json()["snapshot"]
        self.assertTrue(snap["ended"])
        self.assertEqual(snap["score"], 4)
        self.assertEqual(snap["phase"], "ended")
        self.assertIsNone(_post(self.client, "/api/hint", {"session": d["session"]}).get_json()["cell"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
