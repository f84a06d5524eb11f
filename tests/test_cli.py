import io
import os
import unittest
from contextlib import redirect_stdout
from unittest import mock

import game
from game import Board, GameSession, Mode, Outcome, PollingScheduler
from tileclear_core.cli import autoplay, describe, main, parse_tap, play


class FakeClock:
    def __init__(self):
        self.t = 0.0

    def __call__(self):
        return self.t


def scripted(lines):
    it = iter(lines)

    def read(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read


class TestCli(unittest.TestCase):
    def test_given_tap_text_when_parsing_then_comma_or_space_accepted(self):
        self.assertEqual(parse_tap("3,4"), (3, 4))
        self.assertEqual(parse_tap(" 3  4 "), (3, 4))
        with self.assertRaises(ValueError):
            parse_tap("3")
        with self.assertRaises(ValueError):
            parse_tap("a,b")

    def test_given_generated_game_when_autoplaying_then_plays_to_the_end(self):
        session = GameSession()
        session.reset(mode=Mode.FREE, shape="tall", seed=21)
        results = autoplay(session)
        self.assertTrue(results)
        self.assertTrue(all(r.outcome is Outcome.HIT for r in results))
        self.assertTrue(session.ended)
        self.assertIn("tiles cleared", describe(results[0]))

    def test_given_limit_when_autoplaying_then_stops_early(self):
        session = GameSession()
        session.reset(mode=Mode.FREE, shape="wide", seed=3)
        self.assertEqual(len(autoplay(session, limit=1)), 1)

    def test_given_scripted_input_when_playing_then_errors_reported_and_game_finishes(self):
        session = GameSession.from_board(Board.from_rows([".R.", "R.R", ".R."]), mode=Mode.FREE)
        out = io.StringIO()
        with redirect_stdout(out):
            play(session, PollingScheduler(now=FakeClock()), read=scripted(["hello", "5,5", "1,0", "1,1"]))
        text = out.getvalue()
        self.assertIn("Could not parse", text)
        self.assertIn("outside", text)
        self.assertIn("holds a tile", text)
        self.assertIn("4 tiles cleared", text)
        self.assertIn("Game over: board cleared. Score 4.", text)

    def test_given_quit_when_playing_then_returns_without_ending(self):
        session = GameSession.from_board(Board.from_rows(["R.R"]), mode=Mode.FREE)
        with redirect_stdout(io.StringIO()):
            play(session, PollingScheduler(now=FakeClock()), read=scripted(["q"]))
        self.assertFalse(session.ended)

    def test_given_autoplay_flag_when_running_main_then_summary_printed(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["--seed", "1", "--mode", "free", "--shape", "wide", "--autoplay"])
        self.assertEqual(code, 0)
        self.assertIn("Initial board:", out.getvalue())
        self.assertIn("taps, score", out.getvalue())

    def test_given_default_flags_when_running_main_then_first_playable_cell_printed(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["--seed", "2", "--shape", "portrait"])
        self.assertEqual(code, 0)
        self.assertIn("First playable cell: (", out.getvalue())

    def test_given_generation_failure_when_running_facade_main_then_exit_code_one(self):
        out = io.StringIO()
        with mock.patch.dict(os.environ, {"TILECLEAR_MAX_ATTEMPTS": "1"}), \
                mock.patch("tileclear_core.generate.has_any_playable_move", return_value=False), \
                redirect_stdout(out):
            code = game.main(["--seed", "3"])
        self.assertEqual(code, 1)
        self.assertIn("no playable board after 1 attempts", out.getvalue())


if __name__ == '__main__':
    unittest.main(verbosity=2)
