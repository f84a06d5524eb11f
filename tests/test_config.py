import unittest

from game import GameConfig, Mode, Shape, env_flag


class TestConfig(unittest.TestCase):
    def test_given_empty_env_when_loading_then_defaults(self):
        config = GameConfig.from_env({})
        self.assertEqual(config, GameConfig())
        self.assertEqual(config.start_time, 120)
        self.assertEqual(config.penalty_seconds, 10)
        self.assertIs(config.default_shape, Shape.TALL)
        self.assertIs(config.default_mode, Mode.TIMED)

    def test_given_overrides_when_loading_then_applied(self):
        config = GameConfig.from_env({
            "TILECLEAR_START_TIME": "60",
            "TILECLEAR_PENALTY": "0",
            "TILECLEAR_MAX_ATTEMPTS": "5",
            "TILECLEAR_SHAPE": "landscape",
            "TILECLEAR_MODE": "FREE",
        })
        self.assertEqual(config.start_time, 60)
        self.assertEqual(config.penalty_seconds, 0)
        self.assertEqual(config.max_generation_attempts, 5)
        self.assertIs(config.default_shape, Shape.WIDE)
        self.assertIs(config.default_mode, Mode.FREE)

    def test_given_invalid_values_when_loading_then_value_error(self):
        for env in (
            {"TILECLEAR_START_TIME": "soon"},
            {"TILECLEAR_START_TIME": "0"},
            {"TILECLEAR_PENALTY": "-1"},
            {"TILECLEAR_SHAPE": "round"},
            {"TILECLEAR_MODE": "blitz"},
        ):
            with self.assertRaises(ValueError):
                GameConfig.from_env(env)

    def test_given_flag_values_when_parsing_then_truthy_words_accepted(self):
        for raw in ("1", "true", "YES", " on "):
            self.assertTrue(env_flag("X", environ={"X": raw}))
        for raw in ("0", "false", "", "nope"):
            self.assertFalse(env_flag("X", environ={"X": raw}))
        self.assertFalse(env_flag("MISSING", environ={}))
        self.assertTrue(env_flag("MISSING", default="on", environ={}))


if __name__ == '__main__':
    unittest.main(verbosity=2)
