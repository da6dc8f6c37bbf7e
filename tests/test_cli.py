import io
import os
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from game import COL, ROW, InvalidMoveError, Move, PuzzleEngine, Settings
from gemshift_core import cli
from gemshift_core.config import parse_flag


class TestParseMove(unittest.TestCase):
    def test_given_move_texts_when_parsed_then_moves(self):
        self.assertEqual(cli.parse_move('row:1:-2'), Move(ROW, 1, -2))
        self.assertEqual(cli.parse_move('c 3 1'), Move(COL, 3, 1))
        self.assertEqual(cli.parse_move('  column  0  4 '), Move(COL, 0, 4))
        self.assertEqual(cli.parse_moves('row:0:1, col:2:-1,'), [Move(ROW, 0, 1), Move(COL, 2, -1)])
        self.assertEqual(cli.parse_moves(''), [])

    def test_given_bad_texts_when_parsed_then_invalid_move_error(self):
        for text in ('row:1', 'diag 1 1', 'row x 1', 'row 1 1 1'):
            with self.assertRaises(InvalidMoveError, msg=text):
                cli.parse_move(text)


class TestCliMain(unittest.TestCase):
    def test_given_seed_and_moves_when_run_then_board_printed(self):
        out = io.StringIO()
        with redirect_stdout(out):
            cli.main(['--width', '5', '--height', '5', '--seed', '1', '--moves', 'row:0:1,col:1:-1'])
        text = out.getvalue()
        self.assertIn('Initial board:', text)
        self.assertTrue('No matches.' in text or 'Phase 1' in text)

    def test_given_preview_flag_when_run_then_match_counts_printed(self):
        out = io.StringIO()
        with redirect_stdout(out):
            cli.main(['--width', '4', '--height', '4', '--seed', '2', '--preview', '--moves', 'row:0:1'])
        self.assertIn('row 0 by 1:', out.getvalue())

    def test_given_out_of_range_move_when_run_then_exits_with_usage_error(self):
        with redirect_stderr(io.StringIO()), redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit):
                cli.main(['--width', '3', '--height', '3', '--moves', 'row:7:1'])
            with self.assertRaises(SystemExit):
                cli.main(['--width', '0'])

    def test_given_play_mode_when_commands_entered_then_loop_until_quit(self):
        out = io.StringIO()
        with patch('builtins.input', side_effect=['row 0 1', 'bogus', 'q']), redirect_stdout(out):
            cli.main(['--width', '4', '--height', '4', '--seed', '3', '--play'])
        self.assertIn('Illegal move', out.getvalue())

    def test_given_engine_when_run_turn_then_phase_count_returned(self):
        engine = PuzzleEngine.from_columns([list('AAB'), list('ABB'), list('BAA')], categories='ABC', seed=0)
        engine.enqueue_next_many('CBC')
        with redirect_stdout(io.StringIO()):
            self.assertEqual(cli.run_turn(engine, [Move(ROW, 2, 1)]), 1)


class TestSettings(unittest.TestCase):
    def test_given_env_when_loading_settings_then_values_parsed(self):
        env = {
            'GEMSHIFT_WIDTH': '9',
            'GEMSHIFT_HEIGHT': '10',
            'GEMSHIFT_SEED': '42',
            'GEMSHIFT_DEDUPE_JUNCTIONS': 'off',
            'GEMSHIFT_DEBUG': 'yes',
        }
        with patch.dict(os.environ, env):
            s = Settings.from_env()
        self.assertEqual((s.width, s.height, s.seed), (9, 10, 42))
        self.assertFalse(s.dedupe_junctions)
        self.assertTrue(s.debug)

    def test_given_no_env_when_loading_settings_then_defaults(self):
        keys = ('GEMSHIFT_WIDTH', 'GEMSHIFT_HEIGHT', 'GEMSHIFT_SEED', 'GEMSHIFT_DEDUPE_JUNCTIONS', 'GEMSHIFT_DEBUG')
        clean = {k: v for k, v in os.environ.items() if k not in keys}
        with patch.dict(os.environ, clean, clear=True):
            self.assertEqual(Settings.from_env(), Settings())

    def test_given_non_integer_env_when_loading_then_value_error(self):
        with patch.dict(os.environ, {'GEMSHIFT_WIDTH': 'wide'}):
            with self.assertRaises(ValueError):
                Settings.from_env()

    def test_given_flag_payloads_when_parsed_then_strict_booleans(self):
        for raw, expected in ((True, True), (False, False), ('false', False), (' OFF ', False), ('on', True), ('1', True)):
            self.assertIs(parse_flag(raw, not expected), expected, raw)
        self.assertTrue(parse_flag(None, True))
        self.assertFalse(parse_flag('', False))
        for raw in ('maybe', 0, 1, [True]):
            with self.assertRaises(ValueError, msg=repr(raw)):
                parse_flag(raw, True)


if __name__ == '__main__':
    unittest.main(verbosity=2)
