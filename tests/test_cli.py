import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from game import fresh_seed
from tubes_core import cli


class TestCli(unittest.TestCase):
    def _main(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            cli.main(argv)
        return out.getvalue(), err.getvalue()

    def test_given_defaults_when_parsing_then_standard_board_size(self):
        args = cli.build_parser().parse_args([])
        self.assertEqual((args.colors, args.extra, args.slots), (5, 2, 4))
        self.assertIsNone(args.seed)
        self.assertIsNone(args.file)
        self.assertFalse(args.solve)
        self.assertFalse(args.noplay)

    def test_given_invalid_counts_when_running_then_exit_one_with_message(self):
        for argv, text in [
            (['-c', '0', '-N'], 'Invalid number of colors: 0'),
            (['--extra', '0', '-N'], 'Invalid number of extra tubes: 0'),
            (['-l', '-2', '-N'], 'Invalid number of slots per tube: -2'),
            (['-s', '-1', '-N'], 'Invalid seed: -1'),
            (['-s', '4294967296', '-N'], 'Invalid seed: 4294967296'),
        ]:
            err = io.StringIO()
            with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
                cli.main(argv)
            self.assertEqual(ctx.exception.code, 1)
            self.assertIn(text, err.getvalue())

    def test_given_seed_without_noplay_when_running_then_interactive_loop_started(self):
        with patch.object(cli, 'play') as mock_play:
            self._main(['-c', '3', '-e', '1', '-l', '2', '-s', '5'])
        self.assertEqual(mock_play.call_count, 1)
        board = mock_play.call_args[0][0]
        self.assertEqual(board.seed, 5)
        self.assertEqual(board.num_tubes, 4)

    def test_given_no_seed_when_running_then_fresh_seed_used(self):
        with patch.object(cli, 'fresh_seed', return_value=4321), patch.object(cli, 'play') as mock_play:
            self._main(['-c', '2', '-e', '1', '-l', '2'])
        self.assertEqual(mock_play.call_args[0][0].seed, 4321)

    def test_given_solve_flag_when_running_then_solution_file_written(self):
        with tempfile.TemporaryDirectory() as td, patch.dict(os.environ, {'TUBES_SOLUTION_DIR': td}):
            with patch.object(cli, 'write_solution', wraps=cli.write_solution) as mock_write:
                out, _ = self._main(['-c', '2', '-e', '1', '-l', '2', '-s', '3', '-S', '-N'])
            self.assertEqual(mock_write.call_args[0][1], td)
            path = os.path.join(td, 'seed3.solution')
            if os.path.exists(path):
                self.assertIn(f'Solution written to {path}', out)
            else:
                self.assertIn('No solution found', out)

    def test_given_board_file_when_solving_then_report_next_to_file(self):
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, 'level.txt')
            with open(path, 'w', encoding='utf-8') as fh:
                fh.write("0 -1\n1 1\n0 -1\n")
            with patch.dict(os.environ, {'TUBES_SOLUTION_DIR': ''}):
                out, _ = self._main(['-f', path, '-S', '-N'])
            self.assertTrue(os.path.isfile(path + '.solution'))
            self.assertIn('Solution written to', out)

    def test_given_bad_board_file_when_running_then_exit_one_with_diagnostic(self):
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, 'bad.txt')
            with open(path, 'w', encoding='utf-8') as fh:
                fh.write("0 0\nred 1\n")
            err = io.StringIO()
            with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
                cli.main(['-f', path, '-N'])
            self.assertEqual(ctx.exception.code, 1)
            self.assertIn('at line 2', err.getvalue())

            binary = os.path.join(td, 'binary.txt')
            with open(binary, 'wb') as fh:
                fh.write(b'0 0\n1 1\n-1 -1\n\xff\xfe\n')
            err = io.StringIO()
            with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
                cli.main(['-f', binary, '-N'])
            self.assertEqual(ctx.exception.code, 1)
            self.assertIn('error:', err.getvalue())
            self.assertIn('at line 4', err.getvalue())

            missing = os.path.join(td, 'missing.txt')
            err = io.StringIO()
            with redirect_stderr(err), self.assertRaises(SystemExit):
                cli.main(['-f', missing, '-N'])
            self.assertIn('missing.txt', err.getvalue())

    def test_given_fresh_seeds_when_derived_then_unsigned_32_bit(self):
        for _ in range(5):
            seed = fresh_seed()
            self.assertGreaterEqual(seed, 0)
            self.assertLess(seed, 2 ** 32)


if __name__ == '__main__':
    unittest.main(verbosity=2)
