import os
import tempfile
import unittest
from unittest.mock import patch

from game import (
    ActionLog,
    Board,
    SearchStats,
    find_solution,
    format_solution,
    write_solution,
)
from tubes_core.solver import _pour_first_destination


def replay(board, moves):
    """Applies 1-based moves to `board`; fails the caller if any pour is illegal."""
    log = ActionLog()
    for src, dst in moves:
        if not board.pour(src - 1, dst - 1, log):
            raise AssertionError(f'illegal move {src}->{dst}')
    return log


class TestFindSolution(unittest.TestCase):
    def test_given_split_color_when_solving_then_single_move_one_to_three(self):
        # Tube 1 must be emptied into tube 3; tube 2 is a pointless target.
        board = Board.from_rows([[0, -1], [1, 1], [0, -1]], 1)
        log = find_solution(board)
        self.assertIsNotNone(log)
        self.assertEqual(log.moves(), [(1, 3)])
        self.assertTrue(board.is_solved())

    def test_given_solved_board_when_solving_then_empty_log(self):
        board = Board.from_rows([[0, 0], [1, 1], [-1, -1]], 1)
        before = board.snapshot()
        log = find_solution(board)
        self.assertIsNotNone(log)
        self.assertEqual(len(log), 0)
        self.assertEqual(board.snapshot(), before)

    def test_given_found_solution_when_restored_and_replayed_then_solves_board(self):
        board = Board.generate(4, 2, 4, 11)
        start = board.snapshot()
        log = find_solution(board)
        if log is None:
            self.assertEqual(board.snapshot(), start)
            return
        self.assertTrue(board.is_solved())
        board.revert_all(log.duplicate())
        self.assertEqual(board.snapshot(), start)
        replay(board, log.moves())
        self.assertTrue(board.is_solved())

    def test_given_many_seeds_when_solving_then_success_replays_and_failure_restores(self):
        found = 0
        for seed in range(25):
            board = Board.generate(3, 2, 3, seed)
            start = board.snapshot()
            log = find_solution(board)
            if log is None:
                self.assertEqual(board.snapshot(), start, msg=f'seed {seed}')
                continue
            found += 1
            self.assertTrue(board.is_solved())
            fresh = Board.generate(3, 2, 3, seed)
            replay(fresh, log.moves())
            self.assertTrue(fresh.is_solved(), msg=f'seed {seed}')
        self.assertGreater(found, 0)

    def test_given_search_when_run_then_no_pointless_or_pure_source_moves(self):
        board = Board.generate(4, 2, 3, 5)
        log = find_solution(board)
        if log is None:
            return
        board.revert_all(log.duplicate())
        for action in log:
            self.assertFalse(board.tubes[action.i_src].is_pure())
            self.assertFalse(board.pour_is_pointless(action.i_src, action.i_dst))
            self.assertTrue(board.pour(action.i_src, action.i_dst, ActionLog()))

    def test_given_stuck_board_when_solving_then_none_and_board_unchanged(self):
        # No tube accepts any chunk: every pour is illegal or pointless.
        board = Board.from_rows([[0, 1], [1, 0], [2, 2]], 0)
        before = board.snapshot()
        self.assertIsNone(find_solution(board))
        self.assertEqual(board.snapshot(), before)

    def test_given_several_admissible_destinations_when_pouring_source_then_only_first_used(self):
        board = Board.from_rows([[0, 1], [-1, -1], [1, -1], [0, -1]], 2)
        log = ActionLog()
        self.assertTrue(_pour_first_destination(board, log, 0))
        self.assertEqual(log.moves(), [(1, 2)])
        self.assertEqual(board.tubes[2].colors(), (1, -1))

    def test_given_only_pointless_targets_when_pouring_source_then_nothing_moves(self):
        board = Board.from_rows([[0, -1], [-1, -1], [1, 1]], 1)
        log = ActionLog()
        self.assertFalse(_pour_first_destination(board, log, 0))
        self.assertEqual(len(log), 0)

    def test_given_stats_when_solving_then_counters_filled(self):
        stats = SearchStats()
        board = Board.from_rows([[0, -1], [1, 1], [0, -1]], 1)
        find_solution(board, stats)
        self.assertEqual(stats.nodes, 1)
        self.assertEqual(stats.max_depth, 0)

    def test_given_debug_env_when_solving_then_summary_printed(self):
        board = Board.from_rows([[0, -1], [1, 1], [0, -1]], 1)
        with patch.dict(os.environ, {'TUBES_DEBUG': '1'}), patch('builtins.print') as mock_print:
            find_solution(board)
        self.assertTrue(mock_print.called)
        self.assertIn('[solver] solved', mock_print.call_args[0][0])


class TestWriteSolution(unittest.TestCase):
    def test_given_loaded_board_when_writing_solution_then_report_next_to_file(self):
        with tempfile.TemporaryDirectory() as td:
            src = os.path.join(td, 'level.txt')
            board = Board.from_rows([[0, -1], [1, 1], [0, -1]], 1, filename=src)
            path = write_solution(board)
            self.assertEqual(path, src + '.solution')
            with open(path, encoding='utf-8') as fh:
                text = fh.read()
            self.assertEqual(text, "1:  0, -1\n2:  1,  1\n3:  0, -1\n\n1:  1  3\n")
            # Board is restored to the puzzle's starting arrangement
            self.assertFalse(board.is_solved())

    def test_given_seeded_board_when_writing_to_directory_then_named_by_seed(self):
        with tempfile.TemporaryDirectory() as td:
            board = Board.generate(3, 2, 3, 0)
            start = board.snapshot()
            log = find_solution(Board.generate(3, 2, 3, 0))
            path = write_solution(board, td)
            self.assertEqual(board.snapshot(), start)
            if log is None:
                self.assertIsNone(path)
                self.assertEqual(os.listdir(td), [])
                return
            self.assertEqual(path, os.path.join(td, 'seed0.solution'))
            with open(path, encoding='utf-8') as fh:
                self.assertEqual(fh.read(), format_solution(board, log))

    def test_given_unsolvable_board_when_writing_then_nothing_written(self):
        with tempfile.TemporaryDirectory() as td:
            board = Board.from_rows([[0, 1], [1, 0], [2, 2]], 0, seed=9)
            self.assertIsNone(write_solution(board, td))
            self.assertEqual(os.listdir(td), [])


if __name__ == '__main__':
    unittest.main(verbosity=2)
