"""
Test suite for the knight_tour package.

Tests verify:
1. Board state and its invariants
2. Move generation (pure Python and JIT)
3. Tour driver behaviour
4. Configuration management
5. Interactive input, rendering and saving
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib
matplotlib.use("Agg")

import io
import json
import tempfile
from contextlib import redirect_stdout

import numpy as np
import pytest


# =============================================================================
# Board Tests
# =============================================================================

def test_board_initialization():
    """Test TourBoard starts with every cell unvisited."""
    from knight_tour.board import TourBoard, CellState

    for rows, cols in [(1, 1), (3, 4), (5, 5), (10, 3)]:
        board = TourBoard(rows, cols)

        assert board.rows == rows and board.cols == cols
        assert board.get_grid().shape == (rows, cols)
        assert board.count(CellState.UNVISITED) == rows * cols
        assert board.current is None

    with pytest.raises(ValueError):
        TourBoard(0, 3)

    print("TourBoard initialization test passed")


def test_board_place_and_advance():
    """Test knight placement and moves update cell states."""
    from knight_tour.board import TourBoard, CellState

    board = TourBoard(3, 4)
    board.place_knight((0, 0))
    assert board.current == (0, 0)
    assert board.state_at((0, 0)) == CellState.CURRENT

    board.advance((1, 2))
    assert board.current == (1, 2)
    assert board.state_at((0, 0)) == CellState.VISITED
    assert board.state_at((1, 2)) == CellState.CURRENT
    assert board.count(CellState.CURRENT) == 1
    assert board.count(CellState.VISITED) == 1

    # Misuse is rejected
    with pytest.raises(ValueError):
        board.place_knight((2, 2))
    with pytest.raises(ValueError):
        board.advance((0, 0))
    with pytest.raises(ValueError):
        board.advance((3, 0))
    with pytest.raises(ValueError):
        TourBoard(3, 3).advance((0, 0))
    with pytest.raises(ValueError):
        TourBoard(3, 3).place_knight((-1, 0))

    print("TourBoard place/advance test passed")


def test_board_grid_is_read_only():
    """Test get_grid cannot be used to bypass advance()."""
    from knight_tour.board import TourBoard, CellState

    board = TourBoard(3, 3)
    grid = board.get_grid()
    with pytest.raises(ValueError):
        grid[0, 0] = CellState.VISITED

    print("Read-only grid test passed")


# =============================================================================
# Move Generation Tests
# =============================================================================

def test_candidates_order_and_bounds():
    """Test candidates follow the offset order and stay on the board."""
    from knight_tour.board import TourBoard
    from knight_tour.moves import candidates, KNIGHT_OFFSETS

    board = TourBoard(8, 8)
    grid = board.get_grid()

    # Centre square: all eight, in offset order
    moves = candidates((4, 4), (8, 8), grid)
    assert moves == [(4 + dr, 4 + dc) for dr, dc in KNIGHT_OFFSETS]

    # Corner square: only two
    assert candidates((0, 0), (8, 8), grid) == [(2, 1), (1, 2)]

    # Off-board source still yields on-board targets
    assert candidates((-1, -1), (8, 8), grid) == [(1, 0), (0, 1)]

    # No moves at all on a 3x3 centre
    assert candidates((1, 1), (3, 3), TourBoard(3, 3).get_grid()) == []

    print("Candidate order and bounds test passed")


def test_candidates_exclude_visited():
    """Test visited squares are never offered; the current square may be."""
    from knight_tour.board import TourBoard
    from knight_tour.moves import candidates

    board = TourBoard(3, 4)
    board.place_knight((0, 0))
    board.advance((1, 2))

    grid = board.get_grid()
    assert candidates((1, 2), (3, 4), grid) == [(2, 0)]
    # (1, 2) holds the knight and is still a legal target from (2, 0)
    assert candidates((2, 0), (3, 4), grid) == [(1, 2), (0, 1)]

    print("Visited exclusion test passed")


def test_is_knight_move():
    """Test knight move recognition."""
    from knight_tour.moves import is_knight_move

    assert is_knight_move((0, 0), (2, 1))
    assert is_knight_move((4, 4), (3, 2))
    assert not is_knight_move((0, 0), (1, 1))
    assert not is_knight_move((0, 0), (0, 0))
    assert not is_knight_move((0, 0), (2, 2))

    print("Knight move test passed")


def test_accessibility_map_matches_candidates():
    """Test the JIT accessibility map agrees with count_onward_moves."""
    from knight_tour.board import TourBoard
    from knight_tour.moves import accessibility_map, count_onward_moves

    for rows, cols in [(1, 1), (3, 3), (3, 4), (5, 7), (8, 8)]:
        board = TourBoard(rows, cols)
        board.place_knight((0, 0))
        # Walk a couple of moves to get visited squares in play
        for target in [(2, 1), (0, 2)] if rows >= 3 and cols >= 3 else []:
            board.advance(target)

        counts = np.asarray(accessibility_map(board.open_mask()))
        grid = board.get_grid()
        for r in range(rows):
            for c in range(cols):
                assert counts[r, c] == count_onward_moves((r, c), (rows, cols), grid), \
                    f"Mismatch at {(r, c)} on {rows}x{cols}"

    print("Accessibility map test passed")


# =============================================================================
# Solver Tests
# =============================================================================

def test_solver_3x4_path():
    """Test the exact tour on a 3x4 board from the corner."""
    from knight_tour.solver import solve, TourState

    solver = solve(3, 4, (0, 0))

    assert solver.moves == 11
    assert solver.is_complete()
    assert solver.state is TourState.HALTED
    assert solver.path == [
        (0, 0), (1, 2), (2, 0), (0, 1), (1, 3), (2, 1),
        (0, 2), (2, 3), (1, 1), (0, 3), (2, 2), (1, 0),
    ]

    print("3x4 solver test passed")


def test_solver_tie_break_first_candidate():
    """Test equal scores resolve to the earliest candidate."""
    from knight_tour.board import TourBoard
    from knight_tour.solver import WarnsdorffSolver

    # From (0, 0) on 5x5 both (2, 1) and (1, 2) score 6
    board = TourBoard(5, 5)
    board.place_knight((0, 0))
    solver = WarnsdorffSolver(board)
    assert solver.choose_move((0, 0)) == (2, 1)

    print("Tie-break test passed")


def test_solver_final_square_stays_current():
    """Test the last square reached keeps the knight after halting."""
    from knight_tour.board import CellState
    from knight_tour.solver import solve

    solver = solve(3, 4, (0, 0))
    board = solver.get_board()

    assert board.current == (1, 0)
    assert board.state_at((1, 0)) == CellState.CURRENT
    assert board.count(CellState.CURRENT) == 1
    assert board.count(CellState.VISITED) == 11

    print("Final square test passed")


def test_solver_one_by_one():
    """Test a 1x1 board halts immediately and counts as complete."""
    from knight_tour.solver import solve

    solver = solve(1, 1, (0, 0))
    assert solver.moves == 0
    assert solver.is_complete()
    assert solver.path == [(0, 0)]

    print("1x1 solver test passed")


def test_solver_on_step_callback():
    """Test on_step fires once per move with the live board."""
    from knight_tour.board import TourBoard, CellState
    from knight_tour.solver import WarnsdorffSolver

    seen = []

    def record(board):
        assert board.count(CellState.CURRENT) == 1
        seen.append(board.current)

    solver = WarnsdorffSolver(TourBoard(5, 5))
    moves = solver.run((0, 0), on_step=record)

    assert moves == len(seen) == 24
    assert seen == solver.path[1:]

    print("on_step callback test passed")


def test_solver_step_after_halt():
    """Test step() keeps returning None once halted."""
    from knight_tour.solver import solve

    solver = solve(3, 3, (1, 1))
    assert solver.step() is None
    assert solver.step() is None
    assert solver.moves == 0

    print("Step after halt test passed")


def test_solver_requires_board_and_start():
    """Test solver construction and start handling."""
    from knight_tour.board import TourBoard
    from knight_tour.solver import WarnsdorffSolver

    with pytest.raises(TypeError):
        WarnsdorffSolver(np.zeros((3, 3)))

    with pytest.raises(ValueError):
        WarnsdorffSolver(TourBoard(3, 3)).run()

    # A pre-placed knight is picked up without a start square
    board = TourBoard(3, 4)
    board.place_knight((0, 0))
    assert WarnsdorffSolver(board).run() == 11

    print("Solver construction test passed")


def test_solver_picks_up_knight_placed_after_construction():
    """Test a knight placed after the solver is built still starts the tour."""
    from knight_tour.board import TourBoard
    from knight_tour.solver import WarnsdorffSolver, TourState

    board = TourBoard(3, 4)
    solver = WarnsdorffSolver(board)
    assert solver.state is TourState.HALTED
    board.place_knight((0, 0))

    assert solver.run((0, 0)) == 11
    assert solver.path[0] == (0, 0)
    assert len(solver.path) == 12
    assert solver.is_complete()

    # Same situation with a verbose run and no explicit start
    board = TourBoard(3, 4)
    solver = WarnsdorffSolver(board)
    board.place_knight((0, 0))
    out = io.StringIO()
    with redirect_stdout(out):
        assert solver.run(verbose=True) == 11
    assert "Start: (0, 0)" in out.getvalue()

    print("Late placement test passed")


def test_solver_verbose_output():
    """Test verbose runs print a summary banner."""
    from knight_tour.solver import solve

    out = io.StringIO()
    with redirect_stdout(out):
        solve(3, 4, (0, 0), verbose=True)

    text = out.getvalue()
    assert "Warnsdorff Tour (3x4)" in text
    assert "Halted after 11 moves" in text

    print("Verbose output test passed")


def test_sweep_start_squares():
    """Test sweeps return per-start move counts."""
    from knight_tour.solver import sweep_start_squares

    counts = sweep_start_squares(3, 3)
    assert counts.shape == (3, 3)
    assert counts[1, 1] == 0
    assert np.all(counts <= 8)

    assert sweep_start_squares(1, 1).tolist() == [[0]]
    assert sweep_start_squares(3, 4)[0, 0] == 11

    print("Sweep test passed")


# =============================================================================
# Utils Tests
# =============================================================================

def test_validate_tour():
    """Test tour validation catches each kind of error."""
    from knight_tour.utils import validate_tour

    ok = validate_tour([(0, 0), (1, 2), (2, 0)], 3, 4)
    assert ok['valid'] and not ok['complete'] and ok['moves'] == 2

    assert not validate_tour([(0, 0), (1, 1)], 3, 4)['valid']
    assert not validate_tour([(0, 0), (2, 1), (0, 0)], 3, 4)['valid']
    assert not validate_tour([(0, 0), (-2, 1)], 3, 4)['valid']
    assert validate_tour([(0, 0)], 1, 1)['complete']

    print("Tour validation test passed")


def test_check_tour_exists():
    """Test open tour existence table."""
    from knight_tour.utils import check_tour_exists

    assert check_tour_exists(1, 1)['exists']
    assert not check_tour_exists(2, 8)['exists']
    assert not check_tour_exists(3, 3)['exists']
    assert not check_tour_exists(5, 3)['exists']
    assert not check_tour_exists(3, 6)['exists']
    assert not check_tour_exists(4, 4)['exists']
    assert check_tour_exists(3, 4)['exists']
    assert check_tour_exists(4, 3)['exists']
    assert check_tour_exists(5, 5)['exists']
    assert check_tour_exists(3, 7)['exists']
    assert check_tour_exists(8, 8)['target_moves'] == 63

    print("Tour existence test passed")


# =============================================================================
# Config Tests
# =============================================================================

def test_config_creation():
    """Test Config defaults and validation."""
    from knight_tour.config import Config

    config = Config()
    assert config.rows is None and config.start is None
    assert config.min_size == 3 and config.max_size == 10
    assert config.glyphs == {'current': '[K]', 'visited': '[/]', 'unvisited': '[ ]'}
    assert config.validate() == []

    bad = Config(rows=11, cols=2, start_row=0, mode='loop', glyph_current='K')
    errors = bad.validate()
    assert len(errors) == 5

    print("Config creation test passed")


def test_config_from_dict():
    """Test Config creation from dictionary."""
    from knight_tour.config import Config

    data = {
        'size': 6,
        'start_row': 2,
        'start_col': 3,
        'glyphs': {'current': ' N ', 'visited': ' x ', 'unvisited': ' . '},
        'mode': 'sweep',
        'sizes': [4, [3, 7]],
    }

    config = Config.from_dict(data)
    assert config.rows == 6 and config.cols == 6
    assert config.start == (1, 2)
    assert config.glyph_current == ' N '
    assert config.sizes == [[4, 4], [3, 7]]
    assert config.validate() == []

    again = Config.from_dict(config.to_dict())
    assert again == config

    print("Config from_dict test passed")


def test_config_from_yaml():
    """Test Config loads from a YAML file."""
    from knight_tour.config import Config

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, 'config.yaml')
        with open(path, 'w') as f:
            f.write("rows: 3\ncols: 4\nstart_row: 1\nstart_col: 1\nshow_steps: false\n")

        config = Config.from_yaml(path)

    assert (config.rows, config.cols) == (3, 4)
    assert config.start == (0, 0)
    assert config.show_steps is False

    print("Config from_yaml test passed")


def test_repository_config_file():
    """Test the shipped config.yaml is valid."""
    from knight_tour.config import Config

    root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    config = Config.from_yaml(os.path.join(root, 'config.yaml'))
    assert config.validate() == []
    assert config.rows is None

    print("Repository config test passed")


# =============================================================================
# Prompt Tests
# =============================================================================

def _feeder(lines):
    it = iter(lines)
    prompts = []

    def fake_input(text):
        prompts.append(text)
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return fake_input, prompts


def test_input_integer_reprompts():
    """Test malformed and out-of-range input is asked again."""
    from knight_tour.prompt import input_integer

    fake_input, prompts = _feeder(["abc", "", "11", "2", "3.5", " 7 "])
    assert input_integer(3, 10, "Rows:", fake_input) == 7
    assert prompts == ["Rows:"] * 6

    fake_input, _ = _feeder(["3"])
    assert input_integer(3, 10, "Rows:", fake_input) == 3
    fake_input, _ = _feeder(["10"])
    assert input_integer(3, 10, "Rows:", fake_input) == 10

    print("input_integer test passed")


def test_input_integer_eof():
    """Test end of input is not swallowed."""
    from knight_tour.prompt import input_integer

    fake_input, _ = _feeder(["x"])
    with pytest.raises(EOFError):
        input_integer(3, 10, "Rows:", fake_input)

    print("EOF test passed")


def test_prompt_start_square_converts_to_zero_index():
    """Test the 1-indexed start square comes back 0-indexed."""
    from knight_tour.prompt import prompt_board_size, prompt_start_square

    fake_input, prompts = _feeder(["3", "4"])
    assert prompt_board_size(3, 10, fake_input) == (3, 4)
    assert prompts == ["Enter number of rows (between 3-10):",
                       "Enter number of columns (between 3-10):"]

    fake_input, _ = _feeder(["0", "4", "3", "5", "4"])
    assert prompt_start_square(3, 4, fake_input) == (2, 3)

    print("Start square prompt test passed")


# =============================================================================
# Rendering and Saving Tests
# =============================================================================

def test_render_board():
    """Test text rendering uses one glyph per cell."""
    from knight_tour.board import TourBoard
    from knight_tour.visualize import render_board, print_board

    board = TourBoard(3, 4)
    board.place_knight((0, 0))
    assert render_board(board) == "[K][ ][ ][ ]\n[ ][ ][ ][ ]\n[ ][ ][ ][ ]"

    board.advance((1, 2))
    assert render_board(board) == "[/][ ][ ][ ]\n[ ][ ][K][ ]\n[ ][ ][ ][ ]"

    glyphs = {'current': 'N', 'visited': 'x', 'unvisited': '.'}
    assert render_board(board, glyphs) == "x...\n..N.\n...."

    out = io.StringIO()
    with redirect_stdout(out):
        print_board(board)
    assert out.getvalue() == render_board(board) + "\n\n"

    print("Render board test passed")


def test_outcome_message():
    """Test the final report strings."""
    from knight_tour.visualize import outcome_message

    assert outcome_message(11, 3, 4) == "Tour Completed!"
    assert outcome_message(10, 3, 4) == "No More Moves!"
    assert outcome_message(0, 1, 1) == "Tour Completed!"
    assert outcome_message(0, 3, 3) == "No More Moves!"

    print("Outcome message test passed")


def test_save_run_results():
    """Test run results are written to a run folder."""
    from knight_tour.solver import solve
    from knight_tour.visualize import save_run_results

    solver = solve(3, 4, (0, 0))

    with tempfile.TemporaryDirectory() as tmp:
        saved = save_run_results(tmp, solver, {'start': (1, 1)}, save_plots=True)

        assert os.path.isdir(saved['run_folder'])
        assert '3x4' in saved['run_folder']
        assert os.path.exists(saved['tour_png'])
        assert os.path.exists(saved['accessibility_png'])

        with open(saved['tour_txt']) as f:
            lines = f.read().splitlines()
        assert lines[0] == "1,1"
        assert lines[1] == "2,3"
        assert len(lines) == 12

        with open(saved['metadata']) as f:
            metadata = json.load(f)
        assert metadata['moves'] == 11
        assert metadata['completed'] is True
        assert metadata['outcome'] == "Tour Completed!"
        assert metadata['start'] == [1, 1]

    print("Save run results test passed")


def test_save_sweep_results():
    """Test sweep summaries and arrays are written."""
    from knight_tour.solver import sweep_start_squares
    from knight_tour.visualize import save_sweep_results

    results = {(3, 4): sweep_start_squares(3, 4)}

    with tempfile.TemporaryDirectory() as tmp:
        saved = save_sweep_results(tmp, results, {'sizes': [[3, 4]]}, save_plots=True)

        assert os.path.exists(saved['3x4_heatmap'])
        assert np.array_equal(np.load(saved['3x4_npy']), results[(3, 4)])

        with open(saved['summary']) as f:
            summary = json.load(f)
        board = summary['boards']['3x4']
        assert board['total_starts'] == 12
        assert board['target_moves'] == 11
        assert board['completed_starts'] >= 1

    print("Save sweep results test passed")


# =============================================================================
# CLI Runner Tests
# =============================================================================

def test_runner_prints_every_step():
    """Test the runner prints the board before the first move and after each move."""
    from knight_tour.config import Config
    from main import TourRunner

    runner = TourRunner(Config())
    out = io.StringIO()
    with redirect_stdout(out):
        solver = runner.run_single(3, 4, (0, 0))

    boards = out.getvalue().strip().split("\n\n")
    assert len(boards) == solver.moves + 1 == 12
    assert boards[0].splitlines()[0] == "[K][ ][ ][ ]"

    print("Runner step printing test passed")


def test_runner_resolve_board_prompts():
    """Test missing size and start are asked for interactively."""
    from knight_tour.config import Config
    from main import TourRunner

    fake_input, _ = _feeder(["2", "5", "6", "1", "9", "6"])
    runner = TourRunner(Config(), input_fn=fake_input)
    assert runner.resolve_board() == (5, 6, (0, 5))

    # Fully configured: no prompting
    runner = TourRunner(Config(rows=4, cols=4, start_row=4, start_col=1),
                        input_fn=_feeder([])[0])
    assert runner.resolve_board() == (4, 4, (3, 0))

    print("Runner resolve board test passed")


def test_runner_prompts_only_missing_dimension():
    """Test a configured dimension is kept and only the other one is asked for."""
    from knight_tour.config import Config
    from main import TourRunner

    fake_input, prompts = _feeder(["7", "1", "1"])
    runner = TourRunner(Config(rows=4), input_fn=fake_input)
    assert runner.resolve_board() == (4, 7, (0, 0))
    assert prompts[0].startswith("Enter number of columns")
    assert not any(p.startswith("Enter number of rows") for p in prompts)

    fake_input, prompts = _feeder(["6", "2", "3"])
    runner = TourRunner(Config(cols=5), input_fn=fake_input)
    assert runner.resolve_board() == (6, 5, (1, 2))
    assert prompts[0].startswith("Enter number of rows")
    assert not any(p.startswith("Enter number of columns") for p in prompts)

    print("Missing dimension prompt test passed")


def test_runner_print_existence():
    """Test the existence report names the board and the verdict."""
    from knight_tour.config import Config
    from main import TourRunner

    runner = TourRunner(Config())
    out = io.StringIO()
    with redirect_stdout(out):
        runner.print_existence(3, 3)
        runner.print_existence(5, 5)

    text = out.getvalue()
    assert "Tour Check for 3x3" in text
    assert "No open tour" in text
    assert "Tour Check for 5x5" in text
    assert "An open tour exists" in text

    print("Existence report test passed")


def test_main_exits_cleanly_on_end_of_input():
    """Test running out of input at a prompt exits with status 1 and a message."""
    from main import main

    with tempfile.TemporaryDirectory() as tmpdir:
        missing = os.path.join(tmpdir, "missing.yaml")
        out = io.StringIO()
        with redirect_stdout(out):
            with pytest.raises(SystemExit) as exc:
                main(["--config", missing], input_fn=_feeder([])[0])

    assert exc.value.code == 1
    assert "No input received, exiting." in out.getvalue()

    print("End of input test passed")


# =============================================================================
# Run All Tests
# =============================================================================

def run_all_tests():
    """Run all tests."""
    print("\n" + "=" * 60)
    print("Running Knight Tour Module Tests")
    print("=" * 60 + "\n")

    # Board tests
    test_board_initialization()
    test_board_place_and_advance()
    test_board_grid_is_read_only()

    # Move generation tests
    test_candidates_order_and_bounds()
    test_candidates_exclude_visited()
    test_is_knight_move()
    test_accessibility_map_matches_candidates()

    # Solver tests
    test_solver_3x4_path()
    test_solver_tie_break_first_candidate()
    test_solver_final_square_stays_current()
    test_solver_one_by_one()
    test_solver_on_step_callback()
    test_solver_step_after_halt()
    test_solver_requires_board_and_start()
    test_solver_picks_up_knight_placed_after_construction()
    test_solver_verbose_output()
    test_sweep_start_squares()

    # Utils tests
    test_validate_tour()
    test_check_tour_exists()

    # Config tests
    test_config_creation()
    test_config_from_dict()
    test_config_from_yaml()
    test_repository_config_file()

    # Prompt tests
    test_input_integer_reprompts()
    test_input_integer_eof()
    test_prompt_start_square_converts_to_zero_index()

    # Rendering and saving tests
    test_render_board()
    test_outcome_message()
    test_save_run_results()
    test_save_sweep_results()

    # Runner tests
    test_runner_prints_every_step()
    test_runner_resolve_board_prompts()
    test_runner_prompts_only_missing_dimension()
    test_runner_print_existence()
    test_main_exits_cleanly_on_end_of_input()

    print("\n" + "=" * 60)
    print(" All knight tour module tests passed!")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    run_all_tests()
