"""
Tests for the cubie-level Cube and its face turns.

Run with pytest, or directly: python test_cube.py
"""

import random

import numpy as np
import pytest

from Cube import Cube, InvalidCubeStateError, InvalidMoveError, apply, permutation_parity
from cube_constants import (
    CORNER_DFR,
    CORNER_DRB,
    CORNER_UBR,
    CORNER_URF,
    EDGE_DF,
    EDGE_FL,
    EDGE_FR,
    EDGE_UF,
    Face,
    Move,
)

QUARTER_TURNS = [m for m in Move if m.turns == 1]
HALF_TURNS = [m for m in Move if m.turns == 2]


def random_cube(rng, length=30):
    """Scramble the solved cube with `length` random face turns."""
    cube = Cube.solved()
    for _ in range(length):
        cube = cube.apply_move(rng.choice(list(Move)))
    return cube


def sample_cubes(seed=0, count=10):
    rng = random.Random(seed)
    return [Cube.solved()] + [random_cube(rng) for _ in range(count)]


def test_solved_cube():
    print("=" * 50)
    print("Test: Solved Cube")
    print("=" * 50)

    cube = Cube()
    assert cube.is_solved()
    assert cube == Cube.solved()
    assert cube.corner_permutation.tolist() == list(range(8))
    assert cube.corner_orientation.tolist() == [0] * 8
    assert cube.edge_permutation.tolist() == list(range(12))
    assert cube.edge_orientation.tolist() == [0] * 12

    print("PASSED: Solved cube test")


def test_move_enum():
    print("\n" + "=" * 50)
    print("Test: Move Enumeration")
    print("=" * 50)

    assert len(Move) == 18
    assert {m.face for m in Move} == set(Face)
    for face in Face:
        turns = sorted(m.turns for m in Move if m.face is face)
        assert turns == [1, 2, 3], f"{face} should have three turn amounts"

    assert Move("R'") is Move.RP
    assert Move.RP.face is Face.R and Move.RP.turns == 3
    assert Move.U.inverse is Move.UP
    assert Move.UP.inverse is Move.U
    assert Move.F2.inverse is Move.F2
    assert str(Move.B2) == "B2"

    print("PASSED: Move enumeration test")


def test_four_quarter_turns_restore_state():
    print("\n" + "=" * 50)
    print("Test: Four Quarter Turns")
    print("=" * 50)

    for start in sample_cubes(seed=1):
        for move in QUARTER_TURNS:
            cube = start
            for _ in range(4):
                cube = cube.apply_move(move)
            assert cube == start, f"{move} applied 4 times should be identity"

            cube = start.apply_move(move)
            assert cube != start, f"{move} should change the cube"

    print("PASSED: Four quarter turns test")


def test_inverse_moves_restore_state():
    print("\n" + "=" * 50)
    print("Test: Inverse Moves")
    print("=" * 50)

    for start in sample_cubes(seed=2):
        for move in QUARTER_TURNS:
            assert start.apply_moves([move, move.inverse]) == start, \
                f"{move} then {move.inverse} should be identity"
            assert start.apply_moves([move.inverse, move]) == start, \
                f"{move.inverse} then {move} should be identity"

    print("PASSED: Inverse moves test")


def test_half_turn_twice_restores_state():
    print("\n" + "=" * 50)
    print("Test: Half Turns")
    print("=" * 50)

    for start in sample_cubes(seed=3):
        for move in HALF_TURNS:
            assert start.apply_moves([move, move]) == start
            # A half turn is two quarter turns
            quarter = Move(move.face.value)
            assert start.apply_move(move) == start.apply_moves([quarter, quarter])

    print("PASSED: Half turns test")


def test_u_then_u_prime_is_solved():
    cube = apply(apply(Cube.solved(), Move.U), Move.UP)
    assert cube == Cube.solved()
    assert cube.is_solved()


def test_sexy_move_has_order_six():
    print("\n" + "=" * 50)
    print("Test: R U R' U' Order")
    print("=" * 50)

    sequence = [Move.R, Move.U, Move.RP, Move.UP]
    cube = Cube.solved()
    for rep in range(1, 7):
        cube = cube.apply_moves(sequence)
        if rep < 6:
            assert not cube.is_solved(), f"Solved too early after {rep} repetitions"
    assert cube == Cube.solved()

    print("PASSED: R U R' U' order test")


def test_r_move_from_solved():
    cube = Cube.solved().apply_move(Move.R)

    # URF -> UBR -> DRB -> DFR -> URF
    cp = cube.corner_permutation
    assert cp[CORNER_UBR] == CORNER_URF
    assert cp[CORNER_DRB] == CORNER_UBR
    assert cp[CORNER_DFR] == CORNER_DRB
    assert cp[CORNER_URF] == CORNER_DFR
    assert cp.tolist() == [4, 1, 2, 0, 7, 5, 6, 3]
    assert cube.corner_orientation.tolist() == [2, 0, 0, 1, 1, 0, 0, 2]

    assert cube.edge_permutation.tolist() == [0, 1, 2, 3, 8, 5, 6, 11, 7, 9, 10, 4]
    assert not cube.edge_orientation.any(), "R does not flip edges"


def test_f_move_flips_edges():
    cube = Cube.solved().apply_move(Move.F)
    flipped = [i for i, o in enumerate(cube.edge_orientation.tolist()) if o]
    assert sorted(flipped) == sorted([EDGE_UF, EDGE_FR, EDGE_DF, EDGE_FL])
    assert cube.corner_orientation.tolist() == [1, 2, 0, 0, 2, 1, 0, 0]


def test_u_and_d_do_not_change_orientation():
    for start in sample_cubes(seed=4, count=3):
        for move in (Move.U, Move.U2, Move.UP, Move.D, Move.D2, Move.DP):
            cube = start.apply_move(move)
            assert np.array_equal(cube.corner_orientation[cube.corner_permutation.argsort()],
                                  start.corner_orientation[start.corner_permutation.argsort()])
            assert np.array_equal(cube.edge_orientation[cube.edge_permutation.argsort()],
                                  start.edge_orientation[start.edge_permutation.argsort()])


def test_move_does_not_mutate_input():
    print("\n" + "=" * 50)
    print("Test: Value Semantics")
    print("=" * 50)

    start = random_cube(random.Random(5))
    before = [arr.copy() for arr in (start.corner_permutation, start.corner_orientation,
                                     start.edge_permutation, start.edge_orientation)]

    after = start.apply_move(Move.F)
    assert after is not start

    for old, arr in zip(before, (start.corner_permutation, start.corner_orientation,
                                 start.edge_permutation, start.edge_orientation)):
        assert np.array_equal(old, arr), "Input cube was modified by a move"

    for arr in (after.corner_permutation, after.edge_orientation):
        assert not arr.flags.writeable
        with pytest.raises(ValueError):
            arr[0] = 1

    # No storage shared between the two states
    assert not np.shares_memory(start.corner_permutation, after.corner_permutation)
    assert not np.shares_memory(start.edge_orientation, after.edge_orientation)

    print("PASSED: Value semantics test")


def test_constructor_copies_input():
    cp = list(range(8))
    cube = Cube(corner_permutation=cp)
    cp[0], cp[1] = cp[1], cp[0]
    assert cube.is_solved()


def test_invariants_hold_on_random_walks():
    for cube in sample_cubes(seed=6, count=25):
        cube.validate()
        assert cube.corner_parity() == cube.edge_parity()
        assert int(cube.corner_orientation.sum()) % 3 == 0
        assert int(cube.edge_orientation.sum()) % 2 == 0


def test_explicit_state_round_trip():
    start = random_cube(random.Random(7))
    cube = Cube(start.corner_permutation, start.corner_orientation,
                start.edge_permutation, start.edge_orientation)
    assert cube == start
    assert hash(cube) == hash(start)
    assert len({cube, start, Cube.solved()}) == 2


def test_notation_strings_accepted():
    start = random_cube(random.Random(8))
    assert start.apply_move("R'") == start.apply_move(Move.RP)
    assert start.apply_moves(["R", "U2", "F'"]) == start.apply_moves([Move.R, Move.U2, Move.FP])


def test_invalid_move_raises():
    print("\n" + "=" * 50)
    print("Test: Invalid Moves")
    print("=" * 50)

    cube = Cube.solved()
    for bad in ("X", "u", "R3", "", 0, 18, None, Face.U, ["R"]):
        with pytest.raises(InvalidMoveError):
            cube.apply_move(bad)
        with pytest.raises(InvalidMoveError):
            apply(cube, bad)

    # A plain string is not a move sequence
    with pytest.raises(InvalidMoveError):
        cube.apply_moves("RU")
    with pytest.raises(InvalidMoveError):
        cube.apply_moves([Move.R, "Q"])

    # Still a ValueError for callers that catch the broad type
    with pytest.raises(ValueError):
        cube.apply_move("Z")

    print("PASSED: Invalid moves test")


@pytest.mark.parametrize("kwargs", [
    {"corner_permutation": [0, 1, 2, 3, 4, 5, 6]},
    {"edge_orientation": [0] * 13},
    {"corner_permutation": [0, 0, 2, 3, 4, 5, 6, 7]},
    {"edge_permutation": [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 12]},
    {"corner_orientation": [3, 0, 0, 0, 0, 0, 0, 0]},
    {"corner_orientation": [-1, 1, 0, 0, 0, 0, 0, 0]},
    {"edge_orientation": [2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]},
    {"corner_orientation": [1, 0, 0, 0, 0, 0, 0, 0]},
    {"edge_orientation": [1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]},
    {"corner_permutation": [1, 0, 2, 3, 4, 5, 6, 7]},
    {"corner_orientation": [0.5, 0, 0, 0, 0, 0, 0, 0]},
    {"corner_permutation": "01234567"},
    {"edge_orientation": [False] * 12},
])
def test_invalid_state_raises(kwargs):
    with pytest.raises(InvalidCubeStateError):
        Cube(**kwargs)


@pytest.mark.parametrize("kwargs", [
    {"corner_orientation": [0.5, 0, 0, 0, 0, 0, 0, 0]},
    {"corner_permutation": "01234567"},
    {"corner_permutation": [200, 1, 2, 3, 4, 5, 6, 7]},
    {"edge_permutation": [-129] + list(range(1, 12))},
])
def test_unconvertible_values_raise_without_validation(kwargs):
    # Non-integers are never truncated or parsed, and nothing wraps in int8
    with pytest.raises(InvalidCubeStateError):
        Cube(validate=False, **kwargs)


def test_numpy_integer_input_accepted():
    start = random_cube(random.Random(9))
    cube = Cube(start.corner_permutation.astype(np.uint8),
                start.corner_orientation.astype(np.int32),
                start.edge_permutation,
                start.edge_orientation.astype(np.int64))
    assert cube == start


def test_validate_false_allows_partial_states():
    # Corners only, edges left solved: parity mismatch
    cube = Cube(corner_permutation=[1, 0, 2, 3, 4, 5, 6, 7], validate=False)
    assert cube.corner_parity() == 1
    assert cube.edge_parity() == 0
    with pytest.raises(InvalidCubeStateError):
        cube.validate()

    # Moves still work on unchecked states
    moved = cube.apply_move(Move.U)
    assert moved.apply_move(Move.UP) == cube


def test_permutation_parity():
    assert permutation_parity(range(8)) == 0
    assert permutation_parity([1, 0, 2, 3]) == 1
    assert permutation_parity([1, 2, 3, 0]) == 1
    assert permutation_parity([1, 0, 3, 2]) == 0


def test_log_cube(capsys):
    Cube.solved().apply_move(Move.R).log_cube()
    out = capsys.readouterr().out
    assert out.startswith("corners")
    assert "('DFR', 2)" in out
    assert "edges" in out


def main():
    """Run all tests."""
    print("Cubie Cube - Test Suite")
    print("=" * 50)

    test_solved_cube()
    test_move_enum()
    test_four_quarter_turns_restore_state()
    test_inverse_moves_restore_state()
    test_half_turn_twice_restores_state()
    test_u_then_u_prime_is_solved()
    test_sexy_move_has_order_six()
    test_r_move_from_solved()
    test_f_move_flips_edges()
    test_u_and_d_do_not_change_orientation()
    test_move_does_not_mutate_input()
    test_constructor_copies_input()
    test_invariants_hold_on_random_walks()
    test_explicit_state_round_trip()
    test_notation_strings_accepted()
    test_invalid_move_raises()
    test_validate_false_allows_partial_states()
    test_numpy_integer_input_accepted()
    test_permutation_parity()

    print("\n" + "=" * 50)
    print("All tests PASSED!")
    print("=" * 50)


if __name__ == "__main__":
    main()
