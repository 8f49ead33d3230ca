"""
Cubie-level Rubik's Cube

A Cube is an immutable value made of four fixed-length numpy arrays:

    corner_permutation[i]  cubie (0..7) sitting in corner position i
    corner_orientation[i]  its twist, 0..2
    edge_permutation[i]    cubie (0..11) sitting in edge position i
    edge_orientation[i]    its flip, 0..1

Turning a face never changes a Cube, it returns a new one. All arrays are
read-only, so states can be shared freely between callers and threads.

Explicitly constructed states are validated eagerly (pass validate=False to
build partial states, e.g. corners only, for table generation). States
produced by moves are never re-validated since moves preserve every
invariant.
"""

from dataclasses import dataclass
from types import MappingProxyType

import numpy as np

from cube_constants import (
    CORNER_NAMES,
    EDGE_NAMES,
    FACE_CORNERS,
    FACE_EDGES,
    FACE_FLIP,
    FACE_TWIST,
    NUM_CORNERS,
    NUM_EDGES,
    Move,
)


class InvalidMoveError(ValueError):
    """Raised when a move is not one of the 18 face turns."""


class InvalidCubeStateError(ValueError):
    """Raised when an explicit cube state breaks one of the cube invariants."""


# =============================================================================
# Move table: 6 faces x 3 turn amounts, expanded once at import
# =============================================================================

@dataclass(frozen=True)
class _MoveEffect:
    corner_from: np.ndarray
    corner_to: np.ndarray
    corner_twist: np.ndarray
    edge_from: np.ndarray
    edge_to: np.ndarray
    edge_flip: np.ndarray


def _read_only(values, dtype):
    arr = np.array(values, dtype=dtype)
    arr.setflags(write=False)
    return arr


def _cycle_effect(cycle, deltas, turns, modulus):
    """
    Where each piece of a 4-cycle lands after `turns` clockwise quarter turns,
    and the orientation it picks up on the way.
    """
    size = len(cycle)
    targets = [cycle[(i + turns) % size] for i in range(size)]
    totals = [sum(deltas[(i + j) % size] for j in range(turns)) % modulus
              for i in range(size)]
    return (_read_only(cycle, np.intp),
            _read_only(targets, np.intp),
            _read_only(totals, np.int8))


def _build_move_table():
    table = {}
    for move in Move:
        face, turns = move.face, move.turns
        corner_from, corner_to, corner_twist = _cycle_effect(
            FACE_CORNERS[face], FACE_TWIST[face], turns, 3)
        edge_from, edge_to, edge_flip = _cycle_effect(
            FACE_EDGES[face], FACE_FLIP[face], turns, 2)
        table[move] = _MoveEffect(corner_from, corner_to, corner_twist,
                                  edge_from, edge_to, edge_flip)
    return MappingProxyType(table)


MOVE_TABLE = _build_move_table()


def as_move(move):
    """Return `move` as a Move member, accepting notation strings like "R'"."""
    if isinstance(move, Move):
        return move
    try:
        return Move(move)
    except (ValueError, TypeError):
        raise InvalidMoveError(f"Unsupported move: {move!r}") from None


# =============================================================================
# Invariant checks
# =============================================================================

def permutation_parity(perm):
    """0 for an even permutation, 1 for an odd one (inversion count mod 2)."""
    values = [int(v) for v in perm]
    inversions = 0
    for i in range(len(values)):
        for j in range(i + 1, len(values)):
            if values[j] < values[i]:
                inversions += 1
    return inversions % 2


_INT8 = np.iinfo(np.int8)


def _integer_array(name, values):
    """
    Copy `values` into an int64 array without converting anything.

    Only signed/unsigned integer input is accepted, and every value must fit
    in the int8 storage, so nothing is truncated, parsed or wrapped.
    """
    arr = np.asarray(list(values))
    if arr.dtype.kind not in "iu":
        raise InvalidCubeStateError(
            f"{name} must hold integers, got {arr.dtype} values: {arr.tolist()!r}")
    arr = arr.astype(np.int64)
    if arr.size and (arr.min() < _INT8.min or arr.max() > _INT8.max):
        raise InvalidCubeStateError(
            f"{name} values must fit in int8: {arr.tolist()}")
    return arr


def _check_state(cp, co, ep, eo):
    for name, arr, length in (("corner_permutation", cp, NUM_CORNERS),
                              ("corner_orientation", co, NUM_CORNERS),
                              ("edge_permutation", ep, NUM_EDGES),
                              ("edge_orientation", eo, NUM_EDGES)):
        if arr.shape != (length,):
            raise InvalidCubeStateError(
                f"{name} must have {length} entries, got shape {arr.shape}")

    if not np.array_equal(np.sort(cp), np.arange(NUM_CORNERS)):
        raise InvalidCubeStateError(
            f"corner_permutation is not a permutation of 0..7: {cp.tolist()}")
    if not np.array_equal(np.sort(ep), np.arange(NUM_EDGES)):
        raise InvalidCubeStateError(
            f"edge_permutation is not a permutation of 0..11: {ep.tolist()}")

    if np.any((co < 0) | (co > 2)):
        raise InvalidCubeStateError(
            f"corner_orientation values must be in 0..2: {co.tolist()}")
    if np.any((eo < 0) | (eo > 1)):
        raise InvalidCubeStateError(
            f"edge_orientation values must be in 0..1: {eo.tolist()}")

    # Total twist and total flip are conserved by every face turn
    if int(co.sum()) % 3 != 0:
        raise InvalidCubeStateError("corner twist does not sum to 0 mod 3")
    if int(eo.sum()) % 2 != 0:
        raise InvalidCubeStateError("edge flip does not sum to 0 mod 2")

    if permutation_parity(cp) != permutation_parity(ep):
        raise InvalidCubeStateError(
            "corner and edge permutations have different parity")


# =============================================================================
# Cube
# =============================================================================

class Cube:
    """Immutable cubie-level cube state."""

    __slots__ = ("_cp", "_co", "_ep", "_eo")

    def __init__(self, corner_permutation=None, corner_orientation=None,
                 edge_permutation=None, edge_orientation=None, validate=True):
        """
        Build a cube from explicit sequences.

        Any sequence left as None takes its solved value, so Cube() is the
        solved cube.

        Args:
            corner_permutation: 8 distinct values in 0..7
            corner_orientation: 8 values in 0..2
            edge_permutation: 12 distinct values in 0..11
            edge_orientation: 12 values in 0..1
            validate: check the cube invariants and raise
                InvalidCubeStateError on the first violation

        Whatever `validate` says, the values must be integers that fit in
        int8; anything else (floats, strings, booleans, 200) raises
        InvalidCubeStateError instead of being converted.

        The input sequences are copied; later changes to them do not affect
        the cube.
        """
        if corner_permutation is None:
            corner_permutation = range(NUM_CORNERS)
        if corner_orientation is None:
            corner_orientation = [0] * NUM_CORNERS
        if edge_permutation is None:
            edge_permutation = range(NUM_EDGES)
        if edge_orientation is None:
            edge_orientation = [0] * NUM_EDGES

        arrays = [_integer_array(name, values)
                  for name, values in (("corner_permutation", corner_permutation),
                                       ("corner_orientation", corner_orientation),
                                       ("edge_permutation", edge_permutation),
                                       ("edge_orientation", edge_orientation))]
        if validate:
            _check_state(*arrays)

        self._cp, self._co, self._ep, self._eo = (
            _read_only(arr, np.int8) for arr in arrays)

    @classmethod
    def solved(cls):
        return cls._from_arrays(np.arange(NUM_CORNERS, dtype=np.int8),
                                np.zeros(NUM_CORNERS, dtype=np.int8),
                                np.arange(NUM_EDGES, dtype=np.int8),
                                np.zeros(NUM_EDGES, dtype=np.int8))

    @classmethod
    def _from_arrays(cls, cp, co, ep, eo):
        # Takes ownership of freshly built int8 arrays, no checks
        cube = cls.__new__(cls)
        for arr in (cp, co, ep, eo):
            arr.setflags(write=False)
        cube._cp, cube._co, cube._ep, cube._eo = cp, co, ep, eo
        return cube

    # -------------------------------------------------------------------------
    # State access
    # -------------------------------------------------------------------------

    @property
    def corner_permutation(self):
        return self._cp

    @property
    def corner_orientation(self):
        return self._co

    @property
    def edge_permutation(self):
        return self._ep

    @property
    def edge_orientation(self):
        return self._eo

    # -------------------------------------------------------------------------
    # Moves
    # -------------------------------------------------------------------------

    def apply_move(self, move):
        """
        Return the cube obtained by turning one face.

        Args:
            move: a Move member or its notation string ("U", "R2", "F'", ...)

        Raises:
            InvalidMoveError: if move is not one of the 18 face turns
        """
        effect = MOVE_TABLE[as_move(move)]

        cp = self._cp.copy()
        co = self._co.copy()
        cp[effect.corner_to] = self._cp[effect.corner_from]
        co[effect.corner_to] = (self._co[effect.corner_from] + effect.corner_twist) % 3

        ep = self._ep.copy()
        eo = self._eo.copy()
        ep[effect.edge_to] = self._ep[effect.edge_from]
        eo[effect.edge_to] = (self._eo[effect.edge_from] + effect.edge_flip) % 2

        return Cube._from_arrays(cp, co, ep, eo)

    def apply_moves(self, moves):
        """Apply a sequence of moves in order and return the final cube."""
        if isinstance(moves, str):
            raise InvalidMoveError(
                f"Expected a sequence of moves, got the string {moves!r}")
        cube = self
        for move in moves:
            cube = cube.apply_move(move)
        return cube

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_solved(self):
        """
        A cube is solved if every position holds its own cubie, oriented.
        """
        return (np.array_equal(self._cp, np.arange(NUM_CORNERS))
                and np.array_equal(self._ep, np.arange(NUM_EDGES))
                and not self._co.any()
                and not self._eo.any())

    def corner_parity(self):
        return permutation_parity(self._cp)

    def edge_parity(self):
        return permutation_parity(self._ep)

    def validate(self):
        """Raise InvalidCubeStateError if this cube breaks an invariant."""
        _check_state(self._cp, self._co, self._ep, self._eo)

    def log_cube(self):
        print("corners", [(CORNER_NAMES[int(c)], int(o))
                          for c, o in zip(self._cp, self._co)])
        print("edges", [(EDGE_NAMES[int(e)], int(o))
                        for e, o in zip(self._ep, self._eo)])

    # -------------------------------------------------------------------------
    # Value semantics
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Cube):
            return NotImplemented
        return (np.array_equal(self._cp, other._cp)
                and np.array_equal(self._co, other._co)
                and np.array_equal(self._ep, other._ep)
                and np.array_equal(self._eo, other._eo))

    def __hash__(self):
        return hash((self._cp.tobytes(), self._co.tobytes(),
                     self._ep.tobytes(), self._eo.tobytes()))

    def __repr__(self):
        return (f"Cube(corner_permutation={self._cp.tolist()}, "
                f"corner_orientation={self._co.tolist()}, "
                f"edge_permutation={self._ep.tolist()}, "
                f"edge_orientation={self._eo.tolist()})")


def apply(state, move):
    """Turn one face of `state` and return the resulting cube."""
    return state.apply_move(move)
