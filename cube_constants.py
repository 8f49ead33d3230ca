"""
Cubie-level constants for the Rubik's Cube

Piece identifiers, the 18 face turns, the per-face cycle/twist/flip tables
and the sizes of every two-phase coordinate.

Edge numbering is grouped by slice:
    0..3   RL slice (UF, UB, DB, DF)
    4..7   FB slice (UR, UL, DL, DR)
    8..11  UD slice (FR, FL, BL, BR)
"""

from enum import Enum
from types import MappingProxyType


# =============================================================================
# Piece identifiers (home positions)
# =============================================================================

CORNER_URF, CORNER_UFL, CORNER_ULB, CORNER_UBR = 0, 1, 2, 3
CORNER_DFR, CORNER_DLF, CORNER_DBL, CORNER_DRB = 4, 5, 6, 7

EDGE_UF, EDGE_UB, EDGE_DB, EDGE_DF = 0, 1, 2, 3
EDGE_UR, EDGE_UL, EDGE_DL, EDGE_DR = 4, 5, 6, 7
EDGE_FR, EDGE_FL, EDGE_BL, EDGE_BR = 8, 9, 10, 11

CORNER_NAMES = ("URF", "UFL", "ULB", "UBR", "DFR", "DLF", "DBL", "DRB")
EDGE_NAMES = ("UF", "UB", "DB", "DF",
              "UR", "UL", "DL", "DR",
              "FR", "FL", "BL", "BR")

NUM_CORNERS = 8
NUM_EDGES = 12

# Orientation deltas. CCW is -1 mod 3.
TWIST_NONE, TWIST_CW, TWIST_CCW = 0, 1, 2
FLIP_NONE, FLIP_FLIP = 0, 1


# =============================================================================
# Faces and moves
# =============================================================================

class Face(Enum):
    U = "U"
    L = "L"
    F = "F"
    R = "R"
    B = "B"
    D = "D"


class Move(Enum):
    """
    One of the 18 face turns, valued by its standard notation.

    Move("R'") looks up a member by notation and raises ValueError for
    anything else.
    """

    U = "U"
    U2 = "U2"
    UP = "U'"
    L = "L"
    L2 = "L2"
    LP = "L'"
    F = "F"
    F2 = "F2"
    FP = "F'"
    R = "R"
    R2 = "R2"
    RP = "R'"
    B = "B"
    B2 = "B2"
    BP = "B'"
    D = "D"
    D2 = "D2"
    DP = "D'"

    @property
    def face(self):
        return Face(self.value[0])

    @property
    def turns(self):
        """Clockwise quarter turns: 1, 2 or 3."""
        suffix = self.value[1:]
        if suffix == "2":
            return 2
        if suffix == "'":
            return 3
        return 1

    @property
    def inverse(self):
        return _INVERSE_MOVE[self]

    def __str__(self):
        return self.value


_INVERSE_SUFFIX = {1: "'", 2: "2", 3: ""}
_INVERSE_MOVE = MappingProxyType({
    m: Move(m.face.value + _INVERSE_SUFFIX[m.turns]) for m in Move
})


# =============================================================================
# Per-face tables, in the order a clockwise quarter turn cycles the pieces
# =============================================================================

FACE_CORNERS = MappingProxyType({
    Face.U: (CORNER_URF, CORNER_UFL, CORNER_ULB, CORNER_UBR),
    Face.L: (CORNER_UFL, CORNER_DLF, CORNER_DBL, CORNER_ULB),
    Face.F: (CORNER_URF, CORNER_DFR, CORNER_DLF, CORNER_UFL),
    Face.R: (CORNER_URF, CORNER_UBR, CORNER_DRB, CORNER_DFR),
    Face.B: (CORNER_UBR, CORNER_ULB, CORNER_DBL, CORNER_DRB),
    Face.D: (CORNER_DFR, CORNER_DRB, CORNER_DBL, CORNER_DLF),
})

FACE_EDGES = MappingProxyType({
    Face.U: (EDGE_UF, EDGE_UL, EDGE_UB, EDGE_UR),
    Face.L: (EDGE_UL, EDGE_FL, EDGE_DL, EDGE_BL),
    Face.F: (EDGE_UF, EDGE_FR, EDGE_DF, EDGE_FL),
    Face.R: (EDGE_UR, EDGE_BR, EDGE_DR, EDGE_FR),
    Face.B: (EDGE_UB, EDGE_BL, EDGE_DB, EDGE_BR),
    Face.D: (EDGE_DF, EDGE_DR, EDGE_DB, EDGE_DL),
})

# twist[i] is applied to the corner leaving cycle position i on one quarter turn
FACE_TWIST = MappingProxyType({
    Face.U: (TWIST_NONE, TWIST_NONE, TWIST_NONE, TWIST_NONE),
    Face.L: (TWIST_CCW, TWIST_CW, TWIST_CCW, TWIST_CW),
    Face.F: (TWIST_CCW, TWIST_CW, TWIST_CCW, TWIST_CW),
    Face.R: (TWIST_CW, TWIST_CCW, TWIST_CW, TWIST_CCW),
    Face.B: (TWIST_CW, TWIST_CCW, TWIST_CW, TWIST_CCW),
    Face.D: (TWIST_NONE, TWIST_NONE, TWIST_NONE, TWIST_NONE),
})

FACE_FLIP = MappingProxyType({
    Face.U: (FLIP_NONE, FLIP_NONE, FLIP_NONE, FLIP_NONE),
    Face.L: (FLIP_NONE, FLIP_NONE, FLIP_NONE, FLIP_NONE),
    Face.F: (FLIP_FLIP, FLIP_FLIP, FLIP_FLIP, FLIP_FLIP),
    Face.R: (FLIP_NONE, FLIP_NONE, FLIP_NONE, FLIP_NONE),
    Face.B: (FLIP_FLIP, FLIP_FLIP, FLIP_FLIP, FLIP_FLIP),
    Face.D: (FLIP_NONE, FLIP_NONE, FLIP_NONE, FLIP_NONE),
})


# =============================================================================
# Slices
# =============================================================================

UD_SLICE_EDGES = (EDGE_FR, EDGE_FL, EDGE_BL, EDGE_BR)
RL_SLICE_EDGES = (EDGE_UF, EDGE_UB, EDGE_DB, EDGE_DF)
FB_SLICE_EDGES = (EDGE_UR, EDGE_UL, EDGE_DL, EDGE_DR)

# Moves that keep the UD-slice edges inside the UD slice (phase two)
PHASE2_MOVES = (Move.U, Move.U2, Move.UP, Move.D, Move.D2, Move.DP,
                Move.L2, Move.R2, Move.F2, Move.B2)


# =============================================================================
# Coordinate sizes
# =============================================================================

N_CORNER_ORI = 3**7        # 2187
N_EDGE_ORI = 2**11         # 2048
N_CORNER_PERM = 40320      # 8!
N_SLICE_SORTED = 11880     # 12! / 8!
N_EDGE_PERM = 40320        # 8!, phase two only
N_UD_UNSORTED = 495        # 12 choose 4
N_UD_PERM = 24             # 4!
