"""
Meta coordinates for the two-phase algorithm

Meta coordinates are computed from one or more normal coordinates with plain
arithmetic. A sorted slice coordinate already factors as
24 * (choice of 4 positions) + (order of the 4 edges), so the pieces can be
pulled back out without touching the cube again.
"""

from CoordinateEncoder import coord_fb_sorted, coord_rl_sorted, coord_ud_sorted


# =============================================================================
# Arithmetic on normal coordinates
# =============================================================================

def edge_permutation_calc(rl_sorted, fb_sorted):
    """
    Edge permutation coordinate from the sorted RL- and FB-slice coordinates.

    With the 4 UD-slice edges inside the UD slice, the RL-slice coordinate
    fixes where the RL edges sit among positions 0..7 and their order, which
    leaves only the order of the FB edges. The result is then in 0..40319.
    """
    return 24 * rl_sorted + fb_sorted % 24


def ud_unsorted_calc(ud_sorted):
    """UD-slice positions without order, 0..494."""
    return ud_sorted // 24


def ud_permutation_calc(ud_sorted):
    """Order of the 4 UD-slice edges among themselves, 0..23."""
    return ud_sorted % 24


# =============================================================================
# Meta coordinates of a cube
# =============================================================================

def coord_edge_permutation(cube):
    return edge_permutation_calc(coord_rl_sorted(cube), coord_fb_sorted(cube))


def coord_ud_unsorted(cube):
    return ud_unsorted_calc(coord_ud_sorted(cube))


def coord_ud_permutation(cube):
    return ud_permutation_calc(coord_ud_sorted(cube))
