"""
Normal coordinates for the two-phase algorithm

Each coordinate is an integer computed directly from a Cube, small enough to
index a move or pruning table:

    corner orientation   0..2186    base-3 digits of the first 7 twists
    edge orientation     0..2047    base-2 digits of the first 11 flips
    corner permutation   0..40319   Lehmer rank of the corner permutation
    sorted slice         0..11879   24 * (which 4 positions) + (their order)

The decoders build the inverse mappings needed when generating tables.
"""

from itertools import combinations, permutations

from cube_constants import (
    FB_SLICE_EDGES,
    NUM_CORNERS,
    NUM_EDGES,
    RL_SLICE_EDGES,
    UD_SLICE_EDGES,
)


# =============================================================================
# Combinatorics
# =============================================================================

def binom(n, k):
    """
    Binomial coefficient (n choose k) by the direct formula
    n * (n - 1) * ... * (n - k + 1) / k!

    Gives 0 when 0 <= n < k, which the slice ranking relies on.
    """
    num = 1
    for i in range(k):
        num *= (n - i)

    denom = 1
    for i in range(2, k + 1):
        denom *= i

    return num // denom


FACTORIAL = [1, 1, 2, 6, 24, 120, 720, 5040, 40320]  # 0! to 8!

# COMB[n][k] for the n <= 12, k <= 4 needed by the slice coordinates
COMB = [[binom(n, k) for k in range(5)] for n in range(NUM_EDGES + 1)]


# =============================================================================
# Sequence-level ranking
# =============================================================================

def encode_orientation(digits, base):
    """Read `digits` as a number in `base`, most significant digit first."""
    code = 0
    for d in digits:
        code = base * code + int(d)
    return code


def lehmer_rank(perm):
    """
    Lexicographic rank of a permutation of 0..n-1.

    For each position, count how many later entries are smaller and use the
    counts as factorial-base digits.
    """
    values = [int(v) for v in perm]
    factorial = 1
    rank = 0
    for i in range(len(values) - 1, -1, -1):
        low_count = 0
        for j in range(i + 1, len(values)):
            if values[j] < values[i]:
                low_count += 1
        rank += low_count * factorial
        factorial *= len(values) - i
    return rank


def order_rank(order):
    """
    Rank of the order in which a slice's edges were met while scanning
    positions from high to low.

    Counts later entries that are larger, so a slice found in descending
    identifier order (its home order) ranks 0.
    """
    values = [int(v) for v in order]
    factorial = 1
    rank = 0
    for i in range(len(values) - 1, -1, -1):
        high_count = 0
        for j in range(i + 1, len(values)):
            if values[j] > values[i]:
                high_count += 1
        rank += high_count * factorial
        factorial *= len(values) - i
    return rank


def slice_rank(edge_permutation, slice_edges):
    """
    Combinatorial rank of the positions holding `slice_edges`, plus the order
    those edges were found in (highest position first).
    """
    targets = set(slice_edges)
    remaining = len(slice_edges)
    pos_rank = 0
    order = []

    for n in range(len(edge_permutation) - 1, -1, -1):
        edge = int(edge_permutation[n])
        if edge in targets:
            pos_rank += COMB[n][remaining]
            remaining -= 1
            order.append(edge)

    return pos_rank, order


# =============================================================================
# Normal coordinates
# =============================================================================

def coord_corner_orientation(cube):
    """
    Corner orientation coordinate, 0..2186.

    The last corner's twist is fixed by the other seven and is left out.
    """
    return encode_orientation(cube.corner_orientation[:NUM_CORNERS - 1], 3)


def coord_edge_orientation(cube):
    """Edge orientation coordinate, 0..2047. The last flip is left out."""
    return encode_orientation(cube.edge_orientation[:NUM_EDGES - 1], 2)


def coord_corner_permutation(cube):
    """Corner permutation coordinate, 0..40319."""
    return lehmer_rank(cube.corner_permutation)


def coord_slice_sorted(cube, slice_edges):
    """
    Sorted slice coordinate, 0..11879, for a set of 4 edges.

    Combines the rank x of the 4 positions the edges occupy (0..494) and the
    rank y of their order among themselves (0..23) as 24x + y.
    """
    pos_rank, order = slice_rank(cube.edge_permutation, slice_edges)
    return 24 * pos_rank + order_rank(order)


def coord_ud_sorted(cube):
    return coord_slice_sorted(cube, UD_SLICE_EDGES)


def coord_rl_sorted(cube):
    return coord_slice_sorted(cube, RL_SLICE_EDGES)


def coord_fb_sorted(cube):
    return coord_slice_sorted(cube, FB_SLICE_EDGES)


# Enumeration tables for the direct edge permutation rank.
#
# Choices of 4 out of the outer positions 0..7, in colex order (compare the
# largest position first). This is the order binom(position, remaining) ranks.
_OUTER_CHOICE_RANK = {
    choice: rank for rank, choice in enumerate(
        sorted(combinations(range(8), 4), key=lambda c: c[::-1]))
}


def _arrangement_ranks(slice_edges):
    # permutations() of the descending ids come out in lexicographic order,
    # starting from the home order (highest position holds the highest id)
    return {
        arrangement: rank for rank, arrangement in enumerate(
            permutations(sorted(slice_edges, reverse=True)))
    }


_RL_ARRANGEMENT_RANK = _arrangement_ranks(RL_SLICE_EDGES)
_FB_ARRANGEMENT_RANK = _arrangement_ranks(FB_SLICE_EDGES)


def coord_edge_permutation_direct(cube):
    """
    Rank the 8 edges outside the UD slice straight from positions 0..7.

    The rank is 576 * (which 4 of the positions 0..7 hold RL-slice edges)
    + 24 * (order of the RL edges) + (order of the FB edges), with each part
    looked up in an enumeration of all choices/arrangements. Orders are read
    from the highest position down.

    Only defined while the UD-slice edges sit in the UD slice (phase two),
    where it equals the composed edge permutation coordinate.

    Raises:
        ValueError: if an RL- or FB-slice edge is outside positions 0..7
    """
    outer = [int(e) for e in cube.edge_permutation[:8]]
    rl_edges = set(RL_SLICE_EDGES)
    fb_edges = set(FB_SLICE_EDGES)

    rl_positions = tuple(n for n in range(8) if outer[n] in rl_edges)
    rl_order = tuple(outer[n] for n in reversed(rl_positions))
    fb_order = tuple(e for e in reversed(outer) if e in fb_edges)
    if len(rl_order) != 4 or len(fb_order) != 4:
        raise ValueError(
            f"UD-slice edges are not in the UD slice: {cube.edge_permutation.tolist()}")

    return (576 * _OUTER_CHOICE_RANK[rl_positions]
            + 24 * _RL_ARRANGEMENT_RANK[rl_order]
            + _FB_ARRANGEMENT_RANK[fb_order])


# =============================================================================
# Decoders
# =============================================================================

def _decode_orientation(code, base, length):
    digits = []
    for _ in range(length - 1):
        digits.append(code % base)
        code //= base
    digits.reverse()
    # Last entry restores the sum invariant
    digits.append((base - sum(digits) % base) % base)
    return digits


def decode_corner_orientation(code):
    """Inverse of coord_corner_orientation: 8 twists summing to 0 mod 3."""
    return _decode_orientation(code, 3, NUM_CORNERS)


def decode_edge_orientation(code):
    """Inverse of coord_edge_orientation: 12 flips summing to 0 mod 2."""
    return _decode_orientation(code, 2, NUM_EDGES)


def decode_corner_permutation(code):
    """Inverse of coord_corner_permutation."""
    available = list(range(NUM_CORNERS))
    perm = []
    for i in range(NUM_CORNERS - 1, 0, -1):
        idx, code = divmod(code, FACTORIAL[i])
        perm.append(available.pop(idx))
    perm.append(available[0])
    return perm
