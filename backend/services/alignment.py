"""
Alignment - Minimal-edit line alignment between two line sequences

Lines are treated as opaque tokens. The alignment is a longest common
subsequence computed by dynamic programming, expressed as opcodes in the
same shape as difflib's SequenceMatcher.get_opcodes():

    (tag, i1, i2, j1, j2)   with tag in {"equal", "delete", "insert"}

Within each change block deletions are emitted before insertions, and equal
lines are matched as early as possible.
"""

from __future__ import annotations

from typing import Sequence

Opcode = tuple[str, int, int, int, int]


def _lcs_table(a: Sequence[str], b: Sequence[str]) -> list[list[int]]:
    """table[i][j] is the LCS length of a[i:] and b[j:]"""
    n, m = len(a), len(b)
    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        row, below = table[i], table[i + 1]
        ai = a[i]
        for j in range(m - 1, -1, -1):
            if ai == b[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = below[j] if below[j] >= row[j + 1] else row[j + 1]
    return table


def edit_script(a: Sequence[str], b: Sequence[str]) -> list[str]:
    """Per-line edit operations ("equal", "delete", "insert") turning a into b"""
    # Common prefix and suffix never take part in an edit
    prefix = 0
    limit = min(len(a), len(b))
    while prefix < limit and a[prefix] == b[prefix]:
        prefix += 1
    suffix = 0
    while suffix < limit - prefix and a[len(a) - 1 - suffix] == b[len(b) - 1 - suffix]:
        suffix += 1

    mid_a = a[prefix:len(a) - suffix]
    mid_b = b[prefix:len(b) - suffix]
    table = _lcs_table(mid_a, mid_b)

    ops = ["equal"] * prefix
    i = j = 0
    while i < len(mid_a) and j < len(mid_b):
        if mid_a[i] == mid_b[j]:
            ops.append("equal")
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            ops.append("delete")
            i += 1
        else:
            ops.append("insert")
            j += 1
    ops.extend(["delete"] * (len(mid_a) - i))
    ops.extend(["insert"] * (len(mid_b) - j))
    ops.extend(["equal"] * suffix)
    return ops


def align(a: Sequence[str], b: Sequence[str]) -> list[Opcode]:
    """Group the edit script into runs of equal, deleted and inserted lines"""
    opcodes: list[Opcode] = []
    i = j = 0
    for op in edit_script(a, b):
        di = 0 if op == "insert" else 1
        dj = 0 if op == "delete" else 1
        if opcodes and opcodes[-1][0] == op:
            tag, i1, _, j1, _ = opcodes[-1]
            opcodes[-1] = (tag, i1, i + di, j1, j + dj)
        else:
            opcodes.append((op, i, i + di, j, j + dj))
        i += di
        j += dj

    if i != len(a) or j != len(b):
        raise RuntimeError(
            f"alignment consumed {i}/{len(a)} pre lines and {j}/{len(b)} post lines"
        )
    return opcodes
