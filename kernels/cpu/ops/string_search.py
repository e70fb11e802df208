"""
string-search: count overlapping occurrences of a pattern in a text.

Baseline slides the pattern one position at a time and compares left to
right. The optimized variant is Boyer-Moore-Horspool: the window's last byte
is checked first and a mismatch skips ahead by the bad-character table. A
full match is counted and the window advances by exactly one position, so
overlapping matches are counted the same way the baseline counts them.

Patterns no wider than the byte lane width compare the whole window at once
(a single slice comparison); the shift logic is unchanged.
"""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

import numpy as np

from optbench.errors import DomainViolation
from optbench.hardware_profile import current_profile
from optbench.kernel import KernelPair
from optbench.lcg import alphabet_index, lcg_fill_batched
from optbench.spec import KernelSpec

SPEC = KernelSpec(
    name="string-search",
    input_shape="u8[N] over 'A'..'H'",
    size=1_000_000,
    seed=42,
    tolerance_kind="exact",
    params={"pattern": "ABCDABD", "alphabet_start": "A", "alphabet_size": 8},
)

Text = bytes
SearchInput = Tuple[bytes, bytes]


def _as_bytes(s: Union[str, bytes]) -> bytes:
    return s.encode("ascii") if isinstance(s, str) else bytes(s)


def _check_pattern(pattern: bytes, spec: KernelSpec = SPEC) -> None:
    if not pattern:
        raise DomainViolation(spec.name, "pattern must be non-empty", value=pattern)


def make_text(seed: int, length: int, *, start: str = "A", size: int = 8) -> bytes:
    codes = lcg_fill_batched(seed, length, alphabet_index(size), dtype=np.uint8)
    codes += np.uint8(ord(start))
    return codes.tobytes()


def make_input(spec: KernelSpec = SPEC) -> SearchInput:
    text = make_text(
        int(spec.seed or 0),
        int(spec.size),
        start=str(spec.param("alphabet_start", "A")),
        size=int(spec.param("alphabet_size", 8)),
    )
    return text, _as_bytes(spec.param("pattern", "ABCDABD"))


def count_naive(text: Union[str, bytes], pattern: Union[str, bytes]) -> int:
    t = _as_bytes(text)
    p = _as_bytes(pattern)
    _check_pattern(p)
    n, m = len(t), len(p)
    count = 0
    for i in range(n - m + 1):
        j = 0
        while j < m and t[i + j] == p[j]:
            j += 1
        if j == m:
            count += 1
    return count


def bad_character_table(pattern: bytes) -> List[int]:
    """
    256-entry shift table: `m - 1 - lastIndex(byte)` over pattern[:-1], and m
    for bytes that do not occur there.
    """
    m = len(pattern)
    table = [m] * 256
    for i in range(m - 1):
        table[pattern[i]] = m - 1 - i
    return table


def count_horspool(
    text: Union[str, bytes],
    pattern: Union[str, bytes],
    *,
    lane_bytes: Optional[int] = None,
) -> int:
    t = _as_bytes(text)
    p = _as_bytes(pattern)
    _check_pattern(p)
    n, m = len(t), len(p)
    if n < m:
        return 0
    table = bad_character_table(p)
    last = p[m - 1]
    width = current_profile().lane_width(np.uint8) if lane_bytes is None else int(lane_bytes)
    count = 0
    i = 0
    if m <= width:
        while i <= n - m:
            if t[i + m - 1] == last and t[i : i + m] == p:
                count += 1
                i += 1
            else:
                i += table[t[i + m - 1]]
    else:
        while i <= n - m:
            j = m - 1
            while j >= 0 and p[j] == t[i + j]:
                j -= 1
            if j < 0:
                count += 1
                i += 1
            else:
                i += table[t[i + m - 1]]
    return count


def baseline(x: SearchInput, spec: KernelSpec = SPEC) -> int:
    text, pattern = x
    _check_pattern(_as_bytes(pattern), spec)
    return count_naive(text, pattern)


def optimized(x: SearchInput, spec: KernelSpec = SPEC) -> int:
    text, pattern = x
    _check_pattern(_as_bytes(pattern), spec)
    return count_horspool(text, pattern, lane_bytes=spec.param("lane_bytes"))


def checksum(out: int) -> int:
    return int(out)


KERNEL = KernelPair(
    spec=SPEC,
    make_input=make_input,
    baseline=baseline,
    optimized=optimized,
    checksum=checksum,
)


__all__ = [
    "SPEC",
    "make_text",
    "make_input",
    "count_naive",
    "bad_character_table",
    "count_horspool",
    "baseline",
    "optimized",
    "checksum",
    "KERNEL",
]
