"""
Keyspace Cache — Glob Patterns

Helpers for the Redis glob dialect used by key scans:
    *       any run of characters (including none)
    ?       exactly one character
    [abc]   one of the listed characters, ranges like [a-z] allowed
    [^abc]  any character not listed
    \\x      the literal character x
"""

import re
from functools import lru_cache

_GLOB_SPECIAL = frozenset("*?[]\\")


def escape_glob(text: str) -> str:
    """Escape glob metacharacters so ``text`` matches only itself."""
    return "".join(f"\\{ch}" if ch in _GLOB_SPECIAL else ch for ch in text)


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """
    Translate a bracket expression beginning at ``pattern[start] == "["``.

    Returns the regex fragment and the index of the closing bracket. A
    bracket left open runs to the end of the pattern, as in Redis.
    """
    n = len(pattern)
    j = start + 1
    negate = False
    if j < n and pattern[j] == "^":
        negate = True
        j += 1

    members: list[str] = []
    while j < n and pattern[j] != "]":
        ch = pattern[j]
        if ch == "\\" and j + 1 < n:
            j += 1
            members.append(re.escape(pattern[j]))
        elif j + 2 < n and pattern[j + 1] == "-" and pattern[j + 2] != "]":
            lo, hi = sorted((ch, pattern[j + 2]))
            members.append(f"{re.escape(lo)}-{re.escape(hi)}")
            j += 2
        else:
            members.append(re.escape(ch))
        j += 1

    end = min(j, n - 1)
    if not members:
        return ("." if negate else "(?!)"), end
    return f"[{'^' if negate else ''}{''.join(members)}]", end


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a Redis glob into an anchored regular expression."""
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "*":
            out.append(".*")
        elif ch == "?":
            out.append(".")
        elif ch == "\\" and i + 1 < n:
            i += 1
            out.append(re.escape(pattern[i]))
        elif ch == "[":
            fragment, i = _translate_class(pattern, i)
            out.append(fragment)
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("".join(out) + r"\Z", re.DOTALL)


def glob_match(pattern: str, key: str) -> bool:
    """Return True if ``key`` matches the Redis glob ``pattern``."""
    return compile_glob(pattern).match(key) is not None
