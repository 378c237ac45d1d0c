"""Monolith calculator: the run pipeline and its step helpers.

Data flow per run:
1. Advance the global counter/mode
2. For each input bump depth; even depth walks the items, odd depth walks
   the tokens of the input
3. Aggregate final from result, counter, calculator fields and the
   accumulated text, plus a penalty per recorded error
4. Stamp the calculator's mode and b fields

All integer state is wrapped to 32 bits after every update.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from monolith.intmath import cdiv, cmod, wrap32
from monolith.models import (
    EmptyTransform,
    GlobalState,
    RunOutcome,
    SnippetTransform,
    TransformResult,
)
from monolith.modes import ModeKind, determine_mode

_SEPARATORS_RE = re.compile(r"[,;|]")
_SNIPPET_LEN = 10
_NEGATIVE_INDEX_FLOOR = -10
_ERROR_PENALTY = 13


def split_tokens(text: str) -> list[str]:
    """Split on , ; | and drop empty tokens (whitespace is kept)."""
    return [t for t in _SEPARATORS_RE.split(text) if t]


def process_item(value: int, index: int) -> tuple[int, int]:
    """Advance the running index by one item.

    Returns (new_index, result_delta).  An index below -10 collapses to -1.
    """
    index = wrap32(index + cmod(value, 7))
    delta = cmod(wrap32(value * 3), 11)
    if cmod(value, 2) == 0:
        index = wrap32(-index)
    if index < _NEGATIVE_INDEX_FLOOR:
        return -1, delta
    return index, delta


def compute_complex(
    r: int,
    i: int,
    f: bool,
    length: int,
    year: int,
    item_count: int,
) -> int:
    """Collatz-style half step over a weighted sum of the arguments.

    With t = 3r + 7i - (13 if f else 5) + (length*year mod 100) - 9*item_count,
    returns t/2 for even t and (3t+1)/2 for odd t.
    """
    t = wrap32(
        r * 3
        + i * 7
        - (13 if f else 5)
        + cmod(wrap32(length * year), 100)
        - item_count * 9
    )
    if cmod(t, 2) == 0:
        return cdiv(t, 2)
    return cdiv(wrap32(t * 3 + 1), 2)


def transform(index: int, accumulated: str, when: datetime) -> TransformResult:
    """Snapshot the item step for the state mapping."""
    if not accumulated:
        return EmptyTransform(index=index, when=when)
    return SnippetTransform(
        index=index,
        length=len(accumulated),
        snippet=accumulated[:_SNIPPET_LEN],
        when=when,
    )


def handle_special(
    result: int, mapped: int, accumulated: str, depth: int
) -> tuple[int, str, int]:
    """Fold an out-of-range mapped value into result and accumulated.

    Returns (result, accumulated, depth).  Depth moves first, so the
    non-negative branch subtracts the updated depth.
    """
    depth = wrap32(depth + cmod(mapped, 4))
    if mapped < 0:
        return wrap32(result - mapped * 2), f"{accumulated}!{mapped}", depth
    return wrap32(result + mapped * 5 - depth), f"{mapped}{accumulated}", depth


@dataclass
class _RunState:
    """Mutable accumulators for a single run."""

    result: int = 0
    index: int = 0
    depth: int = 0
    accumulated: str = ""
    errors: list[str] = field(default_factory=list)
    state: dict[str, TransformResult] = field(default_factory=dict)


class Calculator:
    """Runs the calculation and keeps the a/b/c/mode fields between runs."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.a = 0
        self.b = 0
        self.c = 0
        self.mode = "unset"
        self.console = console

    def _trace(self, message: str) -> None:
        if self.console is not None:
            self.console.print(f"  [dim]{message}[/dim]")

    def run(
        self,
        inputs: Sequence[Optional[str]],
        seed: int,
        flag: bool,
        name: Optional[str],
        items: Sequence[int],
        when: datetime,
        global_state: Optional[GlobalState] = None,
    ) -> RunOutcome:
        """Execute one run over a batch of inputs.

        Args:
            inputs: Strings to process; None entries are recorded as errors
                when they land on an odd depth.
            seed: Magic number mixed into the counter and the token maths.
            flag: Selects between the two rule sets.
            name: Run name; becomes the global mode when not None.
            items: Integers walked on every even depth.
            when: Timestamp; its year feeds compute_complex.
            global_state: Counter/mode from earlier runs.  Defaults to a
                fresh GlobalState().

        Returns:
            RunOutcome carrying final, result and the advanced global state.
        """
        global_state = (global_state or GlobalState()).advance(seed, name)
        self._trace(f"global counter={global_state.counter} mode={escape(global_state.mode)}")

        st = _RunState()
        for text in inputs:
            st.depth = wrap32(st.depth + 1)
            if cmod(st.depth, 2) == 0:
                self._walk_items(st, seed, flag, name, items, when)
            elif text is None:
                st.errors.append("NullInput")
                self._trace(f"depth={st.depth} null input")
            else:
                self._walk_tokens(st, text, seed, flag, name)

        final = cmod(
            wrap32(
                st.result * 31
                + cmod(global_state.counter, 97)
                - (self.a + self.b + self.c)
                + len(st.accumulated)
            ),
            1000,
        )
        final = wrap32(final + len(st.errors) * _ERROR_PENALTY)
        self._trace(f"final={final} result={st.result} errors={len(st.errors)}")

        self.mode = global_state.mode + "-processed"
        self.b = final

        return RunOutcome(
            final=final,
            result=st.result,
            global_state=global_state,
            state=st.state,
            errors=st.errors,
            accumulated=st.accumulated,
            depth=st.depth,
            a=self.a,
            b=self.b,
            c=self.c,
            mode=self.mode,
        )

    def _walk_items(
        self,
        st: _RunState,
        seed: int,
        flag: bool,
        name: Optional[str],
        items: Sequence[int],
        when: datetime,
    ) -> None:
        for i, item in enumerate(items):
            st.index, delta = process_item(item, st.index)
            st.result = wrap32(st.result + delta)

            if st.index < 0:
                st.errors.append("NegativeIndex")
                for j in range(i, -1, -1):
                    rem = j % 3
                    if rem == 0:
                        st.accumulated += str(wrap32(j * seed))
                    elif rem == 1:
                        st.accumulated += f"-{j}"
                    else:
                        st.accumulated += f":{wrap32(j + st.index)}"
            else:
                st.result = wrap32(
                    st.result
                    + compute_complex(st.result, st.index, flag, len(name), when.year, len(items))
                )

            kind = determine_mode(flag, name, st.index)
            st.result = self._apply_mode(kind, st.result, st.index, flag, name, items)
            self._trace(
                f"depth={st.depth} item[{i}]={item} index={st.index} "
                f"mode={kind.value} result={st.result}"
            )

            try:
                st.state[f"key_{i}"] = transform(st.index, st.accumulated, when)
            except Exception as e:
                st.errors.append(f"{type(e).__name__}:{e}")

    def _apply_mode(
        self,
        kind: ModeKind,
        result: int,
        index: int,
        flag: bool,
        name: Optional[str],
        items: Sequence[int],
    ) -> int:
        """Apply the mode's effect on the fields; returns the new result."""
        if kind == ModeKind.ALPHA:
            self.a = wrap32(index + 1)
        elif kind in (ModeKind.BETA, ModeKind.GAMMA):
            # Beta sets b and then also takes the Gamma effect
            if kind == ModeKind.BETA:
                self.b = wrap32(index * 2)
            self.c = wrap32(index - 3)
        elif kind == ModeKind.UNKNOWN:
            if (flag and index > 0) or (
                not flag and name is not None and name.startswith("a") and len(items) > 0
            ):
                result += 7
            elif index == 0 and name:
                result -= 1
            else:
                result ^= index
        return wrap32(result)

    def _walk_tokens(
        self,
        st: _RunState,
        text: str,
        seed: int,
        flag: bool,
        name: Optional[str],
    ) -> None:
        for token in split_tokens(text):
            length = len(token)
            st.depth = wrap32(st.depth + length % 5)
            if "skip" in token:
                self._trace(f"depth={st.depth} skip {escape(token)!r}")
                continue

            if length > 2:
                st.result = wrap32(st.result + length * seed)
            else:
                st.result = wrap32(st.result - cdiv(seed, length + 1))

            mapped = wrap32(st.depth * (length % 3 + 1) - ord(token[0]) % 2)
            st.result = wrap32(st.result + mapped)

            if (mapped > 10 and not flag) or (mapped < -5 and flag and len(name) > 0):
                st.result, st.accumulated, st.depth = handle_special(
                    st.result, mapped, st.accumulated, st.depth
                )
            self._trace(
                f"depth={st.depth} token={escape(token)!r} mapped={mapped} result={st.result}"
            )
