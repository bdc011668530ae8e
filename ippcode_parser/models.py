"""
Core data models for the IPPcode19 parser.

Instructions and operands are produced by
:class:`~ippcode_parser.pipeline.program_parser.ProgramParser` during its single
pass and are never modified afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Tuple

LANGUAGE = "IPPcode19"
HEADER = ".ippcode19"

# ---------------------------------------------------------------------------
# Operand grammar classes (what an instruction slot expects)
# ---------------------------------------------------------------------------

VAR = "var"
SYMB = "symb"
LABEL = "label"
TYPE = "type"

# ---------------------------------------------------------------------------
# Resolved argument types (the ``type`` attribute of an argN element)
# ---------------------------------------------------------------------------

NIL = "nil"
BOOL = "bool"
INT = "int"
STRING = "string"

FRAMES: Tuple[str, ...] = ("GF", "LF", "TF")
TYPE_NAMES: Tuple[str, ...] = (INT, BOOL, STRING)

STAT_COUNTERS: Tuple[str, ...] = ("loc", "comments", "labels", "jumps")


@dataclass(frozen=True)
class ClassifiedValue:
    """Result of classifying one operand token."""

    arg_type: str   # var, label, type, nil, bool, int or string
    value: str


@dataclass(frozen=True)
class Operand:
    """A validated instruction operand."""

    position: int   # 1-based slot
    kind: str       # grammar class the slot expects (var | symb | label | type)
    arg_type: str   # resolved type written to the output tree
    value: str


@dataclass(frozen=True)
class Instruction:
    """One validated instruction of the program."""

    order: int
    opcode: str
    operands: Tuple[Operand, ...] = ()
    line: int = 0

    def __repr__(self) -> str:
        return (
            f"Instruction(order={self.order}, opcode={self.opcode!r}, "
            f"operands={[o.value for o in self.operands]})"
        )


@dataclass
class Program:
    """Ordered sequence of validated instructions."""

    language: str = LANGUAGE
    instructions: List[Instruction] = field(default_factory=list)

    def append(self, instruction: Instruction) -> None:
        self.instructions.append(instruction)

    def __len__(self) -> int:
        return len(self.instructions)


@dataclass
class ProgramStatistics:
    """
    Counters accumulated during the parse pass.

    ``labels`` is not stored; it is the size of :attr:`label_names`.
    """

    loc: int = 0
    comments: int = 0
    jumps: int = 0
    label_names: Set[str] = field(default_factory=set)

    @property
    def labels(self) -> int:
        return len(self.label_names)

    def get(self, counter: str) -> int:
        """Return the value of the counter named *counter*."""
        if counter not in STAT_COUNTERS:
            raise KeyError(f"Unknown statistics counter: {counter}")
        return getattr(self, counter)

    def to_dict(self) -> Dict[str, Any]:
        return {name: self.get(name) for name in STAT_COUNTERS}
