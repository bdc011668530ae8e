"""
IPPcode19 instruction set.

Maps every opcode to the grammar classes of its operand slots:

+-----------------------------+------------------------------------------+
| Operands                    | Opcodes                                  |
+=============================+==========================================+
| (none)                      | RETURN CREATEFRAME PUSHFRAME POPFRAME    |
|                             | BREAK                                    |
+-----------------------------+------------------------------------------+
| var                         | DEFVAR POPS                              |
+-----------------------------+------------------------------------------+
| symb                        | PUSHS WRITE EXIT DPRINT                  |
+-----------------------------+------------------------------------------+
| label                       | CALL JUMP* LABEL+                        |
+-----------------------------+------------------------------------------+
| var symb                    | MOVE NOT INT2CHAR STRLEN TYPE            |
+-----------------------------+------------------------------------------+
| var type                    | READ                                     |
+-----------------------------+------------------------------------------+
| var symb symb               | ADD SUB MUL IDIV LT GT EQ AND OR         |
|                             | STRI2INT CONCAT GETCHAR SETCHAR          |
+-----------------------------+------------------------------------------+
| label symb symb             | JUMPIFEQ* JUMPIFNEQ*                     |
+-----------------------------+------------------------------------------+

``*`` counts toward the ``jumps`` statistic, ``+`` declares a label.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from ..errors import UnknownOpcodeError
from ..models import LABEL, SYMB, TYPE, VAR


@dataclass(frozen=True)
class InstructionSpec:
    """Operand layout of one opcode."""

    opcode: str
    operands: Tuple[str, ...] = ()
    counts_as_jump: bool = False
    declares_label: bool = False

    @property
    def arity(self) -> int:
        return len(self.operands)


INSTRUCTION_TABLE: Dict[str, InstructionSpec] = {}


def _add(opcodes: Iterable[str], operands: Tuple[str, ...] = (), **flags: bool) -> None:
    for opcode in opcodes:
        INSTRUCTION_TABLE[opcode] = InstructionSpec(opcode, operands, **flags)


# Frames and function calls
_add(("RETURN", "CREATEFRAME", "PUSHFRAME", "POPFRAME", "BREAK"))
_add(("DEFVAR", "POPS"), (VAR,))
_add(("PUSHS", "WRITE", "EXIT", "DPRINT"), (SYMB,))
_add(("CALL",), (LABEL,))

# Data movement, conversions, I/O
_add(("MOVE", "NOT", "INT2CHAR", "STRLEN", "TYPE"), (VAR, SYMB))
_add(("READ",), (VAR, TYPE))

# Arithmetic, relational, boolean and string operations
_add(
    ("ADD", "SUB", "MUL", "IDIV", "LT", "GT", "EQ", "AND", "OR",
     "STRI2INT", "CONCAT", "GETCHAR", "SETCHAR"),
    (VAR, SYMB, SYMB),
)

# Flow control
_add(("LABEL",), (LABEL,), declares_label=True)
_add(("JUMP",), (LABEL,), counts_as_jump=True)
_add(("JUMPIFEQ", "JUMPIFNEQ"), (LABEL, SYMB, SYMB), counts_as_jump=True)


def lookup(opcode: str) -> InstructionSpec:
    """
    Return the :class:`InstructionSpec` for *opcode* (case-insensitive).

    Raises
    ------
    UnknownOpcodeError
        When *opcode* is not part of the instruction set.
    """
    try:
        return INSTRUCTION_TABLE[opcode.upper()]
    except KeyError:
        raise UnknownOpcodeError("Wrong operation code.") from None
