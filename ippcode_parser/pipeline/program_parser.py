"""
ProgramParser
=============

Single forward pass over an IPPcode19 source:

1. Skip blank and comment-only lines, then require the ``.IPPcode19`` header
   (case-insensitive) on the first line that has code.
2. For every following line with code:

   a. look the opcode up in the instruction table,
   b. check the operand count against the table,
   c. classify every operand with :class:`TokenClassifier`,
   d. append the instruction and feed it to the tree emitter,
   e. update the statistics (``LABEL`` declares, ``JUMP``/``JUMPIF*`` count).

Any error aborts the pass immediately.  The caller never sees a partially
built program.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..errors import HeaderError, OperandCountError, SourceError
from ..models import HEADER, Instruction, Operand, Program, ProgramStatistics
from ..output.tree_emitter import XmlTreeEmitter
from ..parser.instruction_table import lookup
from ..parser.token_classifier import TokenClassifier
from ..passes.line_tokenizer import LineTokenizer, TokenLine

logger = logging.getLogger(__name__)


@dataclass
class ParserState:
    """Accumulators owned by one parse pass."""

    program: Program = field(default_factory=Program)
    statistics: ProgramStatistics = field(default_factory=ProgramStatistics)
    emitter: XmlTreeEmitter = field(default_factory=XmlTreeEmitter)
    next_order: int = 1
    header_seen: bool = False


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a successful pass."""

    program: Program
    statistics: ProgramStatistics
    emitter: XmlTreeEmitter

    def to_xml(self) -> str:
        return self.emitter.to_string()


class ProgramParser:
    """
    Validates an IPPcode19 program and builds its tree.

    Parameters
    ----------
    classifier:
        Operand validator; a fresh :class:`TokenClassifier` by default.
    """

    def __init__(self, classifier: Optional[TokenClassifier] = None) -> None:
        self._classifier = classifier or TokenClassifier()
        self._tokenizer = LineTokenizer()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def parse(self, lines: Iterable[str]) -> ParseResult:
        """
        Parse source *lines* (without newlines).

        Raises
        ------
        SourceError
            On the first header, opcode, operand-count or lexical error.
        """
        state = ParserState()

        for token_line in self._tokenizer.run(list(lines)):
            if token_line.has_comment:
                state.statistics.comments += 1
            if token_line.is_blank:
                continue

            if not state.header_seen:
                self._check_header(token_line)
                state.header_seen = True
                continue

            try:
                self._parse_instruction(token_line, state)
            except SourceError as exc:
                exc.at_line(token_line.line)
                raise

        if not state.header_seen:
            raise HeaderError("Wrong file header.")

        stats = state.statistics
        logger.info(
            "Parsed %d instructions (comments=%d, labels=%d, jumps=%d)",
            stats.loc, stats.comments, stats.labels, stats.jumps,
        )
        return ParseResult(state.program, stats, state.emitter)

    def parse_text(self, source: str) -> ParseResult:
        """Parse *source*, breaking lines on ``\\n`` only."""
        return self.parse(source.split("\n"))

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    @staticmethod
    def _check_header(token_line: TokenLine) -> None:
        if token_line.content.lower() != HEADER:
            raise HeaderError("Wrong file header.", token_line.line)
        logger.debug("Header found on line %d", token_line.line)

    def _parse_instruction(self, token_line: TokenLine, state: ParserState) -> None:
        spec = lookup(token_line.opcode)
        operands = token_line.operands

        if len(operands) > spec.arity:
            raise OperandCountError(
                f"Too many arguments passed to function {spec.opcode}."
            )
        if len(operands) < spec.arity:
            raise OperandCountError(
                f"Missing argument {len(operands) + 1} of function {spec.opcode}."
            )

        parsed: List[Operand] = []
        for position, (kind, token) in enumerate(zip(spec.operands, operands), start=1):
            classified = self._classifier.classify(kind, token)
            parsed.append(Operand(position, kind, classified.arg_type, classified.value))

        instruction = Instruction(
            order=state.next_order,
            opcode=spec.opcode,
            operands=tuple(parsed),
            line=token_line.line,
        )
        self._emit(instruction, state.emitter)
        state.program.append(instruction)
        state.next_order += 1

        stats = state.statistics
        stats.loc += 1
        if spec.declares_label:
            stats.label_names.add(parsed[0].value)
        if spec.counts_as_jump:
            stats.jumps += 1

        logger.debug("%r", instruction)

    @staticmethod
    def _emit(instruction: Instruction, emitter: XmlTreeEmitter) -> None:
        emitter.open_instruction(instruction.opcode, instruction.order)
        for operand in instruction.operands:
            emitter.add_operand(operand.position, operand.arg_type, operand.value)
        emitter.close_instruction()
