"""
Tests for ProgramParser and the IppcodeAnalysis facade.

Scenarios cover the header check, opcode lookup, operand counts, operand
classification, instruction ordering and every statistics counter.
"""
from __future__ import annotations

import io
import textwrap

import pytest

from ippcode_parser.config import StatsConfig
from ippcode_parser.errors import (
    HeaderError,
    LexicalError,
    OperandCountError,
    UnknownOpcodeError,
)
from ippcode_parser.pipeline.analysis import IppcodeAnalysis
from ippcode_parser.pipeline.program_parser import ProgramParser


def src(text: str) -> str:
    return textwrap.dedent(text).lstrip("\n")


@pytest.fixture
def parser():
    return ProgramParser()


# ─────────────────────────────────────────────────────────────────────────────
# Header
# ─────────────────────────────────────────────────────────────────────────────


class TestHeader:
    @pytest.mark.parametrize("header", [".IPPcode19", ".ippcode19", ".IPPCODE19", "  .IPPcode19  "])
    def test_header_case_insensitive(self, parser, header):
        result = parser.parse_text(f"{header}\nBREAK\n")
        assert result.statistics.loc == 1

    def test_header_only(self, parser):
        result = parser.parse_text(".IPPcode19\n")
        assert len(result.program) == 0
        assert result.statistics.loc == 0

    def test_wrong_version(self, parser):
        with pytest.raises(HeaderError) as info:
            parser.parse_text(".ippcode18\nMOVE GF@x int@5\n")
        assert info.value.exit_code == 21
        assert info.value.line == 1

    def test_empty_input(self, parser):
        with pytest.raises(HeaderError):
            parser.parse_text("")

    def test_only_comments(self, parser):
        with pytest.raises(HeaderError):
            parser.parse_text("# nothing here\n\n")

    def test_instruction_before_header(self, parser):
        with pytest.raises(HeaderError):
            parser.parse_text("DEFVAR GF@x\n.IPPcode19\n")

    def test_header_with_trailing_text(self, parser):
        with pytest.raises(HeaderError):
            parser.parse_text(".IPPcode19 extra\n")

    def test_comments_and_blanks_before_header(self, parser):
        result = parser.parse_text("# intro\n\n.IPPcode19\nBREAK\n")
        assert result.statistics.loc == 1
        assert result.statistics.comments == 1

    def test_header_with_comment(self, parser):
        result = parser.parse_text(".IPPcode19 # header\nBREAK\n")
        assert result.statistics.comments == 1
        assert result.program.instructions[0].order == 1


# ─────────────────────────────────────────────────────────────────────────────
# Instructions
# ─────────────────────────────────────────────────────────────────────────────


class TestInstructions:
    def test_move_scenario(self, parser):
        result = parser.parse_text(".ippcode19\nMOVE GF@x int@5\n")
        (instr,) = result.program.instructions
        assert instr.order == 1
        assert instr.opcode == "MOVE"
        assert [(o.position, o.arg_type, o.value) for o in instr.operands] == [
            (1, "var", "GF@x"),
            (2, "int", "5"),
        ]
        assert result.statistics.loc == 1
        assert result.statistics.comments == 0

    def test_opcode_upper_cased(self, parser):
        result = parser.parse_text(".IPPcode19\ndefvar LF@a\nwRiTe LF@a\n")
        assert [i.opcode for i in result.program.instructions] == ["DEFVAR", "WRITE"]

    def test_orders_are_consecutive(self, parser):
        text = src(
            """
            .IPPcode19
            # comment
            CREATEFRAME

            PUSHFRAME   # frame
            DEFVAR LF@i
                # indented comment
            POPFRAME
            """
        )
        result = parser.parse_text(text)
        orders = [i.order for i in result.program.instructions]
        assert orders == list(range(1, result.statistics.loc + 1))
        assert result.statistics.loc == 4

    def test_operand_kinds_recorded(self, parser):
        result = parser.parse_text(".IPPcode19\nJUMPIFEQ end GF@a nil@nil\n")
        kinds = [o.kind for o in result.program.instructions[0].operands]
        types = [o.arg_type for o in result.program.instructions[0].operands]
        assert kinds == ["label", "symb", "symb"]
        assert types == ["label", "var", "nil"]

    def test_read_type_operand(self, parser):
        result = parser.parse_text(".IPPcode19\nREAD GF@n int\n")
        arg2 = result.program.instructions[0].operands[1]
        assert (arg2.arg_type, arg2.value) == ("type", "int")

    def test_source_line_recorded(self, parser):
        result = parser.parse_text(".IPPcode19\n\n\nBREAK\n")
        assert result.program.instructions[0].line == 4

    @pytest.mark.parametrize("char", ["\u00a0", "\u2028", "\x1c", "\x85"])
    def test_unicode_space_inside_string_literal(self, parser, char):
        result = parser.parse_text(f".IPPcode19\nWRITE string@a{char}b\n")
        (instr,) = result.program.instructions
        assert instr.operands[0].value == f"a{char}b"
        assert result.statistics.loc == 1

    def test_crlf_line_endings(self, parser):
        result = parser.parse_text(".IPPcode19\r\nDEFVAR GF@x\r\nBREAK\r\n")
        assert [i.opcode for i in result.program.instructions] == ["DEFVAR", "BREAK"]
        assert result.program.instructions[0].operands[0].value == "GF@x"


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────


class TestErrors:
    def test_unknown_opcode(self, parser):
        with pytest.raises(UnknownOpcodeError) as info:
            parser.parse_text(".IPPcode19\nBREAK\nNOPE GF@x\n")
        assert info.value.exit_code == 22
        assert info.value.line == 3
        assert str(info.value) == "line 3: Wrong operation code."

    def test_too_many_arguments(self, parser):
        with pytest.raises(OperandCountError, match="Too many arguments passed to function DEFVAR") as info:
            parser.parse_text(".IPPcode19\nDEFVAR GF@x extra\n")
        assert info.value.exit_code == 23

    def test_too_many_for_zero_operand_opcode(self, parser):
        with pytest.raises(OperandCountError):
            parser.parse_text(".IPPcode19\nreturn now\n")

    def test_missing_argument(self, parser):
        with pytest.raises(OperandCountError, match="Missing argument 3 of function ADD") as info:
            parser.parse_text(".IPPcode19\nADD GF@x int@1\n")
        assert info.value.exit_code == 23

    def test_lexical_error_has_line(self, parser):
        with pytest.raises(LexicalError) as info:
            parser.parse_text(".IPPcode19\nBREAK\nDEFVAR XF@x\n")
        assert info.value.line == 3
        assert info.value.exit_code == 23

    def test_error_after_valid_lines_aborts(self, parser):
        with pytest.raises(LexicalError):
            parser.parse_text(".IPPcode19\nDEFVAR GF@a\nWRITE int@abc\nDEFVAR GF@b\n")


# ─────────────────────────────────────────────────────────────────────────────
# Statistics
# ─────────────────────────────────────────────────────────────────────────────


class TestStatistics:
    def test_label_and_jump(self, parser):
        result = parser.parse_text(".ippcode19\nLABEL loop\nJUMP loop\n")
        stats = result.statistics
        assert (stats.labels, stats.jumps, stats.loc) == (1, 1, 2)

    def test_duplicate_labels_counted_once(self, parser):
        result = parser.parse_text(".IPPcode19\nLABEL foo\nLABEL foo\nLABEL bar\n")
        assert result.statistics.labels == 2

    def test_call_not_counted_as_jump(self, parser):
        text = src(
            """
            .IPPcode19
            JUMP a
            CALL b
            JUMPIFEQ c int@1 int@1
            JUMPIFNEQ d int@1 int@2
            """
        )
        assert parser.parse_text(text).statistics.jumps == 3

    def test_jump_targets_not_counted_as_labels(self, parser):
        result = parser.parse_text(".IPPcode19\nJUMP nowhere\n")
        assert result.statistics.labels == 0

    def test_comment_lines(self, parser):
        text = src(
            """
            .IPPcode19  # header comment
            # full line
               # indented
            BREAK # trailing

            BREAK
            """
        )
        assert parser.parse_text(text).statistics.comments == 4

    def test_to_dict(self, parser):
        result = parser.parse_text(".IPPcode19\nLABEL x\nJUMP x # go\n")
        assert result.statistics.to_dict() == {
            "loc": 2, "comments": 1, "labels": 1, "jumps": 1,
        }

    def test_parsing_is_repeatable(self):
        text = ".IPPcode19\nDEFVAR GF@a\nLABEL l\nJUMPIFEQ l GF@a string@x\\032y\n"
        first = ProgramParser().parse_text(text)
        second = ProgramParser().parse_text(text)
        assert first.to_xml() == second.to_xml()
        assert first.statistics.to_dict() == second.statistics.to_dict()


# ─────────────────────────────────────────────────────────────────────────────
# IppcodeAnalysis
# ─────────────────────────────────────────────────────────────────────────────


class TestIppcodeAnalysis:
    PROGRAM = ".IPPcode19\nDEFVAR GF@a\nLABEL top\nJUMP top\n"

    def test_analyze_text_without_stats(self):
        result = IppcodeAnalysis().analyze_text(self.PROGRAM)
        assert result.statistics.loc == 3

    def test_analyze_stream(self):
        result = IppcodeAnalysis().analyze_stream(io.StringIO(self.PROGRAM))
        assert [i.opcode for i in result.program.instructions] == ["DEFVAR", "LABEL", "JUMP"]

    def test_analyze_file(self, tmp_path):
        source = tmp_path / "prog.src"
        source.write_text(self.PROGRAM, encoding="utf-8")
        result = IppcodeAnalysis().analyze_file(str(source))
        assert result.statistics.jumps == 1

    def test_stats_written(self, tmp_path):
        out = tmp_path / "stats.txt"
        config = StatsConfig(path=str(out), counters=["loc", "jumps"])
        IppcodeAnalysis(stats=config).analyze_text(self.PROGRAM)
        assert out.read_text() == "3\n1\n"

    def test_no_stats_file_on_source_error(self, tmp_path):
        out = tmp_path / "stats.txt"
        config = StatsConfig(path=str(out), counters=["loc"])
        with pytest.raises(UnknownOpcodeError):
            IppcodeAnalysis(stats=config).analyze_text(".IPPcode19\nFOO\n")
        assert not out.exists()

    def test_invalid_utf8_stream(self):
        stream = io.TextIOWrapper(io.BytesIO(b".IPPcode19\nWRITE string@\xff\n"), encoding="utf-8")
        with pytest.raises(LexicalError) as info:
            IppcodeAnalysis().analyze_stream(stream)
        assert info.value.exit_code == 23
        assert isinstance(info.value.__cause__, UnicodeDecodeError)

    def test_invalid_utf8_file(self, tmp_path):
        source = tmp_path / "bad.src"
        source.write_bytes(b".IPPcode19\nWRITE string@\xc3\x28\n")
        with pytest.raises(LexicalError, match="not valid UTF-8"):
            IppcodeAnalysis().analyze_file(str(source))
