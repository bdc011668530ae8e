"""
IPPcode19 Parser
================

Validates source code in the IPPcode19 instruction language and produces its
XML representation together with optional program statistics.

Quick start
-----------
>>> from ippcode_parser import IppcodeAnalysis
>>> result = IppcodeAnalysis().analyze_text(".IPPcode19\\nDEFVAR GF@x\\n")
>>> result.statistics.loc
1
>>> print(result.to_xml())  # doctest: +SKIP
"""

from .errors import IppcodeError
from .models import Instruction, Operand, Program, ProgramStatistics
from .pipeline.analysis import IppcodeAnalysis
from .pipeline.program_parser import ParseResult, ProgramParser

__version__ = "0.1.0"
__all__ = [
    "Instruction",
    "IppcodeAnalysis",
    "IppcodeError",
    "Operand",
    "ParseResult",
    "Program",
    "ProgramParser",
    "ProgramStatistics",
]
