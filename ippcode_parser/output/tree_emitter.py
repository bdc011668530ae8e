"""
XmlTreeEmitter
==============

Builds the XML representation of a parsed program::

    <?xml version='1.0' encoding='UTF-8'?>
    <program language="IPPcode19">
        <instruction order="1" opcode="MOVE">
            <arg1 type="var">GF@x</arg1>
            <arg2 type="int">5</arg2>
        </instruction>
    </program>

The emitter keeps a cursor on the instruction currently being written.
Nothing is serialised until :meth:`XmlTreeEmitter.to_string` is called, which
the driver only does after the whole input has been validated.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Optional

from ..models import LANGUAGE

logger = logging.getLogger(__name__)

INDENT = "    "


class XmlTreeEmitter:
    """
    Incrementally builds the ``<program>`` element tree.

    Parameters
    ----------
    language:
        Value of the root element's ``language`` attribute.
    """

    def __init__(self, language: str = LANGUAGE) -> None:
        self.root = ET.Element("program", {"language": language})
        self._current: Optional[ET.Element] = None

    # ------------------------------------------------------------------
    # Cursor operations
    # ------------------------------------------------------------------

    def open_instruction(self, opcode: str, order: int) -> None:
        if self._current is not None:
            raise RuntimeError("Previous instruction has not been closed")
        self._current = ET.SubElement(
            self.root, "instruction", {"order": str(order), "opcode": opcode}
        )

    def add_operand(self, position: int, arg_type: str, value: str) -> None:
        if self._current is None:
            raise RuntimeError("No open instruction to add an operand to")
        arg = ET.SubElement(self._current, f"arg{position}", {"type": arg_type})
        arg.text = value

    def close_instruction(self) -> None:
        if self._current is None:
            raise RuntimeError("No open instruction to close")
        self._current = None

    def to_string(self) -> str:
        """
        Serialise the finished tree.

        Raises
        ------
        RuntimeError
            If an instruction is still open.
        """
        if self._current is not None:
            raise RuntimeError("Cannot serialise while an instruction is open")

        ET.indent(self.root, space=INDENT)
        data = ET.tostring(
            self.root,
            encoding="UTF-8",
            xml_declaration=True,
            short_empty_elements=False,
        )
        logger.debug("Serialised %d instructions", len(self.root))
        return data.decode("utf-8") + "\n"
