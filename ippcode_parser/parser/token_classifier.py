"""
TokenClassifier
===============

Validates the lexical shape of a single operand token.

Grammar classes:

+-----------+-------------------------------------------------------------+
| Class     | Accepted shape                                              |
+===========+=============================================================+
| ``label`` | ``[A-Za-z0-9_\\-$&%*!?]+`` not starting with a digit         |
+-----------+-------------------------------------------------------------+
| ``var``   | ``GF|LF|TF`` ``@`` name, name follows the label rules       |
+-----------+-------------------------------------------------------------+
| ``type``  | ``int``, ``bool`` or ``string``                             |
+-----------+-------------------------------------------------------------+
| ``symb``  | a ``var``, or ``nil@nil``, ``bool@true|false``,             |
|           | ``int@[+-]digits``, ``string@text``                         |
+-----------+-------------------------------------------------------------+

String constants may contain a backslash only if at least one ``\\DDD``
escape sequence appears somewhere in the text.  Individual backslashes are
not checked one by one.
"""
from __future__ import annotations

import re
from typing import Callable, Dict

from ..errors import LexicalError
from ..models import (
    BOOL,
    FRAMES,
    INT,
    LABEL,
    NIL,
    STRING,
    SYMB,
    TYPE,
    TYPE_NAMES,
    VAR,
    ClassifiedValue,
)

_IDENTIFIER_RE = re.compile(r"[A-Za-z0-9_\-$&%*!?]+")
_LEADING_DIGIT_RE = re.compile(r"[0-9]")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_ESCAPE_RE = re.compile(r"\\[0-9]{3}")


class TokenClassifier:
    """
    Stateless validator mapping ``(grammar class, token)`` to a
    :class:`~ippcode_parser.models.ClassifiedValue`.

    Every method raises :class:`~ippcode_parser.errors.LexicalError` on a
    malformed token.
    """

    def __init__(self) -> None:
        self._dispatch: Dict[str, Callable[[str], ClassifiedValue]] = {
            VAR: self.check_var,
            SYMB: self.check_symb,
            LABEL: self.check_label,
            TYPE: self.check_type,
        }

    def classify(self, kind: str, token: str) -> ClassifiedValue:
        """
        Validate *token* against the grammar class *kind*.

        Parameters
        ----------
        kind:
            One of ``var``, ``symb``, ``label``, ``type``.
        token:
            The raw operand text as it appeared in the source line.

        Returns
        -------
        ClassifiedValue
            The resolved argument type and the value written to the output.
        """
        try:
            check = self._dispatch[kind]
        except KeyError:
            raise ValueError(f"Unknown grammar class: {kind!r}") from None
        return check(token)

    # ------------------------------------------------------------------
    # Grammar classes
    # ------------------------------------------------------------------

    def check_label(self, token: str) -> ClassifiedValue:
        self._check_identifier(token, "Label")
        return ClassifiedValue(LABEL, token)

    def check_var(self, token: str) -> ClassifiedValue:
        frame, _, name = token.partition("@")
        if frame not in FRAMES:
            raise LexicalError("Wrong memory frame definition.")
        self._check_identifier(name, "Variable")
        return ClassifiedValue(VAR, token)

    def check_type(self, token: str) -> ClassifiedValue:
        if token not in TYPE_NAMES:
            raise LexicalError("Wrong type definition.")
        return ClassifiedValue(TYPE, token)

    def check_symb(self, token: str) -> ClassifiedValue:
        tag, _, value = token.partition("@")

        if tag in FRAMES:
            return self.check_var(token)

        if tag == NIL:
            if value != "nil":
                raise LexicalError('Nil variable can only contain "nil" value.')
        elif tag == BOOL:
            if value not in ("true", "false"):
                raise LexicalError('Boolean value has to be "true" or "false".')
        elif tag == INT:
            if not _INT_RE.fullmatch(value):
                raise LexicalError("Wrong integer variable format.")
        elif tag == STRING:
            if "\\" in value and not _ESCAPE_RE.search(value):
                raise LexicalError("Wrong definition of escape sequence.")
        else:
            raise LexicalError("Unknown symbol type.")

        return ClassifiedValue(tag, value)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_identifier(name: str, what: str) -> None:
        """Label and variable names share the same two checks."""
        if _LEADING_DIGIT_RE.match(name):
            raise LexicalError(f"{what} name cannot start with a number.")
        if not _IDENTIFIER_RE.fullmatch(name):
            raise LexicalError(f"Incorrect character in {what.lower()} name.")
