"""
intensity_segments/script.py
════════════════════════════

A small line-oriented language for driving an
:class:`~intensity_segments.segments.IntensityMap` from text, used by the CLI
and the demo walkthroughs::

    # sample sequence 1
    add 10 30 1
    add 20 40 1
    show                 # [[10,1],[20,2],[30,1],[40,0]]
    set 15 35 5; show
    query 12 36

Commands
--------
``add`` / ``accumulate``   FROM TO AMOUNT
``set`` / ``assign``       FROM TO AMOUNT
``query`` / ``value_at``   POSITION [POSITION ...]
``show``                   print the serialized pairs
``reset``                  back to the zero function

Statements are separated by newlines or ``;``.  ``#`` starts a comment.

Depends on:
    - parsimonious (PEG parser)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import Node, NodeVisitor

from .errors import IntensityErrorCodes, ScriptError, SourceSpan
from .segments import IntensityMap

logger = logging.getLogger(__name__)

Number = Union[int, float]


# ═══════════════════════════════════════════════════════════════════
#  PART 1 — GRAMMAR (Parsimonious PEG)
# ═══════════════════════════════════════════════════════════════════

SCRIPT_GRAMMAR_SOURCE = r'''
    script      = (line separator)* line
    line        = ws statement? ws comment?
    statement   = command (ws1 number)*

    command     = ~r"[A-Za-z_][A-Za-z0-9_]*"
    number      = ~r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?"
    comment     = ~r"#[^\r\n]*"
    separator   = ~r"\r?\n" / ";"
    ws          = ~r"[ \t]*"
    ws1         = ~r"[ \t]+"
'''

SCRIPT_GRAMMAR = Grammar(SCRIPT_GRAMMAR_SOURCE)

_INT_RE = re.compile(r"[+-]?\d+\Z")


# ═══════════════════════════════════════════════════════════════════
#  PART 2 — COMMAND MODEL
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OperationSignature:
    """Canonical name and accepted argument counts of a command."""
    name: str
    min_args: int
    max_args: Optional[int]


OPERATIONS: Dict[str, OperationSignature] = {
    "accumulate": OperationSignature("accumulate", 3, 3),
    "assign": OperationSignature("assign", 3, 3),
    "value_at": OperationSignature("value_at", 1, None),
    "show": OperationSignature("show", 0, 0),
    "reset": OperationSignature("reset", 0, 0),
}

ALIASES: Dict[str, str] = {
    "add": "accumulate",
    "set": "assign",
    "query": "value_at",
}


@dataclass(frozen=True)
class Command:
    """One parsed statement."""
    op: str
    args: Tuple[Number, ...] = ()
    span: SourceSpan = field(default_factory=SourceSpan)

    @property
    def line(self) -> int:
        return self.span.line

    def __str__(self) -> str:
        return " ".join([self.op, *(format_number(a) for a in self.args)])


def format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_number(text: str) -> Number:
    """Parse an integer or decimal literal, keeping integers exact."""
    if _INT_RE.match(text):
        return int(text)
    return float(text)


# ═══════════════════════════════════════════════════════════════════
#  PART 3 — VISITOR (Parse Tree → Commands)
# ═══════════════════════════════════════════════════════════════════

class ScriptBuilder(NodeVisitor):
    """Transforms the Parsimonious parse tree into a list of :class:`Command`."""

    grammar = SCRIPT_GRAMMAR
    unwrapped_exceptions = (ScriptError,)

    def __init__(self, text: str, source: str = "<script>") -> None:
        self._text = text
        self._source = source

    def generic_visit(self, node: Node, visited_children: list) -> list:
        """Flatten children, dropping whitespace and punctuation."""
        flat: list = []
        for child in visited_children:
            if isinstance(child, list):
                flat.extend(child)
            elif child is not None:
                flat.append(child)
        return flat

    def visit_command(self, node: Node, visited_children: list) -> str:
        return node.text

    def visit_number(self, node: Node, visited_children: list) -> Number:
        return parse_number(node.text)

    def visit_statement(self, node: Node, visited_children: list) -> Command:
        name, *args = self.generic_visit(node, visited_children)
        span = SourceSpan.from_offset(self._text, node.start, self._source)

        op = ALIASES.get(name.lower(), name.lower())
        signature = OPERATIONS.get(op)
        if signature is None:
            raise ScriptError(
                f"unknown command {name!r}",
                code=IntensityErrorCodes.UNKNOWN_COMMAND,
                span=span,
                hint="expected one of: " + ", ".join(sorted([*OPERATIONS, *ALIASES])),
            )
        too_many = signature.max_args is not None and len(args) > signature.max_args
        if len(args) < signature.min_args or too_many:
            raise ScriptError(
                f"{name} takes {_arity_text(signature)}, got {len(args)}",
                code=IntensityErrorCodes.WRONG_ARITY,
                span=span,
            )
        return Command(op=signature.name, args=tuple(args), span=span)


def _arity_text(signature: OperationSignature) -> str:
    if signature.max_args is None:
        return f"at least {signature.min_args} argument(s)"
    if signature.min_args == signature.max_args:
        return f"{signature.min_args} argument(s)"
    return f"{signature.min_args}-{signature.max_args} arguments"


def parse_script(text: str, source: str = "<script>") -> List[Command]:
    """Parse *text* into commands.

    Raises
    ------
    ScriptError
        On a syntax error, an unknown command or a wrong argument count.
    """
    try:
        tree = SCRIPT_GRAMMAR.parse(text)
    except ParseError as exc:
        span = SourceSpan.from_offset(text, exc.pos, source)
        raise ScriptError(
            "cannot parse statement",
            span=span,
            hint="statements look like 'add FROM TO AMOUNT' or 'query POSITION'",
        ) from exc
    commands = ScriptBuilder(text, source).visit(tree)
    logger.debug("Parsed %d command(s) from %s", len(commands), source)
    return commands


# ═══════════════════════════════════════════════════════════════════
#  PART 4 — EXECUTION
# ═══════════════════════════════════════════════════════════════════

class ScriptRunner:
    """Executes commands against a map and collects printable output.

    ``show`` emits the compact JSON pairs; ``query`` emits one
    ``POSITION: VALUE`` line per position.  Validation errors from the map
    propagate unchanged; commands already executed stay applied.
    """

    def __init__(self, imap: Optional[IntensityMap] = None) -> None:
        self.map = imap if imap is not None else IntensityMap()
        self._handlers: Dict[str, Callable[[Command], List[str]]] = {
            "accumulate": self._do_accumulate,
            "assign": self._do_assign,
            "value_at": self._do_value_at,
            "show": self._do_show,
            "reset": self._do_reset,
        }

    def iter_run(self, commands: Iterable[Command]) -> Iterator[str]:
        """Execute *commands* one by one, yielding output as it is produced."""
        for command in commands:
            logger.debug("%s: %s", command.span, command)
            yield from self._handlers[command.op](command)

    def run(self, commands: Iterable[Command]) -> List[str]:
        return list(self.iter_run(commands))

    def run_text(self, text: str, source: str = "<script>") -> List[str]:
        return self.run(parse_script(text, source))

    def _do_accumulate(self, command: Command) -> List[str]:
        self.map.accumulate(*command.args)
        return []

    def _do_assign(self, command: Command) -> List[str]:
        self.map.assign(*command.args)
        return []

    def _do_value_at(self, command: Command) -> List[str]:
        return [
            f"{format_number(position)}: {format_number(self.map.value_at(position))}"
            for position in command.args
        ]

    def _do_show(self, command: Command) -> List[str]:
        return [self.map.to_json()]

    def _do_reset(self, command: Command) -> List[str]:
        self.map.clear()
        return []
