"""
Hack Assembly Language Parser
=============================

This module classifies Hack assembly source lines. Hack assembly has one
statement per line, so instead of a token stream the parser matches each
stripped line against five fixed line forms and returns exactly one
statement per line.

Line Forms
----------
Rules are tried in this order; the first match wins:

| Form     | Example            | Statement             |
|----------|--------------------|-----------------------|
| blank    | (empty)            | Blank                 |
| address  | @21, @LOOP         | AddressInstruction    |
| compute  | D=D+A;JGT // note  | ComputeInstruction    |
| label    | (LOOP)             | LabelDefinition       |
| comment  | // text            | Comment               |

A line matching none of them is a fatal AssemblySyntaxError. Address
operands are checked as soon as the line is classified: an all-digit operand
must fit in 15 bits, anything else must be a valid identifier.

The statement types form a closed set. Consumers dispatch on them with
isinstance chains that end in an explicit failure branch.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Union

from hack_sdk.cpu import (
    MAX_ADDRESS,
    Destination,
    JumpCondition,
    Operation,
)
from hack_sdk.errors import (
    AddressRangeError,
    AssemblySyntaxError,
    IdentifierError,
    SourceLocation,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Lexical Patterns
# =============================================================================

IDENTIFIER_PATTERN = r"[A-Za-z_.&:$][A-Za-z0-9_.&:$]*"


def _alternation(values) -> str:
    """Build a regex alternation, longest first so prefixes never shadow."""
    return "|".join(re.escape(v) for v in sorted(values, key=len, reverse=True))


_DESTINATIONS = _alternation(d.value for d in Destination if d is not Destination.NONE)
_OPERATIONS = _alternation(op.value for op in Operation)
_JUMPS = _alternation(j.value for j in JumpCondition if j is not JumpCondition.NONE)

IDENTIFIER_RE = re.compile(IDENTIFIER_PATTERN)
IMMEDIATE_RE = re.compile(r"[0-9]+")
COMPUTE_RE = re.compile(
    rf"(?:(?P<dest>{_DESTINATIONS})=)?"
    rf"(?P<op>{_OPERATIONS})"
    rf"(?:;(?P<jump>{_JUMPS}))?"
    r"\s*(?://.*)?"
)
LABEL_RE = re.compile(rf"\((?P<name>{IDENTIFIER_PATTERN})\)")


# =============================================================================
# Statement Data Classes
# =============================================================================
# location and text are excluded from comparisons so statements compare by
# meaning: ComputeInstruction(D, A, NONE) == parse_line("D=A").

@dataclass(frozen=True)
class Immediate:
    """Literal address operand (@21)."""
    value: int


@dataclass(frozen=True)
class Symbol:
    """Symbolic address operand (@LOOP), resolved in pass 2."""
    name: str


AddressTarget = Union[Immediate, Symbol]


@dataclass(frozen=True)
class Blank:
    """Empty or whitespace-only line."""
    location: Optional[SourceLocation] = field(default=None, compare=False)
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class Comment:
    """Full-line // comment."""
    location: Optional[SourceLocation] = field(default=None, compare=False)
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class AddressInstruction:
    """
    A-instruction.

    Attributes:
        target: Immediate value or symbol to load into A
    """
    target: AddressTarget
    location: Optional[SourceLocation] = field(default=None, compare=False)
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class ComputeInstruction:
    """
    C-instruction.

    Attributes:
        destination: Registers receiving the ALU result
        operation: ALU operation
        jump: Jump condition tested against the ALU result
    """
    destination: Destination
    operation: Operation
    jump: JumpCondition
    location: Optional[SourceLocation] = field(default=None, compare=False)
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class LabelDefinition:
    """
    Label pseudo-instruction, (NAME).

    Binds NAME to the address of the next real instruction.
    """
    name: str
    location: Optional[SourceLocation] = field(default=None, compare=False)
    text: str = field(default="", compare=False)


SourceLine = Union[Blank, Comment, AddressInstruction, ComputeInstruction, LabelDefinition]
Instruction = Union[AddressInstruction, ComputeInstruction]


# =============================================================================
# Classification
# =============================================================================

def parse_address_target(operand: str, location: Optional[SourceLocation] = None,
                         source_line: Optional[str] = None) -> AddressTarget:
    """
    Parse the operand of an A-instruction (the text after '@').

    Args:
        operand: Operand text
        location: Location of the operand, for error reporting
        source_line: Full source line, for error reporting

    Returns:
        Immediate for an all-digit operand, otherwise Symbol

    Raises:
        AddressRangeError: If an immediate exceeds MAX_ADDRESS
        IdentifierError: If a non-numeric operand is not a valid identifier
    """
    if IMMEDIATE_RE.fullmatch(operand):
        digits = operand.lstrip("0")
        # long operands are reported without converting them
        if len(digits) > 2 * len(str(MAX_ADDRESS)):
            shown = f"{digits[:8]}... ({len(digits)} digits)"
            raise AddressRangeError(shown, MAX_ADDRESS, location, source_line)
        value = int(digits or "0")
        if value > MAX_ADDRESS:
            raise AddressRangeError(value, MAX_ADDRESS, location, source_line)
        return Immediate(value)

    if IDENTIFIER_RE.fullmatch(operand):
        return Symbol(operand)

    raise IdentifierError(operand, location, source_line)


def parse_line(text: str, location: Optional[SourceLocation] = None) -> SourceLine:
    """
    Classify one line of source.

    Args:
        text: Line text, already stripped of surrounding whitespace
        location: Where the line came from (defaults to <input>:1)

    Returns:
        Exactly one statement variant

    Raises:
        AssemblySyntaxError: If the line matches no line form
        AddressRangeError: If an immediate address is too large
        IdentifierError: If a symbolic address is malformed
    """
    if location is None:
        location = SourceLocation("<input>", 1, 1)

    # 1. Blank
    if not text or text.isspace():
        return Blank(location, text)

    # 2. Address: '@' plus at least one character
    if text.startswith("@") and len(text) > 1:
        operand_location = SourceLocation(location.filename, location.line, location.column + 1)
        target = parse_address_target(text[1:], operand_location, text)
        return AddressInstruction(target, location, text)

    # 3. Compute
    match = COMPUTE_RE.fullmatch(text)
    if match:
        dest = match.group("dest") or ""
        jump = match.group("jump") or ""
        return ComputeInstruction(
            Destination(dest),
            Operation(match.group("op")),
            JumpCondition(jump),
            location,
            text,
        )

    # 4. Label
    match = LABEL_RE.fullmatch(text)
    if match:
        return LabelDefinition(match.group("name"), location, text)

    # 5. Comment
    if text.startswith("//"):
        return Comment(location, text)

    raise AssemblySyntaxError(
        f"could not parse line '{text}'",
        location=location,
        source_line=text,
    )


def parse_source(source: str, filename: str = "<input>") -> list[SourceLine]:
    """
    Classify every line of a source text.

    Lines are split on '\\n' and stripped before classification, so CRLF
    input and indented code are accepted. Classification stops at the
    first malformed line.

    Args:
        source: Complete assembly source
        filename: Name used in error locations

    Returns:
        One statement per source line, in order
    """
    lines = []
    for number, raw in enumerate(source.split("\n"), start=1):
        lines.append(parse_line(raw.strip(), SourceLocation(filename, number)))

    logger.debug(f"Classified {len(lines)} lines from {filename}")
    return lines
