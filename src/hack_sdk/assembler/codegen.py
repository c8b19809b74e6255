"""
Hack Code Generator
===================

This module turns classified source lines into Hack machine words. It
implements the classic two-pass scheme as two explicit stages over an
immutable intermediate list:

Pass 1 (Label Discovery)
------------------------
- Walk every classified line in order
- Drop blank lines and comments
- Bind each label to the current instruction counter (the address of the
  next real instruction)
- Collect A- and C-instructions into a tuple for pass 2

Pass 2 (Resolve + Encode)
-------------------------
- Resolve symbolic A-instruction operands: an existing binding, or a new
  variable allocated from address 16 upward in order of first reference
- Encode every instruction as a 16-character binary word

Both passes take the symbol table as an argument instead of sharing module
state, so independent runs never interfere with each other.

Output Format
-------------
One word per line, exactly 16 characters of 0/1:
```
0000000000000010     @2
1110110000010000     D=A
```
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from hack_sdk.cpu import MAX_ADDRESS, encode_address, encode_compute
from hack_sdk.errors import AssemblerError, AssemblerInternalError, SourceLocation
from hack_sdk.assembler.parser import (
    AddressInstruction,
    Blank,
    Comment,
    ComputeInstruction,
    Immediate,
    Instruction,
    LabelDefinition,
    SourceLine,
    Symbol,
)
from hack_sdk.assembler.symbols import SymbolTable

logger = logging.getLogger(__name__)


# =============================================================================
# Pass Results
# =============================================================================

@dataclass(frozen=True)
class FirstPassResult:
    """
    Output of pass 1.

    Attributes:
        instructions: Real instructions in program order
        instruction_count: Number of real instructions (== len(instructions))
    """
    instructions: tuple[Instruction, ...]
    instruction_count: int


@dataclass(frozen=True)
class ListingEntry:
    """One emitted word with the source it came from."""
    address: int
    word: str
    location: Optional[SourceLocation]
    source: str


# =============================================================================
# Pass 1
# =============================================================================

def first_pass(lines: Sequence[SourceLine], symbols: SymbolTable) -> FirstPassResult:
    """
    Bind labels and collect real instructions.

    Args:
        lines: Classified source lines
        symbols: Table receiving label bindings

    Returns:
        The instruction tuple and final instruction count

    Raises:
        DuplicateSymbolError: If the table is strict and a label repeats
    """
    instructions: list[Instruction] = []
    counter = 0

    for line in lines:
        if isinstance(line, (Blank, Comment)):
            continue
        elif isinstance(line, LabelDefinition):
            symbols.define_label(line.name, counter, line.location, line.text)
            logger.debug(f"Label '{line.name}' = {counter}")
        elif isinstance(line, (AddressInstruction, ComputeInstruction)):
            instructions.append(line)
            counter += 1
        else:
            raise AssemblerInternalError(f"unknown statement type {type(line).__name__}")

    return FirstPassResult(tuple(instructions), counter)


# =============================================================================
# Pass 2
# =============================================================================

def resolve_address(instruction: AddressInstruction, symbols: SymbolTable) -> int:
    """Return the numeric operand of an A-instruction, allocating variables."""
    target = instruction.target
    if isinstance(target, Immediate):
        return target.value
    elif isinstance(target, Symbol):
        value = symbols.resolve(target.name)
        if value > MAX_ADDRESS:
            raise AssemblerError(
                f"symbol '{target.name}' = {value} does not fit in an address instruction",
                location=instruction.location,
                hint="the program is larger than the 32K instruction ROM",
                source_line=instruction.text,
            )
        return value
    raise AssemblerInternalError(f"unknown address target {target!r}")


def encode_instruction(instruction: Instruction, symbols: SymbolTable) -> str:
    """
    Encode one real instruction.

    Raises:
        AssemblerInternalError: If given a statement pass 1 should have removed
    """
    if isinstance(instruction, AddressInstruction):
        return encode_address(resolve_address(instruction, symbols))
    elif isinstance(instruction, ComputeInstruction):
        return encode_compute(instruction.destination, instruction.operation, instruction.jump)
    elif isinstance(instruction, (LabelDefinition, Blank, Comment)):
        raise AssemblerInternalError(
            f"{type(instruction).__name__} reached pass 2: {instruction.text!r}"
        )
    raise AssemblerInternalError(f"unknown statement type {type(instruction).__name__}")


def second_pass(instructions: Sequence[Instruction], symbols: SymbolTable) -> list[str]:
    """
    Resolve symbols and encode every instruction.

    Args:
        instructions: Pass 1 output
        symbols: Table holding labels; receives variable allocations

    Returns:
        One 16-character word per instruction
    """
    return [encode_instruction(instruction, symbols) for instruction in instructions]


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Runs both passes and keeps the results of the last run.

    Each call to generate() starts from a fresh symbol table seeded with
    the predefined symbols; nothing carries over between runs.

    Attributes:
        strict_labels: Reject duplicate label definitions
    """

    def __init__(self, strict_labels: bool = False):
        self.strict_labels = strict_labels
        self._symbols = SymbolTable(strict=strict_labels)
        self._words: list[str] = []
        self._listing: list[ListingEntry] = []
        self._instruction_count = 0

    def generate(self, lines: Sequence[SourceLine]) -> list[str]:
        """
        Assemble classified lines into machine words.

        Args:
            lines: Output of parse_source()

        Returns:
            Machine words in program order
        """
        symbols = SymbolTable(strict=self.strict_labels)

        first = first_pass(lines, symbols)
        logger.debug(
            f"Pass 1 complete: {first.instruction_count} instructions, "
            f"{len(symbols.labels())} labels"
        )

        words = second_pass(first.instructions, symbols)
        logger.debug(f"Pass 2 complete: {len(symbols.variables())} variables allocated")

        self._symbols = symbols
        self._words = words
        self._instruction_count = first.instruction_count
        self._listing = [
            ListingEntry(address, word, instruction.location, instruction.text)
            for address, (instruction, word) in enumerate(zip(first.instructions, words))
        ]
        return list(words)

    # =========================================================================
    # Results
    # =========================================================================

    def get_code(self) -> list[str]:
        """Return the words produced by the last run."""
        return list(self._words)

    def get_symbol_table(self) -> SymbolTable:
        """Return the symbol table of the last run."""
        return self._symbols

    def get_symbols(self) -> dict[str, int]:
        """Return a dictionary of symbol names to values."""
        return self._symbols.as_dict()

    def get_instruction_count(self) -> int:
        """Return the instruction count from pass 1 of the last run."""
        return self._instruction_count

    def get_listing_entries(self) -> list[ListingEntry]:
        return list(self._listing)

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            Addresses, words and source lines, followed by the symbol table
        """
        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append("Addr   Word              Line  Source")
        lines.append("-" * 60)
        for entry in self._listing:
            line_no = entry.location.line if entry.location else 0
            lines.append(f"{entry.address:5d}  {entry.word}  {line_no:5d}  {entry.source}")
        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        for entry in sorted(self._symbols, key=lambda e: e.name):
            lines.append(f"{entry.name:20s} = {entry.value:5d}  {entry.kind.name.lower()}")
        return "\n".join(lines) + "\n"

    # =========================================================================
    # Output File Writing
    # =========================================================================

    def write_hack(self, filepath: str | Path) -> None:
        """Write the words, one per line."""
        with open(filepath, "w", newline="\n") as f:
            for word in self._words:
                f.write(f"{word}\n")

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing."""
        with open(filepath, "w") as f:
            f.write(self.get_listing())

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address (one per line, sorted by name)
        """
        with open(filepath, "w") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by hackasm\n")
            for entry in sorted(self._symbols, key=lambda e: e.name):
                f.write(f"{entry.name} {entry.value}\n")
