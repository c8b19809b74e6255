"""
Hack SDK Error Hierarchy
========================

This module defines the exception hierarchy for the Hack SDK. All
user-facing exceptions inherit from HackError, allowing callers to catch
every SDK error with a single except clause.

Exception Hierarchy
-------------------
HackError (base)
└── AssemblerError (assembler-related)
    ├── AssemblySyntaxError - line matches no grammar rule
    ├── AddressRangeError - immediate address does not fit in 15 bits
    ├── IdentifierError - malformed symbolic address operand
    └── DuplicateSymbolError - label defined twice (strict mode only)

AssemblerInternalError is deliberately NOT a HackError. It signals a bug in
the assembler itself (a statement that can never reach pass 2 did), so the
command-line tools report it as an internal error rather than a user error.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all Hack SDK errors.

        try:
            assembler.assemble_file("Prog.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Max.asm:7:1: error: could not parse line 'X=Y+Z'
                X=Y+Z
                ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    A source line matches none of the five line forms.

    Examples:
        - Unknown mnemonic (X=Y+Z)
        - Malformed separators (D=;JMP)
        - Text after a label definition ((LOOP) junk)
    """
    pass


class AddressRangeError(AssemblerError):
    """
    Immediate address operand does not fit in the 15-bit address field.

    Example:
        @32768  ; Error: largest legal immediate is 32767
    """

    def __init__(
        self,
        value: int | str,
        limit: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.value = value
        self.limit = limit
        super().__init__(
            f"address {value} out of range (0 to {limit})",
            location=location,
            hint="address instructions load a 15-bit value",
            source_line=source_line,
        )


class IdentifierError(AssemblerError):
    """
    Symbolic address operand is not a valid identifier.

    Identifiers start with a letter or one of _ . & : $ and continue with
    letters, digits or those same punctuation characters.

    Example:
        @1abc  ; Error: identifiers cannot start with a digit
    """

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        super().__init__(
            f"malformed address operand '{identifier}'",
            location=location,
            hint="expected a decimal number or an identifier",
            source_line=source_line,
        )


class DuplicateSymbolError(AssemblerError):
    """
    Label defined more than once.

    Only raised when the assembler runs with strict label checking; by
    default a later label definition silently replaces an earlier one.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{symbol}' was first defined at {original_location}"
        else:
            hint = f"'{symbol}' is a predefined symbol"

        super().__init__(
            f"duplicate symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Internal Errors
# =============================================================================

class AssemblerInternalError(RuntimeError):
    """
    The assembler violated one of its own invariants.

    Raised when pass 2 receives a statement that pass 1 is required to have
    removed (blank lines, comments, label definitions). This is never the
    user's fault.
    """
    pass
