"""
Hack Assembler - Main Interface
===============================

This module provides the main Assembler class, the primary interface for
assembling Hack source code. It coordinates the parser and the code
generator to produce .hack machine-code text.

Example Usage
-------------
>>> from hack_sdk.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
... @2
... D=A
... @3
... D=D+A
... @0
... M=D
... ''')
>>> asm.get_code()[1]
'1110110000010000'
>>> asm.write_hack("Add.hack")

Command-Line Usage
------------------
    $ hackasm Add.asm -o Add.hack -s Add.sym -l Add.lst

Options:
    -o, --output FILE      Output .hack file (default: input.hack)
    -s, --symbols FILE     Generate symbol file
    -l, --listing FILE     Generate listing file
    --strict-labels        Reject duplicate label definitions
    -v, --verbose          Verbose output
"""

from pathlib import Path
from typing import Optional

from hack_sdk.assembler.parser import parse_source
from hack_sdk.assembler.codegen import CodeGenerator
from hack_sdk.assembler.symbols import SymbolTable


class Assembler:
    """
    Main Hack assembler class.

    Every assemble call is an independent run: the symbol table is rebuilt
    from the predefined symbols and the previous output is replaced.

    Attributes:
        verbose: If True, print progress messages
        strict_labels: If True, a repeated label definition is an error
                       instead of replacing the earlier binding
    """

    def __init__(self, verbose: bool = False, strict_labels: bool = False):
        """
        Initialize the assembler.

        Args:
            verbose: Enable verbose output
            strict_labels: Raise DuplicateSymbolError on label redefinition
        """
        self._verbose = verbose
        self._source_file: Optional[Path] = None
        self._codegen = CodeGenerator(strict_labels=strict_labels)

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code from a string.

        The assembly pipeline is:
        1. Classify every line (parser)
        2. Pass 1: bind labels, collect instructions (code generator)
        3. Pass 2: resolve symbols, encode words (code generator)

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            Machine words, one 16-character string per instruction

        Raises:
            AssemblerError: If assembly fails
        """
        if self._verbose:
            print(f"Parsing {filename}...")

        lines = parse_source(source, filename)

        if self._verbose:
            print(f"Parsed {len(lines)} lines")

        words = self._codegen.generate(lines)

        if self._verbose:
            print(f"Generated {len(words)} instructions")

        return words

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            Machine words

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._source_file = filepath

        if self._verbose:
            print(f"Assembling {filepath}...")

        source = filepath.read_text()
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_code(self) -> list[str]:
        """Get the machine words of the last run."""
        return self._codegen.get_code()

    def get_text(self) -> str:
        """Get the .hack file contents of the last run."""
        return "".join(f"{word}\n" for word in self._codegen.get_code())

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table.

        Returns:
            Dictionary mapping symbol names to addresses
        """
        return self._codegen.get_symbols()

    def get_symbol_table(self) -> SymbolTable:
        """Get the full symbol table, including symbol kinds."""
        return self._codegen.get_symbol_table()

    def get_listing(self) -> str:
        """Get the assembly listing as a string."""
        return self._codegen.get_listing()

    def get_instruction_count(self) -> int:
        """Return the number of real instructions in the last program."""
        return self._codegen.get_instruction_count()

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write machine words to a .hack file.

        Args:
            filepath: Output file path
        """
        self._codegen.write_hack(filepath)

        if self._verbose:
            print(f"Wrote {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """
        Write assembly listing file.

        Args:
            filepath: Output file path
        """
        self._codegen.write_listing(filepath)

        if self._verbose:
            print(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Args:
            filepath: Output file path
        """
        self._codegen.write_symbols(filepath)

        if self._verbose:
            print(f"Wrote symbols to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>", strict_labels: bool = False) -> list[str]:
    """
    Convenience function to assemble source code.

    Args:
        source: Assembly source code
        filename: Virtual filename for errors
        strict_labels: Reject duplicate label definitions

    Returns:
        Machine words

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(strict_labels=strict_labels)
    return asm.assemble_string(source, filename)


def assemble_file(filepath: str | Path, strict_labels: bool = False) -> list[str]:
    """
    Convenience function to assemble a file.

    Args:
        filepath: Path to source file
        strict_labels: Reject duplicate label definitions

    Returns:
        Machine words

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(strict_labels=strict_labels)
    return asm.assemble_file(filepath)
