"""
Hack SDK - Assembler Toolchain for the Hack Computer
====================================================

This package provides an assembler and disassembler for the Hack computer,
the 16-bit machine built in "The Elements of Computing Systems"
(nand2tetris). Programs are written in Hack assembly (.asm) and assembled
into .hack files: text files with one 16-character binary word per line.

Main Components
---------------
- **assembler**: Hack assembler (hackasm)
    Converts assembly source files (.asm) to machine code text (.hack)

- **disassembler**: Hack disassembler (hackdis)
    Converts .hack files back to assembly

- **cpu**: Instruction set definitions
    Field enumerations, code tables, predefined symbols

Quick Start
-----------
Assemble a program:
    >>> from hack_sdk.assembler import Assembler
    >>> asm = Assembler()
    >>> words = asm.assemble_file("Max.asm")
    >>> asm.write_hack("Max.hack")

Or use the command-line tools:
    $ hackasm Max.asm
    $ hackdis Max.hack

Reference Documentation
-----------------------
- Hack machine language: https://www.nand2tetris.org/course (project 6)
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hack_sdk.assembler import Assembler, assemble, assemble_file
from hack_sdk.disassembler import HackDisassembler
from hack_sdk.errors import (
    HackError,
    AssemblerError,
    AssemblySyntaxError,
    AddressRangeError,
    IdentifierError,
    DuplicateSymbolError,
    AssemblerInternalError,
    SourceLocation,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    # Disassembler
    "HackDisassembler",
    # Errors
    "HackError",
    "AssemblerError",
    "AssemblySyntaxError",
    "AddressRangeError",
    "IdentifierError",
    "DuplicateSymbolError",
    "AssemblerInternalError",
    "SourceLocation",
]
