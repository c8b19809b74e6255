"""
Hack Symbol Table
=================

Maps identifiers to 15-bit addresses. A fresh table is created for every
assembly run and owned by the code generator for the length of that run.

Symbols come from three sources:

1. Predefined symbols (SP, LCL, ..., R0-R15, SCREEN, KBD), present before
   any source is read.
2. Labels, bound in pass 1 to the address of the next real instruction.
   A label may replace an existing binding (including a predefined symbol)
   unless the table is strict, in which case redefinition is an error.
3. Variables, allocated in pass 2 from address 16 upward the first time an
   unbound symbol is referenced. A variable is only ever created for a name
   with no binding, so pass 2 never changes an existing value.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from hack_sdk.cpu import MAX_ADDRESS, PREDEFINED_SYMBOLS, VARIABLE_BASE
from hack_sdk.errors import AssemblerError, DuplicateSymbolError, SourceLocation

logger = logging.getLogger(__name__)


class SymbolKind(Enum):
    """Where a symbol's binding came from."""
    PREDEFINED = auto()
    LABEL = auto()
    VARIABLE = auto()


@dataclass(frozen=True)
class SymbolEntry:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name (case-sensitive)
        value: Bound address
        kind: Predefined, label or variable
        location: Where a label was defined (None otherwise)
    """
    name: str
    value: int
    kind: SymbolKind
    location: Optional[SourceLocation] = None


class SymbolTable:
    """
    Identifier to address mapping for one assembly run.

    Usage:
        symbols = SymbolTable()
        symbols.define_label("LOOP", 4)
        symbols.resolve("LOOP")     # 4
        symbols.resolve("counter")  # 16 (new variable)
        symbols.resolve("counter")  # 16 (same slot)

    Attributes:
        strict: If True, redefining a label or predefined symbol raises
                DuplicateSymbolError instead of replacing the binding
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._entries: dict[str, SymbolEntry] = {
            name: SymbolEntry(name, value, SymbolKind.PREDEFINED)
            for name, value in PREDEFINED_SYMBOLS.items()
        }
        self._next_variable = VARIABLE_BASE

    # =========================================================================
    # Queries
    # =========================================================================

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SymbolEntry]:
        return iter(self._entries.values())

    def get(self, name: str) -> Optional[int]:
        """Return the address bound to name, or None."""
        entry = self._entries.get(name)
        return entry.value if entry else None

    def entry(self, name: str) -> Optional[SymbolEntry]:
        """Return the full entry for name, or None."""
        return self._entries.get(name)

    @property
    def next_variable_address(self) -> int:
        """Address the next new variable will receive."""
        return self._next_variable

    def as_dict(self) -> dict[str, int]:
        """Return a plain name -> address dictionary."""
        return {name: entry.value for name, entry in self._entries.items()}

    def labels(self) -> dict[str, int]:
        """Return label bindings only."""
        return self._of_kind(SymbolKind.LABEL)

    def variables(self) -> dict[str, int]:
        """Return variable bindings only, in allocation order."""
        return self._of_kind(SymbolKind.VARIABLE)

    def _of_kind(self, kind: SymbolKind) -> dict[str, int]:
        return {e.name: e.value for e in self._entries.values() if e.kind is kind}

    # =========================================================================
    # Binding
    # =========================================================================

    def define_label(self, name: str, address: int,
                     location: Optional[SourceLocation] = None,
                     source_line: Optional[str] = None) -> None:
        """
        Bind a label to an instruction address.

        Args:
            name: Label name
            address: Index of the next real instruction
            location: Where the label is defined
            source_line: Label source text, for error reporting

        Raises:
            DuplicateSymbolError: In strict mode, if name is already bound
        """
        existing = self._entries.get(name)
        if existing is not None and self.strict:
            raise DuplicateSymbolError(
                name,
                location=location,
                original_location=existing.location,
                source_line=source_line,
            )
        if existing is not None:
            logger.debug(f"Label '{name}' replaces previous value {existing.value}")

        self._entries[name] = SymbolEntry(name, address, SymbolKind.LABEL, location)

    def allocate_variable(self, name: str) -> int:
        """
        Bind name to the next free variable address.

        Returns:
            The allocated address

        Raises:
            AssemblerError: If the name is already bound or RAM is exhausted
        """
        if name in self._entries:
            raise AssemblerError(f"symbol '{name}' is already defined")
        if self._next_variable > MAX_ADDRESS:
            raise AssemblerError(
                f"cannot allocate variable '{name}': no addresses left",
                hint=f"variables occupy addresses {VARIABLE_BASE} to {MAX_ADDRESS}",
            )

        address = self._next_variable
        self._entries[name] = SymbolEntry(name, address, SymbolKind.VARIABLE)
        self._next_variable += 1
        logger.debug(f"Allocated variable '{name}' at {address}")
        return address

    def resolve(self, name: str) -> int:
        """Return the binding for name, allocating a variable if unbound."""
        entry = self._entries.get(name)
        if entry is not None:
            return entry.value
        return self.allocate_variable(name)
