"""
Hack Disassembler
=================

Decodes Hack machine words back into assembly source text using the
inverse of the assembler's code tables in hack_sdk.cpu.

The disassembly of valid words is itself valid Hack assembly, and
assembling it reproduces the original words exactly:

    0000000000010101   ->  @21
    1110001100001000   ->  M=D
    1110101010000111   ->  0;JMP

Symbols are not recoverable from machine code, so every A-instruction is
shown with its numeric operand.

Invalid words (wrong length, non-binary characters, C-instructions whose
filler bits are not 11, or unassigned ALU codes) are reported as
invalid entries instead of raising, so a damaged file can still be
inspected.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from hack_sdk.cpu import (
    COMPUTE_PREFIX,
    WORD_BITS,
    Destination,
    JumpCondition,
    decode_destination,
    decode_jump,
    decode_operation,
)


# =============================================================================
# Data Structures
# =============================================================================

@dataclass
class DisassembledInstruction:
    """
    Represents a single disassembled Hack word.

    Attributes:
        address: ROM address of the instruction
        word: The raw 16-character word
        text: Assembly text (empty for invalid words)
        valid: False if the word does not decode to an instruction
        comment: Reason the word is invalid, if it is
    """
    address: int
    word: str
    text: str
    valid: bool = True
    comment: str = ""

    def __str__(self) -> str:
        """Format as listing line: ADDRESS: WORD  TEXT"""
        if self.valid:
            return f"{self.address:5d}: {self.word}  {self.text}"
        return f"{self.address:5d}: {self.word}  // ??? {self.comment}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "address": self.address,
            "word": self.word,
            "text": self.text,
            "valid": self.valid,
            "comment": self.comment,
        }


# =============================================================================
# Hack Disassembler
# =============================================================================

class HackDisassembler:
    """Disassembler for Hack machine words."""

    def disassemble_one(self, word: str, address: int = 0) -> DisassembledInstruction:
        """
        Disassemble a single word.

        Args:
            word: 16-character string of 0/1
            address: ROM address of the word

        Returns:
            DisassembledInstruction (check .valid)
        """
        if len(word) != WORD_BITS or set(word) - {"0", "1"}:
            return self._invalid(address, word, "not a 16-bit binary word")

        if word[0] == "0":
            return DisassembledInstruction(address, word, f"@{int(word[1:], 2)}")

        if not word.startswith(COMPUTE_PREFIX):
            return self._invalid(address, word, "compute instruction filler bits must be 11")

        op = decode_operation(int(word[3:10], 2))
        dest = decode_destination(int(word[10:13], 2))
        jump = decode_jump(int(word[13:16], 2))
        if op is None:
            return self._invalid(address, word, f"unknown ALU code {word[3:10]}")

        text = str(op)
        if dest is not Destination.NONE:
            text = f"{dest}={text}"
        if jump is not JumpCondition.NONE:
            text = f"{text};{jump}"
        return DisassembledInstruction(address, word, text)

    def _invalid(self, address: int, word: str, reason: str) -> DisassembledInstruction:
        return DisassembledInstruction(address, word, "", valid=False, comment=reason)

    def disassemble(
        self,
        words: Iterable[str],
        start_address: int = 0,
        count: Optional[int] = None,
    ) -> List[DisassembledInstruction]:
        """
        Disassemble multiple words.

        Args:
            words: Machine words in ROM order
            start_address: Address of the first word
            count: Maximum number of words to disassemble (None = all)

        Returns:
            List of DisassembledInstruction objects
        """
        result = []
        for offset, word in enumerate(words):
            if count is not None and offset >= count:
                break
            result.append(self.disassemble_one(word, start_address + offset))
        return result

    def disassemble_to_text(
        self,
        words: Iterable[str],
        start_address: int = 0,
        count: Optional[int] = None,
        show_address: bool = True,
    ) -> str:
        """
        Disassemble and return formatted text output.

        With show_address=False the output is plain assembly that can be
        fed straight back into the assembler (invalid words become comments).
        """
        instructions = self.disassemble(words, start_address, count)
        if show_address:
            return "\n".join(str(instr) for instr in instructions)
        return "\n".join(
            instr.text if instr.valid else f"// ??? {instr.word} {instr.comment}"
            for instr in instructions
        )


def parse_hack(text: str) -> list[str]:
    """Split .hack file text into words, ignoring blank lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]
