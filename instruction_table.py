# instruction_table.py v2.1
"""
Instruction set definitions for the SMLASM assembler.

The table is the wire format: opcode values, operand counts and operand order
must not change. Each instruction packs into a fixed two-byte word:
the opcode nibble followed by three operand nibbles.

v2.1: Expose the table through a read-only mapping; add encoded_width.
"""

import sys
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, NamedTuple, Optional, Tuple

INSTRUCTION_WIDTH = 2  # bytes


class ArgumentType(Enum):
    """Closed set of operand kinds an instruction slot can hold."""
    REGISTER = "register"
    MEMORY_ADDRESS = "memory address"
    HEXADECIMAL = "hexadecimal"
    SINGLE_DIGIT_HEXADECIMAL = "single digit hexadecimal"
    ZERO_PADDING = "zero padding"

    @property
    def nibble_count(self) -> int:
        if self in (ArgumentType.MEMORY_ADDRESS, ArgumentType.HEXADECIMAL):
            return 2
        return 1


class Instruction(NamedTuple):
    mnemonic: str
    opcode: int
    operand_schema: Tuple[ArgumentType, ...]
    required_operand_count: int


_R = ArgumentType.REGISTER
_M = ArgumentType.MEMORY_ADDRESS
_H = ArgumentType.HEXADECIMAL
_S = ArgumentType.SINGLE_DIGIT_HEXADECIMAL
_Z = ArgumentType.ZERO_PADDING

# mnemonic, opcode, operand schema (padding slots are never typed by the user)
_DEFINITIONS = (
    ("load",   0x01, (_R, _M)),
    ("loadi",  0x02, (_R, _H)),
    ("store",  0x03, (_R, _M)),
    ("move",   0x04, (_Z, _R, _R)),
    ("add",    0x05, (_R, _R, _R)),
    ("addf",   0x06, (_R, _R, _R)),
    ("or",     0x07, (_R, _R, _R)),
    ("and",    0x08, (_R, _R, _R)),
    ("xor",    0x09, (_R, _R, _R)),
    ("rotate", 0x0A, (_R, _Z, _S)),
    ("jump",   0x0B, (_R, _M)),
    ("halt",   0x0C, (_Z, _Z, _Z)),
)


def encoded_width(instruction: Instruction) -> int:
    """Number of bytes the instruction packs to (opcode plus operand nibbles)."""
    nibbles = 1 + sum(arg.nibble_count for arg in instruction.operand_schema)
    return (nibbles + 1) // 2


def _build_instructions() -> Dict[str, Instruction]:
    instructions = {}
    for mnemonic, opcode, schema in _DEFINITIONS:
        if mnemonic in instructions:
            raise ValueError(f"Duplicate mnemonic '{mnemonic}' in instruction table")
        if not 0 <= opcode <= 0xF:
            raise ValueError(f"Opcode {opcode:#04x} for '{mnemonic}' does not fit in a nibble")
        required = sum(1 for arg in schema if arg is not ArgumentType.ZERO_PADDING)
        instructions[mnemonic] = Instruction(mnemonic, opcode, schema, required)
    return instructions


INSTRUCTIONS = MappingProxyType(_build_instructions())


class InstructionTable:
    """Read-only lookup over the instruction definitions."""
    def __init__(self, debug_mode: bool = False):
        self._instructions = INSTRUCTIONS
        if debug_mode:
            for instruction in self._instructions.values():
                width = encoded_width(instruction)
                if width != INSTRUCTION_WIDTH:
                    print(f"Debug: '{instruction.mnemonic}' encodes to {width} bytes, "
                          f"program counter still advances by {INSTRUCTION_WIDTH}.", file=sys.stderr)

    def __contains__(self, mnemonic) -> bool:
        return self.is_instruction(mnemonic)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions())

    def __len__(self) -> int:
        return len(self._instructions)

    def is_instruction(self, mnemonic) -> bool:
        if mnemonic is None:
            return False
        return mnemonic in self._instructions

    def lookup(self, mnemonic) -> Optional[Instruction]:
        if mnemonic is None:
            return None
        return self._instructions.get(mnemonic)

    def instructions(self):
        return sorted(self._instructions.values(), key=lambda inst: inst.opcode)

    def mnemonics(self):
        return [inst.mnemonic for inst in self.instructions()]

# instruction_table.py v2.1
