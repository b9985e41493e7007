# assembler_state.py v2.0
"""
Memory image and program counter for a single assembly pass.

Every instruction is treated as two bytes wide: after a line is written the
program counter advances by INSTRUCTION_WIDTH no matter how many bytes the line
produced. An address directive moves the counter before the line is written.
Later writes to the same address win.
"""
import sys
from typing import List, Optional, TYPE_CHECKING

from errors import AsmException, OutOfRangeError
from instruction_table import INSTRUCTION_WIDTH

if TYPE_CHECKING:
    from instruction_assembler import ParsedLine

DEFAULT_ADDRESS_SPACE = 256


def pack_values(values: List[int]) -> List[int]:
    """Pairs values two at a time into bytes: first * 16 + second."""
    if len(values) % 2:
        raise AsmException(f"Internal: odd number of encoded values ({len(values)}) cannot be packed into bytes.", code='F')
    packed = []
    for i in range(0, len(values), 2):
        byte = values[i] * 16 + values[i + 1]
        if byte > 0xFF:
            raise AsmException(f"Internal: packed value {byte:#x} does not fit in a byte.", code='F')
        packed.append(byte)
    return packed


class AssemblerState:
    """Tracks the memory image and program counter during the pass."""
    def __init__(self, address_space: int = DEFAULT_ADDRESS_SPACE, debug_mode: bool = False):
        if address_space <= 0:
            raise ValueError(f"Address space must be positive, got {address_space}")
        self.address_space = address_space
        self.debug_mode = debug_mode
        self.memory = bytearray(address_space)
        self.program_counter: int = 0
        self.current_line_number: int = 0
        self.line_start_address: Optional[int] = None
        self.last_written: List[int] = []

    def reset(self):
        self.memory = bytearray(self.address_space)
        self.program_counter = 0
        self.current_line_number = 0
        self.line_start_address = None
        self.last_written = []

    def set_origin(self, address: int):
        """Moves the program counter; the address was range checked by the lexer."""
        if self.debug_mode:
            print(f">>> DEBUG PC: L{self.current_line_number} origin {self.program_counter:02x} -> {address:02x}", file=sys.stderr)
        self.program_counter = address

    def advance(self, width: int = INSTRUCTION_WIDTH):
        self.program_counter += width

    def write_bytes(self, data: List[int]):
        start = self.program_counter
        end = start + len(data)
        if end > self.address_space:
            raise OutOfRangeError(
                f"Instruction at \"{start:02x}\" does not fit in memory (0-{self.address_space - 1:02x}).",
                self.current_line_number)
        self.memory[start:end] = bytes(data)

    def write_line(self, parsed: 'ParsedLine'):
        """Writes one parsed instruction at the program counter and advances it."""
        if parsed.address is not None:
            self.set_origin(parsed.address)

        data = pack_values(parsed.values)
        self.line_start_address = self.program_counter
        self.write_bytes(data)
        self.last_written = data

        if self.debug_mode:
            hex_data = " ".join(f"{b:02x}" for b in data)
            print(f">>> DEBUG PC: L{self.current_line_number} wrote [{hex_data}] at {self.program_counter:02x}", file=sys.stderr)
        self.advance()

# assembler_state.py v2.0
