# instruction_assembler.py v2.0
"""
Handles the assembly of individual machine instructions for SMLASM.

Turns a lexed line into the opcode followed by its operand nibbles.

Zero-padding slots are never typed by the user. When the walk reaches one, the
operand that would have been matched against it is held back and offered to the
next slot instead, so every later user operand shifts one slot to the right.
For `move R1, R2` (schema: pad, reg, reg) this gives 4, 0, 1, 2.
"""

import sys
from itertools import chain, repeat
from typing import Any, Dict, List, NamedTuple, Optional, TYPE_CHECKING

from errors import InvalidFormatError
from instruction_table import ArgumentType, Instruction
from operand_parser import OperandParseError, encode, is_valid_syntax

if TYPE_CHECKING:
    from instruction_table import InstructionTable


class ParsedLine(NamedTuple):
    values: List[int]  # opcode (full value) then operand nibbles
    address: Optional[int]


class PendingOperand:
    """One-slot buffer for the operand displaced by a zero-padding slot."""
    def __init__(self):
        self.text = ''

    def exchange(self, candidate: str) -> str:
        """Returns the operand to check against the current slot."""
        if not self.text:
            return candidate
        held, self.text = self.text, candidate
        return held

    def hold(self, candidate: str):
        self.text = candidate


def check_operand_count(instruction: Instruction, operands: List[str], line_num: int):
    required = instruction.required_operand_count
    no_operands = len(operands) == 1 and not operands[0]
    if no_operands:
        if required == 0:
            return
        given = 0
    elif len(operands) == required:
        return
    else:
        given = len(operands)
    raise InvalidFormatError(
        f"Instruction \"{instruction.mnemonic}\" takes {required} operand(s), got {given}.", line_num)


def encode_operands(instruction: Instruction, operands: List[str], line_num: int, debug_mode: bool = False) -> List[int]:
    nibbles = []
    pending = PendingOperand()
    supplied = chain(operands, repeat(''))

    for slot_index, (arg_type, candidate) in enumerate(zip(instruction.operand_schema, supplied)):
        candidate = pending.exchange(candidate)

        if arg_type is ArgumentType.ZERO_PADDING:
            pending.hold(candidate)
            nibbles.append(0)
            continue

        if not is_valid_syntax(arg_type, candidate):
            raise InvalidFormatError(
                f"Arguments for Instruction \"{instruction.mnemonic}\" are not valid: "
                f"'{candidate}' is not a {arg_type.value}.", line_num)
        try:
            encoded = encode(arg_type, candidate)
        except OperandParseError as e:
            raise InvalidFormatError(f"Instruction \"{instruction.mnemonic}\": {e}", line_num) from e

        if debug_mode:
            print(f"Debug L{line_num} Operand: slot {slot_index} ({arg_type.value}) '{candidate}' -> {encoded}", file=sys.stderr)
        nibbles.extend(encoded)

    return nibbles


def assemble_instruction(fields: Dict[str, Any], instruction_table: 'InstructionTable', line_num: int, debug_mode: bool = False) -> Optional[ParsedLine]:
    """
    Assembles one lexed line. Returns None for lines without an instruction.
    Raises InvalidFormatError for an unknown mnemonic or bad operands.
    """
    if fields.get('is_blank'):
        return None

    mnemonic = fields['mnemonic']
    instruction = instruction_table.lookup(mnemonic)
    if instruction is None:
        raise InvalidFormatError(f"Instruction \"{mnemonic}\" is not valid.", line_num)

    operands = fields.get('operands') or ['']
    check_operand_count(instruction, operands, line_num)

    values = [instruction.opcode]
    values.extend(encode_operands(instruction, operands, line_num, debug_mode))
    return ParsedLine(values, fields.get('address'))

# instruction_assembler.py v2.0
