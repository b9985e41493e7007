# operand_parser.py v2.2
"""
Operand syntax checks and nibble encoders, one pair per ArgumentType.

Registers are written R0..R255 (decimal) and keep only their low nibble.
Addresses are [0xHH], byte literals 0xHH, nibble literals 0xH.
Byte-sized values are always emitted as two nibbles, high nibble first.

v2.1: Register numbers are decimal; values above 15 are truncated, not rejected.
v2.2: split_byte emits true hex nibbles for values above 0xF.
"""
import re
from typing import List

from instruction_table import ArgumentType

REGISTER_REGEX = re.compile(r'R([0-9]+)')
MEMORY_ADDRESS_REGEX = re.compile(r'\[0x([0-9A-Fa-f]{2})\]')
HEX_BYTE_REGEX = re.compile(r'0x([0-9A-Fa-f]{2})')
HEX_NIBBLE_REGEX = re.compile(r'0x([0-9A-Fa-f])')

MAX_REGISTER_NUMBER = 0xFF
MAX_REGISTER_DIGITS = 3  # after leading zeros are dropped


class OperandParseError(ValueError):
    """Custom exception for operand parsing errors."""
    pass


def _register_number(text):
    match = REGISTER_REGEX.fullmatch(text)
    if not match:
        return None
    digits = match.group(1).lstrip('0') or '0'
    if len(digits) > MAX_REGISTER_DIGITS:
        return None
    value = int(digits)
    if value > MAX_REGISTER_NUMBER:
        return None
    return value


def is_register(text: str) -> bool:
    return _register_number(text) is not None


def is_address(text: str) -> bool:
    return MEMORY_ADDRESS_REGEX.fullmatch(text) is not None


def is_n_digit_hexadecimal(text: str, digits: int) -> bool:
    if digits not in (1, 2):
        raise ValueError(f"Unsupported hex literal width: {digits}")
    regex = HEX_BYTE_REGEX if digits == 2 else HEX_NIBBLE_REGEX
    return regex.fullmatch(text) is not None


def is_valid_syntax(arg_type: ArgumentType, text: str) -> bool:
    """True if text is acceptable for a slot of the given type."""
    if arg_type is ArgumentType.REGISTER:
        return is_register(text)
    if arg_type is ArgumentType.MEMORY_ADDRESS:
        return is_address(text)
    if arg_type is ArgumentType.HEXADECIMAL:
        return is_n_digit_hexadecimal(text, 2)
    if arg_type is ArgumentType.SINGLE_DIGIT_HEXADECIMAL:
        return is_n_digit_hexadecimal(text, 1)
    if arg_type is ArgumentType.ZERO_PADDING:
        return True
    raise TypeError(f"Unknown argument type: {arg_type!r}")


def split_byte(value: int) -> List[int]:
    """
    Splits a byte value into two nibbles, high first.
    Values up to 0xF get an explicit leading zero nibble so the field
    still takes two positions.
    """
    if not 0 <= value <= 0xFF:
        raise OperandParseError(f"Value {value} does not fit in a byte")
    if value <= 0xF:
        return [0, value]
    return [(value >> 4) & 0xF, value & 0xF]


def parse_register(text: str) -> int:
    """Parses 'R5' into 5. Only the low nibble of the register number is kept."""
    value = _register_number(text)
    if value is None:
        raise OperandParseError(f"Invalid register format: '{text}'")
    return value & 0xF


def parse_address(text: str) -> int:
    """Parses '[0x3A]' into 0x3A."""
    match = MEMORY_ADDRESS_REGEX.fullmatch(text)
    if not match:
        raise OperandParseError(f"Invalid memory address format: '{text}' (expected [0xHH])")
    return int(match.group(1), 16)


def parse_hexadecimal(text: str, digits: int) -> int:
    if not is_n_digit_hexadecimal(text, digits):
        expected = "0x" + "H" * digits
        raise OperandParseError(f"Invalid hexadecimal literal: '{text}' (expected {expected})")
    return int(text[2:], 16)


def encode(arg_type: ArgumentType, text: str) -> List[int]:
    """
    Encodes one operand into its nibbles.
    Raises OperandParseError if the text is not valid for the slot type.
    """
    if arg_type is ArgumentType.REGISTER:
        return [parse_register(text)]
    if arg_type is ArgumentType.MEMORY_ADDRESS:
        return split_byte(parse_address(text))
    if arg_type is ArgumentType.HEXADECIMAL:
        return split_byte(parse_hexadecimal(text, 2))
    if arg_type is ArgumentType.SINGLE_DIGIT_HEXADECIMAL:
        return [parse_hexadecimal(text, 1)]
    if arg_type is ArgumentType.ZERO_PADDING:
        return [0]
    raise TypeError(f"Unknown argument type: {arg_type!r}")

# operand_parser.py v2.2
