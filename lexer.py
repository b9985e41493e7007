# lexer.py v2.1
"""
Provides the line parsing functionality for the SMLASM assembler.

Line grammar:  [ADDR ":"] MNEMONIC [OPERAND ("," OPERAND)*] [";" comment]
where ADDR is a 0x-prefixed hex address.

v2.1: The address directive accepts more than two hex digits so that an
      address past the end of memory is reported as out of range instead of
      as a format error. At least two digits are still required.
"""
import re

from errors import InvalidFormatError, OutOfRangeError

DEFAULT_ADDRESS_LIMIT = 256
COMMENT_CHAR = ';'
DIRECTIVE_CHAR = ':'

ADDRESS_DIRECTIVE_REGEX = re.compile(r'0x([0-9A-Fa-f]{2,})')


def parse_address_directive(text, line_num, address_limit=DEFAULT_ADDRESS_LIMIT):
    """Validates the text before ':' and returns the address it names."""
    match = ADDRESS_DIRECTIVE_REGEX.fullmatch(text)
    if not match:
        raise InvalidFormatError(f"Address \"{text}\" is not in a format of 0xHH.", line_num)
    address = int(match.group(1), 16)
    if address >= address_limit:
        raise OutOfRangeError(f"Address \"{address:02x}\" is out of range 0-{address_limit - 1:02x}.", line_num)
    return address


def split_operands(operand_str):
    """Comma separated operands, each trimmed. No operands gives ['']."""
    return [operand.strip() for operand in operand_str.split(',')]


def parse_line(line, line_num, address_limit=DEFAULT_ADDRESS_LIMIT):
    """
    Parses a single line of source code.
    Returns a dictionary containing the fields:
        'line_num': Original line number.
        'original': The original line string (right-stripped).
        'address': Address from a '0xHH:' directive, or None.
        'mnemonic': The mnemonic found, or None.
        'operand_str': The raw operand string ('' if none).
        'operands': The operand tokens, [''] if there are none.
        'comment': The comment text after ';', or None.
        'is_blank': True if the line holds no instruction.
    Raises InvalidFormatError / OutOfRangeError for a bad address directive.
    """
    original_line = line.rstrip('\r\n')

    fields = {
        'line_num': line_num,
        'original': original_line.rstrip(),
        'address': None,
        'mnemonic': None,
        'operand_str': '',
        'operands': [''],
        'comment': None,
        'is_blank': True,
    }

    # --- Comment ---
    text, sep, comment = original_line.partition(COMMENT_CHAR)
    if sep:
        fields['comment'] = comment
    text = text.strip()

    # --- Address directive ---
    directive, sep, rest = text.partition(DIRECTIVE_CHAR)
    if sep:
        fields['address'] = parse_address_directive(directive.strip(), line_num, address_limit)
        text = rest.strip()

    if not text:
        return fields

    # --- Mnemonic / operands ---
    parts = re.split(r'\s', text, maxsplit=1)
    fields['mnemonic'] = parts[0]
    fields['operand_str'] = parts[1].strip() if len(parts) > 1 else ''
    fields['operands'] = split_operands(fields['operand_str'])
    fields['is_blank'] = False
    return fields

# lexer.py v2.1
