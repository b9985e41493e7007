import pytest

from instruction_table import (
    INSTRUCTIONS, INSTRUCTION_WIDTH, ArgumentType, InstructionTable, encoded_width,
)

EXPECTED_OPCODES = {
    "load": 0x01, "loadi": 0x02, "store": 0x03, "move": 0x04,
    "add": 0x05, "addf": 0x06, "or": 0x07, "and": 0x08,
    "xor": 0x09, "rotate": 0x0A, "jump": 0x0B, "halt": 0x0C,
}


def test_opcodes_match_wire_format():
    table = InstructionTable()
    assert len(table) == len(EXPECTED_OPCODES)
    for mnemonic, opcode in EXPECTED_OPCODES.items():
        assert table.lookup(mnemonic).opcode == opcode


def test_mnemonics_listed_in_opcode_order():
    assert InstructionTable().mnemonics() == list(EXPECTED_OPCODES)


def test_lookup_is_exact_match():
    table = InstructionTable()
    assert table.lookup("LOAD") is None
    assert table.lookup("foo") is None
    assert table.lookup(None) is None
    assert "halt" in table
    assert "Halt" not in table


def test_padding_slots_are_not_counted_as_operands():
    table = InstructionTable()
    assert table.lookup("move").operand_schema == (
        ArgumentType.ZERO_PADDING, ArgumentType.REGISTER, ArgumentType.REGISTER)
    assert table.lookup("move").required_operand_count == 2
    assert table.lookup("rotate").required_operand_count == 2
    assert table.lookup("halt").required_operand_count == 0
    assert table.lookup("add").required_operand_count == 3
    for instruction in table:
        real_slots = [a for a in instruction.operand_schema if a is not ArgumentType.ZERO_PADDING]
        assert len(real_slots) == instruction.required_operand_count


def test_every_instruction_is_two_bytes_wide():
    for instruction in InstructionTable():
        assert encoded_width(instruction) == INSTRUCTION_WIDTH


def test_debug_mode_reports_nothing_for_consistent_table(capsys):
    InstructionTable(debug_mode=True)
    assert capsys.readouterr().err == ""


def test_table_is_read_only():
    with pytest.raises(TypeError):
        INSTRUCTIONS["nop"] = INSTRUCTIONS["halt"]
