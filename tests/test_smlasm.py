import pytest

from errors import InvalidFormatError, OutOfRangeError
from smlasm import Assembler, assemble_lines, assemble_source, main

PROGRAM = [
    "; add two numbers",
    "loadi R1, 0x05",
    "loadi R2, 0x07   ; second operand",
    "",
    "add R3, R1, R2",
    "store R3, [0x20]",
    "halt",
]


def test_program_image():
    assert assemble_source(PROGRAM) == "2105220753123320c0"


def test_directive_relocates_following_lines():
    assert assemble_source(["0x04: halt", "loadi R1, 0xAB"]) == "00000000c00021ab"


def test_loadi_at_directive_address():
    memory = assemble_lines(["0x05: loadi R2, 0x1F"])
    assert memory[5] == 0x22
    assert memory[6] == 0x1F
    assert assemble_source(["0x05: loadi R2, 0x1F"]) == "0000000000221f"


def test_bare_directive_does_not_move_cursor():
    assert assemble_source(["0x10:", "halt"]) == "c0"


def test_halt_at_end_of_memory():
    image = assemble_source(["0xFE: halt"])
    assert image == "0" * 508 + "c0"


def test_padding_instructions():
    assert assemble_source(["move R1, R2", "rotate R3, 0x4", "halt"]) == "4012a304c0"


def test_empty_input():
    assert assemble_source([]) == ""
    assert assemble_source(["", "; nothing"]) == ""


def test_reassembly_is_identical():
    assert assemble_source(PROGRAM) == assemble_source(PROGRAM)
    assert assemble_source(["halt"]) == "c0"


def test_error_reports_line_number():
    with pytest.raises(InvalidFormatError) as exc_info:
        assemble_lines(["halt", "", "foo R1"])
    assert exc_info.value.line_num == 3
    assert '"foo"' in str(exc_info.value)
    assert str(exc_info.value).startswith("L3: Invalid format:")


def test_directive_out_of_range():
    with pytest.raises(OutOfRangeError) as exc_info:
        assemble_lines(["halt", "0x100: halt"])
    assert exc_info.value.line_num == 2


def test_instruction_overflowing_memory():
    with pytest.raises(OutOfRangeError) as exc_info:
        assemble_lines(["0xFF: halt"])
    assert exc_info.value.line_num == 1


def test_smaller_address_space():
    assert len(assemble_lines(["halt"], address_space=16)) == 16
    with pytest.raises(OutOfRangeError):
        assemble_lines(["0x10: halt"], address_space=16)


def test_cli_prints_image(tmp_path, capsys):
    source = tmp_path / "prog.asm"
    source.write_text("\n".join(PROGRAM) + "\n")
    assert main([str(source)]) == 0
    assert capsys.readouterr().out == "2105220753123320c0\n"


def test_cli_error_prints_nothing_on_stdout(tmp_path, capsys):
    source = tmp_path / "bad.asm"
    source.write_text("loadi R1, 0x05\nload R1\n")
    assert main([str(source)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "L2: Invalid format:" in captured.err


def test_cli_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.asm")]) == 1
    assert "Input file not found" in capsys.readouterr().err


def test_cli_output_and_listing_files(tmp_path, capsys):
    source = tmp_path / "prog.asm"
    source.write_text("0x02: halt\n")
    image = tmp_path / "prog.hex"
    listing = tmp_path / "prog.lst"
    assert main([str(source), "-o", str(image), "-l", str(listing)]) == 0
    assert capsys.readouterr().out == ""
    assert image.read_text() == "0000c0\n"
    assert "c0 00" in listing.read_text()


def test_cli_stops_reading_at_undecodable_line(tmp_path, capsys):
    source = tmp_path / "prog.asm"
    source.write_bytes(b"loadi R1, 0x05\n\xff\xfe\nfoo\n")
    assert main([str(source)]) == 0
    captured = capsys.readouterr()
    assert captured.out == "2105\n"
    assert "input ends here" in captured.err


def test_cli_rejects_bad_address_space(tmp_path):
    source = tmp_path / "prog.asm"
    source.write_text("halt\n")
    with pytest.raises(SystemExit):
        main([str(source), "-a", "512"])


def test_register_with_huge_number_reports_line():
    with pytest.raises(InvalidFormatError) as exc_info:
        assemble_lines(["halt", "load R" + "9" * 5000 + ", [0x0A]"])
    assert exc_info.value.line_num == 2


def test_register_with_leading_zeros():
    assert assemble_source(["load R" + "0" * 5000 + "1, [0x0A]"]) == "110a"


def test_assemble_twice_does_not_repeat_warnings(tmp_path, capsys):
    source = tmp_path / "prog.asm"
    source.write_bytes(b"loadi R1, 0x05\n\xff\n")
    assembler = Assembler(str(source), output_filename=str(tmp_path / "out.hex"))
    assert assembler.assemble()
    assert assembler.assemble()
    assert len(assembler.error_reporter.warnings) == 1
    assert not assembler.error_reporter.has_errors()
    assert assembler.image == "2105"
