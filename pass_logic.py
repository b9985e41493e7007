# pass_logic.py v3.0
"""
Contains the pass processing logic for the SMLASM assembler.

There is a single linear pass: each line is lexed, assembled and written into
the memory image in order. The first error stops the pass.
"""
import sys
from typing import Iterable, Optional, TYPE_CHECKING

from errors import AsmException
from lexer import parse_line
from instruction_assembler import assemble_instruction

if TYPE_CHECKING:
    from smlasm import Assembler
    from assembler_state import AssemblerState
    from instruction_table import InstructionTable
    from output_generator import OutputGenerator


def process_line(
    state: 'AssemblerState',
    instruction_table: 'InstructionTable',
    line_num: int,
    line: str,
    output_generator: Optional['OutputGenerator'] = None
):
    """Lexes, assembles and writes one source line. Raises AsmException."""
    state.current_line_number = line_num
    try:
        parsed = parse_line(line, line_num, state.address_space)
        result = assemble_instruction(parsed, instruction_table, line_num, state.debug_mode)
        if result is not None:
            state.write_line(result)
    except AsmException as e:
        if e.line_num is None:
            e.line_num = line_num
        raise

    if output_generator:
        if result is None:
            output_generator.record_listing_line(line_num, None, None, parsed['original'])
        else:
            output_generator.record_listing_line(line_num, state.line_start_address, state.last_written, parsed['original'])


def run_pass(
    lines: Iterable[str],
    state: 'AssemblerState',
    instruction_table: 'InstructionTable',
    output_generator: Optional['OutputGenerator'] = None
):
    """Assembles lines into state.memory. Line numbers are 1-based."""
    for i, line in enumerate(lines):
        ln = i + 1
        if not line.strip():
            if output_generator:
                output_generator.record_listing_line(ln, None, None, line.rstrip())
            continue
        if state.debug_mode: print(f"Debug L{ln}: '{line.rstrip()}'", file=sys.stderr)
        process_line(state, instruction_table, ln, line, output_generator)


def perform_pass(assembler: 'Assembler') -> bool:
    """Runs the pass for an Assembler, recording the first error in its reporter."""
    assembler.state.reset()
    try:
        run_pass(assembler.lines, assembler.state, assembler.instruction_table, assembler.output_generator)
    except AsmException as e:
        assembler.error_reporter.add_exception(e)
        if assembler.debug_mode:
            print(f"Debug: pass stopped at L{e.line_num}: {e}", file=sys.stderr)
        return False
    return True

# pass_logic.py v3.0
