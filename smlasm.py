# smlasm.py v1.2
"""
SMLASM - assembler for the simple machine language toy instruction set.
Main application entry point.

Assembles source lines into a 256-byte memory image and prints it as a
lowercase hex string with trailing zeros trimmed.

v1.1: Stop reading input at the first line that is not valid UTF-8.
v1.2: Add --listing and --address-space options.
"""

import argparse
import sys
import traceback
from typing import Iterable, List, Optional

from assembler_state import AssemblerState, DEFAULT_ADDRESS_SPACE
from errors import ErrorReporter
from instruction_table import InstructionTable
from output_generator import OutputGenerator, format_image
from pass_logic import perform_pass, run_pass

VERSION = "1.2.0"
MAX_ADDRESS_SPACE = 256


def assemble_lines(lines: Iterable[str], address_space: int = DEFAULT_ADDRESS_SPACE, debug_mode: bool = False) -> bytearray:
    """
    Assembles source lines into a fresh memory image.
    Raises the first AsmException met, with its 1-based line number set.
    """
    state = AssemblerState(address_space, debug_mode=debug_mode)
    run_pass(lines, state, InstructionTable(debug_mode=debug_mode))
    return state.memory


def assemble_source(lines: Iterable[str], address_space: int = DEFAULT_ADDRESS_SPACE) -> str:
    """Assembles source lines and returns the formatted image string."""
    return format_image(assemble_lines(lines, address_space))


class Assembler:
    """ Encapsulates the assembler state and processes. """
    def __init__(self, input_filename: str, output_filename: Optional[str] = None, listing_filename: Optional[str] = None,
                 address_space: int = DEFAULT_ADDRESS_SPACE, debug_mode: bool = False):
        self.input_filename = input_filename
        self.output_filename = output_filename
        self.listing_filename = listing_filename
        self.debug_mode = debug_mode
        self.error_reporter = ErrorReporter()
        self.instruction_table = InstructionTable(debug_mode=debug_mode)
        self.state = AssemblerState(address_space, debug_mode=debug_mode)
        self.output_generator: Optional[OutputGenerator] = None
        self.lines: List[str] = []
        self.image: Optional[str] = None

    def assemble(self) -> bool:
        """ Reads the input, runs the pass and writes the image. """
        self.error_reporter.reset()
        if self.debug_mode: print(f"Debug: assembling {self.input_filename}", file=sys.stderr)
        if not self._read_input_file():
            self._print_summary()
            return False

        self.output_generator = OutputGenerator(None)
        self.output_generator.debug_mode = self.debug_mode

        if not perform_pass(self):
            self._print_summary()
            return False

        if not self._write_output():
            self._print_summary()
            return False

        if self.error_reporter.has_warnings() or self.debug_mode:
            self._print_summary()
        return True

    def _read_input_file(self) -> bool:
        self.lines = []
        try:
            with open(self.input_filename, 'rb') as f:
                for ln, raw in enumerate(f, start=1):
                    try:
                        self.lines.append(raw.decode('utf-8').rstrip('\r\n'))
                    except UnicodeDecodeError as e:
                        # Reading ends here; lines before it are still assembled.
                        self.error_reporter.add_warning(f"Cannot read line, input ends here: {e}", ln)
                        break
            return True
        except FileNotFoundError: self.error_reporter.add_error(f"Input file not found: {self.input_filename}", 0, code='F'); return False
        except OSError as e: self.error_reporter.add_error(f"Error reading input file: {e}", 0, code='F'); return False

    def _write_output(self) -> bool:
        gen = self.output_generator
        try:
            gen.image_file = open(self.output_filename, 'w') if self.output_filename else sys.stdout
            if self.listing_filename:
                gen.listing_file = open(self.listing_filename, 'w')
        except OSError as e:
            self.error_reporter.add_error(f"Cannot open output file: {e}", 0, code='F')
            gen.close()
            return False
        try:
            self.image = gen.write_image(self.state.memory)
            gen.write_listing()
        finally:
            gen.close()
        return True

    def _print_summary(self):
        print("\n--- Assembly Summary ---", file=sys.stderr)
        self.error_reporter.print_summary()
        print("--- End Summary ---", file=sys.stderr)


def _address_space(value):
    try:
        size = int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid address space size: '{value}'")
    if not 1 <= size <= MAX_ADDRESS_SPACE:
        raise argparse.ArgumentTypeError(f"address space must be between 1 and {MAX_ADDRESS_SPACE}, got {size}")
    return size


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smlasm", description=f"SMLASM Assembler v{VERSION}")
    parser.add_argument("input_file", help="Assembly source file.")
    parser.add_argument("-o", "--output", help="Write the memory image to this file (defaults to stdout).")
    parser.add_argument("-l", "--listing", help="Write an address/bytes/source listing to this file.")
    parser.add_argument("-a", "--address-space", type=_address_space, default=DEFAULT_ADDRESS_SPACE,
                        help=f"Memory size in bytes (default {DEFAULT_ADDRESS_SPACE}).")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug mode.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)

    assembler = Assembler(
        input_filename=args.input_file,
        output_filename=args.output,
        listing_filename=args.listing,
        address_space=args.address_space,
        debug_mode=args.debug
    )

    exit_code = 0
    try:
        if not assembler.assemble(): exit_code = 1
    except Exception as e:
        print(f"CRITICAL UNHANDLED ERROR: {e}", file=sys.stderr); traceback.print_exc(); exit_code = 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())

# smlasm.py v1.2
