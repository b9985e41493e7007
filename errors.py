# errors.py v1.3
"""
Error reporting classes for the SMLASM assembler.
Includes custom Exception classes.

v1.3: Add InvalidFormatError and OutOfRangeError. Summary goes to stderr only,
      stdout is reserved for the memory image.
"""

import sys

# --- Custom Exceptions ---

class AsmException(Exception):
    """Base class for assembler errors that should stop assembly."""
    kind = ""

    def __init__(self, message, line_num=None, code='E'):
        super().__init__(message)
        self.message = message
        self.line_num = line_num
        # Ensure code is a single uppercase char, default 'E'
        self.code = code[0].upper() if code and isinstance(code, str) else 'E'

    @property
    def detail(self):
        return f"{self.kind}: {self.message}" if self.kind else self.message

    def __str__(self):
        prefix = f"L{self.line_num}: " if self.line_num else ""
        return f"{prefix}{self.detail} [{self.code}]"


class InvalidFormatError(AsmException):
    """Syntax error: unknown mnemonic, bad operand count or malformed token."""
    kind = "Invalid format"

    def __init__(self, message, line_num=None, code='S'):
        super().__init__(message, line_num, code)


class OutOfRangeError(AsmException):
    """A well-formed address that does not fit the memory image."""
    kind = "Out of range"

    def __init__(self, message, line_num=None, code='V'):
        super().__init__(message, line_num, code)


# --- Error Reporter Class ---

class ErrorReporter:
    """Handles collection and reporting of errors and warnings."""
    def __init__(self):
        self.errors = []
        self.warnings = []

    def reset(self):
        self.errors = []
        self.warnings = []

    def has_errors(self):
        return bool(self.errors)

    def has_warnings(self):
        return bool(self.warnings)

    def add_error(self, message, line_num=None, code='E'):
        """Adds an error message."""
        self.errors.append({'message': message, 'line_num': line_num, 'code': code})

    def add_exception(self, exc: AsmException):
        """Records a raised AsmException with its line number and code."""
        self.add_error(exc.detail, exc.line_num, code=exc.code)

    def add_warning(self, message, line_num=None, code='W'):
        """Adds a warning message."""
        self.warnings.append({'message': message, 'line_num': line_num, 'code': code})

    def print_summary(self, file=None):
        """Prints all collected errors and warnings."""
        out = file if file is not None else sys.stderr
        if self.errors:
            print("\n--- Errors ---", file=out)
            for error in sorted(self.errors, key=lambda x: x['line_num'] or 0):
                line_prefix = f"L{error['line_num']}: " if error['line_num'] else ""
                print(f"{line_prefix}{error['message']} [{error['code']}]", file=out)
        if self.warnings:
            print("\n--- Warnings ---", file=out)
            for warning in sorted(self.warnings, key=lambda x: x['line_num'] or 0):
                line_prefix = f"L{warning['line_num']}: " if warning['line_num'] else ""
                print(f"{line_prefix}{warning['message']} [{warning['code']}]", file=out)

        print(f"\nTotal Errors: {len(self.errors)}, Total Warnings: {len(self.warnings)}", file=out)

# errors.py v1.3
