# output_generator.py v2.0
"""
Handles the generation of the memory image string and the optional listing
file for the SMLASM assembler.

Image format: every byte as two lowercase hex digits, trailing '0' characters
trimmed. A trimmed image that ends in 'c' gets one '0' back so a final halt
(c0) is not printed as a bare 'c'.
"""
import sys
from typing import Iterable, List, Optional

ADDR_WIDTH = 4
HEX_FIELD_WIDTH = 8


def format_image(memory: Iterable[int]) -> str:
    image = "".join(f"{byte:02x}" for byte in memory).rstrip('0')
    if image.endswith('c'):
        image += '0'
    return image


class OutputGenerator:
    def __init__(self, image_file_handle, listing_file_handle=None):
        self.image_file = image_file_handle
        self.listing_file = listing_file_handle
        self.listing_rows: List[tuple] = []
        self.debug_mode = False

    def record_listing_line(self, line_num: int, address: Optional[int], data: Optional[List[int]], source_line_text: str):
        """Buffers one listing row; rows are only written after a clean pass."""
        self.listing_rows.append((line_num, address, data, source_line_text))

    def write_listing(self):
        if not self.listing_file: return
        for line_num, address, data, source_line_text in self.listing_rows:
            addr_str = f"{address:02x}" if address is not None else ""
            hex_str = " ".join(f"{b:02x}" for b in data) if data else ""
            self.listing_file.write(
                f"{line_num:>5} {addr_str:<{ADDR_WIDTH}} {hex_str:<{HEX_FIELD_WIDTH}} {source_line_text}\n")

    def write_image(self, memory: Iterable[int]) -> str:
        image = format_image(memory)
        if self.debug_mode: print(f"Debug OG: image is {len(image)} characters", file=sys.stderr)
        if self.image_file:
            self.image_file.write(f"{image}\n")
        return image

    def close(self):
        for handle in (self.listing_file, self.image_file):
            if handle and handle not in (sys.stdout, sys.stderr):
                handle.close()

# output_generator.py v2.0
