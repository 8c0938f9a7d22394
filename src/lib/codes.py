"""
Control-code tables for output devices

A ControlCodes instance holds the byte sequences a device understands for
each formatting mode, and derives the header open/close sequences from
them. ESCP is the ESC/P table used when no device profile is requested.
"""

import dataclasses
from dataclasses import dataclass
from typing import Tuple

ESC = b"\x1b"


@dataclass(frozen=True)
class ControlCodes:
    """
    Byte sequences toggling device rendering modes

    Every field defaults to the ESC/P value, so a profile only needs to
    name the codes it changes.

    Attributes:
        bold_on / bold_off: Emphasized printing
        italic_on / italic_off: Italic printing
        underline_on / underline_off: Underlined printing
        double_height_on / double_height_off: Double-height characters
        double_width_on / double_width_off: Double-width characters
        header_lead: Separator emitted before a header opens
        header_trail: Line break emitted after a header closes
    """
    bold_on: bytes = ESC + b"E"
    bold_off: bytes = ESC + b"F"
    italic_on: bytes = ESC + b"4"
    italic_off: bytes = ESC + b"5"
    underline_on: bytes = ESC + b"-1"
    underline_off: bytes = ESC + b"-0"
    double_height_on: bytes = ESC + b"W1"
    double_height_off: bytes = ESC + b"W0"
    double_width_on: bytes = ESC + b"w1"
    double_width_off: bytes = ESC + b"w0"
    header_lead: bytes = b"\n\n"
    header_trail: bytes = b"\n"

    @classmethod
    def fieldNames_get(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    def toggle_codes(self, flag: str) -> Tuple[bytes, bytes]:
        """
        On/off pair for an inline toggle flag.

        Args:
            flag: One of "bold", "italic", "underline"

        Returns:
            (on_code, off_code)

        Example:
            >>> ESCP.toggle_codes("bold")
            (b'\\x1bE', b'\\x1bF')
        """
        return getattr(self, f"{flag}_on"), getattr(self, f"{flag}_off")

    def topHeader_open(self) -> bytes:
        return self.header_lead + self.bold_on + self.double_width_on + self.double_height_on

    def topHeader_close(self) -> bytes:
        return self.bold_off + self.double_width_off + self.double_height_off + self.header_trail

    def lowerHeader_open(self) -> bytes:
        return self.header_lead + self.double_width_on

    def lowerHeader_close(self) -> bytes:
        return self.double_width_off + self.header_trail


ESCP = ControlCodes()
