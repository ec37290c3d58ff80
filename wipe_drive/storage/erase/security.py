"""Parser for the ATA security section of an ``hdparm -I`` report.

Typical input::

    Security:
            Master password revision code = 65534
                    supported
            not     enabled
            not     locked
            not     frozen
            not     expired: security count
                    supported: enhanced erase
            2min for SECURITY ERASE UNIT. 2min for ENHANCED SECURITY ERASE UNIT.
    Logical Unit WWN Device Identifier: 5002538e40a1b2c3
"""

from __future__ import annotations

from wipe_drive.domain import SecurityCapabilities


SECTION_HEADER = "Security:"
_FLAGS = ("supported", "enabled", "locked", "frozen")


def extract_security_section(report: str) -> str:
    """Return the ``Security:`` block, header included, or "" if absent."""
    lines: list[str] = []
    for line in report.splitlines():
        if lines:
            if line and not line[0].isspace():
                break
            lines.append(line)
        elif line.startswith(SECTION_HEADER):
            lines.append(line)
    return "\n".join(lines).rstrip()


def parse_security_capabilities(report: str) -> SecurityCapabilities:
    """Build SecurityCapabilities from a full ``hdparm -I`` report."""
    section = extract_security_section(report)
    flags = dict.fromkeys(_FLAGS, False)
    enhanced = False
    for line in section.splitlines()[1:]:
        words = line.split()
        negated = bool(words) and words[0] == "not"
        text = " ".join(words[1:] if negated else words)
        if text in flags:
            flags[text] = not negated
        elif text == "supported: enhanced erase":
            enhanced = not negated
    return SecurityCapabilities(
        supported=flags["supported"],
        enabled=flags["enabled"],
        locked=flags["locked"],
        frozen=flags["frozen"],
        supports_enhanced_erase=enhanced,
        section=section,
    )
