import re

from ..domain.report import ParsedReport, ParsedReportLine

NOTE_PREFIXES = ("メモ:", "備考:")

# "ヤマト30" "佐川 20" "ヤマト宅急便:30"
REPORT_LINE_PAT = re.compile(r"^(.+?)[:：\s]*([0-9]+)$")

_FW_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")


def _normalize_digits(s: str) -> str:
    """Convert full-width digits to ASCII."""
    return s.translate(_FW_DIGITS)


def parse_report_message(text: str) -> ParsedReport:
    """Split a daily-report message into per-type quantities and a note.

    Lines that do not look like ``<type><quantity>`` are skipped. When
    several note lines are present the last one is kept.
    """
    lines: list[ParsedReportLine] = []
    note = ""

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue

        # メモの検出
        if line.startswith(NOTE_PREFIXES):
            note = line[line.index(":") + 1:].strip()
            continue

        m = REPORT_LINE_PAT.match(_normalize_digits(line))
        if not m:
            continue
        label, quantity = m.group(1).strip(), int(m.group(2))
        if label and quantity > 0:
            lines.append(ParsedReportLine(raw_type_name=label, quantity=quantity))

    return ParsedReport(lines=tuple(lines), note=note)
