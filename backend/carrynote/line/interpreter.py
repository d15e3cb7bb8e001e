from datetime import date
from typing import Iterable

from ..domain.delivery_type import DeliveryType, active_only
from ..domain.report import OutcomeKind, ReportOutcome
from . import messages
from .matcher import match_report_lines
from .parser import parse_report_message


def interpret_message(
    text: str,
    delivery_types: Iterable[DeliveryType],
    driver_name: str,
    received_on: date,
) -> ReportOutcome:
    """Turn one chat message into a report outcome and its reply text.

    ``delivery_types`` is the registry snapshot for this call; inactive
    entries are ignored. Nothing is stored here, the caller records the
    report when the outcome is accepted.
    """
    parsed = parse_report_message(text)
    if not parsed.lines:
        return ReportOutcome(
            kind=OutcomeKind.NOTHING_RECOGNIZED,
            reply_text=messages.nothing_recognized_message(),
            note=parsed.note,
        )

    types = active_only(delivery_types)
    matched, unmatched = match_report_lines(parsed.lines, types)
    type_names = tuple(t.name for t in types)

    if not matched:
        return ReportOutcome(
            kind=OutcomeKind.NO_MATCHES,
            reply_text=messages.no_matches_message(unmatched, type_names),
            unmatched_labels=tuple(unmatched),
            note=parsed.note,
            active_type_names=type_names,
        )

    return ReportOutcome(
        kind=OutcomeKind.ACCEPTED,
        reply_text=messages.confirmation_message(
            received_on, driver_name, matched, parsed.note, unmatched
        ),
        matched=tuple(matched),
        unmatched_labels=tuple(unmatched),
        note=parsed.note,
        active_type_names=type_names,
    )
