from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, Field


class ParsedReportLine(BaseModel):
    model_config = {"frozen": True}

    raw_type_name: str
    quantity: int = Field(gt=0)


class MatchedReportLine(BaseModel):
    model_config = {"frozen": True}

    delivery_type_id: str
    delivery_type_name: str
    quantity: int = Field(gt=0)
    unit_price: int = Field(ge=0)
    amount: int = Field(ge=0)


@dataclass(frozen=True)
class ParsedReport:
    lines: Tuple[ParsedReportLine, ...] = ()
    note: str = ""


class OutcomeKind(str, Enum):
    NOTHING_RECOGNIZED = "nothing_recognized"
    NO_MATCHES = "no_matches"
    ACCEPTED = "accepted"


@dataclass(frozen=True)
class ReportOutcome:
    kind: OutcomeKind
    reply_text: str
    matched: Tuple[MatchedReportLine, ...] = ()
    unmatched_labels: Tuple[str, ...] = ()
    note: str = ""
    active_type_names: Tuple[str, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.kind is OutcomeKind.ACCEPTED

    @property
    def partial(self) -> bool:
        return self.accepted and bool(self.unmatched_labels)

    @property
    def total_quantity(self) -> int:
        return sum(m.quantity for m in self.matched)
