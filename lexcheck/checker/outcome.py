"""Verdicts and batch outcomes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

from lexcheck.atproto.identifiers import Nsid

VALID_GLYPH = "✅"
INVALID_GLYPH = "❌"


class Verdict(str, Enum):
    """Whether a lexicon is valid (retrievable) or invalid"""
    VALID = "VALID"
    INVALID = "INVALID"

    @classmethod
    def of(cls, is_valid: bool) -> "Verdict":
        return cls.VALID if is_valid else cls.INVALID


@dataclass
class Outcome:
    """Summary of one batch run: NSID -> validity.

    Independent of the verdict cache; built fresh per call.
    """
    validity: Dict[Nsid, bool] = field(default_factory=dict)

    def mark_valid(self, nsid: Nsid) -> None:
        self.validity[nsid] = True

    def mark_invalid(self, nsid: Nsid) -> None:
        self.validity[nsid] = False

    def record(self, nsid: Nsid, verdict: Verdict) -> None:
        if verdict is Verdict.VALID:
            self.mark_valid(nsid)
        else:
            self.mark_invalid(nsid)

    def ordered_results(self) -> List[Tuple[Nsid, bool]]:
        """Results, alphabetical by NSID"""
        return sorted(self.validity.items(), key=lambda item: item[0].value)

    def to_dict(self) -> Dict[str, bool]:
        """Alphabetically ordered NSID string -> validity mapping."""
        return {nsid.value: is_valid for nsid, is_valid in self.ordered_results()}

    def __len__(self) -> int:
        return len(self.validity)

    def __str__(self) -> str:
        lines = []
        for nsid, is_valid in self.ordered_results():
            glyph = VALID_GLYPH if is_valid else INVALID_GLYPH
            lines.append(f"{nsid.value}\t{glyph}\n")
        return "".join(lines)
