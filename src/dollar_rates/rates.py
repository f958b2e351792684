"""Fixed-schema rate record and its assembly from extracted rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Tuple

REQUIRED_LABELS: Tuple[str, ...] = ("eur", "cny", "try", "rub", "usd")


class AssemblyError(ValueError):
    """Raised when extracted rows lack one or more required rates."""

    def __init__(self, missing: List[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required rates {missing}")


@dataclass(frozen=True)
class RateRecord:
    """Official exchange rates published by the source, in bolivars."""

    eur: float
    cny: float
    try_: float
    rub: float
    usd: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "eur": self.eur,
            "cny": self.cny,
            "try": self.try_,
            "rub": self.rub,
            "usd": self.usd,
        }

    def __str__(self) -> str:
        return " | ".join(f"{code} => {value}" for code, value in self.to_dict().items())


def assemble_rates(fields: Mapping[str, float]) -> RateRecord:
    """Build a :class:`RateRecord` from a ``label -> value`` mapping.

    Extra labels are ignored. Raises :class:`AssemblyError` naming every
    required label that is absent.
    """
    missing = [label for label in REQUIRED_LABELS if label not in fields]
    if missing:
        raise AssemblyError(missing)

    return RateRecord(
        eur=fields["eur"],
        cny=fields["cny"],
        try_=fields["try"],
        rub=fields["rub"],
        usd=fields["usd"],
    )
