"""Bond and portfolio values as stored in the document collections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Bond:
    """A plain coupon bond.

    ``coupon`` is the annual coupon rate in percent of ``maturity`` (the face
    value paid at the end of ``tenor`` years); ``freq`` is payments per year.
    """

    id: int
    coupon: float
    freq: int
    tenor: int
    maturity: float = 1000.0

    def __post_init__(self) -> None:
        if self.freq < 1:
            raise ValueError(f"invalid payment frequency {self.freq} for bond id={self.id}")
        if self.tenor < 0:
            raise ValueError(f"invalid tenor {self.tenor} for bond id={self.id}")

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> Bond:
        return cls(
            id=int(doc["id"]),
            coupon=float(doc["coupon"]),
            freq=int(doc["freq"]),
            tenor=int(doc["tenor"]),
            maturity=float(doc.get("maturity", 1000.0)),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "coupon": self.coupon,
            "freq": self.freq,
            "tenor": self.tenor,
            "maturity": self.maturity,
        }


@dataclass(frozen=True)
class PortfolioBonds:
    """A portfolio id together with its fully loaded bonds."""

    portf_id: int
    bonds: tuple[Bond, ...]
