"""Closed category types for panels, inverters and customers.

Wire values are the lowercase strings used in quote requests and batch CSVs
(``"dcr"``, ``"non_dcr"``, ``"hybrid"``, ``"ongrid"``, ``"residential"``, …).
``parse`` also accepts the spelled-out forms ``"non-DCR"`` and ``"on-grid"``.
"""

from __future__ import annotations

from enum import Enum


class _Category(str, Enum):
    """Base class adding lenient parsing to a string-valued enum."""

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {}

    @classmethod
    def parse(cls, value):
        """Return the member for *value* (a member or a wire string).

        Raises
        ------
        ValueError
            When *value* does not name a member.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        key = cls._aliases().get(key, key)
        for member in cls:
            if member.value == key:
                return member
        accepted = ", ".join(repr(m.value) for m in cls)
        raise ValueError(
            f"Unknown {cls.__name__} {value!r}. Accepted values: {accepted}."
        )


class PanelCategory(_Category):
    DCR = "dcr"
    NON_DCR = "non_dcr"

    @property
    def label(self) -> str:
        """Proposal label for the panel type."""
        if self is PanelCategory.DCR:
            return "DCR (Subsidy Eligible)"
        return "Non-DCR"


class InverterCategory(_Category):
    HYBRID = "hybrid"
    ONGRID = "ongrid"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {"on_grid": "ongrid"}

    @property
    def label(self) -> str:
        """Proposal label for the inverter type."""
        if self is InverterCategory.HYBRID:
            return "3-in-1 Hybrid Inverter"
        return "Ongrid Inverter"


class CustomerCategory(_Category):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"
