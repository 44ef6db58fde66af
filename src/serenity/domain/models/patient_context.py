"""
Patient Context

Read-only patient history supplied by the hosting application.
The engine treats it as opaque input: never mutated, never persisted.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from serenity.domain.enums.crisis import SupportSystem


@dataclass(frozen=True)
class PatientContext:
    """
    Patient history relevant to crisis risk.

    Attributes:
        risk_factors: Known risk factor codes (e.g. "previous_attempt")
        previous_crises: Whether the patient has prior crisis episodes
        current_medications: Current medication names
        therapy_history: Whether the patient has therapy history
        support_system: Strength of personal support network
    """

    risk_factors: frozenset[str] = field(default_factory=frozenset)
    previous_crises: bool = False
    current_medications: tuple[str, ...] = ()
    therapy_history: bool = False
    support_system: Optional[SupportSystem] = None

    def __post_init__(self) -> None:
        # Accept any iterable for the collection fields
        object.__setattr__(self, "risk_factors", frozenset(self.risk_factors))
        object.__setattr__(self, "current_medications", tuple(self.current_medications))
        if self.support_system is not None:
            object.__setattr__(self, "support_system", SupportSystem(self.support_system))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PatientContext":
        """
        Build a context from a loosely-typed mapping.

        Accepts both snake_case and camelCase keys.
        """
        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        support = pick("support_system", "supportSystem")
        return cls(
            risk_factors=frozenset(pick("risk_factors", "riskFactors", default=())),
            previous_crises=bool(pick("previous_crises", "previousCrises", default=False)),
            current_medications=tuple(
                pick("current_medications", "currentMedications", default=())
            ),
            therapy_history=bool(pick("therapy_history", "therapyHistory", default=False)),
            support_system=SupportSystem(support) if support is not None else None,
        )
