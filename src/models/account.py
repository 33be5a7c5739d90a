from dataclasses import dataclass, field
from enum import Enum


class AccountStatus(Enum):
    COMPLETE = "complete"
    RESTRICTED = "restricted"
    RESTRICTED_SOON = "restricted_soon"


@dataclass
class AccountRequirements:
    currently_due: list[str] = field(default_factory=list)
    past_due: list[str] = field(default_factory=list)
    eventually_due: list[str] = field(default_factory=list)
    disabled_reason: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "AccountRequirements":
        return cls(
            currently_due=list(data.get("currently_due") or []),
            past_due=list(data.get("past_due") or []),
            eventually_due=list(data.get("eventually_due") or []),
            disabled_reason=data.get("disabled_reason") or None,
        )


@dataclass
class AccountSnapshot:
    """Connected Stripe account as returned by ``GET /account`` for one mode."""

    id: str
    email: str = ""
    country: str = ""
    requirements: AccountRequirements | None = None
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> "AccountSnapshot | None":
        """Build a snapshot from an API/cached payload. Empty payloads yield None."""
        if not data or not data.get("id"):
            return None
        requirements = data.get("requirements")
        return cls(
            id=data["id"],
            email=data.get("email") or "",
            country=data.get("country") or "",
            requirements=AccountRequirements.from_dict(requirements) if requirements else None,
            raw=dict(data),
        )

    def to_dict(self) -> dict:
        return dict(self.raw)
