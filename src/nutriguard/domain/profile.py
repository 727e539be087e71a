"""User health profile supplied by the profile manager."""

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

_NONE_SENTINELS = {"", "none"}


class UserHealthProfile(BaseModel):
    """Read-only medical and dietary profile used for scoring."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    chronic_conditions: tuple[str, ...] = ()
    food_allergies: tuple[str, ...] = ()
    medications: tuple[str, ...] = ()
    diet_type: str | None = None
    permanent_dislikes: tuple[str, ...] = ()
    activity_level: str = "Moderate"
    long_term_goals: tuple[str, ...] = ()

    @field_validator(
        "chronic_conditions",
        "food_allergies",
        "medications",
        "permanent_dislikes",
        "long_term_goals",
        mode="before",
    )
    @classmethod
    def _normalize_entries(cls, value: object) -> tuple[str, ...]:
        """Strip entries, drop blanks and "None" markers, keep first occurrence."""
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        seen: dict[str, None] = {}
        for raw in value:  # type: ignore[union-attr]
            entry = str(raw).strip()
            if entry.lower() in _NONE_SENTINELS:
                continue
            seen.setdefault(entry, None)
        return tuple(seen)

    @field_validator("diet_type", mode="before")
    @classmethod
    def _normalize_diet(cls, value: object) -> str | None:
        if value is None:
            return None
        cleaned = str(value).strip()
        if cleaned.lower() in _NONE_SENTINELS:
            return None
        return cleaned

    @classmethod
    def default(cls) -> "UserHealthProfile":
        """Profile used before the user completes the health form."""
        return cls(
            chronic_conditions=("None",),
            food_allergies=("None",),
            medications=("None",),
            diet_type="Regular",
            permanent_dislikes=("None",),
            activity_level="Moderate",
            long_term_goals=("Maintain healthy diet",),
        )
