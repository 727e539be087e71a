"""Traffic-light safety check of menu lines against dietary restrictions."""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from nutriguard.domain.profile import UserHealthProfile

_INGREDIENT_SEPARATORS = re.compile(r"[,()/]")


class MedicalCondition(StrEnum):
    """Conditions with a fixed list of foods to avoid."""

    DIABETES = "diabetes"
    HYPERTENSION = "hypertension"
    CELIAC_DISEASE = "celiac disease"
    LACTOSE_INTOLERANCE = "lactose intolerance"
    NUT_ALLERGY = "nut allergy"
    SHELLFISH_ALLERGY = "shellfish allergy"

    @property
    def dietary_restrictions(self) -> tuple[str, ...]:
        return _RESTRICTIONS[self]


_RESTRICTIONS: dict[MedicalCondition, tuple[str, ...]] = {
    MedicalCondition.DIABETES: ("sugar", "high-carb foods"),
    MedicalCondition.HYPERTENSION: ("high-sodium foods",),
    MedicalCondition.CELIAC_DISEASE: ("gluten", "wheat"),
    MedicalCondition.LACTOSE_INTOLERANCE: ("dairy", "milk", "cheese"),
    MedicalCondition.NUT_ALLERGY: ("nuts", "peanuts", "tree nuts"),
    MedicalCondition.SHELLFISH_ALLERGY: ("shellfish", "seafood"),
}

# Profile allergy names that map onto a restricted condition.
_ALLERGY_CONDITIONS: dict[str, MedicalCondition] = {
    "gluten": MedicalCondition.CELIAC_DISEASE,
    "lactose": MedicalCondition.LACTOSE_INTOLERANCE,
    "nuts": MedicalCondition.NUT_ALLERGY,
    "peanuts": MedicalCondition.NUT_ALLERGY,
    "shellfish": MedicalCondition.SHELLFISH_ALLERGY,
}


class FoodSafetyLevel(StrEnum):
    SAFE = "safe"
    CAUTION = "caution"
    UNSAFE = "unsafe"

    @property
    def advice(self) -> str:
        return _ADVICE[self]


_ADVICE: dict[FoodSafetyLevel, str] = {
    FoodSafetyLevel.SAFE: (
        "This item appears to be safe based on your dietary restrictions."
    ),
    FoodSafetyLevel.CAUTION: (
        "Exercise caution with this item. "
        "Consider asking the staff about specific ingredients."
    ),
    FoodSafetyLevel.UNSAFE: (
        "This item contains ingredients that conflict with your dietary "
        "restrictions. We recommend avoiding it."
    ),
}


@dataclass(frozen=True)
class SafetySummary:
    """Counts of menu lines per safety level."""

    safe: int
    caution: int
    unsafe: int


@dataclass(frozen=True)
class FoodSafetyChecker:
    """Classify ingredient lists as safe, caution or unsafe."""

    conditions: frozenset[MedicalCondition] = frozenset()
    additional_restrictions: tuple[str, ...] = ()

    @classmethod
    def from_profile(cls, profile: UserHealthProfile) -> "FoodSafetyChecker":
        """Map profile conditions and allergies onto restriction lists."""
        conditions: set[MedicalCondition] = set()
        extra: list[str] = []
        for entry in profile.chronic_conditions:
            condition = _parse_condition(entry.lower())
            if condition is not None:
                conditions.add(condition)
        for allergy in profile.food_allergies:
            lowered = allergy.lower()
            mapped = _parse_condition(lowered) or _ALLERGY_CONDITIONS.get(lowered)
            if mapped is not None:
                conditions.add(mapped)
            elif lowered not in extra:
                extra.append(lowered)
        return cls(
            conditions=frozenset(conditions), additional_restrictions=tuple(extra)
        )

    def restrictions(self) -> list[str]:
        restrictions: list[str] = []
        for condition in sorted(self.conditions):
            restrictions.extend(condition.dietary_restrictions)
        restrictions.extend(self.additional_restrictions)
        return restrictions

    def check(self, ingredients: Iterable[str]) -> FoodSafetyLevel:
        """Return UNSAFE on a direct match and CAUTION on a partial one."""
        lowered_ingredients = [ingredient.lower() for ingredient in ingredients]
        lowered_restrictions = [
            restriction.lower() for restriction in self.restrictions()
        ]

        for ingredient in lowered_ingredients:
            if any(restriction in ingredient for restriction in lowered_restrictions):
                return FoodSafetyLevel.UNSAFE

        for ingredient in lowered_ingredients:
            if any(ingredient in restriction for restriction in lowered_restrictions):
                return FoodSafetyLevel.CAUTION

        return FoodSafetyLevel.SAFE

    def check_line(self, line: str) -> FoodSafetyLevel:
        """Split a menu line into ingredient fragments and check them."""
        ingredients = [
            part.strip() for part in _INGREDIENT_SEPARATORS.split(line) if part.strip()
        ]
        return self.check(ingredients)


def _parse_condition(text: str) -> MedicalCondition | None:
    try:
        return MedicalCondition(text)
    except ValueError:
        return None


def summarize_safety(levels: Iterable[FoodSafetyLevel]) -> SafetySummary:
    counted = list(levels)
    return SafetySummary(
        safe=counted.count(FoodSafetyLevel.SAFE),
        caution=counted.count(FoodSafetyLevel.CAUTION),
        unsafe=counted.count(FoodSafetyLevel.UNSAFE),
    )
