"""Rule-driven health scoring for menu items.

All rule tables are plain data. A rule fires at most once per dish when
any of its keywords appears in the lower-cased ``name + description``.
"""

from dataclasses import dataclass

from nutriguard.domain.health import ChronicCondition, HealthImpact, ImpactSeverity
from nutriguard.domain.menu import HEALTHY_SCORE, MODERATE_SCORE
from nutriguard.domain.profile import UserHealthProfile

BASE_SCORE = 100
MIN_SCORE = 0
MAX_SCORE = 100
DEFAULT_ALLERGEN_PENALTY = 50

MISSING_PROFILE_RECOMMENDATION = (
    "Please complete your health profile for personalized recommendations"
)


@dataclass(frozen=True)
class ScoreRule:
    """Score adjustment applied when any keyword matches.

    ``condition`` of None makes the rule apply to every profile. A
    NEGATIVE condition rule that fires also raises that condition's concern.
    """

    condition: ChronicCondition | None
    keywords: tuple[str, ...]
    delta: int
    severity: ImpactSeverity

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True)
class PhraseRule:
    """Human-readable benefit or concern attached to keyword matches."""

    keywords: tuple[str, ...]
    phrase: str
    condition: ChronicCondition | None = None
    diet_type: str | None = None

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True)
class ImpactRule:
    keywords: tuple[str, ...]
    impact: str
    recommendation: str
    severity: ImpactSeverity


SCORE_RULES: tuple[ScoreRule, ...] = (
    ScoreRule(
        ChronicCondition.DIABETES,
        ("sugar", "sweet", "honey"),
        -40,
        ImpactSeverity.NEGATIVE,
    ),
    ScoreRule(
        ChronicCondition.DIABETES,
        ("whole grain", "fiber"),
        10,
        ImpactSeverity.POSITIVE,
    ),
    ScoreRule(
        ChronicCondition.HYPERTENSION,
        ("salt", "sodium", "soy sauce"),
        -40,
        ImpactSeverity.NEGATIVE,
    ),
    ScoreRule(
        ChronicCondition.HYPERTENSION,
        ("low sodium", "unsalted"),
        10,
        ImpactSeverity.POSITIVE,
    ),
    ScoreRule(
        ChronicCondition.HEART_DISEASE,
        ("fried", "fatty", "cream"),
        -40,
        ImpactSeverity.NEGATIVE,
    ),
    ScoreRule(
        ChronicCondition.HEART_DISEASE,
        ("grilled", "baked", "steamed"),
        10,
        ImpactSeverity.POSITIVE,
    ),
    # Cooking methods
    ScoreRule(None, ("fried", "deep fried"), -30, ImpactSeverity.NEGATIVE),
    ScoreRule(None, ("cream sauce", "butter sauce"), -20, ImpactSeverity.NEGATIVE),
    ScoreRule(None, ("extra cheese", "creamy"), -20, ImpactSeverity.NEGATIVE),
    # Healthy ingredients
    ScoreRule(None, ("vegetable", "salad"), 15, ImpactSeverity.POSITIVE),
    ScoreRule(None, ("lean", "grilled"), 10, ImpactSeverity.POSITIVE),
    ScoreRule(None, ("whole grain", "brown rice"), 10, ImpactSeverity.POSITIVE),
)

IMPACT_RULES: dict[ChronicCondition, tuple[ImpactRule, ...]] = {
    ChronicCondition.DIABETES: (
        ImpactRule(
            ("sugar", "sweet"),
            "High sugar content may affect blood sugar levels",
            "Consider asking for sugar-free alternatives or smaller portions",
            ImpactSeverity.NEGATIVE,
        ),
        ImpactRule(
            ("whole grain", "fiber"),
            "Good source of fiber and complex carbohydrates",
            "This is a good choice for diabetes management",
            ImpactSeverity.POSITIVE,
        ),
        ImpactRule(
            (),
            "Moderate impact on blood sugar",
            "Monitor portion size and pair with protein",
            ImpactSeverity.NEUTRAL,
        ),
    ),
    ChronicCondition.HYPERTENSION: (
        ImpactRule(
            ("salt", "sodium"),
            "High sodium content may affect blood pressure",
            "Request low-sodium preparation or smaller portions",
            ImpactSeverity.NEGATIVE,
        ),
        ImpactRule(
            ("low sodium", "unsalted"),
            "Low sodium content is good for blood pressure",
            "This is a good choice for hypertension management",
            ImpactSeverity.POSITIVE,
        ),
        ImpactRule(
            (),
            "Moderate sodium content",
            "Monitor portion size and avoid adding extra salt",
            ImpactSeverity.NEUTRAL,
        ),
    ),
    ChronicCondition.HEART_DISEASE: (
        ImpactRule(
            ("fried", "fatty"),
            "High in saturated fats may affect heart health",
            "Consider grilled or baked alternatives",
            ImpactSeverity.NEGATIVE,
        ),
        ImpactRule(
            ("grilled", "baked"),
            "Low in saturated fats, good for heart health",
            "This is a good choice for heart health",
            ImpactSeverity.POSITIVE,
        ),
        ImpactRule(
            (),
            "Moderate impact on heart health",
            "Monitor portion size and fat content",
            ImpactSeverity.NEUTRAL,
        ),
    ),
}

GENERIC_IMPACT = ImpactRule(
    (),
    "General health impact",
    "Consider your overall dietary needs",
    ImpactSeverity.NEUTRAL,
)

BENEFIT_RULES: tuple[PhraseRule, ...] = (
    PhraseRule(
        ("vegetable", "plant"), "Rich in plant-based nutrients", diet_type="vegan"
    ),
    PhraseRule(
        ("protein", "fat"), "Good source of protein and healthy fats", diet_type="keto"
    ),
    PhraseRule(("low sodium", "unsalted"), "Low in sodium", diet_type="low-sodium"),
    PhraseRule(
        ("whole grain", "fiber"),
        "Supports steady blood sugar",
        condition=ChronicCondition.DIABETES,
    ),
    PhraseRule(
        ("low sodium", "unsalted"),
        "Supports healthy blood pressure",
        condition=ChronicCondition.HYPERTENSION,
    ),
    PhraseRule(
        ("grilled", "baked", "steamed"),
        "Heart-friendly preparation",
        condition=ChronicCondition.HEART_DISEASE,
    ),
    PhraseRule(("grilled", "baked"), "Low in unhealthy fats"),
    PhraseRule(("vegetable", "salad"), "Rich in vitamins and minerals"),
    PhraseRule(("whole grain", "fiber"), "Good source of fiber"),
)

# Concern raised when a negative score rule for the condition fires.
CONDITION_CONCERNS: dict[ChronicCondition, str] = {
    ChronicCondition.DIABETES: "High in sugar",
    ChronicCondition.HYPERTENSION: "High in sodium",
    ChronicCondition.HEART_DISEASE: "High in saturated fats",
}

# cuisine -> ((name keyword, suggestions), ...)
CUISINE_ALTERNATIVES: dict[str, tuple[tuple[str, tuple[str, ...]], ...]] = {
    "italian": (
        ("pasta", ("Zucchini Noodles", "Whole Wheat Pasta")),
        ("pizza", ("Cauliflower Crust Pizza",)),
    ),
    "mexican": (
        ("taco", ("Lettuce Wrap Tacos",)),
        ("burrito", ("Bowl Style (No Tortilla)",)),
    ),
    "indian": (("curry", ("Tofu Curry", "Vegetable Curry")),),
}

CONDITION_ALTERNATIVES: dict[ChronicCondition, str] = {
    ChronicCondition.DIABETES: "Grilled Protein with Vegetables",
    ChronicCondition.HYPERTENSION: "Low-Sodium Options",
    ChronicCondition.HEART_DISEASE: "Grilled or Baked Options",
}


@dataclass(frozen=True)
class _UnhealthyFlag:
    keywords: tuple[str, ...]
    tip: str


UNHEALTHY_FLAGS: tuple[_UnhealthyFlag, ...] = (
    _UnhealthyFlag(
        ("fried", "deep fried", "crispy"),
        "Ask whether it can be grilled or baked instead of fried.",
    ),
    _UnhealthyFlag(
        ("salt", "soy sauce", "sauce"),
        "Request sauce on the side and no added salt.",
    ),
    _UnhealthyFlag(
        ("cream", "butter", "cheese"),
        "Ask for lighter use of cream, butter or cheese.",
    ),
    _UnhealthyFlag(
        ("sweet", "sugar", "syrup"),
        "Ask for less sugar or syrup.",
    ),
)

RECOMMENDATION_EXCELLENT = (
    "Excellent choice! This dish aligns well with your health profile."
)
RECOMMENDATION_GOOD = "Good option, but consider portion size and preparation method."
RECOMMENDATION_POOR = (
    "This dish may not be the best choice for your health profile. "
    "Consider alternatives."
)


def dish_text(name: str, description: str) -> str:
    """Lower-cased text every keyword rule is matched against."""
    return f"{name} {description}".lower()


def _profile_conditions(profile: UserHealthProfile) -> list[ChronicCondition]:
    known: list[ChronicCondition] = []
    for raw in profile.chronic_conditions:
        condition = ChronicCondition.parse(raw)
        if condition is not None and condition not in known:
            known.append(condition)
    return known


@dataclass(frozen=True)
class HealthScorer:
    """Score and explain a dish against a user profile."""

    allergen_penalty: int = DEFAULT_ALLERGEN_PENALTY
    rules: tuple[ScoreRule, ...] = SCORE_RULES

    def score(
        self, name: str, description: str, profile: UserHealthProfile | None
    ) -> int:
        """Return a 0..100 suitability score; 0 without a profile."""
        if profile is None:
            return 0
        text = dish_text(name, description)
        score = BASE_SCORE
        for allergy in profile.food_allergies:
            if allergy.lower() in text:
                score -= self.allergen_penalty
        conditions = _profile_conditions(profile)
        for rule in self.rules:
            if rule.condition is not None and rule.condition not in conditions:
                continue
            if rule.matches(text):
                score += rule.delta
        return max(MIN_SCORE, min(MAX_SCORE, score))

    def health_impacts(
        self, name: str, description: str, profile: UserHealthProfile | None
    ) -> list[HealthImpact]:
        """Return one impact per chronic condition in the profile."""
        if profile is None:
            return []
        text = dish_text(name, description)
        impacts: list[HealthImpact] = []
        for raw in profile.chronic_conditions:
            condition = ChronicCondition.parse(raw)
            rules = IMPACT_RULES.get(condition, ()) if condition is not None else ()
            selected = next(
                (rule for rule in rules if not rule.keywords or rule.matches(text)),
                GENERIC_IMPACT,
            )
            impacts.append(
                HealthImpact(
                    condition=raw,
                    impact=selected.impact,
                    recommendation=selected.recommendation,
                    severity=selected.severity,
                )
            )
        return impacts

    def benefits(
        self, name: str, description: str, profile: UserHealthProfile | None
    ) -> list[str]:
        if profile is None:
            return []
        text = dish_text(name, description)
        diet = (profile.diet_type or "").lower()
        conditions = _profile_conditions(profile)
        benefits: list[str] = []
        for rule in BENEFIT_RULES:
            if rule.diet_type is not None and rule.diet_type != diet:
                continue
            if rule.condition is not None and rule.condition not in conditions:
                continue
            if rule.matches(text) and rule.phrase not in benefits:
                benefits.append(rule.phrase)
        return benefits

    def concerns(
        self, name: str, description: str, profile: UserHealthProfile | None
    ) -> list[str]:
        if profile is None:
            return []
        text = dish_text(name, description)
        concerns = [
            f"Contains {allergy}"
            for allergy in profile.food_allergies
            if allergy.lower() in text
        ]
        conditions = _profile_conditions(profile)
        for rule in self.rules:
            if rule.condition is None or rule.condition not in conditions:
                continue
            if rule.severity is not ImpactSeverity.NEGATIVE:
                continue
            phrase = CONDITION_CONCERNS[rule.condition]
            if rule.matches(text) and phrase not in concerns:
                concerns.append(phrase)
        return concerns

    def alternatives(
        self, name: str, cuisine: str, profile: UserHealthProfile | None
    ) -> list[str]:
        """Suggest substitutions for the dish and the user's conditions."""
        if profile is None:
            return []
        lowered = name.lower()
        alternatives: list[str] = []
        for keyword, suggestions in CUISINE_ALTERNATIVES.get(cuisine.lower(), ()):
            if keyword in lowered:
                alternatives.extend(suggestions)
        for condition in _profile_conditions(profile):
            alternatives.append(CONDITION_ALTERNATIVES[condition])
        return alternatives

    def recommendation(
        self, name: str, description: str, profile: UserHealthProfile | None
    ) -> str:
        """Graded recommendation from score band and unhealthy flags."""
        if profile is None:
            return MISSING_PROFILE_RECOMMENDATION
        score = self.score(name, description, profile)
        text = dish_text(name, description)
        tips = [
            flag.tip
            for flag in UNHEALTHY_FLAGS
            if any(k in text for k in flag.keywords)
        ]
        if score >= HEALTHY_SCORE and not tips:
            return RECOMMENDATION_EXCELLENT
        base = RECOMMENDATION_GOOD if score >= MODERATE_SCORE else RECOMMENDATION_POOR
        return " ".join([base, *tips])
