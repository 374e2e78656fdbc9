"""
Checkbox risk-score calculators (Wells PE, CURB-65).

Each calculator is a single ordered list of criteria; the user's ticks are
passed in as a set of criterion ids, so there is no positional coupling
between the criteria and the flags.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class Criterion:
    id: str
    label: str
    weight: float
    code: Optional[str] = None


@dataclass(frozen=True)
class ScoreBand:
    """Band covering [lower, next band's lower). The last band is open-ended."""

    key: str
    label: str
    lower: float
    range_label: str = ""
    guidance: str = ""


@dataclass(frozen=True)
class ScoreResult:
    total: float
    band: ScoreBand
    rows: Tuple[Dict[str, Any], ...]

    @property
    def checked_ids(self) -> List[str]:
        return [row["criterion"].id for row in self.rows if row["checked"]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "band": {
                "key": self.band.key,
                "label": self.band.label,
                "range": self.band.range_label,
                "guidance": self.band.guidance,
            },
            "rows": [
                {
                    "id": row["criterion"].id,
                    "label": row["criterion"].label,
                    "weight": row["weight"],
                    "checked": row["checked"],
                }
                for row in self.rows
            ],
        }


class ScoreCalculator:
    """Sums the weights of checked criteria and classifies the total into a band."""

    def __init__(self, id: str, title: str, criteria: Iterable[Criterion], bands: Iterable[ScoreBand],
                 description: str = "", precision: int = 1):
        self.id = id
        self.title = title
        self.description = description
        self.precision = precision
        self.criteria: Tuple[Criterion, ...] = tuple(criteria)
        self.bands: Tuple[ScoreBand, ...] = tuple(bands)

        ids = [c.id for c in self.criteria]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate criterion ids in {id}")
        if any(c.weight < 0 for c in self.criteria):
            raise ValueError(f"Negative criterion weight in {id}")
        if not self.bands or self.bands[0].lower != 0:
            raise ValueError(f"First band of {id} must start at 0")
        lowers = [b.lower for b in self.bands]
        if any(a >= b for a, b in zip(lowers, lowers[1:])):
            raise ValueError(f"Bands of {id} must be strictly increasing")

    @property
    def max_score(self) -> float:
        return sum(c.weight for c in self.criteria)

    def classify(self, total: float) -> ScoreBand:
        """Boundary values belong to the band they open."""
        band = self.bands[0]
        for candidate in self.bands:
            if total >= candidate.lower:
                band = candidate
        return band

    def evaluate(self, checked_ids: Iterable[str] = ()) -> ScoreResult:
        """
        Score a set of ticked criteria.

        Args:
            checked_ids: Ids of the ticked criteria, in any order

        Returns:
            ScoreResult with total, band and one row per criterion

        Raises:
            KeyError: if an id does not name a criterion of this calculator
        """
        checked = set(checked_ids)
        known = {c.id for c in self.criteria}
        unknown = checked - known
        if unknown:
            raise KeyError(f"Unknown criteria for {self.id}: {sorted(unknown)}")

        rows = tuple(
            {"criterion": c, "weight": c.weight, "checked": c.id in checked}
            for c in self.criteria
        )
        total = round(sum(row["weight"] for row in rows if row["checked"]), 2)
        return ScoreResult(total=total, band=self.classify(total), rows=rows)

    def format_total(self, total: float) -> str:
        return f"{total:.{self.precision}f}"


WELLS_PE = ScoreCalculator(
    id="wells",
    title="Wells Score Calculator",
    description="Calculate pretest probability for PE",
    criteria=[
        Criterion("clinical_signs", "Clinical signs of DVT", 3.0),
        Criterion("alternative_less_likely", "PE most likely diagnosis (or equally likely)", 3.0),
        Criterion("heart_rate", "Heart rate > 100", 1.5),
        Criterion("immobilization", "Immobilization ≥ 3 days or surgery in past 4 weeks", 1.5),
        Criterion("previous_vte", "Previous PE or DVT", 1.5),
        Criterion("hemoptysis", "Hemoptysis", 1.0),
        Criterion("malignancy", "Malignancy", 1.0),
    ],
    bands=[
        ScoreBand("low", "Low probability", 0, "< 2"),
        ScoreBand("moderate", "Moderate probability", 2, "2-6"),
        ScoreBand("high", "High probability", 6, "≥ 6"),
    ],
)

CURB_65 = ScoreCalculator(
    id="curb65",
    title="CURB-65 Severity Score (CAP)",
    description="Risk stratification for community-acquired pneumonia",
    precision=0,
    criteria=[
        Criterion("confusion", "Confusion (new onset)", 1, "C"),
        Criterion("urea", "Urea > 7 mmol/L (BUN > 19 mg/dL)", 1, "U"),
        Criterion("respiratory_rate", "Respiratory rate ≥ 30/min", 1, "R"),
        Criterion("blood_pressure", "Blood pressure: SBP < 90 or DBP ≤ 60", 1, "B"),
        Criterion("age", "Age ≥ 65 years", 1, "65"),
    ],
    bands=[
        ScoreBand("low", "Low risk", 0, "0-1", "Consider outpatient treatment"),
        ScoreBand("moderate", "Moderate risk", 2, "2",
                  "Consider short hospitalization or close outpatient follow-up"),
        ScoreBand("high", "High risk", 3, "3-5", "Hospitalize, consider ICU for score 4-5"),
    ],
)

CALCULATORS = {calc.id: calc for calc in (WELLS_PE, CURB_65)}
