"""
View projections for the condition case simulators.

Every condition page renders its selected case through one of the project_*
functions below. They are pure: the same record always gives an equal
ViewModel, and nothing is cached between calls.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from scenarios import ScenarioRecord

# Display categories understood by the templates (see static/main.css .badge-*)
CRITICAL = "critical"
WARNING = "warning"
NEUTRAL = "neutral"
SUCCESS = "success"
OUTLINE = "outline"

DISPLAY_CATEGORIES = (CRITICAL, WARNING, NEUTRAL, SUCCESS, OUTLINE)


@dataclass(frozen=True)
class Badge:
    label: str
    category: str


@dataclass(frozen=True)
class Metric:
    label: str
    value: str
    unit: str = ""


@dataclass(frozen=True)
class Panel:
    """
    A block of case details.

    kind is one of:
        'fields' - items are (label, value) pairs
        'list'   - items are plain strings
        'text'   - a single paragraph in items[0]
    """

    heading: str
    items: Tuple[Any, ...]
    kind: str = "fields"
    note: str = ""


@dataclass(frozen=True)
class ViewModel:
    record_id: str
    badges: Tuple[Badge, ...] = ()
    metrics: Tuple[Metric, ...] = ()
    panels: Tuple[Panel, ...] = ()
    highlight: Optional[Metric] = None
    interpretation: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.record_id,
            "badges": [{"label": b.label, "category": b.category} for b in self.badges],
            "metrics": [{"label": m.label, "value": m.value, "unit": m.unit} for m in self.metrics],
            "panels": [
                {
                    "heading": p.heading,
                    "kind": p.kind,
                    "items": [list(i) if isinstance(i, tuple) else i for i in p.items],
                    "note": p.note,
                }
                for p in self.panels
            ],
            "highlight": (
                {"label": self.highlight.label, "value": self.highlight.value}
                if self.highlight else None
            ),
            "interpretation": self.interpretation,
        }


def _num(value) -> str:
    """Render numbers without a trailing '.0' (3.0 -> '3', 7.5 -> '7.5')."""
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _fields(heading, pairs, note="") -> Panel:
    return Panel(heading, tuple((label, value) for label, value in pairs), "fields", note)


def _bullets(heading, items, note="") -> Panel:
    return Panel(heading, tuple(items), "list", note)


def _text(heading, text, note="") -> Panel:
    return Panel(heading, (text,), "text", note)


# ====== Severity lookup tables ======

STROKE_URGENCY = {"critical": CRITICAL}
SEPSIS_SEVERITY = {"Septic Shock": CRITICAL, "Severe Sepsis": WARNING}
PE_SEVERITY = {"Massive": CRITICAL, "Submassive": WARNING, "Low Risk": NEUTRAL}
ABDOMEN_URGENCY = {"Emergent": CRITICAL}
PREECLAMPSIA_SEVERITY = {"Critical": CRITICAL, "Severe": WARNING}
CASE_DIFFICULTY = {"Beginner": SUCCESS, "Intermediate": WARNING, "Advanced": CRITICAL}

METABOLIC_INTERPRETATION = {
    "DKA": (
        "Classic DKA with anion gap acidosis and positive ketones. Insulin deficiency "
        "leads to ketogenesis and metabolic acidosis."
    ),
    "HHS": (
        "Hyperosmolar hyperglycemic state with marked hyperglycemia but minimal ketosis. "
        "Severe dehydration and hyperosmolality are prominent."
    ),
    "Mixed DKA-HHS": (
        "Mixed picture with features of both DKA (ketosis, acidosis) and HHS (severe "
        "hyperglycemia, hyperosmolality). Requires management of both conditions."
    ),
}


def ectopic_risk_category(risk: str) -> str:
    if "High" in risk:
        return CRITICAL
    if "Moderate" in risk:
        return WARNING
    return NEUTRAL


def pneumonia_category(classification: str, severity: str) -> str:
    if classification == "CAP":
        return NEUTRAL
    return CRITICAL if severity == "Severe" else WARNING


def difficulty_badge(difficulty: str) -> Badge:
    return Badge(difficulty, CASE_DIFFICULTY.get(difficulty, NEUTRAL))


# ====== Per-domain projections ======

def project_acs(record: ScenarioRecord) -> ViewModel:
    return ViewModel(
        record_id=record.id,
        badges=(Badge(record["classification"], CRITICAL),),
        panels=(
            _fields("Clinical Presentation", [
                ("Pain Quality", record["pain_quality"]),
                ("Location", record["location"]),
                ("Radiation", record["radiation"]),
            ]),
            _fields("Diagnostic Findings", [
                ("ECG", record["ecg"]),
                ("Troponin", record["troponin"]),
            ]),
            _bullets("Key Features", record["key_features"]),
        ),
        highlight=Metric("Classification", record["classification"]),
    )


def project_stroke(record: ScenarioRecord) -> ViewModel:
    urgency = record["urgency"]
    fast = record["fast_exam"]
    return ViewModel(
        record_id=record.id,
        badges=(Badge(f"{urgency.upper()} URGENCY", STROKE_URGENCY.get(urgency, WARNING)),),
        panels=(
            _fields("Presentation", [
                ("Presentation", record["presentation"]),
                ("Time", record["onset_time"]),
            ]),
            _fields("FAST Exam Findings", [
                ("Face", fast["face"]),
                ("Arms", fast["arm"]),
                ("Speech", fast["speech"]),
                ("Time", fast["time"]),
            ]),
            _fields("Imaging & Classification", [
                ("Imaging", record["imaging"]),
                ("Classification", record["classification"]),
            ]),
        ),
        highlight=Metric("Classification", record["classification"]),
    )


def project_sepsis(record: ScenarioRecord) -> ViewModel:
    vitals = record["vitals"]
    labs = record["labs"]
    return ViewModel(
        record_id=record.id,
        badges=(Badge(record["severity"], SEPSIS_SEVERITY.get(record["severity"], NEUTRAL)),),
        metrics=(Metric("SOFA Score", _num(record["sofa_score"])),),
        panels=(
            _fields("Vital Signs", [
                ("BP", f"{vitals['bp']} mmHg"),
                ("HR", f"{_num(vitals['hr'])} bpm"),
                ("RR", f"{_num(vitals['rr'])}/min"),
                ("Temp", f"{_num(vitals['temp'])}°C"),
                ("SpO2", f"{_num(vitals['spo2'])}%"),
            ]),
            _fields("Laboratory Values", [
                ("Lactate", labs["lactate"]),
                ("WBC", labs["wbc"]),
                ("Creatinine", labs["creatinine"]),
            ]),
            _text("Suspected Source", record["source"],
                  note="Early source control and appropriate antibiotics are critical"),
        ),
    )


def project_metabolic(record: ScenarioRecord) -> ViewModel:
    classification = record["classification"]
    return ViewModel(
        record_id=record.id,
        badges=(
            Badge(classification, CRITICAL),
            Badge(record["severity"], OUTLINE),
        ),
        panels=(
            _fields("Laboratory Values", [
                ("Glucose", f"{_num(record['glucose'])} mg/dL"),
                ("pH", _num(record["ph"])),
                ("Bicarbonate", f"{_num(record['bicarb'])} mEq/L"),
                ("Anion Gap", _num(record["anion_gap"])),
            ]),
            _fields("Additional Studies", [
                ("Serum Osm", f"{_num(record['osmolality'])} mOsm/kg"),
                ("Ketones", record["ketones"]),
            ]),
        ),
        interpretation=METABOLIC_INTERPRETATION.get(classification, ""),
    )


def project_pe(record: ScenarioRecord) -> ViewModel:
    severity = record["severity"]
    return ViewModel(
        record_id=record.id,
        badges=(Badge(severity, PE_SEVERITY.get(severity, NEUTRAL)),),
        metrics=(Metric("Wells Score", _num(record["wells_score"])),),
        panels=(
            _text("Clinical Presentation", record["presentation"]),
            _bullets("Risk Factors", record["risk_factors"]),
            _fields("Diagnostic Approach", [
                ("D-dimer", record["d_dimer"]),
                ("Recommendation", record["recommendation"]),
            ]),
        ),
    )


def project_pneumonia(record: ScenarioRecord) -> ViewModel:
    classification = record["classification"]
    severity = record["severity"]
    vitals = record["vitals"]
    return ViewModel(
        record_id=record.id,
        badges=(
            Badge(classification, pneumonia_category(classification, severity)),
            Badge(f"{severity} Severity", OUTLINE),
        ),
        metrics=(Metric("CURB-65", _num(record["curb_score"])),),
        panels=(
            _fields("Clinical Presentation", [
                ("Presentation", record["presentation"]),
                ("Timing", record["timing"]),
            ]),
            _bullets("Risk Factors", record["risk_factors"]),
            _fields("Vital Signs", [
                ("Temperature", f"{_num(vitals['temp'])}°C"),
                ("Heart Rate", f"{_num(vitals['hr'])} bpm"),
                ("Respiratory Rate", f"{_num(vitals['rr'])}/min"),
                ("Blood Pressure", f"{vitals['bp']} mmHg"),
                ("SpO2", f"{_num(vitals['spo2'])}%"),
            ]),
        ),
    )


def project_abdomen(record: ScenarioRecord) -> ViewModel:
    urgency = record["urgency"]
    return ViewModel(
        record_id=record.id,
        badges=(
            Badge(urgency, ABDOMEN_URGENCY.get(urgency, WARNING)),
            Badge(record["diagnosis"], OUTLINE),
        ),
        panels=(
            _fields("Presentation", [
                ("Presentation", record["presentation"]),
                ("Location", record["pain_location"]),
                ("Character", record["pain_character"]),
            ]),
            _bullets("Physical Exam", record["physical_exam"]),
            _bullets("Labs & Imaging", record["labs_imaging"]),
        ),
        highlight=Metric("Diagnosis", record["diagnosis"]),
    )


def project_ectopic(record: ScenarioRecord) -> ViewModel:
    vitals = record["vitals"]
    return ViewModel(
        record_id=record.id,
        badges=(Badge(record["risk"], ectopic_risk_category(record["risk"])),),
        panels=(
            _text("Presentation", record["presentation"]),
            _bullets("Symptoms", record["symptoms"]),
            _fields("Vital Signs", [
                ("Blood Pressure", f"{vitals['bp']} mmHg"),
                ("Heart Rate", f"{_num(vitals['hr'])} bpm"),
            ]),
            _fields("Diagnostic Findings", [
                ("β-hCG", f"{_num(record['beta_hcg'])} mIU/mL"),
                ("Ultrasound", record["ultrasound"]),
            ]),
            _text("Management", record["management"]),
        ),
    )


def project_preeclampsia(record: ScenarioRecord) -> ViewModel:
    severity = record["severity"]
    labs = record["labs"]
    return ViewModel(
        record_id=record.id,
        badges=(
            Badge(severity, PREECLAMPSIA_SEVERITY.get(severity, NEUTRAL)),
            Badge(record["classification"], OUTLINE),
        ),
        panels=(
            _fields("Presentation", [
                ("Presentation", record["presentation"]),
                ("Gestational Age", record["gestational_age"]),
                ("Blood Pressure", record["bp"]),
            ]),
            _bullets("Symptoms", record["symptoms"]),
            _fields("Laboratory Values", [
                ("Protein", labs["protein"]),
                ("Platelets", labs["plt"]),
                ("AST", labs["ast"]),
                ("ALT", labs["alt"]),
                ("Creatinine", labs["cr"]),
            ]),
        ),
    )


PROJECTORS: Dict[str, Callable[[ScenarioRecord], ViewModel]] = {
    "acs": project_acs,
    "stroke": project_stroke,
    "sepsis": project_sepsis,
    "dka-hhs": project_metabolic,
    "pe": project_pe,
    "pneumonia": project_pneumonia,
    "acute-abdomen": project_abdomen,
    "ectopic": project_ectopic,
    "preeclampsia": project_preeclampsia,
}


def project(domain: str, record: ScenarioRecord) -> ViewModel:
    """Project a record with the fixed projection for its domain."""
    return PROJECTORS[domain](record)
