"""
Authored content for Emergency Master.

Everything here is static, synthetic teaching data, loaded once into
registries at import time. Condition pages are described as an ordered list
of blocks; the 'simulator', 'calculator' and 'pathway' blocks are the
interactive parts, the rest are reference material.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from projector import ViewModel, project
from scenarios import ALL_CATEGORIES, ScenarioRecord, ScenarioRegistry

APP_NAME = "Emergency Master"
APP_VERSION = "1.0.0"

FOOTER_DISCLAIMER = (
    "This app is for educational purposes only and should not be used as a "
    "substitute for professional medical advice, diagnosis, or treatment."
)


@dataclass(frozen=True)
class Block:
    """
    One section of a condition page.

    kind:
        simulator   - the case selector and projected case view
        calculator  - an interactive score calculator (items[0] is its id)
        pathway     - a stepper over the condition's pathway registry
        concepts    - items are (heading, text) pairs
        bullets     - items are strings
        numbered    - items are strings, shown with step numbers
        cards       - items are dicts: heading, optional body, fields, badge
        table       - columns plus rows of cells
        grouped     - items are (group heading, [strings]) pairs
        highlight   - items[0] is a dict: value, unit, fields
    """

    kind: str
    title: str = ""
    description: str = ""
    items: Tuple[Any, ...] = ()
    columns: Tuple[str, ...] = ()
    note: str = ""
    note_label: str = ""
    tone: str = "info"
    icon_tone: str = ""


@dataclass(frozen=True)
class Condition:
    slug: str
    title: str
    subtitle: str
    accent: str
    simulator_title: str
    simulator_description: str
    cases: ScenarioRegistry
    blocks: Tuple[Block, ...]
    pathway: Optional[ScenarioRegistry] = None
    calculators: Tuple[str, ...] = field(default=())

    def project(self, record: ScenarioRecord) -> ViewModel:
        return project(self.slug, record)


def _cards(rows: List[Dict[str, str]], heading_key: str, labels: Dict[str, str],
           badge_key: Optional[str] = None, badge_suffix: str = "") -> Tuple[Dict[str, Any], ...]:
    """Turn authored rows into card dicts with labelled fields."""
    cards = []
    for row in rows:
        card = {
            "heading": row[heading_key],
            "fields": tuple((label, row[key]) for key, label in labels.items()),
        }
        if badge_key:
            card["badge"] = f"{row[badge_key]}{badge_suffix}"
        cards.append(card)
    return tuple(cards)


# ====== Acute Coronary Syndrome ======

ACS_CASES = ScenarioRegistry.from_dicts([
    {
        "id": "case1",
        "pain_quality": "Crushing, substernal pressure",
        "location": "Chest, substernal",
        "radiation": "Left arm and jaw",
        "ecg": "ST-elevation in anterior leads (V2-V4)",
        "troponin": "Elevated (5.2 ng/mL)",
        "classification": "STEMI - Anterior Wall",
        "key_features": ["Time-sensitive", "Activation pathway needed", "Typical radiation pattern"],
    },
    {
        "id": "case2",
        "pain_quality": "Sharp, pressure-like",
        "location": "Substernal",
        "radiation": "None",
        "ecg": "ST-depression in lateral leads, T-wave inversion",
        "troponin": "Elevated (2.8 ng/mL)",
        "classification": "NSTEMI",
        "key_features": ["High-risk features", "Early invasive strategy", "Antiplatelet therapy"],
    },
    {
        "id": "case3",
        "pain_quality": "Pressure, occurs with exertion",
        "location": "Chest",
        "radiation": "Shoulder",
        "ecg": "Normal, no acute changes",
        "troponin": "Normal (< 0.04 ng/mL)",
        "classification": "Unstable Angina",
        "key_features": ["Increasing frequency", "Risk stratification needed", "Medical optimization"],
    },
], category_field=None)

ACS = Condition(
    slug="acs",
    title="Acute Coronary Syndrome / MI",
    subtitle="Master chest pain triage, ECG interpretation, and risk stratification",
    accent="red",
    simulator_title="Chest Pain Triage Simulator",
    simulator_description="Analyze clinical presentations and classify the type of ACS",
    cases=ACS_CASES,
    blocks=(
        Block("concepts", "Key Concepts", items=(
            ("STEMI", "ST-elevation myocardial infarction requiring immediate reperfusion therapy"),
            ("NSTEMI", "Non-ST-elevation MI with elevated biomarkers but no ST elevation"),
            ("Unstable Angina", "Ischemic chest pain without biomarker elevation"),
        )),
        Block("simulator"),
        Block("cards", "ECG Pattern Recognition", "Conceptual understanding of key ECG findings in ACS",
              items=_cards([
                  {"pattern": "ST-Elevation", "significance": "STEMI - Immediate activation pathway",
                   "location": "Helps identify culprit artery"},
                  {"pattern": "ST-Depression", "significance": "NSTEMI or posterior MI - High risk",
                   "location": "May indicate ischemia or reciprocal changes"},
                  {"pattern": "T-Wave Inversion", "significance": "May indicate ischemia or recent MI",
                   "location": "Territory-specific changes"},
                  {"pattern": "New LBBB", "significance": "STEMI equivalent - Consider activation",
                   "location": "May mask ST changes"},
              ], "pattern", {"significance": "Significance", "location": "Location"})),
        Block("bullets", "Red Flags", "Critical findings requiring immediate attention", icon_tone="critical",
              items=(
                  "Diaphoresis with chest pain",
                  "Hypotension",
                  "Pulmonary edema / crackles",
                  "New murmur (mechanical complication)",
                  "Syncope with chest pain",
                  "Radiation to jaw, arm, or back",
              )),
    ),
)


# ====== Stroke ======

STROKE_CASES = ScenarioRegistry.from_dicts([
    {
        "id": "case1",
        "presentation": "68 y/o with sudden right-sided weakness and aphasia",
        "onset_time": "45 minutes ago",
        "fast_exam": {
            "face": "Left facial droop",
            "arm": "Right arm drift, unable to hold against gravity",
            "speech": "Expressive aphasia, difficulty forming words",
            "time": "Last known well: 45 minutes ago",
        },
        "imaging": "Non-contrast CT: No hemorrhage. CTA: Left MCA occlusion",
        "classification": "Acute Ischemic Stroke - Large Vessel Occlusion (LVO)",
        "urgency": "critical",
    },
    {
        "id": "case2",
        "presentation": "72 y/o with sudden severe headache and decreased consciousness",
        "onset_time": "1 hour ago",
        "fast_exam": {
            "face": "No asymmetry",
            "arm": "Decreased movement bilaterally",
            "speech": "Confused, dysarthric",
            "time": "Sudden onset 1 hour ago",
        },
        "imaging": "Non-contrast CT: Hyperdensity in subarachnoid space",
        "classification": "Hemorrhagic Stroke - Subarachnoid Hemorrhage",
        "urgency": "critical",
    },
    {
        "id": "case3",
        "presentation": "55 y/o with transient left arm weakness, now resolved",
        "onset_time": "3 hours ago, symptoms lasted 15 minutes",
        "fast_exam": {
            "face": "Normal, symmetric",
            "arm": "Full strength bilaterally (now)",
            "speech": "Normal",
            "time": "Symptoms resolved, occurred 3 hours ago",
        },
        "imaging": "Non-contrast CT: No acute changes. MRI with DWI: Small punctate infarct",
        "classification": "TIA vs Small Stroke - High Risk for Recurrence",
        "urgency": "high",
    },
], category_field=None)

STROKE_IMAGING_PATHWAY = ScenarioRegistry.from_dicts([
    {
        "id": "ncct",
        "step": "Non-Contrast CT Head",
        "purpose": "Rule out hemorrhage",
        "findings": "Exclude bleeding, mass effect, early ischemic changes",
        "next_step": "If no hemorrhage → proceed to vascular imaging",
    },
    {
        "id": "cta",
        "step": "CT Angiography (CTA)",
        "purpose": "Identify large vessel occlusion",
        "findings": "Evaluate for LVO in anterior or posterior circulation",
        "next_step": "If LVO → consider thrombectomy candidacy",
    },
    {
        "id": "ctp",
        "step": "CT Perfusion (Optional)",
        "purpose": "Assess salvageable tissue",
        "findings": "Core infarct vs penumbra",
        "next_step": "Helps extend intervention window in select cases",
    },
], category_field=None)

STROKE = Condition(
    slug="stroke",
    title="Stroke",
    subtitle="FAST exam, imaging workflow, and time-sensitive stroke management",
    accent="purple",
    simulator_title="Stroke Case Simulator",
    simulator_description="Practice FAST exam and classification",
    cases=STROKE_CASES,
    pathway=STROKE_IMAGING_PATHWAY,
    blocks=(
        Block("concepts", "FAST Exam - Rapid Stroke Assessment", "Systematic approach to stroke recognition",
              items=(
                  ("Face", "Ask patient to smile. Look for facial droop or asymmetry"),
                  ("Arms", "Ask patient to raise both arms. Look for drift or weakness"),
                  ("Speech", "Ask patient to repeat phrase. Assess for slurring or aphasia"),
                  ("Time", "Note time of symptom onset or last known well"),
              )),
        Block("simulator"),
        Block("pathway", "Stroke Imaging Pathway", "Step-by-step imaging workflow for acute stroke"),
        Block("bullets", "Posterior Stroke Clues", "Don't miss posterior circulation strokes!",
              icon_tone="warning", tone="warning", note_label="Key Point",
              note=(
                  "Isolated dizziness can be a posterior stroke, especially with risk factors or "
                  "additional neurologic signs. Consider HINTS exam (Head Impulse, Nystagmus, Test of "
                  "Skew) when evaluating acute vertigo."
              ),
              items=(
                  "Vertigo with neurologic signs",
                  "Diplopia, visual field defects",
                  "Ataxia, dysphagia",
                  "Crossed findings (face one side, body opposite)",
                  "Nystagmus with acute onset",
                  "Severe imbalance",
              )),
    ),
)


# ====== Sepsis ======

SEPSIS_CASES = ScenarioRegistry.from_dicts([
    {
        "id": "case1",
        "vitals": {"bp": "86/52", "hr": 124, "rr": 24, "temp": 39.2, "spo2": 94},
        "labs": {"lactate": "3.8 mmol/L", "wbc": "18.2 K/μL", "creatinine": "1.8 mg/dL"},
        "source": "Urinary tract infection",
        "severity": "Septic Shock",
        "sofa_score": 8,
    },
    {
        "id": "case2",
        "vitals": {"bp": "102/68", "hr": 110, "rr": 22, "temp": 38.8, "spo2": 96},
        "labs": {"lactate": "2.2 mmol/L", "wbc": "15.8 K/μL", "creatinine": "1.2 mg/dL"},
        "source": "Pneumonia (right lower lobe)",
        "severity": "Sepsis",
        "sofa_score": 4,
    },
    {
        "id": "case3",
        "vitals": {"bp": "78/45", "hr": 135, "rr": 28, "temp": 39.8, "spo2": 91},
        "labs": {"lactate": "5.2 mmol/L", "wbc": "22.5 K/μL", "creatinine": "2.4 mg/dL"},
        "source": "Intra-abdominal (suspected cholangitis)",
        "severity": "Septic Shock",
        "sofa_score": 11,
    },
], category_field=None)

SEPSIS = Condition(
    slug="sepsis",
    title="Sepsis",
    subtitle="Early recognition, severity assessment, and source identification",
    accent="orange",
    simulator_title="Sepsis Severity Analyzer",
    simulator_description="Assess severity and identify organ dysfunction",
    cases=SEPSIS_CASES,
    blocks=(
        Block("concepts", "Sepsis Definitions (Sepsis-3)", items=(
            ("Sepsis",
             "Life-threatening organ dysfunction caused by dysregulated host response to "
             "infection (SOFA score ≥ 2)"),
            ("Septic Shock",
             "Sepsis with persistent hypotension requiring vasopressors to maintain MAP ≥ 65 mmHg "
             "AND lactate > 2 mmol/L despite adequate fluid resuscitation"),
        )),
        Block("simulator"),
        Block("cards", "SOFA Score (Sequential Organ Failure Assessment)",
              "Conceptual framework for organ dysfunction assessment",
              note_label="Clinical Use",
              note=(
                  "SOFA score ≥ 2 indicates organ dysfunction. Higher scores correlate with increased "
                  "mortality. Used to identify sepsis and track progression."
              ),
              items=tuple(
                  {"heading": organ, "body": criteria, "fields": (), "badge": "1-4 points"}
                  for organ, criteria in (
                      ("Respiration", "PaO2/FiO2 ratio < 400"),
                      ("Coagulation", "Platelets < 150K"),
                      ("Liver", "Bilirubin elevation"),
                      ("Cardiovascular", "Hypotension, vasopressors"),
                      ("CNS", "GCS < 15"),
                      ("Renal", "Creatinine or urine output"),
                  )
              )),
        Block("concepts", "Common Infection Sources", "Source identification guides antibiotic selection",
              items=(
                  ("Pneumonia", "Cough, dyspnea, infiltrate on CXR"),
                  ("Urinary", "Dysuria, CVA tenderness, UA findings"),
                  ("Abdominal", "Peritoneal signs, imaging findings"),
                  ("Skin/Soft Tissue", "Cellulitis, abscess, wound"),
                  ("Catheter/Line", "Line site infection, bacteremia"),
                  ("CNS", "Meningeal signs, altered mental status"),
              )),
        Block("bullets", "Red Flags for Severe Sepsis", icon_tone="critical", items=(
            "Hypotension despite fluids (shock)",
            "Lactate > 4 mmol/L",
            "Altered mental status",
            "Acute kidney injury",
            "Respiratory failure",
            "Coagulopathy",
        )),
    ),
)


# ====== DKA / HHS ======

METABOLIC_CASES = ScenarioRegistry.from_dicts([
    {
        "id": "case1",
        "glucose": 485,
        "ph": 7.12,
        "bicarb": 8,
        "anion_gap": 28,
        "serum": 295,
        "ketones": "Strongly positive (4+)",
        "osmolality": 310,
        "classification": "DKA",
        "severity": "Severe",
    },
    {
        "id": "case2",
        "glucose": 892,
        "ph": 7.34,
        "bicarb": 22,
        "anion_gap": 14,
        "serum": 358,
        "ketones": "Negative to trace",
        "osmolality": 365,
        "classification": "HHS",
        "severity": "Severe",
    },
    {
        "id": "case3",
        "glucose": 625,
        "ph": 7.18,
        "bicarb": 12,
        "anion_gap": 24,
        "serum": 325,
        "ketones": "Moderate (2+)",
        "osmolality": 338,
        "classification": "Mixed DKA-HHS",
        "severity": "Severe",
    },
], category_field=None)

DKA_HHS = Condition(
    slug="dka-hhs",
    title="DKA / HHS",
    subtitle="Diabetic Ketoacidosis & Hyperosmolar Hyperglycemic State",
    accent="blue",
    simulator_title="Metabolic Crisis Analyzer",
    simulator_description="Differentiate DKA from HHS based on lab values",
    cases=METABOLIC_CASES,
    blocks=(
        Block("table", "DKA vs HHS: Key Differences", "Understand the metabolic distinctions",
              columns=("Feature", "DKA", "HHS"),
              items=(
                  ("Glucose", "Usually 250-600 mg/dL", "Typically > 600 mg/dL (often > 800)"),
                  ("pH", "< 7.30", "> 7.30"),
                  ("Bicarbonate", "< 18 mEq/L", "Usually > 18 mEq/L"),
                  ("Anion Gap", "Elevated (> 12)", "Normal or mildly elevated"),
                  ("Ketones", "Strongly positive", "Absent or trace"),
                  ("Osmolality", "Variable, usually < 320", "Markedly elevated (> 320)"),
                  ("Presentation", "Days, nausea/vomiting, Kussmaul breathing",
                   "Weeks, profound dehydration, AMS"),
              )),
        Block("simulator"),
        Block("bullets", "Critical: Potassium Management", "Educational framework for K+ considerations",
              icon_tone="warning", tone="warning", items=(
                  "Total body K+ is ALWAYS depleted despite initial serum level",
                  "Monitor K+ closely - levels will DROP with insulin therapy",
                  "Hold insulin if K+ < 3.3 mEq/L",
                  "Add K+ to fluids once K+ < 5.2 mEq/L and patient is making urine",
                  "Recheck K+ every 2-4 hours during initial management",
              )),
        Block("bullets", "Potential Complications", "Monitor for these serious complications", items=(
            "Cerebral edema (more common in DKA, especially pediatric)",
            "Cardiac arrhythmias (from K+ shifts)",
            "Acute kidney injury",
            "Thrombotic events (especially HHS)",
            "Aspiration pneumonia",
            "ARDS",
        )),
    ),
)


# ====== Pulmonary Embolism ======

PE_CASES = ScenarioRegistry.from_dicts([
    {
        "id": "case1",
        "presentation": "Sudden dyspnea, pleuritic chest pain, tachycardia",
        "risk_factors": ["Recent surgery (hip replacement 2 weeks ago)", "Age 72"],
        "wells_score": 7.5,
        "perc_met": False,
        "d_dimer": "Not indicated - High pretest probability",
        "recommendation": "Proceed directly to CTPA",
        "severity": "Submassive",
    },
    {
        "id": "case2",
        "presentation": "Chest pain, mild dyspnea, no hemodynamic instability",
        "risk_factors": ["Oral contraceptive use", "Recent long flight"],
        "wells_score": 3.0,
        "perc_met": True,
        "d_dimer": "Elevated (850 ng/mL)",
        "recommendation": "D-dimer elevated - proceed to CTPA",
        "severity": "Low Risk",
    },
    {
        "id": "case3",
        "presentation": "Hypotension, severe dyspnea, syncope",
        "risk_factors": ["Active cancer", "Recent chemotherapy"],
        "wells_score": 8.5,
        "perc_met": False,
        "d_dimer": "Not indicated - Massive PE suspected",
        "recommendation": "CTPA + assess for thrombolysis candidacy",
        "severity": "Massive",
    },
], category_field=None)

PE = Condition(
    slug="pe",
    title="Pulmonary Embolism",
    subtitle="Risk stratification, PERC rule, and diagnostic pathways",
    accent="cyan",
    simulator_title="PE Risk Assessment Cases",
    simulator_description="Analyze pretest probability and imaging decisions",
    cases=PE_CASES,
    calculators=("wells",),
    blocks=(
        Block("calculator", items=("wells",)),
        Block("simulator"),
        Block("bullets", "PERC Rule (Pulmonary Embolism Rule-out Criteria)",
              "All 8 criteria must be met to rule out PE without testing (in low-risk patients)",
              tone="warning", note_label="Important",
              note=(
                  "PERC should only be applied in LOW-risk patients (Wells score < 2 or clinical "
                  "gestalt low). If any PERC criterion is not met, proceed with D-dimer or imaging."
              ),
              items=(
                  "Age < 50",
                  "Heart rate < 100",
                  "SpO2 ≥ 95%",
                  "No hemoptysis",
                  "No estrogen use",
                  "No prior VTE",
                  "No unilateral leg swelling",
                  "No surgery/trauma in past 4 weeks",
              )),
        Block("concepts", "Imaging Decision Pathway", "When to use D-dimer vs CTPA", items=(
            ("Low Wells Score (< 2) + PERC negative", "PE ruled out - No further testing needed"),
            ("Low/Moderate Wells (< 4) + PERC positive", "Check D-dimer. If negative, PE unlikely"),
            ("High Wells Score (> 4)", "Proceed directly to CTPA (skip D-dimer)"),
            ("Elevated D-dimer", "Proceed to CTPA for definitive imaging"),
        )),
        Block("cards", "PE Severity Classification", "Risk stratification for management decisions",
              icon_tone="critical",
              items=_cards([
                  {"category": "Massive PE",
                   "definition": "Sustained hypotension (SBP < 90) or requiring pressors",
                   "implications": "Consider thrombolysis - high mortality risk"},
                  {"category": "Submassive PE",
                   "definition": "Hemodynamically stable but RV dysfunction or elevated biomarkers",
                   "implications": "Intermediate risk - close monitoring, consider interventions"},
                  {"category": "Low-Risk PE",
                   "definition": "Stable vitals, no RV strain, normal biomarkers",
                   "implications": "Anticoagulation, may be candidate for early discharge"},
              ], "category", {"definition": "Definition", "implications": "Clinical Implications"})),
    ),
)


# ====== Pneumonia ======

PNEUMONIA_CASES = ScenarioRegistry.from_dicts([
    {
        "id": "case1",
        "presentation": "Cough, fever, pleuritic chest pain, productive sputum",
        "timing": "Onset at home, no recent hospitalization",
        "risk_factors": ["Age 68", "COPD", "Current smoker"],
        "vitals": {"temp": 38.9, "hr": 95, "rr": 22, "bp": "128/78", "spo2": 92},
        "classification": "CAP",
        "curb_score": 2,
        "severity": "Moderate",
    },
    {
        "id": "case2",
        "presentation": "New fever, increased purulent sputum, infiltrate on CXR",
        "timing": "Day 6 of hospitalization for CHF exacerbation",
        "risk_factors": ["Recent admission", "Aspiration risk", "Age 75"],
        "vitals": {"temp": 39.2, "hr": 108, "rr": 24, "bp": "110/65", "spo2": 90},
        "classification": "HAP",
        "curb_score": 3,
        "severity": "Severe",
    },
    {
        "id": "case3",
        "presentation": "Worsening oxygenation, purulent secretions on suctioning",
        "timing": "Day 3 of mechanical ventilation (post-operative)",
        "risk_factors": ["Intubated > 48 hours", "ICU setting", "Post-surgical"],
        "vitals": {"temp": 38.7, "hr": 115, "rr": 28, "bp": "95/58", "spo2": 88},
        "classification": "VAP",
        "curb_score": 4,
        "severity": "Severe",
    },
], category_field=None)

PNEUMONIA = Condition(
    slug="pneumonia",
    title="Pneumonia",
    subtitle="CAP vs HAP differentiation, severity scoring, and pattern recognition",
    accent="green",
    simulator_title="Pneumonia Classification Tool",
    simulator_description="Analyze timing and context to classify pneumonia type",
    cases=PNEUMONIA_CASES,
    calculators=("curb65",),
    blocks=(
        Block("table", "CAP vs HAP: Key Distinctions", "Understand the critical differences",
              columns=("Feature", "CAP", "HAP/VAP"),
              items=(
                  ("Timing", "Acquired in community setting", "Onset ≥ 48 hours after hospital admission"),
                  ("Common Pathogens", "S. pneumoniae, H. influenzae, atypicals (Mycoplasma, Legionella)",
                   "MRSA, Pseudomonas, other resistant gram-negatives"),
                  ("Risk Factors", "Age, smoking, COPD, immunosuppression",
                   "Prolonged hospitalization, intubation, aspiration"),
                  ("Severity Assessment", "CURB-65, PSI score", "Clinical criteria, ICU admission often needed"),
              )),
        Block("simulator"),
        Block("calculator", items=("curb65",)),
        Block("cards", "Radiographic Patterns", "Chest X-ray findings and typical pathogens",
              items=_cards([
                  {"pattern": "Lobar Consolidation", "description": "Dense opacity in one or more lobes",
                   "typical": "S. pneumoniae, Klebsiella"},
                  {"pattern": "Interstitial/Patchy", "description": "Diffuse, bilateral infiltrates",
                   "typical": "Atypical pathogens (Mycoplasma, viruses)"},
                  {"pattern": "Cavitation", "description": "Air-filled cavity within consolidation",
                   "typical": "Anaerobes (aspiration), Staph aureus, TB"},
                  {"pattern": "Pleural Effusion", "description": "Parapneumonic fluid collection",
                   "typical": "S. pneumoniae, complicated pneumonia"},
              ], "pattern", {"description": "Description", "typical": "Typical Pathogens"})),
        Block("bullets", "Severe CAP Criteria", "Features indicating ICU-level care",
              icon_tone="critical", tone="critical", note_label="Major Criteria",
              note=(
                  "Respiratory failure requiring mechanical ventilation or septic shock requiring "
                  "vasopressors. Presence of either major criterion indicates severe CAP requiring "
                  "ICU admission."
              ),
              items=(
                  "Respiratory failure requiring intubation",
                  "Septic shock requiring vasopressors",
                  "Multilobar infiltrates",
                  "Confusion/altered mental status",
                  "Severe hypoxemia (PaO2/FiO2 < 250)",
                  "Leukopenia (WBC < 4K)",
              )),
    ),
)


# ====== Acute Abdomen ======

ABDOMEN_CASES = ScenarioRegistry.from_dicts([
    {
        "id": "case1",
        "presentation": "24 y/o with periumbilical pain migrating to RLQ",
        "pain_location": "Initially periumbilical, now right lower quadrant",
        "pain_character": "Sharp, constant, worsening",
        "physical_exam": ["Rebound tenderness RLQ", "Positive Rovsing sign", "Guarding", "Low-grade fever"],
        "labs_imaging": ["WBC 15.2 K/μL", "CT: Dilated appendix with fat stranding", "No free air"],
        "diagnosis": "Acute Appendicitis",
        "urgency": "Emergent",
    },
    {
        "id": "case2",
        "presentation": "58 y/o with sudden RUQ pain after fatty meal",
        "pain_location": "Right upper quadrant",
        "pain_character": "Colicky, severe, radiates to right shoulder",
        "physical_exam": ["Positive Murphy sign", "RUQ tenderness", "No jaundice", "Tachycardia"],
        "labs_imaging": [
            "WBC 13.8 K/μL",
            "Normal bilirubin",
            "Ultrasound: Gallstones, thickened wall, pericholecystic fluid",
        ],
        "diagnosis": "Acute Cholecystitis",
        "urgency": "Urgent",
    },
    {
        "id": "case3",
        "presentation": "72 y/o with RUQ pain, fever, and confusion",
        "pain_location": "Right upper quadrant",
        "pain_character": "Severe, constant",
        "physical_exam": ["RUQ tenderness", "Jaundice", "Fever 39.5°C", "Altered mental status"],
        "labs_imaging": [
            "WBC 22.5 K/μL",
            "Total bilirubin 5.2 mg/dL",
            "Alk phos elevated",
            "Ultrasound: Dilated CBD, stones",
        ],
        "diagnosis": "Acute Cholangitis",
        "urgency": "Emergent",
    },
], category_field=None)

ACUTE_ABDOMEN = Condition(
    slug="acute-abdomen",
    title="Acute Abdomen",
    subtitle="Appendicitis, cholecystitis, cholangitis - peritoneal signs and diagnosis",
    accent="yellow",
    simulator_title="Acute Abdomen Case Simulator",
    simulator_description="Analyze pain location, exam findings, and imaging",
    cases=ABDOMEN_CASES,
    blocks=(
        Block("simulator"),
        Block("cards", "Appendicitis: Physical Exam Signs", "Classic signs for appendicitis diagnosis",
              note_label="Classic Presentation",
              note=(
                  "Pain migration from periumbilical → RLQ is highly suggestive of appendicitis. "
                  "Sensitivity of individual signs varies, but clustering of findings increases "
                  "diagnostic accuracy."
              ),
              items=tuple(
                  dict(card, badge="Physical Exam")
                  for card in _cards([
                      {"sign": "Rovsing Sign", "description": "RLQ pain with palpation of LLQ",
                       "significance": "Peritoneal irritation"},
                      {"sign": "Psoas Sign", "description": "Pain with right hip extension",
                       "significance": "Retrocecal appendix"},
                      {"sign": "Obturator Sign", "description": "Pain with internal rotation of flexed right hip",
                       "significance": "Pelvic appendix"},
                      {"sign": "McBurney Point", "description": "Tenderness 1/3 distance from ASIS to umbilicus",
                       "significance": "Classic appendicitis location"},
                  ], "sign", {"description": "Description", "significance": "Significance"})
              )),
        Block("cards", "Biliary Tract Conditions Spectrum", "From biliary colic to cholangitis",
              items=_cards([
                  {"condition": "Biliary Colic", "presentation": "Intermittent RUQ pain, no fever, normal labs",
                   "pathology": "Temporary cystic duct obstruction"},
                  {"condition": "Acute Cholecystitis", "presentation": "Persistent RUQ pain, fever, Murphy sign",
                   "pathology": "Sustained cystic duct obstruction with inflammation"},
                  {"condition": "Cholangitis", "presentation": "Charcot triad: fever, jaundice, RUQ pain",
                   "pathology": "CBD obstruction with infection (Reynold pentad adds shock and AMS)"},
                  {"condition": "Choledocholithiasis",
                   "presentation": "RUQ pain, elevated bilirubin, may have pancreatitis",
                   "pathology": "Stone in common bile duct"},
              ], "condition", {"presentation": "Presentation", "pathology": "Pathology"})),
        Block("concepts", "Charcot Triad (Cholangitis)", "Classic triad for ascending cholangitis",
              tone="critical", note_label="Reynold Pentad",
              note=(
                  "Charcot triad + Hypotension + Altered mental status. Indicates severe cholangitis "
                  "with septic shock. Requires urgent biliary decompression (ERCP or percutaneous drainage)."
              ),
              items=(
                  ("Fever", "Often with rigors"),
                  ("Jaundice", "Elevated bilirubin"),
                  ("RUQ Pain", "Abdominal tenderness"),
              )),
        Block("bullets", "Acute Abdomen Red Flags", "Findings requiring immediate surgical consultation",
              icon_tone="critical", items=(
                  "Peritoneal signs (rigid abdomen, rebound)",
                  "Hypotension or signs of shock",
                  "High fever with altered mental status",
                  "Free air on imaging (perforation)",
                  "Severe persistent vomiting",
                  "Absent bowel sounds",
              )),
    ),
)


# ====== Ectopic Pregnancy ======

ECTOPIC_CASES = ScenarioRegistry.from_dicts([
    {
        "id": "case1",
        "presentation": "28 y/o with lower abdominal pain and vaginal spotting, LMP 7 weeks ago",
        "beta_hcg": 2800,
        "ultrasound": "No intrauterine pregnancy, adnexal mass with free fluid",
        "vitals": {"bp": "108/68", "hr": 88},
        "symptoms": ["Lower abdominal pain", "Vaginal spotting", "Mild shoulder pain"],
        "risk": "Moderate - Unruptured Ectopic",
        "management": "OB/GYN consultation for medical vs surgical management",
    },
    {
        "id": "case2",
        "presentation": "32 y/o with sudden severe abdominal pain and syncope",
        "beta_hcg": 3500,
        "ultrasound": "No IUP, moderate free fluid in pelvis, complex adnexal mass",
        "vitals": {"bp": "86/54", "hr": 124},
        "symptoms": ["Severe abdominal pain", "Syncope", "Shoulder pain", "Tachycardia", "Hypotension"],
        "risk": "High - Rupture Suspected",
        "management": "Emergent surgical intervention - ruptured ectopic",
    },
    {
        "id": "case3",
        "presentation": "25 y/o with mild cramping, positive home pregnancy test",
        "beta_hcg": 1200,
        "ultrasound": "No IUP visualized, no adnexal mass, no free fluid",
        "vitals": {"bp": "118/72", "hr": 76},
        "symptoms": ["Mild cramping", "No bleeding"],
        "risk": "Low - Further Workup Needed",
        "management": "Serial β-hCG monitoring, repeat ultrasound if appropriate",
    },
], category_field=None)

ECTOPIC = Condition(
    slug="ectopic",
    title="Ectopic Pregnancy",
    subtitle="β-hCG interpretation, ultrasound patterns, and rupture red flags",
    accent="pink",
    simulator_title="Ectopic Pregnancy Case Simulator",
    simulator_description="Analyze β-hCG, ultrasound, and clinical presentation",
    cases=ECTOPIC_CASES,
    blocks=(
        Block("highlight", "β-hCG Discriminatory Zone", "Critical concept for ectopic pregnancy diagnosis",
              tone="warning", note_label="Note",
              note=(
                  "The discriminatory zone is a guideline. Clinical context, serial β-hCG trends, and "
                  "ultrasound quality all factor into decision-making. No single β-hCG value "
                  "definitively rules in or out ectopic pregnancy."
              ),
              items=({
                  "value": "1500-2000",
                  "unit": "mIU/mL",
                  "fields": (
                      ("Definition", "β-hCG level above which IUP should be visible on transvaginal ultrasound"),
                      ("Clinical Application",
                       "If β-hCG > discriminatory zone and no IUP seen → concern for ectopic pregnancy"),
                  ),
              },)),
        Block("simulator"),
        Block("cards", "Ultrasound Findings & Interpretation", "Key findings and clinical significance",
              items=_cards([
                  {"finding": "IUP Present", "significance": "Effectively rules out ectopic (heterotopic < 1%)",
                   "action": "Confirm viability, exclude other pathology"},
                  {"finding": "No IUP + Adnexal Mass", "significance": "Highly suspicious for ectopic pregnancy",
                   "action": "OB/GYN consultation"},
                  {"finding": "No IUP + Free Fluid", "significance": "Concern for ruptured ectopic",
                   "action": "Assess hemodynamic stability, urgent OB/GYN"},
                  {"finding": "No IUP + Empty Adnexa",
                   "significance": "Early IUP vs ectopic vs spontaneous abortion",
                   "action": "Serial β-hCG, repeat imaging"},
              ], "finding", {"significance": "Significance", "action": "Next Step"})),
        Block("bullets", "Ectopic Pregnancy Risk Factors", "Conditions that increase ectopic risk", items=(
            "Prior ectopic pregnancy",
            "History of PID or STIs",
            "Previous tubal surgery",
            "Current IUD use",
            "Assisted reproductive technology",
            "Smoking",
            "Tubal ligation failure",
            "Endometriosis",
        )),
        Block("bullets", "Rupture Red Flags", "Signs of ruptured ectopic pregnancy requiring emergency intervention",
              icon_tone="critical", tone="critical", note_label="Emergency Management",
              note=(
                  "Ruptured ectopic is a life-threatening emergency. Immediate resuscitation, blood "
                  "product availability, and emergent surgical consultation are critical. Do not delay "
                  "intervention for additional imaging in unstable patients."
              ),
              items=(
                  "Hypotension or orthostatic changes",
                  "Tachycardia",
                  "Severe or worsening abdominal pain",
                  "Shoulder pain (diaphragmatic irritation)",
                  "Syncope or near-syncope",
                  "Peritoneal signs on exam",
                  "Moderate to large free fluid on ultrasound",
              )),
    ),
)


# ====== Preeclampsia / Eclampsia ======

PREECLAMPSIA_CASES = ScenarioRegistry.from_dicts([
    {
        "id": "case1",
        "presentation": "32 y/o G2P1 at 36 weeks with new-onset hypertension and headache",
        "gestational_age": "36 weeks",
        "bp": "162/104 mmHg",
        "labs": {"protein": "2+ on dipstick", "plt": "185 K/μL", "ast": "48 U/L", "alt": "52 U/L",
                 "cr": "0.9 mg/dL"},
        "symptoms": ["Severe headache", "Visual changes (scotomata)", "RUQ pain"],
        "classification": "Preeclampsia with Severe Features",
        "severity": "Severe",
    },
    {
        "id": "case2",
        "presentation": "28 y/o G1P0 at 38 weeks with elevated BP on routine visit",
        "gestational_age": "38 weeks",
        "bp": "148/94 mmHg",
        "labs": {"protein": "1+ on dipstick", "plt": "220 K/μL", "ast": "28 U/L", "alt": "32 U/L",
                 "cr": "0.8 mg/dL"},
        "symptoms": ["Mild headache", "Mild peripheral edema"],
        "classification": "Preeclampsia",
        "severity": "Mild",
    },
    {
        "id": "case3",
        "presentation": "35 y/o G3P2 at 34 weeks with seizure witnessed at home",
        "gestational_age": "34 weeks",
        "bp": "178/112 mmHg",
        "labs": {"protein": "4+ on dipstick", "plt": "92 K/μL", "ast": "245 U/L", "alt": "198 U/L",
                 "cr": "1.6 mg/dL"},
        "symptoms": ["Generalized tonic-clonic seizure", "Severe headache", "Visual changes", "Epigastric pain"],
        "classification": "Eclampsia",
        "severity": "Critical",
    },
], category_field=None)

PREECLAMPSIA = Condition(
    slug="preeclampsia",
    title="Preeclampsia / Eclampsia",
    subtitle="Severe features, laboratory patterns, and seizure recognition in pregnancy",
    accent="rose",
    simulator_title="Preeclampsia Severity Assessment",
    simulator_description="Analyze BP, labs, and symptoms to classify severity",
    cases=PREECLAMPSIA_CASES,
    blocks=(
        Block("concepts", "Diagnostic Criteria", "Definitions and classification",
              note_label="Key Point",
              note=(
                  "Preeclampsia can be diagnosed without proteinuria if severe features are present. "
                  "The presence of any severe feature upgrades the diagnosis to preeclampsia with "
                  "severe features."
              ),
              items=(
                  ("Preeclampsia",
                   "SBP ≥ 140 or DBP ≥ 90 (on 2 occasions, ≥ 4 hours apart) after 20 weeks + "
                   "Proteinuria OR severe features"),
                  ("Severe Features",
                   "Severe HTN, thrombocytopenia, renal insufficiency, liver dysfunction, pulmonary "
                   "edema, or cerebral/visual symptoms"),
                  ("Eclampsia", "Preeclampsia + new-onset grand mal seizures (no other cause)"),
              )),
        Block("simulator"),
        Block("grouped", "Severe Features", "Criteria that indicate preeclampsia with severe features",
              icon_tone="critical", items=(
                  ("Blood Pressure", ("SBP ≥ 160 mmHg or DBP ≥ 110 mmHg on two occasions, 4 hours apart",)),
                  ("Symptoms", (
                      "Severe persistent headache",
                      "Visual disturbances (scotomata, blurred vision)",
                      "RUQ or epigastric pain",
                  )),
                  ("Laboratory", (
                      "Thrombocytopenia (platelets < 100 K/μL)",
                      "Elevated liver enzymes (≥ 2x normal)",
                      "Serum creatinine > 1.1 mg/dL or doubling",
                      "Pulmonary edema",
                  )),
              )),
        Block("bullets", "HELLP Syndrome", "Hemolysis, Elevated Liver enzymes, Low Platelets",
              tone="critical", note_label="Clinical Significance",
              note=(
                  "Severe variant of preeclampsia with high maternal/fetal morbidity. Patients may "
                  "present with RUQ/epigastric pain, nausea/vomiting. Risk of hepatic rupture, DIC, and "
                  "maternal death. Delivery is usually indicated regardless of gestational age."
              ),
              items=(
                  "Hemolysis (schistocytes, elevated LDH, low haptoglobin)",
                  "Elevated liver enzymes (AST/ALT elevated)",
                  "Low platelets (< 100 K/μL)",
              )),
        Block("numbered", "Management Principles (Educational Overview)",
              "Conceptual framework for preeclampsia management",
              tone="warning", note_label="Important",
              note=(
                  "This is educational content only. Actual management requires individualized "
                  "assessment by obstetric providers, considering gestational age, maternal and fetal "
                  "status, and institutional protocols."
              ),
              items=(
                  "Delivery is the definitive treatment",
                  "Timing depends on gestational age and severity",
                  "Magnesium sulfate for seizure prophylaxis (severe features or eclampsia)",
                  "Antihypertensive therapy for severe hypertension",
                  "Close maternal and fetal monitoring",
                  "Assess for HELLP syndrome and other complications",
              )),
    ),
)


CONDITIONS: Dict[str, Condition] = {
    c.slug: c
    for c in (ACS, STROKE, SEPSIS, DKA_HHS, PE, PNEUMONIA, ACUTE_ABDOMEN, ECTOPIC, PREECLAMPSIA)
}


# ====== Branching case simulations ======

BRANCHING_CASES = ScenarioRegistry.from_dicts([
    {
        "id": "case1",
        "title": "Chest Pain in the ED",
        "category": "ACS",
        "difficulty": "Intermediate",
        "initial_presentation": (
            "68 y/o male presents with 2 hours of substernal chest pressure radiating to left arm. "
            "He is diaphoretic and appears uncomfortable."
        ),
        "steps": [
            {
                "id": 1,
                "description": "Vital signs: BP 148/92, HR 98, RR 20, SpO2 96% on RA. Patient rates pain 8/10.",
                "question": "What is the most appropriate FIRST step?",
                "options": [
                    "Order troponin and wait for results",
                    "Obtain 12-lead ECG immediately",
                    "Start nitroglycerin and reassess",
                    "Order chest X-ray to rule out pneumothorax",
                ],
                "correct_index": 1,
                "explanation": (
                    "ECG should be obtained within 10 minutes of arrival for suspected ACS. ECG findings "
                    "guide immediate management and activation of catheterization lab if STEMI is present."
                ),
            },
            {
                "id": 2,
                "description": "ECG shows ST-elevation in leads V2, V3, V4. Troponin is elevated.",
                "question": "What is the diagnosis?",
                "options": ["NSTEMI", "Unstable angina", "STEMI - Anterior wall", "Pericarditis"],
                "correct_index": 2,
                "explanation": (
                    "ST-elevation in anterior leads (V2-V4) indicates STEMI affecting the anterior wall, "
                    "likely due to LAD occlusion. This requires immediate reperfusion therapy."
                ),
            },
            {
                "id": 3,
                "description": "You have confirmed anterior STEMI.",
                "question": "What is the next critical action?",
                "options": [
                    "Admit to telemetry and monitor",
                    "Activate cardiac catheterization lab",
                    "Start heparin drip and observe",
                    "Repeat ECG in 30 minutes",
                ],
                "correct_index": 1,
                "explanation": (
                    "STEMI requires immediate reperfusion therapy. Activating the cath lab for primary PCI "
                    "is the priority in facilities with this capability. Time to reperfusion directly "
                    "impacts outcomes."
                ),
            },
        ],
    },
    {
        "id": "case2",
        "title": "Sudden Weakness and Speech Difficulty",
        "category": "Stroke",
        "difficulty": "Advanced",
        "initial_presentation": (
            "72 y/o female brought in by EMS with sudden onset right-sided weakness and difficulty "
            "speaking. Last known well was 90 minutes ago."
        ),
        "steps": [
            {
                "id": 1,
                "description": "FAST exam shows left facial droop, right arm drift, and expressive aphasia.",
                "question": "What imaging should be obtained FIRST?",
                "options": [
                    "MRI brain with diffusion-weighted imaging",
                    "Non-contrast CT head",
                    "CT angiography head and neck",
                    "Carotid ultrasound",
                ],
                "correct_index": 1,
                "explanation": (
                    "Non-contrast CT head is the first imaging study to rule out hemorrhage before "
                    "considering thrombolytic therapy. It is fast and readily available."
                ),
            },
            {
                "id": 2,
                "description": "CT head shows no hemorrhage. Patient is within the time window for intervention.",
                "question": "What should be done next?",
                "options": [
                    "Admit to stroke unit for observation",
                    "Proceed with CTA to evaluate for large vessel occlusion",
                    "Start aspirin immediately",
                    "Wait 24 hours before further intervention",
                ],
                "correct_index": 1,
                "explanation": (
                    "After ruling out hemorrhage, CTA should be obtained to identify large vessel occlusion "
                    "(LVO) which may be amenable to thrombectomy. This guides further treatment decisions."
                ),
            },
        ],
    },
    {
        "id": "case3",
        "title": "Fever and Hypotension",
        "category": "Sepsis",
        "difficulty": "Intermediate",
        "initial_presentation": (
            "65 y/o male with fever, confusion, and hypotension. He has a history of diabetes and was "
            "recently treated for a UTI."
        ),
        "steps": [
            {
                "id": 1,
                "description": "Vitals: BP 82/48, HR 128, Temp 39.8°C, RR 26. Lactate is 4.2 mmol/L.",
                "question": "What is the most likely diagnosis?",
                "options": ["Hypovolemic shock", "Septic shock", "Cardiogenic shock", "Neurogenic shock"],
                "correct_index": 1,
                "explanation": (
                    "Fever, hypotension, elevated lactate, and suspected infection (recent UTI) indicate "
                    "septic shock. This requires immediate resuscitation and broad-spectrum antibiotics."
                ),
            },
            {
                "id": 2,
                "description": "You diagnose septic shock from urinary source.",
                "question": "What is the appropriate initial fluid resuscitation?",
                "options": [
                    "250 mL bolus and reassess",
                    "No fluids, start vasopressors immediately",
                    "30 mL/kg crystalloid bolus",
                    "Albumin only",
                ],
                "correct_index": 2,
                "explanation": (
                    "Sepsis bundles recommend 30 mL/kg crystalloid within the first 3 hours for septic "
                    "shock. Reassess frequently and titrate to response."
                ),
            },
        ],
    },
    {
        "id": "case4",
        "title": "RLQ Pain in Young Adult",
        "category": "Acute Abdomen",
        "difficulty": "Beginner",
        "initial_presentation": (
            "22 y/o female with 24 hours of periumbilical pain that has migrated to RLQ. She has nausea "
            "and low-grade fever."
        ),
        "steps": [
            {
                "id": 1,
                "description": "Exam shows RLQ tenderness with rebound and guarding. Rovsing sign is positive.",
                "question": "What is the most likely diagnosis?",
                "options": ["Ovarian cyst", "Acute appendicitis", "Gastroenteritis", "Kidney stone"],
                "correct_index": 1,
                "explanation": (
                    "Periumbilical pain migrating to RLQ with peritoneal signs is classic for acute "
                    "appendicitis. Positive Rovsing sign further supports this diagnosis."
                ),
            },
            {
                "id": 2,
                "description": "CT shows inflamed appendix with surrounding fat stranding.",
                "question": "What is the appropriate management?",
                "options": [
                    "Discharge with antibiotics",
                    "Observe for 24 hours",
                    "Surgical consultation for appendectomy",
                    "Colonoscopy",
                ],
                "correct_index": 2,
                "explanation": (
                    "Acute appendicitis confirmed by imaging requires surgical consultation for "
                    "appendectomy to prevent perforation and peritonitis."
                ),
            },
        ],
    },
])


# ====== Assessment questions ======

QUESTIONS = ScenarioRegistry.from_dicts([
    {
        "id": "q1",
        "category": "ACS",
        "type": "MCQ",
        "question": (
            "A 65-year-old male presents with crushing chest pain radiating to the left arm. ECG shows "
            "ST-elevation in leads II, III, and aVF. What is the most likely diagnosis?"
        ),
        "options": ["Anterior STEMI", "Inferior STEMI", "Lateral STEMI", "Posterior STEMI"],
        "correct_index": 1,
        "explanation": (
            "ST-elevation in leads II, III, and aVF indicates inferior wall STEMI, typically due to right "
            "coronary artery occlusion."
        ),
    },
    {
        "id": "q2",
        "category": "Stroke",
        "type": "Vignette",
        "question": (
            "A 70-year-old woman has sudden onset right-sided weakness and aphasia. Last known well was 2 "
            "hours ago. Non-contrast CT shows no hemorrhage. What is the next best step?"
        ),
        "options": [
            "Admit for observation",
            "Start aspirin and discharge",
            "CTA to evaluate for large vessel occlusion",
            "MRI brain before any intervention",
        ],
        "correct_index": 2,
        "explanation": (
            "After ruling out hemorrhage with CT, CTA should be performed to identify large vessel "
            "occlusion which may be amenable to thrombectomy, especially within the intervention window."
        ),
    },
    {
        "id": "q3",
        "category": "Sepsis",
        "type": "MCQ",
        "question": "Which of the following is a component of the SOFA score?",
        "options": ["Temperature", "White blood cell count", "PaO2/FiO2 ratio", "Heart rate"],
        "correct_index": 2,
        "explanation": (
            "The SOFA score includes respiratory function (PaO2/FiO2), coagulation (platelets), liver "
            "function (bilirubin), cardiovascular (hypotension/pressors), CNS (GCS), and renal function "
            "(creatinine/urine output). Temperature, WBC, and heart rate are not SOFA components."
        ),
    },
    {
        "id": "q4",
        "category": "DKA/HHS",
        "type": "MCQ",
        "question": "What is the KEY distinguishing feature between DKA and HHS?",
        "options": [
            "Glucose level",
            "Presence of ketones and degree of acidosis",
            "Patient age",
            "Insulin deficiency",
        ],
        "correct_index": 1,
        "explanation": (
            "The key distinction is that DKA has significant ketosis and metabolic acidosis (pH < 7.30), "
            "while HHS has minimal ketones and normal or near-normal pH despite severe hyperglycemia."
        ),
    },
    {
        "id": "q5",
        "category": "PE",
        "type": "Vignette",
        "question": (
            "A 45-year-old woman with recent long flight has dyspnea and pleuritic chest pain. Wells score "
            "is 1.5. All PERC criteria are met. What is the appropriate next step?"
        ),
        "options": ["CTPA immediately", "D-dimer", "VQ scan", "PE ruled out, no further testing"],
        "correct_index": 3,
        "explanation": (
            "With low Wells score (< 2) and all PERC criteria met (negative PERC rule), PE is effectively "
            "ruled out and no further testing is needed."
        ),
    },
    {
        "id": "q6",
        "category": "Pneumonia",
        "type": "MCQ",
        "question": "Which finding on CURB-65 indicates a score of 1 point?",
        "options": ["Age > 50", "Heart rate > 100", "Respiratory rate ≥ 30", "WBC > 15K"],
        "correct_index": 2,
        "explanation": (
            "CURB-65 includes: Confusion, Urea > 7 mmol/L (BUN > 19), Respiratory rate ≥ 30, Blood "
            "pressure (SBP < 90 or DBP ≤ 60), and age ≥ 65. Each criterion scores 1 point."
        ),
    },
    {
        "id": "q7",
        "category": "Acute Abdomen",
        "type": "MCQ",
        "question": "A patient has RLQ pain that worsens when you palpate the LLQ. What sign is this?",
        "options": ["McBurney sign", "Rovsing sign", "Psoas sign", "Murphy sign"],
        "correct_index": 1,
        "explanation": (
            "Rovsing sign is RLQ pain elicited by palpation of the LLQ, indicating peritoneal irritation "
            "and is suggestive of appendicitis."
        ),
    },
    {
        "id": "q8",
        "category": "Acute Abdomen",
        "type": "Vignette",
        "question": (
            "A 58-year-old with fever, jaundice, RUQ pain, and altered mental status. What is the most "
            "likely diagnosis?"
        ),
        "options": [
            "Acute cholecystitis",
            "Choledocholithiasis",
            "Acute cholangitis (Reynold pentad)",
            "Acute hepatitis",
        ],
        "correct_index": 2,
        "explanation": (
            "Reynold pentad is Charcot triad (fever, jaundice, RUQ pain) plus hypotension and altered "
            "mental status, indicating severe ascending cholangitis with septic shock."
        ),
    },
    {
        "id": "q9",
        "category": "Ectopic",
        "type": "MCQ",
        "question": "At what β-hCG level should an intrauterine pregnancy be visible on transvaginal ultrasound?",
        "options": ["500-1000 mIU/mL", "1500-2000 mIU/mL", "3000-4000 mIU/mL", "5000-6000 mIU/mL"],
        "correct_index": 1,
        "explanation": (
            "The discriminatory zone is typically 1500-2000 mIU/mL. Above this level, an IUP should be "
            "visualized on transvaginal ultrasound if the pregnancy is intrauterine."
        ),
    },
    {
        "id": "q10",
        "category": "Preeclampsia",
        "type": "MCQ",
        "question": "Which of the following is a severe feature of preeclampsia?",
        "options": ["BP 142/92", "Mild headache", "Platelets < 100 K/μL", "Trace pedal edema"],
        "correct_index": 2,
        "explanation": (
            "Thrombocytopenia (platelets < 100 K/μL) is a severe feature indicating HELLP syndrome or "
            "severe preeclampsia. Other severe features include BP ≥ 160/110, severe headache, visual "
            "changes, elevated liver enzymes, and renal insufficiency."
        ),
    },
])


# ====== Glossary ======

GLOSSARY = ScenarioRegistry.from_dicts([
    {"id": "stemi", "term": "STEMI", "category": "ACS",
     "definition": "ST-Elevation Myocardial Infarction",
     "clinical_context": ("Acute MI with ST-segment elevation on ECG, indicating complete coronary artery "
                          "occlusion requiring immediate reperfusion therapy.")},
    {"id": "nstemi", "term": "NSTEMI", "category": "ACS",
     "definition": "Non-ST-Elevation Myocardial Infarction",
     "clinical_context": ("Myocardial infarction with elevated cardiac biomarkers but without ST-segment "
                          "elevation. May have ST-depression or T-wave changes.")},
    {"id": "troponin", "term": "Troponin", "category": "ACS",
     "definition": "Cardiac biomarker released during myocardial injury",
     "clinical_context": ("Sensitive and specific marker for myocardial damage. Elevated in MI, but also in "
                          "other conditions causing cardiac strain.")},
    {"id": "fast-exam", "term": "FAST Exam", "category": "Stroke",
     "definition": "Face, Arms, Speech, Time",
     "clinical_context": ("Rapid screening tool for stroke. Assess facial droop, arm drift, speech "
                          "abnormalities, and note time of onset.")},
    {"id": "lvo", "term": "LVO", "category": "Stroke",
     "definition": "Large Vessel Occlusion",
     "clinical_context": ("Blockage of major intracranial artery (MCA, ICA, basilar). May be amenable to "
                          "mechanical thrombectomy.")},
    {"id": "tpa", "term": "tPA", "category": "Stroke",
     "definition": "Tissue Plasminogen Activator",
     "clinical_context": ("Thrombolytic medication used in acute ischemic stroke within 4.5 hours of symptom "
                          "onset (educational reference only).")},
    {"id": "sofa", "term": "SOFA Score", "category": "Sepsis",
     "definition": "Sequential Organ Failure Assessment",
     "clinical_context": ("Scoring system to assess degree of organ dysfunction in sepsis. Includes "
                          "respiratory, coagulation, liver, cardiovascular, CNS, and renal function.")},
    {"id": "qsofa", "term": "qSOFA", "category": "Sepsis",
     "definition": "Quick SOFA",
     "clinical_context": ("Bedside screening tool: altered mental status, SBP ≤ 100, RR ≥ 22. Two or more "
                          "criteria suggest increased risk of poor outcomes.")},
    {"id": "lactate", "term": "Lactate", "category": "Sepsis",
     "definition": "Byproduct of anaerobic metabolism",
     "clinical_context": ("Elevated in sepsis/shock due to tissue hypoperfusion. Levels > 2 mmol/L indicate "
                          "higher severity, > 4 very high risk.")},
    {"id": "anion-gap", "term": "Anion Gap", "category": "DKA/HHS",
     "definition": "Difference between measured cations and anions",
     "clinical_context": ("Calculated as [Na] - ([Cl] + [HCO3]). Elevated in DKA due to ketoacid "
                          "accumulation. Normal range typically 8-12.")},
    {"id": "ketones", "term": "Ketones", "category": "DKA/HHS",
     "definition": "Acidic byproducts of fat metabolism",
     "clinical_context": ("Produced when insulin is insufficient. Strongly positive in DKA, absent or trace "
                          "in HHS.")},
    {"id": "osmolality", "term": "Osmolality", "category": "DKA/HHS",
     "definition": "Measure of solute concentration in serum",
     "clinical_context": ("Markedly elevated (> 320 mOsm/kg) in HHS due to severe hyperglycemia and "
                          "dehydration. Variable in DKA.")},
    {"id": "wells", "term": "Wells Score", "category": "PE",
     "definition": "Clinical prediction rule for PE probability",
     "clinical_context": ("Stratifies pretest probability of PE. Score > 4 = high risk, proceed to CTPA. "
                          "Score < 2 = low risk, consider PERC or D-dimer.")},
    {"id": "perc", "term": "PERC Rule", "category": "PE",
     "definition": "Pulmonary Embolism Rule-out Criteria",
     "clinical_context": ("Eight criteria that, if ALL met in LOW-risk patients, effectively rule out PE "
                          "without further testing.")},
    {"id": "d-dimer", "term": "D-dimer", "category": "PE",
     "definition": "Fibrin degradation product",
     "clinical_context": ("High sensitivity but low specificity for VTE. Useful for ruling out PE in "
                          "low/moderate risk patients when negative.")},
    {"id": "curb-65", "term": "CURB-65", "category": "Pneumonia",
     "definition": "Confusion, Urea, Respiratory rate, Blood pressure, age ≥ 65",
     "clinical_context": ("Severity score for CAP. Score 0-1: outpatient treatment. Score 2: consider "
                          "admission. Score 3-5: severe, hospitalize.")},
    {"id": "cap", "term": "CAP", "category": "Pneumonia",
     "definition": "Community-Acquired Pneumonia",
     "clinical_context": ("Pneumonia acquired outside healthcare settings. Common pathogens: S. pneumoniae, "
                          "H. influenzae, atypicals.")},
    {"id": "hap", "term": "HAP", "category": "Pneumonia",
     "definition": "Hospital-Acquired Pneumonia",
     "clinical_context": ("Pneumonia developing ≥ 48 hours after hospital admission. Higher risk of "
                          "resistant organisms (MRSA, Pseudomonas).")},
    {"id": "rovsing", "term": "Rovsing Sign", "category": "Acute Abdomen",
     "definition": "RLQ pain elicited by LLQ palpation",
     "clinical_context": "Indicates peritoneal irritation, suggestive of acute appendicitis."},
    {"id": "murphy", "term": "Murphy Sign", "category": "Acute Abdomen",
     "definition": "Inspiratory arrest during RUQ palpation",
     "clinical_context": ("Patient stops breathing in due to pain when palpating inflamed gallbladder. "
                          "Highly specific for acute cholecystitis.")},
    {"id": "charcot", "term": "Charcot Triad", "category": "Acute Abdomen",
     "definition": "Fever, jaundice, RUQ pain",
     "clinical_context": ("Classic triad for acute cholangitis (ascending biliary infection). Reynold pentad "
                          "adds hypotension and altered mental status.")},
    {"id": "discriminatory-zone", "term": "Discriminatory Zone", "category": "Ectopic",
     "definition": "β-hCG threshold for IUP visualization",
     "clinical_context": ("Typically 1500-2000 mIU/mL. Above this, an IUP should be visible on "
                          "transvaginal ultrasound if pregnancy is intrauterine.")},
    {"id": "beta-hcg", "term": "β-hCG", "category": "Ectopic",
     "definition": "Beta-human chorionic gonadotropin",
     "clinical_context": ("Hormone produced by placenta. Levels double every 48-72 hours in normal early "
                          "pregnancy. Used to evaluate pregnancy location and viability.")},
    {"id": "hellp", "term": "HELLP Syndrome", "category": "Preeclampsia",
     "definition": "Hemolysis, Elevated Liver enzymes, Low Platelets",
     "clinical_context": ("Severe variant of preeclampsia with high maternal/fetal morbidity. Often presents "
                          "with RUQ pain and elevated LFTs.")},
    {"id": "severe-features", "term": "Severe Features", "category": "Preeclampsia",
     "definition": "Criteria indicating severe preeclampsia",
     "clinical_context": ("Includes: BP ≥ 160/110, thrombocytopenia, elevated LFTs, renal insufficiency, "
                          "pulmonary edema, cerebral/visual symptoms.")},
    {"id": "eclampsia", "term": "Eclampsia", "category": "Preeclampsia",
     "definition": "Preeclampsia with new-onset seizures",
     "clinical_context": ("Life-threatening complication of preeclampsia. Grand mal seizures without other "
                          "attributable cause. Requires immediate intervention.")},
])


def search_glossary(query: str = "", category: Optional[str] = None) -> List[ScenarioRecord]:
    """
    Filter glossary terms by text and category.

    The query matches the term or its definition, case-insensitively. An
    empty query matches every term. Results are sorted by term.
    """
    needle = (query or "").strip().lower()
    matches = [
        record for record in GLOSSARY.list(category or ALL_CATEGORIES)
        if not needle
        or needle in record["term"].lower()
        or needle in record["definition"].lower()
    ]
    return sorted(matches, key=lambda r: r["term"].lower())


# ====== Home page ======

HOME_MODULES = [
    {"slug": c.slug, "title": title, "description": description, "accent": c.accent}
    for c, title, description in (
        (ACS, "ACS / MI",
         "Acute Coronary Syndrome & Myocardial Infarction - ECG patterns, biomarkers, and risk stratification"),
        (STROKE, "Stroke",
         "FAST exam, ischemic vs hemorrhagic, and imaging workflow for acute stroke management"),
        (SEPSIS, "Sepsis",
         "Early recognition, severity assessment, and source identification in septic patients"),
        (DKA_HHS, "DKA / HHS",
         "Diabetic Ketoacidosis & Hyperosmolar Hyperglycemic State - metabolic crisis differentiation"),
        (PE, "Pulmonary Embolism",
         "Wells score, PERC rule, and diagnostic pathway for PE evaluation"),
        (PNEUMONIA, "Pneumonia",
         "CAP vs HAP differentiation, severity scoring, and pattern recognition"),
        (ACUTE_ABDOMEN, "Acute Abdomen",
         "Appendicitis, cholecystitis, cholangitis - peritoneal signs and imaging findings"),
        (ECTOPIC, "Ectopic Pregnancy",
         "β-hCG interpretation, ultrasound patterns, and rupture red flags"),
        (PREECLAMPSIA, "Preeclampsia / Eclampsia",
         "Severe features, lab patterns, and seizure recognition in pregnancy"),
    )
]

LEARNING_TOOLS = [
    {"endpoint": "cases", "title": "Case Simulations",
     "description": "Practice with branching emergency scenarios and real-world clinical reasoning"},
    {"endpoint": "assessment", "title": "Assessment",
     "description": "Test your knowledge with MCQs, vignettes, and lab interpretation questions"},
    {"endpoint": "glossary", "title": "Glossary",
     "description": "Quick reference for emergency medicine terms, scores, and criteria"},
]

NAVIGATION = [
    ("index", "Home"),
    ("cases", "Cases"),
    ("assessment", "Assessment"),
    ("glossary", "Glossary"),
    ("settings", "Settings"),
]
