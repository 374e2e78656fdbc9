"""
Answer and progress tracking for the assessment quiz and the branching cases.

A question (or case step) is either unanswered or revealed. The first choice
reveals it and records the chosen option; later clicks are ignored until the
learner navigates away (quiz) or restarts the case.

Session state is kept as plain dicts so it can be stored by Flask-Session.
"""

import logging
import string
from typing import Any, Dict, List, Optional

from scenarios import ScenarioRecord, ScenarioRegistry
from selection import OutOfRange, SelectionController

logger = logging.getLogger(__name__)

CORRECT = "correct"
INCORRECT = "incorrect"
NEUTRAL = "neutral"


def option_letter(index: int) -> str:
    """0 -> 'A', 1 -> 'B', ..."""
    return string.ascii_uppercase[index]


class QuestionProgress:
    """Progress for a single question or case step."""

    def __init__(self, chosen_index: Optional[int] = None):
        self.chosen_index = chosen_index

    @property
    def revealed(self) -> bool:
        return self.chosen_index is not None

    def choose(self, index: int, option_count: int) -> bool:
        """
        Record a choice if the question is still unanswered.

        Returns:
            bool: True if the choice was recorded, False if already revealed

        Raises:
            OutOfRange: if index is not a valid option
        """
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < option_count:
            raise OutOfRange(index, option_count)
        if self.revealed:
            return False
        self.chosen_index = index
        return True

    def option_states(self, correct_index: int, option_count: int) -> List[Dict[str, Any]]:
        """
        Display state of every option.

        Before reveal every option is neutral and enabled. After reveal the
        correct option is marked correct, a wrong choice is marked incorrect,
        and all options are disabled.
        """
        states = []
        for idx in range(option_count):
            if not self.revealed:
                state = NEUTRAL
            elif idx == correct_index:
                state = CORRECT
            elif idx == self.chosen_index:
                state = INCORRECT
            else:
                state = NEUTRAL
            states.append({
                "index": idx,
                "letter": option_letter(idx),
                "state": state,
                "chosen": idx == self.chosen_index,
                "disabled": self.revealed,
            })
        return states


def _answer_view(record: ScenarioRecord, progress: QuestionProgress) -> Dict[str, Any]:
    options = record["options"]
    correct = record["correct_index"]
    return {
        "options": [
            dict(state, text=options[state["index"]])
            for state in progress.option_states(correct, len(options))
        ],
        "revealed": progress.revealed,
        "is_correct": progress.revealed and progress.chosen_index == correct,
        "explanation": record["explanation"] if progress.revealed else None,
    }


class QuizSession:
    """
    Flat assessment quiz with a category filter.

    Each question keeps its own progress, keyed by question id, so moving
    between questions or changing the filter never erases another
    question's answer.
    """

    def __init__(self, registry: ScenarioRegistry, category: Optional[str] = None,
                 answers: Optional[Dict[str, int]] = None):
        self.registry = registry
        self.selection = SelectionController(registry, category)
        self.answers: Dict[str, int] = dict(answers or {})

    @property
    def current(self) -> Optional[ScenarioRecord]:
        return self.selection.current

    def progress_for(self, record: ScenarioRecord) -> QuestionProgress:
        return QuestionProgress(self.answers.get(record.id))

    def choose(self, index: int) -> bool:
        record = self.current
        if record is None:
            raise OutOfRange(index, 0)
        progress = self.progress_for(record)
        recorded = progress.choose(index, len(record["options"]))
        if recorded:
            self.answers[record.id] = progress.chosen_index
        return recorded

    @property
    def has_next(self) -> bool:
        return not self.selection.is_last

    @property
    def has_previous(self) -> bool:
        return not self.selection.is_empty and not self.selection.is_first

    def next(self) -> bool:
        if not self.has_next:
            return False
        self.selection.select(self.selection.active_index + 1)
        return True

    def previous(self) -> bool:
        if not self.has_previous:
            return False
        self.selection.select(self.selection.active_index - 1)
        return True

    def change_filter(self, category: Optional[str]):
        self.selection.change_filter(category)

    def reset(self):
        self.answers.clear()
        self.selection.change_filter(self.selection.category)

    @property
    def is_complete(self) -> bool:
        record = self.current
        return record is not None and self.selection.is_last and self.progress_for(record).revealed

    def view(self) -> Dict[str, Any]:
        """Template context for the current question."""
        record = self.current
        data = {
            "category": self.selection.category,
            "categories": self.registry.categories(),
            "position": self.selection.active_index + 1,
            "total": self.selection.size,
            "has_next": self.has_next,
            "has_previous": self.has_previous,
            "is_complete": self.is_complete,
            "question": None,
        }
        if record is not None:
            data["question"] = dict(
                _answer_view(record, self.progress_for(record)),
                id=record.id,
                text=record["question"],
                category=record.category,
                type=record["type"],
            )
        return data

    def to_dict(self) -> Dict[str, Any]:
        return {"selection": self.selection.to_dict(), "answers": dict(self.answers)}

    @classmethod
    def from_dict(cls, registry: ScenarioRegistry, data: Optional[Dict[str, Any]]) -> "QuizSession":
        data = data or {}
        quiz = cls(registry, answers=data.get("answers"))
        quiz.selection = SelectionController.from_dict(registry, data.get("selection"))
        return quiz


class CaseSimulation:
    """
    Branching case player: pick a case, answer each step in order.

    Next Step is only available once the current step is revealed. Restart
    clears every step, not just the current one.
    """

    def __init__(self, registry: ScenarioRegistry):
        self.registry = registry
        self.case_index: Optional[int] = None
        self.step_index = 0
        self.answers: List[Optional[int]] = []

    @property
    def is_open(self) -> bool:
        return self.case_index is not None

    @property
    def current_case(self) -> Optional[ScenarioRecord]:
        if self.case_index is None:
            return None
        return self.registry[self.case_index]

    @property
    def steps(self):
        case = self.current_case
        return case["steps"] if case is not None else ()

    @property
    def current_step(self):
        if not self.is_open:
            return None
        return self.steps[self.step_index]

    @property
    def current_progress(self) -> QuestionProgress:
        if not self.is_open:
            return QuestionProgress()
        return QuestionProgress(self.answers[self.step_index])

    @property
    def is_last_step(self) -> bool:
        return self.is_open and self.step_index == len(self.steps) - 1

    @property
    def can_advance(self) -> bool:
        return self.is_open and self.current_progress.revealed and not self.is_last_step

    @property
    def is_complete(self) -> bool:
        return self.is_last_step and self.current_progress.revealed

    def open(self, index: int):
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self.registry):
            raise OutOfRange(index, len(self.registry))
        self.case_index = index
        self.step_index = 0
        self.answers = [None] * len(self.steps)
        logger.debug(f"Opened case {self.current_case.id}")

    def choose(self, index: int) -> bool:
        step = self.current_step
        if step is None:
            raise OutOfRange(index, 0)
        progress = self.current_progress
        recorded = progress.choose(index, len(step["options"]))
        if recorded:
            self.answers[self.step_index] = progress.chosen_index
        return recorded

    def next_step(self) -> bool:
        if not self.can_advance:
            return False
        self.step_index += 1
        self.answers[self.step_index] = None
        return True

    def restart(self):
        if not self.is_open:
            return
        self.step_index = 0
        self.answers = [None] * len(self.steps)

    def back_to_cases(self):
        self.case_index = None
        self.step_index = 0
        self.answers = []

    def view(self) -> Dict[str, Any]:
        case = self.current_case
        if case is None:
            return {"open": False}
        step = self.current_step
        step_view = dict(
            _answer_view(step, self.current_progress),
            number=self.step_index + 1,
            description=step["description"],
            question=step["question"],
        )
        return {
            "open": True,
            "case": case,
            "step": step_view,
            "step_count": len(self.steps),
            "can_advance": self.can_advance,
            "is_complete": self.is_complete,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {"case_index": self.case_index, "step_index": self.step_index, "answers": list(self.answers)}

    @classmethod
    def from_dict(cls, registry: ScenarioRegistry, data: Optional[Dict[str, Any]]) -> "CaseSimulation":
        """Restore from session data. Inconsistent progress restarts the case."""
        sim = cls(registry)
        data = data or {}
        case_index = data.get("case_index")
        if case_index is None:
            return sim
        try:
            sim.open(case_index)
        except OutOfRange:
            return sim
        answers = list(data.get("answers") or [])
        step_index = data.get("step_index", 0)
        if len(answers) != len(sim.steps) or not 0 <= step_index < len(sim.steps):
            logger.warning(f"Discarding stale case progress for case index {case_index}")
            return sim
        sim.step_index = step_index
        sim.answers = answers
        return sim
