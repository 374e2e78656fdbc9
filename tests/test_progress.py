"""
Answer Progress Tests - Quiz and branching case rules

A question is revealed by its first choice, later clicks are ignored, and
exactly one option is marked correct once revealed.
"""

import pytest

from content import BRANCHING_CASES, QUESTIONS
from progress import CORRECT, INCORRECT, NEUTRAL, CaseSimulation, QuestionProgress, QuizSession, option_letter
from selection import OutOfRange


def states(options):
    return [o['state'] for o in options]


class TestQuestionProgress:

    def test_unanswered_options_are_neutral(self):
        progress = QuestionProgress()
        options = progress.option_states(correct_index=1, option_count=4)
        assert states(options) == [NEUTRAL] * 4
        assert not any(o['disabled'] for o in options)

    def test_wrong_choice(self):
        progress = QuestionProgress()
        assert progress.choose(0, 4) is True
        assert states(progress.option_states(1, 4)) == [INCORRECT, CORRECT, NEUTRAL, NEUTRAL]

    def test_right_choice(self):
        progress = QuestionProgress()
        progress.choose(1, 4)
        options = progress.option_states(1, 4)
        assert states(options).count(CORRECT) == 1
        assert INCORRECT not in states(options)
        assert all(o['disabled'] for o in options)

    def test_second_choice_is_ignored(self):
        progress = QuestionProgress()
        progress.choose(0, 4)
        assert progress.choose(2, 4) is False
        assert progress.chosen_index == 0

    @pytest.mark.parametrize("index", [-1, 4, None, True])
    def test_invalid_option(self, index):
        with pytest.raises(OutOfRange):
            QuestionProgress().choose(index, 4)

    def test_letters(self):
        assert [option_letter(i) for i in range(4)] == ['A', 'B', 'C', 'D']


class TestQuizSession:

    def test_starts_on_first_question(self):
        view = QuizSession(QUESTIONS).view()
        assert view['position'] == 1
        assert view['total'] == 10
        assert view['question']['id'] == 'q1'
        assert not view['has_previous']
        assert view['has_next']

    def test_categories(self):
        assert QuizSession(QUESTIONS).view()['categories'][0] == 'All'

    def test_navigation_stops_at_the_ends(self):
        quiz = QuizSession(QUESTIONS)
        assert quiz.previous() is False
        for _ in range(9):
            assert quiz.next() is True
        assert quiz.next() is False
        assert quiz.view()['position'] == 10

    def test_answer_survives_navigation(self):
        quiz = QuizSession(QUESTIONS)
        quiz.choose(0)
        quiz.next()
        assert not quiz.view()['question']['revealed']
        quiz.previous()
        question = quiz.view()['question']
        assert question['revealed']
        assert not question['is_correct']
        assert states(question['options']).count(INCORRECT) == 1

    def test_answer_survives_filter_change(self):
        quiz = QuizSession(QUESTIONS)
        quiz.choose(1)
        quiz.change_filter('PE')
        quiz.change_filter('All')
        assert quiz.view()['question']['is_correct']

    def test_filter(self):
        quiz = QuizSession(QUESTIONS)
        quiz.next()
        quiz.change_filter('Acute Abdomen')
        view = quiz.view()
        assert view['position'] == 1
        assert view['total'] == 2
        assert view['question']['category'] == 'Acute Abdomen'

    def test_empty_filter(self):
        quiz = QuizSession(QUESTIONS, 'Dermatology')
        view = quiz.view()
        assert view['question'] is None
        assert view['total'] == 0
        assert not view['has_next'] and not view['has_previous']
        with pytest.raises(OutOfRange):
            quiz.choose(0)

    def test_complete_after_answering_last(self):
        quiz = QuizSession(QUESTIONS, 'PE')
        assert not quiz.is_complete
        quiz.choose(3)
        assert quiz.is_complete

    def test_reset(self):
        quiz = QuizSession(QUESTIONS)
        quiz.choose(1)
        quiz.next()
        quiz.reset()
        view = quiz.view()
        assert view['position'] == 1
        assert not view['question']['revealed']

    def test_session_round_trip(self):
        quiz = QuizSession(QUESTIONS)
        quiz.next()
        quiz.choose(2)
        restored = QuizSession.from_dict(QUESTIONS, quiz.to_dict())
        assert restored.view() == quiz.view()


class TestCaseSimulation:

    def test_closed_by_default(self):
        assert CaseSimulation(BRANCHING_CASES).view() == {'open': False}

    def test_open_case(self):
        sim = CaseSimulation(BRANCHING_CASES)
        sim.open(0)
        view = sim.view()
        assert view['open']
        assert view['case'].id == 'case1'
        assert view['step']['number'] == 1
        assert view['step_count'] == 3
        assert not view['can_advance']

    def test_next_step_needs_an_answer(self):
        sim = CaseSimulation(BRANCHING_CASES)
        sim.open(0)
        assert sim.next_step() is False
        sim.choose(0)
        assert sim.next_step() is True
        assert sim.view()['step']['number'] == 2
        assert not sim.view()['step']['revealed']

    def test_complete_on_last_step(self):
        sim = CaseSimulation(BRANCHING_CASES)
        sim.open(2)
        sim.choose(1)
        sim.next_step()
        assert not sim.is_complete
        sim.choose(2)
        view = sim.view()
        assert view['is_complete']
        assert not view['can_advance']
        assert sim.next_step() is False

    def test_restart_clears_every_step(self):
        sim = CaseSimulation(BRANCHING_CASES)
        sim.open(0)
        sim.choose(1)
        sim.next_step()
        sim.choose(2)
        sim.restart()
        assert sim.step_index == 0
        assert sim.answers == [None, None, None]

    def test_back_to_cases(self):
        sim = CaseSimulation(BRANCHING_CASES)
        sim.open(1)
        sim.back_to_cases()
        assert not sim.is_open

    def test_open_out_of_range(self):
        with pytest.raises(OutOfRange):
            CaseSimulation(BRANCHING_CASES).open(len(BRANCHING_CASES))

    def test_choose_without_case(self):
        with pytest.raises(OutOfRange):
            CaseSimulation(BRANCHING_CASES).choose(0)

    def test_session_round_trip(self):
        sim = CaseSimulation(BRANCHING_CASES)
        sim.open(3)
        sim.choose(1)
        restored = CaseSimulation.from_dict(BRANCHING_CASES, sim.to_dict())
        assert restored.view() == sim.view()

    def test_stale_progress_restarts_case(self):
        restored = CaseSimulation.from_dict(BRANCHING_CASES, {"case_index": 0, "step_index": 5, "answers": [1]})
        assert restored.is_open
        assert restored.step_index == 0
        assert restored.answers == [None, None, None]
