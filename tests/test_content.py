"""
Content Tests - Authored modules, questions, cases and glossary are well formed
"""

import pytest

from content import (
    BRANCHING_CASES, CONDITIONS, GLOSSARY, HOME_MODULES, LEARNING_TOOLS, NAVIGATION, QUESTIONS,
    search_glossary,
)
from scoring import CALCULATORS

BLOCK_KINDS = {'simulator', 'calculator', 'pathway', 'concepts', 'bullets', 'numbered',
               'cards', 'table', 'grouped', 'highlight'}


class TestConditions:

    def test_nine_conditions(self):
        assert list(CONDITIONS) == ['acs', 'stroke', 'sepsis', 'dka-hhs', 'pe', 'pneumonia',
                                    'acute-abdomen', 'ectopic', 'preeclampsia']

    @pytest.mark.parametrize("slug", list(CONDITIONS))
    def test_blocks(self, slug):
        condition = CONDITIONS[slug]
        kinds = [block.kind for block in condition.blocks]
        assert set(kinds) <= BLOCK_KINDS
        assert kinds.count('simulator') == 1, f"{slug} needs exactly one simulator"
        assert ('pathway' in kinds) == (condition.pathway is not None)
        placed = [block.items[0] for block in condition.blocks if block.kind == 'calculator']
        assert placed == list(condition.calculators)
        assert all(calc_id in CALCULATORS for calc_id in placed)

    @pytest.mark.parametrize("slug", list(CONDITIONS))
    def test_three_cases(self, slug):
        assert len(CONDITIONS[slug].cases) == 3

    def test_home_modules_match_conditions(self):
        assert [m['slug'] for m in HOME_MODULES] == list(CONDITIONS)

    def test_navigation(self):
        assert [label for _, label in NAVIGATION] == ['Home', 'Cases', 'Assessment', 'Glossary', 'Settings']
        assert [t['endpoint'] for t in LEARNING_TOOLS] == ['cases', 'assessment', 'glossary']


class TestQuestionsAndCases:

    @pytest.mark.parametrize("question", list(QUESTIONS), ids=[q.id for q in QUESTIONS])
    def test_question_answer_is_an_option(self, question):
        assert 0 <= question['correct_index'] < len(question['options'])
        assert question['explanation']

    @pytest.mark.parametrize("case", list(BRANCHING_CASES), ids=[c.id for c in BRANCHING_CASES])
    def test_case_steps(self, case):
        assert case['steps'], f"{case.id} has no steps"
        for step in case['steps']:
            assert 0 <= step['correct_index'] < len(step['options'])

    def test_question_categories(self):
        assert QUESTIONS.categories() == ['All', 'ACS', 'Stroke', 'Sepsis', 'DKA/HHS', 'PE', 'Pneumonia',
                                          'Acute Abdomen', 'Ectopic', 'Preeclampsia']


class TestGlossarySearch:

    def test_empty_query_returns_everything_sorted(self):
        terms = search_glossary('')
        assert len(terms) == len(GLOSSARY) == 26
        names = [t['term'].lower() for t in terms]
        assert names == sorted(names)

    def test_matches_term(self):
        assert [t['term'] for t in search_glossary('wells')] == ['Wells Score']

    def test_matches_definition_case_insensitively(self):
        assert {t['term'] for t in search_glossary('MYOCARDIAL INFARCTION')} == {'STEMI', 'NSTEMI'}

    def test_category_filter(self):
        assert [t['term'] for t in search_glossary('', 'Sepsis')] == ['Lactate', 'qSOFA', 'SOFA Score']

    def test_query_and_category(self):
        assert search_glossary('sign', 'Acute Abdomen')
        assert search_glossary('sign', 'PE') == []

    def test_no_match(self):
        assert search_glossary('zzzz') == []
