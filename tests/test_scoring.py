"""
Risk Score Tests - Wells PE and CURB-65 calculators

Checks totals and band boundaries against the published cut-offs.
"""

import pytest

from scoring import CALCULATORS, CURB_65, WELLS_PE, Criterion, ScoreBand, ScoreCalculator


class TestWellsScore:
    """Wells criteria for pulmonary embolism"""

    def test_nothing_checked(self):
        result = WELLS_PE.evaluate([])
        assert result.total == 0
        assert result.band.label == 'Low probability'

    def test_moderate(self):
        result = WELLS_PE.evaluate(['heart_rate', 'immobilization', 'hemoptysis'])
        assert result.total == 4.0
        assert result.band.label == 'Moderate probability'

    def test_high(self):
        result = WELLS_PE.evaluate(['clinical_signs', 'alternative_less_likely'])
        assert result.total == 6.0
        assert result.band.label == 'High probability'

    def test_everything_checked(self):
        result = WELLS_PE.evaluate([c.id for c in WELLS_PE.criteria])
        assert result.total == 12.5
        assert result.total == WELLS_PE.max_score
        assert result.band.key == 'high'

    @pytest.mark.parametrize("total,band", [
        (0, 'low'),
        (1.5, 'low'),
        (2, 'moderate'),
        (5.5, 'moderate'),
        (6, 'high'),
        (12.5, 'high'),
    ])
    def test_band_boundaries(self, total, band):
        """A boundary value belongs to the band it opens"""
        assert WELLS_PE.classify(total).key == band

    def test_order_of_ticks_does_not_matter(self):
        a = WELLS_PE.evaluate(['malignancy', 'heart_rate'])
        b = WELLS_PE.evaluate(['heart_rate', 'malignancy'])
        assert a.total == b.total == 2.5
        assert a.checked_ids == b.checked_ids == ['heart_rate', 'malignancy']

    def test_rows_follow_criteria_order(self):
        result = WELLS_PE.evaluate(['malignancy'])
        assert [row['criterion'].id for row in result.rows] == [c.id for c in WELLS_PE.criteria]
        assert [row['checked'] for row in result.rows][-1] is True

    def test_unknown_criterion(self):
        with pytest.raises(KeyError):
            WELLS_PE.evaluate(['confusion'])

    def test_format_total(self):
        assert WELLS_PE.format_total(4) == '4.0'
        assert WELLS_PE.format_total(7.5) == '7.5'


class TestCurb65:
    """CURB-65 pneumonia severity"""

    def test_criteria_have_letter_codes(self):
        assert [c.code for c in CURB_65.criteria] == ['C', 'U', 'R', 'B', '65']

    @pytest.mark.parametrize("checked,band", [
        ([], 'Low risk'),
        (['age'], 'Low risk'),
        (['confusion', 'urea'], 'Moderate risk'),
        (['confusion', 'urea', 'respiratory_rate'], 'High risk'),
    ])
    def test_bands(self, checked, band):
        assert CURB_65.evaluate(checked).band.label == band

    def test_whole_number_total(self):
        result = CURB_65.evaluate(['confusion', 'urea', 'respiratory_rate', 'blood_pressure', 'age'])
        assert CURB_65.format_total(result.total) == '5'


class TestCalculatorRegistry:

    def test_registry(self):
        assert CALCULATORS == {'wells': WELLS_PE, 'curb65': CURB_65}

    def test_result_to_dict(self):
        data = WELLS_PE.evaluate(['hemoptysis']).to_dict()
        assert data['total'] == 1
        assert data['band']['key'] == 'low'
        checked = [row for row in data['rows'] if row['checked']]
        assert checked == [{'id': 'hemoptysis', 'label': 'Hemoptysis', 'weight': 1.0, 'checked': True}]


class TestCalculatorValidation:
    """Malformed calculators are rejected at construction"""

    bands = [ScoreBand('low', 'Low', 0), ScoreBand('high', 'High', 2)]

    def test_duplicate_criteria(self):
        with pytest.raises(ValueError):
            ScoreCalculator('x', 'X', [Criterion('a', 'A', 1), Criterion('a', 'A again', 1)], self.bands)

    def test_negative_weight(self):
        with pytest.raises(ValueError):
            ScoreCalculator('x', 'X', [Criterion('a', 'A', -1)], self.bands)

    def test_first_band_must_start_at_zero(self):
        with pytest.raises(ValueError):
            ScoreCalculator('x', 'X', [Criterion('a', 'A', 1)], [ScoreBand('low', 'Low', 1)])

    def test_bands_must_increase(self):
        with pytest.raises(ValueError):
            ScoreCalculator('x', 'X', [Criterion('a', 'A', 1)],
                            [ScoreBand('low', 'Low', 0), ScoreBand('mid', 'Mid', 3), ScoreBand('high', 'High', 3)])
