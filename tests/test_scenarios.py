"""
Scenario Registry and Selection Tests
"""

import pytest

from scenarios import ALL_CATEGORIES, ScenarioRegistry, make_record
from selection import OutOfRange, SelectionController


@pytest.fixture
def registry():
    return ScenarioRegistry.from_dicts([
        {"id": "a", "category": "ACS", "title": "First"},
        {"id": "b", "category": "PE", "title": "Second"},
        {"id": "c", "category": "ACS", "title": "Third", "tags": ["x", "y"]},
    ])


class TestScenarioRegistry:

    def test_list_all(self, registry):
        assert [r.id for r in registry.list()] == ['a', 'b', 'c']
        assert registry.list(ALL_CATEGORIES) == registry.list(None)

    def test_list_by_category_keeps_order(self, registry):
        assert [r.id for r in registry.list('ACS')] == ['a', 'c']

    def test_unknown_category_is_empty(self, registry):
        assert registry.list('Stroke') == ()

    def test_categories(self, registry):
        assert registry.categories() == ['All', 'ACS', 'PE']

    def test_lookup(self, registry):
        assert registry.get('b')['title'] == 'Second'
        assert registry[0].id == 'a'
        assert len(registry) == 3
        with pytest.raises(KeyError):
            registry.get('z')

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            ScenarioRegistry.from_dicts([{"id": "a"}, {"id": "a"}])

    def test_records_are_read_only(self, registry):
        record = registry.get('c')
        assert record['tags'] == ('x', 'y')
        with pytest.raises(TypeError):
            record.fields['title'] = 'Changed'

    def test_to_dict_is_plain(self, registry):
        assert registry.get('c').to_dict() == {
            'id': 'c', 'category': 'ACS', 'title': 'Third', 'tags': ['x', 'y'],
        }

    def test_no_category_field(self):
        record = make_record({"id": "case1", "category": "ignored"}, category_field=None)
        assert record.category is None
        assert record['category'] == 'ignored'


class TestSelectionController:

    def test_starts_at_first(self, registry):
        selection = SelectionController(registry)
        assert selection.active_index == 0
        assert selection.current.id == 'a'
        assert selection.is_first
        assert not selection.is_last

    def test_select(self, registry):
        selection = SelectionController(registry)
        assert selection.select(2).id == 'c'
        assert selection.is_last

    @pytest.mark.parametrize("index", [-1, 3, True, '1'])
    def test_select_out_of_range(self, registry, index):
        selection = SelectionController(registry)
        selection.select(1)
        with pytest.raises(OutOfRange):
            selection.select(index)
        assert selection.active_index == 1, "A failed selection must not move the cursor"

    def test_change_filter_resets_to_first(self, registry):
        selection = SelectionController(registry)
        selection.select(2)
        selection.change_filter('ACS')
        assert selection.active_index == 0
        assert [r.id for r in selection.items] == ['a', 'c']

    def test_empty_filter(self, registry):
        selection = SelectionController(registry, 'Stroke')
        assert selection.is_empty
        assert selection.current is None
        assert selection.is_last
        with pytest.raises(OutOfRange):
            selection.select(0)

    def test_session_round_trip(self, registry):
        selection = SelectionController(registry, 'ACS')
        selection.select(1)
        restored = SelectionController.from_dict(registry, selection.to_dict())
        assert restored.category == 'ACS'
        assert restored.current.id == 'c'

    def test_stale_index_falls_back_to_first(self, registry):
        restored = SelectionController.from_dict(registry, {"category": "PE", "active_index": 4})
        assert restored.active_index == 0
        assert restored.current.id == 'b'
