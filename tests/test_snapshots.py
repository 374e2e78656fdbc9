"""
HTML Snapshot Tests - Detect Template Changes

Stores known-good HTML snippets and compares against the rendered pages.
Alerts when templates change unexpectedly.
"""

import pytest


# Known-good HTML snippets (extracted from working templates)
# These act as "golden masters" to detect unexpected changes

HOME_PAGE_SNAPSHOTS = {
    'title': '<title>Emergency Master - Emergency Medicine Education</title>',
    'modules': 'Emergency Modules',
    'tools': 'Learning Tools',
    'static_css': '/static/main.css?v=1',
    'static_js': '/static/utils.js?v=1',
}

PE_PAGE_SNAPSHOTS = {
    'title': '<title>Pulmonary Embolism - Emergency Master</title>',
    'calculator': 'id="calculator-wells"',
    'simulator': 'PE Risk Assessment Cases',
}

STROKE_PAGE_SNAPSHOTS = {
    'title': '<title>Stroke - Emergency Master</title>',
    'pathway': 'id="pathway"',
}

PAGE_TITLES = {
    '/cases': '<title>Case Simulations - Emergency Master</title>',
    '/assessment': '<title>Assessment - Emergency Master</title>',
    '/glossary': '<title>Glossary - Emergency Master</title>',
    '/settings': '<title>Settings - Emergency Master</title>',
}


class TestHomePageSnapshot:
    """Snapshot tests for home page"""

    def test_home_title_unchanged(self, client):
        """Home page title should match known-good snapshot"""
        html = client.get('/').data.decode('utf-8')
        assert HOME_PAGE_SNAPSHOTS['title'] in html, \
            "Home page title changed unexpectedly - template may have been swapped"

    def test_home_sections_unchanged(self, client):
        html = client.get('/').data.decode('utf-8')
        assert HOME_PAGE_SNAPSHOTS['modules'] in html, "Home page missing module grid"
        assert HOME_PAGE_SNAPSHOTS['tools'] in html, "Home page missing learning tools"

    def test_home_loads_expected_assets(self, client):
        """CSS/JS references should match snapshot"""
        html = client.get('/').data.decode('utf-8')
        assert HOME_PAGE_SNAPSHOTS['static_css'] in html, "Home page CSS reference changed"
        assert HOME_PAGE_SNAPSHOTS['static_js'] in html, "Home page JS reference changed"


class TestConditionPageSnapshot:
    """Snapshot tests for condition pages"""

    def test_pe_page_unchanged(self, client):
        html = client.get('/pe').data.decode('utf-8')
        for key, snippet in PE_PAGE_SNAPSHOTS.items():
            assert snippet in html, f"PE page {key} changed unexpectedly"

    def test_pe_calculator_before_simulator(self, client):
        """The Wells calculator sits above the case simulator"""
        html = client.get('/pe').data.decode('utf-8')
        assert html.index('id="calculator-wells"') < html.index('id="simulator"')

    def test_pneumonia_calculator_after_simulator(self, client):
        html = client.get('/pneumonia').data.decode('utf-8')
        assert html.index('id="simulator"') < html.index('id="calculator-curb65"')

    def test_stroke_page_unchanged(self, client):
        html = client.get('/stroke').data.decode('utf-8')
        for key, snippet in STROKE_PAGE_SNAPSHOTS.items():
            assert snippet in html, f"Stroke page {key} changed unexpectedly"


class TestPageTitles:

    @pytest.mark.parametrize("path,title", list(PAGE_TITLES.items()))
    def test_page_title_unchanged(self, client, path, title):
        html = client.get(path).data.decode('utf-8')
        assert title in html, f"{path} title changed unexpectedly"


class TestCrossPageValidation:
    """Ensure pages don't have each other's content"""

    def test_home_is_not_a_condition_page(self, client):
        """
        CRITICAL REGRESSION TEST:
        Home page should NOT contain a case simulator
        """
        home = client.get('/').data.decode('utf-8')
        assert 'id="simulator"' not in home, \
            "CRITICAL: Home page contains a case simulator - WRONG TEMPLATE!"

    def test_only_pe_has_wells(self, client):
        acs = client.get('/acs').data.decode('utf-8')
        assert 'calculator-wells' not in acs, "ACS page rendered the Wells calculator"

    def test_only_stroke_has_pathway(self, client):
        sepsis = client.get('/sepsis').data.decode('utf-8')
        assert 'id="pathway"' not in sepsis, "Sepsis page rendered the imaging pathway"


# Quick test runner
if __name__ == '__main__':
    print("Running HTML snapshot tests...")
    pytest.main([__file__, '-v'])
