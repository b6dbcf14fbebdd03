"""
Pytest configuration and shared fixtures for millpower tests.
"""

import pytest

from millpower.io import CuttingParameters


# Carbon steel, 20 mm 4-flute cutter at quarter engagement
BASE_INPUTS = {
    'kc11': 2130,
    'one_minus_mc': 0.82,
    'D': 20,
    'Z': 4,
    'ae': 5,
    'ap': 10,
    'vc': 300,
    'fz': 0.1,
    'kr_deg': 90,
    'eta_percent': 80,
    'material_name': 'Carbon Steel (CK60)',
}


def _make_params(**overrides) -> CuttingParameters:
    """Build CuttingParameters from BASE_INPUTS with overrides."""
    values = dict(BASE_INPUTS)
    values.update(overrides)
    return CuttingParameters(**values)


@pytest.fixture
def base_inputs():
    """Raw input dict (a fresh copy per test)."""
    return dict(BASE_INPUTS)


@pytest.fixture
def params():
    """Valid cutting parameters."""
    return _make_params()


@pytest.fixture
def make_params():
    """Factory: make_params(ap=12) -> CuttingParameters with overrides."""
    return _make_params
