"""
Tests for the JSON bridge used by the calculator form.
"""

import json

import pytest

from millpower.calculator.js_bridge import calculate


def _run(inputs) -> dict:
    return json.loads(calculate(json.dumps(inputs)))


class TestCalculate:

    def test_success(self, base_inputs):
        output = _run(base_inputs)
        assert output['success'] is True
        assert output['error'] is None
        assert output['error_kind'] is None
        assert len(output['steps']) == 8
        assert output['steps'][1]['rounded_value'] == 1
        assert output['motor_power_kw'] > 0
        assert output['motor_power_display'].endswith(" kW")
        assert output['valid'] is True
        assert output['messages'] == []

    def test_display_formats_included(self, base_inputs):
        output = _run(base_inputs)
        assert output['summary'].startswith("═══ Milling Power ═══")
        assert "# Milling Power Calculation" in output['markdown']
        assert "Carbon Steel (CK60)" in output['markdown']

    def test_string_values(self, base_inputs):
        numeric = _run(base_inputs)
        as_text = _run({key: str(value) for key, value in base_inputs.items()})
        assert as_text['motor_power_kw'] == pytest.approx(numeric['motor_power_kw'])

    def test_preset_overrides_material(self, base_inputs):
        base_inputs['material_preset'] = "aluminium"
        output = _run(base_inputs)
        assert output['success'] is True
        assert "Aluminium" in output['markdown']
        steel = _run({k: v for k, v in base_inputs.items() if k != 'material_preset'})
        assert output['motor_power_kw'] < steel['motor_power_kw']

    def test_custom_preset_keeps_values(self, base_inputs):
        plain = _run(base_inputs)
        base_inputs['material_preset'] = "custom"
        assert _run(base_inputs)['motor_power_kw'] == plain['motor_power_kw']

    def test_unknown_preset_ignored(self, base_inputs):
        base_inputs['material_preset'] = "unobtainium"
        assert _run(base_inputs)['success'] is True


class TestCalculateErrors:

    def test_invalid_json(self):
        output = json.loads(calculate("not valid json {"))
        assert output['success'] is False
        assert output['error'].startswith("Invalid JSON")
        assert output['motor_power_display'] == "-- kW"

    def test_invalid_geometry(self, base_inputs):
        base_inputs.update(ae=25, D=20)
        output = _run(base_inputs)
        assert output['success'] is False
        assert output['error_kind'] == "invalid_geometry"
        assert output['motor_power_display'] == "CALCULATION ERROR"
        assert output['steps'] == []
        assert output['valid'] is False
        assert [m['code'] for m in output['messages']] == ["RADIAL_DEPTH_EXCEEDS_DIAMETER"]

    def test_missing_field(self, base_inputs):
        del base_inputs['vc']
        output = _run(base_inputs)
        assert output['error_kind'] == "invalid_input"
        assert output['messages'][0]['field'] == "vc"

    def test_non_finite_result(self, base_inputs):
        base_inputs['ae'] = 0
        output = _run(base_inputs)
        assert output['error_kind'] == "non_finite_result"
        assert len(output['steps']) == 8
        assert output['motor_power_kw'] is None
        assert output['valid'] is True
        assert "RADIAL_DEPTH_NOT_POSITIVE" in [m['code'] for m in output['messages']]

    def test_non_object_payload(self):
        output = json.loads(calculate("[1, 2]"))
        assert output['success'] is False
        assert output['error']
