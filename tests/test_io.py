"""
Tests for parameter parsing, JSON loading/saving and material presets.
"""

import json
import math

import pytest
from pydantic import ValidationError

from millpower.calculator import calculate_motor_power
from millpower.io import (
    DEFAULT_PRESETS,
    MaterialPreset,
    CuttingParameters,
    apply_preset,
    get_preset,
    load_parameters_dict,
    load_parameters_json,
    parameters_from_dict,
    parse_count,
    parse_number,
    save_result_json,
)


class TestParseNumber:

    @pytest.mark.parametrize("raw, expected", [
        (20, 20.0),
        (0.1, 0.1),
        ("300", 300.0),
        ("  0.82 ", 0.82),
        ("0,1", 0.1),
        ("1e3", 1000.0),
    ])
    def test_numbers(self, raw, expected):
        assert parse_number(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "-", ".", "e5", True, [1], {}])
    def test_unreadable_is_nan(self, raw):
        assert math.isnan(parse_number(raw))

    def test_infinity_passes_through(self):
        assert parse_number(math.inf) == math.inf
        assert parse_number("-Infinity") == -math.inf

    @pytest.mark.parametrize("raw, expected", [
        ("12abc", 12.0),
        ("1_000", 1.0),
        ("0.5mm", 0.5),
        ("1,2,3", 1.2),
        ("3.", 3.0),
        (".25", 0.25),
        ("2e", 2.0),
        ("-7.5 m/min", -7.5),
    ])
    def test_leading_number_is_read(self, raw, expected):
        assert parse_number(raw) == pytest.approx(expected)

    def test_huge_integer_is_nan(self):
        assert math.isnan(parse_number(10 ** 400))


class TestParseCount:

    @pytest.mark.parametrize("raw, expected", [
        (4, 4.0),
        ("4", 4.0),
        (4.7, 4.0),
        ("-2.5", -2.0),
    ])
    def test_truncates(self, raw, expected):
        assert parse_count(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        ("4 flutes", 4.0),
        ("4,7", 4.0),
        ("1e3", 1.0),
    ])
    def test_leading_integer_is_read(self, raw, expected):
        assert parse_count(raw) == expected

    def test_unreadable_is_nan(self):
        assert math.isnan(parse_count("four"))
        assert math.isnan(parse_count(10 ** 400))


class TestCuttingParameters:

    def test_strings_are_coerced(self, base_inputs):
        base_inputs.update(D="20", ae="5,0", Z="4")
        params = CuttingParameters(**base_inputs)
        assert params.D == 20.0
        assert params.ae == 5.0
        assert params.Z == 4.0

    def test_unparsable_becomes_nan(self, base_inputs):
        base_inputs['vc'] = "fast"
        params = CuttingParameters(**base_inputs)
        assert math.isnan(params.vc)

    def test_frozen(self, params):
        with pytest.raises(ValidationError):
            params.D = 30

    def test_eta_fraction(self, make_params):
        assert make_params(eta_percent=80).eta == pytest.approx(0.8)

    def test_material_name_stripped(self, make_params):
        assert make_params(material_name="  Aluminium ").material_name == "Aluminium"
        assert make_params(material_name=None).material_name == ""

    def test_missing_field_raises(self):
        with pytest.raises(ValidationError):
            CuttingParameters(kc11=2130)


class TestParametersFromDict:

    def test_missing_fields_become_nan(self):
        params = parameters_from_dict({'D': 20})
        assert params.D == 20.0
        assert math.isnan(params.ae)
        assert params.material_name == ""

    def test_extra_keys_ignored(self, base_inputs):
        base_inputs['spindle'] = "HSK63"
        params = parameters_from_dict(base_inputs)
        assert not hasattr(params, 'spindle')


class TestJsonFiles:

    def test_load_flat(self, tmp_path, base_inputs):
        path = tmp_path / "cut.json"
        path.write_text(json.dumps(base_inputs))
        params = load_parameters_json(path)
        assert params.D == 20.0
        assert params.material_name == "Carbon Steel (CK60)"

    def test_load_nested_parameters(self, tmp_path, base_inputs):
        path = tmp_path / "cut.json"
        path.write_text(json.dumps({'parameters': base_inputs}))
        assert load_parameters_json(path).ap == 10.0

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_parameters_json(tmp_path / "missing.json")

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("not valid json {")
        with pytest.raises(json.JSONDecodeError):
            load_parameters_json(path)

    def test_load_non_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ValueError, match="JSON object"):
            load_parameters_json(path)

    def test_load_raw_values(self, tmp_path, base_inputs):
        base_inputs.update(D="20,5", spindle="HSK63")
        path = tmp_path / "cut.json"
        path.write_text(json.dumps({'parameters': base_inputs, 'success': True}))
        raw = load_parameters_dict(path)
        assert raw['D'] == "20,5"
        assert "spindle" not in raw
        assert raw['material_name'] == "Carbon Steel (CK60)"

    def test_huge_integer_is_unreadable(self, tmp_path, base_inputs):
        base_inputs['vc'] = 10 ** 400
        path = tmp_path / "cut.json"
        path.write_text(json.dumps(base_inputs))
        params = load_parameters_json(path)
        assert math.isnan(params.vc)

    def test_save_and_reload(self, tmp_path, params):
        result = calculate_motor_power(params)
        path = save_result_json(result, tmp_path / "result.json", params=params)

        data = json.loads(path.read_text())
        assert data['success'] is True
        assert data['motor_power_kw'] == pytest.approx(result.motor_power_kw)

        reloaded = load_parameters_json(path)
        assert reloaded == params


class TestPresets:

    def test_default_table(self):
        assert set(DEFAULT_PRESETS) == {"custom", "carbon_steel", "aluminium", "cast_iron"}
        assert DEFAULT_PRESETS["aluminium"].kc11 == 700
        assert DEFAULT_PRESETS["aluminium"].one_minus_mc == 0.75
        assert DEFAULT_PRESETS["cast_iron"].kc11 == 1300

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_PRESETS["titanium"] = MaterialPreset(key="titanium", kc11=1400, one_minus_mc=0.77, name="Ti")

    def test_get_preset(self):
        assert get_preset("carbon_steel").name == "Carbon Steel (CK60)"

    def test_get_unknown_preset(self):
        with pytest.raises(KeyError, match="known"):
            get_preset("unobtainium")

    def test_apply_preset(self, base_inputs):
        populated = apply_preset(base_inputs, "aluminium")
        assert populated['kc11'] == 700
        assert populated['one_minus_mc'] == 0.75
        assert populated['material_name'] == "Aluminium"
        assert populated['D'] == base_inputs['D']
        # Original inputs untouched
        assert base_inputs['kc11'] == 2130

    def test_apply_unknown_preset_is_noop(self, base_inputs):
        assert apply_preset(base_inputs, "unobtainium") == base_inputs

    def test_injected_table(self, base_inputs):
        table = {"ti": MaterialPreset(key="ti", kc11=1400, one_minus_mc=0.77, name="Titanium")}
        populated = apply_preset(base_inputs, "ti", presets=table)
        assert populated['kc11'] == 1400
