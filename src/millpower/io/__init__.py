"""
Millpower IO - parameter loading, result saving and material presets.

Example:
    >>> from millpower.io import load_parameters_json, save_result_json
    >>> from millpower.calculator import calculate_motor_power
    >>>
    >>> params = load_parameters_json("cut.json")
    >>> result = calculate_motor_power(params)
    >>> save_result_json(result, "result.json", params=params)
"""

from .loaders import (
    SCHEMA_VERSION,
    PARAMETER_FIELDS,
    CuttingParameters,
    parse_number,
    parse_count,
    parameters_from_dict,
    load_parameters_dict,
    load_parameters_json,
    save_result_json,
)

from .presets import (
    MaterialPreset,
    DEFAULT_PRESETS,
    get_preset,
    apply_preset,
)

__all__ = [
    "SCHEMA_VERSION",
    "PARAMETER_FIELDS",

    # Parameters
    "CuttingParameters",
    "parse_number",
    "parse_count",
    "parameters_from_dict",

    # Loaders
    "load_parameters_dict",
    "load_parameters_json",
    "save_result_json",

    # Presets
    "MaterialPreset",
    "DEFAULT_PRESETS",
    "get_preset",
    "apply_preset",
]
