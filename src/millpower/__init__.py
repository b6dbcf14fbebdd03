"""
Millpower - motor power calculator for peripheral milling.

Computes the cutting force, cutting power and required motor power from
tool geometry, cutting data and material coefficients, with the full
eight-step derivation.

Example:
    >>> from millpower import CuttingParameters, calculate_motor_power, to_summary
    >>>
    >>> params = CuttingParameters(
    ...     kc11=2130, one_minus_mc=0.82, D=20, Z=4, ae=5, ap=10,
    ...     vc=300, fz=0.1, kr_deg=90, eta_percent=80,
    ... )
    >>> result = calculate_motor_power(params)
    >>> result.motor_power_kw

Note: All imports are lazy-loaded. The calculator can be imported without
triggering the assistant services (httpx) imports.
"""

__version__ = "1.0.0"

# Define which names come from which submodule
# All imports are lazy to minimize startup time

_ENUMS = {"ErrorKind", "StepKey"}

_ERRORS = {"CalculationError", "InvalidInputError", "InvalidGeometryError", "NonFiniteResultError"}

_CALCULATOR = {
    "calculate_motor_power",
    "validate_parameters",
    "CalculationStep",
    "CalculationResult",
    "Severity",
    "ValidationResult",
    "format_number",
    "format_motor_power",
    "to_json",
    "to_markdown",
    "to_summary",
}

_IO = {
    "CuttingParameters",
    "parameters_from_dict",
    "MaterialPreset",
    "DEFAULT_PRESETS",
    "get_preset",
    "apply_preset",
    "load_parameters_json",
    "save_result_json",
}

_SERVICES = {"GeminiAssistant", "AssistantError", "retry_with_backoff"}

_CONFIG = {"Settings"}

_SUBMODULES = (
    (_ENUMS, "enums"),
    (_ERRORS, "errors"),
    (_CALCULATOR, "calculator"),
    (_IO, "io"),
    (_SERVICES, "services"),
    (_CONFIG, "config"),
)

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    import importlib

    for names, submodule in _SUBMODULES:
        if name in names:
            if submodule not in _modules:
                _modules[submodule] = importlib.import_module(f".{submodule}", __name__)
            return getattr(_modules[submodule], name)

    raise AttributeError(f"module 'millpower' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Enums
    "ErrorKind",
    "StepKey",

    # Errors
    "CalculationError",
    "InvalidInputError",
    "InvalidGeometryError",
    "NonFiniteResultError",

    # Calculator
    "calculate_motor_power",
    "validate_parameters",
    "CalculationStep",
    "CalculationResult",
    "Severity",
    "ValidationResult",
    "format_number",
    "format_motor_power",
    "to_json",
    "to_markdown",
    "to_summary",

    # IO
    "CuttingParameters",
    "parameters_from_dict",
    "MaterialPreset",
    "DEFAULT_PRESETS",
    "get_preset",
    "apply_preset",
    "load_parameters_json",
    "save_result_json",

    # Services
    "GeminiAssistant",
    "AssistantError",
    "retry_with_backoff",

    # Config
    "Settings",
]
