"""
JSON bridge for the calculator form.

Provides a single entry point for a UI layer: raw form values in, the
derivation and the headline power out, both as JSON strings. Inputs are
parsed via Pydantic; unreadable fields become NaN and are reported by
validation.

Usage from JavaScript (Pyodide):
    pyodide.globals.set('input_json', JSON.stringify(formValues));
    const result = await pyodide.runPythonAsync(`
        from millpower.calculator.js_bridge import calculate
        calculate(input_json)
    `);
    const output = JSON.parse(result);
"""

import json
import logging
from typing import Any, List, Optional

from typing_extensions import TypedDict

from pydantic import BaseModel, ConfigDict, Field

from ..io.loaders import parameters_from_dict
from ..io.presets import DEFAULT_PRESETS, apply_preset
from .core import calculate_motor_power
from .output import format_motor_power, result_to_dict, to_markdown, to_summary
from .validation import validate_parameters

logger = logging.getLogger(__name__)


class ValidationMessageDict(TypedDict, total=False):
    """Type for validation message dictionaries sent to JavaScript."""
    severity: str  # "error", "warning"
    code: str  # e.g., "RADIAL_DEPTH_EXCEEDS_DIAMETER"
    field: Optional[str]
    message: str
    suggestion: Optional[str]


# ============================================================================
# Input Models
# ============================================================================

class CalculatorInputs(BaseModel):
    """
    All inputs from the calculator form.

    Values are kept raw (strings, numbers or null); parsing to numbers
    happens in CuttingParameters so unreadable fields become NaN.
    """
    model_config = ConfigDict(extra='ignore')

    # Optional preset; fills kc11, one_minus_mc and material_name
    material_preset: Optional[str] = None

    kc11: Any = None
    one_minus_mc: Any = None
    D: Any = None
    Z: Any = None
    ae: Any = None
    ap: Any = None
    vc: Any = None
    fz: Any = None
    kr_deg: Any = None
    eta_percent: Any = None
    material_name: Optional[str] = None


# ============================================================================
# Output Models
# ============================================================================

class StepOutput(BaseModel):
    """One derivation step, with full-precision value and display text."""
    number: int
    key: str
    label: str
    formula: str
    value: Optional[float] = None  # None if not finite
    display: str
    unit: str
    rounded_value: Optional[int] = None


class CalculatorOutput(BaseModel):
    """Output from calculate() - matches what JS expects."""
    model_config = ConfigDict(extra='ignore')

    success: bool
    error: Optional[str] = None
    error_kind: Optional[str] = None

    steps: List[StepOutput] = Field(default_factory=list)
    motor_power_kw: Optional[float] = None
    motor_power_display: str = "-- kW"

    # Display formats
    summary: Optional[str] = None
    markdown: Optional[str] = None

    # Validation
    valid: bool = True
    messages: List[ValidationMessageDict] = Field(default_factory=list)


# ============================================================================
# Main Entry Point
# ============================================================================

def calculate(input_json: str) -> str:
    """
    Single entry point for calculator operations from JavaScript.

    Args:
        input_json: JSON string with CalculatorInputs structure

    Returns:
        JSON string with CalculatorOutput structure
    """
    try:
        data = json.loads(input_json)
        inputs = CalculatorInputs.model_validate(data)

        raw = inputs.model_dump(exclude={'material_preset'})
        if inputs.material_preset:
            raw = apply_preset(raw, inputs.material_preset, DEFAULT_PRESETS)
        params = parameters_from_dict(raw)

        validation = validate_parameters(params)
        result = calculate_motor_power(params)
        result_dict = result_to_dict(result)

        output = CalculatorOutput(
            success=result.ok,
            error=result.reason,
            error_kind=result.error.value if result.error else None,
            steps=[StepOutput(**step) for step in result_dict['steps']],
            motor_power_kw=result_dict['motor_power_kw'],
            motor_power_display=format_motor_power(result),
            summary=to_summary(result),
            markdown=to_markdown(result, params, validation),
            valid=validation.valid,
            messages=[
                {
                    'severity': m.severity.value,
                    'code': m.code,
                    'field': m.field,
                    'message': m.message,
                    'suggestion': m.suggestion
                }
                for m in validation.messages
            ],
        )

        return output.model_dump_json()

    except json.JSONDecodeError as e:
        return CalculatorOutput(
            success=False,
            error=f"Invalid JSON: {e}"
        ).model_dump_json()

    except Exception as e:
        logger.exception("Calculator bridge failed")
        return CalculatorOutput(
            success=False,
            error=str(e)
        ).model_dump_json()
