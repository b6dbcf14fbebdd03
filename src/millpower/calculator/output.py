"""Output formatters for milling power results.

Converts CalculationResult to JSON, Markdown and plain-text summaries.
Numbers are shown pt-BR style (decimal comma); JSON carries full precision.
"""

import json
import math
from dataclasses import asdict
from typing import Optional, TYPE_CHECKING

from .constants import (
    DISPLAY_THRESHOLD,
    DECIMALS_LARGE,
    DECIMALS_SMALL,
    DECIMALS_HEADLINE,
    DECIMAL_SEPARATOR,
    CALCULATION_ERROR_TEXT,
)
from .core import CalculationResult, CalculationStep

if TYPE_CHECKING:
    from ..io.loaders import CuttingParameters
    from .validation import ValidationResult


def _with_separator(text: str) -> str:
    return text.replace(".", DECIMAL_SEPARATOR)


def format_number(value: float) -> str:
    """
    Format a step value for display.

    Values >= 1 get 1 decimal, smaller ones 4 decimals, with a decimal comma.
    Non-finite values are shown as 'nan', 'inf' or '-inf'.
    """
    if not math.isfinite(value):
        return str(value)
    decimals = DECIMALS_LARGE if value >= DISPLAY_THRESHOLD else DECIMALS_SMALL
    return _with_separator(f"{value:.{decimals}f}")


def format_motor_power(result: CalculationResult) -> str:
    """Headline value: '12,34 kW', or the error text if the calculation failed."""
    if not result.ok or not math.isfinite(result.motor_power_kw):
        return CALCULATION_ERROR_TEXT
    return _with_separator(f"{result.motor_power_kw:.{DECIMALS_HEADLINE}f}") + " kW"


def step_unit(step: CalculationStep) -> str:
    """Unit text for a step, including the rounded Zc for step 2."""
    if step.rounded_value is not None:
        return f"{step.unit} (Zc used: {step.rounded_value})"
    return step.unit


def _json_number(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def _step_to_dict(step: CalculationStep) -> dict:
    data = asdict(step)
    data['key'] = step.key.value
    data['value'] = _json_number(step.value)
    if isinstance(step.rounded_value, float):
        data['rounded_value'] = _json_number(step.rounded_value)
    data['display'] = format_number(step.value)
    return data


def result_to_dict(
    result: CalculationResult,
    params: Optional["CuttingParameters"] = None,
    validation: Optional["ValidationResult"] = None,
) -> dict:
    """Convert a result to JSON-compatible types (non-finite numbers become None)."""
    from ..io.loaders import SCHEMA_VERSION

    data = {
        'schema_version': SCHEMA_VERSION,
        'success': result.ok,
        'error': result.error.value if result.error else None,
        'reason': result.reason,
        'steps': [_step_to_dict(s) for s in result.steps],
        'motor_power_kw': _json_number(result.motor_power_kw),
        'motor_power_display': format_motor_power(result),
    }

    if params is not None:
        data['parameters'] = {
            name: _json_number(value) if isinstance(value, float) else value
            for name, value in params.model_dump().items()
        }

    if validation is not None:
        data['validation'] = {
            'valid': validation.valid,
            'messages': [
                {
                    'severity': m.severity.value,
                    'code': m.code,
                    'field': m.field,
                    'message': m.message,
                    'suggestion': m.suggestion,
                }
                for m in validation.messages
            ],
        }

    return data


def to_json(
    result: CalculationResult,
    params: Optional["CuttingParameters"] = None,
    validation: Optional["ValidationResult"] = None,
    indent: int = 2,
) -> str:
    """Convert a result to a JSON string.

    Args:
        result: CalculationResult from calculate_motor_power()
        params: Optional inputs to embed under "parameters"
        validation: Optional validation findings to embed
        indent: JSON indentation level (default: 2)

    Returns:
        JSON string; NaN and infinity are written as null
    """
    return json.dumps(result_to_dict(result, params, validation), indent=indent)


def to_markdown(
    result: CalculationResult,
    params: Optional["CuttingParameters"] = None,
    validation: Optional["ValidationResult"] = None,
) -> str:
    """Convert a result to a Markdown derivation.

    Args:
        result: CalculationResult from calculate_motor_power()
        params: Optional inputs, rendered as a table
        validation: Optional validation findings

    Returns:
        Markdown string
    """
    md = "# Milling Power Calculation\n\n"

    if params is not None:
        md += "## Cutting Parameters\n\n"
        if params.material_name:
            md += f"**Material:** {params.material_name}\n\n"
        md += "| Parameter | Value |\n"
        md += "|-----------|-------|\n"
        md += f"| kc1.1 | {format_number(params.kc11)} N/mm² |\n"
        md += f"| 1 - mc | {format_number(params.one_minus_mc)} |\n"
        md += f"| D | {format_number(params.D)} mm |\n"
        md += f"| Z | {format_number(params.Z)} |\n"
        md += f"| ae | {format_number(params.ae)} mm |\n"
        md += f"| ap | {format_number(params.ap)} mm |\n"
        md += f"| vc | {format_number(params.vc)} m/min |\n"
        md += f"| fz | {format_number(params.fz)} mm |\n"
        md += f"| κr | {format_number(params.kr_deg)}° |\n"
        md += f"| η | {format_number(params.eta_percent)}% |\n\n"

    if result.steps:
        md += "## Derivation\n\n"
        for step in result.steps:
            md += f"### {step.number}. {step.label}\n\n"
            md += f"$$ {step.formula} $$\n\n"
            md += f"**{format_number(step.value)} {step_unit(step)}**\n\n"

    md += "## Result\n\n"
    md += f"**Motor Power:** {format_motor_power(result)}\n\n"
    if not result.ok:
        md += f"**Error:** {result.reason}\n\n"

    if validation and validation.messages:
        md += "## Validation\n\n"
        for msg in validation.messages:
            md += f"- **{msg.code}** ({msg.severity.value}): {msg.message}\n"
            if msg.suggestion:
                md += f"  - *Suggestion*: {msg.suggestion}\n"
        md += "\n"

    md += "---\n"
    md += "*Generated by Millpower Calculator*\n"

    return md


def to_summary(result: CalculationResult) -> str:
    """Convert a result to a short multi-line text summary."""
    lines = ["═══ Milling Power ═══"]

    width = max((len(s.label) for s in result.steps), default=0)
    for step in result.steps:
        lines.append(f"{step.number}. {step.label:<{width}}  {format_number(step.value)} {step_unit(step)}")

    if result.steps:
        lines.append("")
    lines.append(f"Motor power: {format_motor_power(result)}")
    if not result.ok:
        lines.append(f"Error: {result.reason}")

    return "\n".join(lines)
