"""
Milling Power Calculator - motor power for peripheral milling.

Example:
    >>> from millpower.calculator import calculate_motor_power, to_summary
    >>> from millpower.io import CuttingParameters
    >>>
    >>> params = CuttingParameters(
    ...     kc11=2130, one_minus_mc=0.82, D=20, Z=4, ae=5, ap=10,
    ...     vc=300, fz=0.1, kr_deg=90, eta_percent=80,
    ... )
    >>> result = calculate_motor_power(params)
    >>> print(to_summary(result))
"""

from .core import (
    STEP_DEFINITIONS,
    CalculationStep,
    CalculationResult,

    # Individual steps
    contact_angle_deg,
    teeth_in_contact,
    mean_chip_thickness,
    cutting_edge_length,
    chip_thickness_factor,
    cutting_force,
    cutting_power,
    motor_power,

    # Full pipeline
    calculate_motor_power,
)

from .validation import (
    validate_parameters,
    Severity,
    ValidationMessage,
    ValidationResult,
)

from .output import (
    format_number,
    format_motor_power,
    result_to_dict,
    to_json,
    to_markdown,
    to_summary,
)

from ..enums import ErrorKind, StepKey
from ..errors import (
    CalculationError,
    InvalidInputError,
    InvalidGeometryError,
    NonFiniteResultError,
)


__all__ = [
    # Enums
    "ErrorKind",
    "StepKey",

    # Results
    "STEP_DEFINITIONS",
    "CalculationStep",
    "CalculationResult",

    # Individual steps
    "contact_angle_deg",
    "teeth_in_contact",
    "mean_chip_thickness",
    "cutting_edge_length",
    "chip_thickness_factor",
    "cutting_force",
    "cutting_power",
    "motor_power",

    # Full pipeline
    "calculate_motor_power",

    # Validation
    "validate_parameters",
    "Severity",
    "ValidationMessage",
    "ValidationResult",

    # Output formatters
    "format_number",
    "format_motor_power",
    "result_to_dict",
    "to_json",
    "to_markdown",
    "to_summary",

    # Errors
    "CalculationError",
    "InvalidInputError",
    "InvalidGeometryError",
    "NonFiniteResultError",
]
