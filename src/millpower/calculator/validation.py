"""
Milling Power Calculator - Input Validation

Checks cutting parameters before any calculation step runs. Values are
never transformed here.

Errors make the input invalid:
- every parameter must be a finite number
- D > 0
- ae <= D
- 0 < eta <= 1 (eta = eta_percent / 100)

Warnings flag physically doubtful values that the calculation still
accepts, such as ae <= 0. Those inputs fail later, if at all, through the
finiteness check on the motor power.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TYPE_CHECKING

from .constants import EFFICIENCY_MIN_EXCLUSIVE, EFFICIENCY_MAX, EDGE_ANGLE_RANGE_DEG, PERCENT

if TYPE_CHECKING:
    from ..io.loaders import CuttingParameters

# Parameters checked for finiteness, with display names
_NUMERIC_FIELDS = (
    ("kc11", "kc1.1"),
    ("one_minus_mc", "1 - mc"),
    ("D", "D"),
    ("Z", "Z"),
    ("ae", "ae"),
    ("ap", "ap"),
    ("vc", "vc"),
    ("fz", "fz"),
    ("kr_deg", "kr"),
    ("eta_percent", "eta"),
)

# Error codes reported as invalid geometry rather than invalid input
GEOMETRY_ERROR_CODES = frozenset({"RADIAL_DEPTH_EXCEEDS_DIAMETER"})

# Parameters that should be positive but are not rejected when they aren't
_SHOULD_BE_POSITIVE = (
    ("ae", "RADIAL_DEPTH_NOT_POSITIVE", "Radial depth of cut ae"),
    ("Z", "TEETH_NOT_POSITIVE", "Number of teeth Z"),
    ("ap", "AXIAL_DEPTH_NOT_POSITIVE", "Axial depth of cut ap"),
    ("fz", "FEED_NOT_POSITIVE", "Feed per tooth fz"),
    ("vc", "CUTTING_SPEED_NOT_POSITIVE", "Cutting speed vc"),
    ("kc11", "CUTTING_FORCE_COEFFICIENT_NOT_POSITIVE", "Specific cutting force kc1.1"),
)


class Severity(Enum):
    """Validation message severity"""
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    message: str
    field: Optional[str] = None
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def validate_parameters(params: "CuttingParameters") -> ValidationResult:
    """
    Validate cutting parameters.

    Args:
        params: CuttingParameters (or any object with the same attributes)

    Returns:
        ValidationResult; valid is False if any error was found
    """
    messages: List[ValidationMessage] = []

    messages.extend(_validate_numbers(params))
    messages.extend(_validate_diameter(params))
    messages.extend(_validate_radial_depth(params))
    messages.extend(_validate_efficiency(params))
    messages.extend(_validate_positive(params))
    messages.extend(_validate_edge_angle(params))

    has_errors = any(m.severity == Severity.ERROR for m in messages)

    return ValidationResult(
        valid=not has_errors,
        messages=messages
    )


def _validate_numbers(params: "CuttingParameters") -> List[ValidationMessage]:
    """Every parameter must parse to a finite number."""
    messages = []
    for name, display in _NUMERIC_FIELDS:
        value = getattr(params, name, None)
        if not _is_number(value):
            messages.append(ValidationMessage(
                severity=Severity.ERROR,
                code="NOT_A_NUMBER",
                field=name,
                message=f"{display} is not a valid number",
                suggestion="Fill in every field with a numeric value"
            ))
    return messages


def _validate_diameter(params: "CuttingParameters") -> List[ValidationMessage]:
    D = getattr(params, 'D', None)
    if _is_number(D) and D <= 0:
        return [ValidationMessage(
            severity=Severity.ERROR,
            code="DIAMETER_NOT_POSITIVE",
            field="D",
            message=f"Tool diameter D ({D} mm) must be greater than zero",
        )]
    return []


def _validate_radial_depth(params: "CuttingParameters") -> List[ValidationMessage]:
    ae = getattr(params, 'ae', None)
    D = getattr(params, 'D', None)
    if _is_number(ae) and _is_number(D) and ae > D:
        return [ValidationMessage(
            severity=Severity.ERROR,
            code="RADIAL_DEPTH_EXCEEDS_DIAMETER",
            field="ae",
            message=f"Radial depth of cut ae ({ae} mm) exceeds tool diameter D ({D} mm)",
            suggestion="Reduce ae to at most D (full slotting)"
        )]
    return []


def _validate_efficiency(params: "CuttingParameters") -> List[ValidationMessage]:
    eta_percent = getattr(params, 'eta_percent', None)
    if not _is_number(eta_percent):
        return []
    eta = eta_percent / PERCENT
    if eta <= EFFICIENCY_MIN_EXCLUSIVE or eta > EFFICIENCY_MAX:
        return [ValidationMessage(
            severity=Severity.ERROR,
            code="EFFICIENCY_OUT_OF_RANGE",
            field="eta_percent",
            message=f"Efficiency ({eta_percent}%) must be greater than 0% and at most 100%",
        )]
    return []


def _validate_positive(params: "CuttingParameters") -> List[ValidationMessage]:
    """Doubtful but accepted values: the calculation runs and may end non-finite."""
    messages = []
    for name, code, display in _SHOULD_BE_POSITIVE:
        value = getattr(params, name, None)
        if _is_number(value) and value <= 0:
            messages.append(ValidationMessage(
                severity=Severity.WARNING,
                code=code,
                field=name,
                message=f"{display} ({value}) is not positive",
            ))
    return messages


def _validate_edge_angle(params: "CuttingParameters") -> List[ValidationMessage]:
    kr = getattr(params, 'kr_deg', None)
    low, high = EDGE_ANGLE_RANGE_DEG
    if _is_number(kr) and not (low < kr < high):
        return [ValidationMessage(
            severity=Severity.WARNING,
            code="EDGE_ANGLE_OUT_OF_RANGE",
            field="kr_deg",
            message=f"Cutting-edge angle kr ({kr}°) is outside {low:.0f}°-{high:.0f}°",
            suggestion="Use 90° for a square shoulder mill"
        )]
    return []
