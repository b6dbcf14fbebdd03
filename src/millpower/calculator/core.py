"""
Milling Power Calculator - Core Calculations

Pure functions for the power required by a peripheral milling cut,
following the Kienzle cutting-force model:

    phi_s -> Zc -> hm -> b -> hm^(1-mc) -> Fc -> Pc -> Pm

Arithmetic follows IEEE-754 throughout: a division by zero or a fractional
power of a negative number yields inf/NaN instead of raising, and the final
finiteness check reports the failure.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

from ..enums import ErrorKind, StepKey
from ..errors import ERRORS_BY_KIND, InvalidGeometryError
from .constants import DEG_TO_RAD, RAD_TO_DEG, FULL_TURN_DEG, POWER_CONVERSION_FACTOR
from .validation import GEOMETRY_ERROR_CODES, validate_parameters

if TYPE_CHECKING:
    from ..io.loaders import CuttingParameters

logger = logging.getLogger(__name__)


# (key, label, LaTeX formula, unit) in calculation order
STEP_DEFINITIONS: Tuple[Tuple[StepKey, str, str, str], ...] = (
    (StepKey.CONTACT_ANGLE, "Effective Contact Angle",
     r"\phi_s = \arccos(1 - \frac{2 \cdot a_e}{D})", "deg"),
    (StepKey.TEETH_IN_CONTACT, "Teeth in Contact",
     r"Z_c = \lceil Z \cdot \frac{\phi_s}{360^{\circ}} \rceil", "teeth"),
    (StepKey.MEAN_CHIP_THICKNESS, "Mean Chip Thickness",
     r"h_m = \frac{360^{\circ}}{\phi_s} \cdot \frac{f_z}{\pi} \cdot \frac{a_e}{D} \cdot \sin(\kappa_r)", "mm"),
    (StepKey.CUTTING_EDGE_LENGTH, "Active Cutting-Edge Length",
     r"b = \frac{a_p}{\sin(\kappa_r)}", "mm"),
    (StepKey.CHIP_THICKNESS_FACTOR, "Chip Thickness Factor",
     r"h_m^{(1-m_c)}", "factor"),
    (StepKey.CUTTING_FORCE, "Cutting Force",
     r"F_c = k_{c1.1} \cdot b \cdot Z_c \cdot h_m^{(1-m_c)}", "N"),
    (StepKey.CUTTING_POWER, "Cutting Power",
     r"P_c = \frac{F_c \cdot v_c}{60000}", "kW"),
    (StepKey.MOTOR_POWER, "Motor Power",
     r"P_m = \frac{P_c}{\eta}", "kW"),
)


@dataclass(frozen=True)
class CalculationStep:
    """One line of the derivation, at full precision."""
    key: StepKey
    number: int
    label: str
    formula: str
    value: float
    unit: str
    rounded_value: Optional[int] = None  # Step 2 only: Zc used downstream


@dataclass(frozen=True)
class CalculationResult:
    """
    Outcome of one calculation.

    On success all 8 steps are present and motor_power_kw is finite.
    On NON_FINITE_RESULT the 8 steps are still present for display.
    On INVALID_INPUT and INVALID_GEOMETRY there are no steps.
    """
    steps: Tuple[CalculationStep, ...] = ()
    motor_power_kw: float = math.nan
    error: Optional[ErrorKind] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def step(self, key: StepKey) -> CalculationStep:
        """Get a step by key. Raises KeyError if the step was not produced."""
        for s in self.steps:
            if s.key == key:
                return s
        raise KeyError(key.value)

    def raise_for_error(self) -> "CalculationResult":
        """Raise the matching CalculationError if the calculation failed."""
        if self.error is not None:
            raise ERRORS_BY_KIND[self.error](self.reason)
        return self


def _divide(numerator: float, denominator: float) -> float:
    """Division with IEEE-754 semantics for a zero denominator."""
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _power(base: float, exponent: float) -> float:
    """Real power with IEEE-754 semantics (negative base, fractional exponent -> NaN)."""
    if base == 0 and exponent < 0:
        return math.inf
    try:
        return math.pow(base, exponent)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


def contact_angle_deg(ae: float, D: float) -> float:
    """
    Effective contact angle of the tool with the workpiece.

    Formula: phi_s = arccos(1 - 2·ae/D)

    The arccos argument is clamped to [-1, 1] to absorb floating-point
    overshoot. An argument below -1 means ae > D, which is rejected.

    Raises:
        InvalidGeometryError: If ae exceeds D
    """
    cos_phi_s = 1 - _divide(2 * ae, D)
    if math.isnan(cos_phi_s):
        return math.nan
    if cos_phi_s < -1:
        raise InvalidGeometryError(
            f"Radial depth of cut ae ({ae} mm) is larger than tool diameter D ({D} mm); "
            f"this engagement is invalid for peripheral milling"
        )
    phi_s_rad = math.acos(max(-1.0, min(1.0, cos_phi_s)))
    return phi_s_rad * RAD_TO_DEG


def teeth_in_contact(Z: float, phi_s_deg: float) -> Tuple[float, int]:
    """
    Number of teeth engaged at once.

    Formula: Zc = ceil(Z · phi_s / 360)

    A partially engaged tooth counts as a full one. A non-finite count is
    passed through unrounded.

    Returns:
        Tuple of (fractional count, rounded-up count)
    """
    zc_float = Z * (phi_s_deg / FULL_TURN_DEG)
    if not math.isfinite(zc_float):
        return zc_float, zc_float
    return zc_float, math.ceil(zc_float)


def mean_chip_thickness(phi_s_deg: float, fz: float, ae: float, D: float, kr_deg: float) -> float:
    """
    Mean chip thickness over the engagement arc.

    Formula: hm = (360/phi_s) · (fz/π) · (ae/D) · sin(kr)
    """
    sin_kr = math.sin(kr_deg * DEG_TO_RAD)
    return _divide(FULL_TURN_DEG, phi_s_deg) * (fz / math.pi) * _divide(ae, D) * sin_kr


def cutting_edge_length(ap: float, kr_deg: float) -> float:
    """Active cutting-edge length b = ap / sin(kr)"""
    return _divide(ap, math.sin(kr_deg * DEG_TO_RAD))


def chip_thickness_factor(hm: float, one_minus_mc: float) -> float:
    """Chip thickness factor hm^(1-mc). NaN for negative hm, inf for hm = 0 with a negative exponent."""
    return _power(hm, one_minus_mc)


def cutting_force(kc11: float, b: float, zc: int, hm_factor: float) -> float:
    """Cutting force Fc = kc1.1 · b · Zc · hm^(1-mc) in N"""
    return kc11 * b * zc * hm_factor


def cutting_power(fc: float, vc: float) -> float:
    """
    Cutting power in kW.

    Formula: Pc = Fc · vc / 60000  (N · m/min -> kW)
    """
    return fc * vc / POWER_CONVERSION_FACTOR


def motor_power(pc: float, eta: float) -> float:
    """Motor power Pm = Pc / eta, eta as a fraction"""
    return _divide(pc, eta)


def _make_steps(values, zc: int) -> Tuple[CalculationStep, ...]:
    steps = []
    for number, ((key, label, formula, unit), value) in enumerate(zip(STEP_DEFINITIONS, values), start=1):
        steps.append(CalculationStep(
            key=key,
            number=number,
            label=label,
            formula=formula,
            value=value,
            unit=unit,
            rounded_value=zc if key == StepKey.TEETH_IN_CONTACT else None,
        ))
    return tuple(steps)


def calculate_motor_power(params: "CuttingParameters") -> CalculationResult:
    """
    Run the full eight-step calculation.

    Never raises for bad input: failures are reported on the result.
    Call raise_for_error() on the result to get an exception instead.

    Args:
        params: Cutting parameters (see millpower.io.CuttingParameters)

    Returns:
        CalculationResult with 8 steps and the motor power in kW, or an error
    """
    validation = validate_parameters(params)
    if not validation.valid:
        codes = {m.code for m in validation.errors}
        kind = ErrorKind.INVALID_GEOMETRY if codes <= GEOMETRY_ERROR_CODES else ErrorKind.INVALID_INPUT
        reason = "; ".join(m.message for m in validation.errors)
        logger.debug(f"Rejected {kind.value}: {reason}")
        return CalculationResult(error=kind, reason=reason)

    try:
        phi_s = contact_angle_deg(params.ae, params.D)
    except InvalidGeometryError as e:
        logger.debug(f"Rejected geometry: {e}")
        return CalculationResult(error=ErrorKind.INVALID_GEOMETRY, reason=str(e))

    zc_float, zc = teeth_in_contact(params.Z, phi_s)
    hm = mean_chip_thickness(phi_s, params.fz, params.ae, params.D, params.kr_deg)
    b = cutting_edge_length(params.ap, params.kr_deg)
    hm_factor = chip_thickness_factor(hm, params.one_minus_mc)
    fc = cutting_force(params.kc11, b, zc, hm_factor)
    pc = cutting_power(fc, params.vc)
    pm = motor_power(pc, params.eta)

    steps = _make_steps((phi_s, zc_float, hm, b, hm_factor, fc, pc, pm), zc)
    for s in steps:
        logger.debug(f"Step {s.number} {s.label}: {s.value!r} {s.unit}")

    if math.isnan(pm) or not math.isfinite(pm):
        return CalculationResult(
            steps=steps,
            motor_power_kw=pm,
            error=ErrorKind.NON_FINITE_RESULT,
            reason=f"Motor power is not a finite number ({pm})",
        )

    return CalculationResult(steps=steps, motor_power_kw=pm)
