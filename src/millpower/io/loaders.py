"""
JSON input/output for cutting parameters.

Loads cutting parameters from JSON files or raw form values and saves
calculation results.

Uses Pydantic for coercion. Values that cannot be read as numbers become
NaN rather than raising, so that validation decides what is acceptable.
"""

import json
import logging
import math
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, field_validator

from ..calculator.constants import PERCENT

if TYPE_CHECKING:
    from ..calculator.core import CalculationResult
    from ..calculator.validation import ValidationResult

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"

PARAMETER_FIELDS = (
    "kc11", "one_minus_mc", "D", "Z", "ae", "ap", "vc", "fz", "kr_deg", "eta_percent",
)


# Leading numeric prefix, as a form's parseFloat/parseInt reads it
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity")
_INT_PREFIX = re.compile(r"[+-]?\d+")


def _to_float(value) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.nan


def parse_number(value: Any) -> float:
    """
    Read a form value as a float.

    Accepts numbers and numeric strings, with either '.' or ',' as the
    decimal separator. Strings are read up to the first character that
    cannot continue a number ("12abc" -> 12). Anything else (None, empty
    string, text, integers too large for a float) is NaN.
    """
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return _to_float(value)
    if isinstance(value, str):
        match = _FLOAT_PREFIX.match(value.strip().replace(",", "."))
        if match is None:
            return math.nan
        return _to_float(match.group().replace("Infinity", "inf"))
    return math.nan


def parse_count(value: Any) -> float:
    """Read a form value as a whole count, truncating toward zero. NaN if unreadable."""
    if isinstance(value, str):
        match = _INT_PREFIX.match(value.strip())
        return float(match.group()) if match else math.nan
    number = parse_number(value)
    if not math.isfinite(number):
        return number
    return float(math.trunc(number))


class CuttingParameters(BaseModel):
    """
    Inputs for one milling power calculation.

    Immutable. Field names follow the usual shop-floor symbols:
    D tool diameter, Z teeth, ae/ap radial/axial depth of cut.
    """
    model_config = ConfigDict(frozen=True, extra='ignore')

    kc11: float           # Specific cutting force kc1.1 (N/mm²)
    one_minus_mc: float   # Hardening exponent 1 - mc
    D: float              # Tool diameter (mm)
    Z: float              # Number of teeth, whole number
    ae: float             # Radial depth of cut (mm)
    ap: float             # Axial depth of cut (mm)
    vc: float             # Cutting speed (m/min)
    fz: float             # Feed per tooth (mm)
    kr_deg: float         # Cutting-edge angle (degrees)
    eta_percent: float    # Mechanical efficiency (%)

    # Only used for the narrative summary, never in the calculation
    material_name: str = ""

    @field_validator(
        'kc11', 'one_minus_mc', 'D', 'ae', 'ap', 'vc', 'fz', 'kr_deg', 'eta_percent',
        mode='before',
    )
    @classmethod
    def coerce_number(cls, v):
        return parse_number(v)

    @field_validator('Z', mode='before')
    @classmethod
    def coerce_count(cls, v):
        return parse_count(v)

    @field_validator('material_name', mode='before')
    @classmethod
    def normalize_material_name(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    @property
    def eta(self) -> float:
        """Efficiency as a fraction."""
        return self.eta_percent / PERCENT


def parameters_from_dict(data: Dict[str, Any]) -> CuttingParameters:
    """
    Build CuttingParameters from raw values.

    Missing fields are treated like empty form fields (NaN).
    """
    values = {name: data.get(name) for name in PARAMETER_FIELDS}
    values['material_name'] = data.get('material_name')
    return CuttingParameters(**values)


def load_parameters_dict(filepath: Union[str, Path]) -> Dict[str, Any]:
    """
    Read raw parameter values from a JSON file, without parsing them.

    The file may hold the parameters at the top level or under a
    "parameters" key (as written by save_result_json). Keys other than
    the parameter fields and material_name are dropped.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
        ValueError: If the JSON root is not an object
    """
    filepath = Path(filepath)
    with open(filepath, 'r') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {filepath}, got {type(data).__name__}")

    if isinstance(data.get('parameters'), dict):
        data = data['parameters']

    logger.debug(f"Loaded parameters from {filepath}")
    return {k: v for k, v in data.items() if k in PARAMETER_FIELDS or k == 'material_name'}


def load_parameters_json(filepath: Union[str, Path]) -> CuttingParameters:
    """Load cutting parameters from a JSON file (see load_parameters_dict)."""
    return parameters_from_dict(load_parameters_dict(filepath))


def save_result_json(
    result: "CalculationResult",
    filepath: Union[str, Path],
    params: Optional[CuttingParameters] = None,
    validation: Optional["ValidationResult"] = None,
) -> Path:
    """Write a calculation result (and optionally its inputs) as JSON."""
    from ..calculator.output import to_json

    filepath = Path(filepath)
    filepath.write_text(to_json(result, params=params, validation=validation))
    logger.info(f"Saved result to {filepath}")
    return filepath
