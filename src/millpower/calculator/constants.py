"""
Constants for milling power calculations.

This module centralizes the numerical constants used by the calculator,
validation and output modules.

MODIFICATION GUIDELINES:
- Formula constants are fixed by the cutting-force model, do not tune them
- Display constants only affect presentation, never computed values
- Always include units in constant names (_DEG, _PERCENT, _KW)

Constants are grouped by category:
- Cutting-force model (Kienzle formulation for peripheral milling)
- Validation ranges
- Display formatting
"""

from math import pi
from typing import Tuple

# =============================================================================
# Cutting-force model
# =============================================================================

# Degrees to radians, applied to every angle before trigonometry
DEG_TO_RAD: float = pi / 180
RAD_TO_DEG: float = 180 / pi

# Full revolution, used for contact-angle proportions
FULL_TURN_DEG: float = 360.0

# Fc [N] * vc [m/min] -> P [kW]: 60 s/min * 1000 W/kW
POWER_CONVERSION_FACTOR: float = 60000.0

# Efficiency is entered as a percentage
PERCENT: float = 100.0

# Number of derivation steps, always produced in full
STEP_COUNT: int = 8

# =============================================================================
# Validation ranges
# =============================================================================

# Mechanical efficiency as a fraction: 0 < eta <= 1
EFFICIENCY_MIN_EXCLUSIVE: float = 0.0
EFFICIENCY_MAX: float = 1.0

# Cutting-edge angle must give a usable sine: 0 < kr < 180
EDGE_ANGLE_RANGE_DEG: Tuple[float, float] = (0.0, 180.0)

# =============================================================================
# Display formatting
# =============================================================================

# Values at or above this threshold show DECIMALS_LARGE digits
DISPLAY_THRESHOLD: float = 1.0
DECIMALS_LARGE: int = 1
DECIMALS_SMALL: int = 4

# Headline motor power
DECIMALS_HEADLINE: int = 2

# pt-BR decimal separator
DECIMAL_SEPARATOR: str = ","

CALCULATION_ERROR_TEXT: str = "CALCULATION ERROR"
