"""Type-safe enums for the milling power calculator."""

from enum import Enum


class ErrorKind(Enum):
    """Terminal failure classes of a calculation"""
    INVALID_INPUT = "invalid_input"          # Rejected by validation, no steps produced
    INVALID_GEOMETRY = "invalid_geometry"    # ae too large for D, no steps produced
    NON_FINITE_RESULT = "non_finite_result"  # All 8 steps ran, Pm is NaN or infinite


class StepKey(Enum):
    """The eight derivation steps, in calculation order"""
    CONTACT_ANGLE = "contact_angle"
    TEETH_IN_CONTACT = "teeth_in_contact"
    MEAN_CHIP_THICKNESS = "mean_chip_thickness"
    CUTTING_EDGE_LENGTH = "cutting_edge_length"
    CHIP_THICKNESS_FACTOR = "chip_thickness_factor"
    CUTTING_FORCE = "cutting_force"
    CUTTING_POWER = "cutting_power"
    MOTOR_POWER = "motor_power"
