"""
Material presets.

A preset only pre-populates kc1.1, 1 - mc and the material name on the
input side. The calculator never reads this table.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict


class MaterialPreset(BaseModel):
    """Cutting coefficients for one work material."""
    model_config = ConfigDict(frozen=True)

    key: str
    kc11: float         # N/mm²
    one_minus_mc: float
    name: str


def _table(*presets: MaterialPreset) -> Mapping[str, MaterialPreset]:
    return MappingProxyType({p.key: p for p in presets})


DEFAULT_PRESETS: Mapping[str, MaterialPreset] = _table(
    MaterialPreset(key="custom", kc11=2130, one_minus_mc=0.82, name="Custom"),
    MaterialPreset(key="carbon_steel", kc11=2130, one_minus_mc=0.82, name="Carbon Steel (CK60)"),
    MaterialPreset(key="aluminium", kc11=700, one_minus_mc=0.75, name="Aluminium"),
    MaterialPreset(key="cast_iron", kc11=1300, one_minus_mc=0.8, name="Cast Iron"),
)


def get_preset(key: str, presets: Mapping[str, MaterialPreset] = DEFAULT_PRESETS) -> MaterialPreset:
    """Look up a preset by key. Raises KeyError listing the known keys."""
    try:
        return presets[key]
    except KeyError:
        known = ", ".join(sorted(presets))
        raise KeyError(f"Unknown material preset {key!r} (known: {known})") from None


def apply_preset(
    inputs: Mapping[str, Any],
    key: str,
    presets: Mapping[str, MaterialPreset] = DEFAULT_PRESETS,
) -> Dict[str, Any]:
    """
    Return a copy of raw inputs with the preset's material fields filled in.

    An unknown key leaves the inputs unchanged, as selecting a missing
    option in the form does.
    """
    populated = dict(inputs)
    preset = presets.get(key)
    if preset is None:
        return populated
    populated['kc11'] = preset.kc11
    populated['one_minus_mc'] = preset.one_minus_mc
    populated['material_name'] = preset.name
    return populated
