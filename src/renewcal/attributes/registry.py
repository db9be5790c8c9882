from __future__ import annotations
from typing import Any, Callable, Dict, Optional, Sequence

from ..core.types import LunarLabel
from ..core.time import to_jdn

LabelAttr = Callable[[LunarLabel], Dict[str, Any]]
_ATTRIBUTES: Dict[str, LabelAttr] = {}

def register_attribute(name: str, fn: Optional[LabelAttr] = None):
    """Register ``fn`` under ``name``; without ``fn``, return a decorator."""
    if fn is None:
        def deco(f: LabelAttr) -> LabelAttr:
            _ATTRIBUTES[name] = f
            return f
        return deco
    _ATTRIBUTES[name] = fn
    return fn

def available_attributes() -> list[str]:
    return sorted(_ATTRIBUTES)

def compute_attributes(label: LunarLabel, names: Sequence[str]) -> Dict[str, Any]:
    """Merge the dicts of the requested attributes, in request order."""
    unknown = [n for n in names if n not in _ATTRIBUTES]
    if unknown:
        raise KeyError(f"unknown attribute(s) {unknown}; available: {available_attributes()}")
    out: Dict[str, Any] = {}
    for name in names:
        out.update(_ATTRIBUTES[name](label))
    return out

def label_jdn(label: LunarLabel) -> int:
    return to_jdn(label.civil_date)
