"""
Introspection API for the datatypes exposed to the host runtime.

Usage:
    from rbxmarshal.introspection import (
        get_api_reference,
        get_datatype_info,
        list_datatypes,
        describe_datatype,
    )

    info = get_datatype_info("UDim2")
    print(info["constructors"]["new"]["signatures"])
    # ['()', '(UDim?, UDim?)', '(number?, int32?, number?, int32?)']
"""

import json
from typing import Any, Dict, List, Optional

from . import __version__
from .runtime.builtins import DatatypeBinding, get_registry


DATATYPE_DESCRIPTIONS: Dict[str, str] = {
    "UDim": "One axis of a scale plus pixel offset pair",
    "UDim2": "Two independent UDim axes (X/Width and Y/Height)",
    "Vector2": "2D float32 vector",
    "Vector2int16": "2D vector of 16-bit integers with wrapping arithmetic",
    "Vector3": "3D float32 vector",
    "Vector3int16": "3D vector of 16-bit integers with wrapping arithmetic",
    "Color3": "RGB color with float32 channels, unclamped",
    "ColorSequenceKeypoint": "A (time, Color3) stop with time in [0, 1]",
    "ColorSequence": "Color ramp of keypoints from time 0 to time 1",
    "BrickColor": "Named color from the fixed palette table",
}


def _binding_to_dict(binding: DatatypeBinding) -> Dict[str, Any]:
    constructors = {
        name: {
            "signatures": [s.signature() for s in ctor.shapes],
            "description": ctor.doc,
        }
        for name, ctor in binding.constructors.items()
    }
    methods = {
        name: {
            "signature": f"{binding.type_name}:{name}{method.signature()}",
            "parameters": [p.name for p in method.params],
            "description": method.doc,
        }
        for name, method in binding.methods.items()
    }
    return {
        "name": binding.type_name,
        "description": DATATYPE_DESCRIPTIONS.get(binding.type_name, ""),
        "variant": binding.datatype.variant_type.variant_name,
        "constructors": constructors,
        "constants": sorted(binding.constants),
        "fields": list(binding.fields),
        "methods": methods,
        "metamethods": sorted(m.value for m in binding.metamethods),
    }


def list_datatypes() -> List[str]:
    """Names of all registered datatypes, in registration order."""
    return get_registry().type_names()


def get_datatype_info(name: str) -> Optional[Dict[str, Any]]:
    """
    Get everything registered for one datatype.

    Returns None for an unknown name.
    """
    binding = get_registry().get_binding(name)
    if binding is None:
        return None
    return _binding_to_dict(binding)


def describe_datatype(name: str) -> str:
    """Human-readable summary of a datatype."""
    info = get_datatype_info(name)
    if info is None:
        return f"Unknown datatype: {name}"

    lines = [
        f"Datatype: {name}",
        f"Description: {info['description'] or 'No description available'}",
        f"Variant: {info['variant']}",
    ]
    for ctor_name, ctor in info["constructors"].items():
        for sig in ctor["signatures"]:
            lines.append(f"Constructor: {name}.{ctor_name}{sig}")
    if info["constants"]:
        lines.append("Constants: " + ", ".join(info["constants"]))
    if info["fields"]:
        lines.append("Fields: " + ", ".join(info["fields"]))
    for method in info["methods"].values():
        lines.append(f"Method: {method['signature']}")
    lines.append("Metamethods: " + ", ".join(info["metamethods"]))
    return "\n".join(lines)


def get_api_reference() -> Dict[str, Any]:
    """
    Get the complete API reference as a dictionary.

    Returns a dictionary with the package version and one entry per
    datatype (see ``get_datatype_info``).
    """
    registry = get_registry()
    return {
        "version": __version__,
        "datatypes": {
            name: _binding_to_dict(registry.get_binding(name))
            for name in registry.type_names()
        },
    }


def get_api_reference_json() -> str:
    """The complete API reference as a JSON string."""
    return json.dumps(get_api_reference(), indent=2)
