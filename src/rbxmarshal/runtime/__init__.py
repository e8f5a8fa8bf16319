"""
Host runtime exposure layer.

This module provides:
- Value: host value wrappers with type metadata
- Shape / resolve: constructor overload resolution
- DatatypeRegistry: constructors, fields, methods and metamethods per datatype
"""

from .values import (
    Value,
    nil_val,
    bool_val,
    number_val,
    string_val,
    table_val,
    userdata_val,
    from_python,
    from_python_args,
    to_python,
    type_names,
)

from .overload import (
    Shape,
    shape,
    signature,
    match_arguments,
    convert_arguments,
    find_shape,
    resolve,
    bind_method,
)

from .builtins import (
    MetaMethod,
    DatatypeField,
    DatatypeMethod,
    DatatypeConstructor,
    DatatypeBinding,
    DatatypeRegistry,
    get_registry,
    construct,
    call_method,
    call_metamethod,
)

__all__ = [
    # Values
    'Value',
    'nil_val',
    'bool_val',
    'number_val',
    'string_val',
    'table_val',
    'userdata_val',
    'from_python',
    'from_python_args',
    'to_python',
    'type_names',

    # Overloads
    'Shape',
    'shape',
    'signature',
    'match_arguments',
    'convert_arguments',
    'find_shape',
    'resolve',
    'bind_method',

    # Registry
    'MetaMethod',
    'DatatypeField',
    'DatatypeMethod',
    'DatatypeConstructor',
    'DatatypeBinding',
    'DatatypeRegistry',
    'get_registry',
    'construct',
    'call_method',
    'call_metamethod',
]
