# type_utils.py
import logging

from .errors import UnknownNativeTypeError

logger = logging.getLogger(__name__)

# --- Native Categories ---
VALUE_BOOL = "value-bool"
VALUE_INT = "value-int"
VALUE_FLOAT = "value-float"
VALUE_STRING_CONST = "value-string-const"
OUTPUT_INT = "output-int"
OUTPUT_FLOAT = "output-float"
OUTPUT_STRING = "output-string"
VOID = "void"

VALUE_CATEGORIES = (VALUE_BOOL, VALUE_INT, VALUE_FLOAT, VALUE_STRING_CONST)
OUTPUT_CATEGORIES = (OUTPUT_INT, OUTPUT_FLOAT, OUTPUT_STRING)

# C spelling used by the GDK natives catalog -> engine category
C_TYPE_CATEGORIES = {
    "bool": VALUE_BOOL,
    "int": VALUE_INT,
    "float": VALUE_FLOAT,
    "const char *": VALUE_STRING_CONST,
    "int *": OUTPUT_INT,
    "float *": OUTPUT_FLOAT,
    "char *": OUTPUT_STRING,
    "void": VOID,
}

# Replaced by the string-buffer pass with the (renamed) size parameter.
SIZE_PLACEHOLDER = "%SIZE%"

# By-value categories: the caller passes the value, ccall converts it.
VALUE_TYPE_MAP = {
    VALUE_BOOL: {"caller_type": "Bool", "native_type": "Cuchar"},
    VALUE_INT: {"caller_type": "Int32", "native_type": "Cint"},
    VALUE_FLOAT: {"caller_type": "Float32", "native_type": "Cfloat"},
    # Cstring converts implicitly, nothing to clean up
    VALUE_STRING_CONST: {"caller_type": "String", "native_type": "Cstring"},
}

# By-reference categories. "{name}" is filled with the parameter name.
REFERENCE_TYPE_MAP = {
    OUTPUT_INT: {
        "native_type": "Ref{Cint}",
        "initializer": "__{name}_ref = Ref{Cint}(0)",
        "call_expression": "__{name}_ref",
        "cleanup": "{name} = __{name}_ref[]",
        "logical_type": "Int32",
    },
    OUTPUT_FLOAT: {
        "native_type": "Ref{Cfloat}",
        "initializer": "__{name}_ref = Ref{Cfloat}(0)",
        "call_expression": "__{name}_ref",
        "cleanup": "{name} = __{name}_ref[]",
        "logical_type": "Float32",
    },
    OUTPUT_STRING: {
        "native_type": "Ptr{UInt8}",
        "initializer": "__{name}_buf = Vector{UInt8}(undef, 1 + " + SIZE_PLACEHOLDER + ")",
        "call_expression": "__{name}_buf",
        "cleanup": "{name} = unsafe_string(pointer(__{name}_buf))",
        "logical_type": "String",
    },
}

VOID_RETURN = {"caller_type": "Nothing", "native_type": "Cvoid"}


def _fill(template, name):
    # str.format would trip over Julia's Ref{Cint} braces
    return template.replace("{name}", name)


def category_from_c_type(c_type, function=None, param=None):
    """Maps a catalog C spelling ('int *', 'const char *', ...) to a category."""
    category = C_TYPE_CATEGORIES.get(c_type.strip() if c_type else c_type)
    if category is None:
        raise UnknownNativeTypeError(f"Unhandled native type '{c_type}'", function, param)
    return category


def is_output_category(category, function=None, param=None):
    if category in OUTPUT_CATEGORIES:
        return True
    if category in VALUE_CATEGORIES:
        return False
    raise UnknownNativeTypeError(f"Unhandled arg type '{category}'", function, param)


def get_value_mapping(category, function=None, param=None):
    """Returns {caller_type, native_type} for a by-value category."""
    mapping = VALUE_TYPE_MAP.get(category)
    if mapping is None:
        raise UnknownNativeTypeError(f"'{category}' is not a by-value type", function, param)
    return dict(mapping)


def get_reference_mapping(category, name, function=None):
    """
    Returns the by-reference mapping for `category` with every template
    filled in for parameter `name`. The string-buffer initializer still holds
    SIZE_PLACEHOLDER.
    """
    template = REFERENCE_TYPE_MAP.get(category)
    if template is None:
        raise UnknownNativeTypeError(f"'{category}' is not a by-reference type", function, name)
    return {key: _fill(value, name) for key, value in template.items()}


def get_return_types(category, function=None):
    """
    Maps a native's declared return category to (logical_type, native_type).
    Pointer-like categories have no caller visible type.
    """
    if category in VALUE_TYPE_MAP:
        mapping = VALUE_TYPE_MAP[category]
        return mapping["caller_type"], mapping["native_type"]
    if category == VOID:
        return VOID_RETURN["caller_type"], VOID_RETURN["native_type"]
    if category in REFERENCE_TYPE_MAP:
        logger.debug(f"{function} returns pointer category '{category}', no logical return type")
        return None, REFERENCE_TYPE_MAP[category]["native_type"]
    raise UnknownNativeTypeError(f"Unhandled return type '{category}'", function)
