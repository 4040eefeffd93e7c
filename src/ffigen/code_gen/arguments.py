# code_gen/arguments.py
import logging
import re

from .. import type_utils
from ..conventions import SIZE_PARAM_NAME_PATTERN
from ..errors import BufferConventionError, MissingDefaultSizeError

logger = logging.getLogger(__name__)

SIZE_NAME_RE = re.compile(SIZE_PARAM_NAME_PATTERN)


def get_arg_metadata(param, function=None):
    """Builds the value or reference metadata entry for one native parameter."""
    name = param["name"]
    category = param["category"]

    if type_utils.is_output_category(category, function, name):
        mapping = type_utils.get_reference_mapping(category, name, function)
        meta = {
            "kind": "reference",
            "name": name,
            "initializer": mapping["initializer"],
            "native_type": mapping["native_type"],
            "call_expression": mapping["call_expression"],
            "cleanup": mapping["cleanup"],
            "logical_type": mapping["logical_type"],
        }
        if category == type_utils.OUTPUT_STRING:
            meta["size_param"] = None # resolved by substitute_sizes
        return meta

    mapping = type_utils.get_value_mapping(category, function, name)
    return {
        "kind": "value",
        "name": name,
        "caller_type": mapping["caller_type"],
        "native_type": mapping["native_type"],
        "call_expression": name,
    }


def classify_params(native):
    return [get_arg_metadata(p, native["name"]) for p in native["params"]]


def is_string_buffer(meta):
    return meta["kind"] == "reference" and meta["logical_type"] == "String"


def substitute_sizes(function_name, variables, default_sizes):
    """
    Pairs every output string with the size parameter right after it.

    The size parameter is renamed to '<buffer>_size', gets the curated default
    capacity for '<function>.<buffer>_size' as a caller-level default, and the
    buffer initializer is pointed at it. Returns a new list.
    """
    result = [dict(v) for v in variables]

    for idx, var in enumerate(result):
        if not is_string_buffer(var):
            continue

        if idx + 1 >= len(result):
            raise BufferConventionError(
                f"Expected len for {var['name']} in {function_name} but it is the last parameter",
                function_name, var["name"])

        size_var = result[idx + 1]
        if (not SIZE_NAME_RE.search(size_var["name"]) or size_var["kind"] != "value"
                or size_var["caller_type"] != "Int32"):
            raise BufferConventionError(
                f"Expected len for {var['name']} in {function_name} but got {size_var['name']}",
                function_name, var["name"])

        size_name = var["name"] + "_size"
        size_key = f"{function_name}.{size_name}"
        default_value = default_sizes.get(size_key)
        if not default_value:
            raise MissingDefaultSizeError(f"No default length for {size_key}", function_name, size_var["name"])

        logger.debug(f"{function_name}: {size_var['name']} -> {size_name} = {default_value}")
        size_var["name"] = size_name
        size_var["call_expression"] = size_name
        size_var["caller_type"] = f"{size_var['caller_type']} = {default_value}"
        size_var["default_value"] = default_value

        var["initializer"] = var["initializer"].replace(type_utils.SIZE_PLACEHOLDER, size_name)
        var["size_param"] = size_name

    return result
