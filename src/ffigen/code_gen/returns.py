# code_gen/returns.py
import logging
import re

from .. import type_utils
from ..errors import AmbiguousNameError, CompositeAliasError
from .registry import CompositeType

logger = logging.getLogger(__name__)


def compile_prefix_patterns(patterns):
    """Anchors each prefix so that only the head of a native name is stripped."""
    return [re.compile(rf"^(?:{p})(?P<rest>.+)$") for p in patterns]


def derive_composite_name(function_name, prefix_res):
    for prefix_re in prefix_res:
        match = prefix_re.match(function_name)
        if match:
            return match.group("rest")
    raise AmbiguousNameError(f"Not sure what name to set for {function_name}", function_name)


def find_or_create_alias(function_name, return_args, registry, prefix_res):
    typed_args = [{"name": a["name"], "type": a["logical_type"]} for a in return_args]
    existing = registry.find_return_alias(typed_args)
    if existing:
        logger.debug(f"Reusing alias {existing.name} for {function_name}")
        return existing

    name = derive_composite_name(function_name, prefix_res)
    if registry.get_composite(name) is not None:
        raise CompositeAliasError(f"Derived composite name {name} is already used by a different type",
                                  function_name)
    composite = CompositeType(name, typed_args)
    logger.debug(f"Creating composite {name} for {function_name}")
    return registry.register_return(composite, name, typed_args)


def prepare_return(native, variables, registry, prefix_res, return_temp_var="__ret"):
    """
    Decides the single logical return value of a native.

    No outputs: the declared return type, read from `return_temp_var`.
    One output: that output. Several: a composite built from the outputs,
    looked up in (or added to) `registry` by their exact signature.
    """
    name = native["name"]
    return_args = [v for v in variables if v["kind"] == "reference"]

    if not return_args:
        logical_type, native_type = type_utils.get_return_types(native["return_category"], name)
        return {"logical_type": logical_type, "value_expression": return_temp_var, "native_type": native_type}

    # The native's own return (usually a success flag) is still what ccall receives.
    _, native_type = type_utils.get_return_types(native["return_category"], name)

    if len(return_args) == 1:
        arg = return_args[0]
        return {"logical_type": arg["logical_type"], "value_expression": arg["name"], "native_type": native_type}

    alias = find_or_create_alias(name, return_args, registry, prefix_res)
    struct_name = alias.composite.name
    value = f"{struct_name}({', '.join(a['name'] for a in return_args)})"
    return {"logical_type": struct_name, "value_expression": value, "native_type": native_type}
