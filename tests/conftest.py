import pytest

from ffigen.code_gen.registry import build_default_registry
from ffigen.conventions import CALLEE_PREFIX_PATTERNS
from ffigen.code_gen.returns import compile_prefix_patterns


def make_native(name, params, return_category="value-bool"):
    return {
        "name": name,
        "params": [{"name": n, "category": c} for n, c in params],
        "return_category": return_category,
    }


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def prefix_res():
    return compile_prefix_patterns(CALLEE_PREFIX_PATTERNS)


@pytest.fixture
def catalog():
    """A slice of the GDK natives catalog, in its raw C spelling."""
    return {
        "natives": [
            {"name": "SetPlayerPos", "returnType": "bool",
             "args": [{"name": "playerid", "type": "int"}, {"name": "x", "type": "float"},
                      {"name": "y", "type": "float"}, {"name": "z", "type": "float"}]},
            {"name": "GetPlayerPos", "returnType": "bool",
             "args": [{"name": "playerid", "type": "int"}, {"name": "x", "type": "float *"},
                      {"name": "y", "type": "float *"}, {"name": "z", "type": "float *"}]},
            {"name": "GetVehiclePos", "returnType": "bool",
             "args": [{"name": "vehicleid", "type": "int"}, {"name": "x", "type": "float *"},
                      {"name": "y", "type": "float *"}, {"name": "z", "type": "float *"}]},
            {"name": "GetPlayerName", "returnType": "int",
             "args": [{"name": "playerid", "type": "int"}, {"name": "name", "type": "char *"},
                      {"name": "size", "type": "int"}]},
            {"name": "GetPlayerHealth", "returnType": "bool",
             "args": [{"name": "playerid", "type": "int"}, {"name": "health", "type": "float *"}]},
            {"name": "SendClientMessage", "returnType": "bool",
             "args": [{"name": "playerid", "type": "int"}, {"name": "color", "type": "int"},
                      {"name": "message", "type": "const char *"}]},
            {"name": "SetTimer", "returnType": "int",
             "args": [{"name": "interval", "type": "int"}, {"name": "callback", "type": "TimerCallback"}]},
        ]
    }
