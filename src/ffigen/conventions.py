# conventions.py
# Hand-curated tables describing the SA-MP GDK natives corpus.
# The engine receives copies of these at construction time, so another corpus
# can swap them without touching the transformation code.

# --- Wrapper Constants ---
WRAPPER_CONSTANTS = {
    "lib_path": "./plugins/jules-andreas.so",
    "return_temp_var": "__ret",
}

# --- Default Buffer Capacities ---
# Key: "<native name>.<buffer param>_size" (name *after* the size param rename)
# Every native with an output string must have an entry here.
RECOMMENDED_DEFAULT_SIZES = {
    "SHA256_PassHash.ret_hash_size": 64,
    "GetSVarString.string_return_size": 256,
    "GetSVarNameAtIndex.ret_varname_size": 256,
    "GetWeaponName.name_size": 32,
    "GetPlayerNetworkStats.retstr_size": 400,
    "GetNetworkStats.retstr_size": 400,
    "GetPlayerVersion.version_size": 24,
    "GetServerVarAsString.value_size": 256,
    "GetConsoleVarAsString.buffer_size": 256,
    "NetStats_GetIpPort.ip_port_size": 22,
    "gpci.buffer_size": 40,
    "FindModelFileNameFromCRC.model_str_size": 256,
    "FindTextureFileNameFromCRC.texture_str_size": 256,
    "GetPlayerIp.ip_size": 15,
    "GetPlayerName.name_size": 32,
    "GetPVarString.value_size": 256,
    "GetPVarNameAtIndex.varname_size": 256,
    "GetAnimationName.animlib_size": 32,
    "GetAnimationName.animname_size": 32,
}

# --- Callee Prefixes ---
# Tried in order, anchored at the start of the native name. What remains after
# the prefix names the composite returned by a multi-output native.
CALLEE_PREFIX_PATTERNS = [
    r"Get",
    r"Find",
    r"SHA256_",
    r"NetStats_Get",
]

# Matches the name of the size parameter that must follow an output string.
SIZE_PARAM_NAME_PATTERN = r"(size)|(len)"
