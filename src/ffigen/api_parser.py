# api_parser.py
import json
import logging

from .type_utils import category_from_c_type

# Natives whose arguments cannot be expressed as plain values/outputs
DEFAULT_NATIVE_EXCLUDES = ["SetTimer"]

logger = logging.getLogger(__name__)


def convert_native(raw_native):
    """Turns one catalog entry into a native descriptor with engine categories."""
    name = raw_native["name"]
    params = []
    for arg in raw_native.get("args", []):
        params.append({
            "name": arg["name"],
            "category": category_from_c_type(arg["type"], name, arg["name"]),
        })
    return {
        "name": name,
        "params": params,
        "return_category": category_from_c_type(raw_native.get("returnType", "void"), name),
    }


def parse_natives(api_data, excludes=None):
    """Filters and converts the 'natives' list of an already loaded catalog."""
    excludes = set(excludes if excludes is not None else DEFAULT_NATIVE_EXCLUDES)

    natives = []
    for raw_native in api_data.get("natives", []):
        name = raw_native.get("name")
        if not name:
            logger.warning(f"Skipping native without a name: {raw_native}")
            continue
        if name in excludes:
            logger.info(f"Skipping excluded native: {name}")
            continue
        natives.append(convert_native(raw_native))

    logger.info(f"Loaded {len(natives)} natives.")
    return natives


def parse_api(api_filepath, excludes=None):
    """Loads the natives catalog JSON. Returns None if it cannot be read."""
    try:
        with open(api_filepath, 'r') as f:
            api_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load or parse natives file {api_filepath}: {e}")
        return None

    return parse_natives(api_data, excludes=excludes)
