# generator.py
import argparse
import json
import logging
import os
import tempfile
from pathlib import Path

from . import api_parser, conventions
from .engine import SignatureEngine
from .errors import SignatureError

logger = logging.getLogger(__name__)

OUTPUT_DEFAULT = "julia_natives.json"


def build_render_context(result, lib_path):
    """Bundles engine output with the constants the Julia template expects."""
    constants = dict(conventions.WRAPPER_CONSTANTS)
    constants["lib_path"] = lib_path
    return {
        "constants": constants,
        "structs": result["structs"],
        "natives": result["natives"],
    }


def write_output(path, context):
    """Writes atomically, a failed run never leaves a partial file behind."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, 'w') as f:
            json.dump(context, f, indent=2)
            f.write("\n")
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise


def load_default_sizes(path):
    sizes = dict(conventions.RECOMMENDED_DEFAULT_SIZES)
    if not path:
        return sizes
    try:
        with open(path, 'r') as f:
            overrides = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load default sizes from {path}: {e}")
        return None
    sizes.update({key: int(value) for key, value in overrides.items()})
    logger.info(f"Loaded {len(overrides)} default size overrides from {path}")
    return sizes


def main(argv=None):
    parser = argparse.ArgumentParser(description="Julia ccall descriptor generator for SA-MP GDK natives")
    parser.add_argument("-a", "--api-json", required=True, help="Path to the natives catalog JSON file.")
    parser.add_argument("-o", "--output", default=OUTPUT_DEFAULT, help="Render context JSON to write.")
    parser.add_argument("--lib-path", default=conventions.WRAPPER_CONSTANTS["lib_path"],
                        help="Shared library path embedded in the generated wrappers.")
    parser.add_argument("--default-sizes", default=None,
                        help="JSON file of '<native>.<buffer>_size' -> capacity entries, merged over the built-in table.")
    parser.add_argument("--exclude", default=None,
                        help="Comma-separated natives to skip. Overrides the default list.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format='%(levelname)s: [%(filename)s:%(lineno)d] %(message)s')

    default_sizes = load_default_sizes(args.default_sizes)
    if default_sizes is None:
        return 1

    excludes = args.exclude.split(',') if args.exclude is not None else None
    logger.info(f"Parsing natives from: {args.api_json}")
    try:
        natives = api_parser.parse_api(args.api_json, excludes=excludes)
        if natives is None:
            logger.critical("Failed to parse natives catalog. Exiting.")
            return 1

        engine = SignatureEngine(default_sizes=default_sizes)
        result = engine.generate(natives)
    except SignatureError as e:
        logger.critical(f"Generation failed: {e}")
        return 1

    write_output(args.output, build_render_context(result, args.lib_path))
    logger.info(f"Wrote {len(result['natives'])} natives to {args.output}")
    return 0


if __name__ == "__main__":
    exit(main())
