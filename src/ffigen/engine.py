# engine.py
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from . import conventions
from .code_gen import arguments, interfaces, returns
from .code_gen.registry import AliasRegistry, build_default_registry

logger = logging.getLogger(__name__)


class SignatureEngine:
    """
    Turns native descriptors into calling-convention descriptors in two phases.

    Phase 1 walks the natives in order: classify parameters, pair string
    buffers with their sizes, synthesize the return value. Only this phase
    adds composites to the registry. Phase 2 collapses input runs against
    the now stable registry.
    """

    def __init__(self,
                 default_sizes: Optional[Dict[str, int]] = None,
                 prefix_patterns: Optional[Sequence[str]] = None,
                 registry_factory: Callable[[], AliasRegistry] = build_default_registry,
                 return_temp_var: str = conventions.WRAPPER_CONSTANTS["return_temp_var"]):
        if default_sizes is None:
            default_sizes = conventions.RECOMMENDED_DEFAULT_SIZES
        if prefix_patterns is None:
            prefix_patterns = conventions.CALLEE_PREFIX_PATTERNS
        self.default_sizes = dict(default_sizes)
        self.prefix_patterns = list(prefix_patterns)
        self.registry_factory = registry_factory
        self.return_temp_var = return_temp_var
        self._prefix_res = returns.compile_prefix_patterns(self.prefix_patterns)

    def parse_native(self, native: Dict[str, Any], registry: AliasRegistry) -> Dict[str, Any]:
        """Phase 1 for a single native. May register a new composite."""
        variables = arguments.classify_params(native)
        variables = arguments.substitute_sizes(native["name"], variables, self.default_sizes)
        return {
            "name": native["name"],
            "params": variables,
            "return": returns.prepare_return(native, variables, registry, self._prefix_res,
                                             self.return_temp_var),
        }

    def generate(self, natives: Sequence[Dict[str, Any]],
                 registry: Optional[AliasRegistry] = None) -> Dict[str, List[Any]]:
        """
        Runs both phases over `natives`. A fresh registry is built per call
        unless one is passed in. Returns {"natives": [...], "structs": [...]}
        with only the composites the descriptors actually use.
        """
        if registry is None:
            registry = self.registry_factory()
        known_before = len(registry.composites())

        metadata = [self.parse_native(native, registry) for native in natives]
        created = len(registry.composites()) - known_before
        logger.info(f"Synthesized returns for {len(metadata)} natives, {created} new composite types.")

        metadata = [interfaces.substitute_input_interfaces(m, registry) for m in metadata]

        structs = referenced_composites(metadata, registry)
        logger.info(f"Emitting {len(structs)} of {len(registry.composites())} composite types.")
        return {
            "natives": metadata,
            "structs": [s.to_dict() for s in structs],
        }


def referenced_composites(metadata, registry):
    """Composites used by a return or parameter type, plus the ones their fields need."""
    by_name = {c.name: c for c in registry.composites()}

    pending = []
    for native in metadata:
        pending.append(native["return"]["logical_type"])
        pending.extend(p["caller_type"] for p in native["params"] if p.get("members"))

    used = set()
    while pending:
        type_name = pending.pop()
        composite = by_name.get(type_name)
        if composite is None or type_name in used:
            continue
        used.add(type_name)
        pending.extend(composite.field_types())

    return [c for c in registry.composites() if c.name in used]
