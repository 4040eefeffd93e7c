# code_gen/interfaces.py
# Collapses positional input runs (x, y, z, ...) into one composite parameter.
import logging
import re

logger = logging.getLogger(__name__)

MIN_RUN_LENGTH = 2


def camel_case(name):
    """'spawn_pos' -> 'spawnPos', 'PlayerKeys' -> 'playerKeys'."""
    parts = [p for p in re.split(r"[_\-\s]+", name) if p]
    if not parts:
        return name
    head = parts[0][0].lower() + parts[0][1:]
    return head + "".join(p[0].upper() + p[1:] for p in parts[1:])


def _unique_name(base, taken):
    name = base
    counter = 2
    while name in taken:
        name = f"{base}{counter}"
        counter += 1
    return name


def _value_run(variables, start):
    end = start
    while end < len(variables) and variables[end]["kind"] == "value":
        end += 1
    return variables[start:end]


def _match_run(run, registry):
    """Longest prefix of `run` (at least two entries) with a known alias, shrinking from the tail."""
    candidate = list(run)
    while len(candidate) >= MIN_RUN_LENGTH:
        typed_args = [{"name": v["name"], "type": v["caller_type"]} for v in candidate]
        alias = registry.find_input_alias(typed_args)
        if alias:
            return alias, candidate
        candidate.pop()
    return None, []


def _composite_param(alias, matched, taken):
    param_name = _unique_name(camel_case(alias.name), taken)
    members = []
    for idx, var in enumerate(matched):
        member = dict(var)
        member["call_expression"] = f"{param_name}.{alias.projection(idx)}"
        members.append(member)
    return {
        "kind": "value",
        "name": param_name,
        "caller_type": alias.composite.name,
        "native_type": "",
        "call_expression": "",
        "members": members,
    }


def substitute_input_interfaces(native_meta, registry):
    """
    Returns a copy of `native_meta` whose matching input runs are replaced by
    composite parameters. Greedy: at each position the longest matching run
    wins and scanning resumes after it. `registry` is only read.
    """
    variables = native_meta["params"]
    taken = {v["name"] for v in variables}
    params = []

    idx = 0
    while idx < len(variables):
        alias, matched = _match_run(_value_run(variables, idx), registry)
        if alias is None:
            params.append(dict(variables[idx]))
            idx += 1
            continue

        composite_param = _composite_param(alias, matched, taken)
        taken.add(composite_param["name"])
        logger.debug(f"{native_meta['name']}: {[v['name'] for v in matched]} -> "
                     f"{composite_param['name']}::{alias.composite.name}")
        params.append(composite_param)
        idx += len(matched)

    result = dict(native_meta)
    result["params"] = params
    return result
