from conftest import make_native
from ffigen.code_gen import arguments, interfaces
from ffigen.code_gen.registry import AliasRegistry, CompositeType


def metadata_for(name, params):
    native = make_native(name, params)
    return {"name": name, "params": arguments.classify_params(native), "return": {}}


def floats(*names):
    return [(n, "value-float") for n in names]


def test_camel_case():
    assert interfaces.camel_case("PlayerKeys") == "playerKeys"
    assert interfaces.camel_case("spawn_pos") == "spawnPos"
    assert interfaces.camel_case("fromPos") == "fromPos"


def test_xyz_run_collapses_to_vector3(registry):
    meta = metadata_for("SetPlayerPos", [("playerid", "value-int")] + floats("x", "y", "z"))
    result = interfaces.substitute_input_interfaces(meta, registry)

    assert [p["name"] for p in result["params"]] == ["playerid", "position"]
    position = result["params"][1]
    assert position["caller_type"] == "Vector3"
    assert position["call_expression"] == ""
    assert [m["call_expression"] for m in position["members"]] == ["position.x", "position.y", "position.z"]
    assert [m["name"] for m in position["members"]] == ["x", "y", "z"]


def test_xy_run_collapses_to_vector2(registry):
    meta = metadata_for("SetPlayerMapIcon", floats("x", "y"))
    result = interfaces.substitute_input_interfaces(meta, registry)
    assert [p["caller_type"] for p in result["params"]] == ["Vector2"]


def test_run_shrinks_from_the_tail(registry):
    meta = metadata_for("SetPlayerFacing", [("playerid", "value-int")] + floats("x", "y", "z", "angle"))
    result = interfaces.substitute_input_interfaces(meta, registry)
    assert [p["name"] for p in result["params"]] == ["playerid", "position", "angle"]
    assert result["params"][2]["call_expression"] == "angle"


def test_type_mismatch_falls_back_to_shorter_alias(registry):
    meta = metadata_for("SetGridCell", floats("x", "y") + [("z", "value-int")])
    result = interfaces.substitute_input_interfaces(meta, registry)
    assert [p["name"] for p in result["params"]] == ["position", "z"]
    assert result["params"][0]["caller_type"] == "Vector2"


def test_several_runs_in_one_native(registry):
    meta = metadata_for("CreateObject", [("modelid", "value-int")] + floats("X", "Y", "Z", "rotX", "rotY", "rotZ", "DrawDistance"))
    result = interfaces.substitute_input_interfaces(meta, registry)
    assert [p["name"] for p in result["params"]] == ["modelid", "position", "rotation", "DrawDistance"]
    assert result["params"][2]["members"][0]["call_expression"] == "rotation.x"


def test_shot_vector_members_project_into_nested_fields(registry):
    meta = metadata_for("OnShot", floats("fOriginX", "fOriginY", "fOriginZ", "fHitPosX", "fHitPosY", "fHitPosZ"))
    result = interfaces.substitute_input_interfaces(meta, registry)
    shot = result["params"][0]
    assert shot["name"] == "shotVector"
    assert shot["caller_type"] == "ShotVector"
    assert shot["members"][4]["call_expression"] == "shotVector.hitPos.y"


def test_reference_parameter_breaks_run(registry):
    meta = metadata_for("Odd", [("x", "value-float"), ("y", "output-float"), ("z", "value-float")])
    result = interfaces.substitute_input_interfaces(meta, registry)
    assert result["params"] == meta["params"]


def test_single_parameter_is_never_a_candidate():
    registry = AliasRegistry()
    wrapped = CompositeType("Wrapped", [{"name": "x", "type": "Float32"}])
    registry.register_input(wrapped, "wrapped", [{"name": "x", "type": "Float32"}])
    meta = metadata_for("SetX", floats("x"))
    result = interfaces.substitute_input_interfaces(meta, registry)
    assert result["params"] == meta["params"]


def test_composite_param_names_do_not_collide(registry):
    meta = metadata_for("GetDistance", floats("x", "y", "z", "X", "Y", "Z"))
    result = interfaces.substitute_input_interfaces(meta, registry)
    assert [p["name"] for p in result["params"]] == ["position", "position2"]
    assert result["params"][1]["members"][0]["call_expression"] == "position2.x"


def test_input_metadata_is_not_mutated(registry):
    meta = metadata_for("SetPlayerPos", [("playerid", "value-int")] + floats("x", "y", "z"))
    snapshot = [dict(p) for p in meta["params"]]
    interfaces.substitute_input_interfaces(meta, registry)
    assert meta["params"] == snapshot
