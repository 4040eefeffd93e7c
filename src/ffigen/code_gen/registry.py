# code_gen/registry.py
import logging

from ..errors import CompositeAliasError

logger = logging.getLogger(__name__)

FLOAT_TYPE = "Float32"


class CompositeType:
    """A generated Julia struct. Shared by reference between every alias that maps to it."""

    def __init__(self, name, fields, constructor=None):
        self.name = name
        self.fields = [dict(f) for f in fields] # [{"name": ..., "type": ...}]
        self.constructor = constructor

    def field_types(self):
        return [f["type"] for f in self.fields]

    def to_dict(self):
        return {
            "name": self.name,
            "variables": [dict(f) for f in self.fields],
            "ctor": self.constructor,
        }

    def __repr__(self):
        return f"CompositeType({self.name!r}, {self.fields!r})"


class CompositeAlias:
    """
    One signature that resolves to a composite. `name` is the role the alias
    plays (e.g. 'position'), used to name composite parameters.
    `projections` maps each matched parameter to a field path on the composite,
    needed when the composite is built from more values than it has fields.
    """

    def __init__(self, name, composite, projections=None):
        self.name = name
        self.composite = composite
        self.projections = list(projections) if projections else None

    def projection(self, index):
        if self.projections:
            return self.projections[index]
        return self.composite.fields[index]["name"]

    def __repr__(self):
        return f"CompositeAlias({self.name!r} -> {self.composite.name!r})"


def get_alias_key(variables):
    """Exact signature key: 'x::Float32,y::Float32'."""
    return ",".join(f"{v['name']}::{v['type']}" for v in variables)


class AliasRegistry:
    """
    Maps exact ordered {name, type} signatures to composites.

    Two tables are kept. Vocabulary aliases (the pre-seeded ones) only describe
    positional input runs. Return aliases are created while synthesizing
    multi-output returns and are also visible to input matching.
    """

    def __init__(self):
        self._input_aliases = {}
        self._return_aliases = {}
        self._composites = [] # distinct, in registration order

    def _check_composite(self, composite):
        for known in self._composites:
            if known is composite:
                return
            if known.name == composite.name:
                raise CompositeAliasError(
                    f"Composite name '{composite.name}' already used by a different type "
                    f"{known.field_types()} vs {composite.field_types()}")
        self._composites.append(composite)

    def _make_alias(self, composite, name, variables, projections):
        if len(variables) != len(composite.fields) and not composite.constructor:
            raise CompositeAliasError(
                f"Invalid alias {name} for {composite.name} - contains {len(variables)} vars "
                f"instead of {len(composite.fields)}")
        if projections is not None and len(projections) != len(variables):
            raise CompositeAliasError(
                f"Alias {name} for {composite.name} has {len(projections)} projections "
                f"for {len(variables)} vars")
        if len(variables) != len(composite.fields) and projections is None:
            raise CompositeAliasError(
                f"Alias {name} for {composite.name} needs projections to map {len(variables)} vars")
        self._check_composite(composite)
        return CompositeAlias(name, composite, projections)

    def register_input(self, composite, name, variables, projections=None):
        """Registers vocabulary for input run matching only."""
        alias = self._make_alias(composite, name, variables, projections)
        self._input_aliases[get_alias_key(variables)] = alias
        return alias

    def register_return(self, composite, name, variables):
        alias = self._make_alias(composite, name, variables, None)
        key = get_alias_key(variables)
        self._return_aliases[key] = alias
        logger.debug(f"Registered composite {composite.name} for signature {key}")
        return alias

    def find_return_alias(self, variables):
        return self._return_aliases.get(get_alias_key(variables))

    def find_input_alias(self, variables):
        key = get_alias_key(variables)
        alias = self._input_aliases.get(key)
        if alias is None:
            alias = self._return_aliases.get(key)
        return alias

    def composites(self):
        return list(self._composites)

    def get_composite(self, name):
        for composite in self._composites:
            if composite.name == name:
                return composite
        return None

    def __len__(self):
        return len(self._input_aliases) + len(self._return_aliases)


def _float_vars(names):
    return [{"name": n, "type": FLOAT_TYPE} for n in names]


def build_default_registry():
    """Returns a registry seeded with the vector vocabulary of the GDK natives."""
    registry = AliasRegistry()

    vector2 = CompositeType("Vector2", _float_vars(["x", "y"]))
    vector3 = CompositeType("Vector3", _float_vars(["x", "y", "z"]))
    vector4 = CompositeType("Vector4", _float_vars(["w", "x", "y", "z"]))
    shot_vector = CompositeType(
        "ShotVector",
        [{"name": "originPos", "type": "Vector3"}, {"name": "hitPos", "type": "Vector3"}],
        constructor="ShotVector(oX, oY, oZ, hX, hY, hZ) = new(Vector3(oX, oY, oZ), Vector3(hX, hY, hZ))",
    )

    registry.register_input(vector2, "position", _float_vars(["x", "y"]))
    registry.register_input(vector3, "position", _float_vars(["x", "y", "z"]))
    registry.register_input(vector3, "position", _float_vars(["X", "Y", "Z"]))
    registry.register_input(vector3, "position", _float_vars(["fX", "fY", "fZ"]))
    registry.register_input(vector3, "position", _float_vars(["spawn_x", "spawn_y", "spawn_z"]))
    registry.register_input(vector3, "offset", _float_vars(["fOffsetX", "fOffsetY", "fOffsetZ"]))
    registry.register_input(vector3, "scale", _float_vars(["fScaleX", "fScaleY", "fScaleZ"]))
    registry.register_input(vector3, "rotation", _float_vars(["fRotX", "fRotY", "fRotZ"]))
    registry.register_input(vector3, "rotation", _float_vars(["rotX", "rotY", "rotZ"]))
    registry.register_input(vector3, "fromPos", _float_vars(["FromX", "FromY", "FromZ"]))
    registry.register_input(vector3, "toPos", _float_vars(["ToX", "ToY", "ToZ"]))
    registry.register_input(vector4, "rotation", _float_vars(["w", "x", "y", "z"]))
    registry.register_input(
        shot_vector, "shotVector",
        _float_vars(["fOriginX", "fOriginY", "fOriginZ", "fHitPosX", "fHitPosY", "fHitPosZ"]),
        projections=["originPos.x", "originPos.y", "originPos.z", "hitPos.x", "hitPos.y", "hitPos.z"],
    )

    logger.debug(f"Seeded alias registry with {len(registry)} aliases")
    return registry
