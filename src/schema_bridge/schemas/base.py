"""Base classes for schema representation.

Provides the intermediate schema model that both conversion directions
pass through: source text and document text are each converted to a
``SchemaNode`` tree, and both generators render from it.
"""

from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SchemaKind(str, Enum):
    """Closed set of node kinds."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"
    BIGINT = "bigint"
    DATE = "date"
    LITERAL = "literal"
    ENUM = "enum"
    ARRAY = "array"
    OBJECT = "object"
    UNION = "union"

    # Modifier tags. Only produced when a declaration carries nothing but a
    # modifier call; normally modifiers are flags on the node.
    NULLABLE = "nullable"
    OPTIONAL = "optional"

    # Fallback for unsupported constructs ("accept anything")
    ANY = "any"

    @property
    def is_primitive(self) -> bool:
        return self in PRIMITIVE_KINDS

    @property
    def is_modifier(self) -> bool:
        return self in (SchemaKind.NULLABLE, SchemaKind.OPTIONAL)


PRIMITIVE_KINDS = frozenset({
    SchemaKind.STRING,
    SchemaKind.NUMBER,
    SchemaKind.BOOLEAN,
    SchemaKind.NULL,
    SchemaKind.UNDEFINED,
    SchemaKind.BIGINT,
    SchemaKind.DATE,
})

# Auxiliary field -> the only kind allowed to carry it
_AUXILIARY_FIELDS = {
    "properties": SchemaKind.OBJECT,
    "items": SchemaKind.ARRAY,
    "enum_values": SchemaKind.ENUM,
    "union_members": SchemaKind.UNION,
    "literal_value": SchemaKind.LITERAL,
}

# Container fields that default to empty for their kind: (field, alias, factory)
_CONTAINER_DEFAULTS = {
    SchemaKind.OBJECT: ("properties", "properties", dict),
    SchemaKind.ENUM: ("enum_values", "enumValues", list),
    SchemaKind.UNION: ("union_members", "unionMembers", list),
}


class SchemaNode(BaseModel):
    """A single node of the intermediate schema model.

    Nodes are immutable and have no identity beyond their structure: two
    nodes with equal fields are interchangeable.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: SchemaKind = Field(..., description="Node kind")
    description: str | None = Field(default=None, description="Human-readable description")
    nullable: bool = Field(default=False, description="Whether the value may be null")
    optional: bool = Field(default=False, description="Whether the value may be omitted")

    # Object
    properties: dict[str, "SchemaNode"] | None = Field(
        default=None,
        description="Ordered property name to child node mapping",
    )

    # Array
    items: "SchemaNode | None" = Field(default=None, description="Schema for array items")

    # Enum
    enum_values: list[str | int | float] | None = Field(
        default=None,
        alias="enumValues",
        description="Allowed enum values, in declaration order",
    )

    # Union
    union_members: list["SchemaNode"] | None = Field(
        default=None,
        alias="unionMembers",
        description="Union member schemas",
    )

    # Literal
    literal_value: bool | int | float | str | None = Field(
        default=None,
        alias="literalValue",
        description="Literal value",
    )

    @model_validator(mode="before")
    @classmethod
    def _fill_containers(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        try:
            kind = SchemaKind(data.get("kind"))
        except ValueError:
            return data

        if kind in _CONTAINER_DEFAULTS:
            name, alias, factory = _CONTAINER_DEFAULTS[kind]
            if data.get(name) is None and data.get(alias) is None:
                data = {**data, name: factory()}
        return data

    @model_validator(mode="after")
    def _check_auxiliary_fields(self) -> "SchemaNode":
        for field_name, owner in _AUXILIARY_FIELDS.items():
            if getattr(self, field_name) is not None and self.kind != owner:
                raise ValueError(
                    f"'{field_name}' is only allowed on {owner.value} nodes, "
                    f"not on {self.kind.value} nodes"
                )
        return self

    def with_modifiers(
        self,
        nullable: bool = False,
        optional: bool = False,
        description: str | None = None,
    ) -> "SchemaNode":
        """Return a copy with modifier flags and description applied.

        Flags are only ever switched on; a ``None`` description keeps the
        current one.
        """
        update: dict[str, Any] = {}
        if nullable:
            update["nullable"] = True
        if optional:
            update["optional"] = True
        if description is not None:
            update["description"] = description
        if not update:
            return self
        return self.model_copy(update=update)

    def to_document(self) -> dict[str, Any]:
        """Convert to the plain document shape.

        Returns a dict with ``type`` and, where present, ``description``,
        ``properties``, ``items``, ``enum``, ``oneOf``, ``const``,
        ``nullable`` and ``optional``.
        """
        result: dict[str, Any] = {"type": self.kind.value}

        if self.description is not None:
            result["description"] = self.description

        if self.kind == SchemaKind.OBJECT:
            result["properties"] = {
                name: child.to_document()
                for name, child in (self.properties or {}).items()
            }
        elif self.kind == SchemaKind.ARRAY and self.items is not None:
            result["items"] = self.items.to_document()
        elif self.kind == SchemaKind.ENUM:
            result["enum"] = list(self.enum_values or [])
        elif self.kind == SchemaKind.UNION:
            result["oneOf"] = [member.to_document() for member in self.union_members or []]
        elif self.kind == SchemaKind.LITERAL:
            result["const"] = self.literal_value

        if self.nullable:
            result["nullable"] = True
        if self.optional:
            result["optional"] = True

        return result

    def walk(self, path: str = "$") -> Iterator[tuple[str, "SchemaNode"]]:
        """Iterate depth-first over ``(path, node)`` pairs, self first."""
        yield path, self

        if self.properties:
            for name, child in self.properties.items():
                yield from child.walk(f"{path}.{name}")
        if self.items is not None:
            yield from self.items.walk(f"{path}[]")
        if self.union_members:
            for index, member in enumerate(self.union_members):
                yield from member.walk(f"{path}|{index}")
