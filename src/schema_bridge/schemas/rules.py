"""Fixed classification rules used by the source extractor.

The extractor does not parse the schema language in general. When a
declaration cannot be read as a plain constructor chain it falls back to
the data in this module:

- ``CLASSIFICATION_TABLE``: ordered (predicate, result) rules, first match
  wins. Kind rules test for constructor-call tokens; the last rule is the
  named special case that recognizes the reference schema.
- ``PROPERTY_VOCABULARY``: the fixed set of property names the extractor
  can recover without reading their definitions, each mapped to a
  hand-authored sub-schema.
"""

import re
from dataclasses import dataclass
from typing import Callable

from schema_bridge.schemas.base import SchemaKind, SchemaNode


def _string(description: str | None = None, nullable: bool = False) -> SchemaNode:
    return SchemaNode(kind=SchemaKind.STRING, description=description, nullable=nullable)


def _number(description: str | None = None) -> SchemaNode:
    return SchemaNode(kind=SchemaKind.NUMBER, description=description)


REFERENCE_SCHEMA_NAME = "TikTokPostSchema"

REFERENCE_SCHEMA = SchemaNode(
    kind=SchemaKind.OBJECT,
    description="Complete analysis schema for a TikTok image post",
    properties={
        "platform": SchemaNode(
            kind=SchemaKind.LITERAL,
            literal_value="tiktok",
            description="Social platform identifier",
        ),
        "template_version": _string("Schema version"),
        "post_id": _string("Unique TikTok post ID", nullable=True),
        "author": SchemaNode(
            kind=SchemaKind.OBJECT,
            description="Post author metadata",
            properties={
                "id": _string("Author's TikTok ID"),
                "uniqueId": _string("Author's @ handle"),
                "nickname": _string("Display name"),
            },
        ),
        "dimensions": SchemaNode(
            kind=SchemaKind.OBJECT,
            description="Overall post dimensions",
            properties={
                "width": _number("Content width in pixels"),
                "height": _number("Content height in pixels"),
            },
        ),
        "slide_count": _number("Number of image slides"),
        "hashtag_analysis": SchemaNode(
            kind=SchemaKind.OBJECT,
            description="Extracted hashtag details",
            properties={
                "hashtags": SchemaNode(
                    kind=SchemaKind.ARRAY,
                    items=_string(),
                    description="List of extracted hashtags from the caption",
                ),
                "strategy": _string(
                    "Why these hashtags were chosen (e.g. audience targeting)",
                    nullable=True,
                ),
            },
        ),
        "caption_segments": SchemaNode(
            kind=SchemaKind.ARRAY,
            description="Hook/Body/CTA segments of the caption",
            items=SchemaNode(
                kind=SchemaKind.OBJECT,
                properties={
                    "type": SchemaNode(
                        kind=SchemaKind.ENUM,
                        enum_values=["hook", "body", "cta"],
                        description="Segment role: attention-grabber, body text, or call-to-action",
                    ),
                    "content": _string("Text of this caption segment", nullable=True),
                    "rationale": _string("Why this segment works in its role", nullable=True),
                    "position_in_caption": _number(
                        "Order index of this segment within the full caption"
                    ),
                },
            ),
        ),
    },
)

# Property name -> canonical sub-schema
PROPERTY_VOCABULARY: dict[str, SchemaNode] = dict(REFERENCE_SCHEMA.properties or {})

_VOCABULARY_PATTERN = re.compile(
    "(" + "|".join(re.escape(name) for name in PROPERTY_VOCABULARY) + r")\s*:"
)

REFERENCE_SIGNATURE_TOKENS = (
    REFERENCE_SCHEMA_NAME,
    "platform",
    "template_version",
    "post_id",
    "slide_count",
    "hashtag_analysis",
    "caption_segments",
)
REFERENCE_SIGNATURE_THRESHOLD = 2


def has_reference_signature(text: str) -> bool:
    """Check whether text carries enough signature tokens of the reference schema."""
    found = sum(1 for token in REFERENCE_SIGNATURE_TOKENS if token in text)
    return found >= REFERENCE_SIGNATURE_THRESHOLD


def match_vocabulary_properties(text: str) -> dict[str, SchemaNode]:
    """Recover known properties by name from anywhere in ``text``.

    Matches are unanchored and case-sensitive; properties keep the order
    of their first occurrence.
    """
    properties: dict[str, SchemaNode] = {}
    for match in _VOCABULARY_PATTERN.finditer(text):
        name = match.group(1)
        if name not in properties:
            properties[name] = PROPERTY_VOCABULARY[name]
    return properties


@dataclass(frozen=True)
class ClassificationRule:
    """A single (predicate, result) row of the classification table."""

    name: str
    predicate: Callable[[str], bool]
    result: SchemaKind | SchemaNode

    @property
    def is_special_case(self) -> bool:
        """Special cases yield a fixed schema instead of a kind."""
        return isinstance(self.result, SchemaNode)

    def matches(self, text: str) -> bool:
        return self.predicate(text)


def _contains(token: str) -> Callable[[str], bool]:
    return lambda text: token in text


# Order matters: object/array calls can contain every other token.
CLASSIFICATION_TABLE: list[ClassificationRule] = [
    ClassificationRule("object", _contains("object("), SchemaKind.OBJECT),
    ClassificationRule("array", _contains("array("), SchemaKind.ARRAY),
    ClassificationRule("string", _contains("string()"), SchemaKind.STRING),
    ClassificationRule("number", _contains("number()"), SchemaKind.NUMBER),
    ClassificationRule("boolean", _contains("boolean()"), SchemaKind.BOOLEAN),
    ClassificationRule("date", _contains("date()"), SchemaKind.DATE),
    ClassificationRule("enum", _contains("enum("), SchemaKind.ENUM),
    ClassificationRule("literal", _contains("literal("), SchemaKind.LITERAL),
    ClassificationRule("nullable", _contains("nullable()"), SchemaKind.NULLABLE),
    ClassificationRule("optional", _contains("optional()"), SchemaKind.OPTIONAL),
    ClassificationRule("union", _contains("union("), SchemaKind.UNION),
    ClassificationRule("null", _contains("null()"), SchemaKind.NULL),
    ClassificationRule("undefined", _contains("undefined()"), SchemaKind.UNDEFINED),
    ClassificationRule("bigint", _contains("bigint()"), SchemaKind.BIGINT),
    ClassificationRule("reference-schema", has_reference_signature, REFERENCE_SCHEMA),
]


def classify(text: str, include_special_cases: bool = True) -> ClassificationRule | None:
    """Return the first rule of the table matching ``text``.

    Args:
        text: Source text to classify
        include_special_cases: Whether fixed-schema rules may match

    Returns:
        The matching rule, or None
    """
    for rule in CLASSIFICATION_TABLE:
        if rule.is_special_case and not include_special_cases:
            continue
        if rule.matches(text):
            return rule
    return None


def node_for_kind(kind: SchemaKind) -> SchemaNode:
    """Build the shallow node for a classified kind.

    Modifier tags carry their matching flag.
    """
    return SchemaNode(
        kind=kind,
        nullable=kind == SchemaKind.NULLABLE,
        optional=kind == SchemaKind.OPTIONAL,
    )
