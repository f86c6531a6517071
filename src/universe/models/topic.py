"""Topic node model - authored units of the knowledge universe."""

from dataclasses import dataclass, field
from typing import Any, Literal

RelationType = Literal["solid", "dashed"]

RELATION_TYPES: tuple[str, ...] = ("solid", "dashed")


@dataclass
class Relation:
    """
    A non-hierarchical edge owned by its source node.

    The target is not required to exist; unknown targets are dropped
    when the graph is projected.
    """

    target_id: str
    type: RelationType = "dashed"  # solid: same-level association, dashed: weak cross-reference
    label: str | None = None
    curvature: float | None = None

    def to_dict(self) -> dict:
        """Convert to the document wire format."""
        data: dict[str, Any] = {"targetId": self.target_id, "type": self.type}
        if self.label is not None:
            data["label"] = self.label
        if self.curvature is not None:
            data["curvature"] = self.curvature
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Relation":
        """Create from a document relation entry."""
        rel_type = data.get("type")
        curvature = data.get("curvature")
        return cls(
            target_id=str(data["targetId"]),
            type=rel_type if rel_type in RELATION_TYPES else "dashed",
            label=data.get("label"),
            curvature=float(curvature) if curvature is not None else None,
        )


@dataclass
class TopicNode:
    """
    A node of the authored topic tree.

    The id doubles as display label and, when it ends with the document
    suffix, as the name of another document to splice in its place.
    """

    id: str
    group: int = 0  # palette / category index
    description: str | None = None
    children: list["TopicNode"] = field(default_factory=list)
    relations: list[Relation] = field(default_factory=list)

    @property
    def child_count(self) -> int:
        return len(self.children)

    def is_reference(self, suffix: str = ".json") -> bool:
        """Whether this node is a placeholder for another document."""
        return self.id.endswith(suffix)

    def to_dict(self) -> dict:
        """Convert to the document wire format."""
        data: dict[str, Any] = {"id": self.id, "group": self.group}
        if self.description is not None:
            data["description"] = self.description
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        if self.relations:
            data["relations"] = [rel.to_dict() for rel in self.relations]
        return data

    @classmethod
    def from_dict(cls, data: dict, reference_suffix: str | None = None) -> "TopicNode":
        """
        Create from a parsed JSON document (recursively).

        When reference_suffix is given, nodes whose id ends with it are
        placeholders: only the id is kept and every other field is ignored.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a node object, got {type(data).__name__}")
        if "id" not in data:
            raise ValueError("Node is missing required field 'id'")

        node_id = str(data["id"])
        if reference_suffix and node_id.endswith(reference_suffix):
            return cls(id=node_id)

        return cls(
            id=node_id,
            group=int(data.get("group") or 0),
            description=data.get("description"),
            children=[
                cls.from_dict(child, reference_suffix)
                for child in data.get("children") or []
            ],
            relations=[Relation.from_dict(rel) for rel in data.get("relations") or []],
        )
