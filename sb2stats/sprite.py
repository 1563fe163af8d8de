"""Per-sprite statistics for Scratch 2 projects.

A Scratch 2 sprite stores its scripts as nested JSON arrays. A top-level
script looks like ``[x, y, [block, block, ...]]`` and every block is an
array whose first element is the block selector, followed by its
arguments; reporters and C-block bodies are nested arrays again::

    [20, 40, [["whenGreenFlag"],
              ["doIf", ["touching:", "edge"], [["turnRight:", 15]]]]]

``analyze_sprite`` reads the element counts from the sprite object and
walks those arrays to count blocks per palette category.
"""

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Tuple, Union

from .categories import BlockCategory, get_category
from .diagnostics import DiagnosticContext
from .errors import MalformedInputError
from .field_utils import get_array_attribute, get_string_attribute, require_object

Classifier = Callable[[str], Union[BlockCategory, str, None]]


def _resolve_category(result: Union[BlockCategory, str, None]) -> Optional[BlockCategory]:
    if result is None or isinstance(result, BlockCategory):
        return result
    if isinstance(result, str):
        return BlockCategory.parse(result)
    return None


def tally_blocks(
    node: Optional[List[Any]],
    classify: Classifier,
    counts: Dict[BlockCategory, int],
    unknown: Optional[Set[str]] = None,
) -> None:
    """Add the categories of every block found in node to counts.

    A list whose first element is a string is a block; its category is
    counted once. Every list-typed element of the node is then visited,
    whether or not the node itself was a block.
    """
    if not node:
        return

    head = node[0]
    if isinstance(head, str):
        category = _resolve_category(classify(head))
        if category is not None:
            counts[category] += 1
        elif unknown is not None:
            unknown.add(head)

    for child in node:
        if isinstance(child, list):
            tally_blocks(child, classify, counts, unknown)


def serialize_scripts(scripts: List[Any]) -> str:
    """Compact JSON text of a scripts array, used for usage counting."""
    return json.dumps(scripts, separators=(",", ":"), ensure_ascii=False)


def count_occurrences(text: str, token: str) -> int:
    """Count occurrences of token in text, overlapping matches included."""
    if not token:
        return 0
    count = 0
    pos = text.find(token)
    while pos >= 0:
        count += 1
        pos = text.find(token, pos + 1)
    return count


def _collect_names(entries: List[Any], key: str, field_name: str) -> Tuple[str, ...]:
    names: List[str] = []
    for index, entry in enumerate(entries):
        context = f"{field_name}[{index}]"
        child = require_object(entry, context)
        try:
            names.append(get_string_attribute(child, key))
        except MalformedInputError as exc:
            raise MalformedInputError(
                f"Invalid entry {context}: {exc.message}",
                exc.detail,
                field=field_name,
            ) from exc
    return tuple(names)


@dataclass(frozen=True)
class SpriteRecord:
    """Counts gathered from one sprite (or the stage)."""
    name: str
    script_count: int
    variable_count: int
    list_count: int
    script_comment_count: int
    sound_count: int
    costume_count: int
    block_counts: Mapping[BlockCategory, int]
    variables: Tuple[str, ...]
    lists: Tuple[str, ...]
    scripts_text: str = field(default="", repr=False)

    # block_counts is a read-only mapping, which cannot be hashed
    __hash__ = None  # type: ignore[assignment]

    @property
    def control_blocks(self) -> int:
        return self.block_counts[BlockCategory.CONTROL]

    @property
    def data_blocks(self) -> int:
        return self.block_counts[BlockCategory.DATA]

    @property
    def events_blocks(self) -> int:
        return self.block_counts[BlockCategory.EVENTS]

    @property
    def looks_blocks(self) -> int:
        return self.block_counts[BlockCategory.LOOKS]

    @property
    def more_blocks_blocks(self) -> int:
        return self.block_counts[BlockCategory.MORE_BLOCKS]

    @property
    def motion_blocks(self) -> int:
        return self.block_counts[BlockCategory.MOTION]

    @property
    def operators_blocks(self) -> int:
        return self.block_counts[BlockCategory.OPERATORS]

    @property
    def pen_blocks(self) -> int:
        return self.block_counts[BlockCategory.PEN]

    @property
    def sensing_blocks(self) -> int:
        return self.block_counts[BlockCategory.SENSING]

    @property
    def sound_blocks(self) -> int:
        return self.block_counts[BlockCategory.SOUND]

    @property
    def total_blocks(self) -> int:
        return sum(self.block_counts.values())

    def variable_usage_count(self, name: str) -> int:
        """Number of times name appears in the serialized scripts.

        This is a textual count: a name that is a substring of another
        identifier, or that appears inside a string argument, is counted too.
        """
        return count_occurrences(self.scripts_text, name)

    def list_usage_count(self, name: str) -> int:
        """Number of times name appears in the serialized scripts."""
        return count_occurrences(self.scripts_text, name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "scripts": self.script_count,
            "variables": self.variable_count,
            "lists": self.list_count,
            "scriptComments": self.script_comment_count,
            "sounds": self.sound_count,
            "costumes": self.costume_count,
            "blocks": {category.value: count for category, count in self.block_counts.items()},
            "variableNames": list(self.variables),
            "listNames": list(self.lists),
        }


def analyze_sprite(
    node: Any,
    classify: Classifier = get_category,
    diagnostics: Optional[DiagnosticContext] = None,
) -> SpriteRecord:
    """Build a SpriteRecord from a Scratch 2 sprite object.

    Args:
        node: The sprite (or stage) object from project.json.
        classify: Maps a block selector to its category; returns None for
            selectors it does not know, which are then not counted.
        diagnostics: Optional context receiving a note for every distinct
            selector that could not be classified.

    Raises:
        MalformedInputError: A required field is missing, or a field or a
            variable/list entry has the wrong shape.
    """
    sprite = require_object(node, "sprite")

    name = get_string_attribute(sprite, "objName")
    scripts = get_array_attribute(sprite, "scripts", required=False)
    variable_entries = get_array_attribute(sprite, "variables", required=False)
    list_entries = get_array_attribute(sprite, "lists", required=False)
    comments = get_array_attribute(sprite, "scriptComments", required=False)
    sounds = get_array_attribute(sprite, "sounds")
    costumes = get_array_attribute(sprite, "costumes")

    variables = _collect_names(variable_entries, "name", "variables")
    lists = _collect_names(list_entries, "listName", "lists")

    counts: Dict[BlockCategory, int] = {category: 0 for category in BlockCategory}
    unknown: Set[str] = set()
    tally_blocks(scripts, classify, counts, unknown)

    if diagnostics is not None:
        for block_name in sorted(unknown):
            diagnostics.info(f"Unclassified block '{block_name}'")

    return SpriteRecord(
        name=name,
        script_count=len(scripts),
        variable_count=len(variables),
        list_count=len(lists),
        script_comment_count=len(comments),
        sound_count=len(sounds),
        costume_count=len(costumes),
        block_counts=MappingProxyType(counts),
        variables=variables,
        lists=lists,
        scripts_text=serialize_scripts(scripts),
    )
