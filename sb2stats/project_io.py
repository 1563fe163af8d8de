import json
import os
import zipfile
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .categories import BlockCategory, get_category
from .diagnostics import DiagnosticCollector, DiagnosticContext
from .errors import ProjectLoadError
from .field_utils import get_array_attribute, require_object
from .sprite import Classifier, SpriteRecord, analyze_sprite


PROJECT_JSON = "project.json"


def load_project(path: str) -> Dict[str, Any]:
    """Load project.json from an .sb2 archive or a plain JSON file."""
    if not os.path.exists(path):
        raise ProjectLoadError(f"Project not found: {path}")

    try:
        if zipfile.is_zipfile(path):
            with zipfile.ZipFile(path, "r") as archive:
                if PROJECT_JSON not in archive.namelist():
                    raise ProjectLoadError(
                        f"{PROJECT_JSON} not found in the archive", f"Archive: {path}"
                    )
                with archive.open(PROJECT_JSON) as handle:
                    project = json.loads(handle.read().decode("utf-8"))
        else:
            with open(path, "r", encoding="utf-8") as handle:
                project = json.load(handle)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ProjectLoadError(f"Invalid project JSON: {path}", str(exc)) from exc
    except (OSError, zipfile.BadZipFile) as exc:
        raise ProjectLoadError(f"Cannot read project: {path}", str(exc)) from exc

    if not isinstance(project, dict):
        raise ProjectLoadError(f"Invalid project JSON: {path}", "top level is not an object")
    return project


def iter_sprite_nodes(project: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    """Yield the sprite objects among the stage's children.

    Children also hold variable watchers and list monitors; only entries
    carrying an ``objName`` are sprites.
    """
    for child in get_array_attribute(project, "children", required=False):
        if isinstance(child, dict) and "objName" in child:
            yield child


@dataclass
class ProjectReport:
    stage: SpriteRecord
    sprites: List[SpriteRecord] = field(default_factory=list)

    @property
    def targets(self) -> List[SpriteRecord]:
        return [self.stage] + self.sprites

    def category_totals(self) -> Dict[BlockCategory, int]:
        totals = {category: 0 for category in BlockCategory}
        for record in self.targets:
            for category, count in record.block_counts.items():
                totals[category] += count
        return totals

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.to_dict(),
            "sprites": [record.to_dict() for record in self.sprites],
            "totals": {category.value: count for category, count in self.category_totals().items()},
        }


def _note_unused(record: SpriteRecord, ctx: DiagnosticContext) -> None:
    for name in record.variables:
        if record.variable_usage_count(name) == 0:
            ctx.warning(f"Variable '{name}' is never used")
    for name in record.lists:
        if record.list_usage_count(name) == 0:
            ctx.warning(f"List '{name}' is never used")


def _analyze_target(
    node: Any,
    fallback_name: str,
    classify: Classifier,
    collector: Optional[DiagnosticCollector],
) -> SpriteRecord:
    name = node.get("objName") if isinstance(node, dict) else None
    ctx = DiagnosticContext(sprite_name=name if isinstance(name, str) else fallback_name)
    record = analyze_sprite(node, classify, ctx)
    _note_unused(record, ctx)
    if collector is not None:
        collector.add_context_diagnostics(ctx)
    return record


def analyze_project(
    project: Any,
    classify: Classifier = get_category,
    collector: Optional[DiagnosticCollector] = None,
) -> ProjectReport:
    """Analyze the stage and every sprite of a Scratch 2 project."""
    root = require_object(project, "project")
    stage = _analyze_target(root, "Stage", classify, collector)
    sprites = [
        _analyze_target(node, f"Sprite{index}", classify, collector)
        for index, node in enumerate(iter_sprite_nodes(root), start=1)
    ]
    return ProjectReport(stage=stage, sprites=sprites)


def analyze_project_file(
    path: str,
    classify: Classifier = get_category,
    collector: Optional[DiagnosticCollector] = None,
) -> ProjectReport:
    return analyze_project(load_project(path), classify, collector)
