"""Structural comparison of two firmware service trees.

Services are matched across firmwares by their ``service_key`` (exact,
case-sensitive); storage ids are meaningless between firmware generations.
Both the snapshot walk and the comparison run on explicit work lists, so
deep trees never hit the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from catalog_models.enums import DifferenceType

from .schemas import DiffSummary, FeatureDiff, ServiceDiff, TreeComparison
from .store import CatalogStore
from .tree import enter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotNode:
    service_key: str
    display_name: str
    features: FrozenSet[str] = frozenset()
    children: Dict[str, "SnapshotNode"] = field(default_factory=dict)


Snapshot = Dict[str, SnapshotNode]


def snapshot(store: CatalogStore, firmware_id: int, lang: str) -> Snapshot:
    """Key the firmware's service tree by service key, names resolved in ``lang``."""
    roots: Snapshot = {}
    visited: Set[int] = set()
    pending: List[Tuple[Optional[int], Snapshot]] = [(None, roots)]
    while pending:
        parent_id, level = pending.pop()
        for service in store.services_by(parent_id, firmware_id):
            enter(visited, service.id)
            node = SnapshotNode(
                service_key=service.service_key,
                display_name=store.translation_for(service.description_key, lang),
                features=frozenset(f.description_key for f in store.features_by(service.id)),
            )
            level[service.service_key] = node
            pending.append((service.id, node.children))
    return roots


def _feature_diffs(before: FrozenSet[str], after: FrozenSet[str]) -> List[FeatureDiff]:
    removed = [FeatureDiff(feature_key=k, difference_type=DifferenceType.REMOVED) for k in sorted(before - after)]
    added = [FeatureDiff(feature_key=k, difference_type=DifferenceType.ADDED) for k in sorted(after - before)]
    return removed + added


def _whole_node(node: SnapshotNode, kind: DifferenceType) -> ServiceDiff:
    return ServiceDiff(
        service_key=node.service_key,
        display_name=node.display_name,
        difference_type=kind,
        feature_differences=[
            FeatureDiff(feature_key=k, difference_type=kind) for k in sorted(node.features)
        ],
    )


@dataclass
class _Level:
    """A pair of sibling maps and, once compared, their differences."""

    before: Snapshot
    after: Snapshot
    child_levels: Dict[str, "_Level"] = field(default_factory=dict)
    differences: List[ServiceDiff] = field(default_factory=list)
    summary: DiffSummary = field(default_factory=DiffSummary)


def _compare_level(level: _Level) -> None:
    for key in sorted(level.before):
        old = level.before[key]
        if key not in level.after:
            level.differences.append(_whole_node(old, DifferenceType.REMOVED))
            level.summary.removed += 1
            continue

        feature_differences = _feature_diffs(old.features, level.after[key].features)
        child = level.child_levels[key]
        if feature_differences or child.summary.added or child.summary.removed or child.summary.modified:
            level.differences.append(
                ServiceDiff(
                    service_key=key,
                    display_name=old.display_name,
                    difference_type=DifferenceType.MODIFIED,
                    feature_differences=feature_differences,
                    child_differences=child.differences,
                )
            )
            level.summary.modified += 1

    for key in sorted(level.after.keys() - level.before.keys()):
        level.differences.append(_whole_node(level.after[key], DifferenceType.ADDED))
        level.summary.added += 1


def compare_snapshots(before: Snapshot, after: Snapshot) -> Tuple[List[ServiceDiff], DiffSummary]:
    """Diff one tree level and, transitively, the levels below it.

    Only ADDED, REMOVED and MODIFIED nodes are emitted. The returned summary
    counts this level's nodes only; nested changes show up as their parent
    being MODIFIED.
    """
    root = _Level(before, after)
    # Parents are listed before their children, so the reversed pass sees
    # every child level already compared.
    levels = [root]
    index = 0
    while index < len(levels):
        level = levels[index]
        for key in sorted(level.before.keys() & level.after.keys()):
            child = _Level(level.before[key].children, level.after[key].children)
            level.child_levels[key] = child
            levels.append(child)
        index += 1

    for level in reversed(levels):
        _compare_level(level)
    return root.differences, root.summary


def compare_firmwares(
    store: CatalogStore,
    firmware_id_a: int,
    firmware_id_b: int,
    lang: str,
) -> TreeComparison:
    tree_a = snapshot(store, firmware_id_a, lang)
    tree_b = snapshot(store, firmware_id_b, lang)
    differences, summary = compare_snapshots(tree_a, tree_b)
    logger.info(
        "Service trees compared",
        extra={
            "firmware_id_a": firmware_id_a,
            "firmware_id_b": firmware_id_b,
            "lang": lang,
            "added": summary.added,
            "removed": summary.removed,
            "modified": summary.modified,
        },
    )
    return TreeComparison(
        firmware_id_a=firmware_id_a,
        firmware_id_b=firmware_id_b,
        language_code=lang,
        summary=summary,
        summary_text=summary.describe(),
        differences=differences,
    )
