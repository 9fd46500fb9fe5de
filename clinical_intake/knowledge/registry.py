"""Anatomical knowledge base.

``BodyZoneRegistry`` flattens the nested zone table once, at construction,
into an index keyed case-insensitively by zone id and by clinical term
(lowercase, whitespace replaced with ``.``). Every read is a pure lookup;
misses return ``None`` or an empty list.

The registry is built explicitly and handed to its consumers (pattern
analyzer, question engine, zone triage, orchestrator). ``get_zone_registry``
provides the process-wide instance used by the API layer.
"""

from typing import Dict, List, Optional, Any
from clinical_intake.knowledge.zone_tree import BODY_ZONE_TREE
from clinical_intake.models.zones import (
    BodySystem,
    ClinicalContext,
    ZoneCategory,
    ZoneDefinition,
    ZoneNode,
)
import re
import logging

logger = logging.getLogger(__name__)


def _term_key(term: str) -> str:
    return re.sub(r"\s+", ".", term.strip().lower())


def flatten_zone_tree(tree: Dict[str, dict]) -> List[ZoneDefinition]:
    """
    Flatten a nested zone table into zone records, parents before children.

    Args:
        tree: Mapping of root zone id to node dict

    Returns:
        List of ZoneDefinition in depth-first order
    """
    zones: List[ZoneDefinition] = []

    def visit(
        zone_id: str,
        node: Dict[str, Any],
        parent_id: Optional[str],
        inherited_category: Optional[str],
        inherited_systems: List[str],
    ):
        category = node.get("category") or inherited_category
        systems = node.get("systems") or inherited_systems
        children = node.get("children") or {}

        zones.append(
            ZoneDefinition(
                id=zone_id,
                label_en=node["label_en"],
                label_ur=node["label_ur"],
                clinical_term=node.get("clinical_term") or node["label_en"],
                aliases=node.get("aliases", []),
                category=category,
                systems=systems,
                parent_id=parent_id,
                children=list(children.keys()),
                terminal=not children,
                clinical=ClinicalContext(**node.get("clinical", {})),
            )
        )

        for child_id, child in children.items():
            visit(child_id, child, zone_id, category, systems)

    for root_id, root in tree.items():
        visit(root_id, root, None, root.get("category"), root.get("systems", []))

    return zones


class BodyZoneRegistry:
    """Read-only index over the anatomical zone tree."""

    def __init__(self, tree: Optional[Dict[str, dict]] = None):
        self._tree = tree if tree is not None else BODY_ZONE_TREE
        self._zones: List[ZoneDefinition] = flatten_zone_tree(self._tree)
        self._index: Dict[str, ZoneDefinition] = {}
        self._roots: List[str] = list(self._tree.keys())

        for zone in self._zones:
            self._index[zone.id] = zone
            self._index[zone.id.lower()] = zone
        # Ids win over clinical-term aliases on collision
        for zone in self._zones:
            self._index.setdefault(_term_key(zone.clinical_term), zone)

        logger.info(f"Zone registry built: {len(self._zones)} zones")

    def __len__(self) -> int:
        return len(self._zones)

    def __contains__(self, zone_id: str) -> bool:
        return self.get_zone(zone_id) is not None

    def get_zone(self, zone_id: Optional[str]) -> Optional[ZoneDefinition]:
        """Zone by id or clinical term, case-insensitive."""
        if not zone_id:
            return None
        return (
            self._index.get(zone_id)
            or self._index.get(zone_id.lower())
            or self._index.get(_term_key(zone_id))
        )

    def get_all_zones(self) -> List[ZoneDefinition]:
        return list(self._zones)

    def get_terminal_zones(self) -> List[ZoneDefinition]:
        return [z for z in self._zones if z.terminal]

    def get_zones_by_category(self, category: ZoneCategory) -> List[ZoneDefinition]:
        return [z for z in self._zones if z.category == category]

    def get_zones_by_system(self, system: BodySystem) -> List[ZoneDefinition]:
        return [z for z in self._zones if system in z.systems]

    def get_children(self, zone_id: str) -> List[ZoneDefinition]:
        zone = self.get_zone(zone_id)
        if not zone:
            return []
        return [self._index[c] for c in zone.children if c in self._index]

    def has_children(self, zone_id: str) -> bool:
        zone = self.get_zone(zone_id)
        return bool(zone and zone.children)

    def get_parent(self, zone_id: str) -> Optional[ZoneDefinition]:
        zone = self.get_zone(zone_id)
        if not zone or not zone.parent_id:
            return None
        return self.get_zone(zone.parent_id)

    def get_path(self, zone_id: str) -> List[ZoneDefinition]:
        """Root-to-node breadcrumb, empty for an unknown id."""
        path: List[ZoneDefinition] = []
        zone = self.get_zone(zone_id)
        seen = set()
        while zone and zone.id not in seen:
            seen.add(zone.id)
            path.insert(0, zone)
            zone = self.get_zone(zone.parent_id) if zone.parent_id else None
        return path

    def get_related_zones(self, zone_id: str) -> List[ZoneDefinition]:
        zone = self.get_zone(zone_id)
        if not zone:
            return []
        related = []
        for ref in zone.clinical.related_zones:
            target = self.get_zone(ref.zone_id)
            if target:
                related.append(target)
        return related

    def search_zones(self, query: str, language: str = "en") -> List[ZoneDefinition]:
        """
        Search zones by id, label, clinical term or alias.

        Args:
            query: Free-text search term
            language: Label language to match against ("en" or "ur")

        Returns:
            Matching zones, terminal zones first
        """
        q = query.strip().lower()
        if not q:
            return []

        matches = []
        for zone in self._zones:
            haystack = [
                zone.id.lower(),
                zone.label(language).lower(),
                zone.clinical_term.lower(),
            ] + [a.lower() for a in zone.aliases]
            if any(q in h for h in haystack):
                matches.append(zone)

        return sorted(matches, key=lambda z: not z.terminal)

    def get_zone_tree(self, language: str = "en") -> List[ZoneNode]:
        """Nested nodes with depth and id path, one per root."""

        def build(zone: ZoneDefinition, depth: int, path: List[str]) -> ZoneNode:
            here = path + [zone.id]
            return ZoneNode(
                id=zone.id,
                label=zone.label(language),
                depth=depth,
                path=here,
                terminal=zone.terminal,
                children=[build(c, depth + 1, here) for c in self.get_children(zone.id)],
            )

        return [build(self._index[r], 0, []) for r in self._roots]

    def validate(self) -> List[str]:
        """
        Check tree integrity.

        Returns:
            List of problems; empty when ids are unique, parent/child links
            agree in both directions, and every terminal zone has labels
        """
        problems: List[str] = []
        ids = [z.id for z in self._zones]
        if len(ids) != len(set(ids)):
            dupes = sorted({i for i in ids if ids.count(i) > 1})
            problems.append(f"Duplicate zone ids: {', '.join(dupes)}")

        by_id = {z.id: z for z in self._zones}
        for zone in self._zones:
            if not zone.label_en or not zone.label_ur:
                problems.append(f"{zone.id}: missing label")
            for child_id in zone.children:
                child = by_id.get(child_id)
                if child is None:
                    problems.append(f"{zone.id}: child {child_id} does not exist")
                elif child.parent_id != zone.id:
                    problems.append(f"{child_id}: parent is not {zone.id}")
            if zone.parent_id:
                parent = by_id.get(zone.parent_id)
                if parent is None:
                    problems.append(f"{zone.id}: parent {zone.parent_id} does not exist")
                elif zone.id not in parent.children:
                    problems.append(f"{zone.parent_id}: missing child {zone.id}")
            for ref in zone.clinical.related_zones:
                if ref.zone_id not in by_id:
                    problems.append(f"{zone.id}: related zone {ref.zone_id} does not exist")

        return problems


# Global registry instance
_zone_registry: Optional[BodyZoneRegistry] = None


def get_zone_registry() -> BodyZoneRegistry:
    """Get or create the BodyZoneRegistry instance."""
    global _zone_registry
    if _zone_registry is None:
        _zone_registry = BodyZoneRegistry()
    return _zone_registry
