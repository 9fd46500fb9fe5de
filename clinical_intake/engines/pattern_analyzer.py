"""Pattern recognition over selected body zones.

Matches the selected zones against the radiation, referred, dermatomal and
multi-system rule families, in that order, and stops at the first family
that matches. Red flags come from the zones themselves plus zone/symptom
co-occurrence rules. Unknown zone ids are skipped.
"""

from typing import Dict, List, Optional, Sequence
from clinical_intake.engines.pattern_rules import (
    DERMATOMAL_PATTERNS,
    MULTI_SYSTEM_CONFIDENCE,
    MULTI_SYSTEM_DIFFERENTIAL,
    MULTI_SYSTEM_MIN_SYSTEMS,
    MULTI_SYSTEM_MIN_ZONES_PER_SYSTEM,
    RADIATION_PATTERNS,
    REFERRED_PATTERNS,
    SYMPTOM_RED_FLAG_RULES,
    SYSTEM_WORKUPS,
)
from clinical_intake.knowledge.registry import BodyZoneRegistry
from clinical_intake.models.zones import (
    ClinicalInsight,
    PainPattern,
    PatternType,
    RedFlag,
    RedFlagSeverity,
    ZoneDefinition,
)
from clinical_intake.utils.red_flags import normalize_symptoms, sort_by_severity
import logging

logger = logging.getLogger(__name__)


class ClinicalZoneAnalyzer:
    """Rule-based pain pattern and red flag analysis."""

    def __init__(self, registry: BodyZoneRegistry):
        self.registry = registry

    def _resolve(self, zone_ids: Sequence[str]) -> List[ZoneDefinition]:
        zones = []
        for zone_id in zone_ids:
            zone = self.registry.get_zone(zone_id)
            if zone is None:
                logger.debug(f"Skipping unknown zone {zone_id}")
                continue
            if zone not in zones:
                zones.append(zone)
        return zones

    # ------------------------------------------------------------------
    # Rule families
    # ------------------------------------------------------------------

    def _match_radiation(self, ids: List[str]) -> Optional[PainPattern]:
        for rule in RADIATION_PATTERNS:
            if rule.primary_zone not in ids:
                continue
            targets = [t for t in rule.radiation_targets if t in ids]
            if targets:
                return PainPattern(
                    type=PatternType.RADIATION,
                    primary_zone=rule.primary_zone,
                    secondary_zones=targets,
                    differential=[rule.condition],
                    urgency=rule.urgency,
                    recommendation=f"Evaluate for {rule.condition}",
                    confidence=rule.confidence,
                )
        return None

    def _match_referred(self, ids: List[str]) -> Optional[PainPattern]:
        for rule in REFERRED_PATTERNS:
            if rule.presenting_zone in ids:
                return PainPattern(
                    type=PatternType.REFERRED,
                    primary_zone=rule.source_zone,
                    secondary_zones=[rule.presenting_zone],
                    differential=[rule.condition],
                    urgency=rule.urgency,
                    recommendation=(
                        f"Consider {rule.source_organ} pathology "
                        f"({rule.sign or 'referred pain'})"
                    ),
                    confidence=rule.confidence,
                )
        return None

    def _match_dermatomal(self, ids: List[str]) -> Optional[PainPattern]:
        for rule in DERMATOMAL_PATTERNS:
            matches = [z for z in rule.zones if z in ids]
            if len(matches) >= rule.min_matches:
                return PainPattern(
                    type=PatternType.DERMATOMAL,
                    primary_zone=rule.zones[0],
                    secondary_zones=matches[1:],
                    differential=[f"{rule.dermatome} radiculopathy"],
                    urgency=rule.urgency,
                    recommendation=f"Evaluate for {rule.dermatome} nerve root involvement",
                    confidence=rule.confidence,
                )
        return None

    def _match_multi_system(self, zones: List[ZoneDefinition]) -> Optional[PainPattern]:
        counts: Dict[str, int] = {}
        for zone in zones:
            for system in zone.systems:
                counts[system.value] = counts.get(system.value, 0) + 1

        involved = [s for s, n in counts.items() if n >= MULTI_SYSTEM_MIN_ZONES_PER_SYSTEM]
        if len(involved) < MULTI_SYSTEM_MIN_SYSTEMS:
            return None

        return PainPattern(
            type=PatternType.DIFFUSE,
            primary_zone=zones[0].id,
            secondary_zones=[z.id for z in zones[1:]],
            differential=list(MULTI_SYSTEM_DIFFERENTIAL),
            urgency=RedFlagSeverity.MONITOR,
            recommendation=f"Multi-system involvement ({', '.join(involved)})",
            confidence=MULTI_SYSTEM_CONFIDENCE,
        )

    def match_pattern(self, zone_ids: Sequence[str]) -> Optional[PainPattern]:
        """
        First matching pattern for the selected zones.

        Args:
            zone_ids: Selected zone ids; unknown ids are ignored

        Returns:
            PainPattern from the highest-priority family that matched, or None
        """
        zones = self._resolve(zone_ids)
        if not zones:
            return None
        ids = [z.id for z in zones]

        pattern = (
            self._match_radiation(ids)
            or self._match_referred(ids)
            or self._match_dermatomal(ids)
            or self._match_multi_system(zones)
        )
        if pattern:
            logger.info(
                f"Pattern matched: {pattern.type.value} "
                f"({pattern.primary_zone}, confidence {pattern.confidence})"
            )
        return pattern

    def analyze_pattern(
        self, zone_ids: Sequence[str], symptoms: Sequence[str] = ()
    ) -> Optional[ClinicalInsight]:
        """Insight for the first matching pattern, or None when nothing matches."""
        pattern = self.match_pattern(zone_ids)
        if pattern is None:
            return None
        return self.create_insight(pattern, zone_ids, symptoms)

    # ------------------------------------------------------------------
    # Red flags and recommendations
    # ------------------------------------------------------------------

    def detect_red_flags(
        self, zone_ids: Sequence[str], symptoms: Sequence[str] = ()
    ) -> List[RedFlag]:
        """
        Zone red flags plus zone/symptom co-occurrence flags.

        Never raises; an empty list means no red flags.

        Returns:
            Flags sorted immediate, urgent, monitor; ties keep input order
        """
        zones = self._resolve(zone_ids)
        tags = normalize_symptoms(symptoms)
        flags: List[RedFlag] = []

        for zone in zones:
            flags.extend(zone.clinical.red_flags)

        ids = {z.id for z in zones}
        categories = {z.category.value for z in zones}
        for rule in SYMPTOM_RED_FLAG_RULES:
            zone_hit = bool(ids.intersection(rule.zones)) or bool(
                categories.intersection(rule.categories)
            )
            if zone_hit and any(t in rule.symptoms for t in tags):
                flags.append(
                    RedFlag(
                        symptom=rule.flag_symptom,
                        severity=rule.severity,
                        action=rule.action,
                        condition=rule.condition,
                    )
                )

        flags = sort_by_severity(flags)
        if flags:
            logger.info(f"Detected {len(flags)} red flags for zones {sorted(ids)}")
        return flags

    def recommend_next_steps(
        self, zone_ids: Sequence[str], symptoms: Sequence[str] = ()
    ) -> List[str]:
        """Calls to action, system workups, then pattern steps."""
        flags = self.detect_red_flags(zone_ids, symptoms)
        steps: List[str] = []

        if any(f.severity == RedFlagSeverity.IMMEDIATE for f in flags):
            steps.append("🚨 IMMEDIATE: Call emergency services")
            steps.append("Perform ABCDE assessment")
        if any(f.severity == RedFlagSeverity.URGENT for f in flags):
            steps.append("⚠️ URGENT: Seek emergency department evaluation within 1 hour")

        systems = set()
        for zone in self._resolve(zone_ids):
            systems.update(s.value for s in zone.systems)
        for system, workup in SYSTEM_WORKUPS.items():
            if system in systems:
                steps.extend(workup)

        insight = self.analyze_pattern(zone_ids, symptoms)
        if insight:
            steps.extend(s for s in insight.next_steps if s not in steps)

        return steps

    def create_insight(
        self,
        pattern: PainPattern,
        zone_ids: Sequence[str],
        symptoms: Sequence[str] = (),
    ) -> ClinicalInsight:
        steps: List[str] = []
        if pattern.urgency == RedFlagSeverity.IMMEDIATE:
            steps.append("Call emergency services immediately")
        elif pattern.urgency == RedFlagSeverity.URGENT:
            steps.append("Seek emergency evaluation within 1 hour")

        steps.append(pattern.recommendation)
        if pattern.type == PatternType.RADIATION:
            steps.append("Assess characteristics of radiation (quality, timing, triggers)")
            steps.append("Evaluate primary pain source first")
        elif pattern.type == PatternType.REFERRED:
            steps.append("Examine suspected source organ")
            steps.append("Consider imaging of source region")

        return ClinicalInsight(
            pattern=pattern,
            alerts=self.detect_red_flags(zone_ids, symptoms),
            next_steps=steps,
            notes=f"Pattern confidence: {round(pattern.confidence * 100)}%",
        )

    # ------------------------------------------------------------------
    # Convenience predicates
    # ------------------------------------------------------------------

    def is_radiating_pain(self, zone_ids: Sequence[str]) -> bool:
        return self._match_radiation([z.id for z in self._resolve(zone_ids)]) is not None

    def is_referred_pain(self, zone_ids: Sequence[str]) -> bool:
        return self._match_referred([z.id for z in self._resolve(zone_ids)]) is not None

    def is_dermatomal_pattern(self, zone_ids: Sequence[str]) -> bool:
        return self._match_dermatomal([z.id for z in self._resolve(zone_ids)]) is not None

    def get_differential_diagnoses(self, zone_ids: Sequence[str]) -> List[str]:
        """Zone diagnoses followed by the pattern differential, without repeats."""
        differential: List[str] = []
        for zone in self._resolve(zone_ids):
            for dx in zone.clinical.common_diagnoses:
                if dx not in differential:
                    differential.append(dx)
        pattern = self.match_pattern(zone_ids)
        if pattern:
            for dx in pattern.differential:
                if dx not in differential:
                    differential.append(dx)
        return differential
