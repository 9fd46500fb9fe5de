"""Zone severity buckets and multi-point pain assessment."""

from typing import Dict, List, Optional, Sequence
from clinical_intake.config.settings import settings
from clinical_intake.knowledge.registry import BodyZoneRegistry
from clinical_intake.models.encounter import PainAssessment, PainPoint
from clinical_intake.models.triage import ZoneSeverity
import logging

logger = logging.getLogger(__name__)


SEVERITY_ORDER: Dict[ZoneSeverity, int] = {
    ZoneSeverity.LOW: 1,
    ZoneSeverity.MODERATE: 2,
    ZoneSeverity.HIGH: 3,
    ZoneSeverity.CRITICAL: 4,
}

SEVERE_PAIN_INTENSITY = 8
ESCALATION_INTENSITY = 9


class ZoneTriageService:
    """Severity bucketing over the zone registry."""

    def __init__(self, registry: BodyZoneRegistry):
        self.registry = registry

    def get_zone_severity(self, zone_id: str) -> ZoneSeverity:
        """
        Bucket a zone's static priority.

        Unknown zones are LOW.
        """
        zone = self.registry.get_zone(zone_id)
        if zone is None:
            return ZoneSeverity.LOW

        priority = zone.clinical.priority or 5
        if priority >= 8:
            return ZoneSeverity.CRITICAL
        if priority >= 6:
            return ZoneSeverity.HIGH
        if priority >= 4:
            return ZoneSeverity.MODERATE
        return ZoneSeverity.LOW

    def _zone_name(self, zone_id: str) -> str:
        zone = self.registry.get_zone(zone_id)
        return zone.label_en if zone else "unknown area"

    def assess_pain_points(self, pain_points: Sequence[PainPoint]) -> PainAssessment:
        """
        Overall severity across all reported pain points.

        Args:
            pain_points: Body-map selections with intensity

        Returns:
            PainAssessment with max severity, escalation flag and alerts
        """
        if not pain_points:
            return PainAssessment()

        alerts: List[str] = []
        max_severity = ZoneSeverity.LOW

        for point in pain_points:
            zone_severity = self.get_zone_severity(point.zone_id)
            if SEVERITY_ORDER[zone_severity] > SEVERITY_ORDER[max_severity]:
                max_severity = zone_severity

            if point.intensity >= SEVERE_PAIN_INTENSITY:
                alerts.append(
                    f"Severe pain ({point.intensity}/10) in {self._zone_name(point.zone_id)}"
                )
                # Severe pain in an already serious zone
                if zone_severity in (ZoneSeverity.HIGH, ZoneSeverity.CRITICAL):
                    max_severity = ZoneSeverity.CRITICAL

            if point.radiates_to:
                targets = ", ".join(self._zone_name(z) for z in point.radiates_to)
                alerts.append(f"Pain radiating to: {targets}")

        if len(pain_points) >= settings.multi_point_threshold:
            alerts.append("Multiple pain locations reported - comprehensive evaluation needed")

        should_escalate = max_severity in (ZoneSeverity.HIGH, ZoneSeverity.CRITICAL) or any(
            p.intensity >= ESCALATION_INTENSITY for p in pain_points
        )
        if should_escalate:
            logger.info(f"Pain assessment escalated (max severity {max_severity.value})")

        return PainAssessment(
            max_severity=max_severity,
            should_escalate=should_escalate,
            alerts=alerts,
        )

    def get_primary_pain_point(self, pain_points: Sequence[PainPoint]) -> Optional[PainPoint]:
        """Explicit primary, otherwise the highest severity*10 + intensity."""
        if not pain_points:
            return None
        for point in pain_points:
            if point.is_primary:
                return point
        return max(
            pain_points,
            key=lambda p: SEVERITY_ORDER[self.get_zone_severity(p.zone_id)] * 10 + p.intensity,
        )
