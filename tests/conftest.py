import pytest
from clinical_intake.engines.pattern_analyzer import ClinicalZoneAnalyzer
from clinical_intake.engines.question_engine import MedicalQuestionEngine
from clinical_intake.knowledge.registry import BodyZoneRegistry
from clinical_intake.orchestrator.intake import IntakeOrchestrator
from clinical_intake.services.session_service import IntakeSessionManager
from clinical_intake.services.session_store import InMemorySessionStore
from clinical_intake.services.zone_triage import ZoneTriageService


@pytest.fixture(scope="session")
def registry():
    return BodyZoneRegistry()


@pytest.fixture
def analyzer(registry):
    return ClinicalZoneAnalyzer(registry)


@pytest.fixture
def engine(registry):
    return MedicalQuestionEngine(registry)


@pytest.fixture
def triage_service(registry):
    return ZoneTriageService(registry)


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def session_manager(store):
    return IntakeSessionManager(store, key="test_session")


@pytest.fixture
def orchestrator(registry, session_manager):
    return IntakeOrchestrator(registry, session_manager)
