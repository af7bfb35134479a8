from dependency_injector import containers, providers
from sqlalchemy.orm import sessionmaker

from vocabcoach.application.questions.services.evaluation_service import (
    QuestionEvaluationService,
)
from vocabcoach.application.questions.services.session_results_service import (
    QuestionSessionResultsService,
)
from vocabcoach.application.questions.services.session_tracker import QuestionSessionTracker
from vocabcoach.application.questions.services.tracker_registry import (
    QuestionSessionTrackerRegistry,
)
from vocabcoach.config import get_settings
from vocabcoach.infrastructure.ai.ai_service import AIGradingService
from vocabcoach.infrastructure.persistence.document_store import SqlDocumentStore


def _grading_mode() -> str:
    return "ai" if get_settings().ai_enabled else "keyword"


def _oracle_timeout() -> float:
    return get_settings().ORACLE_TIMEOUT_SECONDS


def _tracker_idle_timeout() -> float:
    return get_settings().TRACKER_IDLE_TIMEOUT_SECONDS


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Provided at startup once the database is initialized
    session_factory = providers.Dependency(instance_of=sessionmaker)

    # Infrastructure
    document_store = providers.Singleton(SqlDocumentStore, session_factory=session_factory)
    scoring_oracle = providers.Selector(
        providers.Callable(_grading_mode),
        ai=providers.Singleton(AIGradingService),
        keyword=providers.Object(None),
    )

    # Question sessions
    tracker_registry = providers.Singleton(
        QuestionSessionTrackerRegistry, idle_timeout=providers.Callable(_tracker_idle_timeout)
    )
    session_tracker = providers.Factory(QuestionSessionTracker, document_store=document_store)
    evaluation_service = providers.Factory(
        QuestionEvaluationService,
        scoring_oracle=scoring_oracle,
        oracle_timeout=providers.Callable(_oracle_timeout),
    )
    results_service = providers.Factory(
        QuestionSessionResultsService, document_store=document_store
    )


container = Container()
