from .evaluation_service import ORACLE_TIMEOUT_SECONDS, QuestionEvaluationService
from .session_results_service import QuestionSessionResultsService, SessionResults
from .session_tracker import QuestionSessionTracker
from .tracker_registry import QuestionSessionTrackerRegistry

__all__ = [
    "ORACLE_TIMEOUT_SECONDS",
    "QuestionEvaluationService",
    "QuestionSessionResultsService",
    "QuestionSessionTracker",
    "QuestionSessionTrackerRegistry",
    "SessionResults",
]
