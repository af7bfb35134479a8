"""API routes for question sessions."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

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
from vocabcoach.core import container
from vocabcoach.domain.common.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    InvariantViolationError,
)
from vocabcoach.domain.common.value_objects import QuestionSessionId, UserId
from vocabcoach.domain.questions.entities.question_session import QuestionSession
from vocabcoach.domain.questions.value_objects import QuestionCounts
from vocabcoach.exceptions import (
    QuestionSessionConflictError,
    QuestionSessionNotFoundError,
    ServiceError,
)
from vocabcoach.infrastructure.common.di import inject_provider
from vocabcoach.infrastructure.identity.dependencies import CurrentUserId
from vocabcoach.infrastructure.identity.identity_providers import StaticIdentityProvider
from vocabcoach.infrastructure.questions.schemas import (
    MultipleChoiceAnswerRequest,
    MultipleChoiceAnswerResponse,
    MultipleChoiceResponseSchema,
    MultipleChoiceSectionResponse,
    OpenEndedEvaluationRequest,
    OpenEndedEvaluationResponse,
    OpenEndedResponseSchema,
    QuestionSessionFinishRequest,
    QuestionSessionFinishResponse,
    QuestionSessionResultsResponse,
    QuestionSessionSchema,
    QuestionSessionsResponse,
    QuestionSessionStartRequest,
    QuestionSessionStartResponse,
    QuestionTypeSummarySchema,
    VocabularyAnswerRequest,
    VocabularyAnswerResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/question_sessions", tags=["question_sessions"])

get_tracker_registry = inject_provider(container.tracker_registry)
get_evaluation_service = inject_provider(container.evaluation_service)
get_results_service = inject_provider(container.results_service)


def _session_id(session_id: str) -> QuestionSessionId:
    try:
        return QuestionSessionId(session_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


def _get_tracker(
    registry: QuestionSessionTrackerRegistry, session_id: str, user_id: UserId
) -> QuestionSessionTracker:
    try:
        return registry.get(_session_id(session_id), user_id)
    except QuestionSessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


def _active_session(tracker: QuestionSessionTracker) -> QuestionSession:
    # Registered trackers have always been started
    session = tracker.session
    assert session is not None, "Registered tracker must hold a session"
    return session


def _domain_error(e: DomainError) -> HTTPException:
    if isinstance(e, InvariantViolationError | BusinessRuleViolationError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


def _session_schema(session: QuestionSession) -> QuestionSessionSchema:
    return QuestionSessionSchema(
        session_id=session.id.value,
        article_id=session.article_id.value if session.article_id else None,
        completed=session.completed,
        total_points=session.total_points,
        earned_points=session.earned_points,
        accuracy=session.accuracy,
        total_time_spent=session.total_time_spent,
        multiple_choice_correct=session.multiple_choice_correct,
        vocabulary_correct=session.vocabulary_correct,
        open_ended_scores=list(session.open_ended_scores),
        created_at=session.created_at,
        completed_at=session.completed_at,
        summaries=[
            QuestionTypeSummarySchema(
                question_type=summary.question_type,
                total_questions=summary.total_questions,
                correct_answers=summary.correct_answers,
                accuracy=summary.accuracy,
                possible_points=summary.possible_points,
                earned_points=summary.earned_points,
            )
            for summary in session.summaries.values()
        ],
    )


@router.post(
    "",
    response_model=QuestionSessionStartResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_question_session(
    request: QuestionSessionStartRequest,
    current_user_id: CurrentUserId,
    registry: QuestionSessionTrackerRegistry = Depends(get_tracker_registry),
    results_service: QuestionSessionResultsService = Depends(get_results_service),
) -> QuestionSessionStartResponse:
    """
    Start a question session for the calling user.

    The session is usable even when its provisional record could not be
    stored; ``persisted`` reports whether it was.

    Raises:
        HTTPException 409: If a client-chosen id belongs to another user's
            session or to a finished one
        HTTPException 500: If the id could not be checked against the store
    """
    if request.session_id is not None:
        session_id = _session_id(request.session_id)
        owner = registry.owner(session_id)
        try:
            if owner is not None and owner != current_user_id:
                raise QuestionSessionConflictError(session_id.value)
            results_service.ensure_session_id_available(session_id, current_user_id)
        except QuestionSessionConflictError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
        except ServiceError as e:
            logger.error(f"Failed to check question session id {session_id}: {e!s}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to start session. Please try again later.",
            ) from e

    tracker: QuestionSessionTracker = container.session_tracker(
        identity_provider=StaticIdentityProvider(current_user_id)
    )
    result = tracker.start(request.session_id)

    session = _active_session(tracker)
    try:
        registry.register(session.id, current_user_id, tracker)
    except QuestionSessionConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return QuestionSessionStartResponse(
        session_id=session.id.value,
        persisted=result.is_success,
    )


@router.post(
    "/{session_id}/multiple_choice",
    response_model=MultipleChoiceAnswerResponse,
    status_code=status.HTTP_200_OK,
)
async def track_multiple_choice_answer(
    session_id: str,
    request: MultipleChoiceAnswerRequest,
    current_user_id: CurrentUserId,
    registry: QuestionSessionTrackerRegistry = Depends(get_tracker_registry),
) -> MultipleChoiceAnswerResponse:
    """Record a multiple-choice answer. Ignored once the section is completed."""
    tracker = _get_tracker(registry, session_id, current_user_id)
    try:
        tracked = tracker.track_multiple_choice(
            is_correct=request.is_correct,
            question_number=request.question_number,
            question_text=request.question_text,
            student_choice=request.student_choice,
            correct_choice=request.correct_choice,
            student_choice_text=request.student_choice_text,
            correct_choice_text=request.correct_choice_text,
        )
    except DomainError as e:
        raise _domain_error(e) from e

    session = _active_session(tracker)
    return MultipleChoiceAnswerResponse(
        tracked=tracked,
        multiple_choice_correct=session.multiple_choice_correct,
        multiple_choice_answered=len(session.multiple_choice_responses),
    )


@router.post(
    "/{session_id}/multiple_choice/complete",
    response_model=MultipleChoiceSectionResponse,
    status_code=status.HTTP_200_OK,
)
async def complete_multiple_choice_section(
    session_id: str,
    current_user_id: CurrentUserId,
    registry: QuestionSessionTrackerRegistry = Depends(get_tracker_registry),
) -> MultipleChoiceSectionResponse:
    """Lock the multiple-choice section and store its responses."""
    tracker = _get_tracker(registry, session_id, current_user_id)
    result = tracker.complete_multiple_choice_section()
    return MultipleChoiceSectionResponse(
        saved_count=result.value_or(0),
        persisted=result.is_success,
    )


@router.post(
    "/{session_id}/open_ended/evaluate",
    response_model=OpenEndedEvaluationResponse,
    status_code=status.HTTP_200_OK,
)
async def evaluate_open_ended_answer(
    session_id: str,
    request: OpenEndedEvaluationRequest,
    current_user_id: CurrentUserId,
    registry: QuestionSessionTrackerRegistry = Depends(get_tracker_registry),
    evaluation_service: QuestionEvaluationService = Depends(get_evaluation_service),
) -> OpenEndedEvaluationResponse:
    """
    Grade an open-ended answer and record it on the session.

    Uses the AI oracle when one is configured, keyword overlap otherwise.
    An answer that could not be graded is reported as incorrect.
    """
    tracker = _get_tracker(registry, session_id, current_user_id)
    try:
        is_correct = await evaluation_service.evaluate(
            article=request.article,
            question_text=request.question_text,
            expected_answer=request.expected_answer,
            student_answer=request.student_answer,
            question_number=request.question_number,
            tracker=tracker,
            article_id=request.article_id,
        )
    except DomainError as e:
        raise _domain_error(e) from e

    response = next(
        (
            r
            for r in _active_session(tracker).open_ended_responses
            if r.question_number == request.question_number
        ),
        None,
    )
    if response is None:
        return OpenEndedEvaluationResponse(is_correct=is_correct, graded=False)
    return OpenEndedEvaluationResponse(
        is_correct=is_correct,
        graded=True,
        score=response.score,
        feedback=response.feedback,
        reasoning=response.reasoning,
    )


@router.post(
    "/{session_id}/vocabulary",
    response_model=VocabularyAnswerResponse,
    status_code=status.HTTP_200_OK,
)
async def track_vocabulary_answer(
    session_id: str,
    request: VocabularyAnswerRequest,
    current_user_id: CurrentUserId,
    registry: QuestionSessionTrackerRegistry = Depends(get_tracker_registry),
) -> VocabularyAnswerResponse:
    tracker = _get_tracker(registry, session_id, current_user_id)
    tracker.track_vocabulary(request.is_correct)
    return VocabularyAnswerResponse(
        vocabulary_correct=_active_session(tracker).vocabulary_correct
    )


@router.post(
    "/{session_id}/finish",
    response_model=QuestionSessionFinishResponse,
    status_code=status.HTTP_200_OK,
)
async def finish_question_session(
    session_id: str,
    request: QuestionSessionFinishRequest,
    current_user_id: CurrentUserId,
    registry: QuestionSessionTrackerRegistry = Depends(get_tracker_registry),
) -> QuestionSessionFinishResponse:
    """
    Finish a question session.

    Completes the multiple-choice section first if the client has not done
    so, then stores the final record and the open-ended responses. The
    session can no longer be tracked afterwards.
    """
    tracker = _get_tracker(registry, session_id, current_user_id)
    counts = request.question_counts
    try:
        section = tracker.complete_multiple_choice_section()
        result = tracker.finish(
            request.article_id,
            request.total_question_count,
            question_counts=(
                QuestionCounts(
                    multiple_choice=counts.multiple_choice,
                    open_ended=counts.open_ended,
                    vocabulary=counts.vocabulary,
                )
                if counts is not None
                else None
            ),
        )
    except DomainError as e:
        raise _domain_error(e) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    session = _active_session(tracker)
    registry.remove(session.id)
    return QuestionSessionFinishResponse(
        session=_session_schema(session),
        persisted=section.is_success and result.is_success,
    )


@router.get(
    "/{session_id}/results",
    response_model=QuestionSessionResultsResponse,
    status_code=status.HTTP_200_OK,
)
async def get_question_session_results(
    session_id: str,
    current_user_id: CurrentUserId,
    results_service: QuestionSessionResultsService = Depends(get_results_service),
) -> QuestionSessionResultsResponse:
    """
    Get a stored session with its responses ordered by question number.

    Raises:
        HTTPException 404: If the session does not exist or belongs to another user
        HTTPException 500: If the store cannot be read
    """
    try:
        results = results_service.get_results(_session_id(session_id), current_user_id)
    except QuestionSessionNotFoundError as e:
        logger.warning(f"Question session {session_id} not found for user {current_user_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ServiceError as e:
        logger.error(f"Failed to load results for question session {session_id}: {e!s}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load results. Please try again later.",
        ) from e

    return QuestionSessionResultsResponse(
        session=_session_schema(results.session),
        multiple_choice_responses=[
            MultipleChoiceResponseSchema(
                question_number=r.question_number,
                question_text=r.question_text,
                student_answer=r.student_answer.identifier,
                student_answer_text=r.student_answer.text,
                correct_answer=r.correct_answer.identifier,
                correct_answer_text=r.correct_answer.text,
                is_correct=r.is_correct,
                timestamp=r.timestamp,
            )
            for r in results.multiple_choice_responses
        ],
        open_ended_responses=[
            OpenEndedResponseSchema(
                question_number=r.question_number,
                question_text=r.question_text,
                student_answer=r.student_answer,
                feedback=r.feedback,
                reasoning=r.reasoning,
                score=r.score,
                is_correct=r.is_correct,
                timestamp=r.timestamp,
            )
            for r in results.open_ended_responses
        ],
    )


@router.get(
    "",
    response_model=QuestionSessionsResponse,
    status_code=status.HTTP_200_OK,
)
async def get_recent_question_sessions(
    current_user_id: CurrentUserId,
    limit: int | None = Query(None, ge=1, le=100, description="Maximum sessions to return"),
    results_service: QuestionSessionResultsService = Depends(get_results_service),
) -> QuestionSessionsResponse:
    """Get the calling user's most recent question sessions, newest first."""
    try:
        sessions = results_service.get_recent_sessions(
            current_user_id, limit or get_settings().RECENT_SESSIONS_LIMIT
        )
    except ServiceError as e:
        logger.error(f"Failed to load recent question sessions: {e!s}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load sessions. Please try again later.",
        ) from e
    return QuestionSessionsResponse(sessions=[_session_schema(s) for s in sessions])
