"""Drives one code review from the review button to the rendered result.

    Idle -> Validating -> Detecting -> Rejected            -> Idle
                                    -> Requesting -> Failed -> Idle
                                                  -> Parsing -> Done

Each attempt ends with ``loading`` false and at least one notice for
the user. Nothing is retried.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from reviewer import state as transitions
from reviewer.client import ReviewClient, ReviewFailure
from reviewer.detector import CONFIDENCE_THRESHOLD, LanguageDetector
from reviewer.errors import (
    LanguageMismatchError,
    LowConfidenceError,
    ReviewError,
    ServiceError,
    ValidationError,
)
from reviewer.languages import is_match, is_supported, language_for_label
from reviewer.parsing import parse_review
from reviewer.prompt import SYSTEM_INSTRUCTION
from reviewer.state import Notice, ReviewState

logger = logging.getLogger(__name__)

BUSY_NOTICE = Notice("warning", "⏳ A review is already running.")


class Stage(enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    DETECTING = "detecting"
    REJECTED = "rejected"
    REQUESTING = "requesting"
    FAILED = "failed"
    PARSING = "parsing"
    DONE = "done"


@dataclass
class ReviewOutcome:
    state: ReviewState
    stage: Stage
    notices: List[Notice]
    error: Optional[ReviewError] = None

    @property
    def ok(self) -> bool:
        return self.stage is Stage.DONE


class ReviewOrchestrator:
    def __init__(self, detector=None, client=None, system_instruction=SYSTEM_INSTRUCTION):
        self.detector = detector or LanguageDetector()
        self.client = client or ReviewClient()
        self.system_instruction = system_instruction

    def review(self, state: ReviewState, publish: Callable[[ReviewState], Optional[bool]] = None) -> ReviewOutcome:
        """Run the whole pipeline for the code and language held in ``state``.

        ``publish`` receives the loading state right before the request is
        sent, so callers can show progress and refuse a second review. If it
        returns ``False`` another review already holds the session and no
        request is sent.
        """
        if state.loading:
            return ReviewOutcome(state=state, stage=Stage.IDLE, notices=[BUSY_NOTICE])

        notices = []
        stage = Stage.VALIDATING
        try:
            self._validate(state.code)
            stage = Stage.DETECTING
            detected = self._check_language(state.code, state.language)
        except ReviewError as e:
            logger.info("Review rejected at %s: %s", stage.value, e.message)
            return ReviewOutcome(
                state=state,
                stage=Stage.REJECTED,
                notices=[Notice(e.level, e.message)],
                error=e,
            )

        notices.append(Notice(
            "success",
            f'✅ Correct! You selected "{state.language}" and wrote {detected}. Starting review...',
        ))

        pending = transitions.begin_request(state)
        if publish is not None and publish(pending) is False:
            logger.info("Review skipped: another review holds the session")
            return ReviewOutcome(state=state, stage=Stage.IDLE, notices=[BUSY_NOTICE])

        logger.debug("Stage %s", Stage.REQUESTING.value)
        try:
            text = self._request(pending.code)
        except ServiceError as e:
            logger.warning("Review request failed (status %s): %s", e.status_code, e.message)
            notices.append(Notice(e.level, f"❌ Failed to analyze code. {e.message}"))
            return ReviewOutcome(
                state=transitions.settle(pending),
                stage=Stage.FAILED,
                notices=notices,
                error=e,
            )

        logger.debug("Stage %s: %d characters", Stage.PARSING.value, len(text))
        parsed = parse_review(text)
        done = transitions.record_review(pending, parsed.text, parsed.score)
        done = transitions.record_fixed_code(done, parsed.fixed_code)
        return ReviewOutcome(state=transitions.settle(done), stage=Stage.DONE, notices=notices)

    def _validate(self, code: str) -> None:
        if not code or not code.strip():
            raise ValidationError("⚠️ Please paste some code first.")

    def _check_language(self, code: str, language: str) -> str:
        result = self.detector.detect(code)
        if not result.label or result.relevance < CONFIDENCE_THRESHOLD:
            raise LowConfidenceError(
                "🤔 Couldn't detect language confidently. Please check your code."
            )
        if not is_match(language, result.label):
            raise LanguageMismatchError(
                f'❌ Language mismatch: you selected "{language}", '
                f'but your code looks like "{result.label}".',
                declared=language,
                detected=result.label,
            )
        return result.label

    def _request(self, code: str) -> str:
        result = self.client.review(code, self.system_instruction)
        if isinstance(result, ReviewFailure):
            raise ServiceError(result.message, status_code=result.status_code)
        return result.text

    # Presentation actions

    def apply_fix(self, state: ReviewState):
        if not state.fixed_code:
            return state, Notice("error", "❌ No fixed code found in the review.")
        return (
            transitions.apply_fixed_code(state),
            Notice("success", "✅ Code fixed and updated in the editor!"),
        )

    def load_file(self, state: ReviewState, filename: str, text: str):
        """Replace the code with an uploaded file and pick its language."""
        state = transitions.edit(state, code=text)
        result = self.detector.detect(text)
        language = language_for_label(result.label) if result.confident else None
        if language:
            return (
                transitions.edit(state, language=language),
                Notice("info", f"📄 Loaded {filename} ({language})"),
            )
        return state, Notice("info", f"📄 Loaded {filename}")

    def select_language(self, state: ReviewState, language: str):
        if not is_supported(language):
            return state, Notice("error", f'❌ Unsupported language "{language}".')
        return transitions.edit(state, language=language), None

    def copy(self, state: ReviewState, target: str):
        """Return the text to put on the clipboard, if any, and a notice."""
        if target == "review":
            text, done = state.review, "📋 Review copied!"
        else:
            text, done = state.code, "📋 Code copied!"
        if not text:
            return None, Notice("error", "⚠️ Nothing to copy.")
        return text, Notice("success", done)
