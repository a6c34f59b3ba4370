from dataclasses import dataclass, replace
from typing import Optional

from reviewer.languages import DEFAULT_LANGUAGE

DEFAULT_CODE = "// Paste your code here"


@dataclass(frozen=True)
class Notice:
    level: str
    message: str


@dataclass(frozen=True)
class ReviewState:
    code: str = DEFAULT_CODE
    language: str = DEFAULT_LANGUAGE
    loading: bool = False
    review: str = ""
    fixed_code: str = ""
    code_score: Optional[int] = None

    @property
    def can_review(self) -> bool:
        return not self.loading

    @property
    def can_apply_fix(self) -> bool:
        return bool(self.review and self.fixed_code)


# Transitions. Each returns a new state and leaves its input untouched.

def edit(state: ReviewState, code=None, language=None) -> ReviewState:
    changes = {}
    if code is not None:
        changes["code"] = code
    if language is not None:
        changes["language"] = language
    return replace(state, **changes)


def begin_request(state: ReviewState) -> ReviewState:
    return replace(state, loading=True, review="", fixed_code="", code_score=None)


def record_review(state: ReviewState, review: str, score: int) -> ReviewState:
    return replace(state, review=review, code_score=score)


def record_fixed_code(state: ReviewState, fixed_code) -> ReviewState:
    return replace(state, fixed_code=fixed_code or "")


def settle(state: ReviewState) -> ReviewState:
    return replace(state, loading=False)


def apply_fixed_code(state: ReviewState) -> ReviewState:
    return replace(state, code=state.fixed_code)
