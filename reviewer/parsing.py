"""Best-effort parsing of the Markdown review returned by the model.

Nothing here raises on malformed input: a missing score falls back to the
keyword policy or 0, and a missing code block is reported as None.
"""
import re
from dataclasses import dataclass
from typing import Optional

SCORE_HEADING = "# 2️⃣ Code Score"

SCORE_PATTERN = re.compile(r"(\d{1,3})\s*/?\s*100")

# Heading plus, inside the same section, everything up to the first NN/100
SCORE_SECTION_PATTERN = re.compile(
    re.escape(SCORE_HEADING) + r"(?:[^#]*?\d{1,3}\s*/?\s*100)?"
)

FENCED_BLOCK_PATTERN = re.compile(r"```[^\n`]*\n([\s\S]*?)```")

# Checked in order, first hit wins
KEYWORD_SCORES = (
    (lambda text: "dangerous" in text, 30),
    (lambda text: "poor" in text, 55),
    (lambda text: "good" in text and "very" not in text, 65),
    (lambda text: "very good" in text, 75),
    (lambda text: "excellent" in text or "perfect" in text, 100),
)

SCORE_LABELS = (
    (50, "❌ Dangerous (Unusable code, cannot run)"),
    (60, "⚠️ Poor (Runs, but breaks coding rules)"),
    (70, "👌 Good (Basic quality, some issues)"),
    (80, "👍 Very Good (Mostly clean, minor issues)"),
)
TOP_SCORE_LABEL = "🌟 Excellent (Production-level code)"


def clamp_score(value: int) -> int:
    return min(100, max(0, value))


def extract_raw_score(text: str) -> int:
    match = SCORE_PATTERN.search(text or "")
    if not match:
        return 0
    return clamp_score(int(match.group(1)))


def normalize_score(text: str, raw_score: int) -> int:
    """Prefer the qualitative verdict in the review over the numeral."""
    lower = (text or "").lower()
    for applies, score in KEYWORD_SCORES:
        if applies(lower):
            return score
    return clamp_score(raw_score)


def inject_score(text: str, score: int) -> str:
    section = f"{SCORE_HEADING}\n{score}/100"
    if SCORE_HEADING in text:
        return SCORE_SECTION_PATTERN.sub(lambda _: section, text, count=1)
    return f"{text}\n\n{section}"


def extract_fixed_code(text: str) -> Optional[str]:
    # Only the first fenced block is taken as the fix
    match = FENCED_BLOCK_PATTERN.search(text or "")
    if not match:
        return None
    return match.group(1).strip()


def score_label(score: int) -> str:
    for upper, label in SCORE_LABELS:
        if score < upper:
            return label
    return TOP_SCORE_LABEL


@dataclass(frozen=True)
class ParsedReview:
    text: str
    score: int
    fixed_code: Optional[str]


def parse_review(text: str) -> ParsedReview:
    normalized = normalize_score(text, extract_raw_score(text))
    rewritten = inject_score(text, normalized)
    return ParsedReview(
        text=rewritten,
        score=normalized,
        fixed_code=extract_fixed_code(rewritten),
    )
