import logging
import re
from dataclasses import dataclass

from pygments.lexers import get_lexer_by_name
from pygments.token import Error, Keyword, Name

logger = logging.getLogger(__name__)

# Minimum relevance for a detection to be trusted
CONFIDENCE_THRESHOLD = 8

# Lexers tried by auto-detection. On equal relevance the earlier one wins,
# so the declared languages come first.
CANDIDATE_LEXERS = (
    ("javascript", {}),
    ("python", {}),
    ("java", {}),
    ("c", {}),
    ("cpp", {}),
    ("csharp", {}),
    ("go", {}),
    ("php", {"startinline": True}),
    ("sql", {}),
    ("typescript", {}),
    ("ruby", {}),
    ("rust", {}),
    ("kotlin", {}),
    ("bash", {}),
)

TOKEN_WEIGHTS = (
    (Keyword, 5),
    (Name.Builtin, 2),
    (Name.Function, 1),
    (Name.Class, 1),
    (Name.Decorator, 1),
    (Error, -3),
)

ANALYSE_TEXT_WEIGHT = 10

# Constructs that give a language away even when several lexers accept the
# snippet. Each pattern that matches adds its weight once.
_LINE = re.MULTILINE
SIGNATURES = {
    "javascript": (
        (re.compile(r"\bconsole\.(log|warn|error|info)\s*\("), 15),
        (re.compile(r"\b(const|let)\s+\w+\s*="), 15),
        (re.compile(r"\brequire\s*\(\s*['\"]"), 15),
        (re.compile(r"\)\s*=>\s*[\w{(]"), 10),
        (re.compile(r"\b(module\.exports|document\.\w+|window\.\w+)"), 10),
        (re.compile(r"^\s*export\s+(default|const|function|class)\b", _LINE), 10),
    ),
    "python": (
        (re.compile(r"^\s*(async\s+)?def\s+\w+\s*\(.*\)\s*(->\s*[^:]+)?:", _LINE), 15),
        (re.compile(r"^\s*(from\s+[\w.]+\s+)?import\s+[\w., ]+$", _LINE), 15),
        (re.compile(r"(?<![\w.])print\("), 10),
        (re.compile(r"\bself\.\w+"), 10),
        (re.compile(r"\bif\s+__name__\s*==|^\s*elif\b", _LINE), 10),
    ),
    "java": (
        (re.compile(r"\bSystem\.(out|err)\.print"), 15),
        (re.compile(r"\bstatic\s+void\s+main\s*\(\s*String"), 15),
        (re.compile(r"^\s*import\s+java(x)?\.[\w.*]+\s*;", _LINE), 15),
        (re.compile(r"^\s*package\s+[\w.]+\s*;", _LINE), 10),
        (re.compile(r"@Override\b"), 10),
    ),
    "c": (
        (re.compile(r"^\s*#\s*include\s*<\w+\.h>", _LINE), 15),
        (re.compile(r"\b(printf|scanf|malloc|free)\s*\("), 15),
    ),
    "cpp": (
        (re.compile(r"^\s*#\s*include\s*<[a-z_]+>", _LINE), 15),
        (re.compile(r"\bstd::\w+"), 15),
        (re.compile(r"\b(cout|cerr)\s*<<|\bcin\s*>>"), 15),
        (re.compile(r"\busing\s+namespace\s+std\s*;"), 15),
        (re.compile(r"\btemplate\s*<"), 10),
    ),
    "csharp": (
        (re.compile(r"^\s*using\s+System(\.\w+)*\s*;", _LINE), 15),
        (re.compile(r"\bConsole\.(Write|WriteLine|ReadLine)\s*\("), 15),
        (re.compile(r"\bstatic\s+(async\s+)?\w+\s+Main\s*\("), 15),
        (re.compile(r"\{\s*get;\s*(private\s+)?set;\s*\}"), 10),
    ),
    "go": (
        (re.compile(r"^\s*package\s+\w+\s*$", _LINE), 15),
        (re.compile(r"\bfunc\s+(\([^)]*\)\s*)?\w+\s*\("), 15),
        (re.compile(r"\bfmt\.\w+"), 15),
        (re.compile(r":="), 10),
    ),
    "php": (
        (re.compile(r"<\?php"), 20),
        (re.compile(r"\$\w+\s*(=|->|;|\))"), 15),
        (re.compile(r"\bfunction\s+\w+\s*\(\s*\$"), 10),
        (re.compile(r"^\s*echo\s+[\"'$\w]", _LINE), 10),
    ),
    "sql": (
        (re.compile(
            r"^\s*(SELECT\b[^;]*?\bFROM|INSERT\s+INTO|UPDATE\s+\w+\s+SET|DELETE\s+FROM"
            r"|CREATE\s+(TABLE|VIEW|INDEX))\b",
            re.MULTILINE | re.IGNORECASE,
        ), 15),
        (re.compile(r"\b(WHERE|GROUP BY|ORDER BY|JOIN)\b"), 5),
    ),
}


@dataclass(frozen=True)
class DetectionResult:
    label: str = ""
    relevance: float = 0

    @property
    def confident(self) -> bool:
        return bool(self.label) and self.relevance >= CONFIDENCE_THRESHOLD


UNKNOWN = DetectionResult()


def _token_weight(ttype) -> int:
    for family, weight in TOKEN_WEIGHTS:
        if ttype in family:
            return weight
    return 0


def signature_relevance(label: str, text: str) -> int:
    return sum(
        weight for pattern, weight in SIGNATURES.get(label, ()) if pattern.search(text)
    )


class LanguageDetector:
    """Guesses the language of a snippet with Pygments lexers.

    Every candidate lexer tokenizes the text; recognised keywords, builtins
    and definitions add to its relevance and lexing errors take away from
    it. Telltale constructs of the lexer's language (see ``SIGNATURES``)
    add more, so a loose lexer cannot outscore the right one on keywords
    alone. The lexer with the highest relevance wins.
    """

    def __init__(self, candidates=CANDIDATE_LEXERS):
        self._candidates = candidates
        self._lexers = None

    def _load_lexers(self):
        if self._lexers is None:
            self._lexers = [
                get_lexer_by_name(alias, **options)
                for alias, options in self._candidates
            ]
        return self._lexers

    def relevance(self, lexer, text: str) -> float:
        score = sum(_token_weight(ttype) for ttype, _ in lexer.get_tokens(text))
        score += ANALYSE_TEXT_WEIGHT * lexer.analyse_text(text)
        score += signature_relevance(lexer.aliases[0].lower(), text)
        return max(0, score)

    def detect(self, text) -> DetectionResult:
        snippet = (text or "").strip()
        if not snippet:
            return UNKNOWN

        try:
            best_label, best_score = "", 0
            for lexer in self._load_lexers():
                score = self.relevance(lexer, snippet)
                if score > best_score:
                    best_label, best_score = lexer.aliases[0].lower(), score
        except Exception:
            # Detection is advisory only
            logger.warning("Language detection failed", exc_info=True)
            return UNKNOWN

        if not best_label:
            return UNKNOWN
        logger.debug("Detected %s (relevance %s)", best_label, best_score)
        return DetectionResult(label=best_label, relevance=best_score)
