from types import MappingProxyType

# Declared languages offered in the selector, in display order
SUPPORTED_LANGUAGES = (
    ("javascript", "JavaScript"),
    ("python", "Python"),
    ("java", "Java"),
    ("c", "C"),
    ("cpp", "C++"),
    ("csharp", "C#"),
    ("go", "Go"),
    ("php", "PHP"),
    ("sql", "SQL"),
)

DEFAULT_LANGUAGE = "javascript"

# Detector labels accepted for each declared language
ALIAS_TABLE = MappingProxyType({
    "javascript": frozenset({"javascript", "js", "node"}),
    "python": frozenset({"python", "py"}),
    "java": frozenset({"java"}),
    "c": frozenset({"c", "h"}),
    "cpp": frozenset({"cpp", "c++", "hpp", "cc", "hxx"}),
    "csharp": frozenset({"csharp", "cs", "c#"}),
    "php": frozenset({"php"}),
    "go": frozenset({"go", "golang"}),
    "sql": frozenset({
        "sql",
        "postgresql",
        "pgsql",
        "postgres",
        "mysql",
        "plsql",
        "tsql",
    }),
})


def normalize_label(label) -> str:
    return label.strip().lower() if label else ""


def is_supported(language: str) -> bool:
    return language in ALIAS_TABLE


def is_match(selected: str, detected_label: str) -> bool:
    """True when the detector label belongs to the declared language.

    Unknown declared languages never match.
    """
    aliases = ALIAS_TABLE.get(selected)
    if not aliases:
        return False
    return normalize_label(detected_label) in aliases


def language_for_label(detected_label: str):
    """Map a detector label back to a declared language id, or None."""
    label = normalize_label(detected_label)
    if not label:
        return None
    for language, _ in SUPPORTED_LANGUAGES:
        if label in ALIAS_TABLE[language]:
            return language
    return None
