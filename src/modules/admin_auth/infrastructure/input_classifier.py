"""Pattern-based input classifier.

A short list of obvious XSS and SQL injection shapes. It keeps junk out of
logs and emails; it is not a security boundary. Parameterized queries and
template autoescaping protect the real sinks.
"""

import re

from src.modules.admin_auth.domain.ports import ClassificationResult, DetectedThreat

SEVERITY_ORDER = {"low": 0, "medium": 1, "high": 2, "critical": 3}
BANNABLE = {"high", "critical"}

XSS_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"<\s*script\b", re.I), "critical"),
    (re.compile(r"(%3C|\\u003c)\s*script", re.I), "critical"),
    (re.compile(r"(javascript|vbscript)\s*:", re.I), "critical"),
    (re.compile(r"\bon\w+\s*=", re.I), "high"),
    (re.compile(r"<\s*(iframe|object|embed|svg)\b", re.I), "high"),
    (re.compile(r"document\.(cookie|write|location)", re.I), "high"),
    (re.compile(r"\b(eval|alert|prompt|confirm)\s*\(", re.I), "high"),
    (re.compile(r"&#x?[0-9a-f]+;", re.I), "medium"),
    (re.compile(r"\{\{.*\}\}|\{%.*%\}"), "medium"),
    (re.compile(r"`.*`|\$\(.*\)|\$\{.*\}"), "medium"),
    (re.compile(r"[<>]"), "low"),
]

SQL_INJECTION_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bunion\s+(all\s+)?select\b", re.I), "critical"),
    (re.compile(r"\b(drop|truncate|alter)\s+(table|database)\b", re.I), "critical"),
    (re.compile(r";\s*(select|insert|update|delete|drop)\b", re.I), "critical"),
    (re.compile(r"\b(insert\s+into|delete\s+from)\b", re.I), "high"),
    (re.compile(r"\b(or|and)\s+\d+\s*=\s*\d+", re.I), "high"),
    (re.compile(r"\b(waitfor\s+delay|sleep\s*\(|benchmark\s*\()", re.I), "high"),
    (re.compile(r"\b(information_schema|pg_tables|sys\.tables)\b", re.I), "high"),
    (re.compile(r"--|/\*|\*/"), "medium"),
    (re.compile(r"\$(where|ne|gt|lt|regex|in|nin|or|and)\b"), "medium"),
    (re.compile(r"['\";]"), "low"),
]

_ANGLE_BRACKETS = re.compile(r"[<>]")
_JS_PROTOCOL = re.compile(r"javascript:", re.I)
_EVENT_HANDLER = re.compile(r"on\w+=", re.I)
_QUOTES = re.compile(r"['\"]")
_SHELL_CHARS = re.compile(r"[;|&$`]")


def sanitize_input(value: str) -> str:
    """Strip markup, handler attributes, quotes and shell metacharacters."""
    value = _ANGLE_BRACKETS.sub("", value)
    value = _JS_PROTOCOL.sub("", value)
    value = _EVENT_HANDLER.sub("", value)
    value = _QUOTES.sub("", value)
    value = _SHELL_CHARS.sub("", value)
    return value.strip()


def sanitize_username(value: str) -> str:
    """Like sanitize_input but keeps quotes."""
    value = _ANGLE_BRACKETS.sub("", value)
    value = _JS_PROTOCOL.sub("", value)
    value = _EVENT_HANDLER.sub("", value)
    value = _SHELL_CHARS.sub("", value)
    return value.strip()


def _scan(
    field: str, value: str, patterns: list[tuple[re.Pattern[str], str]], kind: str
) -> DetectedThreat | None:
    worst: str | None = None
    for pattern, severity in patterns:
        if pattern.search(value) and (
            worst is None or SEVERITY_ORDER[severity] > SEVERITY_ORDER[worst]
        ):
            worst = severity
    if worst is None:
        return None
    return DetectedThreat(field=field, type=kind, severity=worst)


class PatternInputClassifier:
    """InputClassifier backed by the pattern lists above."""

    def __init__(self, username_fields: frozenset[str] = frozenset({"username"})):
        self.username_fields = username_fields

    def scan(self, field: str, value: str) -> list[DetectedThreat]:
        threats = [
            _scan(field, value, XSS_PATTERNS, "XSS"),
            _scan(field, value, SQL_INJECTION_PATTERNS, "SQL_INJECTION"),
        ]
        return [t for t in threats if t is not None]

    def classify(self, fields: dict[str, str]) -> ClassificationResult:
        threats: list[DetectedThreat] = []
        sanitized: dict[str, str] = {}
        for field, value in fields.items():
            threats.extend(self.scan(field, value))
            if field in self.username_fields:
                sanitized[field] = sanitize_username(value)
            else:
                sanitized[field] = sanitize_input(value)

        return ClassificationResult(
            allowed=not threats,
            sanitized=sanitized,
            threats=threats,
            should_ban=any(t.severity in BANNABLE for t in threats),
        )
