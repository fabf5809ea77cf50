"""Password assignments and credential-bearing URLs."""

from leakgate.detectors.models import Pattern

HARDCODED_PASSWORD = Pattern(
    id="HARDCODED_PASSWORD",
    name="Hardcoded Password",
    description="Quoted values of 8+ characters assigned to password-like names.",
    severity="high",
    regex=r"(?i)(?:password|passwd|pwd)\s*[:=]\s*['\"](?P<secret>[^'\"\s]{8,})['\"]",
)

CONNECTION_STRING = Pattern(
    id="CONNECTION_STRING",
    name="Database Connection String",
    description="Database and broker URLs with an embedded password.",
    severity="high",
    regex=(
        r"(?i)(?:mongodb(?:\+srv)?|postgres(?:ql)?|mysql|redis|amqps?|mssql)"
        r"://[^:/\s@]+:(?P<secret>[^@\s]{4,})@[^\s]+"
    ),
)

BASIC_AUTH_URL = Pattern(
    id="BASIC_AUTH_URL",
    name="Basic Auth in URL",
    description="HTTP(S) URLs with an embedded username:password.",
    severity="high",
    regex=r"https?://[^:/\s@]+:(?P<secret>[^@\s]{8,})@[^\s]+",
)

ALL_PASSWORD_PATTERNS = [HARDCODED_PASSWORD, CONNECTION_STRING, BASIC_AUTH_URL]
