"""Vendor token shapes — GitHub, GitLab, Slack, Stripe, Google, JWT, generic assignments."""

from leakgate.detectors.models import Pattern

GITHUB_TOKEN = Pattern(
    id="GITHUB_TOKEN",
    name="GitHub Token",
    description="GitHub tokens (ghp_, gho_, ghu_, ghs_, ghr_ prefixed).",
    severity="critical",
    regex=r"(?P<secret>gh[pousr]_[A-Za-z0-9]{36,255})",
)

GITLAB_TOKEN = Pattern(
    id="GITLAB_TOKEN",
    name="GitLab Personal Access Token",
    description="GitLab personal access tokens (glpat- prefix).",
    severity="critical",
    regex=r"(?P<secret>glpat-[A-Za-z0-9\-_]{20,})",
)

SLACK_TOKEN = Pattern(
    id="SLACK_TOKEN",
    name="Slack Token",
    description="Slack bot, user and workspace tokens.",
    severity="critical",
    regex=r"(?P<secret>xox[baprs]-[0-9]{10,13}-[0-9]{10,13}[A-Za-z0-9-]*)",
)

SLACK_WEBHOOK = Pattern(
    id="SLACK_WEBHOOK",
    name="Slack Webhook URL",
    description="Slack incoming webhook URLs.",
    severity="high",
    regex=r"https://hooks\.slack\.com/services/(?P<secret>T[A-Za-z0-9]+/B[A-Za-z0-9]+/[A-Za-z0-9]+)",
)

STRIPE_SECRET_KEY = Pattern(
    id="STRIPE_SECRET_KEY",
    name="Stripe Secret Key",
    description="Stripe live secret and restricted keys.",
    severity="critical",
    regex=r"(?P<secret>(?:sk|rk)_live_[A-Za-z0-9]{24,})",
)

GOOGLE_API_KEY = Pattern(
    id="GOOGLE_API_KEY",
    name="Google API Key",
    description="Google Cloud / Firebase API keys (AIza prefix, 39 characters).",
    severity="high",
    regex=r"(?P<secret>AIza[0-9A-Za-z\-_]{35})",
)

GENERIC_JWT = Pattern(
    id="GENERIC_JWT",
    name="JSON Web Token",
    description="Signed JWTs (three base64url segments starting eyJ).",
    severity="high",
    regex=r"(?P<secret>eyJ[A-Za-z0-9_-]{10,}\.eyJ[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,})",
)

GENERIC_API_KEY = Pattern(
    id="GENERIC_API_KEY",
    name="Generic API Key Assignment",
    description="Quoted values of 16+ characters assigned to api_key / api_secret style names.",
    severity="medium",
    regex=r"(?i)(?:api_?key|api_?secret|api_?token)\s*[:=]\s*['\"](?P<secret>[A-Za-z0-9_\-]{16,})['\"]",
)

GENERIC_SECRET = Pattern(
    id="GENERIC_SECRET",
    name="Generic Secret Assignment",
    description="Quoted values of 16+ characters assigned to secret / token style names.",
    severity="medium",
    regex=(
        r"(?i)(?:client_?secret|secret_?key|access_?token|auth_?token|secret)\s*[:=]\s*"
        r"['\"](?P<secret>[A-Za-z0-9_\-/+=]{16,})['\"]"
    ),
)

ALL_TOKEN_PATTERNS = [
    GITHUB_TOKEN,
    GITLAB_TOKEN,
    SLACK_TOKEN,
    SLACK_WEBHOOK,
    STRIPE_SECRET_KEY,
    GOOGLE_API_KEY,
    GENERIC_JWT,
    GENERIC_API_KEY,
    GENERIC_SECRET,
]
