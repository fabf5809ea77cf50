"""AWS credential shapes."""

from leakgate.detectors.models import Pattern

AWS_ACCESS_KEY = Pattern(
    id="AWS_ACCESS_KEY",
    name="AWS Access Key ID",
    description="AWS access key IDs (AKIA / ASIA prefixed, 20 characters).",
    severity="critical",
    regex=r"(?:^|[^A-Za-z0-9])(?P<secret>(?:AKIA|ASIA)[0-9A-Z]{16})(?:$|[^A-Za-z0-9])",
)

AWS_SECRET_KEY = Pattern(
    id="AWS_SECRET_KEY",
    name="AWS Secret Access Key",
    description="AWS secret access keys assigned in code or config.",
    severity="critical",
    regex=r"(?i)aws_?secret_?(?:access_?)?key\s*[:=]\s*['\"]?(?P<secret>[A-Za-z0-9/+=]{40})(?![A-Za-z0-9/+=])",
)

AWS_SESSION_TOKEN = Pattern(
    id="AWS_SESSION_TOKEN",
    name="AWS Session Token",
    description="AWS temporary session tokens.",
    severity="high",
    regex=r"(?i)aws_?session_?token\s*[:=]\s*['\"]?(?P<secret>[A-Za-z0-9/+=]{100,})",
)

ALL_AWS_PATTERNS = [AWS_ACCESS_KEY, AWS_SECRET_KEY, AWS_SESSION_TOKEN]
