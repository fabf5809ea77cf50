"""Sensitive file names — flagged whatever their content."""

from leakgate.detectors.models import FilenameRule

PRIVATE_KEY_FILE = FilenameRule(
    id="PRIVATE_KEY_FILE",
    name="Private Key File",
    severity="critical",
    file_patterns=("id_rsa", "id_dsa", "id_ecdsa", "id_ed25519", "*_rsa", "*.pem", "*.key", "*.ppk", "*.keypair"),
)

CERTIFICATE_BUNDLE = FilenameRule(
    id="CERTIFICATE_BUNDLE",
    name="PKCS#12 / PFX Bundle",
    severity="high",
    file_patterns=("*.p12", "*.pfx", "*.asc", "*.gpg"),
)

KEYSTORE_FILE = FilenameRule(
    id="KEYSTORE_FILE",
    name="Keystore File",
    severity="high",
    file_patterns=("*.keystore", "*.jks", "*.kdbx", "*.kdb", "*.agilekeychain", "*.keychain"),
)

CREDENTIALS_FILE = FilenameRule(
    id="CREDENTIALS_FILE",
    name="Credentials File",
    severity="high",
    file_patterns=(
        "credentials",
        "credentials.json",
        "service-account*.json",
        ".htpasswd",
        ".netrc",
        "_netrc",
        ".npmrc",
        ".pypirc",
        ".git-credentials",
        ".pgpass",
        ".s3cfg",
        "otr.private_key",
        "secret_token.rb",
    ),
)

ENV_FILE = FilenameRule(
    id="ENV_FILE",
    name=".env File",
    severity="high",
    file_patterns=(".env", ".env.*", "*.env"),
)

ALL_FILENAME_RULES = [PRIVATE_KEY_FILE, CERTIFICATE_BUNDLE, KEYSTORE_FILE, CREDENTIALS_FILE, ENV_FILE]
