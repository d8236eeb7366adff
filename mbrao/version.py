"""Package version, following semantic versioning."""

MAJOR = 1
MINOR = 5
PATCH = 0

VERSION = f"{MAJOR}.{MINOR}.{PATCH}"
