"""Version information for MAXCO Repair AI."""

# Version components
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0
VERSION_INFO = (VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH)

# Dynamically construct version string
__version__ = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"
__title__ = "maxco"
__description__ = "Desktop toolkit for device-repair technicians with voice routing and AI-backed panels"
__author__ = "MAXCO team"
__author_email__ = "team@maxco.dev"
__license__ = "MIT"
__url__ = "https://github.com/maxco/maxco-repair-ai"
__maintainer__ = "MAXCO team"
__keywords__ = ["repair", "assistant", "desktop", "voice", "gemini", "qt", "gui"]
