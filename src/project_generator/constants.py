"""Constants used throughout the application."""

# Project naming
DEFAULT_PROJECT_NAME = "generated-project"
MAX_PROJECT_NAME_LENGTH = 64
NAME_TOKEN_COUNT = 3

# Model settings
DEFAULT_MODEL = "claude-sonnet"
DEFAULT_REQUEST_TIMEOUT = 60.0
CONFIG_PATH_ENV = "PROJECT_GENERATOR_CONFIG"

# Dependency install commands, checked in order against the generated files
INSTALL_COMMANDS = (
    ("package.json", ("npm", "install")),
    ("requirements.txt", ("pip", "install", "-r", "requirements.txt")),
)
