"""Constants and configuration defaults for the crab editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Application identity, used for config and log directories
    APP_NAME = "crab"
    DISTRIBUTION_NAME = "crab-editor"

    # Fallback terminal size before the first snapshot is taken
    DEFAULT_ROWS = 24
    DEFAULT_COLUMNS = 80

    # Configuration file
    CONFIG_FILENAME = "config.json"
    LOG_FILENAME = "crab.log"
    DEFAULT_LOG_LEVEL = "WARNING"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
    QUIT_PIPE_MARKER = b'C'  # Byte written to pipe on SIGINT
