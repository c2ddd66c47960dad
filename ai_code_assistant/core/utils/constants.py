"""Constants used throughout the application."""

# Workspace traversal defaults
DEFAULT_IGNORED_REPO_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "__pycache__",
        "node_modules",
        "bower_components",
        ".venv",
        "venv",
        "vendor",
    }
)

INDEXED_FILE_EXTENSIONS = frozenset(
    {
        ".ts",
        ".js",
        ".py",
        ".java",
        ".c",
        ".cpp",
        ".h",
        ".cs",
        ".php",
        ".html",
        ".css",
        ".json",
        ".md",
        ".sql",
        ".rs",
        ".go",
        ".rb",
        ".kt",
        ".swift",
        ".scala",
        ".sh",
        ".yaml",
        ".xml",
    }
)

# Workspace index limits
INDEX_BATCH_SIZE = 50
INDEX_MAX_FILE_BYTES = 500 * 1024
INDEX_TOKEN_CEILING = 12_000_000
INDEX_PROGRESS_INTERVAL = 500
INDEX_YIELD_SECONDS = 0.005
CHARS_PER_TOKEN = 4

# Keyword thresholds (tokens must be strictly longer than these)
INDEX_KEYWORD_MIN_LENGTH = 3
QUERY_KEYWORD_MIN_LENGTH = 4

# Retrieval
DEFAULT_RETRIEVAL_LIMIT = 3
PATH_MATCH_WEIGHT = 5

# Chat history
MAX_STORED_SESSIONS = 50
SESSION_TITLE_MAX_CHARS = 30
DEFAULT_SESSION_TITLE = "New Chat"

# Completion defaults
DEFAULT_PROVIDER = "groq"
DEFAULT_MODEL = "llama3-70b-8192"
DEFAULT_TEMPERATURE = 0.5
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TOP_P = 1.0

# Tool execution
DEFAULT_COMMAND_TIMEOUT = 120.0
