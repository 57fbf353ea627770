# Name of the generated constant holding the encoded archive
ZIPDATA_NAME = "zipdata"

DEFAULT_PACKAGE = "main"
DEFAULT_OUTPUT_STEM = "unzip"

# Target languages and their required source-file extension
LANG_GO = "go"
LANG_PYTHON = "python"
LANG_EXTENSIONS = {
    LANG_GO: ".go",
    LANG_PYTHON: ".py",
}
DEFAULT_LANG = LANG_GO

# Encoding schemes
SCHEME_ESCAPE = "escape"
SCHEME_BASE64 = "base64"
DEFAULT_SCHEME = SCHEME_ESCAPE

# Soft line-break widths, in encoded characters
ESCAPE_LINE_WIDTH = 80
BASE64_LINE_WIDTH = 60

# Root-file naming modes
ROOT_NAME_BASE = "base"
ROOT_NAME_PATH = "path"

DIR_MODE = 0o755
DIR_EXTERNAL_ATTR = (0o40755 << 16) | 0x10  # S_IFDIR|0755 plus MS-DOS directory bit
FILE_EXTERNAL_ATTR = 0o100644 << 16

# ZIP cannot represent timestamps before 1980-01-01 or after 2107
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
# Latest time the two-byte DOS date field can hold
ZIP_MAX = (2107, 12, 31, 23, 59, 58)
