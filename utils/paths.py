import os
from pathlib import Path
from urllib.parse import quote

# Printable ASCII that stays literal in file URIs. Controls, non-ASCII bytes,
# space and " < > ? ` { } # are percent-encoded.
_UNESCAPED_PATH_CHARS = "".join(
    chr(code) for code in range(0x21, 0x7f) if chr(code) not in '"<>?`{}#'
)

def encode_path(path_str: str) -> str:
    """Percent-encode a filesystem path for use inside a file:// URI."""
    return quote(path_str, safe=_UNESCAPED_PATH_CHARS)

def format_path_for_terminal(path: Path) -> str:
    """
    Returns a clickable file:// URI for the canonical absolute path.
    Falls back to the path as given when it cannot be resolved.
    """
    try:
        display_path = Path(path).resolve(strict=True)
    except (OSError, RuntimeError):
        display_path = Path(path)

    return to_file_uri(str(display_path), windows=os.name == "nt")

def to_file_uri(path_str: str, windows: bool = False) -> str:
    """
    file:// URI for an absolute path string.
    Extended-length Windows paths (\\\\?\\C:\\...) are passed through unencoded.
    """
    if windows and path_str.startswith("\\\\?\\"):
        return "file:///" + path_str[len("\\\\?\\"):].replace("\\", "/")
    if windows:
        return "file:///" + encode_path(path_str).replace("\\", "/")
    return "file://" + encode_path(path_str)
