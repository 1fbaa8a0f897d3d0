# sharetriage/findings/hostnames.py
# Path helpers: UNC host extraction and basename lookup.

from __future__ import annotations

import ntpath
import re

# Two leading separators (either slash) followed by a non-separator run.
UNC_HOST_RE = re.compile(r"^[\\/]{2}([^\\/]+)")


def extract_hostname(path: str) -> str:
    """
    Return the host segment of a UNC-shaped path, or "" for anything else.

    Example: "\\\\SRV1\\share\\f.txt" -> "SRV1"
             "C:\\local\\path"        -> ""
    """
    if not path or not path.strip():
        return ""
    match = UNC_HOST_RE.match(path)
    if not match:
        return ""
    return match.group(1).strip()


def file_basename(path: str) -> str:
    """
    Final path component, accepting both Windows and POSIX separators.

    Example: "\\\\SRV1\\share\\dir/secret.txt" -> "secret.txt"
    """
    if not path:
        return ""
    return ntpath.basename(path.strip())
