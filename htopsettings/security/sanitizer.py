"""
Checks on configuration paths that are read with dropped privileges.
"""

import os
import stat


def is_safe_legacy_file(path: str) -> bool:
    """
    Decide whether a legacy dotfile may be read and later deleted.

    Security checks:
    - The path must exist
    - The real user must be able to read it (os.access checks the real uid)
    - It must not be a symbolic link, so a setuid binary cannot be
      tricked into reading or unlinking a file the user does not own

    Call this inside a PrivilegeScope.

    Args:
        path: Candidate legacy file path

    Returns:
        True if the file is eligible for migration
    """
    try:
        st = os.lstat(path)
    except OSError:
        return False

    if stat.S_ISLNK(st.st_mode):
        return False

    return os.access(path, os.R_OK)

