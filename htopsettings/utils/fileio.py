"""
Atomic file replacement.

QSaveFile writes to a temporary file next to the target and renames it
over the target on commit(), so readers never observe a truncated
configuration file.
"""

import logging

logger = logging.getLogger(__name__)


def atomic_write_text(path: str, text: str, encoding: str = "utf-8") -> bool:
    """
    Replace the contents of path with text.

    The caller is responsible for the effective uid the write runs under.

    Args:
        path: Destination file
        text: Full new contents
        encoding: Text encoding. Undecodable bytes carried as
            surrogates are written back unchanged.

    Returns:
        True if the new contents were committed, False otherwise. On
        failure the previous file (if any) is left untouched.
    """
    from PySide6.QtCore import QIODevice, QSaveFile

    save_file = QSaveFile(path)
    if not save_file.open(QIODevice.OpenModeFlag.WriteOnly):
        logger.error(f"Cannot open {path} for writing: {save_file.errorString()}")
        return False

    data = text.encode(encoding, errors="surrogateescape")
    written = save_file.write(data)
    if written != len(data):
        logger.error(f"Short write to {path}: {save_file.errorString()}")
        save_file.cancelWriting()
        save_file.commit()
        return False

    if not save_file.commit():
        logger.error(f"Failed to commit {path}: {save_file.errorString()}")
        return False

    return True
