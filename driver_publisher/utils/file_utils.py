# driver_publisher/utils/file_utils.py
"""File operation utilities"""

import hashlib
import shutil
from pathlib import Path


def calculate_file_checksum(file_path: Path,
                            algorithm: str = "sha256",
                            chunk_size: int = 8192) -> str:
    """
    Calculate file checksum

    Args:
        file_path: Path to file
        algorithm: Hash algorithm (sha256, md5, sha1)
        chunk_size: Read chunk size

    Returns:
        Hex digest string
    """
    hash_func = hashlib.new(algorithm)

    with open(file_path, 'rb') as f:
        while chunk := f.read(chunk_size):
            hash_func.update(chunk)

    return hash_func.hexdigest()


def format_size(size: int) -> str:
    """
    Format file size in human-readable format

    Args:
        size: Size in bytes

    Returns:
        Formatted size string
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} PB"


def safe_remove(path: Path) -> bool:
    """
    Remove a file or directory if it exists

    Args:
        path: Path to remove

    Returns:
        True if something was removed
    """
    try:
        if path.is_file() or path.is_symlink():
            path.unlink()
        elif path.is_dir():
            shutil.rmtree(path)
        else:
            return False
        return True
    except OSError:
        return False
