"""
Utility functions for batching, atomic writes, and logging
"""
import sys
import os
import logging
import tempfile
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Dict, List

from config import BATCH_DELAY, CONSOLE_LOG_LEVEL, LOGS_DIR

# Configure Windows console for UTF-8 encoding to handle special characters
if sys.platform == 'win32':
    if hasattr(sys.stdout, 'reconfigure'):
        sys.stdout.reconfigure(encoding='utf-8')
    if hasattr(sys.stderr, 'reconfigure'):
        sys.stderr.reconfigure(encoding='utf-8')

# Create logs directory if it doesn't exist
if not os.path.exists(LOGS_DIR):
    os.makedirs(LOGS_DIR)

# Configure logging with UTF-8 encoding to handle special characters
log_filename = os.path.join(LOGS_DIR, f'modernizer_stats_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log')

# Create file handler with DEBUG level
file_handler = logging.FileHandler(log_filename, encoding='utf-8')
file_handler.setLevel(logging.DEBUG)

# Create console handler with level from config
console_handler = logging.StreamHandler()
console_handler.setLevel(CONSOLE_LOG_LEVEL)

# Create formatter
formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
file_handler.setFormatter(formatter)
console_handler.setFormatter(formatter)

# Configure root logger with DEBUG level (so file handler captures all levels)
logging.basicConfig(
    level=logging.DEBUG,
    handlers=[file_handler, console_handler]
)
logger = logging.getLogger(__name__)


def process_batch(items: list, batch_size: int = 10) -> list:
    """
    Split items into batches for processing

    Args:
        items: List of items to batch
        batch_size: Size of each batch

    Returns:
        List of batches
    """
    return [items[i:i + batch_size] for i in range(0, len(items), batch_size)]


def run_in_batches(items: List, worker: Callable, batch_size: int = 10,
                   delay: float = BATCH_DELAY, label: str = 'items') -> List:
    """
    Run worker over items in sequential batches, concurrently within each batch

    Results keep the input order. Batches never overlap, and a fixed pause is
    taken between two batches to stay under upstream rate limits.

    Args:
        items: Items to process
        worker: Callable applied to each item
        batch_size: Number of concurrent calls per batch
        delay: Pause between batches in seconds
        label: Name used in progress log lines

    Returns:
        List of worker results, one per item
    """
    results = []
    batches = process_batch(list(items), batch_size)
    done = 0
    for idx, batch in enumerate(batches, 1):
        with ThreadPoolExecutor(max_workers=len(batch)) as pool:
            results.extend(pool.map(worker, batch))
        done += len(batch)
        logger.info(f"   Progress: {done}/{len(items)} {label}")

        if idx < len(batches) and delay > 0:
            time.sleep(delay)
    return results


def _write_temp(path: str, content: str) -> str:
    """Write content to a temp file next to path and return the temp file's path"""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=directory, suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
    except OSError:
        os.unlink(tmp_path)
        raise
    return tmp_path


def atomic_write_files(documents: Dict[str, str]) -> None:
    """
    Replace several files together (all staged as temp files, then renamed)

    Nothing is renamed until every document has been written, so a failed
    write leaves all the previous files in place.

    Args:
        documents: Mapping of destination path to text content
    """
    staged = []
    try:
        for path, content in documents.items():
            staged.append((_write_temp(path, content), path))
    except OSError as e:
        logger.error(f"Failed to write {len(documents)} files, keeping the previous ones: {e}")
        for tmp_path, _ in staged:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
        raise

    for tmp_path, path in staged:
        os.replace(tmp_path, path)
