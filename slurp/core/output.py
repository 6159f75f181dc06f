import os
from pathlib import Path
import structlog
from slurp.exceptions import DumpError

log = structlog.get_logger(__name__)

def ensure_writable_dir(directory: Path):
    # raises DumpError unless `directory` exists and can be written to.
    if not directory.is_dir() or not os.access(directory, os.W_OK):
        raise DumpError(f"The specified directory is not writable: {directory}")

def write_to_file(output_file_path: Path, text_content: str):
    # writes text content to the specified file path.
    log.info("writing_output_to_file", path=str(output_file_path))
    try:
        output_file_path.write_text(text_content, encoding="utf-8")
    except OSError as e:
        raise DumpError(f"failed to write to file '{output_file_path}': {e}")
