"""Persistence sinks for generated documents and index modules.

Example usage:
    sink = FileSystemSink("./generated")
    sink.prepare()
    sink.write_document("queries", "getUser", "gql", document)
    sink.write_index("queries", index_code)
"""

import logging
import os
import shutil
from typing import Protocol, runtime_checkable

log = logging.getLogger(__name__)

INDEX_FILENAME = "__init__.py"


class UnsafeOutputDirError(ValueError):
    """Raised when cleaning would delete the working directory or a parent of it."""


@runtime_checkable
class DocumentSink(Protocol):
    """Protocol for storing generated output.

    Implementations must store content so that it reads back byte-for-byte.
    Write failures are raised unmodified.
    """

    def prepare(self) -> None:
        """Called once before anything is written."""
        ...

    def write_document(self, folder: str, field_name: str, extension: str, content: str) -> None:
        """Store one operation document as '<folder>/<field_name>.<extension>'."""
        ...

    def write_index(self, folder: str | None, content: str) -> None:
        """Store a re-export index for a folder, or the top level when folder is None."""
        ...


class FileSystemSink:
    """Writes documents under an output directory."""

    def __init__(self, output_dir: str, clean: bool = True):
        self.output_dir = output_dir
        self.clean = clean

    def prepare(self):
        """Create the output directory, removing stale output first if clean."""
        if self.clean and os.path.isdir(self.output_dir):
            self._check_removable()
            log.debug("Removing %s", self.output_dir)
            shutil.rmtree(self.output_dir)
        os.makedirs(self.output_dir, exist_ok=True)

    def _check_removable(self):
        output = os.path.realpath(self.output_dir)
        cwd = os.path.realpath(os.getcwd())
        if output == cwd or cwd.startswith(output.rstrip(os.sep) + os.sep):
            raise UnsafeOutputDirError(
                f"Refusing to remove {self.output_dir}: it is the working directory or one of its parents"
            )

    def write_document(self, folder: str, field_name: str, extension: str, content: str) -> None:
        self._write(os.path.join(folder, f"{field_name}.{extension}"), content)

    def write_index(self, folder: str | None, content: str) -> None:
        if folder is None:
            self._write(INDEX_FILENAME, content)
        else:
            self._write(os.path.join(folder, INDEX_FILENAME), content)

    def _write(self, relative_path: str, content: str):
        full_path = os.path.join(self.output_dir, relative_path)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        # newline="" keeps the document byte-identical on every platform
        with open(full_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)


class MemorySink:
    """Keeps generated output in memory.

    Documents are keyed by (folder, filename); indexes by folder,
    with None for the top-level index.
    """

    def __init__(self):
        self.documents: dict[tuple[str, str], str] = {}
        self.indexes: dict[str | None, str] = {}

    def prepare(self) -> None:
        self.documents.clear()
        self.indexes.clear()

    def write_document(self, folder: str, field_name: str, extension: str, content: str) -> None:
        self.documents[(folder, f"{field_name}.{extension}")] = content

    def write_index(self, folder: str | None, content: str) -> None:
        self.indexes[folder] = content

    def document(self, folder: str, filename: str) -> str:
        """Return a stored document."""
        return self.documents[(folder, filename)]
