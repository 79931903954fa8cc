"""Plain-text export of enumerated subdomains."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class TextReporter:
    """Write one subdomain per line to a text file."""

    def prepare(self, output_path: str) -> Path:
        """Create the parent directory of *output_path* (mode ``0o755``).

        Raises:
            OSError: If the directory cannot be created.
        """
        path = Path(output_path)
        path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
        return path

    def generate(self, subdomains: Iterable[str], output_path: str) -> Path:
        """Write *subdomains* to *output_path*, replacing any previous content.

        Missing parent directories are created first. Every name is followed
        by a newline; an empty iterable yields an empty file.

        Args:
            subdomains: Names in output order.
            output_path: Destination file path.

        Returns:
            Path to the generated file.

        Raises:
            OSError: If the directory or the file cannot be created.
        """
        path = self.prepare(output_path)
        with path.open("w", encoding="utf-8", newline="\n") as fh:
            for name in subdomains:
                fh.write(f"{name}\n")
        return path
