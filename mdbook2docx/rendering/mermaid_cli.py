"""Mermaid renderer backed by the ``mmdc`` command-line tool."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

from ..exceptions import RenderingError
from .base import DiagramRenderer

LOGGER = logging.getLogger(__name__)


class MermaidCliRenderer(DiagramRenderer):
    """Render Mermaid source to SVG by shelling out to ``mmdc``.

    The executable is looked up on ``PATH`` lazily so that constructing the
    renderer never fails; a missing executable surfaces as a
    :class:`RenderingError` on the first render, which the diagram builder
    turns into a visible error marker.
    """

    def __init__(self, executable: str = "mmdc", timeout: float = 60.0, theme: str = "default") -> None:
        self.executable = executable
        self.timeout = timeout
        self.theme = theme

    def _resolve(self) -> str:
        path = shutil.which(self.executable)
        if path is None:
            raise RenderingError(f"Mermaid CLI '{self.executable}' was not found on PATH")
        return path

    def render(self, source: str) -> str:
        executable = self._resolve()
        with tempfile.TemporaryDirectory(prefix="mdbook2docx-") as workdir:
            source_path = Path(workdir) / "diagram.mmd"
            output_path = Path(workdir) / "diagram.svg"
            source_path.write_text(source, encoding="utf-8")
            command = [
                executable,
                "-i", str(source_path),
                "-o", str(output_path),
                "-t", self.theme,
                "-b", "white",
            ]
            LOGGER.debug("Running %s", " ".join(command))
            try:
                completed = subprocess.run(
                    command,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                    check=False,
                )
            except (OSError, subprocess.TimeoutExpired) as exc:
                raise RenderingError(f"Mermaid CLI failed to run: {exc}") from exc

            if completed.returncode != 0 or not output_path.exists():
                message = (completed.stderr or completed.stdout or "").strip()
                raise RenderingError(f"Mermaid CLI exited with status {completed.returncode}: {message}")
            return output_path.read_text(encoding="utf-8")
