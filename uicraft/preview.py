"""
Sandboxed previews of generated code.

Generated markup is untrusted, so it is never executed in the host's own
context. Each port writes a standalone page and hands it to the browser:

- InlinePreview embeds the code in a sandboxed iframe inside a fixed-size
  panel. The sandbox omits allow-same-origin, so the document gets an opaque
  origin and shares no cookies, storage or globals with the host page.
- DetachedPreview wraps the code in a minimal full-page document opened in
  its own tab for full-viewport inspection.
"""

import html
import logging
import tempfile
import webbrowser
from abc import ABC, abstractmethod
from itertools import count
from pathlib import Path
from typing import Callable, Optional

from .errors import PreviewError
from .models import PreviewTarget

logger = logging.getLogger(__name__)

INLINE_PANEL_HEIGHT = 400

INLINE_HOST_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>Preview</title>
  <style>
    body {{ margin: 0; padding: 24px; font-family: system-ui, sans-serif; background: #f3f4f6; }}
    iframe {{ width: 100%; height: {height}px; border: 1px solid #d1d5db; border-radius: 8px; background: #fff; }}
  </style>
</head>
<body>
  <iframe title="preview" sandbox="allow-scripts" referrerpolicy="no-referrer" srcdoc="{srcdoc}"></iframe>
</body>
</html>
"""

DETACHED_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>Full Screen Preview</title>
</head>
<body>
{code}
</body>
</html>
"""


def inline_document(code: str, height: int = INLINE_PANEL_HEIGHT) -> str:
    """Host page that runs the code inside a sandboxed iframe."""
    return INLINE_HOST_TEMPLATE.format(height=height, srcdoc=html.escape(code, quote=True))


def detached_document(code: str) -> str:
    """Full-page wrapper whose body is the code."""
    return DETACHED_TEMPLATE.format(code=code)


class PreviewPort(ABC):
    """Where a preview is shown."""

    target: PreviewTarget

    def __init__(
        self,
        output_dir: Optional[Path] = None,
        opener: Optional[Callable[[str], bool]] = None,
    ):
        """
        Args:
            output_dir: Directory for preview pages. A temporary directory is
                        created on first use if not provided.
            opener: Called with the page URL. Defaults to opening a new
                    browser tab.
        """
        self._output_dir = output_dir
        self._opener = opener or webbrowser.open_new_tab
        self._counter = count(1)

    @property
    def output_dir(self) -> Path:
        if self._output_dir is None:
            self._output_dir = Path(tempfile.mkdtemp(prefix="uicraft-preview-"))
        return self._output_dir

    @abstractmethod
    def document(self, code: str) -> str:
        """Return the page to write for this code."""
        pass

    def show(self, code: str) -> Path:
        """Write the preview page and open it. Returns the page path.

        Raises:
            PreviewError: If the page cannot be written or no browser opened
                          it. The error carries the page path once written.
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path = self.output_dir / f"{self.target.value}-{next(self._counter)}.html"
            path.write_text(self.document(code), encoding="utf-8")
        except OSError as e:
            raise PreviewError(f"Could not write preview page: {e}") from e
        logger.debug("Wrote %s preview to %s", self.target.value, path)

        try:
            opened = self._opener(path.resolve().as_uri())
        except (OSError, webbrowser.Error) as e:
            raise PreviewError(f"Could not launch browser: {e}", path) from e
        if opened is False:
            raise PreviewError("No browser available to open the preview", path)
        return path


class InlinePreview(PreviewPort):
    target = PreviewTarget.INLINE

    def __init__(self, *args, height: int = INLINE_PANEL_HEIGHT, **kwargs):
        super().__init__(*args, **kwargs)
        self.height = height

    def document(self, code: str) -> str:
        return inline_document(code, self.height)


class DetachedPreview(PreviewPort):
    target = PreviewTarget.DETACHED

    def document(self, code: str) -> str:
        return detached_document(code)


def get_preview_port(target: PreviewTarget, **kwargs) -> PreviewPort:
    """Create the port for a preview target."""
    if PreviewTarget(target) is PreviewTarget.INLINE:
        return InlinePreview(**kwargs)
    return DetachedPreview(**kwargs)


def render_preview(
    code: str,
    target: PreviewTarget,
    port: Optional[PreviewPort] = None,
) -> Optional[Path]:
    """Render code in a sandboxed preview.

    Returns the page path, or None when there is no code. The caller shows
    the empty-state placeholder in that case.

    Raises:
        PreviewError: If the port could not write or open the page
    """
    if not code or not code.strip():
        return None
    port = port or get_preview_port(target)
    return port.show(code)
