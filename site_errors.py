"""Custom exceptions for the site build."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class SiteBuildError(Exception):
    """Base exception for build failures. Aborts the whole run."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{message}: {self.path}"
        super().__init__(message)


class SourceReadError(SiteBuildError):
    """Raised when a vault file or template asset cannot be read."""
    pass


class OutputWriteError(SiteBuildError):
    """Raised when the output tree cannot be created or written."""
    pass


class FrontmatterError(SiteBuildError):
    """Raised when a frontmatter block does not parse into the expected shape."""
    pass


class TemplateRenderError(SiteBuildError):
    """Raised when a template is missing or rejects its context."""
    pass
