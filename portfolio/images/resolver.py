"""Sequential image resolution across candidate paths and extensions.

An artwork carries an ordered list of extension-less candidate paths. The
resolver walks them candidate by candidate, trying each extension in a fixed
order, and stops at the first probe that succeeds. Each probe is one
existence check (a file lookup or an HTTP HEAD), gated on the failure of the
previous one. There is no backoff and no caching of misses between calls.

A ``ResolutionChain`` is the unit of work: ``step()`` performs exactly one
probe, so a caller can drive many chains from an event loop and stop any of
them with ``cancel()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Union
import logging
import os
import re

import requests
from PIL import Image, UnidentifiedImageError


logger = logging.getLogger(__name__)

EXTENSIONS = ("jpg", "jpeg", "JPEG", "webp", "gif", "GIF")
THUMBNAIL_EXTENSIONS = ("jpg", "JPG", "jpeg", "JPEG", "gif", "GIF")
FADE_IN_TRANSITION = "opacity 0.3s ease-in"

_KNOWN_EXT = re.compile(r"\.(jpg|jpeg|png|webp|gif)$", re.IGNORECASE)

Probe = Callable[[str], bool]

PENDING = "pending"
LOADED = "loaded"
FAILED = "error"
CANCELLED = "cancelled"


def strip_extension(path: str) -> str:
    """Remove a trailing image extension, if any."""
    return _KNOWN_EXT.sub("", path)


def iter_probe_paths(candidates: Iterable[str], extensions: Sequence[str] = EXTENSIONS) -> Iterator[str]:
    """Yield ``candidate.ext`` for every candidate (outer) and extension (inner)."""
    for candidate in candidates:
        if not candidate:
            continue
        base = strip_extension(candidate)
        for ext in extensions:
            yield f"{base}.{ext}"


# ---------------- Probers ----------------

class FileSystemProber:
    """Probe files on a local images tree.

    Args:
        root: Directory candidate paths are relative to; ``None`` uses them as-is.
        verify: If ``True``, also require Pillow to identify the file as an image.
    """

    def __init__(self, root: Optional[Union[str, Path]] = None, verify: bool = True):
        self.root = Path(root) if root is not None else None
        self.verify = verify

    def _full_path(self, path: str) -> Path:
        p = Path(path)
        if self.root is None or p.is_absolute():
            return p
        return self.root / p

    def __call__(self, path: str) -> bool:
        full = self._full_path(path)
        # Exact-case match: "x.JPEG" must not be satisfied by "x.jpeg" on
        # case-insensitive filesystems.
        try:
            if full.name not in os.listdir(full.parent):
                return False
        except OSError:
            return False
        if not full.is_file():
            return False
        if not self.verify:
            return True
        try:
            with Image.open(full) as im:
                im.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            logger.debug("Unreadable image %s: %s", full, e)
            return False
        return True


class HttpProber:
    """Probe images served over HTTP with a HEAD request per path.

    Args:
        base_url: Prefix joined to each candidate path.
        session: Optional ``requests.Session`` to reuse connections.
        timeout_s: Per-request timeout in seconds.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout_s: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout_s = float(timeout_s)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def __call__(self, path: str) -> bool:
        url = self.url_for(path)
        try:
            resp = self.session.head(url, timeout=self.timeout_s, allow_redirects=True)
        except requests.RequestException as e:
            logger.debug("Probe failed for %s: %s", url, e)
            return False
        return resp.status_code // 100 == 2


class StaticProber:
    """Probe against a fixed set of known paths (e.g. an asset manifest)."""

    def __init__(self, existing: Iterable[str]):
        self.existing: Set[str] = set(existing)
        self.calls: List[str] = []

    def __call__(self, path: str) -> bool:
        self.calls.append(path)
        return path in self.existing


# ---------------- Display target ----------------

@dataclass
class ImageTarget:
    """Display state of one image slot (the stand-in for an ``<img>`` element)."""
    alt: str = ""
    src: Optional[str] = None
    state: str = "idle"
    classes: Set[str] = field(default_factory=set)
    style: Dict[str, str] = field(default_factory=dict)

    def mark_loading(self) -> None:
        self.state = "loading"
        self.classes.add("image-loading")
        # hidden until loaded; mark_loaded fades in from here
        self.style["opacity"] = "0"

    def mark_loaded(self, src: str) -> None:
        self.src = src
        self.state = "loaded"
        self.classes.discard("image-loading")
        self.classes.add("image-loaded")
        self.style["transition"] = FADE_IN_TRANSITION
        self.style["opacity"] = "1"

    def mark_error(self) -> None:
        self.state = "error"
        self.classes.discard("image-loading")
        self.classes.add("image-error")


# ---------------- Resolution ----------------

class ResolutionChain:
    """One candidate-by-candidate, extension-by-extension resolution attempt.

    Args:
        probe: Callable returning ``True`` when a path exists.
        candidates: Extension-less candidate paths in priority order.
        target: Optional display target updated on success/failure.
        on_load: Called once with the winning path.
        on_error: Called once when every probe failed.
        extensions: Extension probe order.
    """

    def __init__(
        self,
        probe: Probe,
        candidates: Sequence[str],
        target: Optional[ImageTarget] = None,
        on_load: Optional[Callable[[str], None]] = None,
        on_error: Optional[Callable[[], None]] = None,
        extensions: Sequence[str] = EXTENSIONS,
    ):
        self.probe = probe
        self.candidates = list(candidates)
        self.target = target
        self.on_load = on_load
        self.on_error = on_error
        self.attempts: List[str] = []
        self.resolved: Optional[str] = None
        self.status = PENDING
        self._paths = iter_probe_paths(self.candidates, extensions)
        self._next = next(self._paths, None)
        if self.target is not None:
            self.target.mark_loading()

    @property
    def done(self) -> bool:
        return self.status != PENDING

    def step(self) -> str:
        """Run one probe and return the chain status afterwards.

        The chain fails in the same step as its last miss. With no paths at
        all, the first step fails without probing.
        """
        if self.done:
            return self.status
        path = self._next
        if path is None:
            self._fail()
            return self.status
        self.attempts.append(path)
        try:
            ok = bool(self.probe(path))
        except Exception as e:
            logger.debug("Probe raised for %s: %s", path, e)
            ok = False
        if ok:
            self._succeed(path)
            return self.status
        self._next = next(self._paths, None)
        if self._next is None:
            self._fail()
        return self.status

    def run(self) -> Optional[str]:
        """Step until done; returns the resolved path or ``None``."""
        while not self.done:
            self.step()
        return self.resolved

    def cancel(self) -> None:
        """Stop probing. No callback fires and the target is left as is."""
        if not self.done:
            self.status = CANCELLED
            logger.debug("Resolution cancelled after %d probe(s)", len(self.attempts))

    def _succeed(self, path: str) -> None:
        self.resolved = path
        self.status = LOADED
        if self.target is not None:
            self.target.mark_loaded(path)
        if self.on_load is not None:
            self.on_load(path)

    def _fail(self) -> None:
        self.status = FAILED
        logger.debug("No image found after %d probe(s) over %d candidate(s)", len(self.attempts), len(self.candidates))
        if self.target is not None:
            self.target.mark_error()
        if self.on_error is not None:
            self.on_error()


class ImageResolver:
    """Factory for resolution chains sharing one prober and extension order."""

    def __init__(self, probe: Probe, extensions: Sequence[str] = EXTENSIONS):
        self.probe = probe
        self.extensions = tuple(extensions)

    def chain(
        self,
        candidates: Sequence[str],
        target: Optional[ImageTarget] = None,
        on_load: Optional[Callable[[str], None]] = None,
        on_error: Optional[Callable[[], None]] = None,
    ) -> ResolutionChain:
        return ResolutionChain(self.probe, candidates, target, on_load, on_error, self.extensions)

    def resolve(
        self,
        candidates: Sequence[str],
        target: Optional[ImageTarget] = None,
        on_load: Optional[Callable[[str], None]] = None,
        on_error: Optional[Callable[[], None]] = None,
    ) -> ResolutionChain:
        """Run a chain to completion and return it."""
        chain = self.chain(candidates, target, on_load, on_error)
        chain.run()
        return chain

    def resolve_path(self, candidates: Sequence[str]) -> Optional[str]:
        return self.chain(candidates).run()
