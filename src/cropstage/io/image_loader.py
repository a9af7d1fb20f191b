"""Image size probing and off-thread load coordination.

The crop engine only needs an image's native size, so loading reads the
header with Pillow and never decodes pixel data.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor, Future
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Union

from PIL import Image, UnidentifiedImageError

from ..errors import ImageLoadError

_LOGGER = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, BinaryIO]

# EXIF orientation tag; values 5-8 describe a 90 degree rotation.
_ORIENTATION_TAG = 0x0112
_TRANSPOSED_ORIENTATIONS = frozenset({5, 6, 7, 8})


def _describe(source: ImageSource) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    if isinstance(source, bytes):
        return f"<{len(source)} bytes>"
    return repr(source)


def probe_image_size(source: ImageSource) -> tuple[int, int]:
    """Return the displayed ``(width, height)`` of *source*.

    *source* may be a filesystem path, raw encoded bytes or a binary stream.
    Images whose EXIF orientation rotates them by 90 degrees report their
    width and height swapped, matching how they are shown.

    Raises
    ------
    ImageLoadError
        If the source cannot be opened as an image, or is too large to
        open safely.
    """

    stream = BytesIO(source) if isinstance(source, bytes) else source
    try:
        with Image.open(stream) as img:
            width, height = img.size
            orientation = img.getexif().get(_ORIENTATION_TAG, 1)
    except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageLoadError(f"Could not read image {_describe(source)}: {exc}") from exc
    if width <= 0 or height <= 0:
        raise ImageLoadError(f"Image {_describe(source)} has no pixels")
    if orientation in _TRANSPOSED_ORIENTATIONS:
        width, height = height, width
    return int(width), int(height)


class ImageLoadCoordinator:
    """Run image probes on an executor and deliver only the newest result.

    Every :meth:`request` bumps a generation counter.  Finished probes are
    handed to *dispatch*, which must run them on the thread that owns the
    session and calls :meth:`request`; only there is the generation compared
    and the result delivered, so a slow load can never overwrite a newer
    image.

    Parameters
    ----------
    executor:
        Executor that runs :func:`probe_image_size`.
    on_loaded:
        Called with ``(source, width, height)`` for the newest request.
    on_failed:
        Called with ``(source, message)`` when the newest request fails.
    dispatch:
        Queues a completion callback onto the owning thread's event loop.
        It is invoked from the worker thread.
    """

    def __init__(
        self,
        executor: Executor,
        on_loaded: Callable[[ImageSource, int, int], None],
        on_failed: Callable[[ImageSource, str], None] | None = None,
        *,
        dispatch: Callable[[Callable[[], None]], None],
    ) -> None:
        if dispatch is None:
            raise ValueError("ImageLoadCoordinator needs a dispatch callable")
        self._executor = executor
        self._on_loaded = on_loaded
        self._on_failed = on_failed
        self._dispatch = dispatch
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def request(self, source: ImageSource) -> int:
        """Start probing *source* and return the request's generation."""

        self._generation += 1
        generation = self._generation
        _LOGGER.info("Loading image %s (generation %d)", _describe(source), generation)
        future = self._executor.submit(probe_image_size, source)
        future.add_done_callback(
            lambda done: self._dispatch(lambda: self._finish(source, generation, done))
        )
        return generation

    def cancel(self) -> None:
        """Invalidate every in-flight request."""

        self._generation += 1

    def _finish(self, source: ImageSource, generation: int, future: Future) -> None:
        if generation != self._generation:
            _LOGGER.debug("Discarding stale image load %s (generation %d)", _describe(source), generation)
            return
        try:
            width, height = future.result()
        except ImageLoadError as exc:
            self._fail(source, str(exc))
            return
        except Exception as exc:
            _LOGGER.exception("Unexpected error while probing %s", _describe(source))
            self._fail(source, f"Could not read image {_describe(source)}: {exc}")
            return
        self._on_loaded(source, width, height)

    def _fail(self, source: ImageSource, message: str) -> None:
        _LOGGER.warning("Image load failed: %s", message)
        if self._on_failed is not None:
            self._on_failed(source, message)


__all__ = ["ImageLoadCoordinator", "ImageSource", "probe_image_size"]
