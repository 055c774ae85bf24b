"""
Editing session for one source image.

The session owns every piece of mutable state: the untouched source, the
base layer (processed image), the mask layer (pending manual marks), both
undo stacks and the composited frame. Every operation runs synchronously
and leaves `frame` up to date before returning.

Classes:
    StrokeSession: One pointer-down to pointer-up gesture
    OverrideResult: Outcome of an external full-raster override
    OverrideRequest: Handle on an outstanding override call
    EditorSession: Owner of layers, history and settings

Example:
    >>> session = EditorSession(Image.open("photo.jpg"))
    >>> session.run_removal(tolerance=20, smoothing=2)
    >>> with session.begin_stroke() as stroke:
    ...     stroke.paint_points([(40, 40), (42, 41), (45, 43)])
    >>> session.apply_mask()
    >>> session.undo()
    >>> session.save("out.png")
"""

import logging
from concurrent import futures
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Tuple, Union

from BE_Libs.constants import (
    DEFAULT_EXPORT_NAME,
    DEFAULT_OUTPUT_FORMAT,
    LAYER_BASE,
    LAYER_MASK,
    PREVIEW_MODES,
    PREVIEW_RESULT,
)
from BE_Libs.LayersLib.layer_compositor import LayerCompositor
from BE_Libs.LayersLib.manual_editor import apply_mask, erase_circle, paint_circle
from BE_Libs.RasterLib.raster import Raster
from BE_Libs.RemovalLib import get_remover
from BE_Libs.SessionLib.editor_settings import EditorSettings
from BE_Libs.SessionLib.history_manager import HistoryManager, UndoResult

logger = logging.getLogger(__name__)

OverrideService = Callable[[bytes], Any]


def to_raster(image: Any) -> Raster:
    """
    Coerce an image source into a new Raster.

    Accepts a Raster (copied), a PIL Image, encoded image bytes, or a path
    to an image file.

    Raises:
        TypeError: If the object is not a supported image source
        ValueError: If the data is malformed or has a zero dimension
    """
    if isinstance(image, Raster):
        return image.copy()
    if isinstance(image, (bytes, bytearray)):
        return Raster.from_bytes(bytes(image))
    if isinstance(image, (str, Path)):
        return Raster.from_file(image)
    if hasattr(image, "convert"):
        return Raster.from_image(image)
    raise TypeError(f"Unsupported image source: {type(image)}")


class StrokeSession:
    """
    A single brush gesture.

    Created by EditorSession.begin_stroke(), which has already pushed the
    pre-stroke mask snapshot. Points can be painted one at a time as pointer
    events arrive, or consumed from any iterable. Usable as a context
    manager so the stroke always ends.
    """

    def __init__(self, session: "EditorSession", radius: float, tool_mode: str, two_layer: bool):
        self._session = session
        self.radius = radius
        self.tool_mode = tool_mode
        self.two_layer = two_layer
        self.points_painted = 0
        self.active = True

    def paint(self, x: float, y: float) -> None:
        """Stamp the brush at (x, y) and recomposite."""
        if not self.active:
            raise RuntimeError("Cannot paint on a stroke session that has ended")
        self._session._paint(x, y, self.radius, self.tool_mode, self.two_layer)
        self.points_painted += 1

    def paint_points(self, points: Iterable[Tuple[float, float]]) -> int:
        """Paint every point of an iterable; returns how many were painted."""
        count = 0
        for x, y in points:
            self.paint(x, y)
            count += 1
        return count

    def end(self) -> None:
        if not self.active:
            return
        self.active = False
        self._session._end_stroke(self)

    def __enter__(self) -> "StrokeSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.end()


@dataclass
class OverrideResult:
    """Outcome of an override request.

    Attributes:
        success: True if a replacement raster was produced
        raster: The replacement raster (success only)
        error: User-facing failure message (failure only)
    """
    success: bool
    raster: Optional[Raster] = None
    error: Optional[str] = None


class OverrideRequest:
    """Handle on an outstanding external override call."""

    def __init__(self, future: futures.Future):
        self._future = future

    def done(self) -> bool:
        return self._future.done()

    def cancel(self) -> bool:
        """Try to cancel; only succeeds if the call has not started yet."""
        return self._future.cancel()

    def cancelled(self) -> bool:
        return self._future.cancelled()

    def wait(self, timeout: Optional[float] = None) -> OverrideResult:
        """
        Block until the call completes and convert its outcome.

        Service errors and undecodable replies become failure results.

        Raises:
            concurrent.futures.TimeoutError: If timeout expires first
        """
        try:
            reply = self._future.result(timeout)
        except futures.CancelledError:
            return OverrideResult(success=False, error="Override request was cancelled")
        except futures.TimeoutError:
            raise
        except Exception as e:
            return OverrideResult(success=False, error=f"Override service failed: {e}")

        if reply is None:
            return OverrideResult(success=False, error="Override service returned no image")

        try:
            raster = to_raster(reply)
        except (TypeError, ValueError) as e:
            return OverrideResult(success=False, error=f"Override service returned an invalid image: {e}")

        return OverrideResult(success=True, raster=raster)


class EditorSession:
    """
    Layered background-removal session for one source image.

    Attributes:
        source: Untouched copy of the loaded image
        base: Current processed image
        mask: Pending manual marks (transparent where nothing is marked)
        history: Undo stacks for both layers
        settings: Tunable parameters. The object passed in is shared, not
                  copied, so callers can change brush or tool settings
                  between strokes through it
        frame: Latest composited frame for display
    """

    def __init__(
        self,
        image: Any,
        settings: Optional[EditorSettings] = None,
        on_processed_image: Optional[Callable[[Raster], None]] = None,
        on_mask_cleared: Optional[Callable[[], None]] = None,
    ):
        self.settings = settings if settings is not None else EditorSettings()
        self.on_processed_image = on_processed_image
        self.on_mask_cleared = on_mask_cleared
        self.history = HistoryManager()
        self._stroke: Optional[StrokeSession] = None
        self._pending_override: Optional[OverrideRequest] = None
        self._executor: Optional[futures.ThreadPoolExecutor] = None
        self.load_image(image)

    # ------------------------------------------------------------------
    # Loading and replacement
    # ------------------------------------------------------------------

    def load_image(self, image: Any) -> None:
        """
        Start over from a new source image.

        Both layers and both history stacks are re-created. Invalid input is
        rejected before any state changes.
        """
        source = to_raster(image)
        self._drop_active_stroke()

        self.source = source
        self.base = source.copy()
        self.mask = Raster.blank(source.width, source.height)
        self.history.seed(self.base)
        self._recomposite()

        logger.info(f"Loaded {source.width}x{source.height} image")
        self._emit_processed()

    def override_base(self, image: Any) -> None:
        """
        Replace the base layer unconditionally (external AI result).

        The replacement may have a different size. The mask is cleared and
        history restarts from the new base.
        """
        raster = to_raster(image)
        self._drop_active_stroke()

        self.base = raster
        self.mask = Raster.blank(raster.width, raster.height)
        self.history.seed(self.base)
        self._recomposite()

        logger.info(f"Base replaced by {raster.width}x{raster.height} override")
        self._emit_mask_cleared()
        self._emit_processed()

    # ------------------------------------------------------------------
    # Automatic removal
    # ------------------------------------------------------------------

    def run_removal(
        self,
        algorithm: Optional[str] = None,
        tolerance: Optional[float] = None,
        smoothing: Optional[float] = None,
        from_source: bool = True,
    ) -> int:
        """
        Run an automatic remover and commit the result.

        Args:
            algorithm: 'FLOOD_FILL' or 'BORDER_MODEL' (default from settings)
            tolerance: 0-100 (default from settings, not validated)
            smoothing: 0-10 (default from settings)
            from_source: Start from the untouched source image (default) so
                         repeated runs never compound; False works on the
                         current base instead

        Returns:
            Number of pixels made transparent
        """
        self._require_no_stroke("run a removal")

        algorithm = algorithm if algorithm is not None else self.settings.algorithm
        tolerance = tolerance if tolerance is not None else self.settings.tolerance
        smoothing = smoothing if smoothing is not None else self.settings.smoothing

        remover = get_remover(algorithm)
        target = self.source.copy() if from_source else self.base.copy()
        cleared = remover.run(target, tolerance, smoothing)

        self.base = target
        if self.mask.size != target.size:
            self._reset_mask()
        self.history.record_base(self.base)
        self._recomposite()

        logger.info(
            f"{remover.ALGORITHM} removal cleared {cleared} pixels "
            f"(tolerance={tolerance}, smoothing={smoothing})"
        )
        self._emit_processed()
        return cleared

    # ------------------------------------------------------------------
    # Manual editing
    # ------------------------------------------------------------------

    def begin_stroke(self) -> StrokeSession:
        """
        Start a brush gesture.

        In two-layer mode the current mask is pushed onto the mask history
        before anything is painted, so one undo removes the whole stroke.
        The snapshot is pushed even if the stroke ends up painting nothing.

        Raises:
            RuntimeError: If a stroke is already active
        """
        self._require_no_stroke("begin a new stroke")

        two_layer = self.settings.two_layer
        if two_layer:
            self.history.record_mask(self.mask)

        self._stroke = StrokeSession(
            self,
            radius=self.settings.brush_radius,
            tool_mode=self.settings.tool_mode,
            two_layer=two_layer,
        )
        return self._stroke

    def _paint(self, x: float, y: float, radius: float, tool_mode: str, two_layer: bool) -> None:
        if two_layer:
            paint_circle(self.mask, x, y, radius, tool_mode)
        else:
            erase_circle(self.base, x, y, radius)
        self._recomposite()

    def _end_stroke(self, stroke: StrokeSession) -> None:
        if self._stroke is stroke:
            self._stroke = None
        if not stroke.two_layer:
            # Single-layer strokes are committed straight into the base
            self.history.record_base(self.base)
            self._emit_processed()
        logger.debug(f"Stroke ended after {stroke.points_painted} points")

    def apply_mask(self) -> None:
        """
        Commit pending marks: erase them from the base, clear the mask and
        its history, and push the new base state.
        """
        self._require_no_stroke("apply the mask")

        self.base = apply_mask(self.base, self.mask)
        self._reset_mask()
        self.history.record_base(self.base)
        self._recomposite()

        logger.info("Applied mask to base")
        self._emit_processed()

    @property
    def has_pending_edits(self) -> bool:
        return self.history.has_pending_mask

    # ------------------------------------------------------------------
    # Undo
    # ------------------------------------------------------------------

    def undo(self) -> UndoResult:
        """
        Undo one step: the latest stroke if manual edits are pending,
        otherwise the latest committed base state. No-op when neither
        history has anything to undo.

        The returned raster is a copy; editing it never touches the live
        layers.
        """
        self._require_no_stroke("undo")

        result = self.history.undo()

        if result.layer == LAYER_MASK:
            self.mask = result.raster.copy()
            self._recomposite()
            if not result.mask_pending:
                self._emit_mask_cleared()
        elif result.layer == LAYER_BASE:
            self.base = result.raster.copy()
            if self.mask.size != self.base.size:
                self.mask = Raster.blank(self.base.width, self.base.height)
            self._recomposite()
            self._emit_processed()
        else:
            logger.debug("Nothing to undo")

        return result

    # ------------------------------------------------------------------
    # External override
    # ------------------------------------------------------------------

    def request_override(
        self,
        service: OverrideService,
        executor: Optional[futures.Executor] = None,
    ) -> OverrideRequest:
        """
        Send the current base to an external service in the background.

        Args:
            service: Callable receiving PNG bytes and returning an image
                     (encoded bytes, PIL Image or Raster)
            executor: Executor to run the call on (default: a private
                      single-worker thread pool)

        Returns:
            Request handle; pass it to finish_override() to apply the result

        Raises:
            RuntimeError: If another override is still outstanding
        """
        if self._pending_override is not None and not self._pending_override.done():
            raise RuntimeError("An override request is already outstanding")

        if executor is None:
            if self._executor is None:
                self._executor = futures.ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="bg-eraser-override"
                )
            executor = self._executor

        payload = self.base.to_png_bytes()
        request = OverrideRequest(executor.submit(service, payload))
        self._pending_override = request
        logger.debug(f"Override requested with {len(payload)} byte payload")
        return request

    def finish_override(self, request: OverrideRequest, timeout: Optional[float] = None) -> OverrideResult:
        """
        Wait for an override request and apply it on success.

        On failure the session is left exactly as it was and the failure
        result carries a user-facing message.
        """
        result = request.wait(timeout)
        if self._pending_override is request:
            self._pending_override = None

        if result.success:
            self.override_base(result.raster)
        else:
            logger.warning(f"Background override failed: {result.error}")
        return result

    def close(self) -> None:
        """
        Cancel any outstanding override request and release the private
        override executor, if one was created.

        A request whose service call is already running cannot be
        cancelled; its result is discarded unless finish_override() is
        still called with it.
        """
        if self._pending_override is not None:
            if self._pending_override.cancel():
                logger.debug("Cancelled outstanding override request")
            self._pending_override = None
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    def __enter__(self) -> "EditorSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Display and export
    # ------------------------------------------------------------------

    def set_preview_mode(self, mode: str) -> None:
        if mode not in PREVIEW_MODES:
            raise ValueError(f"Unknown preview mode: {mode}. Valid modes: {', '.join(PREVIEW_MODES)}")
        self.settings.preview_mode = mode
        self._recomposite()

    def render(self, mode: Optional[str] = None) -> Raster:
        """Composite base and mask (default mode from settings)."""
        return LayerCompositor.render(self.base, self.mask, mode or self.settings.preview_mode)

    def export_png(self) -> bytes:
        """
        Encode the final result as PNG.

        Pending marks are shown as they would be applied (PREVIEW mode),
        never as the edit overlay.
        """
        return self.render(PREVIEW_RESULT).to_png_bytes()

    def save(self, path: Union[str, Path]) -> Path:
        """
        Write the final result as a PNG file.

        Args:
            path: Output file, or an existing directory to write
                  'processed_image.png' into

        Returns:
            Path of the written file
        """
        path = Path(path)
        if path.is_dir():
            path = path / f"{DEFAULT_EXPORT_NAME}.png"
        self.render(PREVIEW_RESULT).to_image().save(path, format=DEFAULT_OUTPUT_FORMAT)
        logger.info(f"Saved result to {path}")
        return path

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _recomposite(self) -> None:
        self.frame = self.render()

    def _reset_mask(self) -> None:
        self.mask = Raster.blank(self.base.width, self.base.height)
        self.history.clear_mask()
        self._emit_mask_cleared()

    def _require_no_stroke(self, action: str) -> None:
        if self._stroke is not None and self._stroke.active:
            raise RuntimeError(f"Cannot {action} while a stroke session is active")

    def _drop_active_stroke(self) -> None:
        if self._stroke is not None:
            self._stroke.active = False
            self._stroke = None

    def _emit_processed(self) -> None:
        if self.on_processed_image is not None:
            self.on_processed_image(self.base.copy())

    def _emit_mask_cleared(self) -> None:
        if self.on_mask_cleared is not None:
            self.on_mask_cleared()
