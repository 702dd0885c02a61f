"""
Board Manager

Owns the split-flap grid controller and its renderer, feeds it canvas and
content changes and relays board events to WebSocket clients.

The relay never lets a slow client pile up events: flap updates still
waiting to be sent are coalesced per cell, and a backlog that reaches
max_pending_events is replaced by a single full board_state message.
"""
import asyncio
import io
import logging
from collections import OrderedDict
from typing import Optional

from splitflap import BoardConfig, BoardRenderer, CanvasSize, DisplayContent, GridController
from splitflap.events import BoardEvent, CellUpdated
from splitflap.grid import GridCapacityError

BOARD_STATE_EVENT = "board_state"


class BoardManager:
    """Manages the flip board state and event publishing"""

    def __init__(self, config: BoardConfig, websocket_manager=None, max_pending_events: int = 10000):
        self.config = config
        self.websocket_manager = websocket_manager
        self.max_pending_events = max_pending_events

        self.controller = GridController(config)
        self.renderer = BoardRenderer(config)

        # Event relay; keys are ('cell', segment, index) or ('geometry', segment)
        self._pending: OrderedDict = OrderedDict()
        self._segment = 0
        self._resync_pending = False
        self._wakeup: Optional[asyncio.Event] = None
        self._drained: Optional[asyncio.Event] = None
        self._publisher_task: Optional[asyncio.Task] = None
        self._unsubscribe = None

    async def start(self, canvas_size: CanvasSize) -> None:
        """Start relaying events and lay out the initial canvas"""
        self._wakeup = asyncio.Event()
        self._drained = asyncio.Event()
        self._drained.set()
        self._unsubscribe = self.controller.subscribe(self._enqueue_event)
        self._publisher_task = asyncio.create_task(self._publish_events())

        self.controller.update_canvas_size(canvas_size)
        logging.info(f"Board started on {canvas_size.width}x{canvas_size.height} canvas "
                     f"({self.controller.geometry.capacity} cells)")

    def _enqueue_event(self, event: BoardEvent) -> None:
        if self._wakeup is None or self._resync_pending:
            return

        if isinstance(event, CellUpdated):
            key = ('cell', self._segment, event.index)
        else:
            # Later flap updates must not be merged into ones sent before a geometry change
            self._segment += 1
            key = ('geometry', self._segment)

        if key not in self._pending and len(self._pending) >= self.max_pending_events:
            logging.warning(f"Board event backlog reached {len(self._pending)}, "
                            f"sending full board state instead")
            self._pending.clear()
            self._resync_pending = True
        else:
            # An existing key keeps its place and carries the newest symbol
            self._pending[key] = event

        self._drained.clear()
        self._wakeup.set()

    async def _publish_events(self) -> None:
        """Background task that broadcasts board events to WebSocket clients"""
        logging.info("Board event publisher started")

        while True:
            try:
                await self._wakeup.wait()
                self._wakeup.clear()

                while self._pending or self._resync_pending:
                    if self._resync_pending:
                        self._resync_pending = False
                        await self._broadcast(BOARD_STATE_EVENT, self.get_state())
                        continue
                    _, event = self._pending.popitem(last=False)
                    await self._broadcast(event.event_type, event.to_dict())

                self._drained.set()
            except asyncio.CancelledError:
                logging.info("Board event publisher stopped")
                break

    async def _broadcast(self, event_type: str, data: dict) -> None:
        if not self.websocket_manager:
            return
        try:
            await self.websocket_manager.broadcast(event_type, data)
        except Exception as e:
            logging.error(f"Error publishing {event_type} event: {e}")

    def pending_event_count(self) -> int:
        """Number of board events waiting for the publisher"""
        return len(self._pending) + (1 if self._resync_pending else 0)

    async def flush(self) -> None:
        """Wait until every queued event has been handed to the clients"""
        if self._drained is not None:
            await self._drained.wait()

    async def set_content(self, content: DisplayContent) -> bool:
        """
        Show new content on the board

        Raises:
            GridCapacityError: the content scale would need too many flaps
        """
        try:
            self.controller.update_content(content)
            details = content.to_dict()
            logging.info(f"Board content updated ({len(content.text)} chars, "
                         f"{details['horizontal_alignment']}/{details['vertical_alignment']}, "
                         f"scale {content.scale})")
            return True
        except GridCapacityError as e:
            logging.warning(f"Rejected board content: {e}")
            raise
        except Exception as e:
            logging.error(f"Failed to update board content: {e}")
            return False

    async def set_canvas_size(self, canvas_size: CanvasSize) -> bool:
        """
        Apply a settled canvas size

        Raises:
            GridCapacityError: the canvas would need too many flaps
        """
        try:
            self.controller.update_canvas_size(canvas_size)
            return True
        except GridCapacityError as e:
            logging.warning(f"Rejected canvas size: {e}")
            raise
        except Exception as e:
            logging.error(f"Failed to update canvas size: {e}")
            return False

    async def settle(self) -> bool:
        """Stop all flipping and show every target immediately"""
        try:
            self.controller.force_update()
            return True
        except Exception as e:
            logging.error(f"Failed to settle board: {e}")
            return False

    def get_state(self) -> dict:
        """Current board state for clients"""
        controller = self.controller
        return {
            'canvas_size': {'width': controller.canvas_size.width, 'height': controller.canvas_size.height},
            'geometry': controller.geometry.to_dict(),
            'content': controller.content.to_dict(),
            'cells': controller.snapshot(),
            'targets': controller.targets(),
            'animating': controller.is_any_animation_active(),
        }

    def render_png(self) -> bytes:
        """Render the board as PNG bytes"""
        img = self.renderer.render(self.controller)
        buffer = io.BytesIO()
        img.save(buffer, format='PNG', compress_level=1)
        return buffer.getvalue()

    async def stop(self) -> None:
        """Stop the event relay and tear down the board"""
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

        if self._publisher_task:
            self._publisher_task.cancel()
            try:
                await self._publisher_task
            except asyncio.CancelledError:
                pass
            self._publisher_task = None

        self.controller.close()
        self._pending.clear()
        self._resync_pending = False
        self._wakeup = None
        if self._drained is not None:
            self._drained.set()
        logging.info("Board stopped")
