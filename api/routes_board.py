"""
Board Routes

Handles split-flap content, canvas size, state inspection and live events.
"""
import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import Response

from models.request_models import BoardContentRequest, CanvasSizeRequest
from splitflap import GridCapacityError

if TYPE_CHECKING:
    from managers.board_manager import BoardManager
    from managers.websocket_manager import WebSocketManager


def setup_board_routes(board_manager: 'BoardManager',
                       websocket_manager: 'WebSocketManager') -> APIRouter:
    """
    Setup board routes with dependency injection

    Args:
        board_manager: BoardManager instance owning the flap grid
        websocket_manager: WebSocketManager used for live board events

    Returns:
        Configured APIRouter
    """
    router = APIRouter()

    @router.post("/board/content")
    async def set_content(request: BoardContentRequest):
        """Show new text on the board"""
        try:
            success = await board_manager.set_content(request.to_content())
        except GridCapacityError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if not success:
            raise HTTPException(status_code=500, detail="Failed to update board content")
        return {
            "message": "Board content updated",
            "targets": board_manager.controller.targets(),
        }

    @router.get("/board/content")
    async def get_content():
        """Get the content currently laid out on the board"""
        return board_manager.controller.content.to_dict()

    @router.post("/board/canvas")
    async def set_canvas_size(request: CanvasSizeRequest):
        """Apply a settled canvas size reported by the display"""
        try:
            success = await board_manager.set_canvas_size(request.to_canvas_size())
        except GridCapacityError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if not success:
            raise HTTPException(status_code=500, detail="Failed to update canvas size")
        return board_manager.controller.geometry.to_dict()

    @router.get("/board/geometry")
    async def get_geometry():
        """Get the current grid geometry"""
        return board_manager.controller.geometry.to_dict()

    @router.get("/board/cells")
    async def get_cells():
        """Get every cell's displayed and target symbol"""
        return board_manager.get_state()

    @router.post("/board/settle")
    async def settle_board():
        """Skip the remaining flips and show all targets"""
        success = await board_manager.settle()
        if not success:
            raise HTTPException(status_code=500, detail="Failed to settle board")
        return {"status": "success", "cells": board_manager.controller.snapshot()}

    @router.get("/board/snapshot.png")
    async def get_snapshot():
        """Render the board as it currently looks"""
        try:
            return Response(content=board_manager.render_png(), media_type="image/png")
        except Exception as e:
            logging.error(f"Failed to render board snapshot: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    @router.websocket("/board/ws")
    async def board_events(websocket: WebSocket):
        """Stream geometry and flap updates"""
        await websocket_manager.connect(websocket, board_manager.get_state())
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            await websocket_manager.disconnect(websocket)

    return router
