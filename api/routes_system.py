"""
System Routes

Handles health checks and service status endpoints.
"""
from datetime import datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter

if TYPE_CHECKING:
    from managers.board_manager import BoardManager
    from managers.websocket_manager import WebSocketManager

VERSION = "1.0.0"


def setup_system_routes(board_manager: 'BoardManager',
                        websocket_manager: 'WebSocketManager') -> APIRouter:
    """
    Setup system routes with dependency injection

    Args:
        board_manager: BoardManager instance for board status
        websocket_manager: WebSocketManager for connection counts

    Returns:
        Configured APIRouter
    """
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "version": VERSION
        }

    @router.get("/status")
    async def get_status():
        """Get board and connection status"""
        geometry = board_manager.controller.geometry
        return {
            "timestamp": datetime.now().isoformat(),
            "board": {
                "columns": geometry.columns,
                "rows": geometry.rows,
                "capacity": geometry.capacity,
                "animating": board_manager.controller.is_any_animation_active()
            },
            "websocket_connections": websocket_manager.get_connection_count(),
            "pending_events": board_manager.pending_event_count(),
            "step_interval": board_manager.config.step_interval
        }

    return router
