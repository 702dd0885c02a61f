"""
Flipboard Main Application

This is the entry point for the Flipboard service.
It wires together the board manager, the WebSocket relay and the API routes.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from managers.board_manager import BoardManager
from managers.websocket_manager import WebSocketManager
from routes import setup_board_routes, setup_system_routes
from splitflap import BoardConfig, CanvasSize

from config import (
    BOARD_CONFIG_PATH,
    STEP_INTERVAL,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_PORT,
    PRODUCTION_PORT,
)

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def load_board_config(path: str = BOARD_CONFIG_PATH) -> BoardConfig:
    """Load board config from YAML and apply environment overrides"""
    config = BoardConfig.from_yaml(path)

    if STEP_INTERVAL is not None:
        config.step_interval = float(STEP_INTERVAL)

    for issue in config.validate():
        logging.warning(f"Board config issue: {issue}")

    return config


def create_app(board_config: BoardConfig = None) -> FastAPI:
    """Create the FastAPI application with its own board and lifespan"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan management for FastAPI application.
        Handles startup and shutdown tasks.
        """
        # STARTUP
        logging.info("Starting Flipboard application...")

        try:
            config = board_config or load_board_config()

            websocket_manager = WebSocketManager()
            board_manager = BoardManager(config, websocket_manager)
            await board_manager.start(CanvasSize(DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT))

            logging.info("Setting up API routes...")
            app.include_router(setup_board_routes(board_manager, websocket_manager))
            app.include_router(setup_system_routes(board_manager, websocket_manager))

            app.state.board_manager = board_manager
            app.state.websocket_manager = websocket_manager

            logging.info("Flipboard application started successfully!")

        except Exception as e:
            logging.error(f"Failed to start Flipboard: {e}")
            import traceback
            logging.error(f"Traceback: {traceback.format_exc()}")
            raise

        yield  # Application is running

        # SHUTDOWN
        logging.info("Shutting down Flipboard application...")

        try:
            await board_manager.stop()
            logging.info("Flipboard application shut down successfully!")
        except Exception as e:
            logging.error(f"Error during shutdown: {e}")

    return FastAPI(
        title="Flipboard",
        description="Split-flap display engine with live board events",
        version="1.0.0",
        lifespan=lifespan
    )


# Create FastAPI app with lifespan
app = create_app()


if __name__ == "__main__":
    import argparse
    import uvicorn

    # Parse command line arguments
    parser = argparse.ArgumentParser(description='Flipboard - Split-flap display server')
    parser.add_argument('--production', action='store_true',
                        help='Run in production mode (port 80)')
    parser.add_argument('--port', type=int, default=None,
                        help='Custom port (overrides --production)')
    args = parser.parse_args()

    # Determine port
    if args.port:
        port = args.port
    elif args.production:
        port = PRODUCTION_PORT
    else:
        port = DEFAULT_PORT

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        log_level="info",
        reload=False
    )
