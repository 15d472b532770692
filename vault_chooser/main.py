"""
Main application: FastAPI app exposing chooser sessions, plus a logging demo.
"""

import asyncio
import logging
import sys

from fastapi import FastAPI

from vault_chooser.api.routers import router as api_router
from vault_chooser.config.settings import settings
from vault_chooser.container import container
from vault_chooser.exceptions import BaseAppError

# Create FastAPI app
app = FastAPI(title="Vault Chooser API")
app.include_router(api_router)

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Get logger for this module
logger = logging.getLogger(__name__)


async def demonstrate_navigation() -> None:
    """Walk one level into the configured tree and log what a host would render."""
    logger.info("=" * 60)
    logger.info("NAVIGATION DEMONSTRATION")
    logger.info("=" * 60)

    session = container.create_chooser_session()
    state = await session.initialize()
    if state.listing_error:
        logger.error(f"Error listing root: {state.listing_error}")
        return

    logger.info(f"Found {len(state.entries)} entries at {state.current_directory}:")
    for entry in state.entries[:10]:
        logger.info(f"  • {entry.name} ({entry.kind.value})")

    directory = next((e for e in state.entries if e.is_directory), None)
    if directory is not None:
        state = await session.enter_directory(directory)
        trail = " > ".join(b.label for b in state.breadcrumbs)
        logger.info(f"Entered {state.current_directory} (breadcrumbs: {trail})")

    session.open_prompt()
    session.update_filename_draft("new-vault")
    target = session.submit_prompt()
    logger.info(f"Drafted new target: {target}")
    session.abort()


def main():
    """Main application entry point."""
    try:
        asyncio.run(demonstrate_navigation())
    except BaseAppError as e:
        logger.error(f"Application error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
