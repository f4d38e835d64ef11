import os
import sys
import logging

import uvicorn

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

# Add the src directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
src_path = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)


if __name__ == "__main__":
    from dentalvoice.core.config import get_settings

    settings = get_settings()
    port = int(os.environ.get("PORT", settings.port))
    logger.info(f"Starting {settings.app_name} on {settings.host}:{port} ({settings.app_env})")
    uvicorn.run(
        "dentalvoice.app:app",
        host=settings.host,
        port=port,
        log_level=settings.logging.level.lower(),
        reload=settings.is_development and settings.debug,
    )
