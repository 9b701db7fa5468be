import logging
import os

from config.settings import settings

# Đảm bảo thư mục log tồn tại
os.makedirs(settings.LOG_DIR, exist_ok=True)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[
        logging.FileHandler(os.path.join(settings.LOG_DIR, "log.txt"), encoding="utf-8")
    ],
)

logger = logging.getLogger("bugless")
