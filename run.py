import logging
from typing import Optional

import uvicorn

from checkcx.api.server import create_app
from checkcx.container import Container
from checkcx.db.engine import init_db

logger = logging.getLogger("checkcx")


def configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    logging.getLogger("apscheduler").setLevel(logging.WARNING)


def main(container: Optional[Container] = None):
    container = container or Container()
    env = container.config()
    configure_logging(str(env.get("CHECKCX_LOG_LEVEL") or "INFO"))

    init_db(container.db_engine())

    theme_store = container.theme_store()
    theme_store.start()
    storage = container.preference_storage()
    watch_interval = int(env.get("CHECKCX_STORAGE_WATCH_INTERVAL") or 0)
    if watch_interval > 0:
        storage.start_watching(watch_interval)

    app = create_app(container)
    host = env.get("CHECKCX_HOST") or "127.0.0.1"
    port = int(env.get("CHECKCX_PORT") or 8000)
    logger.info("check-cx admin listening on %s:%s", host, port)
    try:
        uvicorn.run(app, host=host, port=port)
    finally:
        storage.stop_watching(wait=False)
        theme_store.close()


if __name__ == '__main__':
    main()
