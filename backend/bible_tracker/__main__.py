import logging

import uvicorn

from bible_tracker.core.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("bible_tracker.main:create_app", factory=True, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
