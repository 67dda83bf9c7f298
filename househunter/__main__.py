"""House Hunter entrypoint.

Run with:
  python -m househunter
"""

import uvicorn

from househunter.core.config import Settings


def main() -> None:
    settings = Settings()
    uvicorn.run(
        "househunter.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENV == "local",
    )


if __name__ == "__main__":
    main()
