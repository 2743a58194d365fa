"""Run the service: python -m demo_user"""

from __future__ import annotations

import uvicorn

from demo_user.core.config import SETTINGS


def main() -> None:
    uvicorn.run(
        "demo_user.main:app",
        host=SETTINGS.host,
        port=SETTINGS.port,
        log_config=None,  # keep the root logger set up by demo_user.core.logging
    )


if __name__ == "__main__":
    main()
