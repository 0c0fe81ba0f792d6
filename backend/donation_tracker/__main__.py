"""Server entry point — `python -m donation_tracker` or the `donation-tracker` script."""

import uvicorn

from donation_tracker.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "donation_tracker.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
