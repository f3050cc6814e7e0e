"""Serve the eligibility API: `python -m cc_eligibility` or the `cc-eligibility` script."""

import uvicorn

from cc_eligibility.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "cc_eligibility.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
