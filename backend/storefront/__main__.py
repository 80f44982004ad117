"""Run the API with uvicorn on the configured host and port: python -m storefront"""

import uvicorn

from storefront.config import settings


def main() -> None:
    uvicorn.run(
        "storefront.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
