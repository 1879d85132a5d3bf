"""Run the API with uvicorn: `python -m paymentflow`."""

import uvicorn

from paymentflow.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("paymentflow.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
