"""Entry point: python -m cohort_api"""

import uvicorn

from cohort_api.main import settings


def main() -> None:
    uvicorn.run("cohort_api.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
