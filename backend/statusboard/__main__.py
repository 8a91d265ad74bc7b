import uvicorn

from statusboard.config import settings
from statusboard.main import app


def main() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
