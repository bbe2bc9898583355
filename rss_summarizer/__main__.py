"""Run the API server with uvicorn: python -m rss_summarizer"""

import uvicorn

from .config import config


def main():
    uvicorn.run("rss_summarizer.server:app", host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    main()
