"""
Run the tides API server.

    python -m app --hostname 0.0.0.0 --port 8080
"""
import argparse

import uvicorn

from .config import LOG_LEVEL, setup_logging


def main(argv=None):
    parser = argparse.ArgumentParser(description="Current Tides API server")
    parser.add_argument("-H", "--hostname", default="127.0.0.1", help="Address to bind (default: 127.0.0.1)")
    parser.add_argument("-p", "--port", type=int, default=8080, help="Port to listen on (default: 8080)")
    args = parser.parse_args(argv)

    setup_logging()
    uvicorn.run(
        "app.main:app",
        host=args.hostname,
        port=args.port,
        log_level=LOG_LEVEL.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
