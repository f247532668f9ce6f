import logging
import os
import socket

from titanic_dash.logging_config import configure_logging
from titanic_dash.ui.dash_app import create_dash_app

configure_logging()
logger = logging.getLogger("titanic_dash.app")

app = create_dash_app()
server = app.server

DEFAULT_PORT = 8050
PORT_SEARCH_SPAN = 100


def port_is_free(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        return s.connect_ex(("localhost", port)) != 0


def pick_port(preferred: int) -> int:
    """First free port at or above preferred; preferred itself if none is free."""
    return next(
        (p for p in range(preferred, preferred + PORT_SEARCH_SPAN) if port_is_free(p)),
        preferred,
    )


def main() -> None:
    preferred = int(os.getenv("PORT", str(DEFAULT_PORT)))
    port = pick_port(preferred)
    if port != preferred:
        logger.warning("Port taken, using next free one", extra={"preferred": preferred, "port": port})

    app.run(host="0.0.0.0", port=port, debug=os.getenv("DEBUG", "0") == "1")


if __name__ == "__main__":
    main()
