"""Health-check payload."""

from nz_invest import __version__
from nz_invest.schemas.ping import PingResponse


def build_ping() -> PingResponse:
    return PingResponse(message="pong", version=__version__)
