from functools import lru_cache

from fastapi.responses import JSONResponse

from validator_dash.config import Settings, get_settings
from validator_dash.upstream import UpstreamClient

NOT_ALLOWED_METHODS = ["POST", "PUT", "PATCH", "DELETE"]


def settings_dependency() -> Settings:
    return get_settings()


@lru_cache(maxsize=1)
def upstream_dependency() -> UpstreamClient:
    return UpstreamClient(get_settings())


def method_not_allowed(key: str = "error") -> JSONResponse:
    return JSONResponse(status_code=405, content={key: "Method not allowed"})
