# upstream failure kinds; routes and services only ever see these,
# never raw httpx exceptions

from typing import Any, Dict, List, Optional

from relay.core.errors import RelayError

Message = Dict[str, Any]
Messages = List[Message]


class ProviderError(RelayError):
    status_code = 500


class UpstreamHTTPError(ProviderError):
    def __init__(self, upstream_status: int, body: str) -> None:
        self.upstream_status = upstream_status
        self.body = body
        super().__init__(f"Upstream error {upstream_status}: {body}")


class UpstreamTimeout(ProviderError):
    status_code = 504


class RunNotCompleted(ProviderError):
    def __init__(self, status: str, detail: Optional[str] = None) -> None:
        self.status = status
        msg = f"Assistant run ended with status '{status}'"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
