from mediaproxy.domain.enums.proxy_outcome import ProxyOutcome
from mediaproxy.domain.enums.stream_kind import StreamKind
__all__ = [
    "ProxyOutcome",
    "StreamKind",
]
