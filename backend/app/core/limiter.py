"""Rate limiter singleton, keyed by client address. Only login is limited."""
from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, headers_enabled=False)
