"""物理索引命名模块."""

from .exceptions import NameResolutionError
from .models import SUFFIX_SEPARATOR, TIMESTAMP_FORMAT, NamingPolicy
from .tool import NameResolver

__all__ = [
    "NameResolver",
    "NamingPolicy",
    "NameResolutionError",
    "SUFFIX_SEPARATOR",
    "TIMESTAMP_FORMAT",
]
