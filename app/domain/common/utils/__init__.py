from .datetime import DateTimeUtils
from .ip import ClientIPExtractor
from .sanitization import DataSanitizer
from .string import StringUtils

__all__ = [
    'ClientIPExtractor',
    'DataSanitizer',
    'DateTimeUtils',
    'StringUtils',
]
