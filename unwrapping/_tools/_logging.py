import logging
import time
from typing import Optional

_logger: Optional[logging.Logger] = None


class SummaryFormatter(logging.Formatter):
    """
    Starts multi-line messages, like exception summaries, on the line after the record's header,
    so that their columns are kept as is.
    """

    _HEADER = "%(asctime)s %(levelname)s"

    def __init__(self) -> None:
        super().__init__(f"{self._HEADER} %(message)s", "%Y-%m-%dT%H:%M:%SZ")
        self._header_style = logging.PercentStyle(self._HEADER)
        self.converter = time.gmtime

    def formatMessage(self, record: logging.LogRecord) -> str:
        if "\n" in record.message:
            return f"{self._header_style.format(record)}\n{record.message}"
        return super().formatMessage(record)


def get_logger() -> logging.Logger:
    global _logger
    if not _logger:
        _logger = logging.getLogger("unwrapping")
        _logger.propagate = False
        if not _logger.handlers:
            _handler = logging.StreamHandler()
            _handler.setFormatter(SummaryFormatter())
            _logger.addHandler(_handler)
            _logger.setLevel(logging.INFO)
    return _logger
