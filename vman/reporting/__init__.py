"""
Reporting Module

Contains report generators for different output formats (JSON, text, Excel).
"""

from typing import Iterable, List, Optional

from ..exceptions import ConfigurationError
from .base import ReportGenerator
from .excel_reporter import ExcelReporter
from .json_reporter import JSONReporter
from .text_reporter import HumanReadableReporter

REPORTERS = {
    "json": JSONReporter,
    "text": HumanReadableReporter,
    "excel": ExcelReporter,
}

DEFAULT_FORMATS = ("json", "text")


def create_reporters(formats: Optional[Iterable[str]] = None) -> List[ReportGenerator]:
    """
    Instantiate report generators by format name.

    Raises:
        ConfigurationError: If a format name is unknown
    """
    reporters = []
    for name in (formats or DEFAULT_FORMATS):
        reporter_class = REPORTERS.get(name.lower())
        if reporter_class is None:
            raise ConfigurationError(
                f"Unknown report format '{name}'. Supported: {', '.join(sorted(REPORTERS))}"
            )
        reporters.append(reporter_class())
    return reporters


__all__ = ['ReportGenerator', 'JSONReporter', 'HumanReadableReporter', 'ExcelReporter',
           'REPORTERS', 'create_reporters']
