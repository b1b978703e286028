"""
Codec configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


# Packaged table assets (schemas/ and data/)
DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "tables"

ERROR_POLICIES = ("abort", "skip")


class CodecConfig:
    """Configuration for table loading, documents and batch conversion."""

    def __init__(
        self,
        data_path: Optional[Path | str] = None,
        on_error: str = "abort",
        xml_encoding: str = "utf-8",
        pretty_xml: bool = True,
    ):
        if on_error not in ERROR_POLICIES:
            raise ValueError(f"on_error must be one of {ERROR_POLICIES}, got {on_error!r}")
        # None selects the packaged tables
        self.data_path = Path(data_path) if data_path is not None else None
        self.on_error = on_error
        self.xml_encoding = xml_encoding
        self.pretty_xml = pretty_xml

    @property
    def skip_errors(self) -> bool:
        return self.on_error == "skip"
