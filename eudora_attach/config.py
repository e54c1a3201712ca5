"""
Settings
Reads runtime options from the environment (and a local .env file)
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv


LINE_ENDINGS = {
    "cr": "\r",
    "crlf": "\r\n",
}


def platform_line_ending(platform: Optional[str] = None) -> str:
    """
    Picks the line ending the Thunderbird importer expects on this platform.

    Eudora archives end every line with a carriage return; on Windows the
    importer also wants the line feed.
    """
    platform = platform or sys.platform
    if platform.startswith("win"):
        return "crlf"
    return "cr"


def parse_extensions(value: str) -> Tuple[str, ...]:
    """Turns ".mbx, .MBOX" into ('.mbx', '.mbox')."""
    extensions = []
    for ext in value.split(","):
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        extensions.append(ext)

    if not extensions:
        raise ValueError(f"No mailbox extensions given in {value!r}")
    return tuple(extensions)


@dataclass
class Settings:
    line_ending: str = "auto"
    encoding: str = "latin-1"
    extensions: Tuple[str, ...] = field(default_factory=lambda: (".mbx",))
    log_level: str = "INFO"

    def __post_init__(self):
        self.line_ending = self.line_ending.lower()
        if self.line_ending == "auto":
            self.line_ending = platform_line_ending()
        if self.line_ending not in LINE_ENDINGS:
            raise ValueError(
                f"Unknown line ending {self.line_ending!r}; "
                f"expected one of auto, {', '.join(LINE_ENDINGS)}"
            )

    @property
    def newline(self) -> str:
        """The characters written after every output line."""
        return LINE_ENDINGS[self.line_ending]


def load_settings(
    line_ending: Optional[str] = None,
    encoding: Optional[str] = None,
    extensions: Optional[str] = None,
    log_level: Optional[str] = None,
) -> Settings:
    """
    Builds Settings from explicit values, falling back to the environment.

    Args:
        line_ending: "auto", "cr" or "crlf" (EUDORA_ATTACH_LINE_ENDING)
        encoding: archive text encoding (EUDORA_ATTACH_ENCODING)
        extensions: comma-separated mailbox extensions (EUDORA_ATTACH_EXTENSIONS)
        log_level: logging level name (EUDORA_ATTACH_LOG_LEVEL)

    Returns:
        Settings with the line ending already resolved
    """
    load_dotenv()

    return Settings(
        line_ending=line_ending or os.getenv("EUDORA_ATTACH_LINE_ENDING", "auto"),
        encoding=encoding or os.getenv("EUDORA_ATTACH_ENCODING", "latin-1"),
        extensions=parse_extensions(
            extensions or os.getenv("EUDORA_ATTACH_EXTENSIONS", ".mbx")
        ),
        log_level=(log_level or os.getenv("EUDORA_ATTACH_LOG_LEVEL", "INFO")).upper(),
    )
