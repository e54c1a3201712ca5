"""
Mailbox Fixer
Reads a Eudora archive, translates every message and writes the result
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, TextIO

from eudora_attach.config import Settings
from eudora_attach.splitter import MailboxSplitter
from eudora_attach.translator import AttachmentTranslator


logger = logging.getLogger(__name__)


def read_lines(stream: TextIO) -> Iterator[str]:
    """Yields the lines of a text stream without their line terminators."""
    for line in stream:
        yield line.rstrip("\n")


class MailboxFixer:
    """Runs the splitter and translator over whole archives."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        splitter: Optional[MailboxSplitter] = None,
        translator: Optional[AttachmentTranslator] = None,
    ):
        self.settings = settings or Settings()
        self.splitter = splitter or MailboxSplitter()
        self.translator = translator or AttachmentTranslator()

    def fix_batches(self, lines: Iterable[str]) -> Iterator[List[str]]:
        """Yields each message batch with its converted lines appended."""
        for batch in self.splitter.split(lines):
            yield self.translator.translate(batch)

    def fix_lines(self, lines: Iterable[str]) -> Iterator[str]:
        """Flattens fix_batches() back into a line stream."""
        for batch in self.fix_batches(lines):
            yield from batch

    def write_message(self, lines: List[str], out: TextIO) -> None:
        """Writes one message, ending every line with the configured newline."""
        newline = self.settings.newline
        for line in lines:
            out.write(line)
            out.write(newline)

    def process_file(self, read_path: str, write_path: str) -> Dict[str, Any]:
        """
        Translates one archive into a new file.

        Args:
            read_path: Path of the original archive
            write_path: Path of the archive to create (overwritten if present)

        Returns:
            Dictionary with structure:
            {
                "source": read_path,
                "destination": write_path,
                "messages": 12,            # non-empty batches written
                "attachments_added": 3     # converted lines appended
            }

        Raises:
            OSError: if either file cannot be opened, read or written
        """
        encoding = self.settings.encoding
        messages = 0
        added = 0

        with open(read_path, "r", encoding=encoding, newline=None) as src, \
                open(write_path, "w", encoding=encoding, newline="") as dst:
            for batch in self.splitter.split(read_lines(src)):
                fixed = self.translator.translate(batch)
                self.write_message(fixed, dst)

                if batch:
                    messages += 1
                added += len(fixed) - len(batch)

        logger.debug(
            "Wrote %s: %d messages, %d attachment lines added",
            write_path, messages, added,
        )

        return {
            "source": read_path,
            "destination": write_path,
            "messages": messages,
            "attachments_added": added,
        }
