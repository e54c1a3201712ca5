"""
Mailbox Splitter
Groups the lines of a Eudora archive into one batch per message
"""

from typing import Iterable, Iterator, List


MESSAGE_START_PREFIXES = ("From - ", "From ???@??? ")


class MailboxSplitter:
    """
    Splits a stream of archive lines on message separator lines.

    The separator line opens the batch of the message it introduces, so
    an archive that begins with a separator yields an empty first batch.
    The last batch is always yielded, even when it is empty.
    """

    def is_message_start(self, line: str) -> bool:
        return line.startswith(MESSAGE_START_PREFIXES)

    def split(self, lines: Iterable[str]) -> Iterator[List[str]]:
        """
        Yields message batches in archive order.

        Args:
            lines: Archive lines without their line terminators

        Returns:
            Iterator of line lists; N separator lines give N + 1 batches
        """
        batch: List[str] = []

        for line in lines:
            if self.is_message_start(line):
                yield batch
                batch = []
            batch.append(line)

        yield batch
