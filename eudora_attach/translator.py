"""
Attachment Translator
Turns Eudora's X-Attachments header into the "Attachment Converted" lines
that Thunderbird's importer uses to find attachments of sent messages
"""

from typing import Any, Dict, List, Optional


X_ATTACHMENTS_PREFIX = "X-Attachments: "
CONVERTED_MARKER = "Attachment Converted: "

# Eudora's header values are sliced at these positions. They sit one
# character before the end of each marker, so the leading space is kept.
X_ATTACHMENTS_OFFSET = 14
CONVERTED_OFFSET = 21

# Trimmed around paths: the space and every control character below it.
# Non-breaking spaces and other Unicode whitespace are kept.
TRIM_CHARS = "".join(map(chr, range(33)))


class AttachmentTranslator:
    """Adds missing "Attachment Converted" lines to a message batch."""

    def find_x_attachments(self, lines: List[str]) -> str:
        """
        Returns the message's X-Attachments line, or "" when it has none.

        If the header appears more than once, the last one is used.
        """
        x_attachments = ""
        for line in lines:
            if line.startswith(X_ATTACHMENTS_PREFIX):
                x_attachments = line
        return x_attachments

    def count_attachments(self, x_attachments: str) -> int:
        """Counts the semicolons; Eudora ends every listed path with one."""
        return x_attachments.count(";")

    def split_attachments(self, x_attachments: str) -> List[str]:
        """
        Splits the X-Attachments value into candidate paths.

        Trailing empty fields are dropped (Eudora terminates the list
        with a semicolon), leading and inner empty fields are kept.
        Paths are not trimmed.
        """
        paths = x_attachments[X_ATTACHMENTS_OFFSET:].split(";")
        while paths and paths[-1] == "":
            paths.pop()
        return paths

    def find_converted(self, lines: List[str]) -> List[str]:
        """
        Collects the paths of "Attachment Converted" lines already present.

        Args:
            lines: Message lines

        Returns:
            Paths in message order, with quotes removed and whitespace trimmed
        """
        converted = []
        for line in lines:
            if CONVERTED_MARKER in line:
                converted.append(line[CONVERTED_OFFSET:].replace('"', "").strip(TRIM_CHARS))
        return converted

    def remove_converted(self, paths: List[str], converted: List[str]) -> List[str]:
        """Drops every path that already has a matching converted line."""
        known = {path.lower() for path in converted}
        return [path for path in paths if path.strip(TRIM_CHARS).lower() not in known]

    def parse_message(self, lines: List[str]) -> Dict[str, Any]:
        """
        Extracts the attachment information of one message.

        Args:
            lines: One batch from MailboxSplitter

        Returns:
            Dictionary with structure:
            {
                "raw_lines": [...],            # the batch, untouched
                "x_attachments": "X-Attachments: ...",  # or ""
                "attachments": [...] or None,  # paths still to convert
                "already_converted": [...]     # paths found in the batch
            }
        """
        x_attachments = self.find_x_attachments(lines)
        already_converted = self.find_converted(lines)

        attachments: Optional[List[str]] = None
        if self.count_attachments(x_attachments) > 0:
            attachments = self.remove_converted(
                self.split_attachments(x_attachments), already_converted
            )

        return {
            "raw_lines": lines,
            "x_attachments": x_attachments,
            "attachments": attachments,
            "already_converted": already_converted,
        }

    def format_converted(self, path: str) -> str:
        return f'{CONVERTED_MARKER}"{path}"'

    def translate(self, lines: List[str]) -> List[str]:
        """
        Returns the batch with one converted line appended per new attachment.

        The input list is not modified.
        """
        message = self.parse_message(lines)
        if not message["attachments"]:
            return list(lines)

        return list(lines) + [
            self.format_converted(path) for path in message["attachments"]
        ]
