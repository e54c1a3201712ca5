"""
Directory Walker
Mirrors a Eudora mail folder into a destination folder, fixing every
mailbox on the way and pruning mirrored folders that end up empty
"""

import logging
import os
from typing import Any, Dict, List, Sequence, Tuple

from eudora_attach.fixer import MailboxFixer


logger = logging.getLogger(__name__)


def is_mailbox(path: str, extensions: Sequence[str] = (".mbx",)) -> bool:
    """
    Checks whether path is a mailbox file, judged by its extension.

    The name must be longer than the extension, so a file called just
    ".mbx" does not count.
    """
    if not os.path.isfile(path):
        return False

    name = os.path.basename(path).lower()
    return any(
        len(name) > len(ext) and name.endswith(ext) for ext in extensions
    )


class MailboxWalker:
    """Processes a whole directory tree of mailboxes."""

    def __init__(self, fixer: MailboxFixer, extensions: Sequence[str] = (".mbx",)):
        self.fixer = fixer
        self.extensions = tuple(ext.lower() for ext in extensions)

        self.processed: List[Dict[str, Any]] = []
        self.failures: List[Tuple[str, str]] = []

    def list_mailboxes(self, directory: str) -> List[str]:
        return [
            name for name in sorted(os.listdir(directory))
            if is_mailbox(os.path.join(directory, name), self.extensions)
        ]

    def list_subdirectories(self, directory: str) -> List[str]:
        return [
            name for name in sorted(os.listdir(directory))
            if os.path.isdir(os.path.join(directory, name))
            and not os.path.islink(os.path.join(directory, name))
        ]

    def process_dir(self, origin: str, destination: str) -> bool:
        """
        Fixes every mailbox directly inside origin.

        Each mailbox is written under the same name in destination. A
        mailbox that cannot be read or written is logged and recorded in
        self.failures; the remaining mailboxes are still processed.

        Returns:
            False when origin holds no mailbox files, True otherwise
        """
        mailboxes = self.list_mailboxes(origin)
        if not mailboxes:
            return False

        for name in mailboxes:
            read_path = os.path.join(origin, name)
            write_path = os.path.join(destination, name)

            print(f'Processing file "{name}" ...')
            try:
                stats = self.fixer.process_file(read_path, write_path)
            except (OSError, UnicodeError) as e:
                logger.exception("Failed to process %s", read_path)
                self.failures.append((read_path, str(e)))
                print(f"   Error: {e}")
                continue

            self.processed.append(stats)
            print("Done!")

        return True

    def mirror(self, destination: str) -> bool:
        """
        Creates the mirrored directory.

        Returns:
            True if the directory was created by this call
        """
        if os.path.isdir(destination):
            return False
        os.makedirs(destination)
        return True

    def prune(self, destination: str) -> bool:
        """Removes destination if it is empty. Returns True if it was removed."""
        try:
            if os.listdir(destination):
                return False
            logger.info("Removing empty directory %s", destination)
            os.rmdir(destination)
        except OSError as e:
            logger.exception("Failed to remove directory %s", destination)
            self.failures.append((destination, str(e)))
            return False
        return True

    def run(self, origin: str, destination: str, created: bool = False) -> bool:
        """
        Recursively processes origin into destination.

        Subdirectories are mirrored before recursing. A mirrored
        subdirectory that this run created, that received no mailbox and
        that holds nothing else after its own subdirectories were handled
        is removed again. Directories that already existed are left alone,
        so the destination passed in the first call is never removed.

        A directory that cannot be read, created or removed is logged and
        recorded in self.failures; its siblings are still processed.

        Returns:
            True if destination was kept
        """
        try:
            has_mailboxes = self.process_dir(origin, destination)
            subdirectories = self.list_subdirectories(origin)
        except OSError as e:
            logger.exception("Failed to read directory %s", origin)
            self.failures.append((origin, str(e)))
            return True

        for name in subdirectories:
            child_destination = os.path.join(destination, name)
            try:
                child_created = self.mirror(child_destination)
            except OSError as e:
                logger.exception("Failed to create directory %s", child_destination)
                self.failures.append((child_destination, str(e)))
                print(f"   Error: {e}")
                continue
            self.run(os.path.join(origin, name), child_destination, created=child_created)

        if created and not has_mailboxes and self.prune(destination):
            return False

        return True
