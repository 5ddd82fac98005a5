"""
XML config files: one document per saveable object.

Reads raise PersistenceError so callers can decide whether a broken file is
fatal. Writes go through a temporary file in the same directory and are then
moved into place, so a crash never leaves a half-written config.xml.
"""

import logging
import os
import tempfile
from pathlib import Path
from xml.etree import ElementTree

from teamview.core.exceptions import PersistenceError

logger = logging.getLogger("TeamView.XmlFile")


class XmlFile:
    def __init__(self, path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> ElementTree.Element:
        try:
            return ElementTree.parse(self.path).getroot()
        except (OSError, ElementTree.ParseError) as e:
            raise PersistenceError(f"Failed to read {self.path}: {e}") from e

    def write(self, root: ElementTree.Element) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        ElementTree.indent(root)
        fd, tmp_name = tempfile.mkstemp(prefix="atomic", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                ElementTree.ElementTree(root).write(f, encoding="UTF-8", xml_declaration=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {self.path}")

    def __repr__(self):
        return f"<XmlFile({self.path})>"
