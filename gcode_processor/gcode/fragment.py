"""
Program fragments

CAM software that splits one toolpath at tool changes writes each piece as
its own program in three sections separated by fully blank lines, which are
called the header, body and footer here. The merge keeps the header of the
first fragment, every body, and the footer of the last fragment.
"""

import logging

from gcode_processor import config

from .document import GcodeDocument
from .line import GcodeLine

logger = logging.getLogger(__name__)


class FragmentDocument(GcodeDocument):
    """A G-code document split into header, body and footer"""

    def __init__(
        self,
        lines: list[GcodeLine] | None = None,
        path: str | None = None,
        tool_comment_prefix: str | None = None,
    ):
        self.tool_comment_prefix = tool_comment_prefix or config.TOOL_COMMENT_PREFIX
        self.header: list[GcodeLine] = []
        self.body: list[GcodeLine] = []
        self.footer: list[GcodeLine] = []
        self.tool_description_comments: list[GcodeLine] = []
        self.other_full_line_comments: list[GcodeLine] = []
        super().__init__(lines, path=path)

    def _restructure(self) -> None:
        self.classify_regions()

    def classify_regions(self) -> None:
        """
        Recompute header, body, footer and the full-line comment lists.

        The first blank line closes the header and the second closes the body;
        each blank separator belongs to the region it closes. With fewer than
        two blank lines the later regions stay short or empty.
        """
        self.header = []
        self.body = []
        self.footer = []
        self.tool_description_comments = []
        self.other_full_line_comments = []

        header_done = False
        body_done = False

        for line in self.lines:
            if line.is_full_line_comment:
                if line.comments[0].startswith(self.tool_comment_prefix):
                    self.tool_description_comments.append(line)
                else:
                    self.other_full_line_comments.append(line)

            if not header_done:
                self.header.append(line)
                if line.is_blank:
                    header_done = True
                continue

            if not body_done:
                self.body.append(line)
                if line.is_blank:
                    body_done = True
                continue

            self.footer.append(line)

        if not body_done:
            logger.debug(
                f"{self.path or 'fragment'}: found fewer than two blank separators, "
                f"regions are {len(self.header)}/{len(self.body)}/{len(self.footer)} lines"
            )

    @property
    def name(self) -> str:
        return self.path or "<fragment>"
