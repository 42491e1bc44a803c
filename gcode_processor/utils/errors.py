"""
Custom exception types for the gcode-processor pipeline.
Keep this focused and non-redundant; prefer built-ins where appropriate
(FileNotFoundError for missing inputs, IndexError for bad line indices).
"""


class FragmentFormatError(RuntimeError):
    """A program fragment does not have the layout the merge relies on."""

    def __init__(self, message: str, source: str | None = None):
        self.original_message = message
        self.source = source
        super().__init__(f"Fragment Format Error: {message}")

    def __str__(self):
        if self.source:
            return f"Fragment Format Error ({self.source}): {self.original_message}"
        return f"Fragment Format Error: {self.original_message}"


class FragmentGroupError(RuntimeError):
    """Fragment files on disk cannot be grouped into programs unambiguously."""

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"Fragment Group Error: {message}")

    def __str__(self):
        return f"Fragment Group Error: {self.original_message}"
