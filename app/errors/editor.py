class EditorIndexError(IndexError):
    """
    Raised when an editing operation targets a position that does not exist.

    Editing operations have no other failure mode, so an out-of-range index
    always indicates a caller bug rather than bad user input.
    """

    def __init__(self, what: str, index: int, size: int) -> None:
        self.what = what
        self.index = index
        self.size = size
        super().__init__(f"{what} index {index} out of range for {size} item(s)")
