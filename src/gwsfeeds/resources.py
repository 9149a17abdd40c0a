from dataclasses import asdict

class FeedResourceBase():
    """
    Intended to be subclassed by a dataclass but isnt actually a dataclass.
    Subclasses with nested dataclass fields override fixup() to coerce
    plain dicts into the nested types.
    """
    def to_base(self) -> dict:
        """
        Dict representation of the object, as a v4 request body wants it.
        Call fixup() first to ensure all fields are in correct format.
        """
        self.fixup()
        return asdict(self)

    def fixup(self) -> None:
        """
        notify a subclass to do any field adjustments
        """
        pass
