class ModOrderError(Exception):
    """Base class for failures that abort a run."""

    stage = "mod order"

    def __str__(self) -> str:
        return f"{self.stage}: {super().__str__()}"
