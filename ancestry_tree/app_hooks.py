from typing import Protocol

class AppHooks(Protocol):
    """
    Protocol for application hooks to follow a tree build.
    This can be implemented by the main application to display progress.

    Methods:
        report_step(info: str, target: int, reset_counter: bool, plus_step: int) -> None:
            Report that a pipeline step has started or advanced.
    """
    def report_step(self, info: str = None, target: int = None, reset_counter: bool = False, plus_step: int = 1) -> None:
        """
        Report progress messages from the tree build.

        Args:
            info (str): Progress message.
            target (int): Number of items the step will process.
            reset_counter (bool): Whether to reset the progress counter.
            plus_step (int): Incremental step count.
        """
        pass
