import io
import logging


class TqdmToLogger(io.StringIO):
    """
    Output stream for tqdm which writes progress bars to a logger instead of stderr.
    """

    def __init__(self, logger: logging.Logger, level: int = logging.INFO):
        super().__init__()
        self.logger = logger
        self.level = level
        self.buf = ""

    def write(self, buf: str) -> int:
        self.buf = buf.strip("\r\n\t ")
        return len(buf)

    def flush(self) -> None:
        if self.buf:
            self.logger.log(self.level, self.buf)
