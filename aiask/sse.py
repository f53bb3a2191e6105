from typing import List

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class SSEDecoder:
    """
    Splits a server-sent event stream into data payloads.

    Chunks may end anywhere, including in the middle of a line or of the
    prefix itself. The unterminated tail is carried over to the next call.
    Lines without the data prefix (comments, keep-alives, event names) are
    dropped.
    """

    def __init__(self, prefix: str = DATA_PREFIX) -> None:
        self.prefix = prefix
        self._buffer = ""

    @property
    def pending(self) -> str:
        return self._buffer

    def feed(self, chunk: str) -> List[str]:
        self._buffer += chunk
        payloads: List[str] = []
        while True:
            line_end = self._buffer.find("\n")
            if line_end == -1:
                break
            line = self._buffer[:line_end].strip()
            self._buffer = self._buffer[line_end + 1 :]
            if line.startswith(self.prefix):
                payloads.append(line[len(self.prefix) :])
        return payloads

    def reset(self) -> None:
        self._buffer = ""
