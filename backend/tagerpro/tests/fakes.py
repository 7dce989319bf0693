import sse_starlette.sse as sse


class FakeCompletionStream:
    def __init__(self, fragments: list[str], error: Exception | None = None):
        self.fragments = fragments
        self.error = error
        self.closed = False

    async def __aiter__(self):
        for fragment in self.fragments:
            yield fragment
        if self.error is not None:
            raise self.error

    async def aclose(self) -> None:
        self.closed = True


class FakeLLMClient:
    """Stands in for LLMClient; records prompts and hands out canned streams."""

    def __init__(self) -> None:
        self.fragments: list[str] = []
        self.open_error: Exception | None = None
        self.stream_error: Exception | None = None
        self.calls: list[tuple[str, int | None]] = []
        self.streams: list[FakeCompletionStream] = []

    async def open_stream(self, prompt: str, *, max_tokens: int | None = None) -> FakeCompletionStream:
        self.calls.append((prompt, max_tokens))
        if self.open_error is not None:
            raise self.open_error
        stream = FakeCompletionStream(list(self.fragments), self.stream_error)
        self.streams.append(stream)
        return stream


def reset_sse_app_status() -> None:
    # sse-starlette keeps a module-level exit event bound to the first event
    # loop that used it; each TestClient runs its own loop.
    app_status = getattr(sse, "AppStatus", None)
    if app_status is not None:
        app_status.should_exit_event = None
