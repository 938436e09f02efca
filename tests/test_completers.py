# tests/test_completers.py
from __future__ import annotations

import asyncio

from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from smartcomplete import completers as sut


class StubEngine:
    def __init__(self, results=None, exc=None):
        self.results = results or []
        self.exc = exc
        self.seen = []

    async def get_completions(self, text):
        self.seen.append(text)
        if self.exc:
            raise self.exc
        return list(self.results)


def _doc(text: str) -> Document:
    return Document(text=text, cursor_position=len(text))


def test_sync_completions_replace_whole_line():
    eng = StubEngine(["git status", "git stash"])
    comp = sut.EngineCompleter(eng)
    out = list(comp.get_completions(_doc("git st"), CompleteEvent(completion_requested=True)))
    assert [c.text for c in out] == ["git status", "git stash"]
    assert all(c.start_position == -len("git st") for c in out)
    assert eng.seen == ["git st"]


def test_only_text_before_cursor_is_used():
    eng = StubEngine(["ls -la"])
    comp = sut.EngineCompleter(eng)
    doc = Document(text="ls trailing", cursor_position=2)
    out = list(comp.get_completions(doc, CompleteEvent()))
    assert eng.seen == ["ls"]
    assert out[0].start_position == -2


def test_sync_engine_error_yields_nothing():
    comp = sut.EngineCompleter(StubEngine(exc=RuntimeError("boom")))
    assert list(comp.get_completions(_doc("x"), CompleteEvent())) == []


def test_async_completions():
    comp = sut.EngineCompleter(StubEngine(["make test"]))

    async def collect():
        return [c async for c in comp.get_completions_async(_doc("mk"), CompleteEvent())]

    out = asyncio.run(collect())
    assert [c.text for c in out] == ["make test"]
    assert out[0].display_text == "make test"


def test_async_engine_error_yields_nothing():
    comp = sut.EngineCompleter(StubEngine(exc=ValueError("bad")))

    async def collect():
        return [c async for c in comp.get_completions_async(_doc("x"), CompleteEvent())]

    assert asyncio.run(collect()) == []
