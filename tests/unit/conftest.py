"""
Shared test helpers: scripted provider transport, recording sleep and
temporary SQLite storage.
"""

import json
import tempfile
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import httpx
import pytest

from ai_blog_summary.data import RepositoryFactory
from ai_blog_summary.models import Post, PostStatus

VALID_KEY = "sk-" + "a1B2" * 10


def chat_response(text: str, status_code: int = 200) -> httpx.Response:
    """A chat-completions style response carrying ``text``."""
    return httpx.Response(
        status_code,
        json={"choices": [{"message": {"role": "assistant", "content": text}}]},
    )


def error_response(status_code: int, message: Optional[str] = None) -> httpx.Response:
    body: Dict[str, Any] = {"error": {"message": message}} if message else {}
    return httpx.Response(status_code, json=body)


class ScriptedTransport:
    """Replays a script of responses (or exceptions) and records requests.

    The last script entry repeats once the script is exhausted.
    """

    def __init__(self, script: List[Union[httpx.Response, Exception]]):
        self.script = list(script)
        self.requests: List[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_body(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.script)) - 1
        step = self.script[index]
        if isinstance(step, Exception):
            raise step
        return step

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class RecordingSleep:
    """Async sleep replacement that records requested waits."""

    def __init__(self):
        self.waits: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)

    @property
    def total(self) -> float:
        return sum(self.waits)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@asynccontextmanager
async def temp_repository_factory():
    """RepositoryFactory over a throwaway SQLite file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        factory = RepositoryFactory(db_path=str(Path(tmpdir) / "test.db"), pool_size=2)
        try:
            yield factory
        finally:
            await factory.close()


def make_post(post_id: int, status: PostStatus = PostStatus.PUBLISH, day: int = 1, **kwargs) -> Post:
    defaults = {
        "title": f"Post {post_id}",
        "content": f"<p>Body of post {post_id} with enough words to summarize.</p>",
        "permalink": f"https://blog.example/{post_id}",
        "published_at": datetime(2024, 3, day, 9, 30, tzinfo=timezone.utc),
    }
    defaults.update(kwargs)
    return Post(id=post_id, status=status, **defaults)
