"""Console adapter reading messages from stdin and replying on stdout."""

from __future__ import annotations

import asyncio
import itertools
import logging
import sys
import threading
from typing import Any, Dict, Optional, TextIO

from .i_chat_adapter import IChatAdapter
from ..core.router import Router

LOGGER = logging.getLogger(__name__)


class ConsoleAdapter(IChatAdapter):
    def __init__(
        self,
        router: Router,
        user_id: str = "0",
        channel: str = "console",
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self._router = router
        self._user_id = user_id
        self._channel = channel
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._stop_event = asyncio.Event()
        self._counter = itertools.count(1)

    async def send_message(self, channel: str, text: str) -> Optional[str]:
        message_id = str(next(self._counter))
        self._stdout.write(f"[{channel}] {text}\n")
        self._stdout.flush()
        return message_id

    async def start(self) -> None:
        LOGGER.info("Reading messages from console as user %s", self._user_id)
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[Optional[str]] = asyncio.Queue()
        reader = threading.Thread(
            target=self._read_lines,
            args=(loop, queue),
            name="console-reader",
            daemon=True,
        )
        reader.start()
        while not self._stop_event.is_set():
            line = await queue.get()
            if line is None:
                LOGGER.info("Console input closed")
                self._stop_event.set()
                break
            await self._router.handle_message(self._build_event(line))

    async def stop(self) -> None:
        if not self._stop_event.is_set():
            self._stop_event.set()

    def _build_event(self, text: str) -> Dict[str, Any]:
        return {
            "channel": self._channel,
            "user": self._user_id,
            "text": text,
            "ts": str(next(self._counter)),
        }

    def _read_lines(self, loop: asyncio.AbstractEventLoop, queue: asyncio.Queue) -> None:
        # Runs on a daemon thread; blocking stdin reads cannot be cancelled.
        for line in iter(self._stdin.readline, ""):
            if not self._post(loop, queue, line.rstrip("\n")):
                return
        self._post(loop, queue, None)

    @staticmethod
    def _post(loop: asyncio.AbstractEventLoop, queue: asyncio.Queue, item: Optional[str]) -> bool:
        try:
            loop.call_soon_threadsafe(queue.put_nowait, item)
        except RuntimeError:
            LOGGER.debug("Event loop closed; console reader exiting")
            return False
        return True
