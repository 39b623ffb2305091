#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# completion.py

import logging
from concurrent.futures import Executor, Future
from threading import Lock, Thread
from typing import Callable, Optional

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException]], None]


class Completion:
    """
    一次性结果通道

    同一次调用的 stderr 事件和退出事件会竞争同一个回调,
    只有第一次 resolve 会被投递, 之后的调用全部忽略.
    投递总是在 dispatcher 线程上进行, 不会在调用方线程中同步执行;
    dispatcher 关闭后改由独立的守护线程投递.
    """

    def __init__(self, dispatcher: Executor, callback: Optional[Callback] = None):
        self._dispatcher = dispatcher
        self._callback = callback
        self._lock = Lock()
        self._resolved = False
        self.future: Future = Future()

    @property
    def resolved(self) -> bool:
        with self._lock:
            return self._resolved

    def resolve(self, error: Optional[BaseException] = None) -> bool:
        """提交结果, 返回本次是否生效"""
        with self._lock:
            if self._resolved:
                logger.debug(f"Ignoring late result: {error!r}")
                return False
            self._resolved = True

        try:
            self._dispatcher.submit(self._deliver, error)
        except RuntimeError:
            # dispatcher 已关闭
            Thread(target=self._deliver, args=(error,), daemon=True).start()
        return True

    def _deliver(self, error: Optional[BaseException]) -> None:
        try:
            if self._callback is not None:
                self._callback(error)
        except Exception:
            logger.exception("Speech callback raised")
        finally:
            if error is None:
                self.future.set_result(None)
            else:
                self.future.set_exception(error)
