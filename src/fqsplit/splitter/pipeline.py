#!filepath: src/fqsplit/splitter/pipeline.py
from __future__ import annotations

import queue
import threading
from typing import Iterable

from fqsplit.config.split_config import SplitConfig
from fqsplit.splitter.router import Router
from fqsplit.utils.logger import logs

# 队列结束标记（相当于 close(channel)）
_END = object()


class _ProducerFailure:
    """读线程的异常，经由队列按 FIFO 顺序交给消费者抛出"""

    __slots__ = ("error",)

    def __init__(self, error: BaseException):
        self.error = error


class PipelineCoordinator:
    """
    读线程 + 路由线程（有界队列）

    - producer：独立线程，逐行读取并放入 queue.Queue(maxsize=buffer_size)
      队列满时阻塞（背压），内存占用与输入大小无关
    - consumer：调用方线程，运行 Router，直到收到结束标记
    - SinkRegistry / sink 只在 consumer 线程访问，热路径无锁
    - 成功路径上必须等待 producer 完全退出才返回

    失败语义：
      - 读失败：producer 把异常放入队列并结束，consumer 取到后抛出
      - 路由 / 写失败：consumer 设置 abort，producer 在下一次 put 时退出
    """

    def __init__(
        self,
        config: SplitConfig,
        poll_interval: float = 0.1,
        abort_join_timeout: float = 5.0,
    ):
        self.capacity = config.buffer_size
        self.poll_interval = poll_interval
        self.abort_join_timeout = abort_join_timeout

    # --------------------------------------------------
    def run(self, lines: Iterable[str], router: Router) -> int:
        """
        返回 consumer 路由的行数
        """
        q: queue.Queue = queue.Queue(maxsize=self.capacity)
        abort = threading.Event()

        producer = threading.Thread(
            target=self._produce,
            args=(lines, q, abort),
            name="fqsplit-reader",
            daemon=True,
        )

        logs.debug(f"[Pipeline] start reader thread | buffer_size={self.capacity}")
        producer.start()

        try:
            n = self._consume(q, router)
        except BaseException:
            abort.set()
            producer.join(self.abort_join_timeout)
            if producer.is_alive():
                logs.warning("[Pipeline] reader thread still blocked on input after abort")
            raise

        producer.join()
        logs.debug(f"[Pipeline] reader thread finished | lines={n}")
        return n

    # --------------------------------------------------
    def _put(self, q: queue.Queue, item, abort: threading.Event) -> bool:
        while not abort.is_set():
            try:
                q.put(item, timeout=self.poll_interval)
                return True
            except queue.Full:
                continue
        return False

    def _produce(self, lines: Iterable[str], q: queue.Queue, abort: threading.Event) -> None:
        put = self._put
        try:
            for line in lines:
                if not put(q, line, abort):
                    return
        except Exception as e:
            # 不在这里吞掉：交给 consumer 线程抛出，终止整次运行
            # 错误按 FIFO 排在已读入队列的行之后（最多 buffer_size 行），
            # consumer 先把这些行路由写出，再抛出读错误
            put(q, _ProducerFailure(e), abort)
            return

        put(q, _END, abort)

    @staticmethod
    def _consume(q: queue.Queue, router: Router) -> int:
        get = q.get
        route = router.route
        n = 0
        while True:
            item = get()
            if item is _END:
                return n
            if isinstance(item, _ProducerFailure):
                raise item.error
            route(item)
            n += 1
