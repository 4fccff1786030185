import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

from kombu import Connection, Exchange, Queue

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 5


class _QueueClient:
    """Connection + producer bound to one durable queue."""

    def __init__(self, connection: Connection, queue: Queue):
        self.connection = connection
        self.queue = queue
        self.producer = connection.Producer(serializer="json")

    def publish(self, pattern: str, data: Any) -> None:
        # same envelope as the consumers expect: {"pattern": ..., "data": ...}
        self.producer.publish(
            {"pattern": pattern, "data": data},
            exchange=self.queue.exchange,
            routing_key=self.queue.routing_key,
            declare=[self.queue],
            retry=False,
        )

    def close(self) -> None:
        self.connection.release()


class AmqpService:
    """Fire-and-forget publisher with one lazily created client per queue.

    Clients are cached by queue name. Publishing happens on a single
    background worker, so callers never wait on the broker and kombu
    connections are only ever used from one thread.
    """

    def __init__(self, uri: str, connection_factory: Optional[Callable[..., Connection]] = None):
        self.uri = uri
        self._connection_factory = connection_factory or Connection
        self._clients: Dict[str, _QueueClient] = {}
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="amqp")

    def _create_client(self, queue_name: str) -> _QueueClient:
        connection = self._connection_factory(self.uri, connect_timeout=CONNECT_TIMEOUT)
        queue = Queue(queue_name, exchange=Exchange(""), routing_key=queue_name, durable=True)
        logger.info(f"AMQP client created for queue '{queue_name}'")
        return _QueueClient(connection, queue)

    def get_client(self, queue_name: str) -> _QueueClient:
        with self._lock:
            client = self._clients.get(queue_name)
            if client is None:
                client = self._create_client(queue_name)
                self._clients[queue_name] = client
            return client

    def _evict(self, queue_name: str) -> None:
        with self._lock:
            client = self._clients.pop(queue_name, None)
        if client is not None:
            try:
                client.close()
            except Exception:
                logger.exception(f"Failed to close AMQP client for '{queue_name}'")

    def _publish(self, queue_name: str, pattern: str, data: Any) -> bool:
        try:
            self.get_client(queue_name).publish(pattern, data)
        except Exception:
            logger.exception(f"AMQP emit failed: queue={queue_name}, pattern={pattern}")
            # drop the broken client so the next emit reconnects
            self._evict(queue_name)
            return False
        logger.info(f"AMQP emit: queue={queue_name}, pattern={pattern}")
        return True

    def emit_message(self, queue_name: str, pattern: str, data: Any) -> Future:
        """Schedule a publish and return immediately."""
        return self._executor.submit(self._publish, queue_name, pattern, data)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        with self._lock:
            clients = list(self._clients.items())
            self._clients.clear()
        for queue_name, client in clients:
            try:
                client.close()
            except Exception:
                logger.exception(f"Failed to close AMQP client for '{queue_name}'")
