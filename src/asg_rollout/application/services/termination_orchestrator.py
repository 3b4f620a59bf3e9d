"""Termination orchestrator.

Walks a group's instances page by page and terminates every instance whose
launch configuration differs from the snapshot's active one:

    Fetch -> Classify-and-act -> (token?) pause -> Fetch ... -> Done

A failed page fetch ends the pass. A failed termination is reported and the
pass carries on. Nothing is retried here; the boto3 client has its own retry
policy.
"""

import queue
import threading
import time
from collections.abc import Iterator
from datetime import timedelta
from typing import Callable, Optional

from asg_rollout.domain.base.exceptions import (
    InstancePageFetchError,
    InstanceTerminationError,
    ProviderError,
)
from asg_rollout.domain.base.ports import AutoScalingPort, LoggingPort
from asg_rollout.domain.group.models import GroupSnapshot, InstancePage, InstanceRecord
from asg_rollout.domain.rollout.outcomes import (
    InstanceTerminated,
    PageFetchFailed,
    TerminationFailed,
    TerminationOutcome,
)

DEFAULT_MAX_PENDING = 16

_DONE = object()


class TerminationOrchestrator:
    """Sequential, paced termination of stale group instances."""

    def __init__(
        self,
        autoscaling: AutoScalingPort,
        logger: LoggingPort,
        sleep: Callable[[float], None] = time.sleep,
        cancel_event: Optional[threading.Event] = None,
        max_pending: int = DEFAULT_MAX_PENDING,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            autoscaling: Control-plane port used for listing and terminating
            logger: Logger for logging messages
            sleep: Blocking sleep used for the pause between pages
            cancel_event: Checked at each page boundary; when set, no further
                pages are fetched
            max_pending: Capacity of the outcome queue used by ``stream``
        """
        self._autoscaling = autoscaling
        self._logger = logger
        self._sleep = sleep
        self._cancel_event = cancel_event or threading.Event()
        self._max_pending = max_pending

    def cancel(self) -> None:
        """Stop after the page currently being processed."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def iter_instance_pages(
        self, group_name: str, page_size: int, pause: timedelta
    ) -> Iterator[InstancePage]:
        """
        Yield instance pages in order, pausing between consecutive fetches.

        The next page is only fetched once the consumer has finished with the
        current one.

        Raises:
            InstancePageFetchError: If a page cannot be fetched
        """
        next_token: Optional[str] = None
        page_number = 0
        while True:
            page_number += 1
            try:
                page = self._autoscaling.list_instances_page(group_name, page_size, next_token)
            except ProviderError as e:
                raise InstancePageFetchError(group_name, page_number, e) from e

            self._logger.debug(
                "Fetched page %d of %s with %d instances",
                page_number,
                group_name,
                len(page.records),
            )
            yield page

            if not page.has_more:
                return
            if self.cancelled:
                self._logger.info(
                    "Rollout of %s cancelled after page %d", group_name, page_number
                )
                return

            next_token = page.next_token
            self._pause(pause)

    def run(
        self, snapshot: GroupSnapshot, batch_size: int, pause: timedelta
    ) -> Iterator[TerminationOutcome]:
        """
        Run one termination pass, yielding an outcome per termination attempt.

        A PageFetchFailed outcome, if any, is always the last one.

        Args:
            snapshot: Group snapshot holding the active launch configuration
            batch_size: Page size for instance enumeration
            pause: Pause between page fetches
        """
        self._logger.info(
            "Replacing instances of %s not on launch configuration %s, batch size %d",
            snapshot.name,
            snapshot.active_config_id,
            batch_size,
        )

        try:
            for page in self.iter_instance_pages(snapshot.name, batch_size, pause):
                for record in page.records:
                    if not record.is_stale(snapshot.active_config_id):
                        self._logger.debug("Instance %s is current, leaving it", record.instance_id)
                        continue
                    yield self._terminate(record)
        except InstancePageFetchError as e:
            self._logger.error("Stopping rollout of %s: %s", snapshot.name, e)
            yield PageFetchFailed(page_number=e.page_number, cause=e)
            return

        self._logger.info("Termination pass over %s complete", snapshot.name)

    def stream(
        self, snapshot: GroupSnapshot, batch_size: int, pause: timedelta
    ) -> Iterator[TerminationOutcome]:
        """
        Run the pass on a worker thread and yield outcomes as they arrive.

        Outcomes travel through a bounded queue, so the worker blocks when the
        consumer falls behind. The worker always signals completion exactly
        once. An unexpected worker exception is re-raised here after the
        outcomes produced before it.
        """
        channel: queue.Queue = queue.Queue(maxsize=self._max_pending)
        failures: list[BaseException] = []

        def produce() -> None:
            try:
                for outcome in self.run(snapshot, batch_size, pause):
                    channel.put(outcome)
            except Exception as e:
                failures.append(e)
            finally:
                channel.put(_DONE)

        worker = threading.Thread(
            target=produce, name=f"asg-rollout-{snapshot.name}", daemon=True
        )
        worker.start()

        done = False
        try:
            while True:
                item = channel.get()
                if item is _DONE:
                    done = True
                    break
                yield item
        finally:
            if not done:
                # consumer stopped early: stop at the next page boundary and
                # drain so the worker is never left blocked on a full queue
                self.cancel()
                while channel.get() is not _DONE:
                    pass
            worker.join()

        if failures:
            raise failures[0]

    def _terminate(self, record: InstanceRecord) -> TerminationOutcome:
        """Terminate one stale instance, keeping the group's desired capacity."""
        try:
            self._autoscaling.terminate_instance(
                record.instance_id, decrement_desired_capacity=False
            )
        except ProviderError as e:
            error = InstanceTerminationError(record.instance_id, e)
            self._logger.warning("%s", error)
            return TerminationFailed(instance_id=record.instance_id, cause=error)

        self._logger.info(
            "Terminated instance %s (launch configuration %s)",
            record.instance_id,
            record.config_id or "deleted",
        )
        return InstanceTerminated(instance_id=record.instance_id)

    def _pause(self, pause: timedelta) -> None:
        seconds = max(pause.total_seconds(), 0.0)
        if seconds:
            self._logger.debug("Pausing %.3fs before the next page", seconds)
        self._sleep(seconds)
