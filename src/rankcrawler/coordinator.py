"""
Crawl Coordinator - Session Lifecycle and Bounded Dispatch

Owns one crawl session at a time:

    Idle --start()--> Running --(frontier empty and no task in flight)--> Idle

The dispatch loop takes the highest-priority entry from the frontier and
runs it as a task behind an admission gate of `concurrency` slots. Every
task completion notifies a quiescence monitor; when the frontier is empty
the loop waits on the monitor and re-checks "frontier empty and nothing
outstanding" under the monitor lock before ending the session.
"""

import asyncio
import logging
import os
import threading
from dataclasses import dataclass, field
from datetime import datetime, UTC
from enum import Enum
from typing import Callable, Iterable

from linkgraph.db.graph_store import GraphStore, StoreError
from rankcrawler.domain.ranking import RankUpdater
from rankcrawler.domain.scoring import PriorityScorer
from rankcrawler.domain.validator import is_crawlable
from rankcrawler.errors import FetchError
from rankcrawler.frontier import Frontier, FrontierEntry, VisitedSet
from rankcrawler.services.fetcher import PageFetcher

logger = logging.getLogger(__name__)

SEED_RANK = 1.0
SEED_DEPTH = 1
DEFAULT_FETCH_TIMEOUT = 10.0


class SessionState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass
class CrawlSession:
    """State of one crawl, passed explicitly to every worker task."""

    max_depth: int
    frontier: Frontier
    visited: VisitedSet = field(default_factory=VisitedSet)
    state: SessionState = SessionState.RUNNING
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None
    stop_requested: bool = False

    # Tasks admitted or waiting for admission and not yet completed
    outstanding: int = 0
    gate: asyncio.Semaphore | None = None
    monitor: asyncio.Condition | None = None
    tasks: set[asyncio.Task] = field(default_factory=set)

    fetched_count: int = 0
    failed_count: int = 0
    discarded_count: int = 0
    edges_recorded: int = 0

    def request_stop(self) -> None:
        self.stop_requested = True

    def uptime_seconds(self) -> float:
        end = self.finished_at or datetime.now(UTC)
        return (end - self.started_at).total_seconds()


class CrawlCoordinator:
    """Runs depth-bounded, priority-ordered crawl sessions."""

    def __init__(
        self,
        store: GraphStore,
        fetcher: PageFetcher,
        scorer: Callable[[str], int] | None = None,
        rank_updater: RankUpdater | None = None,
        concurrency: int | None = None,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
        session_timeout: float = 0.0,
    ):
        self.store = store
        self.fetcher = fetcher
        self.scorer = scorer or PriorityScorer()
        self.rank_updater = rank_updater or RankUpdater(store)
        if concurrency is None:
            concurrency = os.cpu_count() or 1
        self.concurrency = concurrency
        if self.concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.fetch_timeout = fetch_timeout
        self.session_timeout = session_timeout

        self.session: CrawlSession | None = None
        self._dispatch_task: asyncio.Task | None = None
        self._start_lock = threading.Lock()

    # --- Session control ---

    def is_running(self) -> bool:
        session = self.session
        return session is not None and session.state == SessionState.RUNNING

    def start(self, urls: Iterable[str], max_depth: int) -> bool:
        """
        Start a crawl session and return immediately.

        Returns False (and changes nothing) if a session is already running.
        Must be called from inside a running event loop.
        """
        loop = asyncio.get_running_loop()

        with self._start_lock:
            if self.is_running():
                logger.info("Crawl already in progress, ignoring start request")
                return False

            session = CrawlSession(
                max_depth=max_depth,
                frontier=Frontier(self.scorer),
                gate=asyncio.Semaphore(self.concurrency),
                monitor=asyncio.Condition(),
            )
            self.session = session

        urls = list(urls)
        logger.info(
            f"Starting crawl: {len(urls)} seed(s), max_depth={max_depth}, "
            f"concurrency={self.concurrency}"
        )
        self._reset_store()
        self._seed(session, urls)
        self._dispatch_task = loop.create_task(self._run(session))
        return True

    def stop(self) -> bool:
        """
        Request a soft stop of the running session.

        In-flight fetches finish; links they return are discarded, so no new
        entries are offered. Returns False if no session is running.
        """
        session = self.session
        if session is None or session.state != SessionState.RUNNING:
            return False
        if not session.stop_requested:
            logger.info("Stop requested, no new URLs will be enqueued")
        session.request_stop()
        return True

    async def wait(self, timeout: float | None = None) -> bool:
        """Wait for the current session to end. Returns False on timeout."""
        task = self._dispatch_task
        if task is None:
            return True
        done, _ = await asyncio.wait({task}, timeout=timeout)
        return bool(done)

    async def shutdown(self, graceful: bool = True, timeout: float | None = None):
        """Stop the running session (soft stop first if graceful, then cancel)."""
        task = self._dispatch_task
        if task is None or task.done():
            return

        if graceful:
            self.stop()
            # queued entries are dropped; only in-flight fetches get to finish
            dropped = len(self.session.frontier)
            self.session.frontier.clear()
            if dropped:
                logger.info(f"Shutdown dropped {dropped} queued URL(s)")
            if await self.wait(timeout):
                return
            logger.warning("Graceful shutdown timed out, cancelling crawl")

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

    def status(self) -> dict:
        """Snapshot of the current (or last) session."""
        session = self.session
        if session is None:
            return {
                "state": SessionState.IDLE.value,
                "running": False,
                "concurrency": self.concurrency,
            }
        return {
            "state": session.state.value,
            "running": session.state == SessionState.RUNNING,
            "max_depth": session.max_depth,
            "started_at": session.started_at,
            "finished_at": session.finished_at,
            "uptime_seconds": session.uptime_seconds(),
            "stop_requested": session.stop_requested,
            "concurrency": self.concurrency,
            "active_tasks": len(session.tasks),
            "frontier_size": len(session.frontier),
            "visited_count": len(session.visited),
            "fetched_count": session.fetched_count,
            "failed_count": session.failed_count,
            "discarded_count": session.discarded_count,
            "edges_recorded": session.edges_recorded,
        }

    # --- Session setup ---

    def _reset_store(self) -> None:
        try:
            self.store.clear_all()
        except StoreError as e:
            logger.error(f"Failed to clear graph store: {e}")

    def _seed(self, session: CrawlSession, urls: list[str]) -> None:
        for url in urls:
            if not is_crawlable(url):
                logger.warning(f"Skipping invalid seed URL: {url!r}")
                continue
            if not session.visited.add_if_absent(url):
                continue
            try:
                self.store.upsert_node(url, SEED_RANK)
            except StoreError as e:
                logger.error(f"Failed to store seed {url}: {e}")
            session.frontier.offer(FrontierEntry(url, SEED_DEPTH))

    # --- Dispatch ---

    async def _run(self, session: CrawlSession) -> None:
        loop = asyncio.get_running_loop()
        timer = None
        if self.session_timeout and self.session_timeout > 0:
            timer = loop.call_later(
                self.session_timeout, self._on_session_timeout, session
            )

        try:
            await self.fetcher.open()
            await self._dispatch(session)
        except asyncio.CancelledError:
            logger.info("Crawl cancelled, cancelling in-flight tasks")
            raise
        except Exception as e:
            logger.error(f"Dispatch loop error: {e}", exc_info=True)
        finally:
            if timer is not None:
                timer.cancel()
            pending = [task for task in session.tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
            try:
                await self.fetcher.close()
            except Exception as e:
                logger.warning(f"Failed to close fetcher: {e}")
            session.finished_at = datetime.now(UTC)
            session.state = SessionState.IDLE
            logger.info(
                f"Crawl finished in {session.uptime_seconds():.1f}s: "
                f"{session.fetched_count} fetched, {session.failed_count} failed, "
                f"{len(session.visited)} visited"
            )

    def _on_session_timeout(self, session: CrawlSession) -> None:
        if session.state == SessionState.RUNNING:
            logger.info(f"Session timeout ({self.session_timeout}s) reached")
            session.request_stop()

    def _is_quiescent(self, session: CrawlSession) -> bool:
        return session.outstanding == 0 and session.frontier.is_empty()

    async def _dispatch(self, session: CrawlSession) -> None:
        while True:
            entry = session.frontier.take_next()

            if entry is None:
                async with session.monitor:
                    await session.monitor.wait_for(
                        lambda: session.outstanding == 0
                        or not session.frontier.is_empty()
                    )
                    if self._is_quiescent(session):
                        return
                continue

            # counted before admission so a task waiting on the gate keeps the session alive
            session.outstanding += 1
            await session.gate.acquire()
            task = asyncio.create_task(self._run_task(session, entry))
            session.tasks.add(task)
            task.add_done_callback(session.tasks.discard)

    async def _run_task(self, session: CrawlSession, entry: FrontierEntry) -> None:
        try:
            await self._process_entry(session, entry)
        except Exception as e:
            logger.error(f"Error processing {entry.url}: {e}", exc_info=True)
        finally:
            session.gate.release()
            async with session.monitor:
                session.outstanding -= 1
                session.monitor.notify_all()

    async def _process_entry(self, session: CrawlSession, entry: FrontierEntry) -> None:
        """Fetch one entry and feed its links back into the graph and frontier."""
        # 1. Depth cutoff happens before any fetch
        if entry.depth >= session.max_depth:
            session.discarded_count += 1
            logger.debug(
                f"Not fetching {entry.url}: depth {entry.depth} >= max {session.max_depth}"
            )
            return

        # 2. Already claimed at offer time; idempotent
        session.visited.add_if_absent(entry.url)

        # 3. Fetch
        logger.info(f"Processing: {entry.url} (depth={entry.depth})")
        try:
            links = await self._fetch(entry.url)
        except FetchError as e:
            session.failed_count += 1
            logger.warning(str(e))
            return
        session.fetched_count += 1

        # 4. Record edges, update ranks, enqueue children
        next_depth = entry.depth + 1
        enqueued = 0
        for link in links:
            if session.stop_requested:
                logger.info(f"Stop requested, discarding links from {entry.url}")
                break
            if not is_crawlable(link, session.visited):
                logger.debug(f"Rejected link {link!r} from {entry.url}")
                continue

            self._record_edge(session, entry.url, link)
            self.rank_updater.update_rank(link)

            if session.visited.add_if_absent(link):
                session.frontier.offer(FrontierEntry(link, next_depth))
                enqueued += 1

        logger.debug(f"Enqueued {enqueued}/{len(links)} links from {entry.url}")
        if enqueued:
            # wake the dispatcher if it is parked on an empty frontier
            async with session.monitor:
                session.monitor.notify_all()

    async def _fetch(self, url: str) -> list[str]:
        try:
            return await asyncio.wait_for(
                self.fetcher.fetch(url, self.fetch_timeout), self.fetch_timeout
            )
        except asyncio.TimeoutError as e:
            raise FetchError(url, f"timed out after {self.fetch_timeout}s") from e

    def _record_edge(self, session: CrawlSession, source: str, target: str) -> None:
        try:
            self.store.upsert_edge(source, target)
            session.edges_recorded += 1
        except StoreError as e:
            logger.warning(f"Failed to insert edge {source} -> {target}: {e}")
